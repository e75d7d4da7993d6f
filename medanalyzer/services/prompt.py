import json
import re
from typing import Any, Dict

from medanalyzer.schemas.analysis import ANALYSIS_FIELDS, AnalysisRequest
from medanalyzer.utils.exceptions import AnalysisParseError

DISCLAIMER = (
    "This analysis is not a medical diagnosis. "
    "For accurate diagnosis and treatment, consult a doctor."
)

_FENCE = re.compile(r"```(?:json)?[ \t]*\n?", re.IGNORECASE)


def build_prompt(req: AnalysisRequest, diagnosis: Any, language: str = "English") -> str:
    keys = ", ".join(f"`{k}`" for k in ANALYSIS_FIELDS)
    return (
        "You are an AI medical assistant. Your task is to analyze the medical data below "
        f"and present it in a structured form that a patient can understand, written in {language}.\n\n"
        "**Input data:**\n"
        "*   **Patient information:**\n"
        f"    *   Age: {req.age}\n"
        f"    *   Gender: {req.gender}\n"
        f"    *   Main complaint: {req.mainComplaint}\n"
        f"    *   Additional symptoms: {', '.join(req.additionalSymptoms)}\n"
        f"    *   Symptom duration: {req.duration}\n"
        "*   **Data from the medical diagnosis API:**\n"
        f"{json.dumps(diagnosis, ensure_ascii=False, indent=2)}\n\n"
        "**Your task:**\n"
        f"Based on this data, produce a JSON object with exactly these keys: {keys}.\n\n"
        "**Content requirements:**\n"
        "1.  **`preliminaryAssessment`:** a 1-2 sentence summary of the situation.\n"
        "2.  **`possibleCauses`:** the most likely conditions from the diagnosis API response. "
        "If the API gave no specific causes, use general wording.\n"
        "3.  **`urgencyLevel`:** urgency (Low, Medium, High) with a short explanation.\n"
        "4.  **`recommendations`:** general non-drug recommendations.\n"
        "5.  **`doctorRecommendation`:** which specialist to see.\n"
        f"6.  **Important:** end the analysis with this reminder: \"{DISCLAIMER}\"\n\n"
        "Every value must be a string. Respond with the JSON object only."
    )


def strip_code_fences(text: str) -> str:
    return _FENCE.sub("", text or "").strip()


def parse_analysis(text: str) -> Dict[str, Any]:
    """Decode the generated text into a JSON object, fenced or not.

    Raises AnalysisParseError carrying the raw text when it is not a JSON object.
    """
    try:
        parsed = json.loads(strip_code_fences(text))
    except ValueError as e:
        raise AnalysisParseError(text) from e
    if not isinstance(parsed, dict):
        raise AnalysisParseError(text, message="AI analysis is not a JSON object")
    return parsed


def missing_fields(analysis: Dict[str, Any]) -> list:
    return [k for k in ANALYSIS_FIELDS if not isinstance(analysis.get(k), str)]
