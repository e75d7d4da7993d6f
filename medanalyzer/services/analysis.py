import logging
from typing import Any, Dict

import httpx

from medanalyzer.config import Settings
from medanalyzer.schemas.analysis import AnalysisRequest
from medanalyzer.services import diagnosis, gemini
from medanalyzer.services.prompt import build_prompt, missing_fields, parse_analysis
from medanalyzer.utils.exceptions import AnalysisParseError, ConfigurationError

logger = logging.getLogger("medanalyzer")


def ensure_configured(settings: Settings) -> None:
    missing = settings.missing_credentials()
    if missing:
        raise ConfigurationError(f"{', '.join(missing)} is not set", details={"missing": missing})


async def analyze(req: AnalysisRequest, settings: Settings, client: httpx.AsyncClient) -> Dict[str, Any]:
    """Run one submission through the diagnosis API and Gemini.

    Steps are strictly sequential; any failure aborts the request.
    """
    ensure_configured(settings)

    logger.info({
        "function": "analyze",
        "stage": "analyze_start",
        "symptom_count": 1 + len(req.additionalSymptoms),
        "duration": req.duration,
    })

    payload = diagnosis.build_payload(
        req.age, req.gender, req.mainComplaint, req.additionalSymptoms, req.duration
    )
    medical_data = await diagnosis.request_diagnosis(client, settings, payload)
    logger.info({"function": "analyze", "stage": "diagnosis_done"})

    prompt = build_prompt(req, medical_data, settings.analysis_language)
    text = await gemini.generate_content(client, settings, prompt)
    logger.info({
        "function": "analyze",
        "stage": "generation_done",
        "model": settings.gemini_model,
        "chars": len(text),
    })

    try:
        result = parse_analysis(text)
    except AnalysisParseError:
        logger.error({"function": "analyze", "stage": "parse_failed", "raw": text})
        raise

    missing = missing_fields(result)
    if missing:
        logger.warning({"function": "analyze", "stage": "shape_mismatch", "missing": missing})
    return result
