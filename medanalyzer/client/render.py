import html
import re
from typing import List, Tuple

from medanalyzer.schemas.analysis import AnalysisResult

SECTIONS: List[Tuple[str, str]] = [
    ("preliminaryAssessment", "Preliminary assessment"),
    ("possibleCauses", "Possible causes"),
    ("urgencyLevel", "Urgency level"),
    ("recommendations", "Recommendations"),
    ("doctorRecommendation", "Which doctor to see"),
]

_BOLD = re.compile(r"\*\*(.*?)\*\*")


def format_text(text: str) -> str:
    # escape first: the text comes from a language model
    out = html.escape(text or "", quote=False)
    out = _BOLD.sub(r"<strong>\1</strong>", out)
    out = out.replace("\n", "<br>")
    return out.replace("•", "<br>•")


def render_section(label: str, text: str) -> str:
    return (
        '<div class="analysis-section">'
        f"<h4>{html.escape(label)}</h4>"
        f"<div>{format_text(text)}</div>"
        "</div>"
    )


def render_results(result: AnalysisResult) -> str:
    sections = "".join(render_section(label, getattr(result, key)) for key, label in SECTIONS)
    return f'<div class="results" id="results"><h3>Analysis results</h3>{sections}</div>'
