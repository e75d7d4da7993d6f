"""Form state and submission for the symptom analysis page."""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from medanalyzer.schemas.analysis import AnalysisResult

logger = logging.getLogger("medanalyzer")

ANALYZE_PATH = "/api/analyze"
REQUIRED_FIELDS = ("age", "gender", "mainComplaint", "duration")


class FormValidationError(ValueError):
    def __init__(self, missing: List[str]):
        super().__init__("Please fill in all required fields: " + ", ".join(missing))
        self.missing = missing


class SubmissionInProgress(RuntimeError):
    pass


class SubmissionError(RuntimeError):
    """Any failed submission; the page shows a single generic alert for it."""

    def __init__(self, message: str = "Symptom analysis failed. Please try again.",
                 status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AnalysisForm(BaseModel):
    age: str = ""
    gender: str = ""
    mainComplaint: str = ""
    additionalSymptoms: List[str] = Field(default_factory=list)
    duration: str = ""

    def missing_fields(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if not (getattr(self, name) or "").strip()]

    def toggle_symptom(self, key: str, checked: Optional[bool] = None) -> None:
        selected = key in self.additionalSymptoms
        if checked is None:
            checked = not selected
        if checked and not selected:
            self.additionalSymptoms.append(key)
        elif not checked and selected:
            self.additionalSymptoms.remove(key)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


class FormClient:
    """Submits an AnalysisForm once and keeps the latest result.

    `http` is any httpx.Client pointed at the service (a TestClient works too).
    """

    def __init__(self, http: httpx.Client):
        self.http = http
        self.loading = False
        self.result: Optional[AnalysisResult] = None

    def submit(self, form: AnalysisForm) -> AnalysisResult:
        missing = form.missing_fields()
        if missing:
            raise FormValidationError(missing)
        if self.loading:
            raise SubmissionInProgress("An analysis is already running")

        self.loading = True
        self.result = None
        try:
            try:
                r = self.http.post(ANALYZE_PATH, json=form.to_payload())
            except httpx.HTTPError as e:
                logger.error({"function": "submit", "error": str(e)})
                raise SubmissionError() from e
            if r.is_error:
                try:
                    body = r.json()
                except ValueError:
                    body = r.text
                logger.error({"function": "submit", "status": r.status_code, "body": body})
                raise SubmissionError(status_code=r.status_code, body=body)
            try:
                self.result = AnalysisResult.model_validate(r.json())
            except ValueError as e:
                raise SubmissionError(status_code=r.status_code, body=r.text) from e
            return self.result
        finally:
            self.loading = False
