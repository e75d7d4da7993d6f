# medanalyzer/schemas/analysis.py
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    male = "male"
    female = "female"


class Duration(str, Enum):
    less_than_day = "less_than_day"
    one_to_three_days = "1-3_days"
    four_to_seven_days = "4-7_days"
    one_to_two_weeks = "1-2_weeks"
    more_than_month = "more_than_month"


ANALYSIS_FIELDS = (
    "preliminaryAssessment",
    "possibleCauses",
    "urgencyLevel",
    "recommendations",
    "doctorRecommendation",
)


class AnalysisRequest(BaseModel):
    """Form submission posted by the client."""

    age: str = Field(..., description="Free-text age, e.g. '25' or '25 years'.")
    gender: str = Field(..., description="'male' or 'female'.")
    mainComplaint: str = Field(..., description="Free-text description of the complaint.")
    additionalSymptoms: List[str] = Field(default_factory=list, description="Selected symptom keys.")
    duration: str = Field(..., description="One of the duration buckets.")


class DiagnosisPayload(BaseModel):
    """Body sent to the diagnosis service."""

    age: Optional[int] = None
    gender: str
    symptoms: str
    duration: str


class AnalysisResult(BaseModel):
    """Five narrative sections produced by the generative service."""

    model_config = ConfigDict(extra="allow")

    preliminaryAssessment: str
    possibleCauses: str
    urgencyLevel: str
    recommendations: str
    doctorRecommendation: str


class ErrorBody(BaseModel):
    error: str
    details: Any = None
    code: str
    trace_id: str = ""


class FormOptions(BaseModel):
    genders: List[str]
    durations: List[str]
