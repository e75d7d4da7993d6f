import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

BASE_DIR = Path(__file__).resolve().parent
ENV_PATH = BASE_DIR / ".env"

load_dotenv(ENV_PATH)

DEFAULT_DIAGNOSIS_API_HOST = "ai-medical-diagnosis-api-symptoms-to-results.p.rapidapi.com"
DEFAULT_DIAGNOSIS_API_URL = f"https://{DEFAULT_DIAGNOSIS_API_HOST}/api/v1/diagnosis"
DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name, default) or default).strip()


def _env_float(name: str) -> Optional[float]:
    raw = _env_str(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


class Settings(BaseModel):
    rapidapi_key: str = ""
    gemini_api_key: str = ""
    diagnosis_api_url: str = DEFAULT_DIAGNOSIS_API_URL
    diagnosis_api_host: str = DEFAULT_DIAGNOSIS_API_HOST
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_api_base: str = DEFAULT_GEMINI_API_BASE
    analysis_language: str = "English"
    upstream_timeout_s: Optional[float] = None
    cors_origins: List[str] = []
    log_level: str = "INFO"

    def missing_credentials(self) -> List[str]:
        missing = []
        if not self.rapidapi_key:
            missing.append("RAPIDAPI_KEY")
        if not self.gemini_api_key:
            missing.append("GEMINI_API_KEY")
        return missing


def get_settings() -> Settings:
    """Read settings from the environment.

    Called per request so credentials exported after startup are picked up.
    """
    origins = _env_str("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return Settings(
        rapidapi_key=_env_str("RAPIDAPI_KEY"),
        gemini_api_key=_env_str("GEMINI_API_KEY"),
        diagnosis_api_url=_env_str("DIAGNOSIS_API_URL", DEFAULT_DIAGNOSIS_API_URL),
        diagnosis_api_host=_env_str("DIAGNOSIS_API_HOST", DEFAULT_DIAGNOSIS_API_HOST),
        gemini_model=_env_str("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        gemini_api_base=_env_str("GEMINI_API_BASE", DEFAULT_GEMINI_API_BASE).rstrip("/"),
        analysis_language=_env_str("ANALYSIS_LANGUAGE", "English"),
        upstream_timeout_s=_env_float("UPSTREAM_TIMEOUT_S"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )
