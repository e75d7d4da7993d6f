import json
import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from medanalyzer.config import get_settings
from medanalyzer.middleware.tracing import TRACE_ID_CTX_VAR, TracingMiddleware
from medanalyzer.routes import analyze_routes
from medanalyzer.utils.exceptions import (
    AnalysisError,
    handle_analysis_error,
    handle_http_exception,
    handle_unhandled_exception,
    handle_validation_error,
)


# --- logging setup ---
class JsonFormatter(logging.Formatter):
    def format(self, record):  # type: ignore[override]
        message = record.msg if isinstance(record.msg, dict) else record.getMessage()
        payload = {
            "timestamp": datetime.utcnow().isoformat(timespec="seconds") + "Z",
            "level": record.levelname,
            "function": record.funcName,
            "message": message,
            "trace_id": TRACE_ID_CTX_VAR.get(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("medanalyzer")
    logger.setLevel(level)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    return logger


settings = get_settings()
logger = configure_logging(settings.log_level)

# --- app & router setup ---
app = FastAPI(title="MedAnalyzer", version="0.1.0")

app.add_middleware(TracingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["x-trace-id"],
)

app.add_exception_handler(AnalysisError, handle_analysis_error)
app.add_exception_handler(StarletteHTTPException, handle_http_exception)
app.add_exception_handler(RequestValidationError, handle_validation_error)
app.add_exception_handler(Exception, handle_unhandled_exception)

app.include_router(analyze_routes.router)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.on_event("startup")
def _warn_missing_credentials():
    missing = get_settings().missing_credentials()
    if missing:
        # requests will fail with a configuration error until these are set
        logger.warning({"function": "startup", "missing_credentials": missing})
