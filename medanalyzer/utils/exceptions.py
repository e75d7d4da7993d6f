import logging
from typing import Any, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from medanalyzer.middleware.tracing import TRACE_ID_CTX_VAR

logger = logging.getLogger("medanalyzer")


class AnalysisError(Exception):
    """Base class for failures that abort an analysis request."""

    code = "ANALYSIS_ERROR"
    message = "Failed to analyze symptoms"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details

    def to_body(self) -> dict:
        return {
            "error": self.message,
            "details": self.details,
            "code": self.code,
            "trace_id": TRACE_ID_CTX_VAR.get(),
        }


class ConfigurationError(AnalysisError):
    code = "CONFIGURATION_ERROR"
    message = "Service is not configured"


class UpstreamAPIError(AnalysisError):
    code = "UPSTREAM_ERROR"
    message = "Failed to analyze symptoms with external API"

    def __init__(self, message: Optional[str] = None, details: Any = None,
                 service: str = "", status_code: Optional[int] = None):
        super().__init__(message, details)
        self.service = service
        self.status_code = status_code


class AnalysisParseError(AnalysisError):
    code = "PARSE_ERROR"
    message = "Failed to parse AI analysis"

    def __init__(self, raw_text: str, message: Optional[str] = None):
        super().__init__(message, details=raw_text)
        self.raw_text = raw_text

    def to_body(self) -> dict:
        body = super().to_body()
        body["rawResponse"] = self.raw_text
        return body


def status_to_code(status_code: int) -> str:
    mapping = {
        400: "BAD_REQUEST",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        413: "PAYLOAD_TOO_LARGE",
        415: "UNSUPPORTED_MEDIA_TYPE",
        422: "UNPROCESSABLE_ENTITY",
        500: "INTERNAL_SERVER_ERROR",
    }
    return mapping.get(status_code, f"HTTP_{status_code}")


async def handle_analysis_error(request: Request, exc: AnalysisError):
    logger.error({
        "function": "analysis_error",
        "path": str(request.url.path),
        "code": exc.code,
        "message": exc.message,
    })
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=jsonable_encoder(exc.to_body()),
    )


async def handle_http_exception(request: Request, exc: HTTPException):
    trace_id = TRACE_ID_CTX_VAR.get()
    detail: Any = exc.detail
    message = detail if isinstance(detail, str) else "HTTP error"
    body = {"code": status_to_code(exc.status_code), "message": message, "error": message, "trace_id": trace_id}
    if detail is not None:
        body["details"] = detail
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def handle_validation_error(request: Request, exc: RequestValidationError):
    # malformed submissions fail like any other analysis failure
    trace_id = TRACE_ID_CTX_VAR.get()
    errors = jsonable_encoder(exc.errors())
    logger.error({"function": "validation_error", "path": str(request.url.path), "errors": errors})
    body = {
        "code": "INVALID_REQUEST",
        "message": "Invalid request body",
        "error": "Failed to analyze symptoms",
        "details": errors,
        "trace_id": trace_id,
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


async def handle_unhandled_exception(request: Request, exc: Exception):
    trace_id = TRACE_ID_CTX_VAR.get()
    logger.exception("unhandled error on %s", request.url.path)
    body = {
        "code": "INTERNAL_SERVER_ERROR",
        "message": "An unexpected error occurred",
        "error": "Failed to analyze symptoms",
        "details": str(exc),
        "trace_id": trace_id,
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)
