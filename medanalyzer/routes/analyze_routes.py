# medanalyzer/routes/analyze_routes.py
from typing import AsyncIterator

import httpx
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from medanalyzer.config import Settings, get_settings
from medanalyzer.schemas.analysis import (
    AnalysisRequest,
    AnalysisResult,
    Duration,
    ErrorBody,
    FormOptions,
    Gender,
)
from medanalyzer.services import analysis as analysis_service


router = APIRouter(prefix="/api", tags=["analysis"])


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One outbound client per request; tests override this with a mock transport."""
    async with httpx.AsyncClient() as client:
        yield client


@router.post(
    "/analyze",
    status_code=status.HTTP_200_OK,
    response_class=JSONResponse,
    responses={200: {"model": AnalysisResult}, 500: {"model": ErrorBody}},
)
async def analyze_symptoms(
    payload: AnalysisRequest,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Diagnose the submitted symptoms and return the five narrative sections.

    The generated object is passed through verbatim rather than re-serialized
    through the response model.
    """
    result = await analysis_service.analyze(payload, settings, client)
    return JSONResponse(content=result)


@router.get("/options", response_model=FormOptions)
def form_options():
    return FormOptions(
        genders=[g.value for g in Gender],
        durations=[d.value for d in Duration],
    )
