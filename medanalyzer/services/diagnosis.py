"""Client for the RapidAPI "AI Medical Diagnosis API"."""

import re
from typing import Any, Iterable, Optional

import httpx

from medanalyzer.config import Settings
from medanalyzer.schemas.analysis import DiagnosisPayload
from medanalyzer.utils.exceptions import UpstreamAPIError


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_age(age: str) -> Optional[int]:
    """Leading integer of the free-text age ("25 years" -> 25), else None."""
    m = _LEADING_INT.match(age or "")
    if not m:
        return None
    return int(m.group(1))


def join_symptoms(main_complaint: str, additional: Iterable[str]) -> str:
    return ", ".join([main_complaint, *additional])


def build_payload(age: str, gender: str, main_complaint: str,
                  additional_symptoms: Iterable[str], duration: str) -> DiagnosisPayload:
    return DiagnosisPayload(
        age=parse_age(age),
        gender=gender,
        symptoms=join_symptoms(main_complaint, additional_symptoms),
        duration=duration,
    )


def _error_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


async def request_diagnosis(client: httpx.AsyncClient, settings: Settings, payload: DiagnosisPayload) -> Any:
    """POST the payload and return the decoded JSON body untouched.

    Raises UpstreamAPIError on transport failures and non-2xx responses.
    """
    headers = {
        "x-rapidapi-key": settings.rapidapi_key,
        "x-rapidapi-host": settings.diagnosis_api_host,
        "Content-Type": "application/json",
    }
    try:
        r = await client.post(
            settings.diagnosis_api_url,
            headers=headers,
            json=payload.model_dump(),
            timeout=settings.upstream_timeout_s,
        )
        r.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise UpstreamAPIError(
            details=_error_body(e.response),
            service="diagnosis",
            status_code=e.response.status_code,
        ) from e
    except httpx.HTTPError as e:
        raise UpstreamAPIError(details=str(e) or e.__class__.__name__, service="diagnosis") from e

    try:
        return r.json()
    except ValueError as e:
        raise UpstreamAPIError(details=r.text, service="diagnosis", status_code=r.status_code) from e
