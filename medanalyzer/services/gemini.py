from typing import Any

import httpx

from medanalyzer.config import Settings
from medanalyzer.utils.exceptions import UpstreamAPIError


def generate_url(settings: Settings) -> str:
    return f"{settings.gemini_api_base}/models/{settings.gemini_model}:generateContent"


def extract_text(data: Any) -> str:
    """Pull the first candidate's text out of a generateContent response.

    Any unexpected shape yields "" so the caller reports the whole body.
    """
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


async def generate_content(client: httpx.AsyncClient, settings: Settings, prompt: str) -> str:
    """Single-turn completion against the Gemini REST API.

    Returns the raw candidate text. A response without any text is treated
    as an upstream failure.
    """
    try:
        r = await client.post(
            generate_url(settings),
            params={"key": settings.gemini_api_key},
            headers={"Content-Type": "application/json"},
            json={"contents": [{"role": "user", "parts": [{"text": prompt.strip()}]}]},
            timeout=settings.upstream_timeout_s,
        )
        r.raise_for_status()
        data = r.json()
    except httpx.HTTPStatusError as e:
        try:
            details = e.response.json()
        except ValueError:
            details = e.response.text
        raise UpstreamAPIError(details=details, service="gemini", status_code=e.response.status_code) from e
    except httpx.HTTPError as e:
        raise UpstreamAPIError(details=str(e) or e.__class__.__name__, service="gemini") from e
    except ValueError as e:
        raise UpstreamAPIError(details=r.text, service="gemini", status_code=r.status_code) from e

    text = extract_text(data)
    if not text.strip():
        raise UpstreamAPIError(
            message="Generative API returned no text",
            details=data,
            service="gemini",
            status_code=r.status_code,
        )
    return text
