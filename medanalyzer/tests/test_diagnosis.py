import asyncio

import httpx
import pytest

from medanalyzer.config import Settings
from medanalyzer.services import diagnosis
from medanalyzer.utils.exceptions import UpstreamAPIError


@pytest.mark.parametrize("raw,expected", [
    ("30", 30),
    ("25 years", 25),
    ("  7", 7),
    ("about 40", None),
    ("", None),
])
def test_parse_age(raw, expected):
    assert diagnosis.parse_age(raw) == expected


def test_build_payload_joins_complaint_first():
    p = diagnosis.build_payload("30", "male", "headache", ["fever", "nausea"], "1-3_days")
    assert p.model_dump() == {
        "age": 30,
        "gender": "male",
        "symptoms": "headache, fever, nausea",
        "duration": "1-3_days",
    }


def test_build_payload_without_additional_symptoms():
    p = diagnosis.build_payload("30", "male", "headache", [], "1-3_days")
    assert p.symptoms == "headache"


def _run(handler):
    settings = Settings(rapidapi_key="k", diagnosis_api_url="https://diag.test/api/v1/diagnosis")
    payload = diagnosis.build_payload("30", "male", "headache", [], "1-3_days")

    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await diagnosis.request_diagnosis(client, settings, payload)

    return asyncio.run(go())


def test_request_diagnosis_returns_body_untouched():
    body = {"diagnosis": [{"condition": "Migraine"}], "meta": {"v": 1}}
    assert _run(lambda req: httpx.Response(200, json=body)) == body


def test_request_diagnosis_non_json_success_is_upstream_error():
    with pytest.raises(UpstreamAPIError) as ei:
        _run(lambda req: httpx.Response(200, text="<html>oops</html>"))
    assert ei.value.details == "<html>oops</html>"


def test_request_diagnosis_error_keeps_status():
    with pytest.raises(UpstreamAPIError) as ei:
        _run(lambda req: httpx.Response(502, text="bad gateway"))
    assert ei.value.status_code == 502
    assert ei.value.service == "diagnosis"
    assert ei.value.details == "bad gateway"
