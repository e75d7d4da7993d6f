import json
from typing import Any, Callable, Dict, List, Optional

import httpx

DIAGNOSIS_HOST = "diagnosis.test"
GEMINI_HOST = "gemini.test"

ANALYSIS = {
    "preliminaryAssessment": "Likely a mild viral illness.",
    "possibleCauses": "**Common cold** or tension headache",
    "urgencyLevel": "Low: symptoms are mild.",
    "recommendations": "• Rest\n• Drink fluids",
    "doctorRecommendation": "General practitioner",
}

DIAGNOSIS = {"conditions": [{"name": "Common cold", "probability": 0.6}]}

SUBMISSION = {
    "age": "30",
    "gender": "male",
    "mainComplaint": "headache",
    "additionalSymptoms": ["fever"],
    "duration": "1-3_days",
}


def gemini_body(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def fenced(obj: Dict[str, Any]) -> str:
    return "```json\n" + json.dumps(obj, ensure_ascii=False) + "\n```"


class Upstreams:
    """Fake diagnosis and Gemini services behind one httpx.MockTransport."""

    def __init__(self):
        self.calls: List[httpx.Request] = []
        self.diagnosis: Callable[[httpx.Request], httpx.Response] = (
            lambda req: httpx.Response(200, json=DIAGNOSIS)
        )
        self.gemini: Callable[[httpx.Request], httpx.Response] = (
            lambda req: httpx.Response(200, json=gemini_body(fenced(ANALYSIS)))
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if request.url.host == DIAGNOSIS_HOST:
            return self.diagnosis(request)
        if request.url.host == GEMINI_HOST:
            return self.gemini(request)
        return httpx.Response(404, json={"error": "unexpected host"})

    def calls_to(self, host: str) -> List[httpx.Request]:
        return [c for c in self.calls if c.url.host == host]

    def last_json(self, host: str) -> Optional[Dict[str, Any]]:
        calls = self.calls_to(host)
        return json.loads(calls[-1].content) if calls else None

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
