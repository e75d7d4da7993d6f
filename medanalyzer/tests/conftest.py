import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure the project root is on sys.path so `import medanalyzer` works when
# running pytest from the repository root without installing.
ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from medanalyzer.app import app
from medanalyzer.routes.analyze_routes import get_http_client
from medanalyzer.tests.fakes import DIAGNOSIS_HOST, GEMINI_HOST, Upstreams


@pytest.fixture
def configured_env(monkeypatch):
    monkeypatch.setenv("RAPIDAPI_KEY", "rapid-test-key")
    monkeypatch.setenv("GEMINI_API_KEY", "gemini-test-key")
    monkeypatch.setenv("DIAGNOSIS_API_URL", f"https://{DIAGNOSIS_HOST}/api/v1/diagnosis")
    monkeypatch.setenv("DIAGNOSIS_API_HOST", DIAGNOSIS_HOST)
    monkeypatch.setenv("GEMINI_API_BASE", f"https://{GEMINI_HOST}/v1beta")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    monkeypatch.setenv("ANALYSIS_LANGUAGE", "English")
    monkeypatch.delenv("UPSTREAM_TIMEOUT_S", raising=False)


@pytest.fixture
def upstreams(configured_env):
    fake = Upstreams()

    async def _override_client():
        async with fake.client() as client:
            yield client

    app.dependency_overrides[get_http_client] = _override_client
    yield fake
    app.dependency_overrides.pop(get_http_client, None)


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)
