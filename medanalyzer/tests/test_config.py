from medanalyzer.config import DEFAULT_DIAGNOSIS_API_URL, DEFAULT_GEMINI_MODEL, get_settings


def test_defaults_when_unset(monkeypatch):
    for name in ("RAPIDAPI_KEY", "GEMINI_API_KEY", "DIAGNOSIS_API_URL", "GEMINI_MODEL",
                 "UPSTREAM_TIMEOUT_S", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.diagnosis_api_url == DEFAULT_DIAGNOSIS_API_URL
    assert s.gemini_model == DEFAULT_GEMINI_MODEL
    assert s.upstream_timeout_s is None
    assert s.missing_credentials() == ["RAPIDAPI_KEY", "GEMINI_API_KEY"]
    assert "http://localhost:3000" in s.cors_origins


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("RAPIDAPI_KEY", " r ")
    monkeypatch.setenv("GEMINI_API_KEY", "g")
    monkeypatch.setenv("UPSTREAM_TIMEOUT_S", "12.5")
    monkeypatch.setenv("GEMINI_API_BASE", "https://example.test/v1/")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.test, https://b.test")
    s = get_settings()
    assert s.rapidapi_key == "r"
    assert s.missing_credentials() == []
    assert s.upstream_timeout_s == 12.5
    assert s.gemini_api_base == "https://example.test/v1"
    assert s.cors_origins == ["https://a.test", "https://b.test"]


def test_bad_timeout_is_ignored(monkeypatch):
    monkeypatch.setenv("UPSTREAM_TIMEOUT_S", "soon")
    assert get_settings().upstream_timeout_s is None
