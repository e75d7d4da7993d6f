# Expose service modules so tests can monkeypatch them.

from . import diagnosis as diagnosis  # noqa: F401
from . import gemini as gemini  # noqa: F401

__all__ = [
    "diagnosis",
    "gemini",
]
