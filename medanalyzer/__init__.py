"""MedAnalyzer: symptom form backend chaining a diagnosis API with Gemini."""

__version__ = "0.1.0"
