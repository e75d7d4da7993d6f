from .form import (  # noqa: F401
    AnalysisForm,
    FormClient,
    FormValidationError,
    SubmissionError,
    SubmissionInProgress,
)
from .render import format_text, render_results  # noqa: F401
