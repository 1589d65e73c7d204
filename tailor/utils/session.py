"""
Explicit session state: settings, current resume, captured job description and the
latest optimization result.

SessionState is immutable; every transition returns a new state. load_session() and
save_session() bridge it to the LocalStore so the resume and job description survive
between CLI invocations.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from tailor.contexts.gateway.data_structures import OptimizationRequest, OptimizationResult
from tailor.contexts.gateway.providers import resolve_provider
from tailor.contexts.intake.resume_loader import normalize_job_description
from tailor.utils.settings import Settings
from tailor.utils.storage import LocalStore

RESUME_LATEX_KEY = "resumeLatex"
RESUME_TEXT_KEY = "resumeText"
RESUME_TYPE_KEY = "resumeType"
JOB_DESCRIPTION_KEY = "jobDescription"

MISSING_JOB_MESSAGE = "Please capture a job description first"
MISSING_RESUME_MESSAGE = "Please upload your resume first"
MISSING_API_KEY_MESSAGE = "Please add your API key in Settings"


class SessionError(Exception):
    """Raised when the session is missing an input required for the next step."""

    def __init__(self, message: str, missing: Optional[str] = None):
        self.message = message
        self.missing = missing
        super().__init__(message if missing is None else f"{message} (missing: {missing})")


@dataclass(frozen=True)
class SessionState:
    """
    Everything the optimization workflow needs.

    Attributes:
        settings: Provider selection and credentials
        resume_latex: LaTeX source of the resume (None if not loaded)
        resume_text: Plain text of the resume (PDF text, or text view of the LaTeX)
        resume_type: "latex", "pdf" or None
        job_description: Captured job description (None if not captured)
        result: Latest optimization result
    """

    settings: Settings = field(default_factory=Settings)
    resume_latex: Optional[str] = None
    resume_text: Optional[str] = None
    resume_type: Optional[str] = None
    job_description: Optional[str] = None
    result: Optional[OptimizationResult] = None

    @property
    def has_resume(self) -> bool:
        return bool(self.resume_latex or self.resume_text)

    def with_latex_resume(self, latex: str, plaintext: Optional[str] = None) -> "SessionState":
        return replace(self, resume_latex=latex, resume_text=plaintext, resume_type="latex")

    def with_pdf_resume(self, text: str) -> "SessionState":
        return replace(self, resume_latex=None, resume_text=text, resume_type="pdf")

    def with_job_description(self, text: str) -> "SessionState":
        """
        Store a captured job description.

        Raises:
            SessionError: If the text is empty after normalization
        """
        job = normalize_job_description(text)
        if not job:
            raise SessionError("Job description is empty", missing=JOB_DESCRIPTION_KEY)
        return replace(self, job_description=job)

    def without_job_description(self) -> "SessionState":
        return replace(self, job_description=None)

    def with_result(self, result: OptimizationResult) -> "SessionState":
        return replace(self, result=result)

    def with_settings(self, settings: Settings) -> "SessionState":
        return replace(self, settings=settings)


def build_request(state: SessionState) -> OptimizationRequest:
    """
    Build an OptimizationRequest from session state.

    Inputs are checked in order: job description, resume, API key. LaTeX source is
    preferred over plain text when both are present.

    Raises:
        SessionError: For the first missing input
        UnknownProviderError: If the selected provider is not supported
    """
    if not state.job_description:
        raise SessionError(MISSING_JOB_MESSAGE, missing=JOB_DESCRIPTION_KEY)
    if not state.has_resume:
        raise SessionError(MISSING_RESUME_MESSAGE, missing="resume")

    api_key = state.settings.api_key_for()
    if not api_key:
        raise SessionError(MISSING_API_KEY_MESSAGE, missing="api_key")

    is_latex = bool(state.resume_latex)
    return OptimizationRequest(
        resume_content=state.resume_latex if is_latex else state.resume_text,
        job_description=state.job_description,
        is_latex_format=is_latex,
        provider=resolve_provider(state.settings.provider),
        api_key=api_key,
        model=state.settings.model,
    )


def load_session(store: LocalStore, settings: Settings) -> SessionState:
    """Rebuild session state from stored resume and job description text."""
    data = store.get_many([RESUME_LATEX_KEY, RESUME_TEXT_KEY, RESUME_TYPE_KEY, JOB_DESCRIPTION_KEY])
    return SessionState(
        settings=settings,
        resume_latex=data.get(RESUME_LATEX_KEY) or None,
        resume_text=data.get(RESUME_TEXT_KEY) or None,
        resume_type=data.get(RESUME_TYPE_KEY) or None,
        job_description=data.get(JOB_DESCRIPTION_KEY) or None,
    )


def save_session(store: LocalStore, state: SessionState):
    """
    Persist the resume and job description of a session.

    Fields that are None are removed from the store. Settings and results are not
    stored here.
    """
    values = {
        RESUME_LATEX_KEY: state.resume_latex,
        RESUME_TEXT_KEY: state.resume_text,
        RESUME_TYPE_KEY: state.resume_type,
        JOB_DESCRIPTION_KEY: state.job_description,
    }
    present = {key: value for key, value in values.items() if value is not None}
    missing = [key for key, value in values.items() if value is None]

    if present:
        store.set(**present)
    if missing:
        store.remove(*missing)
