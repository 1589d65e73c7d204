"""
Data structures for provider requests and optimization results.

OptimizationRequest is built by the caller (usually from session state), sent through
a provider adapter, and the reply is normalized into an OptimizationResult. Nothing
here is cached or persisted; every structure lives for a single optimize() call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Provider(str, Enum):
    """Supported chat-completion providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    CEREBRAS = "cerebras"
    COHERE = "cohere"

    @classmethod
    def values(cls) -> List[str]:
        """Return list of all provider identifiers."""
        return [member.value for member in cls]


class SuggestionKind(str, Enum):
    """Kinds of suggestion a provider can return."""

    BULLET = "bullet"
    SKILL = "skill"
    KEYWORD = "keyword"
    FORMAT = "format"
    GENERAL = "general"
    ERROR = "error"


@dataclass(frozen=True)
class OptimizationRequest:
    """
    Inputs for a single optimization call.

    Attributes:
        resume_content: LaTeX source or plain resume text
        job_description: Captured job description text
        is_latex_format: Whether resume_content is LaTeX (only changes the prompt label)
        provider: Provider to call
        api_key: Provider API key (never included in repr)
        model: Model identifier, passed through verbatim
    """

    resume_content: str
    job_description: str
    is_latex_format: bool
    provider: Provider
    api_key: str = field(repr=False)
    model: str


@dataclass
class Analysis:
    """Skill and keyword overlap between resume and job description."""

    matching_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    keywords_found: List[str] = field(default_factory=list)
    keywords_missing: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "matchingSkills": list(self.matching_skills),
            "missingSkills": list(self.missing_skills),
            "keywordsFound": list(self.keywords_found),
            "keywordsMissing": list(self.keywords_missing),
        }


@dataclass
class Suggestion:
    """
    A single improvement proposed by the provider.

    Attributes:
        kind: Suggestion category
        suggested_text: Improved text (bullet rewrite, skill name, keyword advice, ...)
        section: Resume section the suggestion targets (empty when not given)
        original_text: Text being replaced (empty when not given)
    """

    kind: SuggestionKind
    suggested_text: str
    section: str = ""
    original_text: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.kind.value,
            "section": self.section,
            "original": self.original_text,
            "text": self.suggested_text,
        }


@dataclass
class OptimizationResult:
    """
    Normalized provider reply.

    Always fully populated: a reply that could not be parsed becomes a result with
    match_score 0, empty analysis and a single ERROR suggestion.

    Attributes:
        match_score: Resume/job match in [0, 100]
        analysis: Skill and keyword overlap
        suggestions: Ordered improvements
        updated_resume_text: Rewritten resume, when the provider returned one
    """

    match_score: int = 0
    analysis: Analysis = field(default_factory=Analysis)
    suggestions: List[Suggestion] = field(default_factory=list)
    updated_resume_text: Optional[str] = None

    @property
    def parse_failed(self) -> bool:
        """Whether this result is the recovered form of an unparseable reply."""
        return any(s.kind is SuggestionKind.ERROR for s in self.suggestions)

    def suggestions_of_kind(self, kind: SuggestionKind) -> List[Suggestion]:
        return [s for s in self.suggestions if s.kind is kind]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase field names of the reply schema."""
        return {
            "matchScore": self.match_score,
            "analysis": self.analysis.to_dict(),
            "suggestions": [s.to_dict() for s in self.suggestions],
            "updatedResume": self.updated_resume_text,
        }


@dataclass(frozen=True)
class HttpRequest:
    """
    Provider-specific HTTP request, ready to send.

    Attributes:
        url: Full endpoint URL (Gemini carries the API key in its query string)
        method: HTTP method
        headers: Request headers (bearer/API-key auth lives here for other providers)
        body: JSON body, or None for bodiless probes
    """

    url: str
    method: str = "POST"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None
