"""
Resume and job description ingestion.

Resumes arrive as .tex source or as PDF files; job descriptions arrive as free text
copied from a web page. Both are normalized here before they enter session state.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from tailor.contexts.intake.logger import _log_info
from tailor.contexts.intake.pdf_text import extract_pdf_text, page_count
from tailor.contexts.templating.converter import latex_to_plaintext
from tailor.utils.text_processing import normalize_unicode

LATEX_SUFFIXES = {".tex"}
PDF_SUFFIXES = {".pdf"}


@dataclass(frozen=True)
class ResumeInput:
    """
    A loaded resume.

    Attributes:
        kind: "latex" or "pdf"
        content: LaTeX source (latex) or extracted text (pdf)
        plaintext: Readable text view of the resume
        source_path: File the resume was read from
        page_count: Number of PDF pages (None for LaTeX)
    """

    kind: str
    content: str
    plaintext: str
    source_path: Optional[Path] = None
    page_count: Optional[int] = None

    @property
    def is_latex(self) -> bool:
        return self.kind == "latex"


def load_latex_resume(source: str, source_path: Optional[Path] = None) -> ResumeInput:
    """
    Build a ResumeInput from LaTeX source.

    Raises:
        ValueError: If the source is blank
    """
    latex = source.strip()
    if not latex:
        raise ValueError("Please enter LaTeX code")
    return ResumeInput(
        kind="latex",
        content=latex,
        plaintext=latex_to_plaintext(latex),
        source_path=source_path,
    )


def load_resume(path: Union[str, Path]) -> ResumeInput:
    """
    Load a resume from a .tex or .pdf file.

    Args:
        path: Resume file

    Returns:
        ResumeInput

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file type is not supported or the resume is empty
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resume not found: {path}")

    suffix = path.suffix.lower()

    if suffix in LATEX_SUFFIXES:
        resume = load_latex_resume(path.read_text(encoding="utf-8"), source_path=path)
    elif suffix in PDF_SUFFIXES:
        text = extract_pdf_text(path)
        if not text:
            raise ValueError(f"No text could be extracted from {path.name}")
        resume = ResumeInput(
            kind="pdf",
            content=text,
            plaintext=text,
            source_path=path,
            page_count=page_count(path),
        )
    else:
        raise ValueError(f"Unsupported resume file '{path.name}'. Please upload a .tex or .pdf file")

    _log_info(f"Loaded {resume.kind} resume from {path.name} ({len(resume.content)} chars)")
    return resume


def normalize_job_description(text: str) -> str:
    """
    Normalize captured job description text.

    Applies unicode normalization and trims surrounding whitespace. May return an
    empty string; callers decide whether that is acceptable.
    """
    return normalize_unicode(text or "").strip()
