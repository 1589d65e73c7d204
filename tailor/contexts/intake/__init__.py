"""
Intake Context

Responsibilities:
- Loads resumes from .tex and .pdf files
- Extracts and repairs PDF text
- Normalizes captured job description text

Owns: Resume and job description ingestion
Never: Calls providers or rewrites LaTeX
"""

from tailor.contexts.intake.pdf_text import clean_extracted_text, extract_pdf_text, page_count
from tailor.contexts.intake.resume_loader import (
    ResumeInput,
    load_latex_resume,
    load_resume,
    normalize_job_description,
)

__all__ = [
    "ResumeInput",
    "load_resume",
    "load_latex_resume",
    "normalize_job_description",
    "extract_pdf_text",
    "clean_extracted_text",
    "page_count",
]
