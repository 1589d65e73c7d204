"""
PDF resume text extraction.

Pulls the text layer out of a PDF resume and repairs the most common extraction
artifacts (run-together words, lost section breaks).
"""

import re
from pathlib import Path
from typing import Optional, Union

import pdfplumber
from PyPDF2 import PdfReader

from tailor.contexts.intake.logger import _log_debug

# Words that usually start a resume section; a paragraph break is restored before them
SECTION_WORDS = r"(experience|education|skills|projects|summary|objective|certifications?|awards?)"


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def clean_extracted_text(text: str) -> str:
    """
    Repair common PDF text-extraction artifacts.

    - Collapses all whitespace to single spaces
    - Splits camelCase joins and letter/digit joins ("ManagerAcme" -> "Manager Acme")
    - Restores a paragraph break before common section words
    - Collapses repeated blank lines and spaces

    Example:
        >>> clean_extracted_text("Jane Doe Experience Engineer2019")
        'Jane Doe \\n\\nExperience Engineer 2019'
    """
    text = re.sub(r"\s+", " ", text)
    text = re.sub(r"([a-z])([A-Z])", r"\1 \2", text)
    text = re.sub(r"(\d)([A-Za-z])", r"\1 \2", text)
    text = re.sub(r"([A-Za-z])(\d)", r"\1 \2", text)
    text = re.sub(SECTION_WORDS, r"\n\n\1", text, flags=re.IGNORECASE)
    text = re.sub(r"\n\s*\n", "\n\n", text)
    text = re.sub(r"  +", " ", text)
    return text.strip()


def extract_pdf_text(pdf_path: Union[str, Path], clean: bool = True) -> str:
    """
    Extract the text layer of a PDF, pages separated by blank lines.

    Args:
        pdf_path: Path to PDF file
        clean: Apply clean_extracted_text() (default: True)

    Returns:
        Extracted text

    Raises:
        FileNotFoundError: If the PDF does not exist
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF not found: {pdf_path}")

    pages = []
    with pdfplumber.open(pdf_path) as pdf:
        for page in pdf.pages:
            pages.append(page.extract_text() or "")

    _log_debug(f"Extracted {len(pages)} page(s) from {pdf_path.name}")

    full_text = "\n\n".join(pages)
    return clean_extracted_text(full_text) if clean else full_text
