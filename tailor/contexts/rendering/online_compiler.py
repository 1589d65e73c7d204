"""
LaTeX compilation through an external web service, plus output file helpers.

The service is an opaque collaborator: raw LaTeX goes in as a multipart file upload,
a PDF byte stream (or an error status) comes back.
"""

import os
import time
from pathlib import Path
from typing import Optional, Union

import httpx
from dotenv import load_dotenv

from tailor.contexts.rendering.exceptions import CompilationError
from tailor.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    _log_info,
    log_compilation_result,
)

load_dotenv()

LATEX_COMPILE_URL = os.getenv("LATEX_COMPILE_URL", "https://latexonline.cc/compile")

DEFAULT_TEX_NAME = "optimized_resume.tex"
DEFAULT_PDF_NAME = "optimized_resume.pdf"
UPLOAD_NAME = "resume.tex"

COMPILE_FAILURE_MESSAGE = "Failed to compile LaTeX. Please try Overleaf instead."


async def compile_latex_online(
    latex: str,
    client: Optional[httpx.AsyncClient] = None,
    url: str = LATEX_COMPILE_URL,
) -> bytes:
    """
    Compile LaTeX to PDF with the external compilation service.

    Args:
        latex: Complete LaTeX document
        client: HTTP client to use (default: a new client without timeout)
        url: Service endpoint (default: LATEX_COMPILE_URL env var)

    Returns:
        PDF bytes

    Raises:
        CompilationError: On transport failure or a non-2xx status (cause is chained)
    """
    files = {"file": (UPLOAD_NAME, latex.encode("utf-8"), "text/plain")}
    _log_info(f"Submitting {len(latex)} chars to {url}")
    start_time = time.time()

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=None) as owned_client:
                response = await owned_client.post(url, files=files)
        else:
            response = await client.post(url, files=files)
    except httpx.HTTPError as e:
        _log_error(f"LaTeX compilation error: {e}")
        raise CompilationError(COMPILE_FAILURE_MESSAGE) from e

    if not response.is_success:
        _log_error(f"Compilation failed: {response.status_code}")
        _log_debug(response.text[:1000])
        raise CompilationError(COMPILE_FAILURE_MESSAGE, http_status=response.status_code)

    log_compilation_result(len(response.content), time.time() - start_time)
    return response.content


def write_tex(latex: str, path: Union[str, Path] = DEFAULT_TEX_NAME) -> Path:
    """Write LaTeX source to a .tex file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(latex, encoding="utf-8")
    _log_debug(f"Wrote {path}")
    return path


def write_pdf(data: bytes, path: Union[str, Path] = DEFAULT_PDF_NAME) -> Path:
    """Write PDF bytes to a file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    _log_debug(f"Wrote {path}")
    return path
