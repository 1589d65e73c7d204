"""
Rendering Context

Responsibilities:
- Submits LaTeX to the external compilation service
- Writes .tex and .pdf output files

Owns: Compilation requests, output files
Never: Modifies LaTeX content
"""

from tailor.contexts.rendering.exceptions import CompilationError
from tailor.contexts.rendering.online_compiler import compile_latex_online, write_pdf, write_tex

__all__ = ["compile_latex_online", "write_tex", "write_pdf", "CompilationError"]
