"""
resume-tailor - AI-assisted resume tailoring against a captured job description

Takes a resume (LaTeX source or PDF text) and a job description, asks one of several
chat-completion providers for structured suggestions, and applies them to the LaTeX.

Architecture:
- Gateway Context: Provider requests and reply normalization
- Templating Context: LaTeX section/bullet parsing, rewriting and validation
- Intake Context: Resume and job description ingestion
- Rendering Context: External compilation and output files
"""

__version__ = "0.1.0"
