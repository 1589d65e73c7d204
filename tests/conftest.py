"""Shared fixtures: sample resumes, job description and provider replies."""

import json

import pytest

SAMPLE_LATEX = r"""\documentclass{article}
\begin{document}

\section{Experience}
\begin{itemize}
  \item \textbf{Built} a data pipeline in Python
  \item Led a team of 4 engineers % internal note
\end{itemize}

\section{Skills}
\begin{itemize}
  \item Python
  \item SQL
\end{itemize}

\end{document}
"""

SAMPLE_JOB = "Senior Data Engineer. Requirements: Python, SQL, Docker, Airflow."

SAMPLE_RESULT = {
    "matchScore": 72,
    "analysis": {
        "matchingSkills": ["Python", "SQL"],
        "missingSkills": ["Docker", "Airflow"],
        "keywordsFound": ["data pipeline"],
        "keywordsMissing": ["orchestration"],
    },
    "suggestions": [
        {
            "type": "bullet",
            "section": "Experience",
            "original": "Built a data pipeline in Python",
            "text": "Built an Airflow-orchestrated data pipeline in Python",
        },
        {"type": "skill", "text": "Docker"},
        {"type": "keyword", "text": "Mention orchestration in the summary"},
    ],
    "updatedResume": "\\documentclass{article}...",
}


@pytest.fixture
def sample_latex():
    return SAMPLE_LATEX


@pytest.fixture
def sample_job():
    return SAMPLE_JOB


@pytest.fixture
def sample_result_data():
    return json.loads(json.dumps(SAMPLE_RESULT))


@pytest.fixture
def sample_reply_text():
    """Reply as a model typically sends it: JSON wrapped in a fenced block with prose."""
    return "Here is the analysis:\n```json\n" + json.dumps(SAMPLE_RESULT, indent=2) + "\n```\n"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove provider API key variables so settings only see what the test writes."""
    for name in (
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "GEMINI_API_KEY",
        "CEREBRAS_API_KEY",
        "COHERE_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
