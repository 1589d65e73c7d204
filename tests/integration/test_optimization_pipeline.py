"""
Integration test for the full tailoring pipeline.
Tests: stored resume + job -> provider round trip (mocked HTTP) -> suggestions applied -> valid LaTeX.
"""

import asyncio
import json

import httpx
import pytest

from tailor.contexts.intake import load_resume
from tailor.contexts.templating import extract_bullets, validate_latex
from tailor.utils.session import SessionState, load_session, save_session
from tailor.utils.settings import Settings, load_settings, save_settings
from tailor.utils.storage import LocalStore
from tailor.workflow import run_optimization, tailored_latex


def anthropic_handler(reply_text, seen):
    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"content": [{"type": "text", "text": reply_text}]})

    return handler


@pytest.mark.integration
def test_latex_resume_pipeline(tmp_path, clean_env, sample_latex, sample_job, sample_reply_text):
    # Configure and persist settings, resume and job description
    settings_path = tmp_path / "settings.yaml"
    save_settings(
        Settings().with_provider("anthropic").with_api_key("anthropic", "sk-ant-test"), settings_path
    )
    tex_path = tmp_path / "resume.tex"
    tex_path.write_text(sample_latex, encoding="utf-8")
    resume = load_resume(tex_path)

    store = LocalStore(tmp_path / "store.json")
    state = SessionState(settings=load_settings(settings_path))
    state = state.with_latex_resume(resume.content, resume.plaintext).with_job_description(sample_job)
    save_session(store, state)

    # Fresh session from disk, as a new CLI invocation would see it
    state = load_session(store, load_settings(settings_path))

    seen = []

    async def main():
        transport = httpx.MockTransport(anthropic_handler(sample_reply_text, seen))
        async with httpx.AsyncClient(transport=transport) as client:
            return await run_optimization(state, client=client)

    state = asyncio.run(main())

    assert len(seen) == 1
    assert seen[0].headers["x-api-key"] == "sk-ant-test"
    sent = json.loads(seen[0].content)
    assert sent["model"] == "claude-sonnet-4-20250514"
    assert sample_job in sent["messages"][0]["content"]
    assert "\\textbf{Built}" in sent["messages"][0]["content"]

    assert state.result.match_score == 72
    assert state.result.analysis.missing_skills == ["Docker", "Airflow"]

    tailored = tailored_latex(state)
    cleaned = [b.cleaned_text for b in extract_bullets(tailored)]

    assert "Built an Airflow-orchestrated data pipeline in Python" in cleaned
    assert "Docker" in cleaned
    assert "Built a data pipeline in Python" not in cleaned
    assert validate_latex(tailored).valid


@pytest.mark.integration
def test_unparseable_reply_leaves_resume_unchanged(tmp_path, clean_env, sample_latex, sample_job):
    state = (
        SessionState(settings=Settings().with_provider("anthropic").with_api_key("anthropic", "k"))
        .with_latex_resume(sample_latex)
        .with_job_description(sample_job)
    )

    async def main():
        transport = httpx.MockTransport(anthropic_handler("I'd rather not.", []))
        async with httpx.AsyncClient(transport=transport) as client:
            return await run_optimization(state, client=client)

    state = asyncio.run(main())

    assert state.result.parse_failed
    assert tailored_latex(state) == sample_latex
