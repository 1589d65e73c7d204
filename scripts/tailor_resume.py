#!/usr/bin/env python3
"""
Resume Tailoring CLI

Stores a resume and a job description, then asks an LLM provider how well they match
and how to improve the resume.

Commands:
    optimize        - Analyze the stored resume against the stored job description
    test-connection - Check that an API key is accepted by a provider
    save-resume     - Store a .tex or .pdf resume
    save-job        - Store a job description (file or stdin)
    clear-job       - Forget the stored job description
    configure       - Set provider, API key and model
    show-settings   - Show current settings (API keys masked)

Examples:\n

    tailor_resume.py save-resume resume.tex

    tailor_resume.py save-job job.txt

    tailor_resume.py configure --provider anthropic --api-key sk-ant-...

    tailor_resume.py optimize --output outs/tailored.tex
"""

import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from tailor.contexts.gateway import Provider, ProviderError, SuggestionKind, test_connection
from tailor.contexts.gateway.exceptions import UnknownProviderError
from tailor.contexts.gateway.logger import setup_gateway_logger
from tailor.contexts.intake import load_resume
from tailor.contexts.rendering import write_tex
from tailor.utils import now
from tailor.utils.session import SessionError, load_session, save_session
from tailor.utils.settings import SETTINGS_PATH, load_settings, save_settings
from tailor.utils.storage import LocalStore
from tailor.workflow import run_optimization, tailored_latex

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def mask_key(key: str) -> str:
    """Show only the last four characters of an API key."""
    if not key:
        return "(not set)"
    return f"...{key[-4:]}" if len(key) > 8 else "****"


def fail(message: str):
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


app = typer.Typer(
    help="Tailor a resume to a job description with an LLM provider",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("optimize")
def optimize_command(
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", "-p", help=f"Provider override ({', '.join(Provider.values())})"),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Model override (passed through verbatim)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the LaTeX resume with suggestions applied"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the raw result as JSON"),
    ] = False,
):
    """
    Analyze the stored resume against the stored job description.

    Examples:\n

        $ tailor_resume.py optimize

        $ tailor_resume.py optimize --provider gemini

        $ tailor_resume.py optimize -o outs/tailored.tex
    """
    try:
        settings = load_settings()
        if provider:
            settings = settings.with_provider(provider)
        if model:
            settings = settings.with_model(model)
    except UnknownProviderError as e:
        fail(str(e))

    state = load_session(LocalStore(), settings)

    log_dir = LOGS_PATH / f"optimize_{now()}"
    setup_gateway_logger(log_dir, settings.provider, settings.model)

    typer.secho(
        f"\nOptimizing with {settings.provider} ({settings.model})", fg=typer.colors.BLUE, bold=True
    )

    try:
        state = asyncio.run(run_optimization(state))
    except (SessionError, ProviderError) as e:
        fail(e.message)

    result = state.result

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        color = typer.colors.GREEN if result.match_score >= 70 else typer.colors.YELLOW
        typer.secho(f"\nMatch score: {result.match_score}%", fg=color, bold=True)

        analysis = result.analysis
        for label, values in [
            ("Matching skills", analysis.matching_skills),
            ("Missing skills", analysis.missing_skills),
            ("Keywords found", analysis.keywords_found),
            ("Keywords missing", analysis.keywords_missing),
        ]:
            typer.echo(f"  {label}: {', '.join(values) if values else '-'}")

        typer.echo(f"\nSuggestions ({len(result.suggestions)}):")
        for suggestion in result.suggestions:
            fg = typer.colors.RED if suggestion.kind is SuggestionKind.ERROR else None
            section = f" [{suggestion.section}]" if suggestion.section else ""
            typer.secho(f"  - ({suggestion.kind.value}){section} {suggestion.suggested_text}", fg=fg)
            if suggestion.original_text:
                typer.echo(f"      was: {suggestion.original_text}")

    if output:
        try:
            path = write_tex(tailored_latex(state), output)
        except SessionError as e:
            fail(e.message)
        typer.secho(f"\n✓ Tailored LaTeX written to {path}", fg=typer.colors.GREEN)

    typer.echo(f"  Log: {log_dir / 'gateway.log'}\n")


@app.command("test-connection")
def test_connection_command(
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", "-p", help="Provider to test (default: configured provider)"),
    ] = None,
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", "-k", help="API key to test (default: configured key)"),
    ] = None,
):
    """Check that an API key is accepted by a provider."""
    settings = load_settings()
    try:
        target = settings.with_provider(provider) if provider else settings
    except UnknownProviderError as e:
        fail(str(e))

    key = api_key or target.api_key_for()
    if not key:
        fail("Please enter an API key")

    if asyncio.run(test_connection(target.provider, key)):
        typer.secho(f"✓ Connected to {target.provider}", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(f"✗ Connection to {target.provider} failed", fg=typer.colors.RED, bold=True)
        raise typer.Exit(code=1)


@app.command("save-resume")
def save_resume_command(
    path: Annotated[Path, typer.Argument(help="Resume file (.tex or .pdf)")],
):
    """Store a resume for later optimization."""
    try:
        resume = load_resume(path)
    except (FileNotFoundError, ValueError) as e:
        fail(str(e))

    store = LocalStore()
    state = load_session(store, load_settings(use_env=False))
    if resume.is_latex:
        state = state.with_latex_resume(resume.content, resume.plaintext)
    else:
        state = state.with_pdf_resume(resume.content)
    save_session(store, state)

    typer.secho(f"✓ Saved {resume.kind} resume ({len(resume.content)} chars)", fg=typer.colors.GREEN)
    if resume.page_count:
        typer.echo(f"  Pages: {resume.page_count}")


@app.command("save-job")
def save_job_command(
    path: Annotated[
        Optional[Path],
        typer.Argument(help="Text file with the job description (default: read stdin)"),
    ] = None,
):
    """Store a job description (from a file or stdin)."""
    if path is not None:
        if not path.exists():
            fail(f"File not found: {path}")
        text = path.read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()

    store = LocalStore()
    try:
        state = load_session(store, load_settings(use_env=False)).with_job_description(text)
    except SessionError as e:
        fail(e.message)
    save_session(store, state)

    typer.secho(f"✓ Job description saved ({len(state.job_description)} chars)", fg=typer.colors.GREEN)


@app.command("clear-job")
def clear_job_command():
    """Forget the stored job description."""
    store = LocalStore()
    save_session(store, load_session(store, load_settings(use_env=False)).without_job_description())
    typer.secho("✓ Job description cleared", fg=typer.colors.GREEN)


@app.command("configure")
def configure_command(
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", "-p", help=f"Provider ({', '.join(Provider.values())})"),
    ] = None,
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", "-k", help="API key for the provider"),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Model identifier"),
    ] = None,
):
    """
    Set provider, API key and model.

    Switching provider keeps the model only if it belongs to the new provider.

    Examples:\n

        $ tailor_resume.py configure --provider cohere --api-key co-...

        $ tailor_resume.py configure --model gpt-4o-mini
    """
    settings = load_settings(use_env=False)
    try:
        if provider:
            settings = settings.with_provider(provider)
        if api_key:
            settings = settings.with_api_key(settings.provider, api_key)
    except UnknownProviderError as e:
        fail(str(e))
    if model:
        settings = settings.with_model(model)

    path = save_settings(settings)
    typer.secho(f"✓ Settings saved to {path}", fg=typer.colors.GREEN)


@app.command("show-settings")
def show_settings_command():
    """Show current settings (API keys masked)."""
    settings = load_settings()
    typer.secho(f"\nSettings ({SETTINGS_PATH})", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Provider: {settings.provider}")
    typer.echo(f"  Model: {settings.model}")
    typer.echo("  API keys:")
    for name in Provider.values():
        typer.echo(f"    {name}: {mask_key(settings.api_key_for(name))}")
    typer.echo("")


if __name__ == "__main__":
    app()
