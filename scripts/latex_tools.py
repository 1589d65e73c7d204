#!/usr/bin/env python3
"""
LaTeX Resume Tools CLI

Inspects, validates, converts and compiles LaTeX resumes with the templating and
rendering contexts.

Commands:
    sections - List sections found in a LaTeX resume
    bullets  - List bullet points with their cleaned text
    validate - Check structural well-formedness
    convert  - Convert a plain-text resume to LaTeX (or LaTeX to text with --to-text)
    apply    - Apply bullet and skill edits from a result JSON file
    compile  - Compile LaTeX to PDF with the online compilation service

Examples:\n

    latex_tools.py sections resume.tex

    latex_tools.py validate resume.tex

    latex_tools.py convert resume.txt -o resume.tex

    latex_tools.py compile resume.tex -o resume.pdf
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from tailor.contexts.gateway.response_parser import normalize_result
from tailor.contexts.rendering import CompilationError, compile_latex_online, write_pdf, write_tex
from tailor.contexts.rendering.logger import setup_rendering_logger
from tailor.contexts.rendering.online_compiler import LATEX_COMPILE_URL
from tailor.contexts.templating import (
    extract_bullets,
    extract_sections,
    find_known_sections,
    format_for_display,
    latex_to_plaintext,
    text_to_latex,
    validate_latex,
)
from tailor.contexts.templating.logger import setup_templating_logger
from tailor.utils import now
from tailor.utils.text_processing import truncate_display
from tailor.workflow import apply_suggestions

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def read_text(path: Path) -> str:
    if not path.exists():
        typer.secho(f"Error: File not found: {path}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8")


app = typer.Typer(
    help="Inspect, validate, convert and compile LaTeX resumes",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("sections")
def sections_command(
    tex_file: Annotated[Path, typer.Argument(help="LaTeX resume")],
):
    """List sections found in a LaTeX resume."""
    latex = read_text(tex_file)
    sections = extract_sections(latex)

    typer.secho(f"\n{len(sections)} sections in {tex_file.name}", fg=typer.colors.BLUE, bold=True)
    for section in sections.values():
        typer.echo(f"  {section.kind:<10} {section.name:<30} {len(section.content)} chars")

    known = find_known_sections(latex)
    typer.echo(f"\nRecognized resume sections: {', '.join(known) if known else '-'}\n")


@app.command("bullets")
def bullets_command(
    tex_file: Annotated[Path, typer.Argument(help="LaTeX resume")],
    width: Annotated[
        int,
        typer.Option("--width", "-w", help="Truncate bullet text to this many characters"),
    ] = 100,
):
    """List bullet points with their cleaned text."""
    bullets = extract_bullets(read_text(tex_file))

    typer.secho(f"\n{len(bullets)} bullets in {tex_file.name}", fg=typer.colors.BLUE, bold=True)
    for i, bullet in enumerate(bullets, 1):
        typer.echo(f"  {i:>3}. {truncate_display(bullet.cleaned_text, width)}")
    typer.echo("")


@app.command("validate")
def validate_command(
    tex_file: Annotated[Path, typer.Argument(help="LaTeX resume")],
):
    """
    Check structural well-formedness (document markers, braces, environments).

    Exits with code 1 if any issue is found.
    """
    report = validate_latex(read_text(tex_file), log=False)

    if report.valid:
        typer.secho(f"✓ {tex_file.name} is well-formed", fg=typer.colors.GREEN, bold=True)
        raise typer.Exit(code=0)

    typer.secho(f"✗ {len(report.errors)} issues in {tex_file.name}", fg=typer.colors.RED, bold=True)
    for error in report.errors:
        typer.secho(f"  - {error}", fg=typer.colors.RED)
    raise typer.Exit(code=1)


@app.command("convert")
def convert_command(
    input_file: Annotated[Path, typer.Argument(help="Plain-text resume (or LaTeX with --to-text)")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file (default: print to stdout)"),
    ] = None,
    to_text: Annotated[
        bool,
        typer.Option("--to-text", help="Convert LaTeX to plain text instead"),
    ] = False,
    document_class: Annotated[
        str,
        typer.Option("--document-class", "-d", help="LaTeX document class"),
    ] = "article",
):
    """
    Convert a plain-text resume to a minimal LaTeX document.

    Examples:\n

        $ latex_tools.py convert resume.txt -o resume.tex

        $ latex_tools.py convert resume.tex --to-text
    """
    text = read_text(input_file)
    converted = latex_to_plaintext(text) if to_text else text_to_latex(text, document_class)

    if output is None:
        typer.echo(converted)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(converted, encoding="utf-8")
    typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)


@app.command("apply")
def apply_command(
    tex_file: Annotated[Path, typer.Argument(help="LaTeX resume")],
    result_file: Annotated[
        Path, typer.Argument(help="Optimization result JSON (as printed by 'optimize --json')")
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output .tex file"),
    ] = Path("optimized_resume.tex"),
):
    """Apply bullet and skill suggestions from a result JSON file."""
    latex = read_text(tex_file)
    try:
        data = json.loads(read_text(result_file))
    except json.JSONDecodeError as e:
        typer.secho(f"Error: Invalid result JSON: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_dir = LOGS_PATH / f"apply_{now()}"
    setup_templating_logger(log_dir, phase="apply")

    updated = apply_suggestions(latex, normalize_result(data))
    path = write_tex(format_for_display(updated) + "\n", output)

    if updated == latex:
        typer.secho("No changes applied", fg=typer.colors.YELLOW)
    typer.secho(f"✓ Wrote {path}", fg=typer.colors.GREEN)
    typer.echo(f"  Log: {log_dir / 'template.log'}")


@app.command("compile")
def compile_command(
    tex_file: Annotated[Path, typer.Argument(help="LaTeX resume")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output PDF (default: <tex name>.pdf)"),
    ] = None,
    url: Annotated[
        str,
        typer.Option("--url", help="Compilation service endpoint"),
    ] = LATEX_COMPILE_URL,
):
    """Compile LaTeX to PDF with the online compilation service."""
    latex = read_text(tex_file)

    log_dir = LOGS_PATH / f"compile_{now()}"
    setup_rendering_logger(log_dir, url)

    report = validate_latex(latex)
    if not report.valid:
        typer.secho(
            f"Warning: {len(report.errors)} structural issues (compiling anyway)",
            fg=typer.colors.YELLOW,
        )

    typer.secho(f"\nCompiling: {tex_file.name}", fg=typer.colors.BLUE, bold=True)
    try:
        pdf = asyncio.run(compile_latex_online(latex, url=url))
    except CompilationError as e:
        typer.secho(f"✗ {e.message}", fg=typer.colors.RED, bold=True, err=True)
        typer.echo(f"  Log: {log_dir / 'render.log'}")
        raise typer.Exit(code=1)

    path = write_pdf(pdf, output or tex_file.with_suffix(".pdf"))
    typer.secho(f"✓ PDF written to {path}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Log: {log_dir / 'render.log'}\n")


if __name__ == "__main__":
    app()
