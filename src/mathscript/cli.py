"""mathscript CLI entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import click

from mathscript.compiler.base import CompilationResult
from mathscript.compiler.transpiler import MathScriptCompiler
from mathscript.config import settings
from mathscript.errors import UnsupportedOutputError
from mathscript.logger import init_logging
from mathscript.reference import build_reference
from mathscript.renderer.html_renderer import HTMLRenderer
from mathscript.renderer.tex_renderer import TeXRenderer

_OUTPUT_SUFFIXES = (".html", ".htm", ".tex", ".json")
_ECHOED_LEVELS = {"warning", "error"}


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (defaults to MATHSCRIPT_LOG_LEVEL)",
)
def main(log_level: str | None) -> None:
    """Transpile MathScript notes into LaTeX, HTML or JSON."""
    init_logging(log_level)


@main.command("compile")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(path_type=Path), required=True, help="Output .html, .tex or .json path")
@click.option("--title", type=str, default=None, help="Document title (defaults to the input file name)")
@click.option("--author", type=str, default=None, help="Author shown under the title")
@click.option("--date", "date_text", type=str, default=None, help="Date shown under the title (defaults to today)")
@click.option("--line-numbers", is_flag=True, help="Number every math line")
@click.option("--dark-mode", is_flag=True, help="Enable dark mode stylesheet (HTML only)")
def compile_command(
    input_path: Path,
    output: Path,
    title: str | None,
    author: str | None,
    date_text: str | None,
    line_numbers: bool,
    dark_mode: bool,
) -> None:
    """Compile a .math document and export it."""
    source = input_path.read_text(encoding="utf-8")
    result = MathScriptCompiler(settings.compiler_settings()).compile(source)

    for entry in result.log_entries:
        if entry.level in _ECHOED_LEVELS:
            click.echo(f"[{entry.level}] {entry.message}", err=True)

    try:
        rendered = _render(
            result,
            output,
            title=title or input_path.stem,
            author=author,
            date_text=date_text,
            line_numbers=line_numbers,
            dark_mode=dark_mode,
        )
    except UnsupportedOutputError as exc:
        raise click.ClickException(str(exc)) from exc

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")

    click.echo(f"Rendered: {output}")


@main.command("reference")
def reference_command() -> None:
    """Print the syntax reference."""
    for category in build_reference():
        click.echo(category.title)
        for item in category.items:
            line = f"  {item.syntax:<28} {item.output}"
            if item.description:
                line += f"  ({item.description})"
            click.echo(line)
        click.echo()


def _render(
    result: CompilationResult,
    output: Path,
    *,
    title: str,
    author: str | None,
    date_text: str | None,
    line_numbers: bool,
    dark_mode: bool,
) -> str:
    suffix = output.suffix.lower()
    if suffix in (".html", ".htm"):
        return HTMLRenderer().render(
            result,
            title=title,
            author=author,
            date_text=date_text,
            show_line_numbers=line_numbers,
            dark_mode=dark_mode,
        )
    if suffix == ".tex":
        return TeXRenderer().render(
            result,
            title=title,
            author=author,
            date_text=date_text,
            show_line_numbers=line_numbers,
        )
    if suffix == ".json":
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    raise UnsupportedOutputError(output.name, _OUTPUT_SUFFIXES)


if __name__ == "__main__":  # pragma: no cover
    main()
