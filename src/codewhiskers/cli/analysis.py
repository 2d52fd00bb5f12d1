"""
Single-file analysis commands: explain, functions, refactor, performance, trace.

codewhiskers/src/codewhiskers/cli/analysis.py
"""

import logging
import warnings
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape
from rich.table import Table

from ..api import analyze_functions, analyze_performance, explain, find_refactoring_opportunities
from ..console_utils import console
from ..errors import ConfigurationError, MalformedInputWarning
from ..extraction import trace_variable
from ..reporting import DEFAULT_FORMAT, EXPLANATION_LEVELS, FORMAT_CHOICES, get_formatter
from .cli_group import (
    CodeWhiskersContext,
    cli,
    read_source,
    report_configuration_error,
    resolve_language,
    resolve_source_tag,
)

logger = logging.getLogger(__name__)

LEVEL_CHOICES = list(EXPLANATION_LEVELS) + ["all"]

_source_file = click.Path(exists=True, dir_okay=False, path_type=Path)


@cli.command("explain")
@click.argument("file", type=_source_file)
@click.option("--language", "-l", help="Language tag (inferred from the file extension if omitted)")
@click.option("--level", type=click.Choice(LEVEL_CHOICES), default="all", help="Explanation tier")
@click.option("--format", "-f", type=click.Choice(FORMAT_CHOICES), default=DEFAULT_FORMAT, help="Output format")
@click.pass_context
def explain_command(
    ctx: click.Context, file: Path, language: Optional[str], level: str, format: str
) -> None:
    """Explain what FILE does in plain language."""
    cw_ctx: CodeWhiskersContext = ctx.obj
    tag = resolve_language(ctx, file, language)
    source = read_source(ctx, file)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", MalformedInputWarning)
        try:
            explanation = explain(source, tag, cw_ctx.config)
        except ConfigurationError as e:
            report_configuration_error(ctx, e)

    if any(issubclass(w.category, MalformedInputWarning) for w in caught):
        logger.warning(f"No recognizable structure in {file}; using generic explanations")

    levels = list(EXPLANATION_LEVELS) if level == "all" else [level]
    click.echo(get_formatter(format).format_explanation(explanation, levels))


@cli.command("functions")
@click.argument("file", type=_source_file)
@click.option("--language", "-l", help="Language tag (inferred from the file extension if omitted)")
@click.option("--format", "-f", type=click.Choice(FORMAT_CHOICES), default=DEFAULT_FORMAT, help="Output format")
@click.pass_context
def functions_command(ctx: click.Context, file: Path, language: Optional[str], format: str) -> None:
    """Describe the behavior of every function in FILE."""
    cw_ctx: CodeWhiskersContext = ctx.obj
    tag = resolve_language(ctx, file, language)
    source = read_source(ctx, file)
    try:
        behaviors = analyze_functions(source, tag, cw_ctx.config)
    except ConfigurationError as e:
        report_configuration_error(ctx, e)
    click.echo(get_formatter(format).format_functions(behaviors))


@cli.command("refactor")
@click.argument("file", type=_source_file)
@click.option("--language", "-l", help="Language tag (inferred from the file extension if omitted)")
@click.option("--format", "-f", type=click.Choice(FORMAT_CHOICES), default=DEFAULT_FORMAT, help="Output format")
@click.pass_context
def refactor_command(ctx: click.Context, file: Path, language: Optional[str], format: str) -> None:
    """Suggest refactorings for FILE.

    JSX files (or a javascriptreact/typescriptreact tag) also get the promise chain check.
    """
    tag = resolve_source_tag(ctx, file, language)
    source = read_source(ctx, file)
    opportunities = find_refactoring_opportunities(source, tag)
    click.echo(get_formatter(format).format_refactorings(opportunities))


@cli.command("performance")
@click.argument("file", type=_source_file)
@click.option("--language", "-l", help="Language tag (inferred from the file extension if omitted)")
@click.option("--format", "-f", type=click.Choice(FORMAT_CHOICES), default=DEFAULT_FORMAT, help="Output format")
@click.pass_context
def performance_command(ctx: click.Context, file: Path, language: Optional[str], format: str) -> None:
    """Flag likely performance bottlenecks in FILE."""
    tag = resolve_source_tag(ctx, file, language)
    source = read_source(ctx, file)
    issues = analyze_performance(source, tag)
    click.echo(get_formatter(format).format_performance(issues))


@cli.command("trace")
@click.argument("file", type=_source_file)
@click.argument("name")
@click.option("--language", "-l", help="Language tag (inferred from the file extension if omitted)")
@click.pass_context
def trace_command(ctx: click.Context, file: Path, name: str, language: Optional[str]) -> None:
    """Show every place NAME appears in FILE."""
    resolve_language(ctx, file, language)
    source = read_source(ctx, file)
    occurrences = trace_variable(source, name)

    if not occurrences:
        console.print(f"No occurrences of '{escape(name)}' found in {escape(str(file))}")
        return

    table = Table(title=f"'{escape(name)}' in {escape(file.name)}")
    table.add_column("Line", justify="right", style="cyan")
    table.add_column("Col", justify="right")
    table.add_column("Kind", style="magenta")
    table.add_column("Source", style="white")
    for occurrence in occurrences:
        table.add_row(
            str(occurrence.position.line),
            str(occurrence.position.character + 1),
            "definition" if occurrence.is_definition else "use",
            escape(occurrence.line_text.strip()),
        )
    console.print(table)
    definitions = sum(1 for o in occurrences if o.is_definition)
    console.print(f"\n{len(occurrences)} occurrence(s), {definitions} definition(s)")
