"""
Workspace profiling command.

codewhiskers/src/codewhiskers/cli/profiling.py
"""

import logging
from pathlib import Path

import click

from ..config import get_profiler_settings
from ..console_utils import print_note
from ..errors import ConfigurationError
from ..reporting import DEFAULT_FORMAT, FORMAT_CHOICES, get_formatter
from ..workspace import WorkspaceProfiler, collect_source_files
from .cli_group import CodeWhiskersContext, cli, report_configuration_error

logger = logging.getLogger(__name__)


@cli.command("profile")
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option("--format", "-f", type=click.Choice(FORMAT_CHOICES), default=DEFAULT_FORMAT, help="Output format")
@click.pass_context
def profile_command(ctx: click.Context, paths: tuple[Path, ...], format: str) -> None:
    """Build a skill profile and learning path from the code in PATHS."""
    cw_ctx: CodeWhiskersContext = ctx.obj
    try:
        settings = get_profiler_settings(cw_ctx.config)
    except ConfigurationError as e:
        report_configuration_error(ctx, e)

    targets = list(paths) or [cw_ctx.project_root or Path.cwd()]
    profiler = WorkspaceProfiler(settings)
    context = profiler.accumulate(collect_source_files(targets, settings))
    profile = profiler.derive_profile(context)

    click.echo(get_formatter(format).format_profile(profile))

    if format == "human":
        if context.files_analyzed == 0:
            print_note("No source files found to profile.")
        if context.skipped:
            print_note(f"Skipped {len(context.skipped)} unreadable file(s)")
