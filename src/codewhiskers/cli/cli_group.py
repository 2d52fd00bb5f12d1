"""
Main CLI group and shared helpers for codewhiskers commands.

codewhiskers/src/codewhiskers/cli/cli_group.py
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import click

from ..config import Config, load_config
from ..console_utils import print_error
from ..errors import ConfigurationError, UnsupportedLanguageError
from ..filesystem import find_project_root
from ..languages import normalize_language, source_tag_for, structural_tag_for

logger = logging.getLogger(__name__)

EXIT_UNSUPPORTED_LANGUAGE = 2


@dataclass
class CodeWhiskersContext:
    """Shared context for CLI commands."""

    project_root: Optional[Path] = None
    config: Config = field(default_factory=lambda: Config(project_root=None, config_dict={}))
    verbose: bool = False


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """codewhiskers: plain-language explanations and skill profiles for your code."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    current = Path.cwd()
    ctx.obj = CodeWhiskersContext(
        project_root=find_project_root(current),
        config=load_config(current),
        verbose=verbose,
    )


def resolve_language(ctx: click.Context, path: Path, language: Optional[str]) -> str:
    """Structural language tag for ``path``; exits with code 2 if unsupported."""
    try:
        if language:
            return normalize_language(language)
        return structural_tag_for(path)
    except UnsupportedLanguageError as e:
        print_error(str(e))
        ctx.exit(EXIT_UNSUPPORTED_LANGUAGE)


def read_source(ctx: click.Context, path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Could not read {path}: {e}")
        ctx.exit(1)


def report_configuration_error(ctx: click.Context, error: ConfigurationError) -> None:
    print_error(f"Invalid [tool.codewhiskers] configuration: {error}")
    ctx.exit(1)


def resolve_source_tag(ctx: click.Context, path: Path, language: Optional[str]) -> str:
    """Like ``resolve_language`` but keeps JSX variants such as ``typescriptreact``."""
    resolve_language(ctx, path, language)
    if language:
        return language.strip().lower()
    return source_tag_for(path)
