from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.markup import escape

from chunkbuild.cli.console import err_console
from chunkbuild.context import BuildContext, get_build_context
from chunkbuild.exceptions import BuildError, ConfigurationError, ExternalToolError
from chunkbuild.models.config import BuildSettings

__all__ = ["CliState", "get_app_context", "reporting_errors"]


@dataclass
class CliState:
    """Global command-line options, applied on top of the environment settings."""

    overrides: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_options(
        cls, chunks: Path | None, verbose: bool, debug: bool, strict: bool
    ) -> "CliState":
        overrides: dict[str, Any] = {}
        if chunks is not None:
            overrides["chunks_file"] = chunks
        for name, flag in (("verbose", verbose), ("debug", debug), ("strict", strict)):
            if flag:
                overrides[name] = True
        return cls(overrides)


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Turn build failures into a diagnostic on stderr and a non-zero exit."""
    try:
        yield
    except ExternalToolError as e:
        if e.output:
            err_console.print(e.output, markup=False, highlight=False)
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(e.returncode if e.returncode > 0 else 1) from e
    except BuildError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except OSError as e:
        err_console.print(f"[bold red]File system error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e


def get_app_context(ctx: typer.Context) -> BuildContext:
    """Build the BuildContext for a command from the global options."""
    state = ctx.find_object(CliState) or CliState()
    try:
        settings = BuildSettings(**state.overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid build settings:\n{e}") from e
    return get_build_context(settings)
