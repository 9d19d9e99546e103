"""chunkbuild command-line interface."""

from pathlib import Path
from typing import Annotated

import typer

from chunkbuild.cli.commands.build import (
    advanced_compilation_test,
    build,
    clean,
    langfiles,
    manifest,
    messages,
    minify,
    only_advanced_compilation_test,
    tsc,
)
from chunkbuild.cli.console import setup_logging
from chunkbuild.cli.context import CliState

__all__ = ["app"]

app = typer.Typer(
    name="chunkbuild",
    help="Build a chunked, Closure-compiled JavaScript library from TypeScript.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    chunks: Annotated[
        Path | None,
        typer.Option(help="JSON chunk configuration replacing the built-in one."),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Verbose logging and warnings.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Treat more diagnostics as errors.")] = False,
    strict: Annotated[bool, typer.Option("--strict", help="--debug plus strictCheckTypes.")] = False,
) -> None:
    setup_logging(verbose)
    ctx.obj = CliState.from_options(chunks, verbose, debug, strict)


app.command()(clean)
app.command()(tsc)
app.command()(messages)
app.command()(langfiles)
app.command()(minify)
app.command()(build)
app.command()(manifest)
app.command("advanced-compilation-test")(advanced_compilation_test)
app.command("only-advanced-compilation-test")(only_advanced_compilation_test)
