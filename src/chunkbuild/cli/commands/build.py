import json

import typer

from chunkbuild import tasks
from chunkbuild.cli.console import console
from chunkbuild.cli.context import get_app_context, reporting_errors
from chunkbuild.tasks.i18n import MESSAGES_REMINDER


def clean(ctx: typer.Context) -> None:
    """Delete the build directory."""
    with reporting_errors():
        app_ctx = get_app_context(ctx)
        removed = tasks.clean_build_dir(app_ctx)
    if removed:
        console.print(f"[green]✓[/green] Removed [bold]{app_ctx.settings.build_dir}[/bold]")
    else:
        console.print(f"Nothing to clean at [bold]{app_ctx.settings.build_dir}[/bold]")


def tsc(ctx: typer.Context) -> None:
    """Transpile the TypeScript sources with tsc."""
    with reporting_errors():
        app_ctx = get_app_context(ctx)
        with console.status("Running tsc..."):
            tasks.build_javascript(app_ctx)
    console.print("[green]✓[/green] tsc complete")


def messages(ctx: typer.Context) -> None:
    """Regenerate msg/json/en.json et al. from msg/messages.js."""
    with reporting_errors():
        tasks.generate_messages(get_app_context(ctx))
    console.print(MESSAGES_REMINDER, markup=False, highlight=False)


def langfiles(ctx: typer.Context) -> None:
    """Build <build_dir>/msg/*.js from msg/json/*.json."""
    with reporting_errors():
        app_ctx = get_app_context(ctx)
        tasks.build_langfiles(app_ctx)
    console.print("[green]✓[/green] Language files built")


def minify(ctx: typer.Context) -> None:
    """tsc, compile the chunks, and write the loader shims."""
    with reporting_errors():
        app_ctx = get_app_context(ctx)
        with console.status("Compiling chunks..."):
            result = tasks.minify(app_ctx)
    console.print(
        f"[bold green]Compiled {len(result.chunks)} chunks "
        f"from {len(result.js)} files![/bold green]"
    )
    console.print(f"Output saved to: [bold]{app_ctx.settings.release_dir}[/bold]")


def build(ctx: typer.Context) -> None:
    """minify and langfiles."""
    with reporting_errors():
        app_ctx = get_app_context(ctx)
        with console.status("Building..."):
            tasks.build(app_ctx)
    console.print("[bold green]Build complete![/bold green]")


def manifest(ctx: typer.Context) -> None:
    """Print the Closure Compiler chunk options for the current tsc output as JSON."""
    with reporting_errors():
        resolved = tasks.get_chunk_manifest(get_app_context(ctx))
    typer.echo(json.dumps(resolved.chunk_options(), indent=2))


def advanced_compilation_test(ctx: typer.Context) -> None:
    """tsc, then compile the ADVANCED_OPTIMIZATIONS test bundle."""
    with reporting_errors():
        app_ctx = get_app_context(ctx)
        with console.status("Compiling advanced compilation test..."):
            tasks.advanced_compilation_test(app_ctx)
    console.print("[green]✓[/green] Advanced compilation test built")


def only_advanced_compilation_test(ctx: typer.Context) -> None:
    """Compile the ADVANCED_OPTIMIZATIONS test bundle without running tsc first."""
    with reporting_errors():
        app_ctx = get_app_context(ctx)
        with console.status("Compiling advanced compilation test..."):
            tasks.build_advanced_compilation_test(app_ctx)
    console.print("[green]✓[/green] Advanced compilation test built")
