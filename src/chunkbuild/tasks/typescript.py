from chunkbuild.context import BuildContext
from chunkbuild.process import run_checked

__all__ = ["build_javascript"]


def build_javascript(ctx: BuildContext) -> None:
    """Run tsc over the project, then post-process its output with tsick."""
    settings = ctx.settings
    run_checked(
        ctx.runner,
        [
            settings.tsc,
            "-outDir",
            str(settings.tsc_output_dir),
            "-declarationDir",
            str(settings.typings_dir),
        ],
        cwd=ctx.project_root,
    )
    run_checked(
        ctx.runner,
        [settings.node, "scripts/tsick.js", str(settings.tsc_output_dir)],
        cwd=ctx.project_root,
    )
