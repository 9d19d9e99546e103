"""Composite targets. Each invokes its immediate prerequisites."""

import asyncio
import logging

from chunkbuild.context import BuildContext
from chunkbuild.models.manifest import Manifest
from chunkbuild.tasks.compiled import build_advanced_compilation_test, build_compiled
from chunkbuild.tasks.i18n import build_langfiles
from chunkbuild.tasks.shims import build_shims
from chunkbuild.tasks.typescript import build_javascript

__all__ = ["advanced_compilation_test", "build", "minify"]

logger = logging.getLogger(__name__)


def minify(ctx: BuildContext) -> Manifest:
    """tsc, then the compiled chunks, then the loader shims."""
    build_javascript(ctx)
    manifest = build_compiled(ctx)
    asyncio.run(build_shims(ctx))
    return manifest


async def _build_parallel(ctx: BuildContext) -> None:
    await asyncio.gather(
        asyncio.to_thread(minify, ctx),
        asyncio.to_thread(build_langfiles, ctx),
    )


def build(ctx: BuildContext) -> None:
    """minify and langfiles, run side by side."""
    asyncio.run(_build_parallel(ctx))
    logger.info("Build complete")


def advanced_compilation_test(ctx: BuildContext) -> None:
    build_javascript(ctx)
    build_advanced_compilation_test(ctx)
