"""
Loader shims used by the playgrounds and tests.

Each shim loads its chunk either by importing the uncompiled entrypoint
module or by loading the compiled script, and re-exports the entrypoint's
names.
"""

import asyncio
import json
import logging
import posixpath
from collections.abc import Sequence
from pathlib import Path

from chunkbuild.constants import SHIM_LOADER_IMPORT
from chunkbuild.context import BuildContext
from chunkbuild.exceptions import ExternalToolError
from chunkbuild.models.chunk import ChunkSpec
from chunkbuild.process import run_checked_async

__all__ = ["build_shims", "js_quote", "list_exports", "render_shim"]

logger = logging.getLogger(__name__)

_JS_ESCAPES = {"\\": "\\\\", "'": "\\'", "\n": "\\n", "\r": "\\r"}


def js_quote(value: str) -> str:
    """Return ``value`` as a single-quoted JavaScript string literal."""
    return "'" + "".join(_JS_ESCAPES.get(ch, ch) for ch in value) + "'"


def render_shim(
    chunk: ChunkSpec, entry_path: str, script_path: str, export_names: Sequence[str]
) -> str:
    parent_import = (
        f"import {js_quote(f'./{chunk.parent}.loader.mjs')};" if chunk.parent else ""
    )
    names = "\n".join(f"  {name}," for name in export_names)
    return f"""import {{loadChunk}} from {js_quote(SHIM_LOADER_IMPORT)};
{parent_import}

export const {{
{names}
}} = await loadChunk(
  {js_quote(entry_path)},
  {js_quote(script_path)},
  {js_quote(chunk.script_export)},
);
"""


async def list_exports(ctx: BuildContext, entry_path: str) -> list[str]:
    """Import ``entry_path`` with node and return its exported names."""
    url = ctx.path(entry_path).resolve().as_uri()
    script = f"const m = await import({json.dumps(url)}); console.log(JSON.stringify(Object.keys(m)));"
    result = await run_checked_async(
        ctx.runner,
        [ctx.settings.node, "--input-type=module", "-e", script],
        cwd=ctx.project_root,
        capture=True,
    )
    try:
        return list(json.loads(result.stdout))
    except json.JSONDecodeError as e:
        raise ExternalToolError(result.command, result.returncode, result.stdout) from e


async def _build_shim(ctx: BuildContext, chunk: ChunkSpec) -> Path:
    settings = ctx.settings
    entry_path = posixpath.join(settings.tsc_output_posix, chunk.entry)
    script_path = posixpath.join(
        settings.release_dir.as_posix(), f"{chunk.name}{settings.compiled_suffix}.js"
    )
    shim_path = ctx.path(settings.build_dir) / f"{chunk.name}.loader.mjs"

    export_names = await list_exports(ctx, entry_path)
    shim_path.write_text(
        render_shim(chunk, entry_path, script_path, export_names), encoding="utf-8"
    )
    logger.debug("Wrote %s (%d export(s))", shim_path, len(export_names))
    return shim_path


async def build_shims(ctx: BuildContext) -> list[Path]:
    """
    Write <build_dir>/<chunk>.loader.mjs for every chunk, concurrently.

    A temporary package.json marks the build directory as ESM so node can
    import the entrypoints to enumerate their exports.
    """
    build_dir = ctx.path(ctx.settings.build_dir)
    build_dir.mkdir(parents=True, exist_ok=True)
    tmp_package_json = build_dir / "package.json"
    tmp_package_json.write_text('{"type": "module"}', encoding="utf-8")
    try:
        shims = await asyncio.gather(*(_build_shim(ctx, chunk) for chunk in ctx.chunks))
    finally:
        tmp_package_json.unlink()
    logger.info("Wrote %d loader shim(s)", len(shims))
    return list(shims)
