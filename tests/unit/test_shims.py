import asyncio
import json

import pytest

from chunkbuild.context import BuildContext
from chunkbuild.exceptions import ExternalToolError
from chunkbuild.process import ProcessResult
from chunkbuild.tasks.shims import build_shims, js_quote, render_shim

CHILD_SHIM = """\
import {loadChunk} from '../tests/scripts/load.mjs';
import './root.loader.mjs';

export const {
  child,
  helper,
} = await loadChunk(
  'build/src/child/index.js',
  'dist/child_compressed.js',
  'R.Child',
);
"""


def test_js_quote():
    assert js_quote("plain") == "'plain'"
    assert js_quote("it's") == "'it\\'s'"
    assert js_quote("a\\b\nc") == "'a\\\\b\\nc'"


def test_render_child_shim(two_chunks):
    shim = render_shim(
        two_chunks.get("child"),
        "build/src/child/index.js",
        "dist/child_compressed.js",
        ["child", "helper"],
    )
    assert shim == CHILD_SHIM


def test_render_root_shim_has_no_parent_import(two_chunks):
    shim = render_shim(two_chunks.root_chunk, "build/src/root/index.js", "dist/root_compressed.js", [])
    assert ".loader.mjs" not in shim
    assert shim.splitlines()[1] == ""


def test_build_shims_writes_one_shim_per_chunk(build_ctx: BuildContext, fake_runner):
    def exports_for(cmd, _input):
        names = ["child"] if "/child/index.js" in cmd[-1] else ["R1", "R2"]
        return ProcessResult(cmd, 0, json.dumps(names), "")

    fake_runner.on(lambda cmd: "--input-type=module" in cmd, exports_for)

    shims = asyncio.run(build_shims(build_ctx))

    build_dir = build_ctx.project_root / "build"
    assert shims == [build_dir / "root.loader.mjs", build_dir / "child.loader.mjs"]
    root_shim = shims[0].read_text()
    assert "  R1,\n  R2,\n" in root_shim
    assert "'dist/root_compressed.js'" in root_shim
    assert "import './root.loader.mjs';" in shims[1].read_text()
    assert not (build_dir / "package.json").exists()


def test_build_shims_export_listing_failure(build_ctx: BuildContext, fake_runner):
    fake_runner.fail_on("--input-type=module", stderr="SyntaxError")

    with pytest.raises(ExternalToolError):
        asyncio.run(build_shims(build_ctx))

    assert not (build_ctx.project_root / "build" / "package.json").exists()
