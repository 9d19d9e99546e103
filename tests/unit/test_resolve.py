import logging
from pathlib import Path

import pytest

from chunkbuild.exceptions import ConfigurationError
from chunkbuild.models.chunk import ChunkConfig, ChunkSpec
from chunkbuild.resolve import expand_globs, resolve_chunks
from tests.conftest import write_files

COMPILED_ROOT = Path("build/src")


def test_two_chunk_manifest(project: Path, two_chunks: ChunkConfig):
    manifest = resolve_chunks(two_chunks, COMPILED_ROOT, base_dir=project)

    assert manifest.chunk_options()["chunk"] == ["root:3", "child:2:root"]
    assert len(manifest.js) == 5
    assert sum(c.file_count for c in manifest.chunks) == len(manifest.js)
    assert manifest.js == (
        "build/src/root/a.js",
        "build/src/root/index.js",
        "build/src/root/util/b.js",
        "build/src/child/c.js",
        "build/src/child/index.js",
    )
    assert "root.R.Child = factory(root.R);" in manifest.wrappers["child"]


def test_chunk_boundaries_recoverable_from_counts(project: Path, two_chunks: ChunkConfig):
    manifest = resolve_chunks(two_chunks, COMPILED_ROOT, base_dir=project)

    assert manifest.files_for("child") == ("build/src/child/c.js", "build/src/child/index.js")
    assert len(manifest.files_for("root")) == 3
    with pytest.raises(KeyError):
        manifest.files_for("missing")


def test_no_grandparents(project: Path, two_chunks: ChunkConfig):
    manifest = resolve_chunks(two_chunks, COMPILED_ROOT, base_dir=project)
    by_name = {c.name: c for c in manifest.chunks}
    for descriptor in manifest.chunks:
        if descriptor.parent is not None:
            assert by_name[descriptor.parent].parent is None


def test_missing_entry_raises(project: Path):
    config = ChunkConfig(
        (
            ChunkSpec(
                name="root", files=("root/util/*.js",), entry="root/index.js", script_export="R"
            ),
        )
    )
    with pytest.raises(ConfigurationError, match="root/index.js"):
        resolve_chunks(config, COMPILED_ROOT, base_dir=project)


def test_duplicate_matches_are_dropped_and_logged(project: Path, caplog: pytest.LogCaptureFixture):
    chunk = ChunkSpec(
        name="root",
        files=("root/index.js", "root/**/*.js"),
        entry="root/index.js",
        script_export="R",
    )
    with caplog.at_level(logging.WARNING, logger="chunkbuild.resolve"):
        files = expand_globs(chunk, COMPILED_ROOT, project)

    assert files == ["build/src/root/index.js", "build/src/root/a.js", "build/src/root/util/b.js"]
    assert "more than once" in caplog.text
    assert "build/src/root/index.js" in caplog.text


def test_directories_are_not_matched(tmp_path: Path):
    write_files(tmp_path / "out", ["lib.js/real.js", "main.js"])
    chunk = ChunkSpec(name="main", files=("*.js", "**/*.js"), entry="main.js", script_export="M")

    assert expand_globs(chunk, Path("out"), tmp_path) == ["out/main.js", "out/lib.js/real.js"]


def test_resolution_uses_current_tree(project: Path, two_chunks: ChunkConfig):
    first = resolve_chunks(two_chunks, COMPILED_ROOT, base_dir=project)
    write_files(project / "build" / "src", ["child/extra.js"])
    second = resolve_chunks(two_chunks, COMPILED_ROOT, base_dir=project)

    assert first.chunks[1].file_count == 2
    assert second.chunks[1].file_count == 3


@pytest.mark.parametrize("compiled_root", [Path("."), Path("build/../out")])
def test_unnormalised_compiled_root(tmp_path: Path, compiled_root: Path):
    (tmp_path / "build").mkdir()
    write_files(tmp_path / compiled_root, ["index.js", "lib/x.js"])
    config = ChunkConfig(
        (ChunkSpec(name="root", files=("**/*.js",), entry="index.js", script_export="R"),)
    )

    manifest = resolve_chunks(config, compiled_root, base_dir=tmp_path)

    prefix = "" if compiled_root == Path(".") else "out/"
    assert manifest.js == (f"{prefix}index.js", f"{prefix}lib/x.js")
    assert manifest.chunk_options()["chunk"] == ["root:2"]
