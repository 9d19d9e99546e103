import json
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from chunkbuild.context import BuildContext
from chunkbuild.models.chunk import ChunkConfig, ChunkSpec
from chunkbuild.models.config import BuildSettings
from chunkbuild.process import ProcessResult

Responder = Callable[[tuple[str, ...], str | None], ProcessResult]


class FakeRunner:
    """Records commands and answers them from ``responders`` (first match wins)."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.inputs: list[str | None] = []
        self.responders: list[tuple[Callable[[tuple[str, ...]], bool], Responder]] = []

    def on(self, predicate: Callable[[tuple[str, ...]], bool], responder: Responder) -> None:
        self.responders.append((predicate, responder))

    def fail_on(self, program: str, returncode: int = 1, stderr: str = "boom") -> None:
        self.on(
            lambda cmd: program in cmd,
            lambda cmd, _input: ProcessResult(cmd, returncode, "", stderr),
        )

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        input: str | None = None,
        capture: bool = False,
    ) -> ProcessResult:
        cmd = tuple(command)
        self.calls.append(cmd)
        self.inputs.append(input)
        for predicate, responder in self.responders:
            if predicate(cmd):
                return responder(cmd, input)
        return ProcessResult(cmd, 0)

    async def run_async(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> ProcessResult:
        return self.run(command, cwd=cwd, capture=capture)


def write_files(root: Path, relative_paths: Sequence[str], content: str = "// js\n") -> None:
    for relative in relative_paths:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def two_chunks() -> ChunkConfig:
    return ChunkConfig(
        (
            ChunkSpec(name="root", files="root/**/*.js", entry="root/index.js", script_export="R"),
            ChunkSpec(
                name="child",
                files=("child/**/*.js",),
                entry="child/index.js",
                script_export="R.Child",
            ),
        )
    )


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project root with tsc output for ``two_chunks`` and a package.json."""
    write_files(
        tmp_path / "build" / "src",
        ["root/index.js", "root/a.js", "root/util/b.js", "child/index.js", "child/c.js"],
    )
    (tmp_path / "package.json").write_text(json.dumps({"name": "lib", "version": "1.2.3"}))
    return tmp_path


@pytest.fixture
def build_ctx(project: Path, two_chunks: ChunkConfig, fake_runner: FakeRunner) -> BuildContext:
    return BuildContext(
        settings=BuildSettings(_env_file=None),
        chunks=two_chunks,
        runner=fake_runner,
        project_root=project,
    )
