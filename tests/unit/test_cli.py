import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from chunkbuild.cli import app
from chunkbuild.context import BuildContext

runner = CliRunner()


@pytest.fixture
def cli_ctx(monkeypatch: pytest.MonkeyPatch, project: Path, two_chunks, fake_runner):
    """Route every CLI command to the fake runner and the test project."""

    def fake_context(settings):
        return BuildContext(
            settings=settings, chunks=two_chunks, runner=fake_runner, project_root=project
        )

    monkeypatch.chdir(project)
    monkeypatch.setattr("chunkbuild.cli.context.get_build_context", fake_context)
    return fake_runner


def test_manifest_prints_chunk_options(cli_ctx):
    result = runner.invoke(app, ["manifest"])

    assert result.exit_code == 0, result.output
    options = json.loads(result.stdout)
    assert options["chunk"] == ["root:3", "child:2:root"]
    assert len(options["js"]) == 5
    assert options["chunk_wrapper"][1].startswith("child:// Do not edit this file")


def test_manifest_with_chunks_file(monkeypatch: pytest.MonkeyPatch, project: Path):
    chunks_file = project / "chunks.json"
    chunks_file.write_text(
        json.dumps([{"name": "all", "files": "**/*.js", "entry": "root/index.js", "scriptExport": "L"}])
    )
    monkeypatch.chdir(project)

    result = runner.invoke(app, ["--chunks", str(chunks_file), "manifest"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["chunk"] == ["all:5"]


def test_tool_failure_exit_status_and_diagnostics(cli_ctx):
    cli_ctx.fail_on("tsc", returncode=2, stderr="src/a.ts(1,1): error TS1005")

    result = runner.invoke(app, ["tsc"])

    assert result.exit_code == 2
    assert "error TS1005" in result.output
    assert len(cli_ctx.calls) == 1


def test_clean_refuses_current_directory(cli_ctx, monkeypatch: pytest.MonkeyPatch, project: Path):
    monkeypatch.setenv("CHUNKBUILD_BUILD_DIR", ".")

    result = runner.invoke(app, ["clean"])

    assert result.exit_code == 1
    assert "Refusing to rm -rf" in result.output
    assert (project / "package.json").exists()


def test_clean_removes_build_dir(cli_ctx, project: Path):
    result = runner.invoke(app, ["clean"])

    assert result.exit_code == 0, result.output
    assert not (project / "build").exists()


def test_messages_prints_reminder(cli_ctx):
    result = runner.invoke(app, ["messages"])

    assert result.exit_code == 0, result.output
    assert "TranslateWiki" in result.output


def test_clean_with_nothing_to_remove(cli_ctx, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CHUNKBUILD_BUILD_DIR", "never-built")

    result = runner.invoke(app, ["clean"])

    assert result.exit_code == 0, result.output
    assert "Nothing to clean" in result.output
    assert "Removed" not in result.output


def test_invalid_settings_reported_as_error(cli_ctx, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CHUNKBUILD_DEBUG", "maybe")

    result = runner.invoke(app, ["tsc"])

    assert result.exit_code == 1
    assert "Invalid build settings" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert cli_ctx.calls == []
