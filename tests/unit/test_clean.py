from pathlib import Path

import pytest

from chunkbuild.context import BuildContext
from chunkbuild.exceptions import ConfigurationError
from chunkbuild.models.config import BuildSettings
from chunkbuild.tasks import clean_build_dir


@pytest.mark.parametrize("build_dir", [".", "/", ""])
def test_refuses_root_and_current_directory(build_ctx: BuildContext, build_dir: str):
    build_ctx.settings = BuildSettings(_env_file=None, build_dir=Path(build_dir))
    marker = build_ctx.project_root / "package.json"

    with pytest.raises(ConfigurationError, match="Refusing to rm -rf"):
        clean_build_dir(build_ctx)

    assert marker.exists()


def test_refuses_path_resolving_to_project_root(build_ctx: BuildContext):
    build_ctx.settings = BuildSettings(_env_file=None, build_dir=Path("build/.."))

    with pytest.raises(ConfigurationError):
        clean_build_dir(build_ctx)

    assert (build_ctx.project_root / "build").is_dir()


def test_removes_build_dir(build_ctx: BuildContext):
    assert clean_build_dir(build_ctx) is True

    assert not (build_ctx.project_root / "build").exists()
    assert (build_ctx.project_root / "package.json").exists()


def test_missing_build_dir_is_fine(build_ctx: BuildContext):
    build_ctx.settings = BuildSettings(_env_file=None, build_dir=Path("never-built"))
    assert clean_build_dir(build_ctx) is False
