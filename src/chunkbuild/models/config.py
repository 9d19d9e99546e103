import shlex
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from chunkbuild.constants import COMPILED_SUFFIX, DEFAULT_PYTHON

__all__ = ["BuildSettings"]


class BuildSettings(BaseSettings):
    """
    Configuration settings for chunkbuild.

    Loaded from environment variables with 'CHUNKBUILD_' prefix or a .env file.
    All relative paths are relative to the project root (the working directory).
    """

    build_dir: Path = Path("build")
    """Scratch build output; deleted by the clean target."""

    release_dir: Path = Path("dist")
    """Destination of the compiled chunks and their source maps."""

    tsc_output_dir: Path = Path("build/src")
    """Where tsc writes transpiled JavaScript; the compiled-source root."""

    typings_dir: Path = Path("build/declarations")
    """Where tsc writes declaration files."""

    chunks_file: Path | None = None
    """Optional JSON chunk configuration replacing the built-in one."""

    package_json: Path = Path("package.json")
    """Read for the version number baked into the compiled root chunk."""

    compiled_suffix: str = COMPILED_SUFFIX
    """Appended to the chunk name to form the compiled filename."""

    python: str = DEFAULT_PYTHON
    """Interpreter used for the i18n scripts."""

    node: str = "node"
    tsc: str = "tsc"

    closure_compiler: str = "npx google-closure-compiler"
    """Closure Compiler command line; split with shell rules."""

    verbose: bool = False
    debug: bool = False
    strict: bool = False

    model_config = SettingsConfigDict(
        env_prefix="CHUNKBUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def tsc_output_posix(self) -> str:
        """POSIX form of ``tsc_output_dir``, as used in chunk paths and module names."""
        return self.tsc_output_dir.as_posix()

    @property
    def closure_command(self) -> list[str]:
        return shlex.split(self.closure_compiler)
