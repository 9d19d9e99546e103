from dataclasses import dataclass, field
from pathlib import Path

from chunkbuild.chunks import load_chunk_config
from chunkbuild.models.chunk import ChunkConfig
from chunkbuild.models.config import BuildSettings
from chunkbuild.process import ProcessRunner, SubprocessRunner
from chunkbuild.wrapper import WrapperOptions

__all__ = ["BuildContext", "get_build_context"]


@dataclass
class BuildContext:
    """Everything a build task needs: settings, chunk graph and process runner."""

    settings: BuildSettings
    chunks: ChunkConfig
    runner: ProcessRunner = field(default_factory=SubprocessRunner)
    project_root: Path = field(default_factory=Path.cwd)

    def path(self, relative: Path | str) -> Path:
        """Resolve a project-relative path against the project root."""
        return self.project_root / relative

    @property
    def wrapper_options(self) -> WrapperOptions:
        return WrapperOptions(
            compiled_root=self.settings.tsc_output_posix,
            compiled_suffix=self.settings.compiled_suffix,
        )


def get_build_context(
    settings: BuildSettings | None = None, runner: ProcessRunner | None = None
) -> BuildContext:
    """Create a BuildContext from settings (environment by default)."""
    settings = settings or BuildSettings()
    chunks = load_chunk_config(settings.chunks_file)
    return BuildContext(settings=settings, chunks=chunks, runner=runner or SubprocessRunner())
