"""Pydantic models for the resolved build manifest."""

from pydantic import BaseModel, ConfigDict

__all__ = ["ChunkDescriptor", "Manifest"]


class ChunkDescriptor(BaseModel):
    """A chunk's name, resolved file count and optional parent name."""

    model_config = ConfigDict(frozen=True)

    name: str
    file_count: int
    parent: str | None = None

    def to_option(self) -> str:
        """Render as a Closure Compiler ``--chunk`` value (``name:count[:parent]``)."""
        option = f"{self.name}:{self.file_count}"
        if self.parent is not None:
            option += f":{self.parent}"
        return option


class Manifest(BaseModel):
    """
    Resolved, per-invocation description of the chunk graph.

    ``js`` holds every source file in chunk order with no delimiters; chunk
    boundaries are recovered from the descriptors' file counts.
    """

    model_config = ConfigDict(frozen=True)

    chunks: tuple[ChunkDescriptor, ...]
    """One descriptor per chunk, in declaration order."""

    js: tuple[str, ...]
    """All source files, concatenated in chunk order."""

    wrappers: dict[str, str]
    """Wrapper text keyed by chunk name."""

    def files_for(self, name: str) -> tuple[str, ...]:
        """Return the slice of ``js`` belonging to chunk ``name``."""
        start = 0
        for descriptor in self.chunks:
            end = start + descriptor.file_count
            if descriptor.name == name:
                return self.js[start:end]
            start = end
        raise KeyError(name)

    def chunk_options(self) -> dict[str, list[str]]:
        """
        Chunking options in the form accepted by Closure Compiler.

        Returns:
            ``{"chunk": [...], "js": [...], "chunk_wrapper": [...]}``, compatible
            with the output of closure-calculate-chunks.
        """
        return {
            "chunk": [descriptor.to_option() for descriptor in self.chunks],
            "js": list(self.js),
            "chunk_wrapper": [
                f"{descriptor.name}:{self.wrappers[descriptor.name]}" for descriptor in self.chunks
            ],
        }
