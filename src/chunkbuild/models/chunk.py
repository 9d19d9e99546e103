"""Pydantic models for the declarative chunk configuration."""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, RootModel, field_validator, model_validator
from pydantic.alias_generators import to_camel

from chunkbuild.exceptions import ConfigurationError

__all__ = ["ChunkConfig", "ChunkSpec"]


class ChunkSpec(BaseModel):
    """
    One independently loadable bundle.

    Field names may also be given in camelCase (``scriptExport``) when the
    configuration is loaded from JSON.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str
    """Label used for Closure Compiler and the prefix of the output filename."""

    files: tuple[str, ...]
    """Globs, relative to the compiled-source root, selecting the chunk's files."""

    entry: str
    """Entrypoint file whose exports form the chunk's public surface."""

    script_export: str
    """Global location of the exports object when loaded as a plain script."""

    script_named_exports: dict[str, str] = {}
    """``{location: exportName}`` pairs additionally saved when loaded as a script."""

    parent: str | None = None
    """Name of the parent chunk. Filled in by ChunkConfig; None for the root."""

    @field_validator("files", mode="before")
    @classmethod
    def _single_glob(cls, value: object) -> object:
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("name", "entry", "script_export")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class ChunkConfig(RootModel[tuple[ChunkSpec, ...]]):
    """
    Ordered chunk list. Later chunks may depend on earlier ones, never the reverse.

    The first chunk is the root; every other chunk's parent is the root, so the
    parent graph is a star of depth one.
    """

    @model_validator(mode="after")
    def _link_parents(self) -> "ChunkConfig":
        chunks = self.root
        if not chunks:
            raise ConfigurationError("Chunk configuration is empty")

        seen: set[str] = set()
        for chunk in chunks:
            if chunk.name in seen:
                raise ConfigurationError(f"Duplicate chunk name '{chunk.name}'")
            seen.add(chunk.name)

        first, *rest = chunks
        if first.parent is not None:
            raise ConfigurationError(
                f"Root chunk '{first.name}' cannot have a parent",
                details={"parent": first.parent},
            )

        linked = [first]
        for chunk in rest:
            if chunk.parent not in (None, first.name):
                raise ConfigurationError(
                    f"Chunk '{chunk.name}' must depend on the root chunk '{first.name}'",
                    details={"parent": chunk.parent},
                )
            linked.append(chunk.model_copy(update={"parent": first.name}))

        self.root = tuple(linked)
        return self

    def __iter__(self) -> Iterator[ChunkSpec]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    @property
    def root_chunk(self) -> ChunkSpec:
        return self.root[0]

    def get(self, name: str) -> ChunkSpec:
        for chunk in self.root:
            if chunk.name == name:
                return chunk
        raise KeyError(name)

    def parent_of(self, chunk: ChunkSpec) -> ChunkSpec | None:
        """Return the parent chunk spec, or None for the root."""
        if chunk.parent is None:
            return None
        return self.get(chunk.parent)
