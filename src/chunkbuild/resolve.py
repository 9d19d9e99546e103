"""Resolve the chunk configuration against the compiled-source tree."""

import logging
import posixpath
from pathlib import Path

from chunkbuild.exceptions import ConfigurationError
from chunkbuild.models.chunk import ChunkConfig, ChunkSpec
from chunkbuild.models.manifest import ChunkDescriptor, Manifest
from chunkbuild.wrapper import WrapperOptions, synthesize_wrapper

__all__ = ["expand_globs", "resolve_chunks"]

logger = logging.getLogger(__name__)


def expand_globs(chunk: ChunkSpec, compiled_root: Path, base_dir: Path | None = None) -> list[str]:
    """
    Expand a chunk's globs against ``compiled_root``.

    Matches of each glob are sorted; globs are expanded in declaration order.
    A file matched by more than one glob is kept at its first position only.

    Args:
        chunk: The chunk whose globs are expanded.
        compiled_root: Compiled-source root; prefixes every returned path.
        base_dir: Directory ``compiled_root`` is relative to. Defaults to the
            working directory.

    Returns:
        POSIX paths of the form ``<compiled_root>/<relative path>``.
    """
    search_root = base_dir / compiled_root if base_dir is not None else compiled_root
    root_posix = compiled_root.as_posix()
    files: list[str] = []
    seen: set[str] = set()
    duplicates: list[str] = []

    for pattern in chunk.files:
        for match in sorted(search_root.glob(pattern)):
            if not match.is_file():
                continue
            path = posixpath.normpath(
                posixpath.join(root_posix, match.relative_to(search_root).as_posix())
            )
            if path in seen:
                duplicates.append(path)
                continue
            seen.add(path)
            files.append(path)

    if duplicates:
        logger.warning(
            "Chunk '%s' matched %d file(s) more than once; keeping first occurrence: %s",
            chunk.name,
            len(duplicates),
            ", ".join(duplicates),
        )
    return files


def resolve_chunks(
    config: ChunkConfig,
    compiled_root: Path,
    options: WrapperOptions | None = None,
    *,
    base_dir: Path | None = None,
) -> Manifest:
    """
    Build the manifest for ``config`` from the files currently under ``compiled_root``.

    Args:
        config: Ordered chunk configuration.
        compiled_root: Directory tsc wrote its JavaScript output to.
        options: Wrapper naming options; defaults derive from ``compiled_root``.
        base_dir: Directory ``compiled_root`` is relative to.

    Raises:
        ConfigurationError: If a chunk's entry file is not among its resolved files.
    """
    if options is None:
        options = WrapperOptions(compiled_root=compiled_root.as_posix())

    descriptors: list[ChunkDescriptor] = []
    all_files: list[str] = []
    wrappers: dict[str, str] = {}

    for chunk in config:
        files = expand_globs(chunk, compiled_root, base_dir)
        entry_path = posixpath.normpath(posixpath.join(compiled_root.as_posix(), chunk.entry))
        if entry_path not in files:
            raise ConfigurationError(
                f"Entry '{chunk.entry}' of chunk '{chunk.name}' is not matched by its file globs",
                details={"files": ", ".join(chunk.files), "compiled_root": compiled_root},
            )

        logger.debug("Chunk '%s': %d file(s)", chunk.name, len(files))
        descriptors.append(
            ChunkDescriptor(name=chunk.name, file_count=len(files), parent=chunk.parent)
        )
        all_files.extend(files)
        wrappers[chunk.name] = synthesize_wrapper(chunk, config.parent_of(chunk), options)

    return Manifest(chunks=tuple(descriptors), js=tuple(all_files), wrappers=wrappers)
