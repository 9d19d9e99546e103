"""chunkbuild - chunked Closure Compiler builds for TypeScript libraries."""

from .models.chunk import ChunkConfig, ChunkSpec
from .models.manifest import ChunkDescriptor, Manifest
from .resolve import resolve_chunks
from .wrapper import WrapperOptions, synthesize_wrapper

__all__ = [
    "ChunkConfig",
    "ChunkDescriptor",
    "ChunkSpec",
    "Manifest",
    "WrapperOptions",
    "__version__",
    "resolve_chunks",
    "synthesize_wrapper",
]

__version__ = "0.1.0"
