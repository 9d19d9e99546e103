"""Build tasks. Each public function is one step of the build."""

from .clean import clean_build_dir
from .compiled import build_advanced_compilation_test, build_compiled, get_chunk_manifest
from .i18n import build_langfiles, generate_messages
from .pipeline import advanced_compilation_test, build, minify
from .shims import build_shims
from .typescript import build_javascript

__all__ = [
    "advanced_compilation_test",
    "build",
    "build_advanced_compilation_test",
    "build_compiled",
    "build_javascript",
    "build_langfiles",
    "build_shims",
    "clean_build_dir",
    "generate_messages",
    "get_chunk_manifest",
    "minify",
]
