import json
import logging
from pathlib import Path

from chunkbuild.closure import compile_sources, default_options, write_compiled
from chunkbuild.context import BuildContext
from chunkbuild.exceptions import ConfigurationError
from chunkbuild.models.manifest import Manifest
from chunkbuild.resolve import resolve_chunks
from chunkbuild.wrapper import module_path

__all__ = [
    "ADVANCED_OUTPUT",
    "build_advanced_compilation_test",
    "build_compiled",
    "get_chunk_manifest",
]

logger = logging.getLogger(__name__)

COMPILE_TEST_DIR = Path("tests/compile")
ADVANCED_OUTPUT = "main_compressed.js"


def get_chunk_manifest(ctx: BuildContext) -> Manifest:
    """Resolve the chunk configuration against the current tsc output."""
    return resolve_chunks(
        ctx.chunks,
        ctx.settings.tsc_output_dir,
        ctx.wrapper_options,
        base_dir=ctx.project_root,
    )


def _package_version(ctx: BuildContext) -> str:
    package_json = ctx.path(ctx.settings.package_json)
    data = json.loads(package_json.read_text(encoding="utf-8"))
    try:
        return str(data["version"])
    except KeyError as e:
        raise ConfigurationError(f"No version in {package_json}") from e


def build_compiled(ctx: BuildContext) -> Manifest:
    """
    Compile the chunks into <release_dir>/<chunk><suffix>.js plus source maps.

    Prerequisite: build_javascript.

    Returns:
        The manifest the compiler was given.
    """
    manifest = get_chunk_manifest(ctx)
    options = default_options(ctx.settings)
    chunk_options = manifest.chunk_options()
    root_module = module_path(ctx.chunks.root_chunk.entry, ctx.settings.tsc_output_posix)
    options.update(
        {
            # Closure renames the VERSION constant to <name>$$<module>.
            "define": f"VERSION$${root_module}='{_package_version(ctx)}'",
            "chunk": chunk_options["chunk"],
            "chunk_wrapper": chunk_options["chunk_wrapper"],
            "rename_prefix_namespace": ctx.wrapper_options.namespace_variable,
        }
    )

    compiled = compile_sources(
        ctx.runner,
        ctx.settings.closure_command,
        manifest.js,
        options,
        cwd=ctx.project_root,
    )
    release_dir = ctx.path(ctx.settings.release_dir)
    for output in compiled:
        write_compiled(output, release_dir, suffix=ctx.settings.compiled_suffix)
    logger.info("Compiled %d chunk(s) into %s", len(compiled), release_dir)
    return manifest


def build_advanced_compilation_test(ctx: BuildContext) -> Path:
    """
    Compile the library and the compile test together with ADVANCED_OPTIMIZATIONS.

    Prerequisite: build_javascript.
    """
    test_dir = ctx.path(COMPILE_TEST_DIR)
    # A stale output must not be picked up by a later browser test if this
    # compile fails.
    try:
        (test_dir / ADVANCED_OUTPUT).unlink()
    except FileNotFoundError:
        pass

    compiled_root = ctx.path(ctx.settings.tsc_output_dir)
    tsc_posix = ctx.settings.tsc_output_posix
    sources = [
        f"{tsc_posix}/{path.relative_to(compiled_root).as_posix()}"
        for path in sorted(compiled_root.glob("**/*.js"))
        if path.is_file()
    ]
    sources += [
        (COMPILE_TEST_DIR / "main.js").as_posix(),
        (COMPILE_TEST_DIR / "test_blocks.js").as_posix(),
    ]

    options = default_options(ctx.settings)
    options.update(
        {
            "dependency_mode": "PRUNE",
            "compilation_level": "ADVANCED_OPTIMIZATIONS",
            "entry_point": f"./{(COMPILE_TEST_DIR / 'main.js').as_posix()}",
            "js_output_file": ADVANCED_OUTPUT,
        }
    )
    compiled = compile_sources(
        ctx.runner, ctx.settings.closure_command, sources, options, cwd=ctx.project_root
    )
    out_path = test_dir / ADVANCED_OUTPUT
    for output in compiled:
        out_path = write_compiled(output, test_dir, include_content=False, source_root="../../")
    return out_path
