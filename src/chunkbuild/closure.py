"""
Closure Compiler invocation.

Sources are license-stripped in memory and streamed to the compiler with
``--json_streams=BOTH``; compiled files and source maps come back on stdout.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

from chunkbuild.constants import JSCOMP_ERROR, JSCOMP_OFF, JSCOMP_WARNING
from chunkbuild.exceptions import ExternalToolError
from chunkbuild.license import strip_license_file
from chunkbuild.models.config import BuildSettings
from chunkbuild.process import ProcessRunner, run_checked

__all__ = [
    "CompiledFile",
    "compile_sources",
    "compiler_flags",
    "default_options",
    "write_compiled",
]

logger = logging.getLogger(__name__)

CompilerOptions = dict[str, Any]


@dataclass(frozen=True)
class CompiledFile:
    """One output file of a compiler run."""

    path: str
    src: str
    source_map: str | None = None

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name


def default_options(settings: BuildSettings) -> CompilerOptions:
    """Default compiler options; callers' options override these key by key."""
    options: CompilerOptions = {
        "compilation_level": "SIMPLE_OPTIMIZATIONS",
        "warning_level": "VERBOSE" if settings.verbose else "DEFAULT",
        "language_in": "ECMASCRIPT_2020",
        "language_out": "ECMASCRIPT_2015",
        "jscomp_off": list(JSCOMP_OFF),
        "rewrite_polyfills": True,
        "hide_warnings_for": ["node_modules"],
        "define": ["COMPILED=true"],
    }
    if settings.debug or settings.strict:
        options["jscomp_error"] = list(JSCOMP_ERROR)
        options["jscomp_warning"] = list(JSCOMP_WARNING)
        if settings.strict:
            options["jscomp_error"].append("strictCheckTypes")
    return options


def compiler_flags(options: Mapping[str, Any]) -> list[str]:
    """Convert an options mapping to command-line flags; lists repeat the flag."""
    flags: list[str] = []
    for key, value in options.items():
        if value is None or value is False:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is True:
                item = "true"
            flags.append(f"--{key}={item}")
    return flags


def compile_sources(
    runner: ProcessRunner,
    command: Sequence[str],
    sources: Sequence[str],
    options: Mapping[str, Any],
    *,
    cwd: Path | None = None,
) -> list[CompiledFile]:
    """
    Compile ``sources`` and return the compiler's output files.

    Args:
        runner: Process runner used to invoke the compiler.
        command: Compiler command line, without flags.
        sources: Project-relative source paths, in compilation order.
        options: Compiler options (see ``default_options``).
        cwd: Project root the source paths are relative to.

    Raises:
        ExternalToolError: If the compiler exits non-zero or its output is unreadable.
    """
    base = cwd or Path.cwd()
    inputs = [
        {"path": source, "src": strip_license_file(base / source)}
        for source in sources
    ]
    flags = [
        *compiler_flags(options),
        "--json_streams=BOTH",
        "--create_source_map=%outname%.map",
    ]
    logger.info("Compiling %d source file(s)", len(inputs))

    result = run_checked(
        runner, [*command, *flags], cwd=cwd, input=json.dumps(inputs), capture=True
    )
    if result.stderr:
        # Compiler warnings, passed through untouched.
        logger.warning("%s", result.stderr.rstrip())

    try:
        outputs = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise ExternalToolError(result.command, result.returncode, result.stdout) from e

    return [
        CompiledFile(path=item["path"], src=item["src"], source_map=item.get("source_map") or None)
        for item in outputs
    ]


def write_compiled(
    compiled: CompiledFile,
    dest_dir: Path,
    *,
    suffix: str = "",
    include_content: bool = True,
    source_root: str | None = None,
) -> Path:
    """
    Write a compiled file (renamed with ``suffix``) and its source map to ``dest_dir``.

    A ``sourceMappingURL`` comment pointing at the map is appended to the file.
    """
    stem = PurePosixPath(compiled.name).stem
    out_name = f"{stem}{suffix}.js"
    dest_dir.mkdir(parents=True, exist_ok=True)
    out_path = dest_dir / out_name

    src = compiled.src
    if compiled.source_map is not None:
        source_map = json.loads(compiled.source_map)
        source_map["file"] = out_name
        if not include_content:
            source_map.pop("sourcesContent", None)
        if source_root is not None:
            source_map["sourceRoot"] = source_root
        (dest_dir / f"{out_name}.map").write_text(json.dumps(source_map), encoding="utf-8")
        src = src.rstrip("\n") + f"\n//# sourceMappingURL={out_name}.map\n"

    out_path.write_text(src, encoding="utf-8")
    logger.debug("Wrote %s", out_path)
    return out_path
