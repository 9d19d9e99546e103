"""
Universal Module Definition wrappers for compiled chunks.

Each chunk has at most one dependency, its parent chunk, used only to fetch
the shared namespace object. The wrapper stores the namespace object on the
chunk's own exports so that child chunks can fetch it in turn.
"""

import json
import posixpath
from collections.abc import Mapping
from dataclasses import dataclass

from chunkbuild.constants import COMPILED_SUFFIX, NAMESPACE_PROPERTY, NAMESPACE_VARIABLE
from chunkbuild.models.chunk import ChunkSpec

__all__ = [
    "OUTPUT_PLACEHOLDER",
    "WrapperOptions",
    "WrapperTemplate",
    "build_wrapper_template",
    "module_path",
    "render_wrapper",
    "synthesize_wrapper",
]

# Replaced by Closure Compiler with the chunk's compiled code.
OUTPUT_PLACEHOLDER = "%output%"

PARENT_ARGUMENT = "__parent__"


@dataclass(frozen=True)
class WrapperOptions:
    """Fixed names shared by every wrapper in one build."""

    compiled_root: str
    namespace_variable: str = NAMESPACE_VARIABLE
    namespace_property: str = NAMESPACE_PROPERTY
    compiled_suffix: str = COMPILED_SUFFIX


@dataclass(frozen=True)
class WrapperTemplate:
    """The variable parts of a chunk wrapper, before rendering."""

    amd_deps: str
    cjs_deps: str
    factory_args: str
    namespace_expr: str
    script_statements: tuple[str, ...]
    module_path: str
    namespace_variable: str
    namespace_property: str


def module_path(entry: str, compiled_root: str) -> str:
    """Return the name Closure Compiler gives the module object of ``entry``."""
    entry_path = posixpath.normpath(posixpath.join(compiled_root, entry))
    if entry_path.endswith(".js"):
        entry_path = entry_path[: -len(".js")]
    return "module$" + entry_path.replace("/", "$")


def _script_statements(
    script_export: str, named_exports: Mapping[str, str], deps_expr: str
) -> tuple[str, ...]:
    # The base of script_export (e.g. Blockly.libraryBlocks) may only exist
    # once factory() has run, so the call and the assignment are separate
    # statements. Named exports are read back off the assigned object.
    statements = [f"root.{script_export} = factory({deps_expr});"]
    for location, name in named_exports.items():
        statements.append(f"root.{location} = root.{script_export}.{name};")
    return tuple(statements)


def build_wrapper_template(
    chunk: ChunkSpec, parent: ChunkSpec | None, options: WrapperOptions
) -> WrapperTemplate:
    """Compute the dependency expressions and export statements for ``chunk``."""
    amd_deps = cjs_deps = script_deps = factory_args = ""
    namespace_expr = "{}"

    if parent is not None:
        parent_filename = json.dumps(f"./{parent.name}{options.compiled_suffix}.js")
        amd_deps = parent_filename
        cjs_deps = f"require({parent_filename})"
        script_deps = f"root.{parent.script_export}"
        factory_args = PARENT_ARGUMENT
        namespace_expr = f"{PARENT_ARGUMENT}.{options.namespace_property}"

    return WrapperTemplate(
        amd_deps=amd_deps,
        cjs_deps=cjs_deps,
        factory_args=factory_args,
        namespace_expr=namespace_expr,
        script_statements=_script_statements(
            chunk.script_export, chunk.script_named_exports, script_deps
        ),
        module_path=module_path(chunk.entry, options.compiled_root),
        namespace_variable=options.namespace_variable,
        namespace_property=options.namespace_property,
    )


def render_wrapper(template: WrapperTemplate) -> str:
    """Render a wrapper template to the text passed as ``--chunk_wrapper``."""
    script_exports = "\n    ".join(template.script_statements)
    ns = template.namespace_variable
    prop = template.namespace_property
    return f"""// Do not edit this file; automatically generated.

/* eslint-disable */
;(function(root, factory) {{
  if (typeof define === 'function' && define.amd) {{ // AMD
    define([{template.amd_deps}], factory);
  }} else if (typeof exports === 'object') {{ // Node.js
    module.exports = factory({template.cjs_deps});
  }} else {{ // Script
    {script_exports}
  }}
}}(this, function({template.factory_args}) {{
var {ns}={template.namespace_expr};
{OUTPUT_PLACEHOLDER}
{template.module_path}.{prop}={ns};
return {template.module_path};
}}));
"""


def synthesize_wrapper(
    chunk: ChunkSpec, parent: ChunkSpec | None, options: WrapperOptions
) -> str:
    """Return the UMD wrapper text for ``chunk``."""
    return render_wrapper(build_wrapper_template(chunk, parent, options))
