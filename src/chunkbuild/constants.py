import sys

__all__ = [
    "COMPILED_SUFFIX",
    "DEFAULT_PYTHON",
    "JSCOMP_ERROR",
    "JSCOMP_OFF",
    "JSCOMP_WARNING",
    "LANGFILE_EXCLUDED_SUFFIXES",
    "LICENSE_OWNERS",
    "NAMESPACE_PROPERTY",
    "NAMESPACE_VARIABLE",
    "SHIM_LOADER_IMPORT",
]

# Normalises the interpreter name used for the i18n scripts.
DEFAULT_PYTHON = "python" if sys.platform == "win32" else "python3"

# Output files are named <chunk.name><COMPILED_SUFFIX>.js
COMPILED_SUFFIX = "_compressed"

# Shared "global" namespace object used with --rename_prefix_namespace.
# The root chunk's wrapper creates it; every other chunk picks it up from
# its parent's exports object.
NAMESPACE_VARIABLE = "$"

# Property on each chunk's exports object holding the namespace object.
# Must not collide with any exported name.
NAMESPACE_PROPERTY = "__namespace__"

# Copyright holders whose Apache license headers are stripped before
# compilation.
LICENSE_OWNERS: tuple[str, ...] = ("Google LLC", "Massachusetts Institute of Technology")

# msg/json files that are inputs to create_messages.py rather than locales.
LANGFILE_EXCLUDED_SUFFIXES: tuple[str, ...] = (
    "keys.json",
    "synonyms.json",
    "qqq.json",
    "constants.json",
)

SHIM_LOADER_IMPORT = "../tests/scripts/load.mjs"

# Closure Compiler diagnostic groups treated as errors with --debug/--strict.
JSCOMP_ERROR: tuple[str, ...] = (
    "checkRegExp",
    "checkVars",
    "conformanceViolations",
    "const",
    "constantProperty",
    "duplicateMessage",
    "es5Strict",
    "externsValidation",
    "extraRequire",
    "functionParams",
    "invalidCasts",
    "misplacedTypeAnnotation",
    "missingPolyfill",
    "missingProvide",
    "missingRequire",
    "missingReturn",
    "moduleLoad",
    "msgDescriptions",
    "strictModuleChecks",
    "strictModuleDepCheck",
    "suspiciousCode",
    "typeInvalidation",
    "undefinedVars",
    "underscore",
    "unknownDefines",
    "unusedPrivateMembers",
    "uselessCode",
    "untranspilableFeatures",
)

# Treated as warnings with --debug/--strict.
JSCOMP_WARNING: tuple[str, ...] = (
    "deprecated",
    "deprecatedAnnotations",
)

# Always suppressed. Anything listed here must not appear in JSCOMP_ERROR.
JSCOMP_OFF: tuple[str, ...] = (
    # tsc strips the type annotations these groups rely on.
    "checkTypes",
    "nonStandardJsDocs",  # @internal
    "unusedLocalVariables",  # merged namespaces
    # Relative ES module imports prevent flattening, which @package needs.
    "visibility",
)
