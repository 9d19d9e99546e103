"""Built-in chunk configuration and loading of chunk configuration files."""

from pathlib import Path

from pydantic import ValidationError

from chunkbuild.exceptions import ConfigurationError
from chunkbuild.models.chunk import ChunkConfig, ChunkSpec

__all__ = ["DEFAULT_CHUNKS", "load_chunk_config"]


def _generator(language: str, named_export: str, location: str) -> ChunkSpec:
    return ChunkSpec(
        name=language,
        files=(f"generators/{language}.js", f"generators/{language}/**/*.js"),
        entry=f"generators/{language}.js",
        script_export=language,
        script_named_exports={location: named_export},
    )


# Order matters: later chunks may depend on earlier ones. The first chunk is
# the root and every other chunk's parent.
DEFAULT_CHUNKS = ChunkConfig(
    (
        ChunkSpec(
            name="blockly",
            files=("core/**/*.js",),
            entry="core/blockly.js",
            script_export="Blockly",
        ),
        ChunkSpec(
            name="blocks",
            files=("blocks/**/*.js",),
            entry="blocks/blocks.js",
            script_export="Blockly.libraryBlocks",
        ),
        _generator("javascript", "javascriptGenerator", "Blockly.JavaScript"),
        _generator("python", "pythonGenerator", "Blockly.Python"),
        _generator("php", "phpGenerator", "Blockly.PHP"),
        _generator("lua", "luaGenerator", "Blockly.Lua"),
        _generator("dart", "dartGenerator", "Blockly.Dart"),
    )
)


def load_chunk_config(path: Path | None) -> ChunkConfig:
    """
    Load a JSON chunk configuration, or return the built-in one.

    The file holds a list of chunk objects; keys may be snake_case or camelCase.

    Raises:
        ConfigurationError: If the file is not a valid chunk configuration.
    """
    if path is None:
        return DEFAULT_CHUNKS
    try:
        return ChunkConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid chunk configuration in {path}:\n{e}") from e
