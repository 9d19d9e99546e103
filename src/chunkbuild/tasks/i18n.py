"""Localisation tasks. Both shell out to the scripts under scripts/i18n."""

import logging
from pathlib import Path

from chunkbuild.constants import LANGFILE_EXCLUDED_SUFFIXES
from chunkbuild.context import BuildContext
from chunkbuild.process import run_checked

__all__ = ["MESSAGES_REMINDER", "build_langfiles", "generate_messages", "locale_files"]

logger = logging.getLogger(__name__)

MSG_DIR = Path("msg")
MSG_JSON_DIR = MSG_DIR / "json"

MESSAGES_REMINDER = """\
Regenerated several files in msg/json/.  Now run

    git diff msg/json/*.json

and check that operation has not overwritten any modifications made to
hints, etc. by the TranslateWiki volunteers.  If it has, backport
their changes to msg/messages.js and re-run 'chunkbuild messages'.

Once you are satisfied that any new hints have been backported you may
go ahead and commit the changes, but note that the messages script
will have removed the translator credits - be careful not to commit
this removal!
"""


def generate_messages(ctx: BuildContext) -> None:
    """Regenerate msg/json/en.json and qqq.json from msg/messages.js."""
    run_checked(
        ctx.runner,
        [
            ctx.settings.python,
            "scripts/i18n/js_to_json.py",
            "--input_file",
            str(MSG_DIR / "messages.js"),
            "--output_dir",
            str(MSG_JSON_DIR),
            "--quiet",
        ],
        cwd=ctx.project_root,
    )


def locale_files(ctx: BuildContext) -> list[Path]:
    """Per-locale JSON files, skipping the key, synonym, qqq and constant files."""
    json_dir = ctx.path(MSG_JSON_DIR)
    return [
        MSG_JSON_DIR / path.name
        for path in sorted(json_dir.iterdir())
        if path.name.endswith("json") and not path.name.endswith(LANGFILE_EXCLUDED_SUFFIXES)
    ]


def build_langfiles(ctx: BuildContext) -> None:
    """Build <build_dir>/msg/*.js from msg/json/*.json."""
    output_dir = ctx.settings.build_dir / "msg"
    ctx.path(output_dir).mkdir(parents=True, exist_ok=True)

    files = locale_files(ctx)
    logger.info("Building %d language file(s)", len(files))
    run_checked(
        ctx.runner,
        [
            ctx.settings.python,
            "scripts/i18n/create_messages.py",
            "--source_lang_file",
            str(MSG_JSON_DIR / "en.json"),
            "--source_synonym_file",
            str(MSG_JSON_DIR / "synonyms.json"),
            "--source_constants_file",
            str(MSG_JSON_DIR / "constants.json"),
            "--key_file",
            str(MSG_JSON_DIR / "keys.json"),
            "--output_dir",
            str(output_dir),
            "--quiet",
            *(str(path) for path in files),
        ],
        cwd=ctx.project_root,
    )
