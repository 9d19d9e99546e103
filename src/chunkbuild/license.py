"""
Removal of Apache license headers from compiled sources.

Closure Compiler preserves every @license comment it sees, which leaves dozens
of identical headers in the output. Headers belonging to the known owners are
replaced by the same number of newlines so that line-based source maps stay
valid.
"""

import re
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path

from chunkbuild.constants import LICENSE_OWNERS

__all__ = ["count_license_blocks", "license_pattern", "strip_license_blocks", "strip_license_file"]


@lru_cache(maxsize=8)
def _compile(owners: tuple[str, ...]) -> re.Pattern[str]:
    owner_alternation = "|".join(re.escape(owner) for owner in owners)
    return re.compile(
        r"/\*\*\n"
        r" \* @license\n"
        rf" \* Copyright \d+ (?:{owner_alternation})\n"
        r"(?: \* All rights reserved\.\n)?"
        r" \* SPDX-License-Identifier: Apache-2\.0\n"
        r" \*/"
    )


def license_pattern(owners: Iterable[str] = LICENSE_OWNERS) -> re.Pattern[str]:
    """Return the compiled pattern matching license blocks of ``owners``."""
    return _compile(tuple(owners))


def _blank_lines(match: re.Match[str]) -> str:
    return "\n" * match.group(0).count("\n")


def strip_license_blocks(source: str, owners: Iterable[str] = LICENSE_OWNERS) -> str:
    """Replace each matching license block with as many newlines as it spanned."""
    return license_pattern(owners).sub(_blank_lines, source)


def count_license_blocks(source: str, owners: Iterable[str] = LICENSE_OWNERS) -> int:
    return len(license_pattern(owners).findall(source))


def strip_license_file(path: Path, owners: Iterable[str] = LICENSE_OWNERS) -> str:
    """Read ``path`` and return its contents with license blocks stripped."""
    return strip_license_blocks(path.read_text(encoding="utf-8"), owners)
