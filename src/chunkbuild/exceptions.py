"""Exception hierarchy for build failures."""

from collections.abc import Sequence
from typing import Any

__all__ = ["BuildError", "ConfigurationError", "ExternalToolError"]


class BuildError(Exception):
    """Base exception for all build errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}

        parts = [message]
        if details:
            parts.append("Details:")
            parts.extend(f"  {k}: {v}" for k, v in details.items())

        super().__init__("\n".join(parts))


class ConfigurationError(BuildError):
    """The chunk configuration or build settings are unusable."""


class ExternalToolError(BuildError):
    """An external process exited with an unexpected status.

    The tool's own output is kept verbatim in ``output``.
    """

    def __init__(self, command: Sequence[str], returncode: int, output: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"Command failed with exit status {returncode}: {' '.join(self.command)}"
        )
