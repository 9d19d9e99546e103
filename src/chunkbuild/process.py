"""External process collaborators.

Every tool the build shells out to goes through a ``ProcessRunner`` so the
task sequencing can be exercised with a fake runner.
"""

import asyncio
import logging
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from chunkbuild.exceptions import ExternalToolError

__all__ = [
    "ProcessResult",
    "ProcessRunner",
    "SubprocessRunner",
    "run_checked",
    "run_checked_async",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and captured output of a finished process."""

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    def check(self) -> "ProcessResult":
        """Raise ExternalToolError unless the process exited successfully."""
        if self.returncode != 0:
            output = "\n".join(part for part in (self.stderr, self.stdout) if part)
            raise ExternalToolError(self.command, self.returncode, output)
        return self


class ProcessRunner(Protocol):
    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        input: str | None = None,
        capture: bool = False,
    ) -> ProcessResult: ...

    async def run_async(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> ProcessResult: ...


class SubprocessRunner:
    """Runs commands as real child processes.

    Uncaptured output is inherited from the parent so tool diagnostics reach
    the operator unchanged.
    """

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        input: str | None = None,
        capture: bool = False,
    ) -> ProcessResult:
        logger.info("Executing: %s", shlex.join(command))
        completed = subprocess.run(  # noqa: S603
            list(command),
            cwd=cwd,
            input=input,
            capture_output=capture,
            text=True,
            encoding="utf-8",
            check=False,
        )
        return ProcessResult(
            command=tuple(command),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    async def run_async(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
    ) -> ProcessResult:
        logger.info("Executing: %s", shlex.join(command))
        pipe = asyncio.subprocess.PIPE if capture else None
        proc = await asyncio.create_subprocess_exec(
            *command, cwd=cwd, stdout=pipe, stderr=pipe
        )
        stdout, stderr = await proc.communicate()
        return ProcessResult(
            command=tuple(command),
            returncode=proc.returncode if proc.returncode is not None else -1,
            stdout=stdout.decode("utf-8") if stdout else "",
            stderr=stderr.decode("utf-8") if stderr else "",
        )


def run_checked(
    runner: ProcessRunner,
    command: Sequence[str],
    *,
    cwd: Path | None = None,
    input: str | None = None,
    capture: bool = False,
) -> ProcessResult:
    """Run ``command`` and raise ExternalToolError on an unexpected exit status."""
    return runner.run(command, cwd=cwd, input=input, capture=capture).check()


async def run_checked_async(
    runner: ProcessRunner,
    command: Sequence[str],
    *,
    cwd: Path | None = None,
    capture: bool = False,
) -> ProcessResult:
    result = await runner.run_async(command, cwd=cwd, capture=capture)
    return result.check()
