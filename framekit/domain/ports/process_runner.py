from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence


@dataclass(frozen=True)
class CommandResult:
    argv: Sequence[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        """stdout and stderr together, like `cmd 2>&1`."""
        if self.stdout and self.stderr:
            return f"{self.stdout}\n{self.stderr}"
        return self.stdout or self.stderr


class ProcessRunnerPort(Protocol):
    def run(
        self,
        executable: str,
        args: Sequence[str],
        *,
        timeout: Optional[float] = None,
        check: bool = True,
    ) -> CommandResult:
        """
        Run `executable` with discrete argv tokens (never a shell string).
        Raises ToolNotFoundError when it cannot be started, and
        ToolExecutionError on non-zero exit (if check) or timeout.
        """
        ...
