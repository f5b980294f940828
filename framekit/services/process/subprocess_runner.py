# framekit/services/process/subprocess_runner.py
from __future__ import annotations

import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from framekit.common.logging import get_logger
from framekit.domain.errors import ToolExecutionError, ToolNotFoundError
from framekit.domain.ports.process_runner import CommandResult, ProcessRunnerPort

logger = get_logger(__name__)


class SubprocessRunner(ProcessRunnerPort):
    """
    ProcessRunnerPort on top of subprocess.run with an argv list (no shell).
    Safe to share between threads.
    """

    def __init__(self, default_timeout: Optional[float] = None) -> None:
        self.default_timeout = default_timeout

    @staticmethod
    def resolve(executable: str) -> str:
        """Absolute path for `executable`, for nicer errors. Raises ToolNotFoundError."""
        if Path(executable).is_absolute() or "/" in executable:
            if Path(executable).is_file():
                return executable
            raise ToolNotFoundError(f"{executable} does not exist", argv=(executable,))
        resolved = shutil.which(executable)
        if not resolved:
            raise ToolNotFoundError(f"{executable} not found on PATH", argv=(executable,))
        return resolved

    def run(
        self,
        executable: str,
        args: Sequence[str],
        *,
        timeout: Optional[float] = None,
        check: bool = True,
    ) -> CommandResult:
        argv = [self.resolve(executable), *map(str, args)]
        timeout = timeout if timeout is not None else self.default_timeout
        logger.debug("exec: %s", " ".join(shlex.quote(p) for p in argv))

        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
                check=False,  # we handle rc manually to attach stderr
            )
        except subprocess.TimeoutExpired as e:
            raise ToolExecutionError(f"{executable} timed out after {timeout}s", argv=argv, stderr=str(e)) from e
        except FileNotFoundError as e:
            raise ToolNotFoundError(f"failed to start {executable}", argv=argv, stderr=str(e)) from e
        except OSError as e:
            raise ToolNotFoundError(f"failed to execute {executable} (OS error)", argv=argv, stderr=str(e)) from e

        result = CommandResult(argv=argv, returncode=proc.returncode, stdout=proc.stdout or "", stderr=proc.stderr or "")
        if check and proc.returncode != 0:
            raise ToolExecutionError(
                f"{executable} returned non-zero exit code", argv=argv, stderr=result.stderr, rc=proc.returncode
            )
        return result
