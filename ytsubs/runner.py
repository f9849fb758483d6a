"""
External tool invocation.

Single responsibility: argument list → finished process with captured output.
Commands are never composed through a shell, and no timeout is imposed.
"""

import subprocess
from dataclasses import dataclass
from typing import Callable, Sequence

import structlog

logger = structlog.get_logger(__name__)

# Exit status reported when the executable cannot be launched at all
LAUNCH_FAILURE_RETURNCODE = 127


@dataclass(frozen=True)
class RunResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def error_output(self, limit: int = 500) -> str:
        """Last part of stderr (or stdout when stderr is empty), for messages"""
        output = (self.stderr or self.stdout or "").strip()
        if len(output) > limit:
            output = "..." + output[-limit:]
        return output


ToolRunner = Callable[[Sequence[str]], RunResult]


def run_tool(args: Sequence[str]) -> RunResult:
    """Run an executable with an explicit argument list and capture its output"""
    argv = [str(arg) for arg in args]
    logger.debug("Running external tool", argv=argv)

    try:
        cp = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        logger.warning("Could not launch external tool", executable=argv[0], error=str(e))
        return RunResult(returncode=LAUNCH_FAILURE_RETURNCODE, stdout="", stderr=str(e))

    logger.debug("External tool finished", executable=argv[0], returncode=cp.returncode)
    return RunResult(
        returncode=int(cp.returncode),
        stdout=cp.stdout or "",
        stderr=cp.stderr or "",
    )
