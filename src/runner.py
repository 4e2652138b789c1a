import locale
import logging
import os
import shlex
import shutil
import subprocess
from typing import Iterable, Optional

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _format_cmd(cmd: list[str]) -> str:
    return shlex.join(cmd)


class CommandError(Exception):
    """Base class for failures while running an external command."""

    def __init__(self, cmd: list[str], message: str, stderr: str = ""):
        self.command = _format_cmd(cmd)
        self.message = message
        self.stderr = stderr.strip()
        text = f"{self.command}: {message}"
        if self.stderr:
            text += f" ({self.stderr})"
        super().__init__(text)


class ExecutionError(CommandError):
    """The tool is missing, could not be started, or died before producing output."""


class EncodingError(CommandError):
    """The tool produced output that is not valid text."""


class CommandRunner:
    """Runs read-only package manager queries and returns their stdout as text."""

    def __init__(self, timeout: Optional[float] = DEFAULT_TIMEOUT, encoding: Optional[str] = None):
        self.timeout = timeout
        self.encoding = encoding or locale.getpreferredencoding(False)

    def run(self, tool: str, args: Iterable[str]) -> str:
        cmd = [tool, *args]
        exe = shutil.which(tool)
        if exe is None:
            raise ExecutionError(cmd, "not-found")

        env = os.environ.copy()
        # Field labels of pacman -Qi are translated otherwise.
        env["LC_ALL"] = "C"
        env.setdefault("NO_COLOR", "1")

        log.debug("running %s", _format_cmd(cmd))
        try:
            proc = subprocess.run(
                [exe, *cmd[1:]],
                capture_output=True,
                check=False,
                env=env,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise ExecutionError(cmd, f"timeout after {self.timeout}s") from exc
        except OSError as exc:
            raise ExecutionError(cmd, f"exception: {exc}") from exc

        stderr = proc.stderr.decode(self.encoding, errors="replace")
        if proc.returncode < 0:
            raise ExecutionError(cmd, f"killed by signal {-proc.returncode}", stderr)
        if proc.returncode != 0:
            # pacman exits 1 when a query matches nothing; the output is still usable.
            log.debug("%s exited with %d: %s", _format_cmd(cmd), proc.returncode, stderr.strip())

        try:
            return proc.stdout.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise EncodingError(cmd, f"output is not valid {self.encoding}: {exc.reason}") from exc
