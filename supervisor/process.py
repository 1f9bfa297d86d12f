"""
Supervisor — child process launch and exit-status mirroring.

Exactly one child per launch, no restart loop. The caller gets the child's
exit status back and is expected to exit with it.
"""

from __future__ import annotations

import logging
import pathlib
import subprocess
from typing import Dict, Optional

from snaplaunch.errors import SpawnError

log = logging.getLogger(__name__)

# Child ended without an exit code.
FAILURE_STATUS = 1


def exit_status(returncode: Optional[int]) -> int:
    """Map a Popen return code to a shell-style exit status (signal N -> 128 + N)."""
    if returncode is None:
        return FAILURE_STATUS
    if returncode < 0:
        return 128 + (-returncode)
    return returncode


class ProcessSupervisor:
    def __init__(self, executable: str = "node"):
        self.executable = executable

    def launch(self, entry_point: pathlib.Path, working_dir: pathlib.Path, env: Dict[str, str]) -> int:
        """Spawn the entry point with inherited stdio and wait for it to exit."""
        cmd = [self.executable, str(entry_point)]
        log.info("Spawning %s", " ".join(cmd))
        try:
            child = subprocess.Popen(cmd, cwd=str(working_dir), env=env)
        except FileNotFoundError as exc:
            raise SpawnError(f"Executable not found: {self.executable}") from exc
        except PermissionError as exc:
            raise SpawnError(f"Permission denied launching {self.executable}: {exc}") from exc
        except OSError as exc:
            raise SpawnError(f"Spawn failed: {exc}") from exc

        status = exit_status(self._wait(child))
        log.info("Child exited with code %d", status)
        return status

    @staticmethod
    def _wait(child: subprocess.Popen) -> Optional[int]:
        while True:
            try:
                return child.wait()
            except KeyboardInterrupt:
                # The child shares our process group and got the same signal.
                log.info("Interrupt received, waiting for child pid=%s to exit", child.pid)
