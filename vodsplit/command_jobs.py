"""
command_jobs.py

Defines a base class for command jobs and the specialized implementations
used by the splitter (segmentation and concatenation).
"""

import logging
import subprocess
from typing import List, Optional

from .utils import run_cmd
from .exceptions import EncoderCommandError

logger = logging.getLogger(__name__)


class CommandJob:
    """
    Base class representing a command job.

    Attributes:
        cmd (List[str]): The command to run
        timeout (Optional[float]): Seconds before the command is killed, None waits forever
    """
    module = "command_jobs"

    def __init__(self, cmd: List[str], timeout: Optional[float] = None):
        self.cmd = cmd
        self.timeout = timeout

    def execute(self) -> subprocess.CompletedProcess:
        """
        Execute the stored command.

        Raises:
            EncoderCommandError: If the command cannot be started, times out
                or exits with a non-zero status
        """
        logger.debug("Executing command: %s", " ".join(self.cmd))
        try:
            return run_cmd(self.cmd, timeout=self.timeout)
        except subprocess.CalledProcessError as e:
            raise EncoderCommandError(
                f"Command failed with exit code {e.returncode}",
                module=self.module,
                exit_code=e.returncode,
                output=e.stderr or ""
            ) from e
        except subprocess.TimeoutExpired as e:
            raise EncoderCommandError(
                f"Command timed out after {self.timeout}s",
                module=self.module
            ) from e
        except OSError as e:
            raise EncoderCommandError(
                f"Could not start {self.cmd[0]}: {e}",
                module=self.module
            ) from e


class SplitJob(CommandJob):
    """Job for splitting a video into segments."""
    module = "split"


class ConcatJob(CommandJob):
    """Job for joining segments listed in a concat file."""
    module = "concat"
