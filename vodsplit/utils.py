"""Utility functions for the vodsplit pipeline"""

import logging
import shutil
import subprocess
from datetime import datetime, timedelta
from typing import List, Optional

logger = logging.getLogger(__name__)


def run_cmd(cmd: List[str], capture_output: bool = True,
            check: bool = True, timeout: Optional[float] = None) -> subprocess.CompletedProcess:
    """Run a command and handle errors"""
    logger.debug("Running command: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture_output,
            check=check,
            text=True,
            timeout=timeout
        )
        if result.stdout:
            logger.debug("Command stdout: %s", result.stdout)
        if result.stderr:
            logger.debug("Command stderr: %s", result.stderr)
        return result
    except subprocess.CalledProcessError as e:
        logger.error("Command failed: %s", " ".join(cmd))
        logger.error("Error output: %s", e.stderr)
        raise


def duration_to_string(duration: timedelta) -> str:
    """
    Format a duration as HH:MM:SS for ffmpeg arguments.

    Sub-second parts are dropped and hours are not wrapped at 24.

    Example:
        >>> duration_to_string(timedelta(seconds=20))
        '00:00:20'
    """
    seconds = int(duration.total_seconds())
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    seconds = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_elapsed(seconds: float) -> str:
    """Format elapsed wall time for log lines"""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60
    if hours:
        return f"{hours}h {minutes}m {secs:.1f}s"
    if minutes:
        return f"{minutes}m {secs:.1f}s"
    return f"{secs:.2f}s"


def get_timestamp() -> str:
    """Get current timestamp in YYYYMMDD_HHMMSS format"""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def check_dependencies(ffmpeg_path: str = "ffmpeg") -> bool:
    """Check that the ffmpeg binary can be found"""
    if shutil.which(ffmpeg_path) is None:
        logger.error("Required dependency not found: %s", ffmpeg_path)
        return False
    return True
