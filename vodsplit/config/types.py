"""Type definitions for vodsplit configuration."""
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional


# Database and logs live here, never under the download folder
DATA_DIR = Path("~/.local/share/vodsplit")


@dataclass
class PathConfig:
    """Configuration for file and directory paths."""
    download_dir: Path
    db_path: Optional[Path] = None
    log_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        """Convert string paths to Path objects and create computed paths."""
        self.download_dir = Path(self.download_dir).expanduser()

        if self.db_path is None:
            self.db_path = DATA_DIR.expanduser() / "vodsplit.db"
        else:
            self.db_path = Path(self.db_path).expanduser()

        if self.log_dir is None:
            self.log_dir = DATA_DIR.expanduser() / "logs"
        else:
            self.log_dir = Path(self.log_dir).expanduser()


@dataclass
class SplitConfig:
    """Configuration for how videos are split."""
    max_items_to_process: int = 10
    soft_cap_minutes: int = 50  # Target segment length
    hard_cap_minutes: int = 60  # Longest allowed joined tail segment

    @property
    def soft_cap(self) -> timedelta:
        return timedelta(minutes=self.soft_cap_minutes)

    @property
    def hard_cap(self) -> timedelta:
        return timedelta(minutes=self.hard_cap_minutes)


@dataclass
class ProcessConfig:
    """Configuration for external process and logging."""
    ffmpeg_path: str = "ffmpeg"
    encoder_timeout: Optional[float] = None  # Seconds, None waits forever
    log_level: str = "INFO"
