"""Default configuration values for vodsplit."""
from pathlib import Path

from .types import PathConfig, ProcessConfig, SplitConfig

# Files read by Settings.from_environment, later files win
DEFAULT_CONFIG_FILES = (
    Path("settings.toml"),
    Path("~/.config/vodsplit/config.toml"),
)

ENV_PREFIX = "VODSPLIT_"


def get_default_path_config() -> PathConfig:
    """Get default path configuration."""
    return PathConfig(download_dir=Path("~/vodsplit/downloads"))


def get_default_split_config() -> SplitConfig:
    """Get default split configuration."""
    return SplitConfig(
        max_items_to_process=10,
        soft_cap_minutes=50,
        hard_cap_minutes=60
    )


def get_default_process_config() -> ProcessConfig:
    """Get default process configuration."""
    return ProcessConfig(
        ffmpeg_path="ffmpeg",
        encoder_timeout=None,
        log_level="INFO"
    )
