"""Validation functions for vodsplit configuration."""
from ..paths import check_folder
from .types import PathConfig, ProcessConfig, SplitConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_path_config(config: PathConfig) -> None:
    """Validate path configuration.

    The download folder is not checked here: a missing one fails each video
    on its own. The log folder and the folder holding the database are
    created on first use, so they only have to be usable if they exist.
    """
    try:
        check_folder(config.log_dir)
        check_folder(config.db_path.parent)
    except ValueError as e:
        raise ValueError(f"Path validation failed: {e}") from e
    if config.db_path.exists() and not config.db_path.is_file():
        raise ValueError(f"Database path '{config.db_path}' is not a file")


def validate_split_config(config: SplitConfig) -> None:
    """Validate split configuration."""
    for name in ("max_items_to_process", "soft_cap_minutes", "hard_cap_minutes"):
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an integer: {value!r}")
        if value <= 0:
            raise ValueError(f"{name} must be positive: {value}")


def validate_process_config(config: ProcessConfig) -> None:
    """Validate process configuration."""
    if not config.ffmpeg_path:
        raise ValueError("ffmpeg_path must not be empty")
    if config.encoder_timeout is not None and config.encoder_timeout <= 0:
        raise ValueError(f"Encoder timeout must be positive: {config.encoder_timeout}")
    if config.log_level.upper() not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {config.log_level}")
