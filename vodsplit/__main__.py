"""
Command-line interface for the vodsplit splitter

Runs one batch end to end: load the configuration, open the video store and
split every eligible video. Per-video failures are logged and recorded in the
store; only startup failures make the process exit non-zero.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import Settings
from .encoder import FFmpegEncoder
from .exceptions import DependencyError, SplitterError
from .formatting import print_batch_summary, print_error, print_header
from .logging import configure_logging
from .pipeline import SplitterClient
from .store import SQLiteVideoStore
from .utils import check_dependencies


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Split downloaded videos into upload-sized parts"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (default from config)"
    )
    parser.add_argument(
        "--config",
        dest="config_files",
        type=Path,
        action="append",
        default=None,
        help="Read settings from this TOML file instead of the default locations (repeatable)"
    )
    return parser.parse_args(argv)


def run(settings: Settings) -> int:
    """Open the store and split one batch of videos"""
    log = logging.getLogger("vodsplit")

    if not check_dependencies(settings.process.ffmpeg_path):
        raise DependencyError(f"{settings.process.ffmpeg_path} not found", module="main")

    encoder = FFmpegEncoder(
        ffmpeg_path=settings.process.ffmpeg_path,
        timeout=settings.process.encoder_timeout,
        logger=logging.getLogger("vodsplit.encoder")
    )
    log.debug("Encoder: %s", encoder.get_version_info())

    with SQLiteVideoStore(settings.paths.db_path) as store:
        client = SplitterClient(settings, store, encoder)
        summary = client.split_videos()

    print_batch_summary(summary)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)

    try:
        settings = Settings.from_environment(
            config_files=args.config_files,
            log_level=args.log_level
        )
        log_file = configure_logging(settings.process.log_level, settings.paths.log_dir)
    except SplitterError as e:
        configure_logging("INFO")
        logging.getLogger("vodsplit").error("Could not load config: %s", e)
        print_error(str(e))
        return 1

    log = logging.getLogger("vodsplit")
    print_header(f"vodsplit v{__version__}")
    log.info("Log file: %s", log_file)

    try:
        return run(settings)
    except KeyboardInterrupt:
        log.warning("Splitting interrupted by user")
        return 130
    except SplitterError as e:
        log.error("Splitting aborted: %s", e)
        print_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
