"""
Video Segmentation Module

Responsibilities:
  - Verify the input video and prepare its output folder
  - Split the video into numbered segments at the soft cap
  - Parse and remove the segment list written by the split
  - Join an undersized trailing segment when it fits under the hard cap
  - Remove the source video once its parts are on disk

Status bookkeeping lives in the pipeline; this module only deals with files.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from .config.types import SplitConfig
from .encoder import Encoder
from .exceptions import WriteError
from .merge import join_last_parts_if_needed
from .paths import verify_paths, video_paths
from .playlist import read_playlist
from .utils import duration_to_string, format_elapsed

SEGMENT_PATTERN = "%03d.mp4"
PLAYLIST_NAME = "output.m3u8"


def split_video_files(
    video_id: str,
    download_dir: Path,
    split_config: SplitConfig,
    encoder: Encoder,
    logger: Optional[logging.Logger] = None
) -> int:
    """
    Split one downloaded video into its final parts.

    Args:
        video_id: Identifier of the video, ``{id}.mp4`` is split into ``{id}/``
        download_dir: Folder holding the downloaded videos
        split_config: Soft and hard caps
        encoder: Encoder running the split and the optional join
        logger: Logger to report progress to

    Returns:
        Number of parts left after joining

    Raises:
        SplitterError: On any failure; the source video is only removed
            after the segment list was parsed successfully
    """
    logger = logger or logging.getLogger(__name__)
    input_file, output_dir = video_paths(download_dir, video_id)
    playlist_path = output_dir / PLAYLIST_NAME
    output_pattern = str(output_dir / SEGMENT_PATTERN)

    logger.info("Splitting video with id: %s", video_id)
    verify_paths(download_dir, input_file, output_dir)
    logger.debug("Output path pattern: %s", output_pattern)

    logger.info(
        "Splitting video at path: %s (segment length %s)",
        input_file, duration_to_string(split_config.soft_cap)
    )
    start_time = time.monotonic()
    encoder.split(input_file, output_pattern, playlist_path, split_config.soft_cap)
    logger.info("FFmpeg splitting took: %s", format_elapsed(time.monotonic() - start_time))

    playlist = read_playlist(playlist_path)
    try:
        playlist_path.unlink()
    except OSError as e:
        raise WriteError(playlist_path, module="segmentation") from e
    logger.debug(
        "Total duration: %s in %d parts",
        duration_to_string(playlist.total_duration), len(playlist.parts)
    )

    paths = join_last_parts_if_needed(playlist, output_dir, split_config.hard_cap, encoder)

    logger.debug("Removing original file: %s", input_file)
    try:
        input_file.unlink()
    except OSError as e:
        raise WriteError(input_file, module="segmentation") from e

    logger.info("Done splitting. Whole operation took: %s", format_elapsed(time.monotonic() - start_time))
    logger.debug("Paths: %s", [str(p) for p in paths])
    return len(paths)
