"""Encoder interface and the ffmpeg implementation used by vodsplit.

The splitting pipeline never runs ffmpeg itself; it talks to an ``Encoder``.
``FFmpegEncoder`` shells out to the ffmpeg binary, tests plug in fakes that
write segment files and segment lists directly.
"""

import logging
from abc import ABC, abstractmethod
from datetime import timedelta
from pathlib import Path
from typing import Dict, Optional

from .command_builders import build_concat_command, build_split_command
from .command_jobs import CommandJob, ConcatJob, SplitJob
from .exceptions import EncoderCommandError
from .utils import duration_to_string


class Encoder(ABC):
    """Base encoder interface that all encoders must implement."""

    @abstractmethod
    def split(
        self,
        input_file: Path,
        output_pattern: str,
        playlist_path: Path,
        segment_duration: timedelta
    ) -> None:
        """Split a video into numbered segments without re-encoding.

        Args:
            input_file: Video to split
            output_pattern: printf-style pattern for the segment files, e.g. ``out/%03d.mp4``
            playlist_path: Where the m3u8 segment list is written
            segment_duration: Target length of each segment

        Raises:
            EncoderCommandError: If the split did not complete
        """
        pass

    @abstractmethod
    def concatenate(self, concat_list: Path, output_file: Path) -> None:
        """Join the files named in a concat list into one file.

        Args:
            concat_list: ffmpeg concat demuxer file, one ``file '<path>'`` line per input
            output_file: Path of the joined file

        Raises:
            EncoderCommandError: If the concatenation did not complete
        """
        pass

    def get_version_info(self) -> Dict[str, str]:
        """Get version information for the encoder.

        Returns:
            Dict[str, str]: Version information for encoder components
        """
        return {}


class FFmpegEncoder(Encoder):
    """Encoder backed by the ffmpeg command line tool.

    Attributes:
        ffmpeg_path: Binary to invoke
        timeout: Seconds an invocation may take, None waits forever
    """

    def __init__(self, ffmpeg_path: str = "ffmpeg", timeout: Optional[float] = None,
                 logger: Optional[logging.Logger] = None) -> None:
        self.ffmpeg_path = ffmpeg_path
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def split(
        self,
        input_file: Path,
        output_pattern: str,
        playlist_path: Path,
        segment_duration: timedelta
    ) -> None:
        segment_time = duration_to_string(segment_duration)
        cmd = build_split_command(
            input_file, output_pattern, playlist_path, segment_time, self.ffmpeg_path
        )
        self.logger.debug("Running ffmpeg command: %s", " ".join(cmd))
        SplitJob(cmd, timeout=self.timeout).execute()
        self.logger.debug("Finished running ffmpeg split")

    def concatenate(self, concat_list: Path, output_file: Path) -> None:
        cmd = build_concat_command(concat_list, output_file, self.ffmpeg_path)
        self.logger.debug("Running ffmpeg command: %s", " ".join(cmd))
        ConcatJob(cmd, timeout=self.timeout).execute()
        self.logger.debug("Finished running ffmpeg concat")

    def get_version_info(self) -> Dict[str, str]:
        """Report the first line of ``ffmpeg -version``."""
        try:
            result = CommandJob([self.ffmpeg_path, "-version"], timeout=self.timeout).execute()
        except EncoderCommandError as e:
            self.logger.warning("Could not determine ffmpeg version: %s", e)
            return {"ffmpeg": "unknown"}
        first_line = result.stdout.splitlines()[0] if result.stdout else "unknown"
        return {"ffmpeg": first_line}
