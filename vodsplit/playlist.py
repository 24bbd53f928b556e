"""
Segment list parsing

Responsibilities:
  - Read the m3u8 segment list that ffmpeg writes next to the segments
  - Turn it into ordered parts with millisecond durations
  - Reject lists without any part

Only the subset of the extended playlist syntax written by the ffmpeg
segment muxer is understood; every other ``#EXT`` directive is skipped.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from .exceptions import PlaylistEmptyError, PlaylistParseError, ReadError

logger = logging.getLogger(__name__)

EXTINF = "#EXTINF:"
ENDLIST = "#EXT-X-ENDLIST"
DIRECTIVE = "#EXT"


@dataclass
class PartInfo:
    """One segment of a split video.

    Attributes:
        duration: Length of the segment
        path: Segment location relative to the video's output folder
    """
    duration: timedelta
    path: Path


@dataclass
class PlaylistInfo:
    """Parsed segment list.

    Attributes:
        total_duration: Sum of all part durations
        parts: Parts in segment index order
    """
    total_duration: timedelta = field(default_factory=timedelta)
    parts: List[PartInfo] = field(default_factory=list)

    def last_part(self) -> Optional[PartInfo]:
        return self.parts[-1] if self.parts else None

    def second_last_part(self) -> Optional[PartInfo]:
        if len(self.parts) < 2:
            return None
        return self.parts[-2]


def parse_duration(value: str) -> timedelta:
    """
    Parse an ``#EXTINF`` value into a duration.

    The value is seconds as a decimal number, optionally followed by a comma
    and a title. Milliseconds are truncated, not rounded.

    Raises:
        PlaylistParseError: If the value is missing, not a finite number
            or too large for a duration
    """
    time_str = value.split(",", 1)[0].strip()
    try:
        seconds = float(time_str)
    except ValueError as e:
        raise PlaylistParseError(
            f"Could not parse the part duration: {time_str!r}",
            module="playlist"
        ) from e
    if not math.isfinite(seconds):
        raise PlaylistParseError(
            f"Part duration is not finite: {time_str!r}",
            module="playlist"
        )
    # negative durations saturate to zero
    try:
        return timedelta(milliseconds=max(int(seconds * 1000), 0))
    except OverflowError as e:
        raise PlaylistParseError(
            f"Part duration is out of range: {time_str!r}",
            module="playlist"
        ) from e


def parse_playlist(text: str) -> PlaylistInfo:
    """
    Parse segment list text.

    Args:
        text: Content of the m3u8 file

    Returns:
        PlaylistInfo with the parts in file order

    Raises:
        PlaylistParseError: If an ``#EXTINF`` duration is malformed
        PlaylistEmptyError: If no part was found
    """
    info = PlaylistInfo()
    pending: Optional[timedelta] = None

    # only "\n" and "\r\n" end a line; a final newline does not start another one
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()

    for line in lines:
        line = line.removesuffix("\r")
        if line.startswith(EXTINF):
            pending = parse_duration(line[len(EXTINF):])
        elif line.startswith(ENDLIST):
            break
        elif line.startswith(DIRECTIVE):
            logger.debug("Unknown line in playlist: %s", line)
        elif pending is not None:
            info.parts.append(PartInfo(duration=pending, path=Path(line.strip())))
            info.total_duration += pending
            pending = None

    if not info.parts:
        raise PlaylistEmptyError(module="playlist")
    return info


def read_playlist(playlist_path: Path) -> PlaylistInfo:
    """
    Read and parse the segment list written by the split step.

    Raises:
        ReadError: If the file cannot be read or is not valid UTF-8
        PlaylistParseError: If an ``#EXTINF`` duration is malformed
        PlaylistEmptyError: If no part was found
    """
    try:
        text = playlist_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(playlist_path, module="playlist") from e
    return parse_playlist(text)
