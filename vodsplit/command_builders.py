"""Helper functions for building ffmpeg commands"""

import logging
from pathlib import Path
from typing import List

import ffmpeg

log = logging.getLogger(__name__)

GLOBAL_ARGS = ("-hide_banner", "-loglevel", "warning")


def build_split_command(
    input_file: Path,
    output_pattern: str,
    playlist_path: Path,
    segment_time: str,
    ffmpeg_path: str = "ffmpeg"
) -> List[str]:
    """Build ffmpeg command for stream-copy segmentation

    Segments restart their timestamps at zero and negative timestamps in the
    source are shifted, so every part plays on its own.
    """
    stream = (
        ffmpeg
        .input(str(input_file))
        .output(
            output_pattern,
            format="segment",
            c="copy",
            map="0",
            segment_time=segment_time,
            reset_timestamps=1,
            segment_list=str(playlist_path),
            segment_list_type="m3u8",
            avoid_negative_ts=1,
        )
        .global_args(*GLOBAL_ARGS)
    )
    return stream.compile(cmd=ffmpeg_path)


def build_concat_command(
    concat_file: Path,
    output_file: Path,
    ffmpeg_path: str = "ffmpeg"
) -> List[str]:
    """Build ffmpeg command for joining the files listed in a concat file"""
    stream = (
        ffmpeg
        .input(str(concat_file), format="concat", safe=0)
        .output(str(output_file), c="copy")
        .global_args(*GLOBAL_ARGS)
        .overwrite_output()
    )
    return stream.compile(cmd=ffmpeg_path)
