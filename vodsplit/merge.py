"""Joining of an undersized trailing segment

Responsibilities:
- Decide whether the last two parts fit under the hard cap together
- Join them with the encoder's concat step
- Replace the two segment files by the joined one and update the part list

Only the final pair is ever considered, and at most once per video.
"""

import logging
from datetime import timedelta
from pathlib import Path
from typing import List

from .encoder import Encoder
from .exceptions import JoinRequiresAtLeastTwoPartsError, SegmentMergeError, WriteError
from .paths import canonicalize
from .playlist import PlaylistInfo

logger = logging.getLogger(__name__)

JOIN_LIST_NAME = "join.txt"
JOIN_OUTPUT_NAME = "join_out_tmp.mp4"


def concat_entry(path: Path) -> str:
    """Format one ``file`` line of an ffmpeg concat list.

    Single quotes inside the path are written as ``'\\''``.
    """
    escaped = str(path).replace("'", "'\\''")
    return f"file '{escaped}'"


def remove_join_list(join_txt_path: Path, concat_failed: bool) -> None:
    """Delete the concat list after the join ran.

    When the concat itself failed its error wins; a failed delete is only
    logged then.

    Raises:
        WriteError: If the list cannot be deleted after a successful concat
    """
    try:
        join_txt_path.unlink(missing_ok=True)
    except OSError as e:
        if concat_failed:
            logger.warning("Could not remove %s: %s", join_txt_path, e)
            return
        raise WriteError(join_txt_path, module="merge") from e


def join_last_parts_if_needed(
    playlist: PlaylistInfo,
    base_folder: Path,
    duration_cap: timedelta,
    encoder: Encoder
) -> List[Path]:
    """
    Join the last two parts when their combined duration is within the cap.

    Args:
        playlist: Parsed segment list, updated in place when a join happens
        base_folder: Output folder of the video, the part paths are relative to it
        duration_cap: Hard cap; a combined duration equal to it is still joined
        encoder: Encoder used for the concatenation

    Returns:
        Paths of the remaining parts under ``base_folder``, in order
    """
    logger.info(
        "Joining last parts if needed (%d parts, %ss total, cap %ss)",
        len(playlist.parts), playlist.total_duration.total_seconds(), duration_cap.total_seconds()
    )
    last_part = playlist.last_part()
    second_last_part = playlist.second_last_part()
    if last_part is None:
        logger.warning("There are no parts, so we can't join anything")
    elif second_last_part is None:
        logger.info("There is only one part, so we can't join anything")
    elif last_part.duration + second_last_part.duration <= duration_cap:
        join_last_two_parts(playlist, base_folder, encoder)
        logger.info("Joined last two parts together")
    else:
        logger.info("Last two parts are too long to join together")

    return [base_folder / part.path for part in playlist.parts]


def join_last_two_parts(playlist: PlaylistInfo, base_folder: Path, encoder: Encoder) -> None:
    """
    Concatenate the last two parts into the file of the second to last one.

    Raises:
        JoinRequiresAtLeastTwoPartsError: If fewer than two parts are present
        CanonicalizeError: If a segment file cannot be resolved
        EncoderCommandError: If the concatenation fails
        SegmentMergeError: If the concatenation produced no output
        WriteError: If writing the concat list or replacing the segments fails
    """
    if len(playlist.parts) < 2:
        raise JoinRequiresAtLeastTwoPartsError(module="merge")
    second_last_part, last_part = playlist.parts[-2], playlist.parts[-1]

    second_last_path = canonicalize(base_folder / second_last_part.path)
    last_path = canonicalize(base_folder / last_part.path)
    join_txt_path = base_folder / JOIN_LIST_NAME
    join_out_tmp_path = base_folder / JOIN_OUTPUT_NAME

    try:
        join_txt_path.write_text(
            f"{concat_entry(second_last_path)}\n{concat_entry(last_path)}", encoding="utf-8"
        )
    except OSError as e:
        raise WriteError(join_txt_path, module="merge") from e

    try:
        encoder.concatenate(join_txt_path, join_out_tmp_path)
    except Exception:
        remove_join_list(join_txt_path, concat_failed=True)
        raise
    remove_join_list(join_txt_path, concat_failed=False)

    if not join_out_tmp_path.exists() or join_out_tmp_path.stat().st_size == 0:
        logger.error("Failed to create joined segment")
        raise SegmentMergeError(f"Joined output is missing or empty: {join_out_tmp_path}", module="merge")

    logger.debug("Removing files: %s, %s", second_last_path, last_path)
    for path in (last_path, second_last_path):
        try:
            path.unlink()
        except OSError as e:
            raise WriteError(path, module="merge") from e

    logger.debug("Renaming file: %s to %s", join_out_tmp_path, second_last_path)
    try:
        join_out_tmp_path.rename(second_last_path)
    except OSError as e:
        raise WriteError(second_last_path, module="merge") from e

    playlist.parts.pop()
    second_last_part.duration += last_part.duration
