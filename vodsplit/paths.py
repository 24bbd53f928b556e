"""Path handling utilities for vodsplit."""
import logging
import os
from pathlib import Path

from .exceptions import CanonicalizeError, CreateFolderError, InvalidInputFileError, NotFoundError

logger = logging.getLogger(__name__)


def video_paths(base_dir: Path, video_id: str) -> tuple[Path, Path]:
    """Get the input file and output folder for a video.

    Args:
        base_dir: The download folder
        video_id: Identifier of the video

    Returns:
        ``(base_dir/{id}.mp4, base_dir/{id})``
    """
    return base_dir / f"{video_id}.mp4", base_dir / video_id


def verify_paths(base_dir: Path, input_file: Path, output_dir: Path) -> None:
    """Check the input of a split and create its output folder.

    Args:
        base_dir: The download folder
        input_file: The video to split
        output_dir: Folder receiving the segments, created with its parents

    Raises:
        NotFoundError: If the download folder or the input file is missing
        InvalidInputFileError: If the input exists but is not a regular file
        CreateFolderError: If the output folder cannot be created
    """
    if not base_dir.exists() or not input_file.exists():
        raise NotFoundError(input_file, module="paths")
    if not input_file.is_file():
        raise InvalidInputFileError(input_file, module="paths")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CreateFolderError(output_dir, module="paths") from e


def canonicalize(path: Path) -> Path:
    """Resolve a path that must exist to its absolute canonical form.

    Raises:
        CanonicalizeError: If the path does not exist or cannot be resolved
    """
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise CanonicalizeError(path, module="paths") from e


def check_folder(folder: Path) -> Path:
    """Check a folder vodsplit writes into (logs, database).

    A missing folder is fine, it is created on first use.

    Raises:
        ValueError: If the location is taken by a file or is read-only
    """
    if not folder.exists():
        return folder
    if not folder.is_dir():
        raise ValueError(f"Not a folder: {folder}")
    if not os.access(folder, os.W_OK):
        raise ValueError(f"Folder is read-only: {folder}")
    return folder
