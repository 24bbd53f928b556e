"""Custom exceptions for the vodsplit splitting pipeline"""

from pathlib import Path
from typing import Optional


class SplitterError(Exception):
    """
    Base exception for all vodsplit errors.

    Attributes:
        message (str): A description of the error.
        module (str): The module where the error originated.

    Usage:
        raise SplitterError("An error occurred", module="segmentation")
    """
    def __init__(self, message: str, module: str = None):
        self.message = message
        self.module = module
        super().__init__(f"[{module or 'unknown'}] {message}")


class PathError(SplitterError):
    """Base class for errors tied to a filesystem location"""
    def __init__(self, message: str, path: Path, module: str = None):
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}", module)


class ConfigurationError(SplitterError):
    """
    Exception raised when the configuration cannot be loaded or is invalid.

    This is fatal: no video is touched when configuration fails.
    """
    pass


class DependencyError(SplitterError):
    """
    Exception raised when a required external tool (ffmpeg) is missing.
    """
    pass


class StoreError(SplitterError):
    """
    Exception raised when the video store cannot be opened, migrated, queried or updated.
    """
    pass


class NotFoundError(PathError):
    """
    Exception raised when the download folder or the input video does not exist.
    """
    def __init__(self, path: Path, module: str = None):
        super().__init__("File or folder not found", path, module)


class InvalidInputFileError(PathError):
    """
    Exception raised when the input path exists but is not a regular file.
    """
    def __init__(self, path: Path, module: str = None):
        super().__init__("Input is not a regular file", path, module)


class CreateFolderError(PathError):
    """
    Exception raised when the per-video output folder cannot be created.
    """
    def __init__(self, path: Path, module: str = None):
        super().__init__("Could not create folder", path, module)


class ReadError(PathError):
    """
    Exception raised when reading from the filesystem fails.
    """
    def __init__(self, path: Path, module: str = None):
        super().__init__("Could not read from filesystem", path, module)


class WriteError(PathError):
    """
    Exception raised when writing, deleting or renaming on the filesystem fails.
    """
    def __init__(self, path: Path, module: str = None):
        super().__init__("Could not write to filesystem", path, module)


class CanonicalizeError(PathError):
    """
    Exception raised when a segment path cannot be resolved to its canonical form.
    """
    def __init__(self, path: Path, module: str = None):
        super().__init__("Path could not be canonicalized", path, module)


class EncoderCommandError(SplitterError):
    """
    Exception raised when an ffmpeg invocation fails to start, times out
    or exits with a non-zero status.
    """
    def __init__(self, message: str, module: str = None,
                 exit_code: Optional[int] = None, output: str = ""):
        super().__init__(message, module)
        self.exit_code = exit_code
        self.output = output


class PlaylistParseError(SplitterError):
    """
    Exception raised when a segment list contains a malformed duration.
    """
    pass


class PlaylistEmptyError(SplitterError):
    """
    Exception raised when a segment list does not contain a single part.

    Splitting a non-empty input always yields at least one segment, so an empty
    list means the split went wrong.
    """
    def __init__(self, module: str = None):
        super().__init__("Playlist was empty/did not contain any parts", module)


class SegmentMergeError(SplitterError):
    """
    Exception raised when joining the last two segments produced no usable output.
    """
    pass


class JoinRequiresAtLeastTwoPartsError(SplitterError):
    """
    Exception raised when a join is attempted with fewer than two parts.

    Not reachable through normal inputs; it signals a logic error in the caller.
    """
    def __init__(self, module: str = None):
        super().__init__("Joining two parts requires at least two parts in the list", module)
