"""Data types shared between the store and the splitting pipeline"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class VideoStatus(str, Enum):
    """Processing status of a video record.

    Only ``Downloaded`` records are picked up. ``Split`` and ``SplitFailed``
    are terminal; moving a record back to ``Downloaded`` is a manual step.
    """
    DOWNLOADED = "Downloaded"
    SPLITTING = "Splitting"
    SPLIT = "Split"
    SPLIT_FAILED = "SplitFailed"


@dataclass
class VideoRecord:
    """A video as stored in the video store.

    Attributes:
        id: Stable identifier, also the stem of the input file and the name
            of the output folder
        status: Current processing status
        part_count: Number of parts, set only once splitting succeeded
    """
    id: str
    status: VideoStatus = VideoStatus.DOWNLOADED
    part_count: Optional[int] = None

    def __post_init__(self) -> None:
        """Accept plain strings for id and status."""
        self.id = str(self.id)
        if not isinstance(self.status, VideoStatus):
            self.status = VideoStatus(self.status)
