"""High-level pipeline orchestration for splitting downloaded videos

Responsibilities:
  - Select a batch of downloaded videos from the store
  - Drive the per-video status transitions around the file work
  - Keep one failing video from aborting the rest of the batch
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Settings
from .encoder import Encoder
from .exceptions import SplitterError
from .models import VideoRecord, VideoStatus
from .segmentation import split_video_files
from .store import VideoStore


@dataclass
class BatchSummary:
    """Outcome of one batch run."""
    total: int = 0
    split: int = 0
    failed: int = 0
    parts: int = 0


class SplitterClient:
    """Splits downloaded videos one at a time and records their status.

    Attributes:
        settings: Loaded configuration
        store: Store holding the video records
        encoder: Encoder used for splitting and joining
    """

    def __init__(self, settings: Settings, store: VideoStore, encoder: Encoder,
                 logger: Optional[logging.Logger] = None) -> None:
        self.settings = settings
        self.store = store
        self.encoder = encoder
        self.logger = logger or logging.getLogger(__name__)

    def split_video(self, video: VideoRecord) -> int:
        """Split one video and persist its status.

        ``Splitting`` is stored before any file is touched, so a crash leaves
        the record marked as in progress instead of being retried.

        Returns:
            Number of parts

        Raises:
            SplitterError: The error that made the split fail, after the
                record was marked ``SplitFailed``
        """
        video_id = video.id
        self.store.update_status(video_id, VideoStatus.SPLITTING)
        video.status = VideoStatus.SPLITTING

        try:
            count = split_video_files(
                video_id,
                self.settings.paths.download_dir,
                self.settings.split,
                self.encoder,
                logger=self.logger
            )
        except Exception as e:
            self.logger.error("Could not split video with id: %s because of err: %s", video_id, e)
            self.store.update_status(video_id, VideoStatus.SPLIT_FAILED)
            video.status = VideoStatus.SPLIT_FAILED
            if isinstance(e, SplitterError):
                raise
            raise SplitterError(f"Splitting failed: {e}", module="pipeline") from e

        self.logger.info("Split video with id: %s into %d parts", video_id, count)
        self.store.update_status(video_id, VideoStatus.SPLIT, part_count=count)
        video.status = VideoStatus.SPLIT
        video.part_count = count
        return count

    def split_videos(self) -> BatchSummary:
        """Split up to ``max_items_to_process`` downloaded videos.

        Raises:
            StoreError: If the eligible videos cannot be queried
        """
        self.logger.info("Splitting videos")
        videos = self.store.find_eligible(self.settings.split.max_items_to_process)
        summary = BatchSummary(total=len(videos))

        for video in videos:
            self.logger.info("Splitting video: %s", video)
            try:
                summary.parts += self.split_video(video)
            except SplitterError as err:
                summary.failed += 1
                self.logger.error("Could not split video with id: %s because of err: %s", video.id, err)
            else:
                summary.split += 1
                self.logger.info("Split video with id: %s", video.id)

        self.logger.info(
            "Finished splitting videos: %d split, %d failed", summary.split, summary.failed
        )
        return summary
