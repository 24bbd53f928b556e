"""Shared fixtures for the vodsplit test suite."""
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

import pytest

from vodsplit.config import Settings
from vodsplit.encoder import Encoder
from vodsplit.exceptions import EncoderCommandError
from vodsplit.store import SQLiteVideoStore


def build_playlist(durations: List[float], names: Optional[List[str]] = None) -> str:
    """Build a segment list the way the ffmpeg segment muxer writes it."""
    names = names or [f"{i:03d}.mp4" for i in range(len(durations))]
    lines = [
        "#EXTM3U",
        "#EXT-X-VERSION:3",
        "#EXT-X-MEDIA-SEQUENCE:0",
        "#EXT-X-ALLOW-CACHE:YES",
        f"#EXT-X-TARGETDURATION:{int(max(durations, default=0)) + 1}",
    ]
    for duration, name in zip(durations, names):
        lines.append(f"#EXTINF:{duration:.6f},")
        lines.append(name)
    lines.append("#EXT-X-ENDLIST")
    return "\n".join(lines) + "\n"


class FakeEncoder(Encoder):
    """Encoder writing small files instead of running ffmpeg.

    ``split`` writes one file per duration plus the segment list;
    ``concatenate`` joins the bytes of the listed files.
    """

    def __init__(self, durations: List[float], playlist_text: Optional[str] = None,
                 fail_split: bool = False, fail_concat: bool = False) -> None:
        self.durations = durations
        self.playlist_text = playlist_text
        self.fail_split = fail_split
        self.fail_concat = fail_concat
        self.split_calls = []
        self.concat_calls = []
        self.concat_lists = []

    def split(self, input_file: Path, output_pattern: str, playlist_path: Path,
              segment_duration: timedelta) -> None:
        self.split_calls.append((input_file, output_pattern, playlist_path, segment_duration))
        if self.fail_split:
            raise EncoderCommandError("Command failed with exit code 1", module="split", exit_code=1)
        for i in range(len(self.durations)):
            Path(output_pattern % i).write_bytes(f"segment-{i};".encode())
        text = self.playlist_text if self.playlist_text is not None else build_playlist(self.durations)
        playlist_path.write_text(text)

    def concatenate(self, concat_list: Path, output_file: Path) -> None:
        self.concat_calls.append((concat_list, output_file))
        content = concat_list.read_text()
        self.concat_lists.append(content)
        if self.fail_concat:
            raise EncoderCommandError("Command failed with exit code 1", module="concat", exit_code=1)
        data = b""
        for line in content.splitlines():
            data += Path(line[len("file '"):-1].replace("'\\''", "'")).read_bytes()
        output_file.write_bytes(data)


@pytest.fixture
def download_dir(tmp_path: Path) -> Path:
    """Create the download folder."""
    path = tmp_path / "downloads"
    path.mkdir()
    return path


@pytest.fixture
def make_video(download_dir: Path):
    """Create a downloaded input video."""
    def _make(video_id: str) -> Path:
        path = download_dir / f"{video_id}.mp4"
        path.write_bytes(b"source video")
        return path
    return _make


@pytest.fixture
def settings(tmp_path: Path, download_dir: Path) -> Settings:
    """Settings with a 15 minute hard cap and no config files."""
    return Settings.from_environment(
        config_files=[],
        environ={},
        download_dir=download_dir,
        log_dir=tmp_path / "logs",
        db_path=tmp_path / "db" / "videos.db",
        soft_cap_minutes=10,
        hard_cap_minutes=15,
        max_items_to_process=5
    )


@pytest.fixture
def store(settings: Settings):
    """Open and migrated SQLite store."""
    with SQLiteVideoStore(settings.paths.db_path) as s:
        yield s
