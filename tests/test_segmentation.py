"""Tests for splitting one downloaded video into parts"""
from datetime import timedelta
from pathlib import Path

import pytest

from conftest import FakeEncoder
from vodsplit.exceptions import EncoderCommandError, NotFoundError, PlaylistEmptyError, PlaylistParseError
from vodsplit.segmentation import PLAYLIST_NAME, split_video_files


def test_split_without_join(settings, download_dir, make_video):
    """Test three full parts are all kept"""
    make_video("1")
    encoder = FakeEncoder([600.0, 600.0, 600.0])

    count = split_video_files("1", download_dir, settings.split, encoder)

    output_dir = download_dir / "1"
    assert count == 3
    assert sorted(p.name for p in output_dir.iterdir()) == ["000.mp4", "001.mp4", "002.mp4"]
    assert not (download_dir / "1.mp4").exists()
    assert encoder.concat_calls == []


def test_split_joins_short_tail(settings, download_dir, make_video):
    """Test a short last part is joined into the one before it"""
    make_video("2")
    encoder = FakeEncoder([600.0, 600.0, 120.0])

    count = split_video_files("2", download_dir, settings.split, encoder)

    output_dir = download_dir / "2"
    assert count == 2
    assert sorted(p.name for p in output_dir.iterdir()) == ["000.mp4", "001.mp4"]
    assert (output_dir / "001.mp4").read_bytes() == b"segment-1;segment-2;"
    assert not (download_dir / "2.mp4").exists()


def test_split_arguments(settings, download_dir, make_video):
    """Test the encoder receives the pattern, list path and soft cap"""
    input_file = make_video("3")
    encoder = FakeEncoder([30.0])

    split_video_files("3", download_dir, settings.split, encoder)

    output_dir = download_dir / "3"
    assert encoder.split_calls == [
        (input_file, str(output_dir / "%03d.mp4"), output_dir / PLAYLIST_NAME, timedelta(minutes=10))
    ]


def test_playlist_is_removed(settings, download_dir, make_video):
    make_video("4")
    split_video_files("4", download_dir, settings.split, FakeEncoder([60.0, 60.0]))
    assert not (download_dir / "4" / PLAYLIST_NAME).exists()


def test_output_folder_may_already_exist(settings, download_dir, make_video):
    make_video("5")
    (download_dir / "5").mkdir()
    assert split_video_files("5", download_dir, settings.split, FakeEncoder([60.0])) == 1


def test_missing_input(settings, download_dir):
    """Test a missing input fails before the encoder runs"""
    encoder = FakeEncoder([600.0])

    with pytest.raises(NotFoundError) as exc_info:
        split_video_files("404", download_dir, settings.split, encoder)

    assert exc_info.value.path == download_dir / "404.mp4"
    assert encoder.split_calls == []


def test_malformed_playlist_keeps_input(settings, download_dir, make_video):
    """Test the source video survives a segment list that cannot be parsed"""
    input_file = make_video("6")
    encoder = FakeEncoder([600.0], playlist_text="#EXTM3U\n#EXTINF:abc,\n000.mp4\n#EXT-X-ENDLIST\n")

    with pytest.raises(PlaylistParseError):
        split_video_files("6", download_dir, settings.split, encoder)

    assert input_file.exists()


def test_empty_playlist_keeps_input(settings, download_dir, make_video):
    input_file = make_video("7")
    encoder = FakeEncoder([], playlist_text="#EXTM3U\n#EXT-X-ENDLIST\n")

    with pytest.raises(PlaylistEmptyError):
        split_video_files("7", download_dir, settings.split, encoder)

    assert input_file.exists()


def test_failed_split_keeps_input(settings, download_dir, make_video):
    input_file = make_video("8")

    with pytest.raises(EncoderCommandError):
        split_video_files("8", download_dir, settings.split, FakeEncoder([600.0], fail_split=True))

    assert input_file.exists()


def test_failed_join_keeps_input(settings, download_dir, make_video):
    """Test a failing join leaves the source video and the unjoined parts"""
    input_file = make_video("9")
    encoder = FakeEncoder([600.0, 60.0], fail_concat=True)

    with pytest.raises(EncoderCommandError):
        split_video_files("9", download_dir, settings.split, encoder)

    assert input_file.exists()
    assert (download_dir / "9" / "001.mp4").exists()
