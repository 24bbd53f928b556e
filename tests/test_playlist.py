"""Unit tests for segment list parsing"""
from datetime import timedelta
from pathlib import Path

import pytest

from conftest import build_playlist
from vodsplit.exceptions import PlaylistEmptyError, PlaylistParseError, ReadError
from vodsplit.playlist import PartInfo, PlaylistInfo, parse_duration, parse_playlist, read_playlist


def test_parse_ffmpeg_playlist():
    """Test parsing a segment list as written by ffmpeg"""
    info = parse_playlist(build_playlist([600.0, 600.25, 120.5]))

    assert [p.path for p in info.parts] == [Path("000.mp4"), Path("001.mp4"), Path("002.mp4")]
    assert [p.duration for p in info.parts] == [
        timedelta(seconds=600),
        timedelta(seconds=600, milliseconds=250),
        timedelta(seconds=120, milliseconds=500),
    ]
    assert info.total_duration == timedelta(seconds=1320, milliseconds=750)
    assert info.total_duration == sum((p.duration for p in info.parts), timedelta())


def test_duration_is_truncated_to_milliseconds():
    """Test sub-millisecond digits are dropped, not rounded"""
    assert parse_duration("1.2349") == timedelta(milliseconds=1234)
    assert parse_duration("0.0009,title") == timedelta(0)


def test_duration_label_is_ignored():
    """Test a title after the comma does not affect the duration"""
    assert parse_duration("12.5,Some, title") == timedelta(seconds=12, milliseconds=500)
    assert parse_duration(" 3 ") == timedelta(seconds=3)


def test_negative_duration_saturates_to_zero():
    assert parse_duration("-1.5") == timedelta(0)


@pytest.mark.parametrize("value", ["abc,", ",", "", "nan", "inf", "1.2.3"])
def test_malformed_duration_raises(value):
    """Test malformed durations are errors, not skipped"""
    with pytest.raises(PlaylistParseError):
        parse_playlist(f"#EXTM3U\n#EXTINF:{value}\n000.mp4\n")


def test_endlist_stops_parsing():
    """Test entries after #EXT-X-ENDLIST are ignored"""
    text = "#EXTINF:10.0,\n000.mp4\n#EXT-X-ENDLIST\n#EXTINF:5.0,\n001.mp4\n"
    info = parse_playlist(text)
    assert len(info.parts) == 1
    assert info.total_duration == timedelta(seconds=10)


def test_unknown_directive_between_duration_and_path():
    """Test an unknown #EXT line does not drop the pending duration"""
    text = "#EXTINF:7.25,\n#EXT-X-BYTERANGE:100@0\n000.mp4\n"
    info = parse_playlist(text)
    assert info.parts == [PartInfo(duration=timedelta(seconds=7, milliseconds=250), path=Path("000.mp4"))]


def test_lines_without_pending_duration_are_ignored():
    text = "stray.mp4\n\n#EXTINF:4,\n  000.mp4  \nother.mp4\n"
    info = parse_playlist(text)
    assert [p.path for p in info.parts] == [Path("000.mp4")]


def test_crlf_line_endings():
    info = parse_playlist("#EXTM3U\r\n#EXTINF:2.0,\r\n000.mp4\r\n#EXT-X-ENDLIST\r\n")
    assert info.parts[0].path == Path("000.mp4")


def test_dangling_duration_is_not_counted():
    """Test the total only includes durations that belong to a part"""
    info = parse_playlist("#EXTINF:3.0,\n000.mp4\n#EXTINF:9.0,\n#EXT-X-ENDLIST\n")
    assert info.total_duration == timedelta(seconds=3)


@pytest.mark.parametrize("text", [
    "",
    "#EXTM3U\n#EXT-X-VERSION:3\n#EXT-X-TARGETDURATION:10\n#EXT-X-ENDLIST\n",
    "#EXTINF:3.0,\n#EXT-X-ENDLIST\n000.mp4\n",
])
def test_empty_playlist_raises(text):
    """Test a list without parts is an error"""
    with pytest.raises(PlaylistEmptyError):
        parse_playlist(text)


def test_part_accessors():
    info = PlaylistInfo()
    assert info.last_part() is None
    assert info.second_last_part() is None

    first = PartInfo(timedelta(seconds=1), Path("000.mp4"))
    info.parts.append(first)
    assert info.last_part() is first
    assert info.second_last_part() is None

    second = PartInfo(timedelta(seconds=2), Path("001.mp4"))
    info.parts.append(second)
    assert info.last_part() is second
    assert info.second_last_part() is first


def test_read_playlist(tmp_path):
    path = tmp_path / "output.m3u8"
    path.write_text(build_playlist([1.0, 2.0]))
    assert len(read_playlist(path).parts) == 2


def test_read_missing_playlist(tmp_path):
    with pytest.raises(ReadError) as exc_info:
        read_playlist(tmp_path / "missing.m3u8")
    assert exc_info.value.path == tmp_path / "missing.m3u8"


def test_out_of_range_duration_raises():
    """Test a finite but huge duration is a parse error"""
    with pytest.raises(PlaylistParseError):
        parse_playlist("#EXTINF:1e14,\n000.mp4\n")


def test_only_newlines_end_a_line():
    """Test form feeds and other separators stay inside the path"""
    info = parse_playlist("#EXTINF:1.0,\n000\x0c.mp4\r\n#EXTINF:2.0,\n001 .mp4\n")
    assert [p.path for p in info.parts] == [Path("000\x0c.mp4"), Path("001 .mp4")]


def test_read_playlist_invalid_utf8(tmp_path):
    path = tmp_path / "output.m3u8"
    path.write_bytes(b"#EXTM3U\n#EXTINF:1.0,\n\xff\xfe.mp4\n")
    with pytest.raises(ReadError) as exc_info:
        read_playlist(path)
    assert exc_info.value.path == path


def test_trailing_newline_is_not_a_path():
    """Test a duration at the very end of the file stays dangling"""
    info = parse_playlist("#EXTINF:3.0,\n000.mp4\n#EXTINF:9.0,\n")
    assert len(info.parts) == 1
    assert info.total_duration == timedelta(seconds=3)
