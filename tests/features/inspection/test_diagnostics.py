"""Tests for the per-file tag dump used by ``inspect``."""

from __future__ import annotations

from pathlib import Path

import pytest
from mutagen.mp3 import HeaderNotFoundError
from pytest_mock import MockerFixture

from mp3_builders import build_id3v1, build_id3v2, text_body, write_mp3
from mp3repair.features.inspection.usecases.diagnostics import (
    StreamInfo,
    decode_lame_mcdi,
    describe_id3v2,
    format_length,
    frame_description,
    hex_dump,
    inspect_file,
    interpret_binary_frame,
    read_track_details,
    utf16le_ascii,
)
from mp3repair.features.tags.domain.errors import FileOperationError
from mp3repair.features.tags.domain.id3v2 import ID3v2Tag

STREAM = StreamInfo(length_seconds=215.0, bitrate=192000, sample_rate=44100, channels=2)


def _lame_toc() -> bytes:
    entries = [(1, 0), (2, 1000), (0xAA, 2000)]
    body = b"".join(
        bytes([0, 0x14, number, 0]) + address.to_bytes(4, "big") for number, address in entries
    )
    return (2 + len(body)).to_bytes(2, "big") + bytes([1, 2]) + body


def test_hex_dump_pads_short_rows() -> None:
    rows = hex_dump(b"AB\x00" + bytes(range(0x41, 0x51)))

    assert rows[0] == "41 42 00 41 42 43 44 45 46 47 48 49 4A 4B 4C 4D AB•ABCDEFGHIJKLM"
    assert rows[1] == "4E 4F 50" + "   " * 13 + " NOP"
    assert hex_dump(b"") == []


def test_utf16le_ascii() -> None:
    assert utf16le_ascii("abc".encode("utf-16-le")) == "abc"
    assert utf16le_ascii("abc\x00".encode("utf-16-le")) == "abc"
    assert utf16le_ascii("Ωx".encode("utf-16-le")) is None
    assert utf16le_ascii(b"abc") is None
    assert utf16le_ascii(b"") is None


def test_freerip_mcdi() -> None:
    content = b"\x01\xff\xfe" + "ABC".encode("utf-16-le")

    lines = interpret_binary_frame(content)

    assert lines[0] == "ABC"
    assert lines[1:] == hex_dump(content)


def test_windows_legacy_mcdi() -> None:
    content = "3+96+5A3B+B2C8+11D8E".encode("utf-16-le")

    lines = interpret_binary_frame(content)

    assert lines[:5] == [
        "tracks 3",
        "track 1 logical block address 150",
        "track 2 logical block address 23099",
        "track 3 logical block address 45768",
        "leadout track logical block address 73102",
    ]
    assert lines[5:] == hex_dump(content)


def test_windows_legacy_mcdi_with_wrong_count_is_plain_text() -> None:
    content = "5+96+5A3B".encode("utf-16-le")

    assert interpret_binary_frame(content)[0] == "5+96+5A3B"


def test_lame_mcdi() -> None:
    content = _lame_toc()

    assert interpret_binary_frame(content)[:5] == [
        "first track: 1",
        "last track: 2",
        "track 1 logical block address 150",
        "track 2 logical block address 1150",
        "leadout track logical block address 2150",
    ]
    assert decode_lame_mcdi(content[:20]) is None
    assert decode_lame_mcdi(b"\x00") is None


def test_unknown_binary_is_hex_dumped() -> None:
    assert interpret_binary_frame(b"\x01\x02\x03") == hex_dump(b"\x01\x02\x03")


def test_format_length() -> None:
    assert format_length("215000") == "3:35.000"
    assert format_length("61001") == "1:01.001"
    assert format_length("") == "0:00.000"


def test_frame_description() -> None:
    assert frame_description("TIT2") == "Title/songname/content description"
    assert frame_description("ZZZZ") == "No description found"


def test_describe_id3v2_renders_each_frame() -> None:
    data = build_id3v2(
        [
            ("TIT2", text_body("Song")),
            ("TLEN", text_body("215000", encoding=0)),
            ("TXXX", b"\x03rating\x00five"),
            ("PRIV", b"\x01\x02"),
        ]
    )

    lines = describe_id3v2(ID3v2Tag.parse(data))

    assert lines == [
        'TIT2 (Title/songname/content description): "Song"',
        "TLEN (Length): 3:35.000",
        "TXXX (User defined text information frame): rating: five",
        "PRIV (Private frame): " + hex_dump(b"\x01\x02")[0],
    ]


def test_describe_id3v2_indents_multi_line_values() -> None:
    content = _lame_toc()
    lines = describe_id3v2(ID3v2Tag.parse(build_id3v2([("MCDI", content)])))

    assert lines[0] == "MCDI (Music CD identifier):"
    assert lines[1] == "    first track: 1"
    assert all(line.startswith("    ") for line in lines[1:])


def test_inspect_file_collects_everything(tmp_path: Path, mocker: MockerFixture) -> None:
    path = write_mp3(
        tmp_path / "01 Song.mp3",
        v2=build_id3v2([("TIT2", text_body("Song"))]),
        v1=build_id3v1(title="Song", track=1),
    )
    _ = mocker.patch(
        "mp3repair.features.inspection.usecases.diagnostics.read_stream_info",
        return_value=STREAM,
    )

    result = inspect_file(path)

    assert result.error is None
    assert result.id3v2_version == "2.3.0"
    assert result.id3v2_lines == ['TIT2 (Title/songname/content description): "Song"']
    assert len(result.id3v1_lines) == 6
    assert result.stream == STREAM


def test_inspect_file_reports_missing_tags_and_stream_error(
    tmp_path: Path, mocker: MockerFixture
) -> None:
    path = write_mp3(tmp_path / "bare.mp3")
    _ = mocker.patch(
        "mp3repair.features.inspection.usecases.diagnostics.read_stream_info",
        side_effect=HeaderNotFoundError("can't sync to MPEG frame"),
    )

    result = inspect_file(path)

    assert result.id3v1_error == "no ID3V1 metadata found"
    assert result.id3v2_error == "no ID3V2 metadata found"
    assert result.stream is None
    assert result.stream_error == "can't sync to MPEG frame"


def test_inspect_missing_file(tmp_path: Path) -> None:
    result = inspect_file(tmp_path / "absent.mp3")

    assert result.error is not None and result.error.startswith("FileOpen error")


def test_read_track_details_names_credit_frames(tmp_path: Path) -> None:
    path = write_mp3(
        tmp_path / "01 Song.mp3",
        v2=build_id3v2(
            [
                ("TIT2", text_body("Song")),
                ("TCOM", text_body("Writer")),
                ("TPE3", text_body("Maestro", encoding=0)),
            ],
            padding=8,
        ),
    )

    assert read_track_details(path) == {"Composer": "Writer", "Conductor": "Maestro"}


def test_read_track_details_without_id3v2(tmp_path: Path) -> None:
    path = write_mp3(tmp_path / "01 Song.mp3", v1=build_id3v1(title="Song"))

    assert read_track_details(path) == {}


def test_read_track_details_of_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileOperationError):
        _ = read_track_details(tmp_path / "absent.mp3")
