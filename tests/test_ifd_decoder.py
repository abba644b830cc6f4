# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

from __future__ import annotations

from io import BytesIO

import pytest

from conftest import ASCII, LONG, RATIONAL, SHORT, UNDEFINED, TiffWriter
from dnraw.byte_codec import Endian
from dnraw.exceptions import UnreadableIFDError
from dnraw.ifd import SubfileType
from dnraw.ifd_decoder import TagRecord, IFDDecoder
from dnraw.raw_image import RawImage


def test_load_decodes_ifd0_and_sub_ifds(nef_factory, endian: str) -> None:
    path = nef_factory(endian=endian)
    with RawImage(path) as image:
        ifds = image.load()

    assert len(ifds) == 3
    ifd0 = ifds[0]
    assert ifd0.make == "NIKON CORPORATION"
    assert ifd0.model == "NIKON D850"
    assert ifd0.software == "Ver.1.10"
    assert ifd0.date_time == "2024:05:01 12:30:00"
    assert ifd0.image_width == 160
    assert ifd0.image_height == 120
    assert ifd0.bits_per_sample == [8, 8, 8]
    assert ifd0.orientation == 1
    assert ifd0.subfile_type is SubfileType.REDUCED_RESOLUTION
    assert ifd0.next_ifd_offset == 0

    preview_ifd = ifds[1]
    assert preview_ifd.has_embedded_jpeg
    assert preview_ifd.x_resolution == (300, 1)
    assert preview_ifd.resolution_unit == 2

    raw_ifd = ifds[2]
    assert raw_ifd.subfile_type is SubfileType.FULL_RESOLUTION
    assert raw_ifd.bits_per_sample == [14]
    assert raw_ifd.compression == 34713
    assert raw_ifd.cfa_repeat_pattern_dim == [2, 2]
    assert raw_ifd.cfa_pattern == b'\x00\x01\x01\x02'
    assert raw_ifd.sensing_method == 2


def test_sub_ifds_follow_offset_list_order(nef_factory) -> None:
    path = nef_factory(sub_ifd_count=3)
    with RawImage(path) as image:
        ifds = image.load()

    assert len(ifds) == 1 + len(ifds[0].sub_ifd_offsets) == 4
    assert [ifd.offset for ifd in ifds[1:]] == ifds[0].sub_ifd_offsets


def test_file_without_sub_ifds_has_one_directory(nef_factory) -> None:
    path = nef_factory(sub_ifd_count=0)
    with RawImage(path) as image:
        ifds = image.load()
    assert len(ifds) == 1
    assert ifds[0].sub_ifd_offsets == []


def test_gps_directory_is_attached(nef_factory, endian: str) -> None:
    path = nef_factory(endian=endian, with_gps=True)
    with RawImage(path) as image:
        ifds = image.load()

    gps_ifd = ifds[0].gps_ifd
    assert gps_ifd is not None
    assert gps_ifd.offset == ifds[0].gps_info_offset
    assert gps_ifd.version_id == b'\x02\x03\x00\x00'
    assert gps_ifd.latitude_ref == "N"
    assert gps_ifd.latitude == [(51, 1), (30, 1), (0, 1)]
    assert gps_ifd.time_stamp == [(12, 1), (30, 1), (5, 1)]
    assert gps_ifd.satellites == "07"
    assert ifds[1].gps_ifd is None


def test_type_mismatch_is_skipped(nef_factory) -> None:
    path = nef_factory(extra_ifd0=[(0x0128, LONG, 2)])
    with RawImage(path) as image:
        ifds = image.load()
    assert ifds[0].resolution_unit is None
    assert image.warnings == []


def test_strict_mode_records_type_mismatches(nef_factory) -> None:
    path = nef_factory(extra_ifd0=[(0x0128, LONG, 2)])
    with RawImage(path, strict=True) as image:
        ifds = image.load()
    assert ifds[0].resolution_unit is None
    assert len(image.warnings) == 1
    assert "ResolutionUnit" in image.warnings[0]


def test_unknown_tags_are_ignored(nef_factory) -> None:
    path = nef_factory(extra_ifd0=[(0xFFF0, LONG, 5)])
    with RawImage(path, strict=True) as image:
        ifds = image.load()
    assert ifds[0].make == "NIKON CORPORATION"
    assert image.warnings == []


def test_maker_note_offset_only(nef_factory) -> None:
    payload = b'Nikon\x00\x02\x10\x00\x00'
    path = nef_factory(extra_ifd0=[(0x927C, UNDEFINED, payload)])
    with RawImage(path) as image:
        ifds = image.load()

    offset = ifds[0].maker_note_offset
    data = path.read_bytes()
    assert data[offset:offset + len(payload)] == payload


def test_directory_past_end_of_file_is_unreadable() -> None:
    writer = TiffWriter('>')
    writer.add_ifd([(0x0100, LONG, 1)])
    handle = BytesIO(writer.finish(first_ifd_offset=5000))

    decoder = IFDDecoder(handle, Endian.BIG)
    with pytest.raises(UnreadableIFDError):
        decoder.read_directory(5000)


def test_out_of_line_value_past_end_is_unreadable() -> None:
    writer = TiffWriter('<')
    offset = writer.add_ifd([(0x0100, LONG, 1)])
    data = bytearray(writer.finish(offset))
    # Rewrite the single record as a 20-byte ASCII value stored at 4000
    record = offset + 2
    data[record:record + 12] = (
        (0x010F).to_bytes(2, 'little') + (2).to_bytes(2, 'little')
        + (20).to_bytes(4, 'little') + (4000).to_bytes(4, 'little')
    )

    decoder = IFDDecoder(BytesIO(bytes(data)), Endian.LITTLE)
    with pytest.raises(UnreadableIFDError):
        decoder.read_directory(offset)


def test_tag_record_inline_value_is_left_justified() -> None:
    record = TagRecord.from_bytes(
        b'\x01\x12\x00\x03\x00\x00\x00\x01\x00\x06\x00\x00', Endian.BIG
    )
    assert record.tag_id == 0x0112
    assert record.data_type == SHORT
    assert record.total_size == 2
    assert record.value_bytes[:2] == b'\x00\x06'


@pytest.mark.parametrize(
    ("tag_id", "tag_type", "value"),
    [(0x010F, ASCII, "NIKON"), (0x011A, RATIONAL, [(300, 1)])],
    ids=["ascii", "rational"],
)
def test_corrupt_element_count_is_rejected_before_reading(tag_id, tag_type, value) -> None:
    writer = TiffWriter('<')
    offset = writer.add_ifd([(tag_id, tag_type, value)])
    data = bytearray(writer.finish(offset))
    count_at = offset + 2 + 4
    data[count_at:count_at + 4] = (0xFFFFFFFF).to_bytes(4, 'little')

    decoder = IFDDecoder(BytesIO(bytes(data)), Endian.LITTLE)
    with pytest.raises(UnreadableIFDError) as excinfo:
        decoder.read_directory(offset)
    assert "past end of file" in str(excinfo.value)


def test_inline_maker_note_has_no_offset(nef_factory) -> None:
    path = nef_factory(extra_ifd0=[(0x927C, UNDEFINED, b'\x01\x02\x03\x04')])
    with RawImage(path) as image:
        ifds = image.load()
    assert ifds[0].maker_note_offset is None
