# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Shared fixtures: a small writer for synthetic TIFF/NEF files.

Copyright 2025 DNAi inc.
"""

from __future__ import annotations

import struct
from io import BytesIO
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple

import pytest
from PIL import Image

BYTE = 1
ASCII = 2
SHORT = 3
LONG = 4
RATIONAL = 5
UNDEFINED = 7

Entry = Tuple[int, int, Any]


class TiffWriter:
    """
    Lays out a TIFF file piece by piece.

    Blobs and directories are appended in the order they are added, so a
    directory that points at another one must be added after it.
    """

    def __init__(self, endian: str = '>') -> None:
        self.endian = endian
        self.buf = bytearray(8)

    def add_blob(self, data: bytes) -> int:
        offset = len(self.buf)
        self.buf += data
        return offset

    def _encode(self, tag_type: int, value: Any) -> Tuple[int, bytes]:
        if tag_type == ASCII:
            data = value.encode('ascii') + b'\x00'
            return len(data), data
        if tag_type in (BYTE, UNDEFINED):
            data = bytes(value)
            return len(data), data
        values = value if isinstance(value, (list, tuple)) else [value]
        if tag_type == SHORT:
            return len(values), struct.pack(f'{self.endian}{len(values)}H', *values)
        if tag_type == LONG:
            return len(values), struct.pack(f'{self.endian}{len(values)}I', *values)
        if tag_type == RATIONAL:
            flat = [part for pair in values for part in pair]
            return len(values), struct.pack(f'{self.endian}{len(flat)}I', *flat)
        raise ValueError(f"unsupported type {tag_type}")

    def add_ifd(self, entries: Sequence[Entry], next_offset: int = 0) -> int:
        records = []
        for tag_id, tag_type, value in sorted(entries, key=lambda e: e[0]):
            count, data = self._encode(tag_type, value)
            if len(data) <= 4:
                field = data.ljust(4, b'\x00')
            else:
                field = struct.pack(f'{self.endian}I', self.add_blob(data))
            records.append(struct.pack(f'{self.endian}HHI', tag_id, tag_type, count) + field)

        offset = len(self.buf)
        self.buf += struct.pack(f'{self.endian}H', len(records))
        for record in records:
            self.buf += record
        self.buf += struct.pack(f'{self.endian}I', next_offset)
        return offset

    def finish(self, first_ifd_offset: int, magic: int = 42, pad_to: int = 2048) -> bytes:
        marker = b'II' if self.endian == '<' else b'MM'
        self.buf[0:8] = marker + struct.pack(f'{self.endian}HI', magic, first_ifd_offset)
        if len(self.buf) < pad_to:
            self.buf += b'\x00' * (pad_to - len(self.buf))
        return bytes(self.buf)


def make_jpeg(size: Tuple[int, int] = (64, 48), color: Tuple[int, int, int] = (200, 40, 40)) -> bytes:
    buffer = BytesIO()
    Image.new('RGB', size, color).save(buffer, 'JPEG', quality=90)
    return buffer.getvalue()


def build_nef(
    endian: str = '>',
    preview: Optional[bytes] = None,
    sub_ifd_count: int = 2,
    with_gps: bool = False,
    make: str = "NIKON CORPORATION",
    model: str = "NIKON D850",
    extra_ifd0: Sequence[Entry] = (),
) -> bytes:
    """
    A NEF-shaped file: IFD0 with Make/Model, then sub_ifd_count Sub-IFDs.
    SubIFD0 locates the preview JPEG (generated if not given).
    """
    writer = TiffWriter(endian)
    if sub_ifd_count:
        jpeg = make_jpeg() if preview is None else preview
        jpeg_offset = writer.add_blob(jpeg)

    sub_offsets: List[int] = []
    for index in range(sub_ifd_count):
        if index == 0:
            entries: List[Entry] = [
                (0x00FE, LONG, 1),
                (0x0103, SHORT, 6),
                (0x011A, RATIONAL, [(300, 1)]),
                (0x011B, RATIONAL, [(300, 1)]),
                (0x0128, SHORT, 2),
                (0x0201, LONG, jpeg_offset),
                (0x0202, LONG, len(jpeg)),
                (0x0213, SHORT, 2),
            ]
        else:
            entries = [
                (0x00FE, LONG, 0),
                (0x0100, LONG, 8288),
                (0x0101, LONG, 5520),
                (0x0102, SHORT, [14]),
                (0x0103, SHORT, 34713),
                (0x828D, SHORT, [2, 2]),
                (0x828E, BYTE, [0, 1, 1, 2]),
                (0x9217, SHORT, 2),
            ]
        sub_offsets.append(writer.add_ifd(entries))

    ifd0: List[Entry] = [
        (0x00FE, LONG, 1),
        (0x0100, LONG, 160),
        (0x0101, LONG, 120),
        (0x0102, SHORT, [8, 8, 8]),
        (0x0103, SHORT, 1),
        (0x010F, ASCII, make),
        (0x0110, ASCII, model),
        (0x0112, SHORT, 1),
        (0x0131, ASCII, "Ver.1.10"),
        (0x0132, ASCII, "2024:05:01 12:30:00"),
    ]
    if sub_offsets:
        ifd0.append((0x014A, LONG, sub_offsets))
    if with_gps:
        gps_offset = writer.add_ifd([
            (0x0000, BYTE, [2, 3, 0, 0]),
            (0x0001, ASCII, "N"),
            (0x0002, RATIONAL, [(51, 1), (30, 1), (0, 1)]),
            (0x0007, RATIONAL, [(12, 1), (30, 1), (5, 1)]),
            (0x0008, ASCII, "07"),
        ])
        ifd0.append((0x8825, LONG, gps_offset))
    ifd0.extend(extra_ifd0)

    return writer.finish(writer.add_ifd(ifd0))


@pytest.fixture(params=['>', '<'], ids=['big-endian', 'little-endian'])
def endian(request: pytest.FixtureRequest) -> str:
    return request.param


@pytest.fixture
def nef_factory(tmp_path: Path) -> Callable[..., Path]:
    """Write a synthetic NEF under tmp_path and return its path."""

    def factory(name: str = "photo.nef", directory: Optional[Path] = None, **kwargs: Any) -> Path:
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_bytes(build_nef(**kwargs))
        return path

    return factory
