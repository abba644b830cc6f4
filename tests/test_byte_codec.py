# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

from __future__ import annotations

import pytest

from dnraw.byte_codec import (
    Endian,
    endian_from_marker,
    to_uint16,
    to_uint32,
    to_uint32_list,
    to_uint64,
)
from dnraw.exceptions import ByteWidthError, DNRawError


def test_to_uint16_respects_endianness() -> None:
    assert to_uint16(b'\x01\x02', Endian.BIG) == 0x0102
    assert to_uint16(b'\x01\x02', Endian.LITTLE) == 0x0201


def test_to_uint32_respects_endianness() -> None:
    assert to_uint32(b'\x00\x00\x00\x08', Endian.BIG) == 8
    assert to_uint32(b'\x08\x00\x00\x00', Endian.LITTLE) == 8


def test_to_uint64_full_width() -> None:
    data = b'\x00\x00\x00\x00\x00\x00\x01\x00'
    assert to_uint64(data, Endian.BIG) == 256
    assert to_uint64(data, Endian.LITTLE) == 1 << 48


@pytest.mark.parametrize(
    ("func", "data"),
    [
        (to_uint16, b'\x01'),
        (to_uint16, b'\x01\x02\x03'),
        (to_uint32, b'\x01\x02'),
        (to_uint64, b'\x00' * 4),
    ],
)
def test_wrong_width_is_rejected(func, data: bytes) -> None:
    with pytest.raises(ByteWidthError) as excinfo:
        func(data, Endian.BIG)
    assert isinstance(excinfo.value, DNRawError)
    assert isinstance(excinfo.value, ValueError)


def test_to_uint32_list_keeps_file_order() -> None:
    data = b'\x00\x00\x00\x01\x00\x00\x00\x02\x00\x00\x00\x03'
    assert to_uint32_list(data, 3, Endian.BIG) == [1, 2, 3]
    with pytest.raises(ByteWidthError):
        to_uint32_list(data, 2, Endian.BIG)


def test_endian_marker_detection() -> None:
    assert endian_from_marker(b'II') is Endian.LITTLE
    assert endian_from_marker(b'MM') is Endian.BIG
    assert endian_from_marker(b'XY') is Endian.BIG
