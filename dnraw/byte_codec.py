# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Byte order codec

Converts raw byte sequences read from a TIFF file into unsigned
integers under the byte order declared by the file header.

Copyright 2025 DNAi inc.
"""

import struct
from enum import Enum
from typing import List

from dnraw.exceptions import ByteWidthError


# Byte order markers found in the first two bytes of a TIFF file
BIG_ENDIAN_MARKER = 0x4D4D     # b'MM'
LITTLE_ENDIAN_MARKER = 0x4949  # b'II'


class Endian(Enum):
    """Byte order of a TIFF file. Values are struct format prefixes."""
    BIG = '>'
    LITTLE = '<'


def _unpack(data: bytes, width: int, code: str, endian: Endian) -> int:
    if len(data) != width:
        raise ByteWidthError(
            f"Expected {width} bytes for conversion, got {len(data)}"
        )
    return struct.unpack(f'{endian.value}{code}', data)[0]


def to_uint16(data: bytes, endian: Endian) -> int:
    """
    Convert exactly two bytes to an unsigned 16-bit integer.

    Raises:
        ByteWidthError: If data is not exactly 2 bytes long
    """
    return _unpack(data, 2, 'H', endian)


def to_uint32(data: bytes, endian: Endian) -> int:
    """
    Convert exactly four bytes to an unsigned 32-bit integer.

    Raises:
        ByteWidthError: If data is not exactly 4 bytes long
    """
    return _unpack(data, 4, 'I', endian)


def to_uint64(data: bytes, endian: Endian) -> int:
    """
    Convert exactly eight bytes to an unsigned 64-bit integer.

    Raises:
        ByteWidthError: If data is not exactly 8 bytes long
    """
    return _unpack(data, 8, 'Q', endian)


def to_uint32_list(data: bytes, count: int, endian: Endian) -> List[int]:
    """
    Split count x 4 contiguous bytes into count unsigned 32-bit integers,
    in file order.
    """
    if len(data) != count * 4:
        raise ByteWidthError(
            f"Expected {count * 4} bytes for {count} values, got {len(data)}"
        )
    return [to_uint32(data[i:i + 4], endian) for i in range(0, len(data), 4)]


def endian_from_marker(data: bytes) -> Endian:
    """
    Detect byte order from the two-byte TIFF marker.

    The marker is always read most-significant byte first. Anything other
    than the little-endian marker falls back to big-endian.
    """
    if to_uint16(data, Endian.BIG) == LITTLE_ENDIAN_MARKER:
        return Endian.LITTLE
    return Endian.BIG
