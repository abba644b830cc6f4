# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF header parser

Reads and parses the 8-byte header at the start of every TIFF-based raw
file: byte order marker, magic number and the offset of IFD0.

Copyright 2025 DNAi inc.
"""

import os
from dataclasses import dataclass
from typing import BinaryIO

from dnraw.byte_codec import Endian, endian_from_marker, to_uint16, to_uint32
from dnraw.exceptions import FileTooSmallError, TruncatedHeaderError


HEADER_SIZE = 8
TIFF_MAGIC_NUMBER = 42
# Raw files at or under this size are rejected before the header is read
MIN_FILE_SIZE = 1024


@dataclass(frozen=True)
class TiffHeader:
    """Parsed TIFF file header."""
    endian: Endian
    magic_number: int
    first_ifd_offset: int

    @property
    def is_valid_magic(self) -> bool:
        """True if the magic number is the TIFF value 42."""
        return self.magic_number == TIFF_MAGIC_NUMBER


def parse_header(data: bytes) -> TiffHeader:
    """
    Parse the first 8 bytes of a TIFF file.

    An unrecognised byte order marker defaults to big-endian, and the
    magic number is stored as found, so neither is an error here.

    Args:
        data: Header bytes read from the start of the file

    Returns:
        Parsed TiffHeader

    Raises:
        TruncatedHeaderError: If fewer than 8 bytes are given
    """
    if len(data) < HEADER_SIZE:
        raise TruncatedHeaderError(
            f"Header incorrect length: {len(data)} of {HEADER_SIZE} bytes"
        )

    endian = endian_from_marker(data[0:2])
    return TiffHeader(
        endian=endian,
        magic_number=to_uint16(data[2:4], endian),
        first_ifd_offset=to_uint32(data[4:8], endian),
    )


def read_header(handle: BinaryIO) -> TiffHeader:
    """
    Read and parse the header of an open raw file.

    Args:
        handle: Binary file object positioned anywhere

    Returns:
        Parsed TiffHeader

    Raises:
        FileTooSmallError: If the file is 1024 bytes or smaller
        TruncatedHeaderError: If fewer than 8 bytes could be read
    """
    size = handle.seek(0, os.SEEK_END)
    if size <= MIN_FILE_SIZE:
        raise FileTooSmallError(f"File is less than 1KB in size ({size} bytes)")

    handle.seek(0, os.SEEK_SET)
    return parse_header(handle.read(HEADER_SIZE))
