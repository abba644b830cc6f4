# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Image File Directory decoder

Walks the 12-byte tag records of one IFD on an open file handle and
fills in an ImageFileDirectory (or a GpsIfd for GPS directories).

Each record is laid out as:

    tag ID (2) | data type (2) | element count (4) | value or offset (4)

Values whose total size fits in 4 bytes are stored in the record itself,
left-justified; larger values live at the absolute file offset given in
the last field. All seeks are absolute, since the same handle is shared
by every nested directory read.

Tags are matched against the tag registry. Unrecognised tags are
ignored, and a recognised tag whose declared type differs from the
expected type is skipped without error. With strict=True each skipped
mismatch is also recorded in IFDDecoder.warnings and logged.

Copyright 2025 DNAi inc.
"""

import logging
import os
import struct
from typing import Any, BinaryIO, List, NamedTuple, Optional, Tuple, Union

from dnraw.byte_codec import Endian, to_uint16, to_uint32
from dnraw.exceptions import UnreadableIFDError
from dnraw.ifd import GpsIfd, ImageFileDirectory, SubfileType
from dnraw.tag_registry import TagDefinition, TagType, lookup_tag, tag_name, type_size


logger = logging.getLogger(__name__)

TAG_RECORD_SIZE = 12

# struct codes for numeric element types
_NUMERIC_CODES = {
    TagType.SBYTE: 'b',
    TagType.SHORT: 'H',
    TagType.SSHORT: 'h',
    TagType.LONG: 'I',
    TagType.SLONG: 'i',
    TagType.FLOAT: 'f',
    TagType.DOUBLE: 'd',
}


class TagRecord(NamedTuple):
    """One raw 12-byte directory entry."""
    tag_id: int
    data_type: int
    count: int
    value_or_offset: int
    value_bytes: bytes

    @classmethod
    def from_bytes(cls, data: bytes, endian: Endian) -> "TagRecord":
        return cls(
            tag_id=to_uint16(data[0:2], endian),
            data_type=to_uint16(data[2:4], endian),
            count=to_uint32(data[4:8], endian),
            value_or_offset=to_uint32(data[8:12], endian),
            value_bytes=bytes(data[8:12]),
        )

    @property
    def total_size(self) -> Optional[int]:
        """Size of the value in bytes, None for an unknown type code."""
        size = type_size(self.data_type)
        if size is None:
            return None
        return size * self.count


DirectoryTarget = Union[ImageFileDirectory, GpsIfd]


class IFDDecoder:
    """
    Decoder for the Image File Directories of one open TIFF file.

    The decoder never owns the handle; it is owned by the RawImage that
    opened it.
    """

    def __init__(
        self,
        handle: BinaryIO,
        endian: Endian,
        strict: bool = False,
        log: Optional[logging.Logger] = None
    ):
        """
        Initialize the decoder.

        Args:
            handle: Open binary file object
            endian: Byte order from the TIFF header
            strict: Record skipped type mismatches as warnings
            log: Logger for field traces (defaults to the module logger)
        """
        self.handle = handle
        self.endian = endian
        self.strict = strict
        self.log = log or logger
        self.warnings: List[str] = []
        self.file_size = self._measure()

    def read_directory(self, offset: int) -> ImageFileDirectory:
        """
        Decode the IFD at an absolute file offset.

        Raises:
            UnreadableIFDError: If the directory cannot be read
        """
        ifd = ImageFileDirectory(offset=offset)
        records, next_offset = self._read_records(offset)
        ifd.next_ifd_offset = next_offset
        for record in records:
            self._apply(ifd, record, gps=False)
        return ifd

    def read_gps_directory(self, offset: int) -> GpsIfd:
        """
        Decode the GPS IFD at an absolute file offset.

        Raises:
            UnreadableIFDError: If the directory cannot be read
        """
        gps_ifd = GpsIfd(offset=offset)
        records, _ = self._read_records(offset)
        for record in records:
            self._apply(gps_ifd, record, gps=True)
        return gps_ifd

    def _measure(self) -> int:
        try:
            return self.handle.seek(0, os.SEEK_END)
        except (OSError, ValueError) as e:
            raise UnreadableIFDError(f"Cannot determine file size: {e}") from e

    def _read_at(self, offset: int, size: int) -> bytes:
        # Element counts come from the file; never read past its end
        if offset + size > self.file_size:
            raise UnreadableIFDError(
                f"Cannot read {size} bytes at offset {offset}: "
                f"past end of file ({self.file_size} bytes)"
            )
        try:
            self.handle.seek(offset, os.SEEK_SET)
            data = self.handle.read(size)
        except (OSError, ValueError) as e:
            raise UnreadableIFDError(f"Cannot read {size} bytes at offset {offset}: {e}") from e
        if len(data) != size:
            raise UnreadableIFDError(
                f"Short read at offset {offset}: expected {size} bytes, got {len(data)}"
            )
        return data

    def _read_records(self, offset: int) -> Tuple[List[TagRecord], int]:
        tag_count = to_uint16(self._read_at(offset, 2), self.endian)
        body = self._read_at(offset + 2, tag_count * TAG_RECORD_SIZE)

        records = [
            TagRecord.from_bytes(body[i:i + TAG_RECORD_SIZE], self.endian)
            for i in range(0, len(body), TAG_RECORD_SIZE)
        ]

        # A missing next-IFD pointer at end of file just ends the chain
        next_offset = 0
        try:
            next_offset = to_uint32(
                self._read_at(offset + 2 + len(body), 4), self.endian
            )
        except UnreadableIFDError:
            pass
        return records, next_offset

    def _warn(self, message: str) -> None:
        if self.strict:
            self.warnings.append(message)
            self.log.warning(message)

    def _apply(self, target: DirectoryTarget, record: TagRecord, gps: bool) -> None:
        definition = lookup_tag(record.tag_id, gps)
        if definition is None or definition.field is None:
            self.log.debug(f"Ignoring {describe_record(record, gps)}")
            return

        if record.data_type != definition.expected_type:
            self._warn(
                f"{definition.name} (0x{record.tag_id:04X}) has type "
                f"{record.data_type}, expected {definition.expected_type.name}; skipped"
            )
            return

        if definition.field == 'maker_note_offset':
            # Payload is vendor specific and never interpreted; a payload
            # of 4 bytes or less sits in the record, so there is no offset
            if record.total_size <= 4:
                self.log.debug(f"{definition.name} stored inline, no offset")
                return
            self.log.debug(f"{definition.name} offset -> {record.value_or_offset}")
            target.maker_note_offset = record.value_or_offset
            return

        value = self._shape(self._decode_values(record), definition)
        if value is None:
            return
        if definition.field == 'subfile_type':
            value = SubfileType.from_flags(value)

        self.log.debug(f"{definition.name} -> {value}")
        setattr(target, definition.field, value)

    def _raw_value(self, record: TagRecord) -> bytes:
        total_size = record.total_size
        if total_size <= 4:
            return record.value_bytes[:total_size]
        return self._read_at(record.value_or_offset, total_size)

    def _decode_values(self, record: TagRecord) -> Any:
        """Decode every element of a record according to its data type."""
        tag_type = TagType(record.data_type)
        data = self._raw_value(record)

        if tag_type == TagType.ASCII:
            # Strings are NUL-terminated; anything after the first NUL is padding
            return data.split(b'\x00', 1)[0].decode('ascii', errors='replace')

        if tag_type in (TagType.BYTE, TagType.UNDEFINED):
            return data

        if tag_type in (TagType.RATIONAL, TagType.SRATIONAL):
            code = 'I' if tag_type == TagType.RATIONAL else 'i'
            values = struct.unpack(f'{self.endian.value}{record.count * 2}{code}', data)
            return [(values[i], values[i + 1]) for i in range(0, len(values), 2)]

        code = _NUMERIC_CODES[tag_type]
        return list(struct.unpack(f'{self.endian.value}{record.count}{code}', data))

    @staticmethod
    def _shape(values: Any, definition: TagDefinition) -> Any:
        if isinstance(values, str) or definition.multi:
            return values
        if len(values) == 0:
            return None
        return values[0]


def describe_record(record: TagRecord, gps: bool = False) -> str:
    """One-line description of a raw record, used in debug dumps."""
    return (
        f"{tag_name(record.tag_id, gps)} (0x{record.tag_id:04X}) "
        f"type={record.data_type} count={record.count} "
        f"value/offset={record.value_or_offset}"
    )
