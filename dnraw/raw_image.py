# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Raw image entity

A RawImage owns the file handle of one TIFF-based raw file for the
duration of decoding and conversion. NEF and CR2 files share the same
header and IFD decoding; only preview conversion differs, resolved
through the PreviewConverter registered for the image's RawFormat.

Copyright 2025 DNAi inc.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Union

from dnraw.exceptions import UnsupportedFormatError
from dnraw.ifd import ImageFileDirectory
from dnraw.ifd_decoder import IFDDecoder
from dnraw.preview import Cr2PreviewConverter, NefPreviewConverter, PreviewConverter
from dnraw.tiff_header import TiffHeader, read_header


logger = logging.getLogger(__name__)


class RawFormat(Enum):
    """Raw file variants, keyed by file extension."""
    NEF = '.nef'
    CR2 = '.cr2'

    @classmethod
    def from_extension(cls, extension: str) -> "RawFormat":
        """
        Look up a variant by extension (case-insensitive, leading dot optional).

        Raises:
            UnsupportedFormatError: If the extension is not a supported raw type
        """
        extension = extension.lower()
        if not extension.startswith('.'):
            extension = '.' + extension
        for raw_format in cls:
            if raw_format.value == extension:
                return raw_format
        raise UnsupportedFormatError(f"Input type {extension} not recognised/supported")

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "RawFormat":
        return cls.from_extension(Path(path).suffix)


PREVIEW_CONVERTERS: Dict[RawFormat, PreviewConverter] = {
    RawFormat.NEF: NefPreviewConverter(),
    RawFormat.CR2: Cr2PreviewConverter(),
}


def converter_for(raw_format: RawFormat) -> PreviewConverter:
    """Return the preview converter for a raw format."""
    return PREVIEW_CONVERTERS[raw_format]


class RawImage:
    """
    One raw file being decoded.

    Use as a context manager so the handle is closed on every exit path:

        >>> with RawImage('photo.nef') as image:
        ...     image.load()
        ...     image.convert('photo.jpg')
    """

    def __init__(
        self,
        path: Union[str, Path],
        raw_format: Optional[RawFormat] = None,
        strict: bool = False,
        log: Optional[logging.Logger] = None
    ):
        """
        Initialize the raw image. The file is not opened until needed.

        Args:
            path: Path to the raw file
            raw_format: Variant to use; detected from the extension if omitted
            strict: Report skipped tag type mismatches as warnings
            log: Logger for decode traces (defaults to the module logger)
        """
        self.path = Path(path)
        self.format = raw_format or RawFormat.from_path(self.path)
        self.strict = strict
        self.log = log or logger
        self.handle: Optional[BinaryIO] = None
        self.header: Optional[TiffHeader] = None
        self.ifds: List[ImageFileDirectory] = []
        self.preview_bytes: Optional[bytes] = None
        self.warnings: List[str] = []

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"RawImage({str(self.path)!r}, {self.format.name})"

    @property
    def is_open(self) -> bool:
        return self.handle is not None and not self.handle.closed

    @property
    def converter(self) -> PreviewConverter:
        return converter_for(self.format)

    def open(self) -> BinaryIO:
        """Open the file handle if it is not already open."""
        if not self.is_open:
            self.handle = open(self.path, 'rb')
        return self.handle

    def close(self) -> None:
        """Release the file handle."""
        if self.handle is not None:
            self.handle.close()
            self.handle = None

    def load(self) -> List[ImageFileDirectory]:
        """
        Decode the header, IFD0, and every Sub-IFD listed by IFD0.

        A GPS directory referenced by a decoded IFD is decoded straight
        away and attached to it.

        Returns:
            Decoded IFDs: IFD0 first, then Sub-IFDs in offset-list order

        Raises:
            FileTooSmallError, TruncatedHeaderError, UnreadableIFDError
        """
        self.open()
        self.log.debug(f"Parsing {self.path} image data")
        self.header = read_header(self.handle)
        if not self.header.is_valid_magic:
            self.log.debug(f"Unexpected TIFF magic number {self.header.magic_number}")

        decoder = IFDDecoder(self.handle, self.header.endian, strict=self.strict, log=self.log)
        self.ifds = []

        self.log.debug("Parsing IFD0:")
        ifd0 = self._read_ifd(decoder, self.header.first_ifd_offset)
        self.ifds.append(ifd0)

        for index, offset in enumerate(ifd0.sub_ifd_offsets):
            self.log.debug(f"Parsing SubIFD{index}:")
            self.ifds.append(self._read_ifd(decoder, offset))

        self.warnings = list(decoder.warnings)
        return self.ifds

    def _read_ifd(self, decoder: IFDDecoder, offset: int) -> ImageFileDirectory:
        ifd = decoder.read_directory(offset)
        if ifd.gps_info_offset:
            self.log.debug(f"GPS SubIFD pointer -> {ifd.gps_info_offset}")
            ifd.gps_ifd = decoder.read_gps_directory(ifd.gps_info_offset)
        return ifd

    def decode_preview(self) -> Optional[bytes]:
        """Read the embedded preview bytes (see PreviewConverter.decode_preview)."""
        self.open()
        return self.converter.decode_preview(self)

    def convert(self, output_path: Union[str, Path], overwrite: bool = False) -> Optional[Path]:
        """
        Convert the embedded preview to the output path's format.

        The handle is closed afterwards, whether conversion succeeds or not.

        Returns:
            The output path, or None if there was nothing to convert
        """
        try:
            self.open()
            return self.converter.convert(self, output_path, overwrite)
        finally:
            self.close()
