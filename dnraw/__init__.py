# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
DNRaw - TIFF-based raw image decoding in Python

Reads the TIFF header and image file directories of camera raw files
(Nikon NEF, with Canon CR2 decoded but not converted), extracts the
embedded full-size JPEG preview of NEF files and re-encodes it as JPEG
or PNG. Includes batch tools for whole directory trees.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from dnraw.exceptions import (
    DNRawError,
    ByteWidthError,
    FileTooSmallError,
    TruncatedHeaderError,
    UnreadableIFDError,
    UnsupportedFormatError,
    PreviewDecodeError,
    OutputExistsError,
    OutputWriteError,
)
from dnraw.byte_codec import Endian, to_uint16, to_uint32, to_uint64, endian_from_marker
from dnraw.tiff_header import TiffHeader, parse_header, read_header
from dnraw.tag_registry import TagType, lookup_tag, tag_name
from dnraw.ifd import GpsIfd, ImageFileDirectory, SubfileType
from dnraw.ifd_decoder import IFDDecoder
from dnraw.raw_image import RawFormat, RawImage
from dnraw.preview import decode_jpeg, encode_image
from dnraw.exif_export import export_report, format_report
from dnraw.options import ConversionOptions, ExportOptions
from dnraw.batch import BatchResult, build_output_path, run_conversion, run_export

__all__ = [
    'DNRawError',
    'ByteWidthError',
    'FileTooSmallError',
    'TruncatedHeaderError',
    'UnreadableIFDError',
    'UnsupportedFormatError',
    'PreviewDecodeError',
    'OutputExistsError',
    'OutputWriteError',
    'Endian',
    'to_uint16',
    'to_uint32',
    'to_uint64',
    'endian_from_marker',
    'TiffHeader',
    'parse_header',
    'read_header',
    'TagType',
    'lookup_tag',
    'tag_name',
    'GpsIfd',
    'ImageFileDirectory',
    'SubfileType',
    'IFDDecoder',
    'RawFormat',
    'RawImage',
    'decode_jpeg',
    'encode_image',
    'export_report',
    'format_report',
    'ConversionOptions',
    'ExportOptions',
    'BatchResult',
    'build_output_path',
    'run_conversion',
    'run_export',
]
