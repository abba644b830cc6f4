# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Image File Directory data model

Typed containers filled in by the IFD decoder. A field left at None was
either absent from the directory or carried a data type the decoder
does not accept for that tag.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple


Rational = Tuple[int, int]


class SubfileType(IntEnum):
    """Kind of image described by a directory (NewSubfileType flags)."""
    FULL_RESOLUTION = 0
    REDUCED_RESOLUTION = 1
    SINGLE_PAGE = 2
    TRANSPARENCY_MASK = 3
    MRC_IMAGING_MODEL = 4

    @classmethod
    def from_flags(cls, flags: int) -> "SubfileType":
        """Map the NewSubfileType bit field to the first matching kind."""
        if flags & 0x1:
            return cls.REDUCED_RESOLUTION
        if flags & 0x2:
            return cls.SINGLE_PAGE
        if flags & 0x4:
            return cls.TRANSPARENCY_MASK
        if flags & 0x8:
            return cls.MRC_IMAGING_MODEL
        return cls.FULL_RESOLUTION


@dataclass
class GpsIfd:
    """Sparse record of the tags found in a GPS directory."""
    offset: int = 0
    version_id: Optional[bytes] = None
    latitude_ref: Optional[str] = None
    latitude: Optional[List[Rational]] = None
    longitude_ref: Optional[str] = None
    longitude: Optional[List[Rational]] = None
    altitude_ref: Optional[int] = None
    altitude: Optional[Rational] = None
    time_stamp: Optional[List[Rational]] = None
    satellites: Optional[str] = None
    status: Optional[str] = None
    measure_mode: Optional[str] = None
    dop: Optional[Rational] = None
    speed_ref: Optional[str] = None
    speed: Optional[Rational] = None
    track_ref: Optional[str] = None
    track: Optional[Rational] = None
    img_direction_ref: Optional[str] = None
    img_direction: Optional[Rational] = None
    map_datum: Optional[str] = None
    date_stamp: Optional[str] = None


@dataclass
class ImageFileDirectory:
    """
    Decoded Image File Directory.

    Pointer tags (ExifOffset, GPSInfo, SubIFDs) are kept as absolute file
    offsets; the directories they point at are decoded by the caller.
    """
    offset: int = 0
    next_ifd_offset: int = 0
    subfile_type: Optional[SubfileType] = None
    image_width: Optional[int] = None
    image_height: Optional[int] = None
    image_full_width: Optional[int] = None
    image_full_height: Optional[int] = None
    bits_per_sample: Optional[List[int]] = None
    compression: Optional[int] = None
    photometric_interpretation: Optional[int] = None
    make: Optional[str] = None
    model: Optional[str] = None
    strip_offsets: Optional[List[int]] = None
    orientation: Optional[int] = None
    samples_per_pixel: Optional[int] = None
    rows_per_strip: Optional[int] = None
    strip_byte_counts: Optional[List[int]] = None
    x_resolution: Optional[Rational] = None
    y_resolution: Optional[Rational] = None
    planar_configuration: Optional[int] = None
    resolution_unit: Optional[int] = None
    software: Optional[str] = None
    date_time: Optional[str] = None
    artist: Optional[str] = None
    copyright: Optional[str] = None
    sub_ifd_offsets: List[int] = field(default_factory=list)
    reference_black_white: Optional[List[Rational]] = None
    exif_offset: Optional[int] = None
    gps_info_offset: Optional[int] = None
    gps_ifd: Optional[GpsIfd] = None
    date_time_original: Optional[str] = None
    tiff_ep_standard_id: Optional[bytes] = None
    jpeg_from_raw_start: Optional[int] = None
    jpeg_from_raw_length: Optional[int] = None
    ycbcr_positioning: Optional[int] = None
    cfa_repeat_pattern_dim: Optional[List[int]] = None
    cfa_pattern: Optional[bytes] = None
    sensing_method: Optional[int] = None
    maker_note_offset: Optional[int] = None

    @property
    def has_embedded_jpeg(self) -> bool:
        """True if both preview location tags were decoded."""
        return bool(self.jpeg_from_raw_start) and bool(self.jpeg_from_raw_length)
