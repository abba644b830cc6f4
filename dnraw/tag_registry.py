# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF tag registry

Immutable lookup tables mapping tag IDs to their name, the data type the
decoder expects, and a semantic category. Entries with a field name are
decoded into the matching ImageFileDirectory / GpsIfd attribute; the
remaining entries are recognised by name only.

Based on the TIFF 6.0, TIFF/EP, EXIF 2.3 and DNG 1.4 tag dictionaries.

Copyright 2025 DNAi inc.
"""

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, NamedTuple, Optional


class TagType(IntEnum):
    """TIFF field data types"""
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    SBYTE = 6
    UNDEFINED = 7
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10
    FLOAT = 11
    DOUBLE = 12


# Element sizes in bytes
TAG_SIZES: Mapping[TagType, int] = MappingProxyType({
    TagType.BYTE: 1,
    TagType.ASCII: 1,
    TagType.SHORT: 2,
    TagType.LONG: 4,
    TagType.RATIONAL: 8,
    TagType.SBYTE: 1,
    TagType.UNDEFINED: 1,
    TagType.SSHORT: 2,
    TagType.SLONG: 4,
    TagType.SRATIONAL: 8,
    TagType.FLOAT: 4,
    TagType.DOUBLE: 8,
})


class TagCategory(Enum):
    """Semantic grouping of a tag."""
    TIFF = "tiff"
    EXIF = "exif"
    DNG = "dng"
    PREVIEW = "preview"
    POINTER = "pointer"
    MAKER = "maker"
    GPS = "gps"


class TagDefinition(NamedTuple):
    """One registry entry."""
    tag_id: int
    name: str
    expected_type: TagType
    category: TagCategory
    field: Optional[str] = None  # attribute the decoded value is stored in
    multi: bool = False          # keep every element instead of the first


def _build(definitions: Iterable[TagDefinition]) -> Mapping[int, TagDefinition]:
    table: Dict[int, TagDefinition] = {}
    for definition in definitions:
        table[definition.tag_id] = definition
    return MappingProxyType(table)


_T = TagType
_C = TagCategory
_D = TagDefinition


TAG_REGISTRY: Mapping[int, TagDefinition] = _build([
    # ============================================================
    # Baseline and extended TIFF tags
    # ============================================================
    _D(0x00FE, "SubfileType", _T.LONG, _C.TIFF, "subfile_type"),
    _D(0x00FF, "OldSubfileType", _T.SHORT, _C.TIFF),
    _D(0x0100, "ImageWidth", _T.LONG, _C.TIFF, "image_width"),
    _D(0x0101, "ImageHeight", _T.LONG, _C.TIFF, "image_height"),
    _D(0x0102, "BitsPerSample", _T.SHORT, _C.TIFF, "bits_per_sample", True),
    _D(0x0103, "Compression", _T.SHORT, _C.TIFF, "compression"),
    _D(0x0106, "PhotometricInterpretation", _T.SHORT, _C.TIFF, "photometric_interpretation"),
    _D(0x0107, "Thresholding", _T.SHORT, _C.TIFF),
    _D(0x0108, "CellWidth", _T.SHORT, _C.TIFF),
    _D(0x0109, "CellLength", _T.SHORT, _C.TIFF),
    _D(0x010A, "FillOrder", _T.SHORT, _C.TIFF),
    _D(0x010D, "DocumentName", _T.ASCII, _C.TIFF),
    _D(0x010E, "ImageDescription", _T.ASCII, _C.TIFF),
    _D(0x010F, "Make", _T.ASCII, _C.TIFF, "make"),
    _D(0x0110, "Model", _T.ASCII, _C.TIFF, "model"),
    _D(0x0111, "StripOffsets", _T.LONG, _C.TIFF, "strip_offsets", True),
    _D(0x0112, "Orientation", _T.SHORT, _C.TIFF, "orientation"),
    _D(0x0115, "SamplesPerPixel", _T.SHORT, _C.TIFF, "samples_per_pixel"),
    _D(0x0116, "RowsPerStrip", _T.LONG, _C.TIFF, "rows_per_strip"),
    _D(0x0117, "StripByteCounts", _T.LONG, _C.TIFF, "strip_byte_counts", True),
    _D(0x0118, "MinSampleValue", _T.SHORT, _C.TIFF),
    _D(0x0119, "MaxSampleValue", _T.SHORT, _C.TIFF),
    _D(0x011A, "XResolution", _T.RATIONAL, _C.TIFF, "x_resolution"),
    _D(0x011B, "YResolution", _T.RATIONAL, _C.TIFF, "y_resolution"),
    _D(0x011C, "PlanarConfiguration", _T.SHORT, _C.TIFF, "planar_configuration"),
    _D(0x011D, "PageName", _T.ASCII, _C.TIFF),
    _D(0x011E, "XPosition", _T.RATIONAL, _C.TIFF),
    _D(0x011F, "YPosition", _T.RATIONAL, _C.TIFF),
    _D(0x0120, "FreeOffsets", _T.LONG, _C.TIFF),
    _D(0x0121, "FreeByteCounts", _T.LONG, _C.TIFF),
    _D(0x0122, "GrayResponseUnit", _T.SHORT, _C.TIFF),
    _D(0x0123, "GrayResponseCurve", _T.SHORT, _C.TIFF),
    _D(0x0124, "T4Options", _T.LONG, _C.TIFF),
    _D(0x0125, "T6Options", _T.LONG, _C.TIFF),
    _D(0x0128, "ResolutionUnit", _T.SHORT, _C.TIFF, "resolution_unit"),
    _D(0x0129, "PageNumber", _T.SHORT, _C.TIFF),
    _D(0x012C, "ColorResponseUnit", _T.SHORT, _C.TIFF),
    _D(0x012D, "TransferFunction", _T.SHORT, _C.TIFF),
    _D(0x0131, "Software", _T.ASCII, _C.TIFF, "software"),
    _D(0x0132, "ModifyDate", _T.ASCII, _C.TIFF, "date_time"),
    _D(0x013B, "Artist", _T.ASCII, _C.TIFF, "artist"),
    _D(0x013C, "HostComputer", _T.ASCII, _C.TIFF),
    _D(0x013D, "Predictor", _T.SHORT, _C.TIFF),
    _D(0x013E, "WhitePoint", _T.RATIONAL, _C.TIFF),
    _D(0x013F, "PrimaryChromaticities", _T.RATIONAL, _C.TIFF),
    _D(0x0140, "ColorMap", _T.SHORT, _C.TIFF),
    _D(0x0141, "HalftoneHints", _T.SHORT, _C.TIFF),
    _D(0x0142, "TileWidth", _T.LONG, _C.TIFF),
    _D(0x0143, "TileLength", _T.LONG, _C.TIFF),
    _D(0x0144, "TileOffsets", _T.LONG, _C.TIFF),
    _D(0x0145, "TileByteCounts", _T.LONG, _C.TIFF),
    _D(0x014A, "SubIFDs", _T.LONG, _C.POINTER, "sub_ifd_offsets", True),
    _D(0x014C, "InkSet", _T.SHORT, _C.TIFF),
    _D(0x014D, "InkNames", _T.ASCII, _C.TIFF),
    _D(0x014E, "NumberOfInks", _T.SHORT, _C.TIFF),
    _D(0x0150, "DotRange", _T.BYTE, _C.TIFF),
    _D(0x0151, "TargetPrinter", _T.ASCII, _C.TIFF),
    _D(0x0152, "ExtraSamples", _T.SHORT, _C.TIFF),
    _D(0x0153, "SampleFormat", _T.SHORT, _C.TIFF),
    _D(0x015B, "JPEGTables", _T.UNDEFINED, _C.TIFF),
    _D(0x0200, "JPEGProc", _T.SHORT, _C.TIFF),

    # ============================================================
    # Embedded preview location (JpgFromRaw / PreviewImage / Thumbnail)
    # ============================================================
    _D(0x0201, "JpgFromRawStart", _T.LONG, _C.PREVIEW, "jpeg_from_raw_start"),
    _D(0x0202, "JpgFromRawLength", _T.LONG, _C.PREVIEW, "jpeg_from_raw_length"),
    _D(0x0203, "JPEGRestartInterval", _T.SHORT, _C.TIFF),
    _D(0x0211, "YCbCrCoefficients", _T.RATIONAL, _C.TIFF),
    _D(0x0212, "YCbCrSubSampling", _T.SHORT, _C.TIFF),
    _D(0x0213, "YCbCrPositioning", _T.SHORT, _C.TIFF, "ycbcr_positioning"),
    _D(0x0214, "ReferenceBlackWhite", _T.RATIONAL, _C.TIFF, "reference_black_white", True),
    _D(0x02BC, "ApplicationNotes", _T.BYTE, _C.TIFF),
    _D(0x4746, "Rating", _T.SHORT, _C.TIFF),
    _D(0x4749, "RatingPercent", _T.SHORT, _C.TIFF),

    # ============================================================
    # TIFF/EP and EXIF tags found in IFD0 of raw files
    # ============================================================
    _D(0x8214, "ImageFullWidth", _T.LONG, _C.TIFF, "image_full_width"),
    _D(0x8215, "ImageFullHeight", _T.LONG, _C.TIFF, "image_full_height"),
    _D(0x828D, "CFARepeatPatternDim", _T.SHORT, _C.EXIF, "cfa_repeat_pattern_dim", True),
    _D(0x828E, "CFAPattern2", _T.BYTE, _C.EXIF, "cfa_pattern", True),
    _D(0x828F, "BatteryLevel", _T.RATIONAL, _C.EXIF),
    _D(0x8298, "Copyright", _T.ASCII, _C.TIFF, "copyright"),
    _D(0x829A, "ExposureTime", _T.RATIONAL, _C.EXIF),
    _D(0x829D, "FNumber", _T.RATIONAL, _C.EXIF),
    _D(0x83BB, "IPTC-NAA", _T.LONG, _C.TIFF),
    _D(0x8649, "PhotoshopSettings", _T.BYTE, _C.TIFF),
    _D(0x8769, "ExifOffset", _T.LONG, _C.POINTER, "exif_offset"),
    _D(0x8773, "ICC_Profile", _T.UNDEFINED, _C.TIFF),
    _D(0x8822, "ExposureProgram", _T.SHORT, _C.EXIF),
    _D(0x8824, "SpectralSensitivity", _T.ASCII, _C.EXIF),
    _D(0x8825, "GPSInfo", _T.LONG, _C.POINTER, "gps_info_offset"),
    _D(0x8827, "ISO", _T.SHORT, _C.EXIF),
    _D(0x8828, "Opto-ElectricConvFactor", _T.UNDEFINED, _C.EXIF),
    _D(0x8829, "Interlace", _T.SHORT, _C.EXIF),
    _D(0x882A, "TimeZoneOffset", _T.SSHORT, _C.EXIF),
    _D(0x882B, "SelfTimerMode", _T.SHORT, _C.EXIF),
    _D(0x9000, "ExifVersion", _T.UNDEFINED, _C.EXIF),
    _D(0x9003, "DateTimeOriginal", _T.ASCII, _C.EXIF, "date_time_original"),
    _D(0x9004, "CreateDate", _T.ASCII, _C.EXIF),
    _D(0x9101, "ComponentsConfiguration", _T.UNDEFINED, _C.EXIF),
    _D(0x9102, "CompressedBitsPerPixel", _T.RATIONAL, _C.EXIF),
    _D(0x9201, "ShutterSpeedValue", _T.SRATIONAL, _C.EXIF),
    _D(0x9202, "ApertureValue", _T.RATIONAL, _C.EXIF),
    _D(0x9203, "BrightnessValue", _T.SRATIONAL, _C.EXIF),
    _D(0x9204, "ExposureCompensation", _T.SRATIONAL, _C.EXIF),
    _D(0x9205, "MaxApertureValue", _T.RATIONAL, _C.EXIF),
    _D(0x9206, "SubjectDistance", _T.RATIONAL, _C.EXIF),
    _D(0x9207, "MeteringMode", _T.SHORT, _C.EXIF),
    _D(0x9208, "LightSource", _T.SHORT, _C.EXIF),
    _D(0x9209, "Flash", _T.SHORT, _C.EXIF),
    _D(0x920A, "FocalLength", _T.RATIONAL, _C.EXIF),
    _D(0x9211, "ImageNumber", _T.LONG, _C.EXIF),
    _D(0x9212, "SecurityClassification", _T.ASCII, _C.EXIF),
    _D(0x9213, "ImageHistory", _T.ASCII, _C.EXIF),
    _D(0x9214, "SubjectArea", _T.SHORT, _C.EXIF),
    _D(0x9216, "TIFF-EPStandardID", _T.BYTE, _C.EXIF, "tiff_ep_standard_id", True),
    _D(0x9217, "SensingMethod", _T.SHORT, _C.EXIF, "sensing_method"),
    _D(0x927C, "MakerNote", _T.UNDEFINED, _C.MAKER, "maker_note_offset"),
    _D(0x9286, "UserComment", _T.UNDEFINED, _C.EXIF),
    _D(0x9290, "SubSecTime", _T.ASCII, _C.EXIF),
    _D(0x9291, "SubSecTimeOriginal", _T.ASCII, _C.EXIF),
    _D(0x9292, "SubSecTimeDigitized", _T.ASCII, _C.EXIF),
    _D(0xA000, "FlashpixVersion", _T.UNDEFINED, _C.EXIF),
    _D(0xA001, "ColorSpace", _T.SHORT, _C.EXIF),
    _D(0xA002, "ExifImageWidth", _T.LONG, _C.EXIF),
    _D(0xA003, "ExifImageHeight", _T.LONG, _C.EXIF),
    _D(0xA005, "InteropOffset", _T.LONG, _C.POINTER),
    _D(0xA217, "SensingMethod", _T.SHORT, _C.EXIF),
    _D(0xA300, "FileSource", _T.UNDEFINED, _C.EXIF),
    _D(0xA301, "SceneType", _T.UNDEFINED, _C.EXIF),
    _D(0xA302, "CFAPattern", _T.UNDEFINED, _C.EXIF),
    _D(0xA401, "CustomRendered", _T.SHORT, _C.EXIF),
    _D(0xA402, "ExposureMode", _T.SHORT, _C.EXIF),
    _D(0xA403, "WhiteBalance", _T.SHORT, _C.EXIF),
    _D(0xA404, "DigitalZoomRatio", _T.RATIONAL, _C.EXIF),
    _D(0xA405, "FocalLengthIn35mmFormat", _T.SHORT, _C.EXIF),
    _D(0xA406, "SceneCaptureType", _T.SHORT, _C.EXIF),
    _D(0xA407, "GainControl", _T.SHORT, _C.EXIF),
    _D(0xA408, "Contrast", _T.SHORT, _C.EXIF),
    _D(0xA409, "Saturation", _T.SHORT, _C.EXIF),
    _D(0xA40A, "Sharpness", _T.SHORT, _C.EXIF),
    _D(0xA40C, "SubjectDistanceRange", _T.SHORT, _C.EXIF),
    _D(0xA420, "ImageUniqueID", _T.ASCII, _C.EXIF),
    _D(0xA430, "OwnerName", _T.ASCII, _C.EXIF),
    _D(0xA431, "SerialNumber", _T.ASCII, _C.EXIF),
    _D(0xA432, "LensInfo", _T.RATIONAL, _C.EXIF),
    _D(0xA433, "LensMake", _T.ASCII, _C.EXIF),
    _D(0xA434, "LensModel", _T.ASCII, _C.EXIF),
    _D(0xA435, "LensSerialNumber", _T.ASCII, _C.EXIF),

    # ============================================================
    # DNG tags
    # ============================================================
    _D(0xC612, "DNGVersion", _T.BYTE, _C.DNG),
    _D(0xC613, "DNGBackwardVersion", _T.BYTE, _C.DNG),
    _D(0xC614, "UniqueCameraModel", _T.ASCII, _C.DNG),
    _D(0xC615, "LocalizedCameraModel", _T.BYTE, _C.DNG),
    _D(0xC616, "CFAPlaneColor", _T.BYTE, _C.DNG),
    _D(0xC617, "CFALayout", _T.SHORT, _C.DNG),
    _D(0xC618, "LinearizationTable", _T.SHORT, _C.DNG),
    _D(0xC619, "BlackLevelRepeatDim", _T.SHORT, _C.DNG),
    _D(0xC61A, "BlackLevel", _T.RATIONAL, _C.DNG),
    _D(0xC61D, "WhiteLevel", _T.LONG, _C.DNG),
    _D(0xC61E, "DefaultScale", _T.RATIONAL, _C.DNG),
    _D(0xC61F, "DefaultCropOrigin", _T.RATIONAL, _C.DNG),
    _D(0xC620, "DefaultCropSize", _T.RATIONAL, _C.DNG),
    _D(0xC621, "ColorMatrix1", _T.SRATIONAL, _C.DNG),
    _D(0xC622, "ColorMatrix2", _T.SRATIONAL, _C.DNG),
    _D(0xC623, "CameraCalibration1", _T.SRATIONAL, _C.DNG),
    _D(0xC624, "CameraCalibration2", _T.SRATIONAL, _C.DNG),
    _D(0xC627, "AnalogBalance", _T.RATIONAL, _C.DNG),
    _D(0xC628, "AsShotNeutral", _T.RATIONAL, _C.DNG),
    _D(0xC62A, "BaselineExposure", _T.SRATIONAL, _C.DNG),
    _D(0xC62B, "BaselineNoise", _T.RATIONAL, _C.DNG),
    _D(0xC62C, "BaselineSharpness", _T.RATIONAL, _C.DNG),
    _D(0xC62D, "BayerGreenSplit", _T.LONG, _C.DNG),
    _D(0xC62E, "LinearResponseLimit", _T.RATIONAL, _C.DNG),
    _D(0xC62F, "CameraSerialNumber", _T.ASCII, _C.DNG),
    _D(0xC630, "DNGLensInfo", _T.RATIONAL, _C.DNG),
    _D(0xC633, "ShadowScale", _T.RATIONAL, _C.DNG),
    _D(0xC634, "DNGPrivateData", _T.BYTE, _C.DNG),
    _D(0xC635, "MakerNoteSafety", _T.SHORT, _C.DNG),
    _D(0xC65A, "CalibrationIlluminant1", _T.SHORT, _C.DNG),
    _D(0xC65B, "CalibrationIlluminant2", _T.SHORT, _C.DNG),
    _D(0xC68B, "OriginalRawFileName", _T.BYTE, _C.DNG),
    _D(0xC68D, "ActiveArea", _T.LONG, _C.DNG),
    _D(0xC68E, "MaskedAreas", _T.LONG, _C.DNG),
    _D(0xC6F3, "CameraCalibrationSig", _T.BYTE, _C.DNG),
    _D(0xC6F8, "ProfileName", _T.BYTE, _C.DNG),
    _D(0xC714, "ForwardMatrix1", _T.SRATIONAL, _C.DNG),
    _D(0xC715, "ForwardMatrix2", _T.SRATIONAL, _C.DNG),
    _D(0xC71A, "PreviewColorSpace", _T.LONG, _C.DNG),
    _D(0xC740, "OpcodeList1", _T.UNDEFINED, _C.DNG),
    _D(0xC741, "OpcodeList2", _T.UNDEFINED, _C.DNG),
    _D(0xC74E, "OpcodeList3", _T.UNDEFINED, _C.DNG),
    _D(0xC761, "NoiseProfile", _T.DOUBLE, _C.DNG),

    # ============================================================
    # Sony raw correction tags (recognised only)
    # ============================================================
    _D(0x7000, "SonyRawFileType", _T.SHORT, _C.MAKER),
    _D(0x7010, "SonyToneCurve", _T.SHORT, _C.MAKER),
    _D(0x7031, "VignettingCorrection", _T.SSHORT, _C.MAKER),
    _D(0x7032, "VignettingCorrParams", _T.SSHORT, _C.MAKER),
    _D(0x7034, "ChromaticAberrationCorrection", _T.SSHORT, _C.MAKER),
    _D(0x7035, "ChromaticAberrationCorrParams", _T.SSHORT, _C.MAKER),
    _D(0x7036, "DistortionCorrection", _T.SSHORT, _C.MAKER),
    _D(0x7037, "DistortionCorrParams", _T.SSHORT, _C.MAKER),
])


GPS_TAG_REGISTRY: Mapping[int, TagDefinition] = _build([
    # ============================================================
    # GPS IFD tags (0x0000 - 0x001F)
    # ============================================================
    _D(0x0000, "GPSVersionID", _T.BYTE, _C.GPS, "version_id", True),
    _D(0x0001, "GPSLatitudeRef", _T.ASCII, _C.GPS, "latitude_ref"),
    _D(0x0002, "GPSLatitude", _T.RATIONAL, _C.GPS, "latitude", True),
    _D(0x0003, "GPSLongitudeRef", _T.ASCII, _C.GPS, "longitude_ref"),
    _D(0x0004, "GPSLongitude", _T.RATIONAL, _C.GPS, "longitude", True),
    _D(0x0005, "GPSAltitudeRef", _T.BYTE, _C.GPS, "altitude_ref"),
    _D(0x0006, "GPSAltitude", _T.RATIONAL, _C.GPS, "altitude"),
    _D(0x0007, "GPSTimeStamp", _T.RATIONAL, _C.GPS, "time_stamp", True),
    _D(0x0008, "GPSSatellites", _T.ASCII, _C.GPS, "satellites"),
    _D(0x0009, "GPSStatus", _T.ASCII, _C.GPS, "status"),
    _D(0x000A, "GPSMeasureMode", _T.ASCII, _C.GPS, "measure_mode"),
    _D(0x000B, "GPSDOP", _T.RATIONAL, _C.GPS, "dop"),
    _D(0x000C, "GPSSpeedRef", _T.ASCII, _C.GPS, "speed_ref"),
    _D(0x000D, "GPSSpeed", _T.RATIONAL, _C.GPS, "speed"),
    _D(0x000E, "GPSTrackRef", _T.ASCII, _C.GPS, "track_ref"),
    _D(0x000F, "GPSTrack", _T.RATIONAL, _C.GPS, "track"),
    _D(0x0010, "GPSImgDirectionRef", _T.ASCII, _C.GPS, "img_direction_ref"),
    _D(0x0011, "GPSImgDirection", _T.RATIONAL, _C.GPS, "img_direction"),
    _D(0x0012, "GPSMapDatum", _T.ASCII, _C.GPS, "map_datum"),
    _D(0x0013, "GPSDestLatitudeRef", _T.ASCII, _C.GPS),
    _D(0x0014, "GPSDestLatitude", _T.RATIONAL, _C.GPS),
    _D(0x0015, "GPSDestLongitudeRef", _T.ASCII, _C.GPS),
    _D(0x0016, "GPSDestLongitude", _T.RATIONAL, _C.GPS),
    _D(0x0017, "GPSDestBearingRef", _T.ASCII, _C.GPS),
    _D(0x0018, "GPSDestBearing", _T.RATIONAL, _C.GPS),
    _D(0x0019, "GPSDestDistanceRef", _T.ASCII, _C.GPS),
    _D(0x001A, "GPSDestDistance", _T.RATIONAL, _C.GPS),
    _D(0x001B, "GPSProcessingMethod", _T.UNDEFINED, _C.GPS),
    _D(0x001C, "GPSAreaInformation", _T.UNDEFINED, _C.GPS),
    _D(0x001D, "GPSDateStamp", _T.ASCII, _C.GPS, "date_stamp"),
    _D(0x001E, "GPSDifferential", _T.SHORT, _C.GPS),
    _D(0x001F, "GPSHPositioningError", _T.RATIONAL, _C.GPS),
])


def lookup_tag(tag_id: int, gps: bool = False) -> Optional[TagDefinition]:
    """Return the registry entry for a tag ID, or None if unrecognised."""
    registry = GPS_TAG_REGISTRY if gps else TAG_REGISTRY
    return registry.get(tag_id)


def tag_name(tag_id: int, gps: bool = False) -> str:
    """Return the tag name, or Unknown_XXXX for unrecognised tags."""
    definition = lookup_tag(tag_id, gps)
    if definition is None:
        return f"Unknown_{tag_id:04X}"
    return definition.name


def type_size(type_code: int) -> Optional[int]:
    """Element size in bytes for a raw type code, None for unknown codes."""
    try:
        return TAG_SIZES[TagType(type_code)]
    except ValueError:
        return None
