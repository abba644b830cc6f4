# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IFD report export

Renders the decoded directories of a raw image as a plain-text report,
one block per IFD plus a block for each GPS directory.

Copyright 2025 DNAi inc.
"""

from pathlib import Path
from typing import List, Optional, Union

from dnraw.exceptions import OutputExistsError, OutputWriteError
from dnraw.ifd import GpsIfd
from dnraw.raw_image import RawImage


def _line(label: str, value: Optional[str]) -> str:
    return f"{label} -> {value.strip(chr(0))}\n"


def _format_gps(gps_ifd: GpsIfd) -> List[str]:
    lines = ["--------- START GPS IFD ---------\n"]
    if gps_ifd.version_id is not None:
        lines.append(f"GPS Version -> {list(gps_ifd.version_id)}\n")
    lines.append(f"GPS Time -> {gps_ifd.time_stamp or []}\n")
    if gps_ifd.satellites:
        lines.append(_line("GPS Satellites", gps_ifd.satellites))
    lines.append("--------- END GPS IFD ---------\n\n")
    return lines


def format_report(image: RawImage) -> str:
    """
    Build the text report for an already loaded raw image.

    Args:
        image: RawImage whose IFDs have been decoded

    Returns:
        Report text
    """
    lines: List[str] = []
    for index, ifd in enumerate(image.ifds):
        lines.append(f"--------- START IFD{index} START ---------\n")
        if ifd.bits_per_sample:
            lines.append(f"Bits per sample -> {ifd.bits_per_sample}\n")
        if ifd.model:
            lines.append(_line("Camera model", ifd.model))
        if ifd.make:
            lines.append(_line("Camera make", ifd.make))
        lines.append(f"--------- END IFD{index} END  ---------\n\n")

        if ifd.gps_ifd is not None:
            lines.extend(_format_gps(ifd.gps_ifd))
    return "".join(lines)


def export_report(
    image: RawImage,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Decode a raw image and write its IFD report.

    The image handle is closed afterwards, whether export succeeds or not.

    Raises:
        OutputExistsError: If the output exists and overwrite is False
        OutputWriteError: If the report cannot be written
        DNRawError: If the image cannot be decoded
    """
    output_path = Path(output_path)
    if output_path.exists() and not overwrite:
        raise OutputExistsError(f"Output result file already exists: {output_path}")

    try:
        image.load()
    finally:
        image.close()

    try:
        output_path.write_text(format_report(image), encoding='utf-8')
    except OSError as e:
        raise OutputWriteError(f"Cannot write {output_path}: {e}") from e
    return output_path
