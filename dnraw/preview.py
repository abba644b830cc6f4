# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Embedded preview extraction and re-encoding

Nikon NEF files carry a full-size baseline JPEG located by the
JpgFromRawStart / JpgFromRawLength tags of the first Sub-IFD. This
module reads those bytes, decodes them with Pillow and writes them back
out as JPEG or PNG.

Conversion behaviour is chosen per raw format through a small
PreviewConverter interface; CR2 previews are not supported.

Copyright 2025 DNAi inc.
"""

import logging
import os
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from PIL import Image, UnidentifiedImageError

from dnraw.exceptions import (
    OutputExistsError,
    OutputWriteError,
    PreviewDecodeError,
    UnsupportedFormatError,
)

if TYPE_CHECKING:
    from dnraw.raw_image import RawImage


logger = logging.getLogger(__name__)

JPEG_QUALITY = 95

# Output extension -> Pillow format name
OUTPUT_FORMATS = {
    '.jpg': 'JPEG',
    '.jpeg': 'JPEG',
    '.png': 'PNG',
}


def output_format_for(output_path: Union[str, Path]) -> str:
    """
    Pillow format name for an output path, chosen by its extension.

    Raises:
        UnsupportedFormatError: If the extension is not .jpg, .jpeg or .png
    """
    suffix = Path(output_path).suffix.lower()
    if suffix not in OUTPUT_FORMATS:
        raise UnsupportedFormatError(f"Output type {suffix or '(none)'} not recognised/supported")
    return OUTPUT_FORMATS[suffix]


def decode_jpeg(data: bytes) -> Image.Image:
    """
    Decode JPEG bytes into a fully loaded Pillow image.

    Raises:
        PreviewDecodeError: If the bytes are not a valid JPEG
    """
    try:
        picture = Image.open(BytesIO(data))
        picture.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise PreviewDecodeError(f"Embedded preview is not a valid JPEG: {e}") from e
    if picture.format != 'JPEG':
        raise PreviewDecodeError(f"Embedded preview is {picture.format}, not JPEG")
    return picture


def encode_image(
    picture: Image.Image,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Write a Pillow image as JPEG or PNG, depending on the output extension.

    The output is opened exclusively unless overwrite is set, so an
    existing file is never replaced by accident.

    Raises:
        UnsupportedFormatError: If the output extension is not supported
        OutputExistsError: If the output exists and overwrite is False
        OutputWriteError: If the output cannot be created or written
    """
    output_path = Path(output_path)
    image_format = output_format_for(output_path)

    if picture.mode not in ('RGB', 'L'):
        picture = picture.convert('RGB')

    save_options = {'quality': JPEG_QUALITY} if image_format == 'JPEG' else {}
    try:
        f = open(output_path, 'wb' if overwrite else 'xb')
    except FileExistsError as e:
        raise OutputExistsError(f"Output result file already exists: {output_path}") from e
    except OSError as e:
        raise OutputWriteError(f"Cannot create {output_path}: {e}") from e

    # From here on the file is ours (created or truncated by this call)
    try:
        with f:
            picture.save(f, image_format, **save_options)
    except (OSError, ValueError) as e:
        _discard(output_path)
        raise OutputWriteError(f"Cannot write {output_path}: {e}") from e
    return output_path


def _discard(path: Path) -> None:
    """Remove a partially written output, leaving the original error to report."""
    try:
        os.remove(path)
    except OSError as e:
        logger.warning(f"Could not remove partial output {path}: {e}")


class PreviewConverter:
    """
    Format-specific preview behaviour of a raw image.

    Subclasses implement decode_preview (locate and read the embedded
    preview bytes) and convert (write the preview to an output file).
    """

    def decode_preview(self, image: "RawImage") -> Optional[bytes]:
        raise NotImplementedError

    def convert(
        self,
        image: "RawImage",
        output_path: Union[str, Path],
        overwrite: bool = False
    ) -> Optional[Path]:
        raise NotImplementedError


class NefPreviewConverter(PreviewConverter):
    """Preview conversion for Nikon NEF files."""

    def decode_preview(self, image: "RawImage") -> Optional[bytes]:
        """
        Read the embedded JPEG located by the first Sub-IFD.

        Returns:
            The JPEG bytes, or None when fewer than two IFDs were decoded
            (nothing to convert)

        Raises:
            PreviewDecodeError: If the Sub-IFD has no preview location or
                the preview runs past the end of the file
        """
        if len(image.ifds) < 2:
            image.log.debug(f"{image.path}: fewer than two IFDs, no preview to extract")
            return None

        sub_ifd = image.ifds[1]
        if not sub_ifd.has_embedded_jpeg:
            raise PreviewDecodeError("SubIFD0 does not locate an embedded JPEG preview")

        handle = image.handle
        handle.seek(sub_ifd.jpeg_from_raw_start, os.SEEK_SET)
        data = handle.read(sub_ifd.jpeg_from_raw_length)
        if len(data) != sub_ifd.jpeg_from_raw_length:
            raise PreviewDecodeError(
                f"Embedded preview truncated: {len(data)} of "
                f"{sub_ifd.jpeg_from_raw_length} bytes"
            )

        image.preview_bytes = data
        return data

    def convert(
        self,
        image: "RawImage",
        output_path: Union[str, Path],
        overwrite: bool = False
    ) -> Optional[Path]:
        """
        Convert the embedded preview of a NEF to JPEG or PNG.

        Returns:
            The output path, or None if the image had nothing to convert

        Raises:
            OutputExistsError: If the output exists and overwrite is False
            PreviewDecodeError: If the preview is not a valid JPEG
            OutputWriteError: If the output cannot be written
        """
        output_path = Path(output_path)
        output_format_for(output_path)
        if output_path.exists() and not overwrite:
            raise OutputExistsError(f"Output result file already exists: {output_path}")

        if not image.ifds:
            image.load()

        data = self.decode_preview(image)
        if data is None:
            return None

        picture = decode_jpeg(data)
        image.log.debug(f"Decoded preview {picture.size[0]}x{picture.size[1]} ({picture.mode})")
        return encode_image(picture, output_path, overwrite)


class Cr2PreviewConverter(PreviewConverter):
    """Canon CR2 files decode their IFDs but have no preview conversion."""

    def decode_preview(self, image: "RawImage") -> Optional[bytes]:
        raise UnsupportedFormatError("CR2 preview extraction is not supported")

    def convert(
        self,
        image: "RawImage",
        output_path: Union[str, Path],
        overwrite: bool = False
    ) -> Optional[Path]:
        raise UnsupportedFormatError("CR2 conversion is not supported")
