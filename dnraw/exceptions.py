# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for DNRaw

Every error raised while decoding a raw file or converting its embedded
preview derives from DNRawError, so batch callers can treat one bad file
as a recoverable failure and carry on with the next one.

Copyright 2025 DNAi inc.
"""


class DNRawError(Exception):
    """
    Base exception for all DNRaw errors.

    All DNRaw exceptions inherit from this class, allowing
    catch-all error handling for any decoding or conversion failure.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class ByteWidthError(DNRawError, ValueError):
    """
    Raised when a byte buffer does not have the exact width requested
    from the byte codec (2, 4 or 8 bytes).
    """
    pass


class FileTooSmallError(DNRawError):
    """
    Raised when a raw file is too small to hold a usable TIFF structure.

    Files of 1024 bytes or fewer are rejected before the header is read.
    """
    pass


class TruncatedHeaderError(DNRawError):
    """
    Raised when fewer than the 8 TIFF header bytes could be read.
    """
    pass


class UnreadableIFDError(DNRawError):
    """
    Raised when an Image File Directory cannot be read.

    This exception is raised when:
    - Seeking to the directory offset fails
    - The tag count or the directory body is cut short by end of file
    """
    pass


class UnsupportedFormatError(DNRawError):
    """
    Raised when the requested format is not supported.

    This exception is raised when:
    - A CR2 preview conversion is requested
    - The input or output extension is not a recognised type
    """
    pass


class PreviewDecodeError(DNRawError):
    """
    Raised when the embedded preview bytes are not a decodable JPEG.
    """
    pass


class OutputExistsError(DNRawError):
    """
    Raised when the conversion output already exists and overwriting
    was not requested. The existing file is left untouched.
    """
    pass


class OutputWriteError(DNRawError):
    """
    Raised when an output file cannot be created or written.
    """
    pass
