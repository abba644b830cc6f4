# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Batch tool options

Plain option records built by the command-line interface (or by callers
using the batch API directly) and validated before a run starts.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

from dnraw.exceptions import UnsupportedFormatError


SUPPORTED_INPUT_TYPES: Tuple[str, ...] = ('.nef', '.cr2')
SUPPORTED_OUTPUT_TYPES: Tuple[str, ...] = ('.jpg', '.png')


def normalize_type(extension: str) -> str:
    """Lower-case an extension and make sure it starts with a dot."""
    extension = extension.strip().lower()
    if extension and not extension.startswith('.'):
        extension = '.' + extension
    return extension


@dataclass
class ConversionOptions:
    """Options for the raw-to-compressed conversion tool."""
    source_dir: Union[str, Path]
    output_dir: Union[str, Path]
    input_type: str = '.nef'
    output_type: str = '.jpg'
    overwrite: bool = False
    recursive: bool = False
    retain_folder_structure: bool = False
    show_output: bool = False
    timestamp: bool = False

    def validate(self) -> "ConversionOptions":
        """
        Normalize paths and extensions and check they are supported.

        Raises:
            UnsupportedFormatError: If the input or output type is not supported
        """
        self.source_dir = Path(self.source_dir)
        self.output_dir = Path(self.output_dir)
        self.input_type = normalize_type(self.input_type)
        self.output_type = normalize_type(self.output_type)
        if self.input_type not in SUPPORTED_INPUT_TYPES:
            raise UnsupportedFormatError(f"Input type {self.input_type} not recognised/supported")
        if self.output_type not in SUPPORTED_OUTPUT_TYPES:
            raise UnsupportedFormatError(f"Output type {self.output_type} not recognised/supported.")
        return self


@dataclass
class ExportOptions:
    """Options for the IFD report export tool."""
    source_dir: Union[str, Path]
    output_dir: Union[str, Path]
    input_type: str = '.nef'
    overwrite: bool = False
    recursive: bool = False
    show_output: bool = False
    timestamp: bool = False

    def validate(self) -> "ExportOptions":
        """
        Normalize paths and the input extension.

        Raises:
            UnsupportedFormatError: If the input type is not supported
        """
        self.source_dir = Path(self.source_dir)
        self.output_dir = Path(self.output_dir)
        self.input_type = normalize_type(self.input_type)
        if self.input_type not in SUPPORTED_INPUT_TYPES:
            raise UnsupportedFormatError(f"Input type {self.input_type} not recognised/supported")
        return self
