# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for DNRaw

Two batch tools over a directory of raw files:

    dnraw convert  extract embedded previews as JPEG or PNG
    dnraw export   write a plain-text IFD report per raw file

Copyright 2025 DNAi inc.
"""

import argparse
import sys
from typing import List, Optional

from dnraw import __version__
from dnraw.batch import run_conversion, run_export
from dnraw.exceptions import DNRawError
from dnraw.log import setup_logger
from dnraw.options import ConversionOptions, ExportOptions


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-id', '--input-dir', dest='input_dir', required=True,
                        help='Directory containing the raw images')
    parser.add_argument('-od', '--output-dir', dest='output_dir', required=True,
                        help='Directory to write results to')
    parser.add_argument('-it', '--input-type', dest='input_type', default='.nef',
                        help='Raw file extension to process (.nef, .cr2)')
    parser.add_argument('-ow', '--overwrite', action='store_true',
                        help='Overwrite existing output files')
    parser.add_argument('-rs', '--recursive', action='store_true',
                        help='Also process subdirectories')
    parser.add_argument('-so', '--show-output', dest='show_output', action='store_true',
                        help='Report every processed file')
    parser.add_argument('-ts', '--timestamp', action='store_true',
                        help='Report how long the run took')
    parser.add_argument('--debug', action='store_true',
                        help='Print decoding traces')


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the convert and export commands."""
    parser = argparse.ArgumentParser(
        prog='dnraw',
        description="DNRaw - Decode TIFF-based raw images and extract their embedded previews",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert every NEF in a directory to JPEG
  dnraw convert -id photos -od previews -it .nef -ot .jpg

  # Convert recursively to PNG, keeping the folder layout
  dnraw convert -id photos -od previews -ot .png -rs -fs

  # Write IFD reports
  dnraw export -id photos -od reports
        """
    )
    parser.add_argument('-V', '--version', action='store_true', help='Print version number')
    commands = parser.add_subparsers(dest='command')

    convert = commands.add_parser('convert', help='Convert embedded previews to JPEG or PNG')
    _add_common_arguments(convert)
    convert.add_argument('-ot', '--output-type', dest='output_type', default='.jpg',
                         help='Output extension (.jpg, .png)')
    convert.add_argument('-fs', '--folder-structure', dest='retain_folder_structure',
                         action='store_true',
                         help='Recreate the input folder structure under the output directory')

    export = commands.add_parser('export', help='Write a text report of each image\'s IFDs')
    _add_common_arguments(export)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"DNRaw {__version__}")
        return 0
    if not args.command:
        parser.print_help()
        return 1

    setup_logger("debug" if args.debug else "info")

    try:
        if args.command == 'convert':
            result = run_conversion(ConversionOptions(
                source_dir=args.input_dir,
                output_dir=args.output_dir,
                input_type=args.input_type,
                output_type=args.output_type,
                overwrite=args.overwrite,
                recursive=args.recursive,
                retain_folder_structure=args.retain_folder_structure,
                show_output=args.show_output,
                timestamp=args.timestamp,
            ))
        else:
            result = run_export(ExportOptions(
                source_dir=args.input_dir,
                output_dir=args.output_dir,
                input_type=args.input_type,
                overwrite=args.overwrite,
                recursive=args.recursive,
                show_output=args.show_output,
                timestamp=args.timestamp,
            ))
    except (DNRawError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result.converted_count)
    return 0


if __name__ == '__main__':
    sys.exit(main())
