# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Batch processing of raw image directories

A producer thread walks the source directory and feeds RawImage objects
into a bounded queue; a single consumer thread decodes and converts them
one at a time. When recursing, each subdirectory is walked by its own
child thread, and a directory's walk only finishes once all of its
children have been joined.

Once the whole walk is done, the producer sends a sentinel on a second
bounded control queue. The consumer only stops after it has seen the
sentinel and the image queue is empty, so no queued image is dropped.

A failure on one file is logged and the batch moves on to the next one.

Copyright 2025 DNAi inc.
"""

import logging
import os
import queue
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from dnraw.exceptions import OutputWriteError
from dnraw.exif_export import export_report
from dnraw.options import ConversionOptions, ExportOptions
from dnraw.raw_image import RawFormat, RawImage


logger = logging.getLogger(__name__)

QUEUE_SIZE = 32
# How long the consumer waits on an empty image queue before checking
# the control queue for the end-of-walk sentinel
POLL_INTERVAL = 0.05

_WALK_DONE = object()


@dataclass
class BatchResult:
    """Outcome of one batch run."""
    converted: List[Path] = field(default_factory=list)
    failed: List[Tuple[Path, str]] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    elapsed_ms: Optional[int] = None

    @property
    def converted_count(self) -> int:
        return len(self.converted)


def find_images(
    directory: Path,
    input_type: str,
    recursive: bool,
    image_queue: "queue.Queue[RawImage]",
    log: logging.Logger = logger
) -> None:
    """
    Queue every file in a directory whose extension matches input_type.

    With recursive set, each subdirectory is walked by a child thread;
    all children are joined before this call returns.
    """
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError as e:
        log.error(str(e))
        return

    raw_format = RawFormat.from_extension(input_type)
    children: List[threading.Thread] = []
    for entry in entries:
        if entry.is_dir():
            if recursive:
                child = threading.Thread(
                    target=find_images,
                    args=(Path(entry.path), input_type, recursive, image_queue, log),
                    name=f"walk-{entry.name}",
                )
                child.start()
                children.append(child)
        elif entry.name.lower().endswith(input_type):
            image_queue.put(RawImage(entry.path, raw_format, log=log))

    for child in children:
        child.join()


def run_pipeline(
    source_dir: Path,
    input_type: str,
    recursive: bool,
    handle_image: Callable[[RawImage], None],
    log: logging.Logger = logger
) -> None:
    """
    Walk source_dir on a producer thread and hand each discovered image
    to handle_image on a single consumer thread.

    Returns once every discovered image has been handled.
    """
    image_queue: "queue.Queue[RawImage]" = queue.Queue(maxsize=QUEUE_SIZE)
    control_queue: "queue.Queue[object]" = queue.Queue(maxsize=QUEUE_SIZE)

    def produce() -> None:
        try:
            find_images(source_dir, input_type, recursive, image_queue, log)
        finally:
            control_queue.put(_WALK_DONE)

    def consume() -> None:
        while True:
            try:
                image = image_queue.get(timeout=POLL_INTERVAL)
            except queue.Empty:
                try:
                    control_queue.get_nowait()
                except queue.Empty:
                    continue
                # Walk finished: everything it queued is already in image_queue
                while True:
                    try:
                        handle_image(image_queue.get_nowait())
                    except queue.Empty:
                        return
            handle_image(image)

    producer = threading.Thread(target=produce, name="find-images")
    consumer = threading.Thread(target=consume, name="process-images")
    producer.start()
    consumer.start()
    producer.join()
    consumer.join()


def build_output_path(
    image_path: Union[str, Path],
    source_dir: Union[str, Path],
    output_dir: Union[str, Path],
    output_type: str,
    retain_folder_structure: bool = False
) -> Path:
    """
    Destination for a converted image.

    The input extension is replaced by output_type (upper-cased when the
    input extension was upper case). With retain_folder_structure the
    image's directory relative to source_dir is kept under output_dir.
    """
    image_path = Path(image_path)
    extension = output_type.upper() if image_path.suffix.isupper() else output_type
    target_dir = Path(output_dir)
    if retain_folder_structure:
        target_dir = target_dir / image_path.parent.relative_to(source_dir)
    return target_dir / (image_path.stem + extension)


def _ensure_directory(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputWriteError(f"Cannot create directory {directory}: {e}") from e


def _process(
    image: RawImage,
    action: Callable[[RawImage], Optional[Path]],
    description: str,
    result: BatchResult,
    show_output: bool,
    log: logging.Logger
) -> None:
    if show_output:
        log.info(description)
    try:
        output_path = action(image)
    except Exception as e:
        log.error(f"{image.path} [FAILED] ({e})")
        result.failed.append((image.path, str(e)))
        return
    finally:
        image.close()

    if output_path is None:
        log.info(f"{image.path} [SKIPPED] (no embedded preview to convert)")
        result.skipped.append(image.path)
        return

    result.converted.append(output_path)
    if show_output:
        log.info(f"{image.path} [SUCCESS]")
    else:
        log.debug(f"{image.path} [SUCCESS]")


def _prepare(source_dir: Path, output_dir: Path) -> None:
    if not source_dir.is_dir():
        raise NotADirectoryError(f"Not a directory: {source_dir}")
    _ensure_directory(output_dir)


def run_conversion(
    options: ConversionOptions,
    log: Optional[logging.Logger] = None
) -> BatchResult:
    """
    Convert the embedded previews of every matching raw file.

    Args:
        options: Conversion options
        log: Logger to report progress to (defaults to the module logger)

    Returns:
        BatchResult with converted, failed and skipped files

    Raises:
        UnsupportedFormatError: If the options name unsupported types
        NotADirectoryError: If the source is not a directory
        OutputWriteError: If the output root cannot be created
    """
    log = log or logger
    options.validate()
    _prepare(options.source_dir, options.output_dir)

    result = BatchResult()
    started = time.monotonic()

    def convert(image: RawImage) -> Optional[Path]:
        output_path = build_output_path(
            image.path,
            options.source_dir,
            options.output_dir,
            options.output_type,
            options.retain_folder_structure,
        )
        if options.retain_folder_structure:
            _ensure_directory(output_path.parent)
        return image.convert(output_path, overwrite=options.overwrite)

    def handle(image: RawImage) -> None:
        _process(
            image,
            convert,
            f"Converting image {image.path} to {options.output_type}",
            result,
            options.show_output,
            log,
        )

    run_pipeline(options.source_dir, options.input_type, options.recursive, handle, log)

    count = result.converted_count
    log.info(f"Successfully converted {count} raw image{'s' if count > 1 else ''}")
    if options.timestamp:
        result.elapsed_ms = int((time.monotonic() - started) * 1000)
        log.info(f"Time taken: {result.elapsed_ms} ms")
    return result


def run_export(
    options: ExportOptions,
    log: Optional[logging.Logger] = None
) -> BatchResult:
    """
    Write an IFD report (<name>.txt) for every matching raw file.

    Returns:
        BatchResult whose converted list holds the written report paths
    """
    log = log or logger
    options.validate()
    _prepare(options.source_dir, options.output_dir)

    result = BatchResult()
    started = time.monotonic()

    def export(image: RawImage) -> Optional[Path]:
        output_path = Path(options.output_dir) / (image.path.stem + '.txt')
        return export_report(image, output_path, overwrite=options.overwrite)

    def handle(image: RawImage) -> None:
        _process(
            image,
            export,
            f"Exporting image {image.path} EXIFs",
            result,
            options.show_output,
            log,
        )

    run_pipeline(options.source_dir, options.input_type, options.recursive, handle, log)

    log.info(f"Exported {result.converted_count} IFD report(s)")
    if options.timestamp:
        result.elapsed_ms = int((time.monotonic() - started) * 1000)
        log.info(f"Time taken: {result.elapsed_ms} ms")
    return result
