"""
Module: builder.images.resizer

Purpose:
    Produce the print copies of the source images: resized to the planned
    size, turned upright according to EXIF, saved as JPEG. Jobs run on a
    thread pool; a failing job is reported and does not stop the others.

Key Classes:
    - ResizeJob: One source -> destination conversion
    - ResizeReport: Outcome of a batch

Key Functions:
    - resize_image(): Run a single job
    - resize_images(): Run a batch on a thread pool
    - is_up_to_date(): Freshness check on modification times

Dependencies:
    - concurrent.futures: Thread pool execution
    - PIL.Image: Resizing, rotation, JPEG encoding

Used By:
    - builder.controller: Resizes every planned image
"""

from __future__ import annotations

import logging
import os
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import Image

from photobook_toolkit.core.models import Dimensions, Orientation

logger = logging.getLogger(__name__)

JPEG_QUALITY = 90

_TRANSPOSITIONS = {
    # PIL rotates counter-clockwise
    Orientation.ROTATED_90_CW: Image.Transpose.ROTATE_270,
    Orientation.ROTATED_180: Image.Transpose.ROTATE_180,
    Orientation.ROTATED_270_CW: Image.Transpose.ROTATE_90,
}


@dataclass(frozen=True)
class ResizeJob:
    """
    A single resize.

    Attributes:
        source: Original image
        destination: Print copy to write
        target_dims: Size before rotation, from the planner
        orientation: EXIF orientation of the source
    """

    source: Path
    destination: Path
    target_dims: Dimensions
    orientation: Orientation = Orientation.UNKNOWN


@dataclass
class ResizeReport:
    """
    Outcome of a batch of resize jobs.

    Attributes:
        resized: Destinations written by this batch
        up_to_date: Destinations skipped because they were fresh
        failed: (job, error message) for every failed job
    """

    resized: List[Path] = field(default_factory=list)
    up_to_date: List[Path] = field(default_factory=list)
    failed: List[Tuple[ResizeJob, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def is_up_to_date(source: Path, destination: Path) -> bool:
    """
    Check whether a destination is at least as recent as its source.

    Returns False when either file cannot be stat'ed.
    """
    try:
        return source.stat().st_mtime <= destination.stat().st_mtime
    except OSError:
        return False


def resize_image(job: ResizeJob) -> bool:
    """
    Resize, reorient and save one image.

    Args:
        job: Resize job

    Returns:
        True if the destination was written, False if it was up to date

    Raises:
        OSError: If the source cannot be read or the destination written
        ValueError: If the target size is not usable
    """
    if is_up_to_date(job.source, job.destination):
        logger.info(f"no need to resize {job.source}, up to date")
        return False

    logger.info(f"resizing {job.source}")
    with Image.open(job.source) as im:
        resized = im.resize(job.target_dims, Image.Resampling.LANCZOS)

    transposition = _TRANSPOSITIONS.get(job.orientation)
    if transposition is not None:
        resized = resized.transpose(transposition)
    elif job.orientation is Orientation.FLIPPED:
        logger.info(f"Refusing to modify flipped image {job.source}")

    if resized.mode not in ("RGB", "L"):
        resized = resized.convert("RGB")

    _write_jpeg_atomic(resized, job.destination)
    return True


def resize_images(
    jobs: Sequence[ResizeJob],
    max_workers: Optional[int] = None,
) -> ResizeReport:
    """
    Run resize jobs on a thread pool.

    Each job is independent; failures are logged and collected in the
    report while the other jobs proceed.

    Args:
        jobs: Jobs to run
        max_workers: Thread count (None = CPU count)

    Returns:
        ResizeReport, with outcomes listed in job order

    Example:
        >>> report = resize_images(jobs, max_workers=4)
        >>> report.ok
        True
    """
    report = ResizeReport()
    if not jobs:
        return report

    workers = max_workers or os.cpu_count() or 1
    logger.info(f"resizing will be parallelized on {workers} threads")

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures: List[Future] = [executor.submit(resize_image, job) for job in jobs]
        for job, future in zip(jobs, futures):
            try:
                written = future.result()
            except Exception as e:
                logger.error(f"error resizing image {job.source}: {e}")
                report.failed.append((job, str(e)))
                continue
            if written:
                report.resized.append(job.destination)
            else:
                report.up_to_date.append(job.destination)

    logger.info(
        f"Resized {len(report.resized)} images "
        f"({len(report.up_to_date)} up to date, {len(report.failed)} failed)"
    )
    return report


def _write_jpeg_atomic(image: Image.Image, path: Path) -> None:
    """Synchronous atomic JPEG write."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="wb",
        suffix=".jpg",
        dir=path.parent,
        delete=False,
    ) as f:
        temp_path = Path(f.name)
        try:
            image.save(f, format="JPEG", quality=JPEG_QUALITY)
        except (OSError, ValueError):
            f.close()
            temp_path.unlink(missing_ok=True)
            raise

    temp_path.replace(path)
