"""EXIF metadata reader for PhotoRenamer."""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import exifread

from photorenamer.utils.constants import EXIF_DATE_FORMATS

logger = logging.getLogger(__name__)


class ExifReadError(Exception):
    """Error reading EXIF data."""

    pass


@dataclass(frozen=True)
class ExifCapture:
    """Raw capture moment as stored in the EXIF block."""

    date_time_original: str
    sub_sec_time_original: str = ""


def parse_exif_date(date_str: str) -> Optional[datetime]:
    """
    Parse an EXIF date string into a datetime object.

    Args:
        date_str: Date string from EXIF tags

    Returns:
        datetime object or None if parsing fails
    """
    if not date_str or date_str.strip() in ("", "0000:00:00 00:00:00"):
        return None

    date_str = date_str.strip()

    for fmt in EXIF_DATE_FORMATS:
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            continue

    logger.debug(f"Could not parse EXIF date: {date_str}")
    return None


class ExifReader:
    """Reads the capture timestamp from image files."""

    DATE_TAG = "EXIF DateTimeOriginal"
    SUBSEC_TAG = "EXIF SubSecTimeOriginal"

    # Extensions exifread can parse
    SUPPORTED_EXTENSIONS = {
        ".jpg", ".jpeg", ".tiff", ".tif", ".heic", ".heif",
        ".png", ".webp", ".cr2", ".nef", ".arw", ".dng",
    }

    def __init__(self, skip_errors: bool = True):
        """
        Initialize the EXIF reader.

        Args:
            skip_errors: If True, return None on errors instead of raising
        """
        self.skip_errors = skip_errors

    def __call__(self, file_path: Path) -> Optional[ExifCapture]:
        return self.read_capture(file_path)

    def read_capture(self, file_path: Path) -> Optional[ExifCapture]:
        """
        Read DateTimeOriginal and SubSecTimeOriginal from a file.

        Args:
            file_path: Path to the image file

        Returns:
            ExifCapture, or None if the file has no DateTimeOriginal

        Raises:
            ExifReadError: If the file cannot be read and skip_errors is False
        """
        ext = file_path.suffix.lower()
        if ext not in self.SUPPORTED_EXTENSIONS:
            logger.debug(f"Unsupported extension for EXIF: {ext}")
            return None

        try:
            with open(file_path, "rb") as f:
                tags = exifread.process_file(f, details=False)
        except Exception as e:
            logger.warning(f"Error reading EXIF from {file_path}: {e}")
            if self.skip_errors:
                return None
            raise ExifReadError(f"Cannot read EXIF from {file_path}: {e}") from e

        return self._parse_tags(tags)

    def _parse_tags(self, tags: dict[str, Any]) -> Optional[ExifCapture]:
        """Extract the capture moment from exifread tags."""
        if self.DATE_TAG not in tags:
            return None

        date_time_original = str(tags[self.DATE_TAG]).strip()
        sub_sec = str(tags[self.SUBSEC_TAG]).strip() if self.SUBSEC_TAG in tags else ""

        return ExifCapture(
            date_time_original=date_time_original,
            sub_sec_time_original=sub_sec,
        )
