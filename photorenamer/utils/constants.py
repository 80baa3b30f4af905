"""Constants for PhotoRenamer."""

# Version
VERSION = "1.0.0"

# Disambiguation suffix appended to colliding basenames: "<name>-duplicate-001"
DUPLICATE_IDENTIFIER = "-duplicate-"
DUPLICATE_COUNTER_WIDTH = 3

# Filesize mode appends the size as a fixed-width number: "<name>-000012345"
FILESIZE_WIDTH = 9

# Date placeholders usable in date-pattern mode and their capture widths
DATE_PLACEHOLDERS = {
    "Y": 4,
    "y": 2,
    "m": 2,
    "d": 2,
    "H": 2,
    "i": 2,
    "s": 2,
}

# Default patterns per rename mode
DEFAULT_PATTERN = r"^(.+)(jpeg)$"
DEFAULT_REPLACEMENT = "$1jpg"
DEFAULT_DATE_PATTERN = r"^{y}-{m}-{d}.{H}-{i}-{s}(.+)$"
DEFAULT_DATE_REPLACEMENT = "{Y}-{m}-{d}_{H}-{i}-{s}"
DEFAULT_EXIF_FILENAME_PATTERN = "Y-m-d_H-i-s"

# Content hashing
DEFAULT_HASH_ALGORITHM = "xxh128"
SUPPORTED_HASH_ALGORITHMS = ("xxh128", "xxh64", "sha256", "md5")

# EXIF date formats accepted for DateTimeOriginal
EXIF_DATE_FORMATS = [
    "%Y:%m:%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%Y:%m:%d %H:%M",
    "%Y-%m-%d %H:%M",
]
