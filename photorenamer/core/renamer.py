"""Target filename strategies for PhotoRenamer.

Each strategy turns a source file into the filename it should end up with,
or None if the file is to be left alone. All of them start from the cleaned
filename, i.e. with any "-duplicate-NNN" suffix of an earlier run removed,
so running a command twice yields the same names.
"""

import logging
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Optional, Protocol

from photorenamer.core.exif_reader import ExifCapture, ExifReader, parse_exif_date
from photorenamer.core.models import FileDescriptor
from photorenamer.utils.constants import (
    DATE_PLACEHOLDERS,
    DUPLICATE_COUNTER_WIDTH,
    DUPLICATE_IDENTIFIER,
    FILESIZE_WIDTH,
)
from photorenamer.utils.date_format import DATE_TOKENS, expand_two_digit_year, format_date
from photorenamer.utils.path_utils import join_filename

logger = logging.getLogger(__name__)

DUPLICATE_SUFFIX_RE = re.compile(
    re.escape(DUPLICATE_IDENTIFIER) + rf"\d{{{DUPLICATE_COUNTER_WIDTH}}}$"
)
FILESIZE_SUFFIX_RE = re.compile(rf"-\d{{{FILESIZE_WIDTH}}}$")
PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")

# PCRE modifiers that have a Python counterpart
PATTERN_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}

DRY_RUN_HINT = "Try using the --dry-run option to test your pattern before applying changes."


class PatternCompilationError(Exception):
    """A user supplied search pattern cannot be compiled."""

    pass


class TargetFilenameError(Exception):
    """The target filename of a single file cannot be computed."""

    pass


class RenameStrategy(Protocol):
    """Computes the target filename for a source file."""

    def generate(self, source: FileDescriptor) -> Optional[str]:
        ...


def strip_duplicate_identifier(basename: str) -> str:
    """
    Remove a trailing disambiguation suffix.

    Example:
        "IMG_0001-duplicate-003" → "IMG_0001"
    """
    return DUPLICATE_SUFFIX_RE.sub("", basename)


def add_duplicate_identifier(basename: str, counter: int) -> str:
    """
    Append the disambiguation suffix for counter.

    Example:
        ("IMG_0001", 3) → "IMG_0001-duplicate-003"
    """
    return f"{basename}{DUPLICATE_IDENTIFIER}{counter:0{DUPLICATE_COUNTER_WIDTH}d}"


def clean_filename(source: FileDescriptor) -> str:
    """Filename of source with any disambiguation suffix removed."""
    return join_filename(strip_duplicate_identifier(source.basename), source.extension)


def split_pattern_delimiters(pattern: str) -> tuple[str, int]:
    """
    Split a PCRE style "/body/flags" pattern into body and re flags.

    Patterns without delimiters are returned unchanged.

    Example:
        "/^(.+)(jpeg)$/i" → ("^(.+)(jpeg)$", re.IGNORECASE)
    """
    if len(pattern) < 2 or pattern[0] not in "/#~!|@%":
        return pattern, 0

    delimiter = pattern[0]
    end = pattern.rfind(delimiter)
    if end <= 0:
        return pattern, 0

    modifiers = pattern[end + 1:]
    if any(m not in PATTERN_FLAGS for m in modifiers):
        return pattern, 0

    flags = 0
    for modifier in modifiers:
        flags |= PATTERN_FLAGS[modifier]
    return pattern[1:end], flags


def compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile a user supplied pattern (with or without PCRE delimiters).

    Raises:
        PatternCompilationError: If the pattern is malformed
    """
    body, flags = split_pattern_delimiters(pattern)
    try:
        return re.compile(body, flags)
    except re.error as e:
        raise PatternCompilationError(
            f'Regular expression error: {e}. Check your pattern syntax "{pattern}". '
            f"{DRY_RUN_HINT}"
        ) from e


def translate_replacement(replacement: str) -> str:
    """
    Translate "$1" and "${1}" group references into Python's "\\g<1>".

    Backslash references ("\\1") are already understood by re and kept.
    """
    return re.sub(r"\$\{(\d+)\}|\$(\d+)", lambda m: rf"\g<{m.group(1) or m.group(2)}>", replacement)


class InheritFilenameStrategy:
    """Keeps the cleaned filename. Used when only duplicates matter."""

    def generate(self, source: FileDescriptor) -> Optional[str]:
        return clean_filename(source)


class LowerCaseFilenameStrategy:
    """Lowercases the cleaned filename (full Unicode lowercase)."""

    def generate(self, source: FileDescriptor) -> Optional[str]:
        return clean_filename(source).lower()


class PatternFilenameStrategy:
    """Applies a regular expression substitution to the cleaned filename."""

    def __init__(self, pattern: str, replacement: str):
        """
        Initialize the strategy.

        Args:
            pattern: Search pattern, optionally enclosed in PCRE delimiters
            replacement: Replacement, "$1" style references allowed

        Raises:
            PatternCompilationError: If the pattern is malformed
        """
        self.pattern = pattern
        self.replacement = replacement
        self.regex = compile_pattern(pattern)
        self._template = translate_replacement(replacement)

    def generate(self, source: FileDescriptor) -> Optional[str]:
        filename = clean_filename(source)

        try:
            target = self.regex.sub(self._template, filename)
        except (re.error, IndexError) as e:
            raise TargetFilenameError(
                f'Regular expression error: {e}. Check your pattern syntax "{self.pattern}" '
                f'and replacement "{self.replacement}". {DRY_RUN_HINT}'
            ) from e

        if not target:
            raise TargetFilenameError(
                f'Pattern "{self.pattern}" produced an empty filename for "{filename}". '
                f"{DRY_RUN_HINT}"
            )

        return target


class DatePatternFilenameStrategy:
    """
    Rebuilds a date embedded in the filename in another layout.

    The search pattern contains the placeholders {Y} {y} {m} {d} {H} {i} {s}
    which match 4 ({Y}) or 2 digits. The replacement uses the same
    placeholders to lay out the recognized date. A trailing capture group of
    the search pattern that is not a date field (usually the rest of the
    filename) is appended verbatim.

    Example:
        pattern "^{y}-{m}-{d}.{H}-{i}-{s}(.+)$",
        replacement "{Y}-{m}-{d}_{H}-{i}-{s}":
        "24-05-01 10-00-00.jpg" → "2024-05-01_10-00-00.jpg"
    """

    GROUP_PREFIX = "date"

    def __init__(self, pattern: str, replacement: str):
        """
        Initialize the strategy.

        Args:
            pattern: Search pattern with date placeholders
            replacement: Target layout with date placeholders

        Raises:
            PatternCompilationError: If the translated pattern is malformed
        """
        self.pattern = pattern
        self.replacement = replacement

        body, flags = split_pattern_delimiters(pattern)
        self._date_groups: list[tuple[str, str]] = []
        translated = PLACEHOLDER_RE.sub(self._placeholder_to_group, body)

        try:
            self.regex = re.compile(translated, flags)
        except re.error as e:
            raise PatternCompilationError(
                f'Date pattern error: {e}. Check your pattern syntax "{pattern}". '
                "Make sure all date placeholders ({Y}, {m}, {d}, etc.) are valid "
                f"and properly formatted. {DRY_RUN_HINT}"
            ) from e

        date_indices = {self.regex.groupindex[name] for name, _ in self._date_groups}
        last = self.regex.groups
        self._tail_group = last if last and last not in date_indices else None

    def _placeholder_to_group(self, match: re.Match) -> str:
        placeholder = match.group(1)
        width = DATE_PLACEHOLDERS.get(placeholder)
        if width is None:
            return match.group(0)

        name = f"{self.GROUP_PREFIX}{len(self._date_groups)}_{placeholder}"
        self._date_groups.append((name, placeholder))
        return rf"(?P<{name}>\d{{{width}}})"

    def _extract_date(self, match: re.Match) -> datetime:
        parts: dict[str, int] = {}

        for name, placeholder in self._date_groups:
            value = match.group(name)
            if value is None:
                continue

            if placeholder in ("Y", "y"):
                year = expand_two_digit_year(value) if len(value) == 2 else int(value)
                parts.setdefault("Y", year)
            else:
                parts.setdefault(placeholder, int(value))

        try:
            return datetime(
                parts.get("Y", 1),
                parts.get("m", 1),
                parts.get("d", 1),
                parts.get("H", 0),
                parts.get("i", 0),
                parts.get("s", 0),
            )
        except ValueError as e:
            raise TargetFilenameError(
                f'Date pattern "{self.pattern}" matched "{match.group(0)}" '
                f"but it is not a valid date: {e}. {DRY_RUN_HINT}"
            ) from e

    def _format_target(self, value: datetime) -> str:
        return PLACEHOLDER_RE.sub(
            lambda m: DATE_TOKENS[m.group(1)](value) if m.group(1) in DATE_TOKENS else m.group(0),
            self.replacement,
        )

    def _replace_match(self, match: re.Match) -> str:
        target = self._format_target(self._extract_date(match))
        if self._tail_group is not None:
            target += match.group(self._tail_group) or ""
        return target

    def generate(self, source: FileDescriptor) -> Optional[str]:
        filename = clean_filename(source)

        if self.regex.search(filename) is None:
            logger.debug(f"Date pattern does not match: {filename}")
            return None

        target = self.regex.sub(self._replace_match, filename)

        if not target:
            raise TargetFilenameError(
                f'Date pattern "{self.pattern}" produced an empty filename for "{filename}". '
                f"{DRY_RUN_HINT}"
            )

        return target


class ExifDateFilenameStrategy:
    """
    Names files after their EXIF capture moment (DateTimeOriginal).

    Files without their own capture date inherit the date of a sibling in
    the same directory sharing the name before the extension, so a Live
    Photo pair (IMG_0001.HEIC + IMG_0001.MOV) ends up under one name. Files
    without any usable date are skipped.
    """

    def __init__(
        self,
        target_filename_pattern: str,
        exif_reader: Optional[Callable[[Path], Optional[ExifCapture]]] = None,
        ignore_hidden: bool = False,
    ):
        """
        Initialize the strategy.

        Args:
            target_filename_pattern: Letter pattern (Y-m-d_H-i-s) or strftime pattern
            exif_reader: Callable returning the capture moment of a file
            ignore_hidden: Hidden siblings never lend their capture date
        """
        self.target_filename_pattern = target_filename_pattern
        self.exif_reader = exif_reader or ExifReader()
        self.ignore_hidden = ignore_hidden
        self._captures: dict[Path, Optional[ExifCapture]] = {}
        self._siblings: dict[Path, dict[str, list[Path]]] = {}

    def _sibling_index(self, directory: Path) -> dict[str, list[Path]]:
        """Files of directory grouped by basename, built once per directory."""
        index = self._siblings.get(directory)
        if index is None:
            index = {}
            for path in sorted(directory.iterdir()):
                if self.ignore_hidden and path.name.startswith("."):
                    continue
                if not path.is_file():
                    continue
                index.setdefault(FileDescriptor(path=path).basename, []).append(path)
            self._siblings[directory] = index
        return index

    def capture_for(self, source: FileDescriptor) -> Optional[ExifCapture]:
        """Capture moment of source or of the first sibling that has one."""
        key = source.directory / source.basename
        if key in self._captures:
            return self._captures[key]

        capture = self.exif_reader(source.path)

        if capture is None:
            siblings = self._sibling_index(source.directory).get(source.basename, [])
            for sibling in siblings:
                if sibling == source.path:
                    continue
                capture = self.exif_reader(sibling)
                if capture is not None:
                    logger.debug(f"Using EXIF date of {sibling.name} for {source.filename}")
                    break

        self._captures[key] = capture
        return capture

    def capture_datetime(self, source: FileDescriptor) -> Optional[datetime]:
        """Capture moment including the sub-second component."""
        capture = self.capture_for(source)
        if capture is None:
            logger.debug(f"No EXIF DateTimeOriginal: {source}")
            return None

        captured = parse_exif_date(capture.date_time_original)
        if captured is None:
            logger.warning(f'Invalid EXIF date format in "DateTimeOriginal" of {source}')
            return None

        sub_sec = capture.sub_sec_time_original.strip()
        if sub_sec.isdigit():
            if len(sub_sec) > 4:
                captured += timedelta(microseconds=int(sub_sec))
            else:
                captured += timedelta(milliseconds=int(sub_sec))

        return captured

    def generate(self, source: FileDescriptor) -> Optional[str]:
        captured = self.capture_datetime(source)
        if captured is None:
            return None

        return join_filename(
            format_date(captured, self.target_filename_pattern),
            source.extension,
        )


class FilesizeFilenameStrategy:
    """
    Appends the zero padded filesize to the cleaned basename.

    A size suffix of an earlier run is replaced, not stacked. Empty files are skipped.

    Example:
        "IMG_0001.jpg" (2048 bytes) → "IMG_0001-000002048.jpg"
    """

    def generate(self, source: FileDescriptor) -> Optional[str]:
        size = source.size if source.size is not None else source.path.stat().st_size
        if size == 0:
            logger.debug(f"Skipping empty file: {source}")
            return None

        basename = FILESIZE_SUFFIX_RE.sub("", strip_duplicate_identifier(source.basename))
        return join_filename(f"{basename}-{size:0{FILESIZE_WIDTH}d}", source.extension)
