"""Path utility functions for PhotoRenamer."""

from pathlib import Path
from typing import Optional


def split_filename(filename: str) -> tuple[str, str]:
    """
    Split a filename into basename and extension (without the dot).

    Dotfiles without a further dot have no extension.

    Example:
        "IMG_0001.JPG" → ("IMG_0001", "JPG")
        "archive.tar.gz" → ("archive.tar", "gz")
        ".hidden" → (".hidden", "")
    """
    path = Path(filename)
    suffix = path.suffix
    if not suffix:
        return filename, ""
    return filename[: -len(suffix)], suffix[1:]


def join_filename(basename: str, extension: str) -> str:
    """Inverse of split_filename."""
    return f"{basename}.{extension}" if extension else basename


def relative_to_safe(path: Path, base: Path) -> Optional[Path]:
    """
    Safely get relative path, returning None if not relative.

    Args:
        path: Path to make relative
        base: Base path

    Returns:
        Relative path or None
    """
    try:
        return path.relative_to(base)
    except ValueError:
        return None


def map_to_target(directory: Path, source_root: Path, target_root: Path) -> Path:
    """
    Map a directory below source_root to the same position below target_root.

    Directories outside source_root are mapped onto target_root itself.

    Args:
        directory: Directory inside the source tree
        source_root: Root of the source tree
        target_root: Root of the target tree

    Returns:
        Corresponding directory in the target tree
    """
    relative = relative_to_safe(directory, source_root)
    if relative is None:
        return target_root
    return target_root / relative
