"""PhotoRenamer - deterministic photo and file renaming with duplicate handling."""

from photorenamer.utils.constants import VERSION

__version__ = VERSION
