"""Core modules for PhotoRenamer."""

from photorenamer.core.models import (
    DuplicateGroup,
    DuplicateGroupCollection,
    FileDescriptor,
    RenamePair,
    TransferOutcome,
    TransferReport,
)

__all__ = [
    "FileDescriptor",
    "RenamePair",
    "DuplicateGroup",
    "DuplicateGroupCollection",
    "TransferOutcome",
    "TransferReport",
]
