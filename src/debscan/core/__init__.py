"""Core functionality for the scanner."""

from debscan.core.archive import (
    ArArchive,
    ArchiveError,
    MalformedArchiveError,
    MissingInnerEntry,
    MissingOuterMember,
    locate_control_text,
    read_tar_entry,
)
from debscan.core.hashes import compute_digests
from debscan.core.record import build_record, build_record_from_file
from debscan.core.scan import find_packages, scan_directory, scan_file

__all__ = [
    "ArArchive",
    "ArchiveError",
    "MalformedArchiveError",
    "MissingInnerEntry",
    "MissingOuterMember",
    "locate_control_text",
    "read_tar_entry",
    "compute_digests",
    "build_record",
    "build_record_from_file",
    "find_packages",
    "scan_directory",
    "scan_file",
]
