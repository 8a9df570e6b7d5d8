"""Assembly of package index records."""

import logging
from pathlib import Path

from debscan.core.archive import locate_control_text
from debscan.core.hashes import compute_digests
from debscan.models import PackageRecord, RecordValue
from debscan.parsers import parse_control

logger = logging.getLogger(__name__)


def build_record(
    data: bytes, path: str | Path, size: int | None = None, strict: bool = False
) -> PackageRecord:
    """Build the index record of one package archive.

    The record holds the control fields, then the digest fields, then
    ``Size`` and ``Filename``. Digest fields are merged after the control
    fields and win on a name clash.

    Args:
        data: Raw bytes of the archive.
        path: Archive path, stored as ``Filename``.
        size: Size of the archive file on disk (defaults to ``len(data)``).
        strict: Reject malformed control stanzas instead of skipping lines.

    Returns:
        The complete record.

    Raises:
        ArchiveError: If the control file cannot be located.
        MalformedStanzaError: In strict mode, for a malformed control stanza.
    """
    control = parse_control(locate_control_text(data), strict=strict)
    digests = compute_digests(data)

    fields: dict[str, RecordValue] = {}
    fields.update(control)
    fields.update(digests.to_fields())
    fields["Size"] = len(data) if size is None else size
    fields["Filename"] = str(path)

    logger.debug(f"Built record for {fields.get('Package', '?')} from {path}")
    return PackageRecord(fields)


def build_record_from_file(
    path: Path, filename: str | None = None, strict: bool = False
) -> PackageRecord:
    """Build the index record of a package archive on disk.

    Args:
        path: Path to the archive.
        filename: Value for ``Filename`` (defaults to the path as given).
        strict: Reject malformed control stanzas instead of skipping lines.

    Returns:
        The complete record.

    Raises:
        OSError: If the file cannot be read.
        ArchiveError: If the control file cannot be located.
        MalformedStanzaError: In strict mode, for a malformed control stanza.
    """
    data = path.read_bytes()
    size = path.stat().st_size
    return build_record(data, filename or str(path), size=size, strict=strict)
