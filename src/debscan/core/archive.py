"""Readers for the two archive layers of a Debian binary package.

A ``.deb`` is an ``ar`` archive. Its ``control.tar.gz`` member is a gzip
compressed tar archive whose ``./control`` entry holds the package metadata.
"""

import io
import logging
import tarfile
from collections.abc import Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

AR_MAGIC = b"!<arch>\n"
AR_HEADER_SIZE = 60
AR_HEADER_END = b"`\n"
BSD_LONG_NAME_PREFIX = "#1/"

CONTROL_MEMBER = "control.tar.gz"
CONTROL_ENTRY = "./control"


class ArchiveError(Exception):
    """Base class for errors reading a package archive."""


class MissingOuterMember(ArchiveError):
    """Raised when the ar archive has no member with the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Archive has no member named {name}")


class MissingInnerEntry(ArchiveError):
    """Raised when the compressed tar member has no entry at the requested path."""

    def __init__(self, path: str, member: str = CONTROL_MEMBER):
        self.path = path
        self.member = member
        super().__init__(f"Member {member} has no entry {path}")


class MalformedArchiveError(ArchiveError):
    """Raised when either archive layer cannot be decoded."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed archive: {reason}")


@dataclass
class ArMember:
    """A member of an ar archive."""

    name: str
    offset: int  # start of the content within the archive
    size: int
    data: bytes


class ArArchive:
    """Sequential reader for the common ar archive format."""

    def __init__(self, data: bytes):
        """Initialize reader.

        Args:
            data: Raw bytes of the whole archive.

        Raises:
            MalformedArchiveError: If the data does not start with the ar magic.
        """
        if not data.startswith(AR_MAGIC):
            raise MalformedArchiveError("missing ar magic")
        self.data = data

    def _parse_header(self, pos: int) -> tuple[str, int]:
        """Return the raw name and content size of the header at pos."""
        header = self.data[pos : pos + AR_HEADER_SIZE]
        if len(header) < AR_HEADER_SIZE:
            raise MalformedArchiveError(f"truncated header at offset {pos}")
        if header[58:60] != AR_HEADER_END:
            raise MalformedArchiveError(f"bad header terminator at offset {pos}")

        name = header[0:16].decode("ascii", errors="replace").rstrip(" ")
        size_field = header[48:58].strip()
        if not size_field.isdigit():
            raise MalformedArchiveError(f"bad member size at offset {pos}")
        size = int(size_field)

        return name, size

    def members(self) -> Iterator[ArMember]:
        """Iterate over the archive members in order.

        Yields:
            ArMember for each member, with GNU ``/`` terminators removed
            and BSD ``#1/`` long names resolved.

        Raises:
            MalformedArchiveError: On a truncated or corrupt header.
        """
        pos = len(AR_MAGIC)
        end = len(self.data)

        while pos < end:
            # Stray alignment byte at the very end of the archive
            if end - pos == 1 and self.data[pos:] == b"\n":
                break

            name, size = self._parse_header(pos)
            start = pos + AR_HEADER_SIZE
            if start + size > end:
                raise MalformedArchiveError(f"member {name} extends past end of archive")

            content_start = start
            if name.startswith(BSD_LONG_NAME_PREFIX):
                length_field = name[len(BSD_LONG_NAME_PREFIX) :]
                if not length_field.isdigit() or int(length_field) > size:
                    raise MalformedArchiveError(f"bad long name length in {name}")
                name_len = int(length_field)
                name = self.data[start : start + name_len].decode("utf-8", errors="replace").rstrip("\0")
                content_start = start + name_len
            elif name.endswith("/") and name not in ("/", "//"):
                name = name[:-1]

            content_end = start + size
            logger.debug(f"ar member {name} ({content_end - content_start} bytes)")
            yield ArMember(
                name=name,
                offset=content_start,
                size=content_end - content_start,
                data=self.data[content_start:content_end],
            )

            pos = content_end + (size % 2)

    def get_member(self, name: str) -> ArMember:
        """Return the first member with exactly the given name.

        Raises:
            MissingOuterMember: If no member has that name.
            MalformedArchiveError: If the archive is corrupt before a match.
        """
        for member in self.members():
            if member.name == name:
                return member
        raise MissingOuterMember(name)


def read_tar_entry(data: bytes, path: str, member: str = CONTROL_MEMBER) -> bytes:
    """Read the content of one entry from a compressed tar stream.

    Entries are visited in order; the content of entries other than the
    requested one is skipped, not buffered.

    Args:
        data: Compressed (or plain) tar archive bytes.
        path: Exact entry path to look for, e.g. ``./control``.
        member: Name of the outer member, used in error messages.

    Returns:
        The entry's content.

    Raises:
        MissingInnerEntry: If no regular file entry has that path.
        MalformedArchiveError: If the data is not a readable tar stream.
    """
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:*") as tar:
            for entry in tar:
                if entry.name != path or not entry.isfile():
                    continue
                extracted = tar.extractfile(entry)
                if extracted is None:
                    break
                return extracted.read()
    except (tarfile.TarError, EOFError, OSError) as e:
        raise MalformedArchiveError(f"cannot read {member}: {e}") from e

    raise MissingInnerEntry(path, member)


def locate_control_text(
    data: bytes, member_name: str = CONTROL_MEMBER, entry_path: str = CONTROL_ENTRY
) -> str:
    """Extract the control file text from a package archive.

    Args:
        data: Raw bytes of the ``.deb`` archive.
        member_name: Name of the ar member holding the control tarball.
        entry_path: Path of the control file inside the tarball.

    Returns:
        The control file decoded as UTF-8.

    Raises:
        MissingOuterMember: If the archive has no control tarball member.
        MissingInnerEntry: If the control tarball has no control file.
        MalformedArchiveError: If either layer cannot be decoded.
    """
    member = ArArchive(data).get_member(member_name)
    content = read_tar_entry(member.data, entry_path, member=member_name)
    return content.decode("utf-8", errors="replace")
