"""Data models for package records and scan results."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

# Control stanza fields in file order. A repeated field name overwrites the
# earlier value but keeps the position of its first occurrence.
ControlFields = dict[str, str]

RecordValue = str | int

# Field names of the digests injected into every record
MD5_FIELD = "MD5Sum"
SHA1_FIELD = "SHA1"
SHA256_FIELD = "SHA256"


@dataclass(frozen=True)
class Digests:
    """Hex encoded digests of a package archive."""

    md5: str
    sha1: str
    sha256: str

    def to_fields(self) -> dict[str, str]:
        """Return the digests keyed by their index field names."""
        return {
            MD5_FIELD: self.md5,
            SHA1_FIELD: self.sha1,
            SHA256_FIELD: self.sha256,
        }


class PackageRecord(Mapping[str, RecordValue]):
    """Read-only metadata record of one package archive.

    Holds the control fields followed by the digest fields, ``Size`` and
    ``Filename``, in that order.
    """

    def __init__(self, fields: Mapping[str, RecordValue]):
        self._fields: dict[str, RecordValue] = dict(fields)

    def __getitem__(self, key: str) -> RecordValue:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"PackageRecord({self._fields!r})"

    @property
    def package(self) -> str:
        return str(self._fields.get("Package", ""))

    @property
    def version(self) -> str:
        return str(self._fields.get("Version", ""))

    @property
    def architecture(self) -> str:
        return str(self._fields.get("Architecture", ""))

    @property
    def filename(self) -> str:
        return str(self._fields["Filename"])

    @property
    def size(self) -> int:
        return int(self._fields["Size"])

    def to_dict(self) -> dict[str, RecordValue]:
        """Convert to dictionary for JSON serialization."""
        return dict(self._fields)


@dataclass
class ScanFailure:
    """An archive that could not be turned into a record."""

    path: str
    kind: str  # e.g. "MissingOuterMember", "IOFailure"
    message: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"path": self.path, "kind": self.kind, "message": self.message}


@dataclass
class ScanResults:
    """Records and failures collected from one directory scan."""

    records: list[PackageRecord] = field(default_factory=list)
    failures: list[ScanFailure] = field(default_factory=list)

    def add(self, outcome: PackageRecord | ScanFailure) -> None:
        """Add a record or a failure to the matching list."""
        if isinstance(outcome, ScanFailure):
            self.failures.append(outcome)
        else:
            self.records.append(outcome)

    def total_count(self) -> int:
        """Return the number of archives scanned."""
        return len(self.records) + len(self.failures)

    def stats(self) -> dict[str, int]:
        """Return statistics dictionary."""
        return {
            "total": self.total_count(),
            "indexed": len(self.records),
            "failed": len(self.failures),
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "stats": self.stats(),
            "packages": [r.to_dict() for r in self.records],
            "failures": [f.to_dict() for f in self.failures],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScanResults:
        """Create ScanResults from a dictionary."""
        results = cls()
        for item in data.get("packages", []):
            results.add(PackageRecord(item))
        for item in data.get("failures", []):
            results.add(
                ScanFailure(
                    path=item["path"],
                    kind=item.get("kind", ""),
                    message=item.get("message", ""),
                )
            )
        return results
