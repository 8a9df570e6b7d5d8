"""Pytest fixtures and configuration."""

import io
import tarfile
from collections.abc import Callable
from pathlib import Path

import pytest

from debscan.config import Config
from debscan.models import PackageRecord, ScanFailure, ScanResults

AR_MAGIC = b"!<arch>\n"

SAMPLE_CONTROL = """Package: demo
Version: 1.0
Architecture: all
Maintainer: Jane Doe <jane@example.org>
Depends: libc6 (>= 2.31)
Description: demonstration package
 This package exists only to be scanned.
 .
 It does nothing else.
"""


def ar_header(name: str, size: int) -> bytes:
    """Build a 60 byte ar member header."""
    header = (
        name.ljust(16)
        + "0".ljust(12)
        + "0".ljust(6)
        + "0".ljust(6)
        + "100644".ljust(8)
        + str(size).ljust(10)
        + "`\n"
    ).encode("ascii")
    assert len(header) == 60
    return header


def build_ar(members: list[tuple[str, bytes]], gnu_names: bool = False) -> bytes:
    """Build an ar archive from (name, content) pairs."""
    out = bytearray(AR_MAGIC)
    for name, content in members:
        out += ar_header(f"{name}/" if gnu_names else name, len(content))
        out += content
        if len(content) % 2:
            out += b"\n"
    return bytes(out)


def build_tar_gz(entries: list[tuple[str, bytes]], with_dir: bool = True) -> bytes:
    """Build a gzip compressed tar archive from (path, content) pairs."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        if with_dir:
            directory = tarfile.TarInfo("./")
            directory.type = tarfile.DIRTYPE
            directory.mode = 0o755
            tar.addfile(directory)
        for path, content in entries:
            info = tarfile.TarInfo(path)
            info.size = len(content)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(content))
    return buf.getvalue()


def build_deb(control: str = SAMPLE_CONTROL, extra_entries: list[tuple[str, bytes]] | None = None) -> bytes:
    """Build a minimal .deb archive holding the given control text."""
    entries = list(extra_entries or [])
    entries.append(("./control", control.encode("utf-8")))
    return build_ar(
        [
            ("debian-binary", b"2.0\n"),
            ("control.tar.gz", build_tar_gz(entries)),
            ("data.tar.gz", build_tar_gz([("./usr/share/doc/demo/README", b"demo\n")])),
        ]
    )


@pytest.fixture
def sample_control() -> str:
    """Sample control file content."""
    return SAMPLE_CONTROL


@pytest.fixture
def make_ar() -> Callable[..., bytes]:
    """Factory for ar archives."""
    return build_ar


@pytest.fixture
def make_tar_gz() -> Callable[..., bytes]:
    """Factory for gzip compressed tar archives."""
    return build_tar_gz


@pytest.fixture
def make_deb() -> Callable[..., bytes]:
    """Factory for .deb archives."""
    return build_deb


@pytest.fixture
def sample_deb() -> bytes:
    """A .deb archive holding the sample control file."""
    return build_deb()


@pytest.fixture
def packages_dir(tmp_path: Path) -> Path:
    """A directory with two valid archives, one broken archive and a stray file."""
    directory = tmp_path / "pool"
    directory.mkdir()

    (directory / "demo_1.0_all.deb").write_bytes(build_deb())
    (directory / "other_2.0_amd64.deb").write_bytes(
        build_deb("Package: other\nVersion: 2.0\nArchitecture: amd64\n")
    )
    (directory / "broken_0.1_all.deb").write_bytes(
        build_ar([("debian-binary", b"2.0\n"), ("data.tar.gz", build_tar_gz([]))])
    )
    (directory / "README.txt").write_text("not a package\n")

    return directory


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Create a test configuration."""
    return Config(
        packages_dir=tmp_path,
        extension=".deb",
        output=None,
        strict=False,
        jobs=1,
    )


@pytest.fixture
def sample_record() -> PackageRecord:
    """Create a sample record for testing."""
    return PackageRecord(
        {
            "Package": "demo",
            "Version": "1.0",
            "Architecture": "all",
            "MD5Sum": "d41d8cd98f00b204e9800998ecf8427e",
            "SHA1": "da39a3ee5e6b4b0d3255bfef95601890afd80709",
            "SHA256": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
            "Size": 1234,
            "Filename": "pool/demo_1.0_all.deb",
        }
    )


@pytest.fixture
def populated_results(sample_record: PackageRecord) -> ScanResults:
    """Create scan results with one record and one failure."""
    results = ScanResults()
    results.add(sample_record)
    results.add(
        ScanFailure(
            path="pool/broken_0.1_all.deb",
            kind="MissingOuterMember",
            message="Archive has no member named control.tar.gz",
        )
    )
    return results
