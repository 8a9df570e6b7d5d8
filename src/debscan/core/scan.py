"""Directory scanning of package archives."""

import logging
from functools import partial
from multiprocessing import Pool
from pathlib import Path

from debscan.core.archive import ArchiveError
from debscan.core.record import build_record_from_file
from debscan.models import PackageRecord, ScanFailure, ScanResults
from debscan.parsers.control import MalformedStanzaError

logger = logging.getLogger(__name__)


def find_packages(directory: Path, extension: str = ".deb") -> list[Path]:
    """List the package archives in a directory.

    Only regular files directly inside the directory are considered.

    Args:
        directory: Directory to list.
        extension: File name suffix of package archives.

    Returns:
        Archive paths sorted by file name.

    Raises:
        OSError: If the directory cannot be listed.
    """
    return sorted(
        (p for p in directory.iterdir() if p.name.endswith(extension) and p.is_file()),
        key=lambda p: p.name,
    )


def scan_file(path: Path, strict: bool = False) -> PackageRecord | ScanFailure:
    """Build the record of one archive, capturing per-archive failures.

    Args:
        path: Path to the archive.
        strict: Reject malformed control stanzas instead of skipping lines.

    Returns:
        The record, or a ScanFailure describing why none was built.
    """
    try:
        return build_record_from_file(path, strict=strict)
    except ArchiveError as e:
        kind = type(e).__name__.removesuffix("Error")
        logger.warning(f"Skipping {path}: {e}")
        return ScanFailure(path=str(path), kind=kind, message=str(e))
    except MalformedStanzaError as e:
        logger.warning(f"Skipping {path}: {e}")
        return ScanFailure(path=str(path), kind="MalformedStanza", message=str(e))
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return ScanFailure(path=str(path), kind="IOFailure", message=str(e))


def scan_directory(
    directory: Path,
    extension: str = ".deb",
    jobs: int | None = None,
    strict: bool = False,
) -> ScanResults:
    """Build records for every package archive in a directory.

    Archives are processed independently; a failing archive is recorded in
    the results and does not stop the scan.

    Args:
        directory: Directory holding the archives.
        extension: File name suffix of package archives.
        jobs: Number of worker processes (serial when 1 or less).
        strict: Reject malformed control stanzas instead of skipping lines.

    Returns:
        ScanResults with records and failures in file name order.

    Raises:
        OSError: If the directory cannot be listed.
    """
    paths = find_packages(directory, extension)
    results = ScanResults()

    if not paths:
        logger.info(f"No *{extension} files found in {directory}")
        return results

    worker = partial(scan_file, strict=strict)
    if jobs and jobs > 1 and len(paths) > 1:
        num_workers = min(jobs, len(paths))
        logger.info(f"Scanning {len(paths)} archives with {num_workers} workers")
        with Pool(processes=num_workers) as pool:
            outcomes = pool.map(worker, paths)
    else:
        logger.info(f"Scanning {len(paths)} archives")
        outcomes = [worker(path) for path in paths]

    for outcome in outcomes:
        results.add(outcome)

    return results
