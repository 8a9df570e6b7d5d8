"""JSON output of scan results."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from debscan.models import ScanResults


def results_to_json(results: ScanResults, directory: Path | None = None) -> str:
    """Serialize scan results to a JSON document.

    The document holds the generation time, the scanned directory, summary
    statistics, one object per package record and one per failure.

    Args:
        results: Results of a directory scan.
        directory: The scanned directory, if known.

    Returns:
        The JSON text.
    """
    document: dict[str, Any] = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "directory": str(directory) if directory else None,
    }
    document.update(results.to_dict())
    return json.dumps(document, indent=2)


def write_json_output(results: ScanResults, output_path: Path, directory: Path | None = None) -> Path:
    """Write scan results to a JSON file.

    Args:
        results: Results of a directory scan.
        output_path: File to write.
        directory: The scanned directory, if known.

    Returns:
        Path to the written file.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(results_to_json(results, directory))
    return output_path


def load_json_output(path: Path) -> ScanResults:
    """Load scan results from a JSON file.

    Args:
        path: File written by write_json_output.

    Returns:
        The loaded results.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    return ScanResults.from_dict(json.loads(path.read_text()))
