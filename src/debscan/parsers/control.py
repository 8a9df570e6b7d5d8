"""Parser for Debian control file stanzas."""

import logging
import re
from pathlib import Path

from debscan.models import ControlFields

logger = logging.getLogger(__name__)

COMMENT_RE = re.compile(r"^#.*$")
FIELD_RE = re.compile(r"^([^\x01-\x1a\s:]+):\s*(.*)$")
CONTINUATION_RE = re.compile(r"^(\s+)(.*)$")


class MalformedStanzaError(Exception):
    """Raised in strict mode for a continuation line that precedes any field."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"Continuation line {line_number} has no preceding field: {line!r}")


def parse_control(content: str, strict: bool = False) -> ControlFields:
    """Parse a control stanza into an ordered field mapping.

    Comment lines are skipped without resetting the field that continuation
    lines append to. Continuation lines are stripped and joined to the
    previous value with a newline. A field seen twice keeps its last value.

    A continuation line before the first field is dropped, unless ``strict``
    is set, in which case MalformedStanzaError is raised.

    Args:
        content: Text of the control file.
        strict: Reject continuation lines that have no field to extend.

    Returns:
        Dictionary mapping field name to value, in file order.

    Example:
        >>> parse_control("Package: foo\\nDescription: short\\n long\\n")
        {'Package': 'foo', 'Description': 'short\\nlong'}
    """
    fields: ControlFields = {}
    previous: str | None = None

    for number, line in enumerate(content.split("\n"), start=1):
        if COMMENT_RE.match(line):
            continue

        if CONTINUATION_RE.match(line):
            if previous is None:
                if strict:
                    raise MalformedStanzaError(number, line)
                logger.debug(f"Dropping continuation line {number} without a field: {line!r}")
                continue
            fields[previous] += "\n" + line.strip()
            continue

        match = FIELD_RE.match(line)
        if match:
            name, value = match.groups()
            fields[name] = value
            previous = name

    return fields


def parse_control_file(path: Path, strict: bool = False) -> ControlFields:
    """Parse a control stanza from a file.

    Args:
        path: Path to the control file.
        strict: Reject continuation lines that have no field to extend.

    Returns:
        Dictionary mapping field name to value, in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedStanzaError: In strict mode, for a leading continuation line.
    """
    return parse_control(path.read_text(encoding="utf-8"), strict=strict)
