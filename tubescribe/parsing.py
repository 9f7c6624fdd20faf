"""
tubescribe.parsing - Recover structured values from external tool output.

External tools print free-form text with warnings mixed in. Two modes:

- identifier: the last non-blank line (tools print bare ids after warnings)
- destination: the first line announcing where the extractor wrote its file
"""

from __future__ import annotations

from pathlib import Path

from tubescribe.exceptions import NoDestinationFoundError, NoIdentifierFoundError

DESTINATION_MARKER = "[ExtractAudio] Destination:"


def parse_identifier(raw: str) -> str:
    """Return the last line of ``raw`` that is non-blank after trimming.

    Raises:
        NoIdentifierFoundError: If every line is blank
    """
    for line in reversed(raw.splitlines()):
        trimmed = line.strip()
        if trimmed:
            return trimmed
    raise NoIdentifierFoundError(f"Could not extract identifier from output: {raw!r}", raw)


def parse_destination(
    raw: str,
    output_dir: Path | None = None,
    marker: str = DESTINATION_MARKER,
) -> Path:
    """Return the path announced by the first destination marker line.

    A relative path is re-anchored in ``output_dir`` by its base name.

    Args:
        raw: Combined stdout/stderr of the extractor
        output_dir: Directory the extractor was told to write into
        marker: Line prefix announcing the destination

    Returns:
        Path of the written file

    Raises:
        NoDestinationFoundError: If no line starts with the marker, or the
            first one names no path
    """
    for line in raw.splitlines():
        trimmed = line.strip()
        if not trimmed.startswith(marker):
            continue
        remainder = trimmed[len(marker):].strip()
        if not remainder:
            raise NoDestinationFoundError(f"Empty '{marker}' line in output: {raw!r}", raw)
        path = Path(remainder)
        if not path.is_absolute() and output_dir is not None:
            path = output_dir / path.name
        return path
    raise NoDestinationFoundError(f"No '{marker}' line in output: {raw!r}", raw)


class OutputParser:
    """Parser bound to one extractor's marker and output directory."""

    def __init__(self, output_dir: Path | None = None, marker: str = DESTINATION_MARKER) -> None:
        self.output_dir = output_dir
        self.marker = marker

    def identifier(self, raw: str) -> str:
        return parse_identifier(raw)

    def destination(self, raw: str) -> Path:
        return parse_destination(raw, self.output_dir, self.marker)
