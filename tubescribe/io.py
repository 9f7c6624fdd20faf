"""
tubescribe.io - File writes for transcripts and config.
"""

from __future__ import annotations

import tempfile
from pathlib import Path


def write_text(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` (UTF-8), creating parent directories.

    Readers see either the previous file or the complete new one.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(name)
    try:
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
