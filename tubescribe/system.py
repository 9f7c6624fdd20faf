"""
tubescribe.system - OS and process facade.

Every stage that touches PATH lookup, subprocesses or the filesystem does
so through a System instance passed to its constructor, so tests can
substitute a scripted fake without patching module globals.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from tubescribe.exceptions import ToolNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one external process invocation.

    ``output`` is stdout and stderr interleaved, as the process wrote them.
    """

    args: list[str]
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class System:
    """Real implementation backed by shutil, subprocess and pathlib."""

    def which(self, name: str) -> str | None:
        return shutil.which(name)

    def run(self, args: list[str]) -> ProcessResult:
        """Run a command to completion, merging stderr into stdout.

        Raises:
            ToolNotFoundError: If the executable cannot be started
        """
        logger.debug("Executing command: %s", " ".join(args))
        try:
            proc = subprocess.run(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except FileNotFoundError as e:
            raise ToolNotFoundError(args[0]) from e
        return ProcessResult(args=list(args), returncode=proc.returncode, output=proc.stdout or "")

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def remove(self, path: Path) -> None:
        path.unlink()

    def read_text(self, path: Path) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    @contextmanager
    def temporary_directory(self, prefix: str = "tubescribe-") -> Iterator[Path]:
        """Yield a private directory that is removed on every exit path."""
        with tempfile.TemporaryDirectory(prefix=prefix, ignore_cleanup_errors=True) as tmp:
            yield Path(tmp)
