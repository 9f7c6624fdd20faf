"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

import pytest

from tubescribe.exceptions import ToolNotFoundError
from tubescribe.models import AcquiredAudio, Platform, Transcript, classify_platform
from tubescribe.system import ProcessResult


class FakeSystem:
    """Scripted stand-in for tubescribe.system.System.

    ``handler`` receives the argument list and returns a ProcessResult;
    it may create files on disk to simulate tool output.
    """

    def __init__(
        self,
        available: set[str] | None = None,
        handler: Callable[[list[str]], ProcessResult] | None = None,
    ) -> None:
        self.available = available if available is not None else {"ffmpeg", "yt-dlp", "whisper-cli"}
        self.handler = handler
        self.commands: list[list[str]] = []
        self.removed: list[Path] = []
        self.remove_error: OSError | None = None
        self.temp_dirs: list[Path] = []

    def which(self, name: str) -> str | None:
        return f"/usr/local/bin/{name}" if name in self.available else None

    def run(self, args: list[str]) -> ProcessResult:
        self.commands.append(list(args))
        if args[0] not in self.available:
            raise ToolNotFoundError(args[0])
        if self.handler is None:
            return ProcessResult(args=list(args), returncode=0, output="")
        return self.handler(list(args))

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def remove(self, path: Path) -> None:
        self.removed.append(path)
        if self.remove_error is not None:
            raise self.remove_error
        path.unlink()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    @contextmanager
    def temporary_directory(self, prefix: str = "tubescribe-") -> Iterator[Path]:
        tmp = Path(tempfile.mkdtemp(prefix=prefix))
        self.temp_dirs.append(tmp)
        try:
            yield tmp
        finally:
            shutil.rmtree(tmp, ignore_errors=True)


class FakeDownloader:
    """Writes a dummy audio file and reports the given identifier."""

    def __init__(self, source_id: str = "X", filename: str | None = None) -> None:
        self.source_id = source_id
        self.filename = filename
        self.calls: list[tuple[str, Path]] = []

    def download_audio(self, url: str, output_dir: Path) -> AcquiredAudio:
        self.calls.append((url, output_dir))
        path = output_dir / (self.filename or f"{self.source_id or 'audio'}.wav")
        path.write_bytes(b"RIFF fake audio")
        return AcquiredAudio(local_path=path, source_id=self.source_id, platform=classify_platform(url))


class FakeTranscriber:
    def __init__(self, text: str = "hello world", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[Path] = []

    def transcribe(self, audio_path: Path) -> Transcript:
        self.calls.append(audio_path)
        if self.error is not None:
            raise self.error
        return Transcript(self.text)


class EchoUploader:
    """Returns the path it was given, recording the content."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.uploads: list[tuple[str, str]] = []

    def upload(self, content: str, path: str) -> str:
        self.uploads.append((content, path))
        if self.error is not None:
            raise self.error
        return f'{{"pathname": "{path}"}}'


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, text: str = "", lines: list[str] | None = None) -> None:
        self.status_code = status_code
        self.text = text
        self._lines = lines or []

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, _exc_type: object, _exc: object, _tb: object) -> bool:
        return False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            import requests

            raise requests.HTTPError(f"{self.status_code} Error")

    def iter_lines(self, decode_unicode: bool = False, **_kwargs: object) -> list[str]:
        _ = decode_unicode
        return self._lines


class FakeSession:
    """Records post() calls and returns a canned response or raises."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or FakeResponse()
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def post(self, url: str, **kwargs: object) -> FakeResponse:
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_system() -> FakeSystem:
    return FakeSystem()


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    """Return a small dummy audio file."""
    path = tmp_path / "X.wav"
    path.write_bytes(b"RIFF fake audio")
    return path


@pytest.fixture
def youtube_audio(audio_file: Path) -> AcquiredAudio:
    return AcquiredAudio(local_path=audio_file, source_id="X", platform=Platform.YOUTUBE)
