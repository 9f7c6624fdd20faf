"""
tubescribe.protocols - Capability interfaces for pluggable backends.

Backends are chosen when the pipeline is constructed; anything with the
right methods qualifies, including test doubles.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from tubescribe.models import AcquiredAudio, Transcript


class Downloader(Protocol):
    def download_audio(self, url: str, output_dir: Path) -> AcquiredAudio: ...


class Transcriber(Protocol):
    def transcribe(self, audio_path: Path) -> Transcript: ...


class Uploader(Protocol):
    def upload(self, content: str, path: str) -> str: ...


class CredentialProvider(Protocol):
    def get_key(self) -> str:
        """Return the credential, or an empty string when absent."""
        ...
