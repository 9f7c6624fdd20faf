"""
tubescribe.transcribe.openai - OpenAI-compatible transcription endpoint.
"""

from __future__ import annotations

from pathlib import Path

import requests
from requests import exceptions as requests_exceptions

from tubescribe.credentials import require_key
from tubescribe.exceptions import RemoteError, TranscriptionError
from tubescribe.models import Transcript
from tubescribe.protocols import CredentialProvider
from tubescribe.system import System


class OpenAITranscriber:
    """Transcriber posting audio to ``{base_url}/audio/transcriptions``."""

    def __init__(
        self,
        credentials: CredentialProvider | None,
        model: str = "whisper-1",
        base_url: str = "https://api.openai.com/v1",
        session: requests.Session | None = None,
        system: System | None = None,
        timeout: int = 300,
    ) -> None:
        self.credentials = credentials
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.system = system or System()
        self.timeout = timeout

    def transcribe(self, audio_path: Path) -> Transcript:
        """Upload the audio file and return the plain-text transcription.

        Raises:
            CredentialError: If no API key is available (checked before any I/O)
            TranscriptionError: If the audio file cannot be read
            RemoteError: If the request fails or returns a non-200 status
        """
        api_key = require_key(self.credentials)
        audio_path = Path(audio_path)

        try:
            audio = self.system.read_bytes(audio_path)
        except OSError as e:
            raise TranscriptionError(f"Failed to read audio file {audio_path}: {e}") from e

        try:
            r = self.session.post(
                f"{self.base_url}/audio/transcriptions",
                headers={"Authorization": f"Bearer {api_key}"},
                data={"model": self.model, "response_format": "text"},
                files={"file": (audio_path.name, audio)},
                timeout=self.timeout,
            )
        except requests_exceptions.RequestException as e:
            raise RemoteError(f"Transcription request failed: {e}") from e

        if r.status_code != 200:
            raise RemoteError(f"Transcription failed with status code {r.status_code}: {r.text}")
        return Transcript(r.text)
