"""
tubescribe.transcribe.ollama - Ollama streamed-inference backend.

Posts the audio to ``/api/generate`` with streaming enabled and joins the
``response`` fragments in arrival order until the ``done`` line arrives.
"""

from __future__ import annotations

import base64
import json
import logging
from pathlib import Path
from typing import Any

import requests
from requests import exceptions as requests_exceptions

from tubescribe.exceptions import RemoteError, TranscriptionError
from tubescribe.models import Transcript
from tubescribe.system import System

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "transcribe the following audio file:"


class StreamAccumulator:
    """Collects streamed response fragments.

    Completion and error are mutually exclusive terminal events; once
    either has happened further fragments are rejected. An error discards
    whatever text was collected.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self.done = False
        self.error: str | None = None

    @property
    def finished(self) -> bool:
        return self.done or self.error is not None

    def feed(self, fragment: dict[str, Any]) -> None:
        if self.finished:
            raise RemoteError("Received data after the stream ended")

        error = fragment.get("error")
        if error:
            self.error = str(error)
            self._parts.clear()
            return

        piece = fragment.get("response")
        if isinstance(piece, str) and piece:
            self._parts.append(piece)

        if fragment.get("done") is True:
            self.done = True

    def result(self) -> str:
        """Return the joined text.

        Raises:
            RemoteError: If the stream errored or never completed
        """
        if self.error is not None:
            raise RemoteError(f"Ollama transcription failed: {self.error}")
        if not self.done:
            raise RemoteError("Ollama stream ended before completion")
        return "".join(self._parts)


class OllamaTranscriber:
    """Transcriber backed by an Ollama server."""

    def __init__(
        self,
        host: str,
        model: str,
        session: requests.Session | None = None,
        system: System | None = None,
        timeout: int = 300,
        prompt: str = DEFAULT_PROMPT,
    ) -> None:
        if not host:
            raise TranscriptionError("Ollama host is not set")
        self.host = host.rstrip("/")
        self.model = model
        self.session = session or requests.Session()
        self.system = system or System()
        self.timeout = timeout
        self.prompt = prompt

    @property
    def url(self) -> str:
        return f"{self.host}/api/generate"

    def _payload(self, audio: bytes) -> dict[str, Any]:
        return {
            "model": self.model,
            "prompt": self.prompt,
            "images": [base64.b64encode(audio).decode("ascii")],
            "stream": True,
        }

    def transcribe(self, audio_path: Path) -> Transcript:
        """Stream a transcription from Ollama.

        Raises:
            TranscriptionError: If the audio file cannot be read
            RemoteError: On HTTP failure, an error line, or a truncated stream
        """
        try:
            audio = self.system.read_bytes(Path(audio_path))
        except OSError as e:
            raise TranscriptionError(f"Failed to read audio file {audio_path}: {e}") from e

        accumulator = StreamAccumulator()
        try:
            with self.session.post(
                self.url,
                json=self._payload(audio),
                stream=True,
                timeout=self.timeout,
            ) as r:
                r.raise_for_status()
                for line in r.iter_lines(decode_unicode=True):
                    if not line:
                        continue
                    try:
                        fragment = json.loads(line)
                    except json.JSONDecodeError as e:
                        raise RemoteError(f"Malformed stream line from Ollama: {line!r}") from e
                    accumulator.feed(fragment)
                    if accumulator.finished:
                        break
        except requests_exceptions.RequestException as e:
            raise RemoteError(f"Ollama request failed: {e}") from e

        text = accumulator.result()
        logger.debug("Ollama returned %d characters", len(text))
        return Transcript(text)
