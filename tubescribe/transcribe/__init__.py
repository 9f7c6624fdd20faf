"""
tubescribe.transcribe - Speech-to-text backends.

Pipeline Stage 2: turn a local audio file into transcript text using
whisper.cpp (local process), Ollama (streamed network inference) or an
OpenAI-compatible transcription endpoint.
"""

from __future__ import annotations

from tubescribe.transcribe.ollama import OllamaTranscriber, StreamAccumulator
from tubescribe.transcribe.openai import OpenAITranscriber
from tubescribe.transcribe.whisper_cpp import WhisperCppTranscriber

__all__ = [
    "OllamaTranscriber",
    "OpenAITranscriber",
    "StreamAccumulator",
    "WhisperCppTranscriber",
]
