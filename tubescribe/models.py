"""
tubescribe.models - Data types shared across pipeline stages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Platform(str, Enum):
    """Coarse origin of a source URL, used only for storage paths."""

    YOUTUBE = "youtube"
    INSTAGRAM = "instagram"
    OTHER = "other"


@dataclass(frozen=True)
class AcquiredAudio:
    """Local audio file produced by one acquisition.

    ``source_id`` is empty when the backend cannot expose an identifier.
    """

    local_path: Path
    source_id: str = ""
    platform: Platform = Platform.OTHER


@dataclass(frozen=True)
class Transcript:
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class UploadTarget:
    """Forward-slash storage path handed to the uploader."""

    path: str

    def __str__(self) -> str:
        return self.path


def classify_platform(url: str) -> Platform:
    """Classify a source URL by substring, YouTube checked before Instagram."""
    if "youtube.com" in url:
        return Platform.YOUTUBE
    if "instagram.com" in url:
        return Platform.INSTAGRAM
    return Platform.OTHER
