"""
tubescribe.acquire - Audio acquisition from remote video URLs.

Pipeline Stage 1: download the audio track of a video into a local file
named after the video's identifier.
"""

from __future__ import annotations

from tubescribe.acquire.ytdlp import YtDlpDownloader

__all__ = ["YtDlpDownloader"]
