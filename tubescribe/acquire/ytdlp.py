"""
tubescribe.acquire.ytdlp - yt-dlp audio downloader.

Looks up the video identifier first, then asks yt-dlp to extract the
audio to ``{output_dir}/{identifier}.{format}``. The expected path is
authoritative; the extractor's own destination announcement is only
cross-checked.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tubescribe.exceptions import (
    ArtifactMissingError,
    NoDestinationFoundError,
    ProcessFailedError,
    ToolNotFoundError,
)
from tubescribe.models import AcquiredAudio, classify_platform
from tubescribe.parsing import OutputParser
from tubescribe.system import System
from tubescribe.utils import sanitize_filename

logger = logging.getLogger(__name__)

INSTALL_HINTS = {
    "ffmpeg": "ffmpeg is required by yt-dlp to process audio. "
    "Install with: brew install ffmpeg (macOS) or apt install ffmpeg (Linux)",
    "yt-dlp": "Install with: pip install yt-dlp",
}


class YtDlpDownloader:
    """Downloader backed by the ``yt-dlp`` command-line tool."""

    def __init__(
        self,
        system: System | None = None,
        binary: str = "yt-dlp",
        media_helper: str = "ffmpeg",
        audio_format: str = "wav",
    ) -> None:
        self.system = system or System()
        self.binary = binary
        self.media_helper = media_helper
        self.audio_format = audio_format

    def check_tools(self) -> None:
        """Ensure the media helper and then the downloader resolve on PATH.

        Raises:
            ToolNotFoundError: Naming the first missing binary
        """
        for name in (self.media_helper, self.binary):
            if self.system.which(name) is None:
                raise ToolNotFoundError(name, INSTALL_HINTS.get(name))

    def fetch_identifier(self, url: str) -> str:
        """Ask yt-dlp for the video id without downloading anything."""
        result = self.system.run([self.binary, "--get-id", url])
        if not result.ok:
            raise ProcessFailedError(result.args, result.returncode, result.output)
        return OutputParser().identifier(result.output)

    def build_command(self, url: str, destination: Path) -> list[str]:
        return [
            self.binary,
            "-x",
            "--audio-format",
            self.audio_format,
            "--output",
            str(destination),
            "--restrict-filenames",
            url,
        ]

    def download_audio(self, url: str, output_dir: Path) -> AcquiredAudio:
        """Download the audio track of ``url`` into ``output_dir``.

        A non-zero exit is tolerated when the file was still produced;
        yt-dlp exits non-zero after some warnings.

        Args:
            url: Video URL
            output_dir: Existing or creatable directory for the audio file

        Returns:
            AcquiredAudio describing the written file

        Raises:
            ToolNotFoundError: If ffmpeg or yt-dlp is missing
            ProcessFailedError: If yt-dlp fails and produced no file
            NoIdentifierFoundError: If the id lookup printed nothing
            ArtifactMissingError: If yt-dlp succeeded but the file is absent
        """
        output_dir = Path(output_dir)
        self.check_tools()
        self.system.make_dirs(output_dir)

        source_id = self.fetch_identifier(url)
        expected = output_dir / sanitize_filename(f"{source_id}.{self.audio_format}")

        result = self.system.run(self.build_command(url, expected))
        self._cross_check_destination(result.output, output_dir, expected)

        if not self.system.exists(expected):
            if not result.ok:
                raise ProcessFailedError(result.args, result.returncode, result.output)
            raise ArtifactMissingError(expected)

        if not result.ok:
            logger.warning(
                "%s exited with status %d but produced %s; continuing",
                self.binary,
                result.returncode,
                expected,
            )

        return AcquiredAudio(
            local_path=expected,
            source_id=source_id,
            platform=classify_platform(url),
        )

    def _cross_check_destination(self, output: str, output_dir: Path, expected: Path) -> None:
        try:
            reported = OutputParser(output_dir).destination(output)
        except NoDestinationFoundError:
            logger.debug("%s did not announce an extraction destination", self.binary)
            return
        if reported != expected:
            logger.warning("%s reported destination %s, expected %s", self.binary, reported, expected)
