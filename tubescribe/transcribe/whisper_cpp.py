"""
tubescribe.transcribe.whisper_cpp - whisper.cpp command-line backend.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tubescribe.exceptions import OutputUnreadableError, ProcessFailedError, ToolNotFoundError
from tubescribe.models import Transcript
from tubescribe.system import System

logger = logging.getLogger(__name__)

# whisper-cli appends this to the --output-file prefix
OUTPUT_SUFFIX = ".txt"


class WhisperCppTranscriber:
    """Transcriber that shells out to ``whisper-cli``."""

    def __init__(
        self,
        model_path: str | None = None,
        system: System | None = None,
        binary: str = "whisper-cli",
    ) -> None:
        self.model_path = model_path
        self.system = system or System()
        self.binary = binary

    def build_command(self, audio_path: Path, output_prefix: Path) -> list[str]:
        cmd = [self.binary]
        if self.model_path:
            cmd += ["-m", self.model_path]
        cmd += [
            "-f",
            str(audio_path),
            "--output-txt",
            "--output-file",
            str(output_prefix),
            "--no-prints",
        ]
        return cmd

    def transcribe(self, audio_path: Path) -> Transcript:
        """Transcribe an audio file with whisper.cpp.

        Output files land in a private temporary directory that is removed
        however this method exits.

        Raises:
            ToolNotFoundError: If whisper-cli is not on PATH
            ProcessFailedError: If whisper-cli exits non-zero
            OutputUnreadableError: If the transcript file cannot be read
        """
        if self.system.which(self.binary) is None:
            raise ToolNotFoundError(
                self.binary, "Build whisper.cpp and put whisper-cli on your PATH"
            )

        with self.system.temporary_directory(prefix="whisper-transcript-") as tmp_dir:
            output_prefix = tmp_dir / "transcript"
            output_file = output_prefix.with_name(output_prefix.name + OUTPUT_SUFFIX)

            result = self.system.run(self.build_command(Path(audio_path), output_prefix))
            if not result.ok:
                raise ProcessFailedError(result.args, result.returncode, result.output)

            try:
                text = self.system.read_text(output_file)
            except (OSError, UnicodeDecodeError) as e:
                raise OutputUnreadableError(output_file, str(e)) from e

        logger.debug("Read %d characters of transcript from whisper-cli", len(text))
        return Transcript(text)
