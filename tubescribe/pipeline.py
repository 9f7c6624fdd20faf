"""
tubescribe.pipeline - Pipeline orchestration.

Runs acquisition → transcription → publication strictly in sequence:

    IDLE → ACQUIRING → TRANSCRIBING → PUBLISHING → DONE

Any stage failure moves the run to FAILED and surfaces as StageError
naming the stage. The downloaded audio file is deleted as soon as
transcription finishes, whether it succeeded or not.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from tubescribe.acquire import YtDlpDownloader
from tubescribe.config import TubescribeConfig
from tubescribe.credentials import EnvCredentialProvider
from tubescribe.exceptions import ConfigError, StageError
from tubescribe.io import write_text
from tubescribe.models import AcquiredAudio, Transcript, UploadTarget
from tubescribe.protocols import Downloader, Transcriber
from tubescribe.publish import Publisher, VercelBlobUploader
from tubescribe.system import System
from tubescribe.transcribe import OllamaTranscriber, OpenAITranscriber, WhisperCppTranscriber

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PipelineState(str, Enum):
    IDLE = "idle"
    ACQUIRING = "acquiring"
    TRANSCRIBING = "transcribing"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"


STAGE_NAMES = {
    PipelineState.ACQUIRING: "acquire",
    PipelineState.TRANSCRIBING: "transcribe",
    PipelineState.PUBLISHING: "publish",
}


@dataclass(frozen=True)
class PipelineResult:
    audio: AcquiredAudio
    transcript: Transcript
    target: UploadTarget
    response: str


class Pipeline:
    """Sequences the three stages and owns the downloaded audio file."""

    def __init__(
        self,
        downloader: Downloader,
        transcriber: Transcriber,
        publisher: Publisher,
        system: System | None = None,
        local_copy_dir: Path | None = None,
    ) -> None:
        self.downloader = downloader
        self.transcriber = transcriber
        self.publisher = publisher
        self.system = system or System()
        self.local_copy_dir = local_copy_dir
        self.state = PipelineState.IDLE
        self.failed_stage: str | None = None

    def run(self, url: str, output_dir: Path, console=None) -> PipelineResult:
        """Download, transcribe and publish one video.

        Args:
            url: Source video URL
            output_dir: Directory for the temporary audio download
            console: Optional rich console for progress output

        Returns:
            PipelineResult with the upload response

        Raises:
            StageError: Wrapping the first stage failure
        """
        self.state = PipelineState.IDLE
        self.failed_stage = None

        _status(console, "Downloading audio...")
        audio = self._run_stage(
            PipelineState.ACQUIRING, self.downloader.download_audio, url, Path(output_dir)
        )
        _status(console, f"Audio downloaded to: {audio.local_path}")

        with self._owned_audio(audio, console):
            _status(console, "Transcribing audio...")
            transcript = self._run_stage(
                PipelineState.TRANSCRIBING, self.transcriber.transcribe, audio.local_path
            )

        target = self.publisher.target_for(audio)
        _status(console, f"Uploading transcript to {target}...")
        response = self._run_stage(PipelineState.PUBLISHING, self._publish, transcript, target)

        self.state = PipelineState.DONE
        return PipelineResult(audio=audio, transcript=transcript, target=target, response=response)

    def _run_stage(self, state: PipelineState, func: Callable[..., T], *args: Any) -> T:
        self.state = state
        stage = STAGE_NAMES[state]
        logger.info("Entering %s stage", stage)
        try:
            return func(*args)
        except Exception as e:
            self.state = PipelineState.FAILED
            self.failed_stage = stage
            raise StageError(stage, e) from e

    def _publish(self, transcript: Transcript, target: UploadTarget) -> str:
        if self.local_copy_dir is not None:
            local_path = self.local_copy_dir / target.path.lstrip("/")
            write_text(local_path, transcript.text)
            logger.info("Transcript saved to %s", local_path)
        return self.publisher.publish(transcript, target)

    @contextmanager
    def _owned_audio(self, audio: AcquiredAudio, console=None) -> Iterator[AcquiredAudio]:
        """Delete the audio file once the block exits, however it exits.

        Deletion failures are logged and never raised.
        """
        try:
            yield audio
        finally:
            try:
                self.system.remove(audio.local_path)
            except OSError as e:
                logger.warning(
                    "Could not remove temporary audio file %s: %s", audio.local_path, e
                )
            else:
                _status(console, f"Removed temporary audio file: {audio.local_path}")


def _status(console, message: str) -> None:
    logger.debug(message)
    if console:
        console.print(f"[dim]  {message}[/dim]")


def create_transcriber(config: TubescribeConfig, system: System | None = None) -> Transcriber:
    """Create the transcription backend selected in the config."""
    if config.transcriber_backend == "ollama":
        return OllamaTranscriber(
            host=config.ollama_host,
            model=config.ollama_model,
            system=system,
            timeout=config.request_timeout,
        )
    if config.transcriber_backend == "openai":
        return OpenAITranscriber(
            credentials=EnvCredentialProvider(config.openai_api_key_env),
            model=config.openai_model,
            system=system,
            timeout=config.request_timeout,
        )
    if not config.whisper_model_path:
        logger.warning("WHISPER_MODEL_PATH not set; whisper-cli will use its default model")
    return WhisperCppTranscriber(
        model_path=config.whisper_model_path,
        system=system,
        binary=config.whisper_binary,
    )


def create_pipeline_from_config(config: TubescribeConfig, system: System | None = None) -> Pipeline:
    """Wire up a Pipeline from TubescribeConfig.

    Raises:
        ConfigError: If the blob API URL is not configured
    """
    if not config.blob_api_url:
        raise ConfigError("VERCEL_BLOB_API_URL environment variable not set")

    system = system or System()
    uploader = VercelBlobUploader(
        api_url=config.blob_api_url,
        credentials=EnvCredentialProvider(config.blob_token_env),
        timeout=config.request_timeout,
    )
    return Pipeline(
        downloader=YtDlpDownloader(
            system=system,
            binary=config.downloader_binary,
            media_helper=config.media_helper_binary,
            audio_format=config.audio_format,
        ),
        transcriber=create_transcriber(config, system),
        publisher=Publisher(
            uploader,
            app_name=config.app_name,
            root_dir=config.transcript_root,
            filename=config.transcript_filename,
        ),
        system=system,
        local_copy_dir=config.local_copy_dir,
    )
