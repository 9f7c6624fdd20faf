"""
tubescribe.publish.stage - Publication stage.
"""

from __future__ import annotations

import logging

from tubescribe.exceptions import PublicationError, TubescribeError
from tubescribe.models import AcquiredAudio, Transcript, UploadTarget
from tubescribe.protocols import Uploader
from tubescribe.publish.paths import DEFAULT_FILENAME, DEFAULT_ROOT, derive_upload_target

logger = logging.getLogger(__name__)


class Publisher:
    """Derives upload targets and delegates transport to an uploader."""

    def __init__(
        self,
        uploader: Uploader,
        app_name: str = "tubescribe",
        root_dir: str = DEFAULT_ROOT,
        filename: str = DEFAULT_FILENAME,
    ) -> None:
        self.uploader = uploader
        self.app_name = app_name
        self.root_dir = root_dir
        self.filename = filename

    def target_for(self, audio: AcquiredAudio) -> UploadTarget:
        return derive_upload_target(
            audio.platform,
            audio.source_id,
            app_name=self.app_name,
            root_dir=self.root_dir,
            filename=self.filename,
        )

    def publish(self, transcript: Transcript, target: UploadTarget) -> str:
        """Upload a transcript.

        Errors from the uploader that are not already Tubescribe errors
        are wrapped in PublicationError.
        """
        logger.info("Uploading transcript to %s", target)
        try:
            return self.uploader.upload(transcript.text, target.path)
        except TubescribeError:
            raise
        except Exception as e:
            raise PublicationError(f"Upload failed: {e}") from e
