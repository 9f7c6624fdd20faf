"""
tubescribe.publish - Transcript publication.

Pipeline Stage 3: derive a storage path from the source platform and
identifier, then hand the transcript to an uploader.
"""

from __future__ import annotations

from tubescribe.publish.paths import derive_upload_target, normalize_separators
from tubescribe.publish.stage import Publisher
from tubescribe.publish.vercel_blob import VercelBlobUploader

__all__ = [
    "Publisher",
    "VercelBlobUploader",
    "derive_upload_target",
    "normalize_separators",
]
