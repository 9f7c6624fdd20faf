"""
tubescribe.publish.paths - Upload path derivation.

With an identifier the path is ``{app_name}/{platform}/{source_id}``.
Without one it falls back to ``{root}/{subdir}/{filename}``, where every
platform except Instagram is filed under the YouTube directory.
"""

from __future__ import annotations

import os

from tubescribe.models import Platform, UploadTarget

DEFAULT_ROOT = "tubescribe"
DEFAULT_FILENAME = "transcript.txt"


def normalize_separators(path: str) -> str:
    """Convert local path separators to forward slashes."""
    path = path.replace("\\", "/")
    if os.sep != "/":
        path = path.replace(os.sep, "/")
    return path


def derive_upload_target(
    platform: Platform,
    source_id: str = "",
    app_name: str = "tubescribe",
    root_dir: str = DEFAULT_ROOT,
    filename: str = DEFAULT_FILENAME,
) -> UploadTarget:
    """Build the storage path for a transcript.

    Pure function of its arguments.

    Args:
        platform: Platform the source URL was classified as
        source_id: Video identifier, empty if the downloader had none
        app_name: Leading path segment for identifier-based paths
        root_dir: Leading path segment for the fixed-filename fallback
        filename: File name for the fixed-filename fallback

    Returns:
        UploadTarget with forward-slash separators
    """
    if source_id:
        path = "/".join([app_name, platform.value, source_id])
    else:
        subdir = Platform.INSTAGRAM if platform is Platform.INSTAGRAM else Platform.YOUTUBE
        path = "/".join([root_dir, subdir.value, filename])
    return UploadTarget(normalize_separators(path))
