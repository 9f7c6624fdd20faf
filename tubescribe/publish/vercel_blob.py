"""
tubescribe.publish.vercel_blob - Vercel Blob upload API client.
"""

from __future__ import annotations

import requests
from requests import exceptions as requests_exceptions

from tubescribe.credentials import require_key
from tubescribe.exceptions import PublicationError
from tubescribe.protocols import CredentialProvider


class VercelBlobUploader:
    """Uploads text as a multipart file to a blob-store endpoint."""

    def __init__(
        self,
        api_url: str,
        credentials: CredentialProvider,
        session: requests.Session | None = None,
        timeout: int = 300,
    ) -> None:
        self.api_url = api_url
        self.credentials = credentials
        self.session = session or requests.Session()
        self.timeout = timeout

    def upload(self, content: str, path: str) -> str:
        """Upload ``content`` to ``path`` and return the response body.

        Raises:
            CredentialError: If the API token is empty
            PublicationError: On transport failure or a non-200 status
        """
        token = require_key(self.credentials)
        if not self.api_url:
            raise PublicationError("Blob API URL is not set")

        try:
            r = self.session.post(
                self.api_url,
                params={"blob_path": path},
                headers={"Authorization": f"Bearer {token}"},
                files={"file": (path, content.encode("utf-8"), "text/plain")},
                timeout=self.timeout,
            )
        except requests_exceptions.RequestException as e:
            raise PublicationError(f"Failed to send request: {e}") from e

        if r.status_code != 200:
            raise PublicationError(
                f"Upload failed with status code {r.status_code}: {r.text}",
                status_code=r.status_code,
                body=r.text,
            )
        return r.text
