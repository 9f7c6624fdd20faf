"""
tubescribe.exceptions - Custom exception classes.

All Tubescribe-specific exceptions inherit from TubescribeError.
"""

from __future__ import annotations

from pathlib import Path


class TubescribeError(Exception):
    """Base exception for all Tubescribe errors."""

    pass


class ConfigError(TubescribeError):
    """Configuration loading or validation error."""

    pass


class CredentialError(TubescribeError):
    """A required credential resolved to an empty value."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name}: credential not provided")


class ToolNotFoundError(TubescribeError):
    """Required external binary missing from PATH."""

    def __init__(self, name: str, install_hint: str | None = None):
        self.name = name
        self.install_hint = install_hint
        message = f"{name} not found in PATH"
        if install_hint:
            message = f"{message}. {install_hint}"
        super().__init__(message)


class ProcessFailedError(TubescribeError):
    """External process exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, output: str):
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"{command[0] if command else 'process'} exited with status {returncode}\n"
            f"Output: {output}"
        )


class ParseError(TubescribeError):
    """Structured value could not be recovered from tool output."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


class NoIdentifierFoundError(ParseError):
    """Tool output contained only blank lines."""

    pass


class NoDestinationFoundError(ParseError):
    """Tool output had no destination marker line."""

    pass


class AcquisitionError(TubescribeError):
    """Audio acquisition error."""

    pass


class ArtifactMissingError(AcquisitionError):
    """Downloader finished but the expected file is not on disk."""

    def __init__(self, expected_path: Path):
        self.expected_path = expected_path
        super().__init__(f"Downloader reported success but no file at {expected_path}")


class TranscriptionError(TubescribeError):
    """Transcription error."""

    pass


class OutputUnreadableError(TranscriptionError):
    """Transcriber output file missing or unreadable."""

    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        message = f"Cannot read transcript file {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RemoteError(TranscriptionError):
    """Remote inference endpoint failed or signalled an error."""

    pass


class PublicationError(TubescribeError):
    """Transcript upload error."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class StageError(TubescribeError):
    """A pipeline stage failed; wraps the originating error."""

    def __init__(self, stage: str, cause: Exception):
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage} stage failed: {cause}")
