"""
tubescribe.config - YAML config loading, environment overlay, validation.

Settings come from an optional tubescribe.yaml, then environment variables
(after loading a .env file if one exists) override individual keys.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from tubescribe.exceptions import ConfigError
from tubescribe.io import write_text

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "tubescribe.yaml"

ENV_OVERRIDES: dict[str, str] = {
    "TUBESCRIBE_APP_NAME": "app_name",
    "TUBESCRIBE_OUTPUT_DIR": "output_dir",
    "TUBESCRIBE_TRANSCRIBER": "transcriber_backend",
    "TUBESCRIBE_LOCAL_COPY_DIR": "local_copy_dir",
    "WHISPER_MODEL_PATH": "whisper_model_path",
    "OLLAMA_HOST": "ollama_host",
    "OLLAMA_MODEL": "ollama_model",
    "VERCEL_BLOB_API_URL": "blob_api_url",
}


class TubescribeConfig(BaseModel):
    """Resolved configuration for a pipeline run."""

    app_name: str = "tubescribe"
    output_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    audio_format: str = "wav"

    transcriber_backend: str = "whisper-cpp"
    whisper_model_path: str | None = None
    whisper_binary: str = "whisper-cli"

    downloader_binary: str = "yt-dlp"
    media_helper_binary: str = "ffmpeg"

    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "whisper"

    openai_model: str = "whisper-1"
    openai_api_key_env: str = "OPENAI_API_KEY"

    blob_api_url: str | None = None
    blob_token_env: str = "VERCEL_BLOB_API_TOKEN"

    transcript_root: str = "tubescribe"
    transcript_filename: str = "transcript.txt"
    local_copy_dir: Path | None = None

    request_timeout: int = Field(default=300, gt=0)

    @field_validator("transcriber_backend")
    @classmethod
    def validate_transcriber_backend(cls, v: str) -> str:
        valid = {"whisper-cpp", "ollama", "openai"}
        if v not in valid:
            raise ValueError(f"transcriber_backend must be one of: {valid}")
        return v

    @field_validator("audio_format")
    @classmethod
    def validate_audio_format(cls, v: str) -> str:
        valid = {"wav", "mp3", "m4a", "flac", "opus"}
        if v not in valid:
            raise ValueError(f"audio_format must be one of: {valid}")
        return v

    @field_validator("app_name", "transcript_root", "transcript_filename")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


def read_env_overrides(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Collect config keys set through environment variables."""
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for env_key, field in ENV_OVERRIDES.items():
        value = environ.get(env_key)
        if value:
            overrides[field] = value
    return overrides


def load_config(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
    load_env_file: bool = True,
) -> TubescribeConfig:
    """Load and validate configuration.

    Args:
        path: Optional YAML config file; must exist if given
        environ: Environment mapping (defaults to os.environ)
        load_env_file: Load a .env file into os.environ first

    Raises:
        ConfigError: If the file is missing, unparsable, or invalid
    """
    if load_env_file and not load_dotenv(find_dotenv(usecwd=True)):
        logger.debug("No .env file found; using process environment only")

    raw_config: dict[str, Any] = {}
    if path is not None:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        try:
            with open(path) as f:
                raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(raw_config, dict):
            raise ConfigError(f"{path} must contain a mapping")

    merged = {**raw_config, **read_env_overrides(environ)}

    try:
        return TubescribeConfig(**merged)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def create_default_config() -> dict[str, Any]:
    """Create a default config dict suitable for writing to YAML."""
    return {
        "app_name": "tubescribe",
        "audio_format": "wav",
        "transcriber_backend": "whisper-cpp",
        "whisper_model_path": None,
        "ollama_host": "http://localhost:11434",
        "ollama_model": "whisper",
        "blob_api_url": None,
        "transcript_root": "tubescribe",
        "transcript_filename": "transcript.txt",
    }


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    write_text(path, yaml.dump(config, default_flow_style=False, sort_keys=False))
