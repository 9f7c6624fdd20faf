"""Tests for tubescribe.config module."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml

from tubescribe.config import (
    TubescribeConfig,
    create_default_config,
    load_config,
    read_env_overrides,
    write_config,
)
from tubescribe.exceptions import ConfigError


class TestTubescribeConfig:
    def test_default_config(self) -> None:
        config = TubescribeConfig()
        assert config.app_name == "tubescribe"
        assert config.transcriber_backend == "whisper-cpp"
        assert config.audio_format == "wav"
        assert config.blob_api_url is None

    def test_invalid_backend_raises(self) -> None:
        with pytest.raises(ValueError):
            TubescribeConfig(transcriber_backend="invalid")

    def test_invalid_audio_format_raises(self) -> None:
        with pytest.raises(ValueError):
            TubescribeConfig(audio_format="avi")

    def test_blank_app_name_raises(self) -> None:
        with pytest.raises(ValueError):
            TubescribeConfig(app_name="  ")

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            TubescribeConfig(request_timeout=0)


class TestReadEnvOverrides:
    def test_maps_known_variables(self) -> None:
        overrides = read_env_overrides(
            {
                "VERCEL_BLOB_API_URL": "https://blob.example.com",
                "WHISPER_MODEL_PATH": "/models/base.bin",
                "UNRELATED": "x",
            }
        )
        assert overrides == {
            "blob_api_url": "https://blob.example.com",
            "whisper_model_path": "/models/base.bin",
        }

    def test_empty_values_ignored(self) -> None:
        assert read_env_overrides({"OLLAMA_HOST": ""}) == {}


class TestLoadConfig:
    def test_without_file(self) -> None:
        config = load_config(None, environ={}, load_env_file=False)
        assert config == TubescribeConfig(output_dir=config.output_dir)

    def test_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "tubescribe.yaml"
        path.write_text(yaml.dump({"app_name": "njm", "transcriber_backend": "ollama"}))

        config = load_config(path, environ={}, load_env_file=False)

        assert config.app_name == "njm"
        assert config.transcriber_backend == "ollama"

    def test_env_overrides_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "tubescribe.yaml"
        path.write_text(yaml.dump({"app_name": "from-file"}))

        config = load_config(
            path, environ={"TUBESCRIBE_APP_NAME": "from-env"}, load_env_file=False
        )

        assert config.app_name == "from-env"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml", environ={}, load_env_file=False)

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("app_name: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path, environ={}, load_env_file=False)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path, environ={}, load_env_file=False)

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "tubescribe.yaml"
        path.write_text(yaml.dump({"transcriber_backend": "nope"}))
        with pytest.raises(ConfigError):
            load_config(path, environ={}, load_env_file=False)

    def test_env_file_loaded(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        environ = {k: v for k, v in os.environ.items() if k != "OLLAMA_MODEL"}
        monkeypatch.setattr(os, "environ", environ)
        (tmp_path / ".env").write_text("OLLAMA_MODEL=whisper-large\n")

        config = load_config(None)

        assert config.ollama_model == "whisper-large"


class TestWriteConfig:
    def test_round_trip_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "sub" / "tubescribe.yaml"
        write_config(create_default_config(), path)

        config = load_config(path, environ={}, load_env_file=False)

        assert config.app_name == "tubescribe"
        assert config.whisper_model_path is None
