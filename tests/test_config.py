"""Tests for configuration loading and validation in config.py."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from pydantic import ValidationError

from report_engine.config import (
    API_URL_ENV,
    ApiConfig,
    LoggingConfig,
    RPEConfig,
    find_config,
    load_config,
)


class TestRPEConfigFromYaml:
    """Tests for RPEConfig.from_yaml parsing."""

    def test_empty_config_uses_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An empty file is a valid config."""
        monkeypatch.delenv(API_URL_ENV, raising=False)
        config = RPEConfig.from_yaml("")

        assert config.api.base_url == ""
        assert config.api.timeout == 30.0
        assert config.acquisition.row_limit == 5_000_000
        assert config.acquisition.row_count_hint == 20
        assert config.generative.model == "gemini-2.5-flash"
        assert config.logging.level == "INFO"

    def test_full_config(self) -> None:
        """Every section is parsed."""
        content = """\
api:
  base_url: http://localhost:8000/
  timeout: 5
  verify_ssl: false

acquisition:
  row_limit: 1000
  row_count_hint: 50

generative:
  model: gemini-2.0-pro
  temperature: 0.7

logging:
  level: debug
  file: logs/rpe.log
"""
        config = RPEConfig.from_yaml(content)

        assert config.api.base_url == "http://localhost:8000"
        assert config.api.timeout == 5
        assert config.api.verify_ssl is False
        assert config.acquisition.row_limit == 1000
        assert config.acquisition.row_count_hint == 50
        assert config.generative.model == "gemini-2.0-pro"
        assert config.generative.temperature == 0.7
        assert config.logging.level == "DEBUG"
        assert config.logging.file == "logs/rpe.log"

    def test_invalid_log_level(self) -> None:
        """Unknown log levels are rejected."""
        with pytest.raises(ValidationError, match="Invalid log level"):
            LoggingConfig(level="chatty")

    @pytest.mark.parametrize(
        "content",
        [
            "acquisition:\n  row_limit: 0\n",
            "api:\n  timeout: -1\n",
            "generative:\n  temperature: 3\n",
        ],
    )
    def test_out_of_range_values(self, content: str) -> None:
        """Limits and timeouts must be positive."""
        with pytest.raises(ValidationError):
            RPEConfig.from_yaml(content)


class TestApiConfig:
    """Tests for ApiConfig base URL handling."""

    def test_env_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """RPE_API_URL fills an empty base URL."""
        monkeypatch.setenv(API_URL_ENV, "https://reports.example.com/api/")
        assert ApiConfig().base_url == "https://reports.example.com/api"

    def test_explicit_wins_over_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A configured URL ignores the environment."""
        monkeypatch.setenv(API_URL_ENV, "https://env.example.com")
        assert ApiConfig(base_url="https://file.example.com").base_url == "https://file.example.com"


class TestFindConfig:
    """Tests for find_config function."""

    def test_find_config_in_current_dir(self) -> None:
        """Test finding config in current directory."""
        with TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "rpe.yml"
            config_path.write_text("logging:\n  level: INFO\n")

            found = find_config(tmpdir)
            # Use resolve() to handle macOS /private symlink
            assert found is not None
            assert found.resolve() == config_path.resolve()

    def test_find_config_dot_rpe_yaml(self) -> None:
        """Test finding .rpe.yaml (hidden file, alternative extension)."""
        with TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / ".rpe.yaml"
            config_path.write_text("")

            found = find_config(tmpdir)
            assert found is not None
            assert found.resolve() == config_path.resolve()

    def test_find_config_in_parent_dir(self) -> None:
        """Test finding config in parent directory."""
        with TemporaryDirectory() as tmpdir:
            parent = Path(tmpdir)
            child = parent / "reports" / "q1"
            child.mkdir(parents=True)

            config_path = parent / "rpe.yml"
            config_path.write_text("")

            found = find_config(child)
            assert found is not None
            assert found.resolve() == config_path.resolve()

    def test_find_config_not_found(self) -> None:
        """Test None returned when no config found."""
        with TemporaryDirectory() as tmpdir:
            assert find_config(tmpdir) is None


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_explicit_path(self) -> None:
        """An explicit path is loaded."""
        with TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "custom.yml"
            config_path.write_text("acquisition:\n  row_limit: 10\n")

            config = load_config(config_path)
            assert config.acquisition.row_limit == 10

    def test_missing_explicit_path(self) -> None:
        """A missing explicit path raises FileNotFoundError."""
        with TemporaryDirectory() as tmpdir:
            with pytest.raises(FileNotFoundError, match="Config file not found"):
                load_config(Path(tmpdir) / "nope.yml")

    def test_defaults_without_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without any config file the defaults apply."""
        with TemporaryDirectory() as tmpdir:
            monkeypatch.chdir(tmpdir)
            assert load_config() == RPEConfig()

    def test_required_without_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """required=True turns a missing file into an error."""
        with TemporaryDirectory() as tmpdir:
            monkeypatch.chdir(tmpdir)
            with pytest.raises(FileNotFoundError, match="No rpe.yml found"):
                load_config(required=True)

    def test_discovers_from_cwd(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a path the working directory is searched."""
        with TemporaryDirectory() as tmpdir:
            Path(tmpdir, "rpe.yml").write_text("generative:\n  model: gemini-x\n")
            monkeypatch.chdir(tmpdir)
            assert load_config().generative.model == "gemini-x"
