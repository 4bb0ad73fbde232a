"""Unit tests for Settings class and get_settings function."""

from pathlib import Path

import pytest

from pathfinder.config import get_settings, reload_settings
from pathfinder.config.settings import Settings


@pytest.fixture
def config_env(
    test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point the loader at the temporary config directory."""
    monkeypatch.setenv("PATHFINDER_CONFIG_DIR", str(test_config_dir))
    monkeypatch.setenv("PATHFINDER_ENV", "nonexistent")
    return test_config_dir


class TestSettings:
    """Tests for Settings model."""

    def test_default_values(self) -> None:
        settings = Settings()
        assert settings.parameters == {}
        assert settings.resolver.assertive is False
        assert settings.cache.backend == "inmemory"
        assert settings.observability.logging.level == "INFO"

    def test_init_arguments(self) -> None:
        settings = Settings(
            parameters={"dir.root": "/srv/app"},
            resolver={"strict_relative": True},
        )
        assert settings.parameters == {"dir.root": "/srv/app"}
        assert settings.resolver.strict_relative is True


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings_instance(self, config_env: Path, mock_toml_files) -> None:
        mock_toml_files(
            {"default.toml": '[parameters]\n"dir.root" = "/srv/app"'}
        )

        settings = get_settings()
        assert isinstance(settings, Settings)
        assert settings.parameters == {"dir.root": "/srv/app"}

    def test_settings_cached(self, config_env: Path, mock_toml_files) -> None:
        mock_toml_files({"default.toml": "[cache]\nbackend = 'file'"})

        assert get_settings() is get_settings()

    def test_reload_settings_clears_cache(
        self, config_env: Path, mock_toml_files
    ) -> None:
        mock_toml_files({"default.toml": "[cache]\nbackend = 'file'"})
        assert get_settings().cache.backend == "file"

        mock_toml_files({"default.toml": "[cache]\nbackend = 'redis'"})
        assert reload_settings().cache.backend == "redis"


class TestEnvironmentVariableOverrides:
    """Tests for PATHFINDER_* environment variable overrides."""

    def test_nested_override(
        self, config_env: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mock_toml_files({"default.toml": "[cache]\nbackend = 'inmemory'"})
        monkeypatch.setenv("PATHFINDER_CACHE__BACKEND", "file")

        assert get_settings().cache.backend == "file"

    def test_deeply_nested_override(
        self, config_env: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mock_toml_files({"default.toml": "[cache.redis]\nkey_prefix = 'toml'"})
        monkeypatch.setenv("PATHFINDER_CACHE__REDIS__KEY_PREFIX", "env")

        assert get_settings().cache.redis.key_prefix == "env"

    def test_resolver_flag_override(
        self, config_env: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        mock_toml_files({"default.toml": "[resolver]\nassertive = false"})
        monkeypatch.setenv("PATHFINDER_RESOLVER__ASSERTIVE", "true")

        assert get_settings().resolver.assertive is True
