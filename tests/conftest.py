"""Shared test fixtures for the Pathfinder test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

from pathfinder.cache.stores.inmemory import InMemoryCacheStore
from pathfinder.resolver import Pathfinder


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "[cache]\\nbackend = 'file'",
                "development.toml": "[resolver]\\nassertive = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            toml_file = test_config_dir / filename
            toml_file.write_text(content)

    return _create_toml_files


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache and loaded TOML before and after each test."""
    from pathfinder.config import get_settings
    from pathfinder.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults so module loggers are never cached
    under another test's configuration."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """Create an application tree on disk.

    Layout:
        <tmp>/srv/app/var/cache/
        <tmp>/srv/app/assets/app.js
        <tmp>/srv/app/config.toml
    """
    root = tmp_path / "srv" / "app"
    (root / "var" / "cache").mkdir(parents=True)
    (root / "assets").mkdir()
    (root / "assets" / "app.js").write_text("// app")
    (root / "config.toml").write_text("")
    return root


@pytest.fixture
def cache() -> InMemoryCacheStore:
    """Create an in-memory cache store."""
    return InMemoryCacheStore()


@pytest.fixture
def pathfinder(project_tree: Path, cache: InMemoryCacheStore) -> Pathfinder:
    """Create a resolver over the on-disk project tree."""
    return Pathfinder(
        {
            "dir.root": project_tree.as_posix(),
            "dir.cache": "%dir.root%/var/cache",
            "dir.assets": "%dir.root%/assets",
            "dir.missing": "%dir.root%/not-created",
        },
        cache=cache,
    )
