"""Shared pytest fixtures and configuration."""

from pathlib import Path
from typing import Any, Callable, Dict, Set
from unittest.mock import Mock

import pytest
import yaml

from modular.config import ModularConfig
from modular.modules import Modular


@pytest.fixture
def existing_files() -> Set[str]:
    """Paths (relative to the application root) the mock filesystem reports as present."""
    return set()


@pytest.fixture
def mock_filesystem(existing_files: Set[str]) -> Mock:
    """Create a mock filesystem backed by existing_files."""
    filesystem = Mock()
    filesystem.exists.side_effect = lambda path: path in existing_files
    return filesystem


@pytest.fixture
def make_config() -> Callable[..., ModularConfig]:
    """Build a configuration declaring the given modules."""

    def _make(modules: Dict[str, Any], **overrides: Any) -> ModularConfig:
        return ModularConfig(modules=modules, **overrides)

    return _make


@pytest.fixture
def make_registry(
    make_config: Callable[..., ModularConfig], mock_filesystem: Mock
) -> Callable[..., Modular]:
    """Build a registry over the mock filesystem."""

    def _make(modules: Dict[str, Any], **overrides: Any) -> Modular:
        return Modular(make_config(modules, **overrides), mock_filesystem)

    return _make


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary configuration file."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    config_file = config_dir / "modular.yaml"

    config_data = {
        "directory": "app/modules",
        "namespace": "app.modules",
        "modules": {
            "Users": None,
            "Blog": {"enabled": True},
            "Billing": {"enabled": False},
        },
    }

    with open(config_file, "w") as f:
        yaml.dump(config_data, f, sort_keys=False)

    return config_file


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    env_vars = [
        "MODULAR_CONFIG_FILE",
        "MODULAR_BASE_PATH",
        "MODULAR_DIRECTORY",
        "MODULAR_NAMESPACE",
        "MODULAR_DEBUG",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)
