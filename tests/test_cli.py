"""Tests for the command-line interface."""

import importlib
import sys
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from modular import __version__
from modular.cli import app

runner = CliRunner()


def write_config(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(data, f, sort_keys=False)
    return path


def write_seeder(base: Path, namespace: str, module: str, body: str) -> None:
    seeders = base / namespace / "modules" / module / "database" / "seeders.py"
    seeders.parent.mkdir(parents=True)
    seeders.write_text(
        "from modular.seeding import Seeder\n\n\n"
        f"class {module}DatabaseSeeder(Seeder):\n"
        "    def run(self):\n"
        f"        {body}\n"
    )


@pytest.fixture(autouse=True)
def restore_sys_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "path", list(sys.path))


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_config_init_and_show(tmp_path: Path):
    config_path = tmp_path / "config" / "modular.yaml"

    result = runner.invoke(app, ["-c", str(config_path), "config", "--init"])
    assert result.exit_code == 0
    assert config_path.exists()

    result = runner.invoke(app, ["-c", str(config_path), "config", "--show"])
    assert result.exit_code == 0
    assert "app/modules" in result.output


def test_config_show_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["-c", str(tmp_path / "missing.yaml"), "config", "--show"])

    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_module_list(tmp_path: Path, temp_config_file: Path):
    routes = tmp_path / "app" / "modules" / "Users" / "routes.py"
    routes.parent.mkdir(parents=True)
    routes.write_text("")

    result = runner.invoke(
        app, ["-c", str(temp_config_file), "--base-path", str(tmp_path), "module", "list"]
    )

    assert result.exit_code == 0
    for name in ["Users", "Blog", "Billing"]:
        assert name in result.output


def test_module_seed(tmp_path: Path):
    namespace = "cliseedapp"
    marker = tmp_path / "seeded.txt"
    write_seeder(tmp_path, namespace, "Users", f"open({str(marker)!r}, 'a').write('users')")
    write_seeder(tmp_path, namespace, "Blog", "raise RuntimeError('boom')")
    config_path = write_config(
        tmp_path / "modular.yaml",
        {
            "directory": f"{namespace}/modules",
            "namespace": f"{namespace}.modules",
            "modules": {"Users": None, "Blog": None, "Billing": {"enabled": False}},
        },
    )
    importlib.invalidate_caches()

    result = runner.invoke(
        app,
        ["-c", str(config_path), "--base-path", str(tmp_path), "module", "seed", "Users", "Blog"],
    )

    assert result.exit_code == 0
    assert marker.read_text() == "users"
    assert "[Module Users] Seeded:" in result.output
    assert "[Module Blog] There was a problem with running seeder" in result.output


def test_module_seed_nothing_to_do(tmp_path: Path, temp_config_file: Path):
    result = runner.invoke(
        app,
        ["-c", str(temp_config_file), "--base-path", str(tmp_path), "module", "seed", "Billing"],
    )

    assert result.exit_code == 0
    assert "There are no active modules to seed" in result.output


def test_module_seed_missing_config(tmp_path: Path):
    result = runner.invoke(app, ["-c", str(tmp_path / "missing.yaml"), "module", "seed"])

    assert result.exit_code == 1
    assert "Seeding failed" in result.output


def test_default_config_found_under_base_path(tmp_path: Path, temp_config_file: Path):
    result = runner.invoke(app, ["--base-path", str(tmp_path), "module", "list"])

    assert result.exit_code == 0
    assert "Users" in result.output


def test_module_seed_restores_sys_path(tmp_path: Path, temp_config_file: Path):
    base_path = str(tmp_path.resolve())

    result = runner.invoke(app, ["--base-path", str(tmp_path), "module", "seed"])

    assert result.exit_code == 0
    assert base_path not in sys.path


def test_module_seed_with_seeder_file_override(tmp_path: Path):
    namespace = "cliseedoverride"
    marker = tmp_path / "seeded.txt"
    seeds = tmp_path / namespace / "modules" / "Users" / "seeds" / "main.py"
    seeds.parent.mkdir(parents=True)
    seeds.write_text(
        "from modular.seeding import Seeder\n\n\n"
        "class UsersDatabaseSeeder(Seeder):\n"
        "    def run(self):\n"
        f"        open({str(marker)!r}, 'a').write('users')\n"
    )
    write_config(
        tmp_path / "config" / "modular.yaml",
        {
            "directory": f"{namespace}/modules",
            "namespace": f"{namespace}.modules",
            "modules": {"Users": {"seeder_file": "seeds/main.py"}},
        },
    )
    importlib.invalidate_caches()

    result = runner.invoke(app, ["--base-path", str(tmp_path), "module", "seed", "Users"])

    assert result.exit_code == 0
    assert marker.read_text() == "users"
    assert "[Module Users] Seeded:" in result.output
