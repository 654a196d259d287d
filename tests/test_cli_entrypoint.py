from __future__ import annotations

import importlib

import pytest


def test_console_entrypoint_exposes_app() -> None:
    pytest.importorskip("typer")

    module = importlib.import_module("locle.main")

    assert hasattr(module, "app")
    assert module.app is not None


def test_distance_command_reports_adjacency() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    module = importlib.import_module("locle.main")

    result = typer_testing.CliRunner().invoke(module.app, ["distance", "Kerry", "Cork"])

    assert result.exit_code == 0
    assert "Kerry" in result.output
    assert "True" in result.output


def test_distance_command_rejects_unknown_county() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    module = importlib.import_module("locle.main")

    result = typer_testing.CliRunner().invoke(module.app, ["distance", "Kerry", "Atlantis"])

    assert result.exit_code != 0


def test_settings_command_persists_choice(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    module = importlib.import_module("locle.main")
    monkeypatch.setattr(module.settings, "data_dir", str(tmp_path))

    runner = typer_testing.CliRunner()
    result = runner.invoke(module.app, ["settings", "--difficulty", "hard"])
    shown = runner.invoke(module.app, ["settings"])

    assert result.exit_code == 0
    assert "hard" in shown.output
    assert (tmp_path / "loklSettings.json").exists()
