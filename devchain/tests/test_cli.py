"""CLI smoke tests via typer's CliRunner."""
from __future__ import annotations

import json

import pytest
import typer.testing

from devchain.cli import app
from devchain.demos import SCENARIOS

runner = typer.testing.CliRunner()


def test_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "demo" in result.stdout


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip()


def test_accounts_json():
    result = runner.invoke(app, ["accounts", "--json"])
    assert result.exit_code == 0
    rows = json.loads(result.stdout)
    assert len(rows) == 10
    assert rows[0]["address"].startswith("0x")
    assert rows[0]["balance"] == 10_000 * 10**18


def test_accounts_table():
    result = runner.invoke(app, ["accounts"])
    assert result.exit_code == 0
    assert "10,000" in result.stdout


def test_config_reflects_env(monkeypatch):
    monkeypatch.setenv("DEVCHAIN_CHAIN_ID", "31337")
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["chain_id"] == 31337


@pytest.mark.parametrize("name", sorted(SCENARIOS))
def test_every_demo_runs(name):
    result = runner.invoke(app, ["demo", name])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["demo"] == name
    assert payload["blocks"] >= 1


def test_modifiers_demo_summary():
    result = runner.invoke(app, ["demo", "modifiers"])
    payload = json.loads(result.stdout)["result"]
    assert payload["storedValue"] == 500_000
    outcomes = {s["step"]: s for s in payload["steps"]}
    assert outcomes["alice restrictedUpdate(2000000)"]["error"] == "NumberTooLarge"
    assert outcomes["bob restrictedUpdate(100)"]["reason"] == "not authorized"
    assert outcomes["timeRestrictedFunction (early)"]["reason"] == "too early"
    assert outcomes["timeRestrictedFunction (+2h)"]["ok"] is True
    assert outcomes["gasPriceRestrictedFunction @ 100 gwei"]["error"] == "GasPriceTooHigh"


def test_structs_and_visibility_demos():
    structs = json.loads(runner.invoke(app, ["demo", "structs"]).stdout)["result"]
    assert structs["peopleCount"] == 2
    assert structs["alice"]["age"] == 26
    assert structs["emptyName"]["error"] == "InvalidPersonData"
    assert structs["numberExists"] == {"25": True, "999": False}

    vis = json.loads(runner.invoke(app, ["demo", "visibility"]).stdout)["result"]
    assert vis["demonstrateVisibility"] == ["public", "internal", "private"]
    assert vis["internalFromOutside"]["error"] == "INVALID_ACCESS"


def test_unknown_demo():
    result = runner.invoke(app, ["demo", "nope"])
    assert result.exit_code == 2
