"""
CLI tests: recommend (no LLM), analyze input validation, config errors.
"""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from main import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in ("CONFIG_PATH", "LOG_LEVEL", "SOLAR_COST_PER_KW", "SOLAR_PROD_BY_LOCATION",
                "SOLAR_INSTALL_COST_SPLIT", "SOLAR_EMISSION_FACTOR_KG_PER_KWH", "LLM_PROVIDER"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_recommend_prints_recommendation(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([
        "--config", str(tmp_path / "missing.yaml"),
        "recommend", "--units", "600", "--total-cost", "18000", "--location", "Karachi",
    ])
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["recommendation"]["suggestedSystemKw"] == 3.75
    assert out["recommendation"]["estMonthlySavings"] == 18000
    assert out["meta"]["usedDefaults"]["prodPerKwPerMonth"] == 160.0


def test_recommend_without_unit_cost_degrades(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--config", str(tmp_path / "missing.yaml"), "recommend", "--units", "600"])
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["recommendation"]["suggestedSystemKw"] is None
    assert out["recommendation"]["notes"]


def test_analyze_without_input_fails_before_llm(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--config", str(tmp_path / "missing.yaml"), "analyze", "--city", "Lahore"])
    assert code == 1
    assert "Provide bill text or fields" in capsys.readouterr().err


def test_analyze_rejects_non_object_fields(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["--config", str(tmp_path / "missing.yaml"), "analyze", "--fields", "[1, 2]"])


def test_invalid_config_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("market:\n  costPerKw: -5\n", encoding="utf-8")
    assert main(["--config", str(bad), "recommend", "--units", "600"]) == 2
    assert "Invalid configuration" in capsys.readouterr().err
