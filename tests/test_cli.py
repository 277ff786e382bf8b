# flake8: noqa

import json

from typer.testing import CliRunner

import run

runner = CliRunner()

REPORT = """Patient Name: John Smith
Hemoglobin: 10.5 g/dL
"""


def test_parse_command_exports_json(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    src = tmp_path / "report.txt"
    src.write_text(REPORT, encoding="utf-8")
    out = tmp_path / "result.json"

    res = runner.invoke(run.app, ["parse", str(src), "--output", str(out)])
    assert res.exit_code == 0, res.output
    assert "Hemoglobin" in res.output
    assert json.loads(out.read_text(encoding="utf-8"))["recommendation"]["urgency"] == "critical"


def test_env_overrides_keys(monkeypatch):
    monkeypatch.setenv("OCR_API_KEY", "env-key")
    monkeypatch.setenv("OCR_FALLBACK_API_KEY", "env-fallback")
    cfg = run.load_cfg()
    assert cfg.ocr.api_key == "env-key"
    assert cfg.ocr.fallback_api_key == "env-fallback"
    assert cfg.retry.attempts == 3


def test_check_key_without_key(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OCR_API_KEY", raising=False)
    res = runner.invoke(run.app, ["check-key"])
    assert res.exit_code == 2
