"""Tests for scripts/nearest_location.py."""
from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from scripts.nearest_location import main

ROOT = Path(__file__).resolve().parents[1]
EXAMPLE_PATH = ROOT / "tests" / "fixtures" / "almanac" / "example.txt"


def test_cli_reports_both_variants() -> None:
    proc = subprocess.run(
        [
            sys.executable,
            str(ROOT / "scripts" / "nearest_location.py"),
            "--input",
            str(EXAMPLE_PATH),
        ],
        cwd=str(ROOT),
        capture_output=True,
        text=True,
        check=False,
    )
    assert proc.returncode == 0, proc.stderr
    payload = json.loads(proc.stdout)
    assert payload["results"]["single"]["nearest"] == 35
    assert payload["results"]["ranges"]["nearest"] == 46
    assert payload["chain"][0] == "seed"
    assert payload["chain"][-1] == "location"
    assert "nearest location id from single seeds is: 35" in proc.stderr


def test_main_single_variant_with_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_path = tmp_path / "reports" / "day5.json"
    code = main([
        "--input", str(EXAMPLE_PATH),
        "--variant", "ranges",
        "--output", str(out_path),
        "--include-ranges",
    ])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert list(payload["results"]) == ["ranges"]
    assert payload["results"]["ranges"]["final_ranges"][0]["start"] == 46
    assert json.loads(out_path.read_text(encoding="utf-8")) == payload


def test_main_target_override(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--input", str(EXAMPLE_PATH), "--variant", "single", "--target", "soil"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["target"] == "soil"
    assert payload["results"]["single"]["nearest"] == 13


def test_main_missing_input(tmp_path: Path) -> None:
    assert main(["--input", str(tmp_path / "missing.txt")]) == 1


def test_main_malformed_almanac(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    bad = tmp_path / "bad.txt"
    bad.write_text("seeds: 1 2\n\nseed-to-soil map:\n1 2\n", encoding="utf-8")
    assert main(["--input", str(bad)]) == 1
    assert capsys.readouterr().out == ""


def test_main_config_terminal_stops_early(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("ALMANAC_VARIANTS", raising=False)
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"terminal": "humidity", "variants": ["single"]}), encoding="utf-8")

    code = main(["--input", str(EXAMPLE_PATH), "--config", str(config_path)])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["target"] == "humidity"
    assert payload["chain"][-1] == "location"
    assert payload["results"]["single"]["nearest"] == 35
    assert payload["results"]["single"]["generations"][-1]["category"] == "humidity"


def test_main_config_source_starts_later(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("ALMANAC_VARIANTS", raising=False)
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"source": "humidity", "variants": ["single"]}), encoding="utf-8")

    code = main(["--input", str(EXAMPLE_PATH), "--config", str(config_path)])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["source"] == "humidity"
    # humidity-to-location: 79 -> 83, 14 -> 14, 55 -> 55, 13 -> 13
    assert payload["results"]["single"]["nearest"] == 13
    assert len(payload["results"]["single"]["generations"]) == 2


def test_cli_error_line_has_single_level_tag(tmp_path: Path) -> None:
    proc = subprocess.run(
        [
            sys.executable,
            str(ROOT / "scripts" / "nearest_location.py"),
            "--input",
            str(tmp_path / "missing.txt"),
        ],
        cwd=str(ROOT),
        capture_output=True,
        text=True,
        check=False,
    )
    assert proc.returncode == 1
    assert proc.stdout == ""
    assert "[ERROR] almanac not found at" in proc.stderr
    assert "ERROR: " not in proc.stderr
