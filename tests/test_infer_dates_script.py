from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "infer_dates.py"


@pytest.fixture()
def script(monkeypatch: pytest.MonkeyPatch):
    for name in ("ANYDATE_PREFER_MONTH_FIRST", "ANYDATE_SWAP_ON_MISMATCH", "ANYDATE_MAX_RESTARTS"):
        monkeypatch.delenv(name, raising=False)
    spec = importlib.util.spec_from_file_location("infer_dates", SCRIPT)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_prints_pattern_and_iso_date(script, capsys: pytest.CaptureFixture[str]) -> None:
    assert script.main(["oct 7, 1970", "#2014"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "oct 7, 1970\tMMM D, YYYY\t1970-10-07",
        "#2014\t-\tunrecognized",
    ]


def test_reads_file_and_honours_day_first(script, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    inp = tmp_path / "dates.txt"
    inp.write_text("03/04/2014\n\n2014-04-26\n", encoding="utf-8")

    assert script.main(["--in", str(inp), "--day-first"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "03/04/2014\tDD/MM/YYYY\t2014-04-03",
        "2014-04-26\tYYYY-MM-DD\t2014-04-26",
    ]


def test_strict_stops_on_first_failure(script, capsys: pytest.CaptureFixture[str]) -> None:
    assert script.main(["--strict", "#2014", "oct 7, 1970"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Unexpected date start char." in captured.err
