import json

import matplotlib
matplotlib.use("Agg")

import pytest

from run_simulation import decimal_places, format_table, main
from analysis import RankedErrorList


@pytest.mark.parametrize("dx, places", [(0.001, 3), (0.25, 2), (1.0, 0), (0.1, 1), (1e-5, 5)])
def test_decimal_places(dx, places):
    assert decimal_places(dx) == places


def test_format_table():
    table = format_table(RankedErrorList([0.5, 1.25], [0.1, 0.2]), 2)
    lines = table.splitlines()
    assert len(lines) == 3
    assert lines[1].split() == ["1.25", "0.2000000000"]
    assert lines[2].split() == ["0.50", "0.1000000000"]


def test_passing_run(capsys):
    code = main(["--equation", "2", "--dx", "0.01", "--X", "2", "--precision", "1"])
    out = capsys.readouterr().out
    assert code == 0
    assert "trial count = 200" in out
    assert "PASS" in out


def test_failing_run(capsys):
    code = main(["--equation", "3", "--dx", "0.01", "--X", "2", "--precision", "1e-9"])
    assert code == 1
    assert "FAIL" in capsys.readouterr().out


def test_unknown_equation_exit_code(capsys):
    assert main(["--equation", "9", "--X", "1"]) == 2
    assert "Unknown equation" in capsys.readouterr().out


def test_bad_horizon_exit_code(capsys):
    assert main(["--x0", "2", "--X", "1"]) == 2
    assert "X must be greater than x0" in capsys.readouterr().out


def test_multiple_steps_show_previous_table(capsys):
    code = main(["--equation", "sine", "--dx", "0.1", "0.05", "--X", "2", "--precision", "1"])
    out = capsys.readouterr().out
    assert code == 0
    assert out.count("trial count") == 2
    assert out.count("previous run:") == 1


def test_config_file_and_json_output(tmp_path, capsys):
    cfg = tmp_path / "run.json"
    cfg.write_text(json.dumps({"equation": 1, "dx": 0.1, "X": 1.0, "precision": 1.0, "reference": "exact"}))
    out_path = tmp_path / "result.json"

    assert main(["--config", str(cfg), "--out", str(out_path)]) == 0
    data = json.loads(out_path.read_text())
    assert data["trial_count"] == 10
    assert data["config"]["reference"] == "exact"
    assert data["precision"]["passed"] is True


def test_missing_config_file(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.json")]) == 2


def test_save_figure(tmp_path, capsys):
    fig_path = tmp_path / "run.png"
    assert main(["--dx", "0.05", "--X", "1", "--precision", "1", "--save", str(fig_path)]) == 0
    assert fig_path.exists() and fig_path.stat().st_size > 0


@pytest.mark.parametrize("payload", [
    {"equation": 1, "dx": "0.01"},
    {"equation": 1, "y0": "abc"},
    {"equation": 1, "precision": [0.1]},
])
def test_config_file_with_non_numeric_values_exits_cleanly(tmp_path, capsys, payload):
    cfg = tmp_path / "run.json"
    cfg.write_text(json.dumps(payload))
    assert main(["--config", str(cfg)]) == 2
    assert "must be a number" in capsys.readouterr().out
