import json
from pathlib import Path

import pytest
import yaml

from almanac.orchestrator import run_once, solve, _apply_overrides
from almanac.parser import parse_almanac

EXAMPLE = Path(__file__).resolve().parents[1] / "inputs" / "example.txt"


def _write_cfg(tmp_path, cfg):
    path = tmp_path / "cfg.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return str(path)


def test_solve_with_cross_check():
    almanac = parse_almanac(EXAMPLE.read_text(encoding="utf-8"))
    out = solve(almanac, {"split_mode": "all", "strict": True, "cross_check": {"enabled": True}})
    assert out["part1"] == 35
    assert out["part2"] == 46
    assert out["cross_check"].value == 46
    assert out["cross_check"].agrees is True
    assert set(out["timings_ms"]) == {"part1", "part2", "cross_check"}


def test_solve_cross_check_skipped_when_too_large():
    almanac = parse_almanac(EXAMPLE.read_text(encoding="utf-8"))
    out = solve(almanac, {"cross_check": {"enabled": True, "max_values": 10}})
    assert out["cross_check"].value is None
    assert "max_values=10" in out["cross_check"].skipped_reason


def test_solve_strict_rejects_overlap():
    almanac = parse_almanac("seeds: 1 2\n\na-to-b map:\n0 10 10\n100 15 10\n")
    with pytest.raises(ValueError):
        solve(almanac, {"strict": True})


def test_run_once_writes_outputs(tmp_path):
    cfg = {
        "title": "Example",
        "input": str(EXAMPLE),
        "processing": {"split_mode": "first", "cross_check": {"enabled": True}},
        "output": {"dir": str(tmp_path / "out"), "formats": ["md", "json"]},
    }
    js = run_once(_write_cfg(tmp_path, cfg))
    assert js["part1"] == 35
    assert js["part2"] == 46
    assert [s["name"] for s in js["stages"]][0] == "seed-to-soil"
    assert len(js["stages"]) == 7

    files = sorted((tmp_path / "out").iterdir())
    assert [f.suffix for f in files] == [".json", ".md"]
    saved = json.loads(files[0].read_text(encoding="utf-8"))
    assert saved["part2"] == 46
    md = files[1].read_text(encoding="utf-8")
    assert "Part 2: **46**" in md
    assert "seed-to-soil" in md


def test_run_once_input_override(tmp_path):
    js = run_once(_write_cfg(tmp_path, {"processing": {}}), input_path=str(EXAMPLE), overrides={"split_mode": "all"})
    assert js["split_mode"] == "all"
    assert js["part2"] == 46
    assert js["cross_check"] is None


def test_run_once_rejects_invalid_config(tmp_path):
    with pytest.raises(ValueError, match="Config validation error"):
        run_once(_write_cfg(tmp_path, {"input": str(EXAMPLE), "processing": {"split_mode": "some"}}))


def test_apply_overrides():
    cfg = {"processing": {"cross_check": {"enabled": False}}}
    _apply_overrides(cfg, {"strict": True, "cross_check": True, "cross_check_max": 5, "split_mode": None})
    assert cfg["processing"] == {"strict": True, "cross_check": {"enabled": True, "max_values": 5}}
