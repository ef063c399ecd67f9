import time
import uuid
import yaml
from typing import Dict, Any, Optional

from almanac.parser import Almanac, load_almanac
from almanac.pipeline import Pipeline
from almanac.report import CrossCheck, SolveReport, StageSummary
from almanac.rendering import render_md
from almanac.utils import write_output, validate_config, get_logger, iso_utc

logger = get_logger(__name__)

DEFAULT_TITLE = "If You Give A Seed A Fertilizer"


def _ms_since(t: float) -> float:
    return (time.monotonic() - t) * 1000


def _apply_overrides(cfg: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> None:
    if not overrides:
        return

    processing = cfg.setdefault("processing", {})
    if overrides.get("input") is not None:
        cfg["input"] = overrides["input"]
    if overrides.get("split_mode") is not None:
        processing["split_mode"] = overrides["split_mode"]
    if overrides.get("strict") is not None:
        processing["strict"] = overrides["strict"]

    # Cross-check
    if (
        overrides.get("cross_check") is not None
        or overrides.get("cross_check_max") is not None
    ):
        cc = processing.setdefault("cross_check", {})
        if overrides.get("cross_check") is not None:
            cc["enabled"] = overrides["cross_check"]
        if overrides.get("cross_check_max") is not None:
            cc["max_values"] = int(overrides["cross_check_max"])  # type: ignore[arg-type]


def _cross_check(pipeline: Pipeline, almanac: Almanac, part2: int, cc_cfg: Dict[str, Any]) -> CrossCheck:
    max_values = int(cc_cfg.get("max_values", 1_000_000))
    chunk_size = int(cc_cfg.get("chunk_size", 65536))
    total = almanac.total_seed_values()
    if total > max_values:
        logger.warning("cross-check skipped: seed values=%d exceed max_values=%d", total, max_values)
        return CrossCheck(skipped_reason=f"{total} seed values exceed max_values={max_values}")

    value = pipeline.minimize_exhaustive(almanac.seed_intervals(), chunk_size=chunk_size)
    agrees = value == part2
    if agrees:
        logger.info("cross-check ok: value=%d values=%d", value, total)
    else:
        logger.warning("cross-check mismatch: exhaustive=%d intervals=%d split_mode=%s", value, part2, pipeline.split_mode)
    return CrossCheck(value=value, agrees=agrees)


def solve(almanac: Almanac, processing: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Compute both answers for a parsed almanac.

    Returns ``part1``, ``part2``, an optional ``cross_check`` and per-part
    ``timings_ms``.
    """
    processing = processing or {}
    split_mode = processing.get("split_mode", "first")
    pipeline = Pipeline(almanac.stages, split_mode=split_mode)

    if processing.get("strict"):
        for stage in pipeline.stages:
            stage.validate()

    timings: Dict[str, float] = {}

    t1 = time.monotonic()
    part1 = pipeline.minimize_points(almanac.seeds)
    timings["part1"] = _ms_since(t1)
    logger.info("part1=%d took_ms=%.2f", part1, timings["part1"])

    t2 = time.monotonic()
    part2 = pipeline.translate_and_minimize(almanac.seed_intervals())
    timings["part2"] = _ms_since(t2)
    logger.info("part2=%d split_mode=%s took_ms=%.2f", part2, split_mode, timings["part2"])

    result: Dict[str, Any] = {"part1": part1, "part2": part2, "split_mode": split_mode, "timings_ms": timings}

    cc_cfg = processing.get("cross_check") or {}
    if cc_cfg.get("enabled"):
        t3 = time.monotonic()
        result["cross_check"] = _cross_check(pipeline, almanac, part2, cc_cfg)
        timings["cross_check"] = _ms_since(t3)

    return result


def _execute_pipeline(cfg: Dict[str, Any], run_id: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Parse, solve, render and write one almanac."""
    _apply_overrides(cfg, overrides)

    input_path = cfg.get("input")
    if not input_path:
        raise ValueError("No almanac input given (config 'input' or --input)")
    logger.info("config loaded run_id=%s input=%s", run_id, input_path)

    t0 = time.monotonic()
    almanac = load_almanac(input_path)
    input_ms = _ms_since(t0)
    logger.info("input parsed took_ms=%.2f", input_ms)

    result = solve(almanac, cfg.get("processing"))

    report = SolveReport(
        title=cfg.get("title", DEFAULT_TITLE),
        date=iso_utc(),
        input=str(input_path),
        split_mode=result["split_mode"],
        part1=result["part1"],
        part2=result["part2"],
        cross_check=result.get("cross_check"),
        stages=[StageSummary(name=s.name, mappings=len(s)) for s in almanac.stages],
        timings_ms={"input": input_ms, **result["timings_ms"]},
    )
    js = report.model_dump(mode="json")
    md = render_md(js)

    out_cfg = cfg.get("output")
    if out_cfg:
        generated_files = write_output(md, js, out_cfg)
        logger.info("output written files=%s", generated_files)

    logger.info("OK: part1=%d part2=%d", report.part1, report.part2)
    return js


def run_once(
    config_path: str,
    *,
    input_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Execute the solver once with the given config file path."""
    run_id = uuid.uuid4().hex[:8]
    logger.info("=== run start id=%s ===", run_id)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
        validate_config(cfg)
        base_overrides: Dict[str, Any] = {"input": input_path}
        if overrides:
            base_overrides.update({k: v for k, v in overrides.items() if v is not None})
        return _execute_pipeline(cfg, run_id, base_overrides)

    except Exception as e:
        logger.error("Run failed: %s", e)
        raise
    finally:
        logger.info("=== run end id=%s ===", run_id)
