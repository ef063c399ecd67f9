"""Markdown rendering for solve reports."""

from typing import Any, Dict, List


def render_md(report: Dict[str, Any]) -> str:
    lines: List[str] = [
        f"# {report.get('title', 'Almanac')}",
        "",
        f"- Date: {report.get('date', '')}",
        f"- Input: `{report.get('input', '')}`",
        f"- Split mode: {report.get('split_mode', 'first')}",
        "",
        "## Answers",
        "",
        f"- Part 1: **{report['part1']}**",
        f"- Part 2: **{report['part2']}**",
    ]

    cc = report.get("cross_check")
    if cc:
        if cc.get("skipped_reason"):
            lines.append(f"- Cross-check: skipped ({cc['skipped_reason']})")
        else:
            verdict = "agrees" if cc.get("agrees") else "DISAGREES"
            lines.append(f"- Cross-check: {cc.get('value')} ({verdict})")

    stages = report.get("stages") or []
    if stages:
        lines += ["", "## Stages", "", "| # | Stage | Mappings |", "|---|-------|----------|"]
        for i, st in enumerate(stages, 1):
            lines.append(f"| {i} | {st['name']} | {st['mappings']} |")

    timings = report.get("timings_ms") or {}
    if timings:
        lines += ["", "## Execution times", ""]
        for k, v in timings.items():
            lines.append(f"- {k}: {v:.2f} ms")
        lines.append(f"- total: {sum(timings.values()):.2f} ms")

    return "\n".join(lines) + "\n"
