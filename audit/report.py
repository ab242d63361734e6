"""Audit report formatter -- JSON + text output."""

from __future__ import annotations

import json
from collections import OrderedDict
from datetime import datetime
from pathlib import Path

from audit.checks import classify_check


def _verdict(summary: dict) -> str:
    return "BALANCED" if summary["arithmetic_fail"] == 0 else "ARITHMETIC_ERRORS"


def write_json_report(audit_data: dict, output_path: str | Path,
                      failures_only: bool = False) -> Path:
    """Write audit results to a JSON file.

    With failures_only, passing checks are left out (a full grid run
    produces thousands of rows).
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    results = audit_data["results"]
    if failures_only:
        results = [r for r in results if not r[5]]

    report = {
        "timestamp": datetime.now().isoformat(),
        "scenarios": audit_data.get("scenarios", 0),
        "summary": audit_data["summary"],
        "verdict": _verdict(audit_data["summary"]),
        "checks": [
            {
                "section": r[0],
                "name": r[1],
                "expected": r[2],
                "actual": r[3],
                "delta": r[4],
                "passed": r[5],
                "category": classify_check(r[0], r[1]),
            }
            for r in results
        ],
    }

    with open(path, "w") as f:
        json.dump(report, f, indent=2)

    return path


def _group_by_name(results: list[tuple]) -> OrderedDict[str, list[tuple]]:
    """Group check tuples by check name (one group spans every scenario)."""
    groups: OrderedDict[str, list[tuple]] = OrderedDict()
    for r in results:
        groups.setdefault(r[1], []).append(r)
    return groups


def format_text_report(audit_data: dict, max_failures: int = 5) -> str:
    """Format audit results as human-readable text, one line per check name."""
    results = audit_data["results"]
    summary = audit_data["summary"]
    lines: list[str] = []

    lines.append("=" * 72)
    lines.append("REVENUE CALCULATOR - AUDIT REPORT")
    lines.append(f"{audit_data.get('scenarios', 0)} scenarios")
    lines.append("=" * 72)
    lines.append("")

    for title, category in (("ARITHMETIC CHECKS (internal consistency)", "arithmetic"),
                            ("MODEL DESIGN CHECKS (best-effort reconciliation)", "model_design")):
        lines.append(title)
        lines.append("-" * 72)
        rows = [r for r in results if classify_check(r[0], r[1]) == category]
        if not rows:
            lines.append("  (none)")
        for name, checks in _group_by_name(rows).items():
            fails = [r for r in checks if not r[5]]
            max_d = max(r[4] for r in checks)
            status = "PASS" if not fails else f"{len(fails)} FAIL"
            lines.append(f"  {name:<52} {len(checks):>5}  {status}")
            if not fails:
                lines.append(f"    (max delta: {max_d:,.6f})")
            for r in fails[:max_failures]:
                lines.append(f"    FAIL  {r[0]}")
                lines.append(f"          expected: {r[2]:>16,.4f}")
                lines.append(f"          actual:   {r[3]:>16,.4f}")
            if len(fails) > max_failures:
                lines.append(f"    ... {len(fails) - max_failures} more")
        lines.append("")

    # Summary
    lines.append("=" * 72)
    lines.append("SUMMARY")
    lines.append("=" * 72)
    arith_total = summary["arithmetic_pass"] + summary["arithmetic_fail"]
    design_total = summary["design_pass"] + summary["design_fail"]
    lines.append(f"  Total checks:     {summary['total']}")
    lines.append(
        f"  Arithmetic:       {arith_total:>5} "
        f"({summary['arithmetic_pass']} pass, "
        f"{summary['arithmetic_fail']} fail)")
    lines.append(
        f"  Best effort:      {design_total:>5} "
        f"({summary['design_pass']} pass, "
        f"{summary['design_fail']} negative remainder)")
    lines.append("")
    if _verdict(summary) == "BALANCED":
        lines.append("  VERDICT: ALLOCATIONS BALANCE")
    else:
        lines.append("  VERDICT: ARITHMETIC ERRORS")
    lines.append("=" * 72)

    return "\n".join(lines)
