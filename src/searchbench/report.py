from __future__ import annotations

from .stats import Summary


def format_report(summary: Summary) -> list[str]:
    lines = [f"took mean {int(summary.mean)}ns"]
    for p, value in summary.percentiles.items():
        lines.append(f"Percentile {p:.2f} : {value} ns")
    return lines
