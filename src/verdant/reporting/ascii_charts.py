# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Terminal-friendly visualizations using Unicode characters.

These functions return Rich-markup strings that render as gauges, usage
bars, and sparklines in the terminal via the Rich library.  Colors
follow the discount tiers: green earns Tier 1, red earns nothing.
"""

from __future__ import annotations

from verdant.scoring.thresholds import DEFAULT_TIER_SCHEDULE, tier_for_score


def _score_color(score: float) -> str:
    return tier_for_score(score, DEFAULT_TIER_SCHEDULE).color


def score_gauge(score: float, width: int = 20) -> str:
    """Large visual gauge with tier coloring.

    Returns something like: [green]██████████████████░░[/] 92/100
    """
    clamped = max(0.0, min(100.0, score))
    filled = int(clamped / 100 * width)
    color = _score_color(clamped)
    bar = "█" * filled + "░" * (width - filled)
    return f"[{color}]{bar}[/] {clamped:.0f}/100"


def mini_gauge(score: float, width: int = 10) -> str:
    """Compact gauge for inline use in tables."""
    clamped = max(0.0, min(100.0, score))
    filled = int(clamped / 100 * width)
    color = _score_color(clamped)
    bar = "█" * filled + "░" * (width - filled)
    return f"[{color}]{bar}[/] {clamped:.0f}"


def usage_bar(pct: float, width: int = 20) -> str:
    """Usage-of-quota bar; low usage is good, so the colors run inverted.

    Values above 100% fill the bar and print the true percentage.
    """
    clamped = max(0.0, min(100.0, pct))
    filled = int(clamped / 100 * width)
    if pct <= 50:
        color = "green"
    elif pct <= 75:
        color = "yellow"
    else:
        color = "red"
    bar = "█" * filled + "░" * (width - filled)
    return f"[{color}]{bar}[/] {pct:.1f}%"


def sparkline(values: list[float], width: int | None = None) -> str:
    """Render a sparkline using Unicode block characters.

    Each value maps to one of 9 block heights: \" ▁▂▃▄▅▆▇█\"
    If width is given and len(values) > width, values are downsampled.
    """
    if not values:
        return ""

    blocks = " ▁▂▃▄▅▆▇█"

    if width and len(values) > width:
        step = len(values) / width
        sampled = []
        for i in range(width):
            start = int(i * step)
            end = int((i + 1) * step)
            sampled.append(sum(values[start:end]) / (end - start))
        values = sampled

    min_v = min(values)
    max_v = max(values)
    range_v = max_v - min_v or 1

    return "".join(
        blocks[int((v - min_v) / range_v * 8)] for v in values
    )
