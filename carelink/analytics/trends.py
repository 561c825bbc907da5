"""
Streak detection and health metric trend classification
"""
from collections import OrderedDict
from typing import Iterable, List, Optional, Sequence

from carelink.core.constants import (
    TREND_CHANGE_THRESHOLD,
    TREND_POLARITY,
    TREND_SAMPLE_SIZE,
    TrendDirection,
    TrendPolarity,
)

_DESCRIPTIONS = {
    TrendDirection.IMPROVING: "Recent values show improvement with a {change:.1f}% positive change.",
    TrendDirection.CONCERNING: "Recent values show a concerning {change:.1f}% change that may need attention.",
    TrendDirection.STABLE: "Values have remained relatively stable over the observed period.",
}


def detect_streaks(days: Sequence[dict]) -> dict:
    """
    Longest and current runs of perfect days.

    ``days`` must be in chronological order, as produced by
    ``compliance.daily_breakdown``.
    """
    longest = 0
    running = 0
    perfect_days = 0
    for day in days:
        if day["perfectDay"]:
            perfect_days += 1
            running += 1
            longest = max(longest, running)
        else:
            running = 0

    return {
        "longestStreak": longest,
        "currentStreak": running,
        "perfectDays": perfect_days,
        "totalDays": len(days),
    }


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def change_percent(earlier: float, recent: float) -> float:
    if earlier == 0:
        if recent == 0:
            return 0.0
        return 100.0 if recent > 0 else -100.0
    return (recent - earlier) * 100 / abs(earlier)


def classify_trend(metric_type: str, change: float) -> TrendDirection:
    """Map a percent change to a trend label using the metric's polarity"""
    if abs(change) <= TREND_CHANGE_THRESHOLD:
        return TrendDirection.STABLE

    polarity = TREND_POLARITY[metric_type]
    if polarity == TrendPolarity.STABILITY_IS_BETTER:
        return TrendDirection.CONCERNING
    if polarity == TrendPolarity.LOWER_IS_BETTER:
        return TrendDirection.IMPROVING if change < 0 else TrendDirection.CONCERNING
    return TrendDirection.IMPROVING if change > 0 else TrendDirection.CONCERNING


def analyze_metric_trend(metric_type: str, samples: Sequence[dict]) -> dict:
    """
    Trend for one metric type.

    ``samples`` are chronological daily aggregates with ``avgValue``,
    ``minValue`` and ``maxValue``.
    """
    averages = [float(sample["avgValue"]) for sample in samples]
    change = 0.0
    trend = TrendDirection.STABLE

    if len(averages) >= TREND_SAMPLE_SIZE:
        earlier = _mean(averages[:TREND_SAMPLE_SIZE])
        recent = _mean(averages[-TREND_SAMPLE_SIZE:])
        change = change_percent(earlier, recent)
        trend = classify_trend(metric_type, change)

    return {
        "metricType": metric_type,
        "trend": trend.value,
        "description": _DESCRIPTIONS[trend].format(change=abs(change)),
        "average": round(_mean(averages), 2) if averages else None,
        "min": min((float(s["minValue"]) for s in samples), default=None),
        "max": max((float(s["maxValue"]) for s in samples), default=None),
        "changePercent": round(change, 1),
    }


def analyze_trends(rows: Iterable[dict]) -> List[dict]:
    """
    Group daily aggregate rows by metric type and classify each group
    """
    grouped = OrderedDict()
    for row in rows:
        grouped.setdefault(row["metricType"], []).append(row)

    analysis = []
    for metric_type, samples in grouped.items():
        samples = sorted(samples, key=lambda sample: sample["recordDate"])
        analysis.append(analyze_metric_trend(metric_type, samples))
    return analysis


def blood_pressure_direction(systolic_readings: Sequence[float]) -> Optional[str]:
    """
    ``increasing``/``decreasing``/``stable`` from chronological systolic readings,
    comparing the mean of the earlier half with the later half.

    Returns None when there are fewer than 4 readings.
    """
    if len(systolic_readings) < 4:
        return None
    half = len(systolic_readings) // 2
    first = _mean(systolic_readings[:half])
    second = _mean(systolic_readings[half:])
    if second > first:
        return "increasing"
    if second < first:
        return "decreasing"
    return "stable"
