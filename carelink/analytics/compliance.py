"""
Medication compliance aggregation

Every function here is pure: it takes medication logs (ORM rows or plain
mappings with ``taken`` and ``scheduled_time``) and returns JSON-ready dicts.
"""
import math
from collections import OrderedDict
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from carelink.core.constants import (
    COMPLIANCE_LEVELS,
    NO_DOSES_COMPLIANCE,
    NIGHT_LABEL,
    TIME_OF_DAY_BANDS,
)


def _field(log, name):
    if isinstance(log, Mapping):
        return log[name]
    return getattr(log, name)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (66.5 -> 67)"""
    return int(math.floor(value + 0.5))


def compliance_rate(taken: int, total: int) -> int:
    """Integer compliance percentage; 100 when nothing was scheduled"""
    if total <= 0:
        return NO_DOSES_COMPLIANCE
    rate = round_half_up(taken * 100 / total)
    return max(0, min(100, rate))


def classify_compliance_level(rate: float) -> str:
    for minimum, level in COMPLIANCE_LEVELS:
        if rate >= minimum:
            return level.value
    return COMPLIANCE_LEVELS[-1][1].value


def compute_compliance(logs: Iterable) -> dict:
    """
    Aggregate a set of logs into a compliance summary.

    Returns ``{totalDoses, takenDoses, complianceRate, complianceLevel}``.
    """
    total = 0
    taken = 0
    for log in logs:
        total += 1
        if _field(log, "taken"):
            taken += 1

    rate = compliance_rate(taken, total)
    return {
        "totalDoses": total,
        "takenDoses": taken,
        "complianceRate": rate,
        "complianceLevel": classify_compliance_level(rate),
    }


def medication_compliance(medication, logs: Iterable) -> dict:
    """Per-medication compliance row"""
    summary = compute_compliance(logs)
    return {
        "medicationId": _field(medication, "id"),
        "name": _field(medication, "name"),
        "takenCount": summary["takenDoses"],
        "scheduledCount": summary["totalDoses"],
        "complianceRate": summary["complianceRate"],
        "complianceLevel": summary["complianceLevel"],
    }


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def daily_breakdown(logs: Iterable, start: date, end: date) -> List[dict]:
    """
    One entry per calendar day from ``start`` to ``end`` inclusive, oldest first.

    Days without scheduled doses report 0/0 at 100% and count as perfect.
    """
    start, end = _as_date(start), _as_date(end)
    buckets = OrderedDict()
    day = start
    while day <= end:
        buckets[day] = [0, 0]
        day += timedelta(days=1)

    for log in logs:
        day = _field(log, "scheduled_time").date()
        if day not in buckets:
            continue
        buckets[day][0] += 1
        if _field(log, "taken"):
            buckets[day][1] += 1

    result = []
    for day, (total, taken) in buckets.items():
        missed = total - taken
        result.append({
            "date": day.isoformat(),
            "totalDoses": total,
            "takenDoses": taken,
            "missedDoses": missed,
            "dailyCompliance": compliance_rate(taken, total),
            "perfectDay": missed == 0,
        })
    return result


def weekly_breakdown(logs: Iterable, limit: Optional[int] = None) -> List[dict]:
    """ISO-week buckets, newest week first"""
    buckets = {}
    for log in logs:
        iso = _field(log, "scheduled_time").isocalendar()
        key = (iso[0], iso[1])
        counts = buckets.setdefault(key, [0, 0])
        counts[0] += 1
        if _field(log, "taken"):
            counts[1] += 1

    weeks = []
    for (year, week) in sorted(buckets, reverse=True):
        total, taken = buckets[(year, week)]
        weeks.append({
            "year": year,
            "week": week,
            "totalDoses": total,
            "takenDoses": taken,
            "weeklyCompliance": compliance_rate(taken, total),
        })
    if limit is not None:
        weeks = weeks[:limit]
    return weeks


def time_of_day_label(hour: int) -> str:
    for label, first, last in TIME_OF_DAY_BANDS:
        if first <= hour <= last:
            return label
    return NIGHT_LABEL


def time_of_day_breakdown(logs: Iterable) -> List[dict]:
    """Adherence per time-of-day band, best band first"""
    buckets = {}
    for log in logs:
        label = time_of_day_label(_field(log, "scheduled_time").hour)
        counts = buckets.setdefault(label, [0, 0])
        counts[0] += 1
        if _field(log, "taken"):
            counts[1] += 1

    patterns = [
        {
            "timeOfDay": label,
            "totalDoses": total,
            "takenDoses": taken,
            "adherenceRate": compliance_rate(taken, total),
        }
        for label, (total, taken) in buckets.items()
    ]
    patterns.sort(key=lambda row: row["adherenceRate"], reverse=True)
    return patterns
