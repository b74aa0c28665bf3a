import logging
from dataclasses import dataclass

import pandas as pd

from sleeplog.timeline import INTERVAL, SleepRow, SleepState

logger = logging.getLogger(__name__)

STEP_MINUTES = int(INTERVAL.total_seconds() // 60)
SUMMARY_COLS = ["date", "time_asleep", "longest_sleep", "time_in_bed", "idle_in_bed"]


@dataclass(frozen=True)
class ScatterplotRow:
    date: pd.Timestamp
    x: str  # weekday name
    y: int  # hour of day


def build_scatterplot_data(points: list[SleepRow]) -> list[ScatterplotRow]:
    """One row per sleep onset (a point that turns ASLEEP)."""
    current = SleepState.UNKNOWN
    out = []
    for p in points:
        if p.state == SleepState.ASLEEP and p.state != current:
            out.append(ScatterplotRow(date=p.date, x=p.date.day_name(), y=p.date.hour))
        current = p.state
    return out


def build_daily_summary(points: list[SleepRow]) -> pd.DataFrame:
    """
    Minutes asleep / in bed per calendar day.

    - time_in_bed counts both ASLEEP and IN_BED points
    - longest_sleep credits a continuous asleep run to the day of the first
      point after it, so runs that wrap midnight count on the day they end
    - a run still open when the timeline ends is not credited
    """
    days = {}
    run = 0
    for p in points:
        day = p.date.normalize()
        acc = days.setdefault(day, {"date": day, "time_asleep": 0, "longest_sleep": 0, "time_in_bed": 0})

        if p.state == SleepState.ASLEEP:
            acc["time_asleep"] += STEP_MINUTES
            acc["time_in_bed"] += STEP_MINUTES
            run += STEP_MINUTES
        elif run > 0:
            acc["longest_sleep"] = max(acc["longest_sleep"], run)
            run = 0

        if p.state == SleepState.IN_BED:
            acc["time_in_bed"] += STEP_MINUTES

    df = pd.DataFrame(list(days.values()), columns=SUMMARY_COLS[:-1])
    df["idle_in_bed"] = df["time_in_bed"] - df["time_asleep"]
    logger.debug("Summarised %d days", len(df))
    return df[SUMMARY_COLS]


def build_averages(summary: pd.DataFrame) -> dict:
    if summary is None or len(summary) == 0:
        return {"average_slept_per_day": 0.0, "average_in_bed_per_day": 0.0}
    return {
        "average_slept_per_day": float(summary["time_asleep"].mean()),
        "average_in_bed_per_day": float(summary["time_in_bed"].mean()),
    }
