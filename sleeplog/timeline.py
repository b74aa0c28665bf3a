import logging
from dataclasses import dataclass
from enum import IntEnum

import pandas as pd

from sleeplog.data import EmptySleepLogError, MalformedRowError, RowData, parse_sleep_data

logger = logging.getLogger(__name__)

INTERVAL = pd.Timedelta(minutes=15)
SLOTS_PER_DAY = 96


class SleepState(IntEnum):
    AWAKE = 0
    IN_BED = 1
    ASLEEP = 2
    UNKNOWN = 3

    @property
    def label(self) -> str:
        return STATE_LABELS[self]


STATE_LABELS = {
    SleepState.AWAKE: "Awake",
    SleepState.IN_BED: "In Bed",
    SleepState.ASLEEP: "Asleep",
    SleepState.UNKNOWN: "Unknown",
}


@dataclass(frozen=True)
class SleepRow:
    date: pd.Timestamp
    state: SleepState


def end_of_day(ts: pd.Timestamp) -> pd.Timestamp:
    # Exclusive bound: midnight that starts the following day
    return ts.normalize() + pd.Timedelta(days=1)


def step(state: SleepState, row: RowData, instant: pd.Timestamp) -> tuple[SleepState, bool]:
    """Sleep state at `instant` for the active cycle `row`.

    Returns the new state and whether a point should be emitted. A False
    second element means `instant` is past the end of this cycle and the
    caller should move on to the next row without advancing time.
    """
    if instant < row.to_bed:
        # Before bed: whatever we were doing before carries over
        return state, True
    if row.asleep is not None and instant < row.asleep:
        return SleepState.IN_BED, True
    if instant < row.wake_time:
        # Never fell asleep means in bed the whole time
        return (SleepState.ASLEEP if row.asleep is not None else SleepState.IN_BED), True
    if instant < row.out_of_bed:
        return SleepState.IN_BED, True
    return SleepState.AWAKE, False


def build_timeline(rows: list[RowData]) -> list[SleepRow]:
    """Sample the sleep state every 15 minutes from the first cycle's midnight
    through the end of the day on which the last cycle ends.

    Rows must be in chronological order; unordered rows are rejected.
    """
    if not rows:
        raise EmptySleepLogError("Cannot build a timeline without any sleep cycles")

    for i, (a, b) in enumerate(zip(rows, rows[1:]), start=1):
        if b.start < a.start:
            raise MalformedRowError(
                f"Sleep cycles are not in chronological order: cycle {i + 1} ({b.start.date()}) "
                f"follows {a.start.date()}"
            )

    current = rows[0].start
    end = end_of_day(rows[-1].out_of_bed)
    state = SleepState.UNKNOWN
    index = 0

    points = []
    while current < end:
        if index < len(rows):
            state, emit = step(state, rows[index], current)
            if not emit:
                index += 1
                continue
        points.append(SleepRow(date=current, state=state))
        current = current + INTERVAL

    logger.info("Built sleep timeline of %d points from %s to %s", len(points), points[0].date, points[-1].date)
    return points


def parse_sleep_timeline(text: str) -> list[SleepRow]:
    return build_timeline(parse_sleep_data(text))


def timeline_frame(points: list[SleepRow]) -> pd.DataFrame:
    """Tabular view of a timeline for charting: one row per point."""
    df = pd.DataFrame(
        {
            "date": [p.date for p in points],
            "state": [int(p.state) for p in points],
        },
        columns=["date", "state"],
    )
    df["date"] = pd.to_datetime(df["date"])
    df["day"] = df["date"].dt.normalize()
    df["slot"] = df["date"].dt.hour * 4 + df["date"].dt.minute // 15
    df["label"] = df["state"].map(lambda s: SleepState(s).label)
    return df
