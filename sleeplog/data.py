import io
import logging
import re
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

REQUIRED_COLS = ["date", "toBed", "asleep", "awake", "outOfBed"]
UNKNOWN_OUT_OF_BED = "?"
DATETIME_FORMAT = "%Y-%m-%d %H:%M"
TIME_RE = re.compile(r"^\d{2}:\d{2}$")


class SleepLogError(ValueError):
    pass


class MalformedRowError(SleepLogError):
    pass


class EmptySleepLogError(SleepLogError):
    pass


@dataclass(frozen=True)
class RowData:
    """One logged sleep cycle with every time resolved to a full timestamp."""

    start: pd.Timestamp
    to_bed: pd.Timestamp
    asleep: pd.Timestamp | None
    awake: pd.Timestamp | None
    out_of_bed: pd.Timestamp

    @property
    def wake_time(self) -> pd.Timestamp:
        # No awake time logged: the cycle ends when the subject got up
        return self.awake if self.awake is not None else self.out_of_bed


def parse_datetime(date: str, time: str) -> pd.Timestamp:
    # Rollover compares raw strings, which only orders zero-padded HH:MM
    if not TIME_RE.match(time):
        raise MalformedRowError(f"Invalid time {time!r}, expected HH:MM")
    try:
        return pd.to_datetime(f"{date} {time}", format=DATETIME_FORMAT)
    except ValueError as exc:
        raise MalformedRowError(f"Invalid date/time: {date!r} {time!r}") from exc


def _after_bed(date: str, to_bed: str, time: str) -> pd.Timestamp:
    """Combine date and time, rolling over to the next day when the time is past midnight."""
    ts = parse_datetime(date, time)
    if to_bed > time:
        ts = ts + pd.Timedelta(days=1)
    return ts


def parse_fields(fields) -> RowData:
    fields = [str(f).strip() for f in fields]
    if len(fields) != len(REQUIRED_COLS):
        raise MalformedRowError(f"Expected {len(REQUIRED_COLS)} fields, got {len(fields)}: {fields}")

    date, to_bed_str, asleep_str, awake_str, out_of_bed_str = fields

    start = parse_datetime(date, "00:00")
    # To bed always has the same date as start
    to_bed = parse_datetime(date, to_bed_str)

    asleep = _after_bed(date, to_bed_str, asleep_str) if asleep_str else None
    awake = _after_bed(date, to_bed_str, awake_str) if awake_str else None

    if not out_of_bed_str or out_of_bed_str == UNKNOWN_OUT_OF_BED:
        out_of_bed = awake
    else:
        out_of_bed = _after_bed(date, to_bed_str, out_of_bed_str)

    if out_of_bed is None:
        raise MalformedRowError(f"Row has neither an awake nor an out of bed time: {','.join(fields)!r}")

    bounds = [ts for ts in (to_bed, asleep, awake, out_of_bed) if ts is not None]
    if any(later < earlier for earlier, later in zip(bounds, bounds[1:])):
        raise MalformedRowError(f"Times are out of order: {','.join(fields)!r}")

    return RowData(start=start, to_bed=to_bed, asleep=asleep, awake=awake, out_of_bed=out_of_bed)


def parse_data_row(row: str) -> RowData:
    return parse_fields(row.strip().split(","))


def parse_sleep_data(text: str) -> list[RowData]:
    """Parse a sleep log CSV (header row first) into one RowData per cycle.

    Any bad row aborts the whole parse; the error names its line number.
    """
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
        )
    except pd.errors.EmptyDataError as exc:
        raise EmptySleepLogError("Sleep log is empty") from exc
    except pd.errors.ParserError as exc:
        raise MalformedRowError(str(exc)) from exc

    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in REQUIRED_COLS if c not in df.columns]
    if missing:
        raise SleepLogError(f"Missing columns: {missing}")

    df = df[REQUIRED_COLS].fillna("")

    rows = []
    # Blank lines are kept as rows, so the frame index maps to the file line
    for lineno, fields in enumerate(df.itertuples(index=False, name=None), start=2):
        if not any(str(f).strip() for f in fields):
            continue
        try:
            rows.append(parse_fields(fields))
        except MalformedRowError as exc:
            raise MalformedRowError(f"line {lineno}: {exc}") from exc

    if not rows:
        raise EmptySleepLogError("Sleep log has no data rows")

    logger.debug("Parsed %d sleep cycles", len(rows))
    return rows


def read_sleep_log(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def load_sleep_log(path: str | Path) -> list[RowData]:
    logger.debug("Loading sleep log from %s", path)
    return parse_sleep_data(read_sleep_log(path))
