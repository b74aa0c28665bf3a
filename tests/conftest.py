"""Shared pytest fixtures for all test modules."""

from __future__ import annotations

from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent

HEADER = "date,toBed,asleep,awake,outOfBed"

# Two nights, both sleeps crossing midnight
TWO_NIGHTS = "\n".join(
    [
        HEADER,
        "2021-01-01,23:00,23:20,07:00,07:10",
        "2021-01-02,23:10,23:30,06:50,07:00",
    ]
) + "\n"


def make_log(*rows: str) -> str:
    return "\n".join([HEADER, *rows]) + "\n"


@pytest.fixture
def two_nights_csv():
    return TWO_NIGHTS


@pytest.fixture
def two_nights_file(tmp_path):
    path = tmp_path / "sleep-data.csv"
    path.write_text(TWO_NIGHTS, encoding="utf-8")
    return path


@pytest.fixture
def sample_data_path():
    return PROJECT_ROOT / "data" / "sleep-data.csv"
