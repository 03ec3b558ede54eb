import pandas as pd
import pytest

from reachmap.ingest import NormalizedRecord


def make_record(hour, day, reach):
    return NormalizedRecord(
        raw_fields={},
        local_timestamp=pd.Timestamp("2024-01-07 00:00", tz="Asia/Manila"),
        hour_of_day=hour,
        day_of_week=day,
        reach=reach,
    )


@pytest.fixture
def record():
    return make_record


@pytest.fixture
def sample_rows():
    return [
        ["Post ID", "Post time", "Reach"],
        ["1", "2024-01-01 09:00:00", "10"],
        ["2", "2024-01-01 09:30:00", "20"],
        ["3", "2024-01-03 18:15:00", "300"],
        ["4", "2024-07-01 09:00:00", "45"],
    ]
