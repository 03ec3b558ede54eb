from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd

from reachmap.config import DAYS_OF_WEEK, HOURS_PER_DAY, CapConfig
from reachmap.errors import EmptyDataError

logger = logging.getLogger(__name__)

Matrix = List[List[Optional[float]]]


@dataclass(frozen=True)
class Aggregate:
    matrix: Matrix  # [hour][day_of_week], None = no posts in that bucket
    min_value: float
    max_value: float

    def populated(self):
        """(hour, day, value) for every bucket that has data."""
        for hour, row in enumerate(self.matrix):
            for day, value in enumerate(row):
                if value is not None:
                    yield hour, day, value


def _as_number(value):
    if isinstance(value, (int, np.integer)):
        return int(value)
    value = float(value)
    return int(value) if value.is_integer() else value


def aggregate(records, cap: CapConfig = CapConfig()) -> Aggregate:
    """
    Sum reach into a 24 x 7 (hour x day-of-week) grid.

    Capping limits each record before it is added, so one viral post cannot
    dominate its bucket. Buckets without a single record stay None, which is
    not the same as a bucket whose posts reached nobody.
    """
    frame = pd.DataFrame(
        [(r.hour_of_day, r.day_of_week, cap.contribution(r.reach)) for r in records],
        columns=["hour", "day", "value"],
    )
    if frame.empty:
        raise EmptyDataError("No rows with a parsable post time and reach; nothing to plot.")

    # object dtype keeps Python ints, so large reach totals stay exact
    frame["value"] = frame["value"].astype(object)
    sums = frame.groupby(["hour", "day"])["value"].agg(lambda s: sum(s.tolist()))

    matrix = [[None] * len(DAYS_OF_WEEK) for _ in range(HOURS_PER_DAY)]
    for (hour, day), total in sums.items():
        matrix[int(hour)][int(day)] = _as_number(total)

    populated = [value for row in matrix for value in row if value is not None]
    min_value = min(populated)
    max_value = max(populated)

    logger.info(f"Aggregated {len(frame)} records into {len(populated)} buckets (min={min_value}, max={max_value})")
    return Aggregate(matrix=matrix, min_value=min_value, max_value=max_value)
