from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from reachmap.aggregate import Aggregate, aggregate
from reachmap.config import DAYS_OF_WEEK, DEFAULT_ALIASES, DEFAULT_OUTPUT, HeatmapConfig
from reachmap.gradient import ColorMatrix, map_to_colors
from reachmap.ingest import normalize
from reachmap.render import hour_label, render_heatmap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeatmapTable:
    aggregate: Aggregate
    colors: ColorMatrix
    records: int
    dropped: int


@dataclass(frozen=True)
class HeatmapResult:
    table: HeatmapTable
    png: bytes

    def save(self, path=DEFAULT_OUTPUT) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.png)
        return path


def build_heatmap_table(rows, config: HeatmapConfig = HeatmapConfig(), aliases=DEFAULT_ALIASES) -> HeatmapTable:
    """Rows -> color matrix. Raises ValidationError / EmptyDataError."""
    normalized = normalize(rows, aliases)
    if normalized.dropped:
        logger.warning(f"{normalized.dropped} row(s) skipped for unparsable post time or reach")

    agg = aggregate(normalized, config.cap)
    colors = map_to_colors(agg.matrix, agg.min_value, agg.max_value, config.min_color, config.max_color)
    return HeatmapTable(aggregate=agg, colors=colors, records=len(normalized), dropped=normalized.dropped)


def generate_heatmap(rows, config: HeatmapConfig = HeatmapConfig(), aliases=DEFAULT_ALIASES) -> HeatmapResult:
    table = build_heatmap_table(rows, config, aliases)
    png = render_heatmap(table.colors, config)
    logger.info(f"Rendered {config.width}x{config.height} heatmap from {table.records} records")
    return HeatmapResult(table=table, png=png)


# -----------------------
# Tabular views
# -----------------------
def matrix_frame(agg: Aggregate) -> pd.DataFrame:
    """The bucket sums with hours as rows and SUN..SAT as columns; empty buckets are NaN."""
    frame = pd.DataFrame(agg.matrix, columns=DAYS_OF_WEEK, dtype=float)
    frame.index.name = "hour"
    return frame


def top_buckets(agg: Aggregate, n: int = 5):
    """Best posting slots: [(day_label, hour_label, value), ...] highest first."""
    ranked = sorted(agg.populated(), key=lambda t: (-t[2], t[1], t[0]))
    return [(DAYS_OF_WEEK[day], hour_label(hour), value) for hour, day, value in ranked[:n]]
