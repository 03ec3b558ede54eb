"""Posting-time reach heatmaps from social-media analytics exports."""

from reachmap.aggregate import Aggregate, aggregate
from reachmap.config import CapConfig, ColumnAliases, HeatmapConfig
from reachmap.errors import ConfigError, EmptyDataError, HeatmapError, ValidationError
from reachmap.gradient import interpolate_color, map_to_colors
from reachmap.ingest import NormalizedRecord, normalize, read_csv_rows
from reachmap.pipeline import (
    HeatmapResult,
    HeatmapTable,
    build_heatmap_table,
    generate_heatmap,
    matrix_frame,
    top_buckets,
)
from reachmap.render import render_heatmap

__version__ = "0.1.0"

__all__ = [
    "Aggregate",
    "CapConfig",
    "ColumnAliases",
    "ConfigError",
    "EmptyDataError",
    "HeatmapConfig",
    "HeatmapError",
    "HeatmapResult",
    "HeatmapTable",
    "NormalizedRecord",
    "ValidationError",
    "aggregate",
    "build_heatmap_table",
    "generate_heatmap",
    "interpolate_color",
    "map_to_colors",
    "matrix_frame",
    "normalize",
    "read_csv_rows",
    "render_heatmap",
    "top_buckets",
]
