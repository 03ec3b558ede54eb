"""
reachmap: turn a post-level analytics CSV into a day x hour reach heatmap PNG.

    reachmap posts.csv --output heatmap.png --max-color 57bb8a --top 5
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

from reachmap.config import DEFAULT_OUTPUT, HeatmapConfig
from reachmap.errors import HeatmapError
from reachmap.ingest import read_csv_rows
from reachmap.pipeline import generate_heatmap, matrix_frame, top_buckets
from reachmap.render import available_fonts

_DEFAULTS = HeatmapConfig()


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="reachmap", description="Generate a posting-time reach heatmap from an analytics CSV")
    ap.add_argument("csv", nargs="?", help="Analytics export with post time and reach columns")
    ap.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help="PNG file to write (default: %(default)s)")
    ap.add_argument("--width", type=int, default=_DEFAULTS.width)
    ap.add_argument("--height", type=int, default=_DEFAULTS.height)
    ap.add_argument("--min-color", default=_DEFAULTS.min_color, help="Color of the lowest bucket")
    ap.add_argument("--max-color", default=_DEFAULTS.max_color, help="Color of the highest bucket")
    ap.add_argument("--font-color", default=_DEFAULTS.font_color)
    ap.add_argument("--border-color", default=_DEFAULTS.border_color)
    ap.add_argument("--font-family", default=_DEFAULTS.font_family)
    ap.add_argument("--font-size", type=float, default=_DEFAULTS.font_size)
    ap.add_argument("--border-width", type=float, default=_DEFAULTS.border_width, help="Grid line width in pixels")
    ap.add_argument("--cap", dest="max_value", type=float, default=None, metavar="MAX_VALUE",
                    help="Limit each post's reach to MAX_VALUE before summing")
    ap.add_argument("--matrix-csv", help="Also write the summed bucket values to this CSV")
    ap.add_argument("--top", type=int, default=0, metavar="N", help="Print the N best posting slots")
    ap.add_argument("--list-fonts", action="store_true", help="List usable font families and exit")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def config_from_args(args) -> HeatmapConfig:
    return HeatmapConfig(
        width=args.width,
        height=args.height,
        min_color=args.min_color,
        max_color=args.max_color,
        font_color=args.font_color,
        border_color=args.border_color,
        font_family=args.font_family,
        font_size=args.font_size,
        border_width=args.border_width,
        cap_max_value=args.max_value is not None,
        max_value=args.max_value if args.max_value is not None else _DEFAULTS.max_value,
    )


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s: %(message)s")

    if args.list_fonts:
        for name in available_fonts():
            print(name)
        return 0
    if not args.csv:
        ap.error("the following arguments are required: csv")

    try:
        config = config_from_args(args)
    except HeatmapError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    try:
        rows = read_csv_rows(args.csv)
    except (OSError, UnicodeDecodeError) as e:
        print(f"[ERROR] Could not read {args.csv}: {e}", file=sys.stderr)
        return 1

    try:
        result = generate_heatmap(rows, config)
    except HeatmapError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    out = result.save(args.output)
    table = result.table
    print(f"Heatmap saved to {os.path.abspath(out)} ({table.records} posts, {table.dropped} skipped)")

    if args.matrix_csv:
        matrix_frame(table.aggregate).to_csv(args.matrix_csv)
        print(f"Bucket values saved to {args.matrix_csv}")

    if args.top > 0:
        print("Best posting slots (Manila time):")
        for rank, (day, hour, value) in enumerate(top_buckets(table.aggregate, args.top), start=1):
            print(f"{rank:>2}. {day} {hour:>8}  {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
