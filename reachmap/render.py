"""
Draw the labeled 8 x 25 grid and its colored cells to a PNG.

Column 0 carries hour labels every third row, row 24 carries day labels, and
bucket (hour, day) sits at row `hour`, column `day + 1`.
"""
from __future__ import annotations

from io import BytesIO

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib import font_manager
from matplotlib.patches import Rectangle

from reachmap.config import DAYS_OF_WEEK, GRID_COLUMNS, GRID_ROWS, LABEL_HOURS, HeatmapConfig

# At 72 dpi one point is one pixel, so font sizes and line widths read as pixels.
DPI = 72


def hour_label(hour: int) -> str:
    """0 -> '12:00 AM', 15 -> '3:00 PM'."""
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:00 {suffix}"


def available_fonts():
    """Font family names matplotlib can draw with, sorted."""
    return sorted({f.name for f in font_manager.fontManager.ttflist})


def render_heatmap(color_matrix, config: HeatmapConfig) -> bytes:
    width, height = config.width, config.height
    line_width = config.border_width
    cell_w = (width - line_width) / GRID_COLUMNS
    cell_h = (height - line_width) / GRID_ROWS
    offset = line_width / 2
    font_color = f"#{config.font_color.lstrip('#')}"
    border_color = f"#{config.border_color.lstrip('#')}"

    fig = plt.figure(figsize=(width / DPI, height / DPI), dpi=DPI)
    try:
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)  # pixel coordinates, origin top-left
        ax.axis("off")

        text_style = dict(
            color=font_color,
            fontfamily=config.font_family,
            fontsize=config.font_size,
            ha="center",
            va="center",
        )

        for index, day in enumerate(DAYS_OF_WEEK):
            ax.text(cell_w * (index + 1) + cell_w / 2, height - cell_h / 2, day, **text_style)

        for index, hour in enumerate(LABEL_HOURS):
            ax.text(cell_w / 2, cell_h * index * 3 + cell_h / 2, hour_label(hour), **text_style)

        for row_index, row in enumerate(color_matrix):
            for column_index, color in enumerate(row):
                if color is None:
                    continue
                ax.add_patch(Rectangle(
                    (offset + (column_index + 1) * cell_w, offset + row_index * cell_h),
                    cell_w,
                    cell_h,
                    facecolor=f"#{color.lstrip('#')}",
                    edgecolor="none",
                    linewidth=0,
                ))

        if line_width > 0:
            xs = [offset + i * cell_w for i in range(GRID_COLUMNS + 1)]
            ys = [offset + i * cell_h for i in range(GRID_ROWS + 1)]
            ax.vlines(xs, 0, height - offset, colors=border_color, linewidth=line_width)
            ax.hlines(ys, 0, width - offset, colors=border_color, linewidth=line_width)

        buffer = BytesIO()
        fig.savefig(buffer, format="png", dpi=DPI, transparent=True)
        return buffer.getvalue()
    finally:
        plt.close(fig)
