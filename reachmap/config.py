from __future__ import annotations

from dataclasses import dataclass
from zoneinfo import ZoneInfo

from reachmap.errors import ConfigError
from reachmap.gradient import parse_hex_color

# -----------------------
# Fixed policy
# -----------------------
# Export timestamps carry Pacific wall-clock time; the audience lives in Manila.
SOURCE_TZ = ZoneInfo("America/Los_Angeles")
TARGET_TZ = ZoneInfo("Asia/Manila")

DAYS_OF_WEEK = ["SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT"]
LABEL_HOURS = [0, 3, 6, 9, 12, 15, 18, 21]
HOURS_PER_DAY = 24

GRID_COLUMNS = 8
GRID_ROWS = 25

MIN_DIMENSION = 100
MAX_DIMENSION = 4000

DEFAULT_OUTPUT = "file.png"

# -----------------------
# Column aliases
# -----------------------
POST_TIME_ALIASES = ("Post time", "Publish time")
REACH_ALIASES = ("Reach", "People Reached")


@dataclass(frozen=True)
class ColumnAliases:
    """Ordered header names accepted for each logical field; first present wins."""

    post_time: tuple = POST_TIME_ALIASES
    reach: tuple = REACH_ALIASES

    def resolve(self, header):
        """Return (post_time_column, reach_column); either is None when absent."""
        present = set(header)
        post_col = next((name for name in self.post_time if name in present), None)
        reach_col = next((name for name in self.reach if name in present), None)
        return post_col, reach_col

    def describe(self) -> str:
        post = "/".join(f'"{name}"' for name in self.post_time)
        reach = "/".join(f'"{name}"' for name in self.reach)
        return f"{post} and {reach}"


DEFAULT_ALIASES = ColumnAliases()


@dataclass(frozen=True)
class CapConfig:
    enabled: bool = False
    max_value: float = 1000

    def __post_init__(self):
        if self.max_value < 0:
            raise ConfigError(f"maxValue must be non-negative, got {self.max_value}")

    def contribution(self, reach):
        if self.enabled and reach > self.max_value:
            return self.max_value
        return reach


@dataclass(frozen=True)
class HeatmapConfig:
    """Everything one run needs besides the CSV rows.

    Defaults match the values the upload form starts with.
    """

    width: int = 1000
    height: int = 600
    min_color: str = "#ffffff"
    max_color: str = "#007789"
    font_color: str = "#003850"
    border_color: str = "#cccccc"
    font_family: str = "sans-serif"
    font_size: float = 18
    cap_max_value: bool = False
    max_value: float = 1000
    border_width: float = 1

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
            if not MIN_DIMENSION <= value <= MAX_DIMENSION:
                raise ConfigError(
                    f"{name} must be between {MIN_DIMENSION} and {MAX_DIMENSION}, got {value}"
                )
        for name in ("min_color", "max_color", "font_color", "border_color"):
            # raises ConfigError on malformed input
            parse_hex_color(getattr(self, name))
        if self.font_size <= 0:
            raise ConfigError(f"font_size must be positive, got {self.font_size}")
        if self.border_width < 0:
            raise ConfigError(f"border_width must be non-negative, got {self.border_width}")
        if self.max_value < 0:
            raise ConfigError(f"maxValue must be non-negative, got {self.max_value}")

    @property
    def cap(self) -> CapConfig:
        return CapConfig(enabled=self.cap_max_value, max_value=self.max_value)
