class HeatmapError(Exception):
    """Base class for errors that abort a heatmap run."""


class ValidationError(HeatmapError):
    """The CSV header lacks a required column."""


class EmptyDataError(HeatmapError):
    """No bucket received a value, so there is no range to scale colors on."""


class ConfigError(HeatmapError):
    """A configuration option is out of range or malformed."""
