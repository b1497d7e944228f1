"""Centralized configuration for wavehistory.

This module contains the constants, colors and formatting thresholds used by
the history engine and its Qt presentation layer.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HistoryConfig:
    """Configuration for the history tree."""
    ROOT_DESCRIPTION: str = "Initial state"
    NODE_ID_PREFIX: str = "node-"


@dataclass(frozen=True)
class TimeFormatConfig:
    """Thresholds and formats for relative node timestamps."""
    JUST_NOW_SECONDS: int = 60
    MINUTES_THRESHOLD_SECONDS: int = 3600
    SAME_DAY_FORMAT: str = "%H:%M"
    DATE_FORMAT: str = "%Y-%m-%d %H:%M"


@dataclass(frozen=True)
class ColorScheme:
    """Color scheme for the history view."""
    CURRENT_NODE_BACKGROUND: str = "#094771"
    CURRENT_NODE_TEXT: str = "#ffffff"
    TEXT_MUTED: str = "#808080"


@dataclass(frozen=True)
class ViewConfig:
    """History view settings."""
    HEADER_TEXT: str = "Undo History"
    OPERATION_COLUMN_WIDTH: int = 240
    MIN_WIDTH: int = 260


# Global instances for easy access
HISTORY = HistoryConfig()
TIME_FORMAT = TimeFormatConfig()
COLORS = ColorScheme()
VIEW = ViewConfig()
