"""Utility modules for the booking agent."""

from .config import settings
from .logger import logger, setup_logger
from .time_utils import TIMESTAMP_FORMAT, TimeFormat, parse_timestamp, format_timestamp

__all__ = [
    "settings",
    "logger",
    "setup_logger",
    "TIMESTAMP_FORMAT",
    "TimeFormat",
    "parse_timestamp",
    "format_timestamp"
]
