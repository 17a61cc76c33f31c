"""Core types, constants, configuration and exceptions."""

from .types import (
    InstrumentSnapshot, StateValues, MarketDepth,
    BacktestInterface, SNAPSHOT_DTYPES
)
from .constants import SNAPSHOT_FIELDS, RECORD_FILE_TEMPLATE
from .config import RecorderConfig, load_config
from .exceptions import (
    RecorderError, ConfigurationError, RecordRangeError,
    ExportIOError, ConsistencyViolation
)

__all__ = [
    "InstrumentSnapshot",
    "StateValues",
    "MarketDepth",
    "BacktestInterface",
    "SNAPSHOT_DTYPES",
    "SNAPSHOT_FIELDS",
    "RECORD_FILE_TEMPLATE",
    "RecorderConfig",
    "load_config",
    "RecorderError",
    "ConfigurationError",
    "RecordRangeError",
    "ExportIOError",
    "ConsistencyViolation",
]
