"""
Backtest state recorder.

Captures per-instrument mid price and account state at every simulation
step and exports the logs to record_<asset_no>.csv files after the run.
"""

from .recording import BacktestRecorder, Recorder
from .core import (
    InstrumentSnapshot, StateValues, RecorderConfig, load_config,
    RecorderError, ConfigurationError, RecordRangeError,
    ExportIOError, ConsistencyViolation
)

__version__ = "0.1.0"

__all__ = [
    'BacktestRecorder',
    'Recorder',
    'InstrumentSnapshot',
    'StateValues',
    'RecorderConfig',
    'load_config',
    'RecorderError',
    'ConfigurationError',
    'RecordRangeError',
    'ExportIOError',
    'ConsistencyViolation',
]
