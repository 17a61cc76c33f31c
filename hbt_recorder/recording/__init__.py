"""
Recording module - Capture and export of backtest state snapshots.

Exports:
- BacktestRecorder: Per-step recorder used by the simulation loop
- Recorder: Interface of step recorders
- SnapshotStore / SnapshotLog: In-memory snapshot logs
- export_logs / load_records: CSV export and read-back
"""

from .snapshot_store import SnapshotStore, SnapshotLog
from .exporter import (
    export_log, export_logs, format_value,
    record_path, load_record, load_records
)
from .recorder import Recorder, BacktestRecorder

__all__ = [
    'SnapshotStore',
    'SnapshotLog',
    'export_log',
    'export_logs',
    'format_value',
    'record_path',
    'load_record',
    'load_records',
    'Recorder',
    'BacktestRecorder',
]
