"""Recorder-wide constants.

This module defines the file naming, CSV layout and configuration defaults
used by the recorder. The column order below is the on-disk order of every
record file and is consumed by downstream analysis tools.
"""

from typing import Tuple


# ============================================================================
# Record Layout
# ============================================================================

SNAPSHOT_FIELDS: Tuple[str, ...] = (
    'timestamp',
    'mid_price',
    'balance',
    'position',
    'fee',
    'trade_count',
    'trade_amount',
    'trade_qty',
)
"""Column names of a record file, in written order.

Record files carry no header row; readers apply these names.
"""

RECORD_FILE_TEMPLATE: str = "record_{asset_no}.csv"
"""File name of an exported instrument log inside the output directory."""

CSV_DELIMITER: str = ","
"""Field separator of record files."""

CSV_LINE_TERMINATOR: str = "\n"
"""Line terminator of record files (no carriage return on any platform)."""


# ============================================================================
# Configuration Defaults
# ============================================================================

DEFAULT_OUTPUT_DIR: str = "data/records"
"""Directory used by BacktestRecorder.export() when none is given.

The directory must exist before export; the recorder does not create it.
"""

DEFAULT_ALLOW_EMPTY: bool = False
"""Whether an engine reporting zero instruments is accepted.

When False, construction raises ConfigurationError. When True, capture
becomes a no-op and export writes no files.
"""

DEFAULT_LOG_LEVEL: str = "INFO"
"""Log level applied by setup_logger() when the config names none."""

VALID_LOG_LEVELS: Tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
