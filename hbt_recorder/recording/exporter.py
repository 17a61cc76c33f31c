"""
Exporter - Write snapshot logs to one CSV file per instrument.

File layout:
- <output_dir>/record_<asset_no>.csv
- No header row
- Columns: timestamp, mid_price, balance, position, fee,
  trade_count, trade_amount, trade_qty
- '\\n' line terminator
"""

import csv
import math
from pathlib import Path
from typing import Iterable, List, Union

import numpy as np
import pandas as pd

from ..core.constants import (
    SNAPSHOT_FIELDS, RECORD_FILE_TEMPLATE,
    CSV_DELIMITER, CSV_LINE_TERMINATOR
)
from ..core.exceptions import ExportIOError
from ..core.types import SNAPSHOT_DTYPES
from .snapshot_store import SnapshotLog

PathLike = Union[str, Path]


def format_value(value) -> str:
    """
    Render one record field as decimal text.

    Integers print as-is. Floats print as the shortest positional decimal
    that round-trips at their own precision (float32 stays float32), with
    no exponent and no trailing '.0'.

    Examples:
        10.0 -> "10", 1.5 -> "1.5", nan -> "NaN", -inf -> "-inf"
    """
    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"Unsupported record value: {value!r}")

    if isinstance(value, (int, np.integer)):
        return str(int(value))

    if not isinstance(value, np.floating):
        value = np.float64(value)

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    return np.format_float_positional(value, unique=True, trim='-')


def record_path(directory: PathLike, asset_no: int) -> Path:
    """Path of the record file of one instrument."""
    return Path(directory) / RECORD_FILE_TEMPLATE.format(asset_no=asset_no)


def export_log(log: SnapshotLog, path: PathLike) -> Path:
    """
    Write one instrument's log, replacing any existing file.

    Args:
        log: Snapshot log to write
        path: Destination file

    Returns:
        Path written

    Raises:
        ExportIOError: If the file cannot be created or written
    """
    path = Path(path)
    try:
        with open(path, 'w', newline='') as f:
            writer = csv.writer(
                f,
                delimiter=CSV_DELIMITER,
                lineterminator=CSV_LINE_TERMINATOR
            )
            for snapshot in log:
                writer.writerow(format_value(v) for v in snapshot.as_row())
    except OSError as e:
        raise ExportIOError(
            f"Failed to write record file: {e}",
            path=path,
            asset_no=log.asset_no
        ) from e

    return path


def export_logs(logs: Iterable[SnapshotLog], directory: PathLike) -> List[Path]:
    """
    Write every log to ``directory``, one file per instrument.

    The directory must already exist. Export stops at the first failing
    file; files written before it are left in place.

    Args:
        logs: Snapshot logs in instrument order
        directory: Existing output directory

    Returns:
        Paths written, in instrument order

    Raises:
        ExportIOError: On the first file that cannot be written
    """
    from ..monitoring.logger import get_logger
    logger = get_logger(__name__)

    written: List[Path] = []
    for log in logs:
        path = record_path(directory, log.asset_no)
        try:
            export_log(log, path)
        except ExportIOError as e:
            logger.error(
                "Record export aborted",
                path=path,
                written=len(written),
                error=e.__cause__
            )
            raise
        written.append(path)

    logger.info("Records exported", directory=directory, files=len(written))
    return written


def _empty_record_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {name: pd.Series(dtype=SNAPSHOT_DTYPES[name]) for name in SNAPSHOT_FIELDS}
    )


def load_record(path: PathLike) -> pd.DataFrame:
    """
    Read an exported record file back into a typed DataFrame.

    Args:
        path: Record file written by export_log()

    Returns:
        DataFrame with SNAPSHOT_FIELDS columns and SNAPSHOT_DTYPES types
    """
    path = Path(path)
    if path.stat().st_size == 0:
        return _empty_record_frame()

    return pd.read_csv(
        path,
        header=None,
        names=list(SNAPSHOT_FIELDS),
        dtype=SNAPSHOT_DTYPES,
        float_precision='round_trip'
    )


def load_records(directory: PathLike, num_assets: int) -> List[pd.DataFrame]:
    """
    Read the record files of instruments ``0..num_assets-1``.

    Returns:
        One DataFrame per instrument, in instrument order
    """
    return [load_record(record_path(directory, asset_no)) for asset_no in range(num_assets)]
