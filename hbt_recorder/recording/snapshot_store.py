"""
Snapshot Store - Per-instrument, append-only logs of state snapshots.

One log per instrument, created once from the engine's instrument count.
Every capture appends exactly one snapshot to every log, so all logs
always have the same length.
"""

from typing import Iterator, List, Tuple

import numpy as np
import pandas as pd

from ..core.types import BacktestInterface, InstrumentSnapshot, SNAPSHOT_DTYPES
from ..core.constants import SNAPSHOT_FIELDS
from ..core.exceptions import ConfigurationError, ConsistencyViolation


class SnapshotLog:
    """Ordered snapshots of a single instrument."""

    def __init__(self, asset_no: int):
        self.asset_no = asset_no
        self._snapshots: List[InstrumentSnapshot] = []

    def _append(self, snapshot: InstrumentSnapshot) -> None:
        self._snapshots.append(snapshot)

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[InstrumentSnapshot]:
        return iter(self._snapshots)

    def __getitem__(self, index):
        return self._snapshots[index]

    def rows(self) -> List[Tuple]:
        """All snapshots as tuples in record column order."""
        return [snapshot.as_row() for snapshot in self._snapshots]

    def to_dataframe(self) -> pd.DataFrame:
        """
        Get log as a typed DataFrame.

        Columns follow SNAPSHOT_FIELDS with SNAPSHOT_DTYPES applied; an
        empty log gives an empty frame with the same columns.
        """
        df = pd.DataFrame(self.rows(), columns=list(SNAPSHOT_FIELDS))
        return df.astype(SNAPSHOT_DTYPES)

    def __repr__(self) -> str:
        return f"SnapshotLog(asset_no={self.asset_no}, len={len(self)})"


class SnapshotStore:
    """
    In-memory recorder state for one backtest run.

    The number of logs is fixed at construction. Capturing against an
    engine that reports a different instrument count is a programming
    error and raises ConsistencyViolation.
    """

    def __init__(self, hbt: BacktestInterface, allow_empty: bool = False):
        """
        Initialize one empty log per instrument.

        Args:
            hbt: Backtest engine to size the store from
            allow_empty: Accept an engine with zero instruments

        Raises:
            ConfigurationError: If the instrument count cannot be determined,
                or is zero and allow_empty is False
        """
        try:
            num_assets = hbt.num_assets()
        except Exception as e:
            raise ConfigurationError(
                f"Cannot determine instrument count: {e}"
            ) from e

        if (isinstance(num_assets, (bool, np.bool_))
                or not isinstance(num_assets, (int, np.integer))
                or num_assets < 0):
            raise ConfigurationError(
                "Engine reported an invalid instrument count",
                num_assets=num_assets
            )
        num_assets = int(num_assets)

        if num_assets == 0 and not allow_empty:
            raise ConfigurationError(
                "Engine reported no instruments to record",
                num_assets=num_assets
            )

        self._logs: Tuple[SnapshotLog, ...] = tuple(
            SnapshotLog(asset_no) for asset_no in range(num_assets)
        )
        self._captures = 0

        from ..monitoring.logger import get_logger
        self.logger = get_logger(__name__)
        self.logger.debug("Snapshot store created", num_assets=num_assets)

    @property
    def num_assets(self) -> int:
        return len(self._logs)

    @property
    def logs(self) -> Tuple[SnapshotLog, ...]:
        return self._logs

    def log(self, asset_no: int) -> SnapshotLog:
        """
        Get the log of one instrument.

        Raises:
            IndexError: If asset_no is not an instrument of this store
        """
        if not 0 <= asset_no < len(self._logs):
            raise IndexError(f"No log for asset_no={asset_no} (num_assets={len(self._logs)})")
        return self._logs[asset_no]

    def __len__(self) -> int:
        """Number of steps recorded so far."""
        return self._captures

    def capture(self, hbt: BacktestInterface) -> None:
        """
        Append one snapshot per instrument for the engine's current step.

        All snapshots are built before any log is touched, so an exception
        from the engine leaves the store unchanged. A store without
        instruments records nothing.

        Args:
            hbt: Backtest engine positioned at the step to record

        Raises:
            ConsistencyViolation: If the engine's instrument count differs
                from the one this store was created with
            RecordRangeError: If a timestamp or trade count overflows its
                column width; no log is appended to
        """
        num_assets = hbt.num_assets()
        if num_assets != len(self._logs):
            raise ConsistencyViolation(
                "Instrument count changed after the recorder was created",
                expected=len(self._logs),
                reported=num_assets
            )
        if not self._logs:
            return

        timestamp = hbt.current_timestamp()
        snapshots = [
            InstrumentSnapshot.capture(timestamp, hbt.depth(asset_no), hbt.state_values(asset_no))
            for asset_no in range(num_assets)
        ]

        for log, snapshot in zip(self._logs, snapshots):
            log._append(snapshot)
        self._captures += 1
