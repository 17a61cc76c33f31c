"""
Backtest Recorder - Record strategy state values for performance analysis.

Usage:
    recorder = BacktestRecorder(hbt)
    while hbt.elapse(step):
        ...
        recorder.record(hbt)
    recorder.to_csv("results/")
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from ..core.config import RecorderConfig
from ..core.exceptions import ConfigurationError
from ..core.types import BacktestInterface
from .snapshot_store import SnapshotStore, SnapshotLog
from .exporter import export_logs


class Recorder(ABC):
    """Anything the simulation loop can hand the engine to once per step."""

    @abstractmethod
    def record(self, hbt: BacktestInterface) -> None:
        """Record the engine's state at its current timestamp."""


class BacktestRecorder(Recorder):
    """
    Records every instrument's mid price and account state values.

    Each call to record() appends one snapshot per instrument; to_csv()
    writes them once the run is over. One recorder belongs to one run.
    """

    def __init__(
        self,
        hbt: BacktestInterface,
        allow_empty: bool = False,
        output_dir: Optional[Union[str, Path]] = None
    ):
        """
        Initialize backtest recorder.

        Args:
            hbt: Backtest engine; its instrument count is fixed from here on
            allow_empty: Accept an engine with zero instruments
            output_dir: Default directory for export()
        """
        self.store = SnapshotStore(hbt, allow_empty=allow_empty)
        self.output_dir = Path(output_dir) if output_dir is not None else None

        from ..monitoring.logger import get_logger
        self.logger = get_logger(__name__)
        self.logger.info("Backtest recorder ready", num_assets=self.store.num_assets)

    @classmethod
    def from_config(cls, hbt: BacktestInterface, config: RecorderConfig) -> "BacktestRecorder":
        """
        Create a recorder from loaded configuration.

        Applies ``config.log_level`` to the package logger before the
        recorder is built.
        """
        from ..monitoring.logger import setup_logger
        setup_logger(level=config.log_level)

        return cls(hbt, allow_empty=config.allow_empty, output_dir=config.output_dir)

    @property
    def num_assets(self) -> int:
        return self.store.num_assets

    def record(self, hbt: BacktestInterface) -> None:
        self.store.capture(hbt)

    def log(self, asset_no: int) -> SnapshotLog:
        return self.store.log(asset_no)

    def to_csv(self, path: Union[str, Path]) -> List[Path]:
        """
        Save records to ``path``, one ``record_<asset_no>.csv`` per instrument.

        The columns are timestamp, mid_price, balance, position, fee,
        trade_count, trade_amount and trade_qty. No header is written.

        Returns:
            Paths of the written files

        Raises:
            ExportIOError: If a file cannot be written
        """
        self.logger.info(
            "Exporting records",
            path=path,
            num_assets=self.store.num_assets,
            steps=len(self.store)
        )
        return export_logs(self.store.logs, path)

    def export(self, directory: Optional[Union[str, Path]] = None) -> List[Path]:
        """
        Save records to ``directory`` or the configured output directory.

        Raises:
            ConfigurationError: If neither a directory nor a configured one is set
        """
        target = directory if directory is not None else self.output_dir
        if target is None:
            raise ConfigurationError("No output directory given or configured")
        return self.to_csv(target)

    def to_dataframes(self) -> List[pd.DataFrame]:
        """Get one typed DataFrame per instrument, in instrument order."""
        return [log.to_dataframe() for log in self.store.logs]
