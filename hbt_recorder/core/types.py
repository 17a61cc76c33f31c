"""Core data types for the backtest recorder.

This module defines the snapshot record captured at every simulation step
and the protocols the driving backtest engine has to satisfy. Numeric
widths follow the record layout:
- int64 timestamps
- float32 mid price
- float64 account values
- int32 trade count
"""

from dataclasses import dataclass, astuple
from typing import Dict, Tuple, Union, Protocol, runtime_checkable

import numpy as np

from .constants import SNAPSHOT_FIELDS
from .exceptions import RecordRangeError


SNAPSHOT_DTYPES: Dict[str, type] = {
    'timestamp': np.int64,
    'mid_price': np.float32,
    'balance': np.float64,
    'position': np.float64,
    'fee': np.float64,
    'trade_count': np.int32,
    'trade_amount': np.float64,
    'trade_qty': np.float64,
}

Number = Union[int, float, np.number]


def _fixed_width(name: str, value) -> np.integer:
    """Convert an integer field to its record dtype, rejecting overflow."""
    dtype = SNAPSHOT_DTYPES[name]
    value = int(value)
    info = np.iinfo(dtype)
    if not info.min <= value <= info.max:
        raise RecordRangeError(
            f"{name} does not fit {np.dtype(dtype).name}",
            value=value,
            min=info.min,
            max=info.max
        )
    return dtype(value)


# ============================================================================
# Engine Protocols
# ============================================================================

@runtime_checkable
class MarketDepth(Protocol):
    """Market depth of one instrument, as far as the recorder reads it."""

    def best_bid(self) -> Number:
        ...

    def best_ask(self) -> Number:
        ...


@dataclass
class StateValues:
    """
    Account state of one instrument as reported by the engine.

    Attributes:
        balance: Account cash balance
        position: Net held quantity of the instrument
        fee: Cumulative fees charged
        trade_count: Cumulative number of fills
        trade_amount: Cumulative notional traded
        trade_qty: Cumulative quantity traded
    """
    balance: float = 0.0
    position: float = 0.0
    fee: float = 0.0
    trade_count: int = 0
    trade_amount: float = 0.0
    trade_qty: float = 0.0


@runtime_checkable
class BacktestInterface(Protocol):
    """
    The part of a backtest engine the recorder consumes.

    ``state_values`` may return a StateValues or any object exposing the
    same six attributes.
    """

    def num_assets(self) -> int:
        ...

    def current_timestamp(self) -> int:
        ...

    def depth(self, asset_no: int) -> MarketDepth:
        ...

    def state_values(self, asset_no: int) -> StateValues:
        ...


# ============================================================================
# Recorded Types
# ============================================================================

@dataclass(frozen=True)
class InstrumentSnapshot:
    """
    State of one instrument at one simulation step.

    Field order is the column order of the exported record file.
    """
    timestamp: np.int64
    mid_price: np.float32
    balance: float
    position: float
    fee: float
    trade_count: np.int32
    trade_amount: float
    trade_qty: float

    @classmethod
    def capture(
        cls,
        timestamp: int,
        depth: MarketDepth,
        state: StateValues
    ) -> "InstrumentSnapshot":
        """
        Build a snapshot from the engine's depth and state values.

        The mid price is computed at single precision. Account values are
        carried at double precision as given, including NaN and inf.
        Integer fields are stored at their fixed width (int64 timestamp,
        int32 trade count).

        Raises:
            RecordRangeError: If an integer field overflows its width
        """
        mid = (np.float32(depth.best_bid()) + np.float32(depth.best_ask())) / np.float32(2.0)
        return cls(
            timestamp=_fixed_width('timestamp', timestamp),
            mid_price=np.float32(mid),
            balance=float(state.balance),
            position=float(state.position),
            fee=float(state.fee),
            trade_count=_fixed_width('trade_count', state.trade_count),
            trade_amount=float(state.trade_amount),
            trade_qty=float(state.trade_qty),
        )

    def as_row(self) -> Tuple:
        """Values in record column order."""
        return astuple(self)

    def to_dict(self) -> Dict[str, Number]:
        return dict(zip(SNAPSHOT_FIELDS, self.as_row()))
