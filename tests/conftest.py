"""
Shared pytest fixtures: a scripted backtest engine.

The engine replays a list of steps. Each step is a dict:
    {'timestamp': int, 'assets': [(best_bid, best_ask, StateValues), ...]}
"""

import logging
from typing import Dict, List

import pytest

from hbt_recorder.core.types import StateValues


class FakeDepth:
    def __init__(self, bid, ask):
        self._bid = bid
        self._ask = ask

    def best_bid(self):
        return self._bid

    def best_ask(self):
        return self._ask


class FakeEngine:
    """Backtest engine stand-in that steps through scripted states."""

    def __init__(self, steps: List[Dict], num_assets: int = None):
        self.steps = steps
        self.index = 0
        if num_assets is None:
            num_assets = len(steps[0]['assets']) if steps else 0
        self._num_assets = num_assets
        self.fail_on_asset = None

    def num_assets(self) -> int:
        return self._num_assets

    def set_num_assets(self, n: int) -> None:
        self._num_assets = n

    def current_timestamp(self) -> int:
        return self.steps[self.index]['timestamp']

    def depth(self, asset_no: int) -> FakeDepth:
        bid, ask, _ = self.steps[self.index]['assets'][asset_no]
        return FakeDepth(bid, ask)

    def state_values(self, asset_no: int) -> StateValues:
        if asset_no == self.fail_on_asset:
            raise RuntimeError(f"engine failure on asset {asset_no}")
        return self.steps[self.index]['assets'][asset_no][2]

    def elapse(self) -> bool:
        """Advance to the next step; False when the script is exhausted."""
        if self.index + 1 >= len(self.steps):
            return False
        self.index += 1
        return True


class CountOnlyEngine:
    """Engine that only answers num_assets()."""

    def __init__(self, num_assets):
        self._num_assets = num_assets

    def num_assets(self):
        if isinstance(self._num_assets, Exception):
            raise self._num_assets
        return self._num_assets


def make_steps(num_assets: int, timestamps: List[int]) -> List[Dict]:
    """Deterministic steps whose values vary by asset and step."""
    steps = []
    for i, ts in enumerate(timestamps):
        assets = []
        for a in range(num_assets):
            bid = 100.0 * (a + 1) + i * 0.25
            ask = bid + 0.5
            state = StateValues(
                balance=10000.0 - i * 1.5 - a,
                position=float(i % 3) - a,
                fee=0.01 * i,
                trade_count=i,
                trade_amount=123.45 * i,
                trade_qty=0.1 * i,
            )
            assets.append((bid, ask, state))
        steps.append({'timestamp': ts, 'assets': assets})
    return steps


@pytest.fixture
def make_engine():
    """Factory for scripted engines."""
    def _make(steps=None, num_assets=None):
        return FakeEngine(steps or [], num_assets=num_assets)
    return _make


@pytest.fixture
def count_engine():
    return CountOnlyEngine


@pytest.fixture
def scripted_steps():
    return make_steps


@pytest.fixture
def two_asset_engine():
    """The two-instrument engine state at timestamp 100."""
    steps = [{
        'timestamp': 100,
        'assets': [
            (9.0, 11.0, StateValues(
                balance=1000.0, position=0.0, fee=0.0,
                trade_count=0, trade_amount=0.0, trade_qty=0.0
            )),
            (50.0, 52.0, StateValues(
                balance=500.0, position=2.0, fee=1.5,
                trade_count=1, trade_amount=100.0, trade_qty=2.0
            )),
        ],
    }]
    return FakeEngine(steps)


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Capture recorder logs in every test; drop handlers setup_logger adds."""
    caplog.set_level(logging.DEBUG, logger="hbt_recorder")
    yield
    logger = logging.getLogger("hbt_recorder")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
