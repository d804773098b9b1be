# 简介：筹码分布核心算法。逐日按换手率衰减已有筹码，再把当日成交按
# 以均价为峰的三角形分布叠加到价格网格上；一字板时集中到单一刻度。
from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from ..core.types import Bar
from .grid import PriceGrid, to_precision

# 视为相等的价格容差
PRICE_EPS = 1e-8


def _add_day(chips: np.ndarray, bar: Bar, grid: PriceGrid, rate: float) -> None:
    min_price, accuracy, factor = grid.min_price, grid.accuracy, grid.factor
    high, low = bar.high, bar.low
    avg = (bar.open + bar.close + high + low) / 4

    if high == low:
        # 一字板：矩形面积是三角形的 2 倍，峰高取 factor - 1 并减半
        g = math.floor((avg - min_price) / accuracy)
        chips[g] += (factor - 1) * rate / 2
        return

    peak = 2 / (high - low)
    lo = math.ceil((low - min_price) / accuracy)
    hi = math.floor((high - min_price) / accuracy)
    if lo > hi:
        return
    j = np.arange(lo, hi + 1)
    cur = min_price + accuracy * j
    flat = np.full(len(j), peak * rate)
    # 上半三角 / 下半三角
    if abs(avg - low) < PRICE_EPS:
        up = flat
    else:
        up = (cur - low) / (avg - low) * peak * rate
    if abs(high - avg) < PRICE_EPS:
        down = flat
    else:
        down = (high - cur) / (high - avg) * peak * rate
    chips[lo : hi + 1] += np.where(cur <= avg, up, down)


def distribute(window: Sequence[Bar], grid: PriceGrid) -> np.ndarray:
    """Fold the window oldest to newest into a chip array over ``grid``.

    Each day first decays every bucket by ``1 - turnover_rate`` and then adds
    that day's profile scaled by the same rate. No clamp to zero is applied.
    """
    chips = np.zeros(grid.factor, dtype=float)
    for bar in window:
        rate = bar.turnover_rate
        # 衰减
        chips *= 1 - rate
        _add_day(chips, bar, grid, rate)
    return chips


def total_chips(chips: Sequence[float]) -> float:
    total = 0.0
    for v in chips:
        total += to_precision(float(v), 12)
    return total
