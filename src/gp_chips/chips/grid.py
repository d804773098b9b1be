# 简介：价格网格构建。根据窗口内最高/最低价与精度因子计算刻度间距、
# 各刻度价格（两位小数）以及当前收盘价所在的盈亏分界下标。
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Sequence, Tuple

from ..core.types import Bar

# 精度不小于 0.01（产品逻辑）
MIN_ACCURACY = 0.01


def to_fixed(value: float, digits: int = 2) -> str:
    """Format like currency: round the exact binary value, ties away from zero."""
    if value == 0:
        value = 0.0
    q = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(q, rounding=ROUND_HALF_UP))


def to_precision(value: float, digits: int = 12) -> float:
    """Round to ``digits`` significant digits (ties away from zero)."""
    if value == 0:
        return 0.0
    return float(Context(prec=digits, rounding=ROUND_HALF_UP).plus(Decimal(value)))


@dataclass(frozen=True)
class PriceGrid:
    min_price: float
    max_price: float
    accuracy: float
    factor: int
    prices: Tuple[float, ...]
    # first index whose price >= last close, -1 if none
    boundary: int

    def level(self, i: int) -> float:
        return self.min_price + self.accuracy * i


def build_grid(window: Sequence[Bar], factor: int) -> PriceGrid:
    max_price = max(b.high for b in window)
    min_price = min(b.low for b in window)
    accuracy = max(MIN_ACCURACY, (max_price - min_price) / (factor - 1))

    current_price = window[-1].close
    boundary = -1
    prices = []
    for i in range(factor):
        p = float(to_fixed(min_price + accuracy * i))
        prices.append(p)
        if boundary == -1 and p >= current_price:
            boundary = i
    return PriceGrid(
        min_price=min_price,
        max_price=max_price,
        accuracy=accuracy,
        factor=factor,
        prices=tuple(prices),
        boundary=boundary,
    )
