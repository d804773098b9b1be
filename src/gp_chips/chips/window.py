# 简介：计算窗口选取。按当前 K 线下标、排除条数与交易天数截取参与筹码计算的 K 线。
from __future__ import annotations

from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def window_bounds(index: int, range_: int, trading_days: int) -> Tuple[int, int]:
    end = index - range_ + 1
    start = end - trading_days
    return start, end


def select_window(bars: Sequence[T], index: int, range_: int, trading_days: int) -> List[T]:
    """Return the bars used for the distribution ending at ``index``.

    The window is ``bars[start:end]``; when ``end == 0`` it runs to the end of
    the history instead (``bars[start:]``), so with the usual negative ``start``
    it is the last ``trading_days`` bars. Negative bounds follow slice
    semantics and are not otherwise checked.
    """
    start, end = window_bounds(index, range_, trading_days)
    if end == 0:
        return list(bars[start:])
    return list(bars[start:end])
