# 简介：筹码分布计算入口。持有 K 线历史与配置，calc(index) 依次完成
# 窗口选取、价格网格构建、逐日衰减叠加，并生成不可变的结果快照。
from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence

import pandas as pd

from ..core.config import DEFAULT_ACCURACY_FACTOR, ChipConfig
from ..core.errors import DataFormatError, EmptyWindowError
from ..core.logging import logger
from ..core.types import Bar
from ..tools.market_data import bars_from_frame
from .distribution import distribute, total_chips
from .grid import build_grid
from .result import ChipsDistribution
from .window import select_window, window_bounds


def _coerce_bars(data: Any) -> List[Bar]:
    if isinstance(data, pd.DataFrame):
        return bars_from_frame(data)
    bars: List[Bar] = []
    for i, item in enumerate(data):
        if isinstance(item, Bar):
            bars.append(item)
        elif isinstance(item, dict):
            bars.append(Bar.from_mapping(item))
        elif isinstance(item, (list, tuple)):
            bars.append(Bar.from_row(item))
        else:
            raise DataFormatError(f"无法识别的 K 线记录（第 {i} 条）: {type(item).__name__}")
    return bars


class ChipsDistributionCalculator:
    """Chip distribution over a K-line history.

    ``bars`` may be ``Bar`` objects, positional rows
    ``[date, open, close, high, low, volume, amount, amplitude, turnover]``,
    dict records, or a DataFrame (normalised via ``tools.market_data``).
    """

    def __init__(self, bars: Iterable[Any] | pd.DataFrame, config: Optional[ChipConfig] = None):
        self.bars: Sequence[Bar] = tuple(_coerce_bars(bars))
        self.config = config or ChipConfig()

    def calc(self, index: int) -> ChipsDistribution:
        cfg = self.config
        window = select_window(self.bars, index, cfg.range, cfg.trading_days)
        if not window:
            start, end = window_bounds(index, cfg.range, cfg.trading_days)
            raise EmptyWindowError(index, start, end)

        grid = build_grid(window, cfg.accuracy_factor)
        logger.debug(
            "chips calc: index=%s bars=%d price=[%s, %s] accuracy=%.6f factor=%d",
            index,
            len(window),
            grid.min_price,
            grid.max_price,
            grid.accuracy,
            grid.factor,
        )
        chips = distribute(window, grid)
        last = window[-1]
        return ChipsDistribution.build(
            chips,
            grid,
            total_chips=total_chips(chips),
            current_price=last.close,
            last_date=last.date,
            trading_days=cfg.trading_days,
        )


def chips_dis_cal(
    bars: Iterable[Any] | pd.DataFrame,
    accuracy_factor: Optional[int] = None,
    range_: int = 0,
    days: int = 120,
) -> ChipsDistributionCalculator:
    """Shortcut building a calculator from loose arguments (``accuracy_factor`` falsy -> 150)."""
    cfg = ChipConfig(accuracy_factor=accuracy_factor or DEFAULT_ACCURACY_FACTOR, range=range_, trading_days=days)
    return ChipsDistributionCalculator(bars, cfg)
