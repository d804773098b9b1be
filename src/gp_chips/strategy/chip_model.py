# 简介：筹码/成本带摘要。基于换手率衰减的筹码分布估算平均成本、获利比例、
# 90%/70% 成本带与集中度，供交易计划参考。
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple
import pandas as pd

from ..chips.calculator import ChipsDistributionCalculator
from ..chips.window import select_window
from ..core.config import ChipConfig


@dataclass
class ChipResult:
    avg_cost: float
    profit_ratio: float
    band_90_low: float
    band_90_high: float
    concentration_90: float
    band_70_low: float
    band_70_high: float
    concentration_70: float
    dist_to_90_high_pct: float
    sample_n: int


def compute_chip(data: pd.DataFrame | Iterable[Any], config: Optional[ChipConfig] = None) -> Tuple[ChipResult, Dict[str, Any]]:
    """Chip summary as of the latest bar in ``data``."""
    calc = ChipsDistributionCalculator(data, config)
    bars = calc.bars
    cfg = calc.config
    dist = calc.calc(len(bars) - 1)

    p90 = dist.percent_chips["90"]
    p70 = dist.percent_chips["70"]
    low90, high90 = (float(v) for v in p90["priceRange"])
    low70, high70 = (float(v) for v in p70["priceRange"])
    used = select_window(bars, len(bars) - 1, cfg.range, cfg.trading_days)
    close = used[-1].close
    dist_high_pct = (high90 - close) / high90 if high90 != 0 else 0.0
    meta: Dict[str, Any] = {
        "factor": dist.factor,
        "accuracy": dist.accuracy,
        "total_chips": dist.total_chips,
        "window_start": used[0].date,
        "window_end": dist.d,
        "turnover_missing": sum(1 for b in used if not b.turnover),
    }
    return (
        ChipResult(
            avg_cost=float(dist.avg_cost),
            profit_ratio=float(dist.benefit_part),
            band_90_low=low90,
            band_90_high=high90,
            concentration_90=float(p90["concentration"]),
            band_70_low=low70,
            band_70_high=high70,
            concentration_70=float(p70["concentration"]),
            dist_to_90_high_pct=float(dist_high_pct),
            sample_n=len(used),
        ),
        meta,
    )
