# 简介：筹码分布结果。不可变快照，提供指定筹码处成本、获利比例、
# 百分比筹码价格区间与集中度等查询，并可输出 JSON 友好的字典。
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from functools import cached_property
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.errors import InvalidArgumentError
from ..core.types import JSONDict
from .grid import PriceGrid, to_fixed, to_precision

# 默认输出的百分比筹码
DEFAULT_PERCENTS = (("90", 0.9), ("70", 0.7))


def _render_date(d: Any) -> Any:
    if isinstance(d, datetime):
        if d.time() == time(0, 0) and d.tzinfo is None:
            return d.strftime("%Y-%m-%d")
        return d.isoformat()
    if isinstance(d, date):
        return d.isoformat()
    return d


@dataclass(frozen=True)
class ChipsDistribution:
    """Chip distribution snapshot for one ``calc`` call.

    ``x`` holds the chip mass per grid level and ``y`` the level prices
    (2 decimals). ``b`` is the 1-based index of the first level at or above
    the latest close, 0 when no level qualifies.
    """

    x: Tuple[float, ...]
    y: Tuple[float, ...]
    b: int
    d: Any
    t: int
    min_price: float
    accuracy: float
    factor: int
    total_chips: float
    benefit_part: float = 0.0
    avg_cost: str = "0.00"
    percent_chips: Mapping[str, Mapping[str, Any]] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    @classmethod
    def build(
        cls,
        chips: Sequence[float],
        grid: PriceGrid,
        *,
        total_chips: float,
        current_price: float,
        last_date: Any,
        trading_days: int,
    ) -> "ChipsDistribution":
        base = cls(
            x=tuple(float(v) for v in chips),
            y=grid.prices,
            b=grid.boundary + 1,
            d=last_date,
            t=trading_days,
            min_price=grid.min_price,
            accuracy=grid.accuracy,
            factor=grid.factor,
            total_chips=total_chips,
        )
        percent_chips = {
            key: MappingProxyType(base._percent_chips(p, as_tuple=True)) for key, p in DEFAULT_PERCENTS
        }
        return replace(
            base,
            benefit_part=base.get_benefit_part(current_price),
            avg_cost=to_fixed(base.get_cost_by_chip(total_chips * 0.5)),
            percent_chips=MappingProxyType(percent_chips),
        )

    @cached_property
    def _rounded(self) -> Tuple[float, ...]:
        return tuple(to_precision(v, 12) for v in self.x)

    def level_price(self, i: int) -> float:
        return self.min_price + i * self.accuracy

    def get_cost_by_chip(self, chip: float, default: Optional[float] = 0.0) -> Optional[float]:
        """Price of the first level where the cumulative chips exceed ``chip``.

        Returns ``default`` (0 unless given) when ``chip`` is not reached.
        """
        acc = 0.0
        for i, v in enumerate(self._rounded):
            if acc + v > chip:
                return self.level_price(i)
            acc += v
        return default

    def get_benefit_part(self, price: float) -> float:
        """Fraction of chips whose cost level is at or below ``price``."""
        below = 0.0
        for i, v in enumerate(self._rounded):
            if price >= self.level_price(i):
                below += v
        return 0.0 if self.total_chips == 0 else below / self.total_chips

    def _band_cost(self, chip: float) -> float:
        cost = self.get_cost_by_chip(chip, default=None)
        if cost is not None:
            return cost
        if self.total_chips > 0 and chip >= self.total_chips:
            # 目标达到全部筹码时取最后一个有筹码的刻度
            last = max(i for i, v in enumerate(self._rounded) if v > 0)
            return self.level_price(last)
        return 0.0

    def compute_percent_chips(self, percent: float) -> Dict[str, Any]:
        """Symmetric price band holding ``percent`` of the chips, and its concentration."""
        return self._percent_chips(percent, as_tuple=False)

    def _percent_chips(self, percent: float, *, as_tuple: bool) -> Dict[str, Any]:
        if percent > 1 or percent < 0:
            raise InvalidArgumentError(f'argument "percent" out of range: {percent}', argument="percent")
        ps = ((1 - percent) / 2, (1 + percent) / 2)
        low = self._band_cost(self.total_chips * ps[0])
        high = self._band_cost(self.total_chips * ps[1])
        price_range = (to_fixed(low), to_fixed(high))
        return {
            "priceRange": price_range if as_tuple else list(price_range),
            "concentration": 0 if low + high == 0 else (high - low) / (low + high),
        }

    def to_dict(self) -> JSONDict:
        percent: Dict[str, Dict[str, Any]] = {}
        for key, v in self.percent_chips.items():
            pr: List[str] = list(v["priceRange"])
            percent[key] = {"priceRange": pr, "concentration": v["concentration"]}
        return {
            "x": list(self.x),
            "y": list(self.y),
            "b": self.b,
            "d": _render_date(self.d),
            "t": self.t,
            "benefitPart": self.benefit_part,
            "avgCost": self.avg_cost,
            "percentChips": percent,
        }
