# 简介：常用类型定义。K 线 Bar（日期、开收高低、量额、振幅、换手率）
# 及其从行数组/字典构造的辅助方法。
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence

from .errors import DataFormatError

# K 线行格式：[date, open, close, high, low, volume, amount, amplitude, turnover]
ROW_FIELDS = ("date", "open", "close", "high", "low", "volume", "amount", "amplitude", "turnover")


def _num(v: Any, field: str) -> float:
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise DataFormatError(f"字段 {field} 不是数值: {v!r}") from e


def _opt_num(v: Any) -> Optional[float]:
    if v is None or v == "":
        return None
    try:
        x = float(v)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(x) else x


@dataclass(frozen=True)
class Bar:
    date: Any
    open: float
    close: float
    high: float
    low: float
    volume: float = 0.0
    amount: float = 0.0
    amplitude: float = 0.0
    # percent, 0-100; None when the source has no turnover
    turnover: Optional[float] = None

    @property
    def turnover_rate(self) -> float:
        """Turnover as a fraction capped at 1; absent turnover counts as 0."""
        t = self.turnover
        if not t or math.isnan(t):
            return 0.0
        return min(1.0, t / 100.0)

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "Bar":
        if len(row) < 5:
            raise DataFormatError(f"K 线行至少需要 date/open/close/high/low 五列: {row!r}")
        vals = list(row) + [None] * (len(ROW_FIELDS) - len(row))
        return cls(
            date=vals[0],
            open=_num(vals[1], "open"),
            close=_num(vals[2], "close"),
            high=_num(vals[3], "high"),
            low=_num(vals[4], "low"),
            volume=_opt_num(vals[5]) or 0.0,
            amount=_opt_num(vals[6]) or 0.0,
            amplitude=_opt_num(vals[7]) or 0.0,
            turnover=_opt_num(vals[8]),
        )

    @classmethod
    def from_mapping(cls, rec: Mapping[str, Any]) -> "Bar":
        missing = [k for k in ("open", "close", "high", "low") if k not in rec]
        if missing:
            raise DataFormatError(f"K 线记录缺少必要字段: {missing}")
        return cls(
            date=rec.get("date"),
            open=_num(rec["open"], "open"),
            close=_num(rec["close"], "close"),
            high=_num(rec["high"], "high"),
            low=_num(rec["low"], "low"),
            volume=_opt_num(rec.get("volume")) or 0.0,
            amount=_opt_num(rec.get("amount")) or 0.0,
            amplitude=_opt_num(rec.get("amplitude")) or 0.0,
            turnover=_opt_num(rec.get("turnover", rec.get("turnoverRate"))),
        )


JSONDict = Dict[str, Any]
