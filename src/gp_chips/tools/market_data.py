# 简介：工具 - 日线 K 线标准化，将常见数据源列名（含中文列名）统一为
# 筹码计算所需的 schema，并转换为 Bar 列表。
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple
import math
import pandas as pd

from ..core.errors import DataFormatError
from ..core.types import Bar

# Rename common variants
RENAME_MAP = {
    "日期": "date",
    "trade_date": "date",
    "开盘": "open",
    "最高": "high",
    "最低": "low",
    "收盘": "close",
    "成交量": "volume",
    "vol": "volume",  # typical provider hands
    "成交额": "amount",
    "振幅": "amplitude",
    "换手率": "turnover",
    "turnover_rate": "turnover",
    "turn": "turnover",
    "turnoverRate": "turnover",
}

NUMERIC_COLS = ["open", "high", "low", "close", "volume"]


def normalize_daily_ohlcv(df: pd.DataFrame, *, volume_unit: Optional[str] = None) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    """Normalize raw daily K-line data for chip calculation.

    - Required columns: date, open, high, low, close
    - Optional: volume (0 when absent; chips do not use it), amount, amplitude,
      turnover (percent, 0-100)
    - date: pandas datetime, ascending, unique (drop duplicates keeping last)
    - volume: unified to shares; 'hand' units are converted x100
    - amount: if missing, estimate via vwap_day=((H+L+C)/3) * volume
    Returns: (df_norm, meta)
    meta includes: volume_unit='share', volume_missing, amount_is_estimated, turnover_missing
    """
    if df is None or not isinstance(df, pd.DataFrame):
        raise DataFormatError("normalize_daily_ohlcv: df 不能为空")

    src = df.copy()
    meta: Dict[str, Any] = {}

    for k, v in RENAME_MAP.items():
        if k in src.columns and v not in src.columns:
            src[v] = src[k]

    required = ["date", "open", "high", "low", "close"]
    missing = [c for c in required if c not in src.columns]
    if missing:
        raise DataFormatError(f"原始数据缺少必要列: {missing}")
    meta["volume_missing"] = "volume" not in src.columns
    if meta["volume_missing"]:
        src["volume"] = 0.0

    try:
        src["date"] = pd.to_datetime(src["date"])
    except (ValueError, TypeError):
        src["date"] = pd.to_datetime(src["date"].astype(str), errors="coerce")
    if src["date"].isna().any():
        raise DataFormatError("存在无效日期，无法标准化")

    src = src.drop_duplicates(subset=["date"], keep="last").sort_values("date").reset_index(drop=True)

    unit = (df.attrs.get("volume_unit") if isinstance(df.attrs, dict) else None) or volume_unit or "share"
    unit = str(unit).lower()
    if unit not in {"hand", "share"}:
        raise DataFormatError("未知的成交量单位，请传入 volume_unit=hand|share")

    for col in NUMERIC_COLS:
        src[col] = pd.to_numeric(src[col], errors="coerce")
    if src[NUMERIC_COLS].isna().any().any():
        raise DataFormatError("存在空值：open/high/low/close/volume，无法标准化")

    if unit == "hand":
        src["volume"] = src["volume"].astype(float) * 100.0
        meta["volume_unit_before"] = "hand"
    meta["volume_unit"] = "share"

    amount_is_estimated = False
    vwap = (src["high"] + src["low"] + src["close"]) / 3.0
    if "amount" not in src.columns:
        src["amount"] = src["volume"].astype(float) * vwap.astype(float)
        amount_is_estimated = True
    else:
        src["amount"] = pd.to_numeric(src["amount"], errors="coerce")
        if src["amount"].isna().any():
            src["amount"] = src["amount"].fillna(src["volume"].astype(float) * vwap.astype(float))
            amount_is_estimated = True
    meta["amount_is_estimated"] = bool(amount_is_estimated)

    if "amplitude" in src.columns:
        src["amplitude"] = pd.to_numeric(src["amplitude"], errors="coerce").fillna(0.0)
    else:
        prev_close = src["close"].shift(1)
        src["amplitude"] = ((src["high"] - src["low"]) / prev_close * 100.0).fillna(0.0)

    # turnover stays NaN where unknown; the distributor treats it as zero
    if "turnover" in src.columns:
        src["turnover"] = pd.to_numeric(src["turnover"], errors="coerce")
    else:
        src["turnover"] = float("nan")
    meta["turnover_missing"] = int(src["turnover"].isna().sum())

    src.attrs.update(meta)
    return src, meta


def bars_from_frame(df: pd.DataFrame, *, volume_unit: Optional[str] = None) -> List[Bar]:
    norm, _ = normalize_daily_ohlcv(df, volume_unit=volume_unit)
    bars: List[Bar] = []
    for row in norm.itertuples(index=False):
        t = float(row.turnover)
        bars.append(
            Bar(
                date=row.date,
                open=float(row.open),
                close=float(row.close),
                high=float(row.high),
                low=float(row.low),
                volume=float(row.volume),
                amount=float(row.amount),
                amplitude=float(row.amplitude),
                turnover=None if math.isnan(t) else t,
            )
        )
    return bars
