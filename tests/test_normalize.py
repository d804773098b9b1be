import math

import pandas as pd
import pytest

from gp_chips.core.errors import DataFormatError
from gp_chips.core.types import Bar
from gp_chips.tools.market_data import bars_from_frame, normalize_daily_ohlcv


def make_df(vol_col: str = "volume", with_turnover: bool = True):
    data = {
        "date": ["2024-01-03", "2024-01-01", "2024-01-02", "2024-01-02"],
        "open": [10, 9, 9.5, 9.5],
        "high": [11, 10, 10, 10],
        "low": [9, 8.5, 9, 9],
        "close": [10.5, 9.8, 9.7, 9.7],
    }
    if vol_col == "vol":
        data["vol"] = [1000, 900, 950, 950]  # hands
    else:
        data["volume"] = [100000, 90000, 95000, 95000]  # shares
    if with_turnover:
        data["turnover"] = [3.0, 2.0, 2.5, 2.5]
    return pd.DataFrame(data)


def test_normalize_sorts_and_dedups():
    out, meta = normalize_daily_ohlcv(make_df(), volume_unit="share")
    dates = list(out["date"].dt.strftime("%Y-%m-%d"))
    assert dates == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert meta["volume_unit"] == "share"
    assert meta["amount_is_estimated"] is True
    assert meta["turnover_missing"] == 0


def test_normalize_converts_hands_to_shares():
    out, meta = normalize_daily_ohlcv(make_df(vol_col="vol"), volume_unit="hand")
    assert abs(out.iloc[0]["volume"] - 900 * 100) < 1e-6
    assert meta["volume_unit_before"] == "hand"


def test_normalize_unknown_unit_raises():
    with pytest.raises(DataFormatError):
        normalize_daily_ohlcv(make_df(), volume_unit="unknown")


def test_normalize_missing_column_raises():
    df = make_df().drop(columns=["low"])
    with pytest.raises(DataFormatError):
        normalize_daily_ohlcv(df)


def test_chinese_columns_to_bars():
    df = pd.DataFrame({
        "日期": ["2024-01-02", "2024-01-03"],
        "开盘": [9.0, 10.0],
        "收盘": [11.0, 10.0],
        "最高": [12.0, 10.0],
        "最低": [8.0, 10.0],
        "成交量": [1000, 1200],
        "成交额": [10000.0, 12000.0],
        "振幅": [50.0, 0.0],
        "换手率": [50.0, 100.0],
    })
    bars = bars_from_frame(df)
    assert [b.close for b in bars] == [11.0, 10.0]
    assert bars[0].turnover == 50.0
    assert bars[1].amount == 12000.0
    assert bars[0].amplitude == 50.0
    assert bars[0].date == pd.Timestamp("2024-01-02")


def test_missing_turnover_becomes_none():
    bars = bars_from_frame(make_df(with_turnover=False))
    assert all(b.turnover is None for b in bars)
    assert all(b.turnover_rate == 0.0 for b in bars)
    _, meta = normalize_daily_ohlcv(make_df(with_turnover=False))
    assert meta["turnover_missing"] == 3


def test_bar_from_row():
    bar = Bar.from_row(["2024-01-02", "9", "11", "12", "8", "1000", "10000", "50", "3.5"])
    assert (bar.open, bar.close, bar.high, bar.low) == (9.0, 11.0, 12.0, 8.0)
    assert bar.turnover == 3.5
    short = Bar.from_row(["2024-01-02", 9, 11, 12, 8])
    assert short.turnover is None and short.volume == 0.0
    nan_turn = Bar.from_row(["2024-01-02", 9, 11, 12, 8, 1, 1, 1, math.nan])
    assert nan_turn.turnover is None


def test_bar_from_row_rejects_bad_rows():
    with pytest.raises(DataFormatError):
        Bar.from_row(["2024-01-02", 9, 11])
    with pytest.raises(DataFormatError):
        Bar.from_row(["2024-01-02", "x", 11, 12, 8])


def test_missing_volume_defaults_to_zero():
    df = make_df().drop(columns=["volume"]).rename(columns={"turnover": "turnoverRate"})
    out, meta = normalize_daily_ohlcv(df)
    assert meta["volume_missing"] is True
    assert (out["volume"] == 0.0).all()
    bars = bars_from_frame(df)
    assert [b.turnover for b in bars] == [2.0, 2.5, 3.0]
    assert all(b.volume == 0.0 for b in bars)
