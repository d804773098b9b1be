import pandas as pd
import pytest

from gp_chips import Bar, ChipConfig, ChipsDistributionCalculator, DataFormatError, EmptyWindowError, chips_dis_cal


def make_bars(n=10):
    return [
        Bar(f"2024-01-{i + 1:02d}", 10 + i, 10.5 + i, 11 + i, 9.5 + i, turnover=10.0)
        for i in range(n)
    ]


def test_calc_uses_window_ending_at_index():
    bars = make_bars()
    dist = ChipsDistributionCalculator(bars, ChipConfig(accuracy_factor=20, trading_days=3)).calc(5)
    assert dist.d == bars[5].date
    # window is bars[3:6]
    assert dist.min_price == bars[3].low
    assert dist.t == 3


def test_calc_range_excludes_tail():
    bars = make_bars()
    dist = ChipsDistributionCalculator(bars, ChipConfig(accuracy_factor=20, range=2, trading_days=3)).calc(9)
    assert dist.d == bars[7].date
    assert dist.min_price == bars[5].low


def test_calc_end_zero_takes_latest_bars():
    bars = make_bars()
    dist = ChipsDistributionCalculator(bars, ChipConfig(accuracy_factor=20, range=2, trading_days=3)).calc(1)
    assert dist.d == bars[-1].date
    assert dist.min_price == bars[7].low


def test_calc_empty_window_raises():
    calc = ChipsDistributionCalculator(make_bars(), ChipConfig(trading_days=5))
    with pytest.raises(EmptyWindowError) as ei:
        calc.calc(2)
    assert (ei.value.start, ei.value.end) == (-2, 3)


def test_calc_accepts_rows_and_mappings():
    rows = [
        ["2024-01-02", 9, 11, 12, 8, 1000, 10000, 50, 50],
        ["2024-01-03", 10, 10, 10, 10, 1200, 12000, 0, 100],
    ]
    calc = chips_dis_cal(rows, None, 0, 2)
    assert calc.config.accuracy_factor == 150
    dist = calc.calc(1)
    assert dist.factor == 150
    assert dist.d == "2024-01-03"

    recs = [dict(zip(["date", "open", "close", "high", "low", "turnover"], r[:5] + [r[8]])) for r in rows]
    dist2 = chips_dis_cal(recs, 150, 0, 2).calc(1)
    assert dist2.x == dist.x


def test_calc_accepts_dataframe():
    df = pd.DataFrame({
        "date": ["2024-01-03", "2024-01-02"],
        "open": [10, 9],
        "close": [10, 11],
        "high": [10, 12],
        "low": [10, 8],
        "volume": [1200, 1000],
        "turnover": [100, 50],
    })
    dist = ChipsDistributionCalculator(df, ChipConfig(accuracy_factor=5, trading_days=2)).calc(1)
    assert dist.x == (0.0, 0.0, 2.0, 0.0, 0.0)
    assert dist.to_dict()["d"] == "2024-01-03"


def test_calc_rejects_unknown_records():
    with pytest.raises(DataFormatError):
        ChipsDistributionCalculator([object()])


def test_calc_is_repeatable():
    calc = ChipsDistributionCalculator(make_bars(), ChipConfig(accuracy_factor=30, trading_days=5))
    assert calc.calc(8) == calc.calc(8)


def test_calc_reads_turnover_rate_alias():
    recs = [{"date": "2024-01-02", "open": 9, "close": 11, "high": 12, "low": 8, "turnoverRate": 100}]
    dist = chips_dis_cal(recs, 5, 0, 1).calc(0)
    assert dist.total_chips == 1.0
    assert dist.x == (0.0, 0.25, 0.5, 0.25, 0.0)
