# src/gp_chips/core/config.py
"""
筹码分布计算配置（环境变量 -> 不可变配置对象）。

- accuracy_factor：价格网格刻度数（纵轴精度），默认 150，至少为 2；
- range：当前 K 线之后、计算窗口之前排除的 K 线条数；
- trading_days：计算筹码分布所用的交易天数（窗口长度）。
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import InvalidArgumentError

DEFAULT_ACCURACY_FACTOR = 150
DEFAULT_RANGE = 0
DEFAULT_TRADING_DAYS = 120


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    try:
        return int(v.strip())
    except ValueError as e:
        raise InvalidArgumentError(f"环境变量 {name} 不是整数: {v!r}", argument=name) from e


@dataclass(frozen=True)
class ChipConfig:
    accuracy_factor: int = DEFAULT_ACCURACY_FACTOR
    range: int = DEFAULT_RANGE
    trading_days: int = DEFAULT_TRADING_DAYS

    def __post_init__(self) -> None:
        if self.accuracy_factor is None or int(self.accuracy_factor) < 2:
            raise InvalidArgumentError(
                f"accuracy_factor 至少为 2: {self.accuracy_factor}", argument="accuracy_factor"
            )
        if int(self.trading_days) < 0:
            raise InvalidArgumentError(
                f"trading_days 不能为负: {self.trading_days}", argument="trading_days"
            )
        object.__setattr__(self, "accuracy_factor", int(self.accuracy_factor))
        object.__setattr__(self, "range", int(self.range))
        object.__setattr__(self, "trading_days", int(self.trading_days))


def load_config() -> ChipConfig:
    """读取环境变量并做校验。"""
    return ChipConfig(
        accuracy_factor=_env_int("GP_CHIP_ACCURACY_FACTOR", DEFAULT_ACCURACY_FACTOR),
        range=_env_int("GP_CHIP_RANGE", DEFAULT_RANGE),
        trading_days=_env_int("GP_CHIP_TRADING_DAYS", DEFAULT_TRADING_DAYS),
    )
