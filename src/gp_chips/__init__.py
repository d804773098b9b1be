# 简介：gp_chips 包初始化，声明版本并导出筹码分布计算的主要入口。
"""gp_chips: chip (cost-basis) distribution for daily K-line windows.

Typical use::

    from gp_chips import ChipsDistributionCalculator, ChipConfig

    calc = ChipsDistributionCalculator(bars, ChipConfig(trading_days=120))
    dist = calc.calc(len(bars) - 1)
    dist.avg_cost, dist.benefit_part, dist.percent_chips["90"]
"""

from .chips.calculator import ChipsDistributionCalculator, chips_dis_cal
from .chips.result import ChipsDistribution
from .core.config import ChipConfig, load_config
from .core.errors import DataFormatError, EmptyWindowError, GPChipsError, InvalidArgumentError
from .core.types import Bar

__all__ = [
    "__version__",
    "Bar",
    "ChipConfig",
    "ChipsDistribution",
    "ChipsDistributionCalculator",
    "DataFormatError",
    "EmptyWindowError",
    "GPChipsError",
    "InvalidArgumentError",
    "chips_dis_cal",
    "load_config",
]

__version__ = "0.1.0"
