# 简介：统一异常类型定义。包内通用错误、参数错误、K 线数据格式错误，
# 以及空计算窗口错误，用于筹码计算的标准化报错。
from __future__ import annotations

from typing import Optional


class GPChipsError(Exception):
    pass


class InvalidArgumentError(GPChipsError, ValueError):
    def __init__(self, message: str, *, argument: Optional[str] = None):
        super().__init__(message)
        self.argument = argument


class DataFormatError(GPChipsError):
    pass


class EmptyWindowError(GPChipsError):
    def __init__(self, index: int, start: int, end: int):
        super().__init__(f"计算窗口为空: index={index}, start={start}, end={end}")
        self.index = index
        self.start = start
        self.end = end
