"""月份工具函数 — YYYY-MM 月份令牌的解析与加减

全系统只以「月」为粒度，不涉及日期与时区。
月份令牌可直接按字符串比较大小（"2024-02" < "2024-10"）。
加减与月份差基于 pd.Period(freq="M")。
"""
from __future__ import annotations

import re
from typing import List

import pandas as pd

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
_FORMAT = "%Y-%m"


def is_month_token(value: str) -> bool:
    """是否为合法的 YYYY-MM 月份令牌（计算引擎据此跳过不合规记录）"""
    return isinstance(value, str) and bool(_MONTH_RE.match(value))


def parse_month(value: str) -> pd.Period:
    """
    解析月份令牌

    Returns:
        pd.Period(freq="M")

    Raises:
        ValueError: 格式不是 YYYY-MM
    """
    if not is_month_token(value):
        raise ValueError(f"月份格式必须为 YYYY-MM: {value!r}")
    return pd.Period(value, freq="M")


def format_month(period: pd.Period) -> str:
    return period.strftime(_FORMAT)


def month_diff(start: str, end: str) -> int:
    """两个月份之间相差的月数（end - start，1 表示连续月份）"""
    return (parse_month(end) - parse_month(start)).n


def add_months(month: str, n: int) -> str:
    """月份加 n 个月（n 可为负）"""
    return format_month(parse_month(month) + int(n))


def previous_month(month: str) -> str:
    return add_months(month, -1)


def next_month(month: str) -> str:
    return add_months(month, 1)


def month_range(start: str, end: str) -> List[str]:
    """闭区间 [start, end] 内的所有月份；start 晚于 end 时返回空列表"""
    first, last = parse_month(start), parse_month(end)
    if first > last:
        return []
    return [format_month(p) for p in pd.period_range(first, last, freq="M")]
