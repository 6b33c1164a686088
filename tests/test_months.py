"""月份令牌工具测试。"""
from __future__ import annotations

import pandas as pd
import pytest

from utils.months import (
    add_months,
    is_month_token,
    month_diff,
    month_range,
    next_month,
    parse_month,
    previous_month,
)


def test_parse_month():
    p = parse_month("2024-03")
    assert p == pd.Period("2024-03", freq="M")
    assert (p.year, p.month) == (2024, 3)


@pytest.mark.parametrize("bad", ["2024-13", "2024-3", "2024-6", "2024/03", "", None])
def test_parse_month_rejects_malformed(bad):
    """非法令牌抛出 ValueError。"""
    assert not is_month_token(bad)
    with pytest.raises(ValueError):
        parse_month(bad)


def test_month_diff_across_years():
    assert month_diff("2023-12", "2024-01") == 1
    assert month_diff("2024-01", "2024-03") == 2
    assert month_diff("2024-05", "2024-02") == -3


def test_add_months_wraps_year():
    assert add_months("2024-11", 3) == "2025-02"
    assert add_months("2024-01", -1) == "2023-12"
    assert previous_month("2024-01") == "2023-12"
    assert next_month("2024-12") == "2025-01"


def test_month_range_inclusive():
    assert month_range("2023-11", "2024-02") == ["2023-11", "2023-12", "2024-01", "2024-02"]
    assert month_range("2024-02", "2024-02") == ["2024-02"]
    assert month_range("2024-02", "2024-01") == []
