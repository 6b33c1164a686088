"""定期存款计息测试。"""
from __future__ import annotations

from dataclasses import replace

import pytest

from services.performance import (
    accrual_months,
    average_monthly_profit,
    calculate_maturity_date,
    current_value,
    is_matured,
    marginal_profit,
    monthly_interest,
    profit_for_month,
    total_profit,
)


def test_monthly_interest():
    assert monthly_interest(100000, 3) == pytest.approx(250)


def test_maturity():
    assert calculate_maturity_date("2024-11", 6) == "2025-05"
    assert not is_matured("2024-01", 6, "2024-06")
    assert is_matured("2024-01", 6, "2024-07")


def test_accrual_capped_at_term(deposit):
    """24 个月后累计利息仍只有 6 个月。"""
    assert total_profit(deposit, "2024-01") == 0
    assert total_profit(deposit, "2024-04") == pytest.approx(750)
    assert total_profit(deposit, "2024-07") == pytest.approx(1500)
    assert total_profit(deposit, "2026-01") == pytest.approx(1500)
    assert total_profit(deposit, "2023-06") == 0


def test_profit_for_month_covers_exactly_term(deposit):
    assert profit_for_month(deposit, "2023-12") == 0
    assert profit_for_month(deposit, "2024-01") == pytest.approx(250)
    assert profit_for_month(deposit, "2024-06") == pytest.approx(250)
    assert profit_for_month(deposit, "2024-07") == 0
    assert len(accrual_months(deposit)) == 6


def test_marginal_profit(deposit):
    assert marginal_profit(deposit, "2024-01") == 0
    assert marginal_profit(deposit, "2024-02") == pytest.approx(250)
    assert marginal_profit(deposit, "2024-07") == pytest.approx(250)
    assert marginal_profit(deposit, "2024-08") == 0


def test_current_value_and_average(deposit):
    assert current_value(deposit, "2024-04") == pytest.approx(100750)
    assert average_monthly_profit(deposit) == pytest.approx(250)


def test_missing_term_or_rate_accrues_zero(deposit):
    """缺少存期或利率时静默按 0 处理。"""
    no_rate = replace(deposit, annual_interest_rate=None)
    no_term = replace(deposit, deposit_term_months=0)
    for r in (no_rate, no_term):
        assert total_profit(r, "2024-06") == 0
        assert profit_for_month(r, "2024-02") == 0
        assert average_monthly_profit(r) == 0
        assert accrual_months(r) == []
        assert current_value(r, "2024-06") == 100000
