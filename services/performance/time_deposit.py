"""
定期存款计息 — 本息与月收益

不依赖快照：定期存款的价值 = 本金 + 按月累计利息。
存期、利率缺失的「定期存款」记录按零收益处理，不报错。
"""
from __future__ import annotations

from models import InvestmentRecord
from utils.months import add_months, month_diff


def monthly_interest(principal: float, annual_interest_rate: float) -> float:
    """月收益 = 本金 × (年化利率 / 100 / 12)"""
    return principal * (annual_interest_rate / 100 / 12)


def calculate_maturity_date(start_month: str, term_months: int) -> str:
    """到期月 = 起息月 + 存期月数"""
    return add_months(start_month, int(term_months))


def is_matured(start_month: str, term_months: int, target_month: str) -> bool:
    """目标月份达到或超过到期月即视为已到期"""
    return target_month >= calculate_maturity_date(start_month, term_months)


def profit_for_month(record: InvestmentRecord, target_month: str) -> float:
    """
    定期存款在指定月份产生的利息

    起息月之前、已到期（目标月 >= 到期月）均返回 0，
    因此恰好有 term 个月产生利息。
    """
    if not record.is_valid_time_deposit:
        return 0.0
    if target_month < record.date:
        return 0.0
    if is_matured(record.date, record.deposit_term_months, target_month):
        return 0.0
    return monthly_interest(record.amount, record.annual_interest_rate)


def total_profit(record: InvestmentRecord, target_month: str) -> float:
    """
    截至目标月的累计利息

    累计利息 = 月收益 × min(经过月数, 存期)，经过月数为负时按 0 计。
    到期之后不再增长。
    """
    if not record.is_valid_time_deposit:
        return 0.0
    elapsed = month_diff(record.date, target_month)
    effective = min(max(elapsed, 0), record.deposit_term_months)
    if effective <= 0:
        return 0.0
    return monthly_interest(record.amount, record.annual_interest_rate) * effective


def marginal_profit(record: InvestmentRecord, target_month: str) -> float:
    """目标月相对上月新增的累计利息（整体收益率使用）"""
    previous = add_months(target_month, -1)
    return total_profit(record, target_month) - total_profit(record, previous)


def current_value(record: InvestmentRecord, target_month: str) -> float:
    """定期存款的虚拟快照 = 本金 + 累计利息"""
    return (record.amount or 0.0) + total_profit(record, target_month)


def average_monthly_profit(record: InvestmentRecord) -> float:
    """
    平均月收益（总收益分摊到整个存期）

    总收益 = 本金 × 年化利率 × 存期年数
    """
    if not record.is_valid_time_deposit:
        return 0.0
    term = record.deposit_term_months
    total = record.amount * (record.annual_interest_rate / 100) * (term / 12)
    return total / term


def accrual_months(record: InvestmentRecord) -> list:
    """产生利息的月份列表：起息月 … 到期月前一月"""
    if not record.is_valid_time_deposit:
        return []
    return [add_months(record.date, i) for i in range(record.deposit_term_months)]
