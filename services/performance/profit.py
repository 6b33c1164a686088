"""
月度收益 / 投入产出比（ROI）计算器

核心规则（逐账户，按快照两两配对 s[i], s[i+1]）：
- 只计算连续月份（月份差 == 1），不连续的配对跳过，两侧都不产生记录
- 当月投资 = 该账户在 s[i] 月份的投入合计
- 首个快照（i == 0）收益恒为 0（没有基准）
- 其余：收益 = (s[i+1] - s[i]) - 当月投资
- ROI = 收益 / 投资（投资 > 0），否则为 0

跨账户汇总时分别累加收益与投资后重新计算 ROI，绝不平均各账户 ROI。
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from models import (
    AccountSeries,
    AssetsBreakdown,
    AssetTypeStats,
    InvestmentRecord,
    MonthlyInvestmentData,
    SnapshotData,
)
from utils.months import is_month_token, month_diff, previous_month

from . import metals, time_deposit
from .returns import return_rate
from .snapshots import (
    flatten_records,
    group_snapshots_by_account,
    investment_by_account_month,
    latest_snapshot_at_or_before,
)

logger = logging.getLogger(__name__)

RecordsByType = Mapping[str, Sequence[InvestmentRecord]]


def roi(profit: float, investment: float) -> float:
    """投入产出比；投资为 0 时定义为 0"""
    return profit / investment if investment > 0 else 0.0


def account_monthly_profit(
    account: str,
    snapshots: Sequence[SnapshotData],
    investments: Mapping[tuple, float],
) -> Dict[str, Tuple[float, float]]:
    """
    单个账户的月度收益（按连续快照配对）

    Returns:
        {month: (profit, investment)}
    """
    monthly: Dict[str, Tuple[float, float]] = {}
    for i in range(len(snapshots) - 1):
        current, following = snapshots[i], snapshots[i + 1]
        if month_diff(current.date, following.date) != 1:
            logger.debug(
                "skip gap %s: %s -> %s", account, current.date, following.date,
            )
            continue

        invested = investments.get((account, current.date), 0.0)
        if i == 0:
            profit = 0.0
        else:
            profit = (following.snapshot - current.snapshot) - invested

        p, inv = monthly.get(current.date, (0.0, 0.0))
        monthly[current.date] = (p + profit, inv + invested)
    return monthly


def _to_series(monthly: Mapping[str, Tuple[float, float]]) -> List[MonthlyInvestmentData]:
    return [
        MonthlyInvestmentData(month=m, profit=p, investment=inv, roi=roi(p, inv))
        for m, (p, inv) in sorted(monthly.items())
    ]


def _aggregate(records: List[InvestmentRecord]) -> Dict[str, Tuple[float, float]]:
    snapshots_by_account = group_snapshots_by_account(records)
    investments = investment_by_account_month(records)

    totals: Dict[str, Tuple[float, float]] = {}
    for account, snapshots in snapshots_by_account.items():
        for month, (p, inv) in account_monthly_profit(account, snapshots, investments).items():
            tp, ti = totals.get(month, (0.0, 0.0))
            totals[month] = (tp + p, ti + inv)
    return totals


def calculate_monthly_investment_data(records_by_type: RecordsByType) -> List[MonthlyInvestmentData]:
    """所有账户汇总后的月度收益、投资与 ROI（按月份升序）"""
    return _to_series(_aggregate(flatten_records(records_by_type)))


def calculate_monthly_investment_data_by_account(
    records_by_type: RecordsByType,
) -> List[AccountSeries]:
    """每个账户各自的月度收益、投资与 ROI（不跨账户汇总）"""
    records = flatten_records(records_by_type)
    investments = investment_by_account_month(records)
    return [
        AccountSeries(
            account=account,
            data=_to_series(account_monthly_profit(account, snapshots, investments)),
        )
        for account, snapshots in group_snapshots_by_account(records).items()
    ]


def calculate_overall_monthly_roi(
    records_by_type: RecordsByType,
    records_by_metal_type: Optional[metals.RecordsByMetalType] = None,
    include_metal: bool = False,
) -> List[MonthlyInvestmentData]:
    """
    整体月度 ROI

    include_metal 时，把贵金属每个记录月份的单月收益与当月购买金额
    并入同月汇总后再计算 ROI。
    """
    totals = _aggregate(flatten_records(records_by_type))

    if include_metal and records_by_metal_type:
        for month in metals.metal_months(records_by_metal_type):
            profit = sum(
                metals.calculate_monthly_accumulated_profit(records_by_metal_type, month).values()
            )
            invested = metals.month_purchase_cost(records_by_metal_type, month)
            tp, ti = totals.get(month, (0.0, 0.0))
            totals[month] = (tp + profit, ti + invested)

    return _to_series(totals)


# ═══════════════════════════════════════════════════════
#  基于资产的月度收益（资产走势 / 统计卡片）
# ═══════════════════════════════════════════════════════

def calculate_assets_for_month(
    target_month: str,
    records: Iterable[InvestmentRecord],
) -> AssetsBreakdown:
    """
    指定月末的总资产

    - 普通投资：每个账户取截至该月最新一条记录的快照；
      最新记录没有快照时取该账户累计投入
    - 定期存款：本金 + 截至该月的累计利息
    """
    upto = [r for r in records if is_month_token(r.date) and r.date <= target_month]

    by_account: Dict[str, List[InvestmentRecord]] = {}
    for r in upto:
        if not r.is_time_deposit:
            by_account.setdefault(r.account, []).append(r)

    normal = 0.0
    for account_records in by_account.values():
        latest = max(account_records, key=lambda r: r.date)
        if latest.snapshot is not None:
            normal += latest.snapshot
        else:
            normal += sum(r.amount or 0.0 for r in account_records)

    deposits = sum(
        time_deposit.current_value(r, target_month)
        for r in upto if r.is_time_deposit
    )
    return AssetsBreakdown(normal_investment_assets=normal, time_deposit_assets=deposits)


def calculate_current_month_investment(month: str, records: Iterable[InvestmentRecord]) -> float:
    """当月投资金额（所有账户、所有类型）"""
    return sum(r.amount or 0.0 for r in records if r.date == month)


def calculate_monthly_profit(month: str, records: Sequence[InvestmentRecord]) -> float:
    """月度收益 = 当月资产 - 上月资产 - 当月投资"""
    current = calculate_assets_for_month(month, records).total_assets
    previous = calculate_assets_for_month(previous_month(month), records).total_assets
    return current - previous - calculate_current_month_investment(month, records)


def calculate_asset_type_stats(
    records: Sequence[InvestmentRecord],
    month: Optional[str] = None,
) -> AssetTypeStats:
    """
    资产类型统计：累计投入、当前资产、整体收益、收益率（%）

    month 为空时取记录中的最新月份。
    """
    records = [r for r in records if is_month_token(r.date)]
    if not records:
        return AssetTypeStats(0.0, 0.0, 0.0, 0.0)
    month = month or max(r.date for r in records)
    invested = sum(r.amount or 0.0 for r in records if r.date <= month)
    assets = calculate_assets_for_month(month, records).total_assets
    profit = assets - invested
    rate = profit / invested * 100 if invested else 0.0
    return AssetTypeStats(
        total_investment=invested,
        current_assets=assets,
        total_profit=profit,
        return_rate=rate,
    )


def calculate_overall_return_rate(month: str, records: Sequence[InvestmentRecord]) -> float:
    """
    基于资产的月度收益率（%）

    收益取 calculate_monthly_profit；分母按统一规则，
    当月无投资时用各账户截至上月的最新快照之和。
    """
    invested = calculate_current_month_investment(month, records)
    previous = latest_snapshot_at_or_before(
        group_snapshots_by_account(records), previous_month(month),
    )
    return return_rate(calculate_monthly_profit(month, records), invested, previous)
