"""
月度收益率计算器

收益率 = 收益 / 基数 × 100，区别于 ROI（收益 / 投入）。

统一分母规则（本模块与整体收益率共用）：
- 当月有投资（> 0）：分母 = 当月投资
- 当月无投资：分母 = 上月快照
- 分母为 0：收益率定义为 0

首个快照：上月快照视为 0，收益 = 快照 - 当月投资，
收益率 = 收益 / 当月投资 × 100（无投资为 0）。
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from config.constants import PERCENT, TIME_DEPOSIT_ASSET_TYPE
from models import (
    AccountSeries,
    AssetTypeSeries,
    InvestmentRecord,
    MonthlyReturnData,
    SnapshotData,
)
from utils.months import add_months, month_diff

from . import metals
from .snapshots import (
    flatten_records,
    group_snapshots_by_account,
    investment_by_account_month,
)

logger = logging.getLogger(__name__)

RecordsByType = Mapping[str, Sequence[InvestmentRecord]]


# ═══════════════════════════════════════════════════════
#  分母规则
# ═══════════════════════════════════════════════════════

def select_denominator(investment: float, previous_value: float) -> float:
    """当月有投资用当月投资，无投资用上月快照"""
    return investment if investment > 0 else previous_value


def return_rate(profit: float, investment: float, previous_value: float) -> float:
    """按统一分母规则计算收益率（百分比）"""
    denominator = select_denominator(investment, previous_value)
    if denominator <= 0:
        return 0.0
    return profit / denominator * PERCENT


# ═══════════════════════════════════════════════════════
#  按账户
# ═══════════════════════════════════════════════════════

class _MonthTotals:
    """单月累加器：收益 / 投资 / 上月快照"""
    __slots__ = ("profit", "investment", "previous")

    def __init__(self):
        self.profit = 0.0
        self.investment = 0.0
        self.previous = 0.0

    def add(self, profit: float, investment: float, previous: float) -> None:
        self.profit += profit
        self.investment += investment
        self.previous += previous

    def to_return(self, month: str) -> MonthlyReturnData:
        return MonthlyReturnData(
            month=month,
            return_rate=return_rate(self.profit, self.investment, self.previous),
            previous_snapshot=self.previous,
            profit=self.profit,
        )


def account_return_points(
    account: str,
    snapshots: Sequence[SnapshotData],
    investments: Mapping[tuple, float],
) -> List[dict]:
    """
    单个账户的收益率原始数据点

    Returns:
        [{month, profit, investment, previous}, ...]，
        首个快照一条 + 每对连续快照一条（记在后一个月份）
    """
    if not snapshots:
        return []

    first = snapshots[0]
    first_investment = investments.get((account, first.date), 0.0)
    points = [{
        "month": first.date,
        "profit": first.snapshot - first_investment,
        "investment": first_investment,
        "previous": 0.0,
    }]

    for i in range(len(snapshots) - 1):
        previous, current = snapshots[i], snapshots[i + 1]
        if month_diff(previous.date, current.date) != 1:
            continue
        invested = investments.get((account, current.date), 0.0)
        points.append({
            "month": current.date,
            "profit": (current.snapshot - previous.snapshot) - invested,
            "investment": invested,
            "previous": previous.snapshot,
        })
    return points


def _points_to_returns(points: Iterable[dict]) -> List[MonthlyReturnData]:
    totals: Dict[str, _MonthTotals] = {}
    for p in points:
        totals.setdefault(p["month"], _MonthTotals()).add(
            p["profit"], p["investment"], p["previous"],
        )
    return [totals[m].to_return(m) for m in sorted(totals)]


def calculate_monthly_return_by_account(records_by_type: RecordsByType) -> List[AccountSeries]:
    """每个账户的月度收益率；没有数据点的账户不出现"""
    records = flatten_records(records_by_type)
    investments = investment_by_account_month(records)

    result: List[AccountSeries] = []
    for account, snapshots in group_snapshots_by_account(records).items():
        data = _points_to_returns(account_return_points(account, snapshots, investments))
        if data:
            result.append(AccountSeries(account=account, data=data))
    return result


def calculate_overall_monthly_return(records_by_type: RecordsByType) -> List[MonthlyReturnData]:
    """
    整体月度收益率（普通投资）

    先汇总所有账户当月的收益、投资、上月快照，再对合计值应用一次分母规则。
    """
    records = flatten_records(records_by_type)
    investments = investment_by_account_month(records)
    points: List[dict] = []
    for account, snapshots in group_snapshots_by_account(records).items():
        points.extend(account_return_points(account, snapshots, investments))
    return _points_to_returns(points)


# ═══════════════════════════════════════════════════════
#  按资产类型
# ═══════════════════════════════════════════════════════

def _is_time_deposit_group(asset_type: str, records: Sequence[InvestmentRecord]) -> bool:
    if asset_type == TIME_DEPOSIT_ASSET_TYPE:
        return True
    return bool(records) and all(r.is_time_deposit for r in records)


def calculate_time_deposit_returns(records: Iterable[InvestmentRecord]) -> List[MonthlyReturnData]:
    """
    定期存款月度收益率 = 年化利率 / 12

    从起息月到到期月前一月逐月生成；同月多笔存款的收益率相加。
    存期或利率缺失的记录跳过。
    """
    by_month: Dict[str, float] = {}
    for r in records:
        if not r.is_valid_time_deposit:
            continue
        rate = r.annual_interest_rate / 12
        for i in range(r.deposit_term_months):
            month = add_months(r.date, i)
            by_month[month] = by_month.get(month, 0.0) + rate
        logger.debug(
            "time deposit %s %s: %s months at %.4f%%/month",
            r.account, r.date, r.deposit_term_months, rate,
        )
    return [
        MonthlyReturnData(month=m, return_rate=by_month[m], previous_snapshot=0.0, profit=0.0)
        for m in sorted(by_month)
    ]


def calculate_monthly_return_by_asset_type(records_by_type: RecordsByType) -> List[AssetTypeSeries]:
    """
    每个资产类型的月度收益率

    普通类型按账户计算后在类型内汇总；定期存款类型用利率序列。
    """
    result: List[AssetTypeSeries] = []
    for asset_type, records in (records_by_type or {}).items():
        if not records:
            continue

        if _is_time_deposit_group(asset_type, records):
            data = calculate_time_deposit_returns(records)
        else:
            data = calculate_overall_monthly_return({asset_type: records})

        if data:
            result.append(AssetTypeSeries(asset_type=asset_type, data=data))
    return result


# ═══════════════════════════════════════════════════════
#  贵金属
# ═══════════════════════════════════════════════════════

def calculate_precious_metal_monthly_returns(
    records_by_metal_type: metals.RecordsByMetalType,
) -> List[MonthlyReturnData]:
    """
    贵金属月度收益率 = 单月收益 / 当月购买金额 × 100

    只在有贵金属记录的月份产生数据点。
    """
    months = metals.metal_months(records_by_metal_type)
    result: List[MonthlyReturnData] = []
    for month in months:
        invested = metals.month_purchase_cost(records_by_metal_type, month)
        profit = sum(
            metals.calculate_monthly_accumulated_profit(records_by_metal_type, month).values()
        )
        rate = profit / invested * PERCENT if invested > 0 else 0.0
        result.append(MonthlyReturnData(
            month=month, return_rate=rate, previous_snapshot=0.0, profit=profit,
        ))
    return result


# ═══════════════════════════════════════════════════════
#  月份轴对齐
# ═══════════════════════════════════════════════════════

def get_all_unique_months(series: Iterable) -> List[str]:
    """从按账户/类型分组的序列中提取所有唯一月份（升序）"""
    months = set()
    for group in series:
        months.update(d.month for d in group.data)
    return sorted(months)


def align_to_months(
    data: Sequence,
    months: Sequence[str],
    field: str = "return_rate",
) -> List[Dict[str, Optional[float]]]:
    """把单个序列对齐到统一月份轴，缺失月份填 None"""
    values = {d.month: getattr(d, field) for d in data}
    return [{"month": m, field: values.get(m)} for m in months]
