"""
整体（混合）月度收益率 — 普通投资 + 定期存款 + 贵金属

不是三个收益率的平均：先把同一月份三类资产的收益、投资、上月基数
合并，再对合计值应用一次统一分母规则。

每月步骤：
1. 普通投资收益 = 月度收益汇总（连续快照配对）；普通投资 = 当月非定存投入合计
2. 定期存款收益 = Σ(截至当月累计利息 - 截至上月累计利息)
3. 贵金属收益 = Σ 各类型单月收益
4. 总收益 = 1 + 2 + 3；总投资 = 普通投资 + 当月贵金属购买金额
   （定存本金视为一次性占用资金，不计入月度投资）
5. 上月基数 = 各账户截至上月的最新快照之和 + 上月贵金属市值（估值模式）
6. 按统一分母规则计算收益率
"""
from __future__ import annotations

import logging
from typing import Dict, List

from models import MonthlyReturnData, RecordSet
from utils.months import add_months, previous_month

from . import metals, time_deposit
from .profit import calculate_monthly_investment_data
from .returns import return_rate, select_denominator
from .snapshots import group_snapshots_by_account, latest_snapshot_at_or_before

logger = logging.getLogger(__name__)


def blended_months(record_set: RecordSet) -> List[str]:
    """
    整体收益率的月份轴

    所有记录月份 + 定期存款产生新增利息的月份（起息后第 1 … term 个月），
    后者截止到最新的记录月份。
    """
    months = set(record_set.all_months())
    if not months:
        return []
    last = max(months)
    for r in record_set.time_deposit_records():
        if not r.is_valid_time_deposit:
            continue
        for i in range(1, r.deposit_term_months + 1):
            month = add_months(r.date, i)
            if month > last:
                break
            months.add(month)
    return sorted(months)


class _BlendedContext:
    """一次整体计算的共享中间结果（只读）"""

    def __init__(self, record_set: RecordSet):
        self.ordinary = record_set.ordinary_records()
        self.deposits = record_set.time_deposit_records()
        self.metals_by_type = record_set.records_by_metal_type
        self.snapshots_by_account = group_snapshots_by_account(self.ordinary)
        self.ordinary_profit: Dict[str, float] = {
            d.month: d.profit
            for d in calculate_monthly_investment_data({"_": self.ordinary})
        }

    def components(self, month: str) -> Dict[str, float]:
        prev = previous_month(month)

        ordinary_profit = self.ordinary_profit.get(month, 0.0)
        ordinary_investment = sum(r.amount or 0.0 for r in self.ordinary if r.date == month)

        deposit_profit = sum(time_deposit.marginal_profit(r, month) for r in self.deposits)

        metal_profit = sum(
            metals.calculate_monthly_accumulated_profit(self.metals_by_type, month).values()
        )
        metal_investment = metals.month_purchase_cost(self.metals_by_type, month)

        baseline = (
            latest_snapshot_at_or_before(self.snapshots_by_account, prev)
            + metals.calculate_total_metal_value(self.metals_by_type, prev)
        )

        total_profit = ordinary_profit + deposit_profit + metal_profit
        total_investment = ordinary_investment + metal_investment
        return {
            "ordinary_profit": ordinary_profit,
            "ordinary_investment": ordinary_investment,
            "deposit_profit": deposit_profit,
            "metal_profit": metal_profit,
            "metal_investment": metal_investment,
            "total_profit": total_profit,
            "total_investment": total_investment,
            "previous_baseline": baseline,
            "denominator": select_denominator(total_investment, baseline),
            "return_rate": return_rate(total_profit, total_investment, baseline),
        }


def blended_month_components(record_set: RecordSet, month: str) -> Dict[str, float]:
    """
    单月整体收益率的全部中间量

    Returns:
        {ordinary_profit, ordinary_investment, deposit_profit, metal_profit,
         metal_investment, total_profit, total_investment,
         previous_baseline, denominator, return_rate}
    """
    return _BlendedContext(record_set).components(month)


def calculate_blended_monthly_return(record_set: RecordSet) -> List[MonthlyReturnData]:
    """
    整体月度收益率序列（始终基于完整历史计算）

    previous_snapshot 字段返回第 5 步的上月基数。
    """
    months = blended_months(record_set)
    if not months:
        return []

    ctx = _BlendedContext(record_set)
    result: List[MonthlyReturnData] = []
    for month in months:
        c = ctx.components(month)
        logger.debug(
            "blended %s: profit=%.2f (ordinary %.2f, deposit %.2f, metal %.2f) "
            "investment=%.2f baseline=%.2f rate=%.2f%%",
            month, c["total_profit"], c["ordinary_profit"], c["deposit_profit"],
            c["metal_profit"], c["total_investment"], c["previous_baseline"],
            c["return_rate"],
        )
        result.append(MonthlyReturnData(
            month=month,
            return_rate=c["return_rate"],
            previous_snapshot=c["previous_baseline"],
            profit=c["total_profit"],
        ))
    return result

