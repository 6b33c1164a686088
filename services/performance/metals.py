"""
贵金属估值 — 累计克数、累计成本、市值与收益

两种查询模式，不可混用：
- 收益模式：当月没有记录（没有当月均价）时市值按 0 处理，不沿用旧价
- 估值模式：用于资产分布/走势展示，沿用截至当月最近一次的均价（前向填充）
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from config.constants import METAL_LOOKBACK_MONTHS
from models import MetalTypeStats, PreciousMetalRecord
from utils.months import add_months, is_month_token, previous_month

logger = logging.getLogger(__name__)

RecordsByMetalType = Mapping[str, Sequence[PreciousMetalRecord]]


# ═══════════════════════════════════════════════════════
#  原子计算
# ═══════════════════════════════════════════════════════

def total_grams(records: Iterable[PreciousMetalRecord]) -> float:
    """累计购买克数"""
    return sum(r.grams for r in records)


def total_amount(records: Iterable[PreciousMetalRecord]) -> float:
    """累计购买金额（克数 × 每克购买价之和）"""
    return sum(r.cost for r in records)


def records_up_to(records: Iterable[PreciousMetalRecord], month: str) -> List[PreciousMetalRecord]:
    return [r for r in records if is_month_token(r.date) and r.date <= month]


def month_average_price(records: Iterable[PreciousMetalRecord], month: str) -> Optional[float]:
    """当月均价：取该月任意一条记录的 average_price；当月无记录返回 None"""
    for r in records:
        if r.date == month and r.average_price:
            return r.average_price
    return None


def latest_average_price(records: Iterable[PreciousMetalRecord], month: str) -> Optional[float]:
    """截至 month（含）最近一次记录的均价"""
    upto = records_up_to(records, month)
    if not upto:
        return None
    latest = upto[0]
    for r in upto[1:]:
        if r.date > latest.date:
            latest = r
    return latest.average_price or None


def market_value_for_profit(records: Sequence[PreciousMetalRecord], month: str) -> float:
    """收益模式市值 = 累计克数 × 当月均价；当月未定价返回 0"""
    price = month_average_price(records, month)
    if not price:
        return 0.0
    return total_grams(records_up_to(records, month)) * price


def metal_months(records_by_metal_type: RecordsByMetalType) -> List[str]:
    """有贵金属记录的月份（升序去重，跳过格式不合规的月份）"""
    return sorted({
        r.date
        for records in (records_by_metal_type or {}).values()
        for r in records
        if is_month_token(r.date)
    })


def month_purchase_cost(records_by_metal_type: RecordsByMetalType, month: str) -> float:
    """所有贵金属当月购买金额"""
    return sum(
        r.cost
        for records in records_by_metal_type.values()
        for r in records
        if r.date == month
    )


# ═══════════════════════════════════════════════════════
#  估值模式（前向填充）
# ═══════════════════════════════════════════════════════

def calculate_monthly_metal_values(
    records_by_metal_type: RecordsByMetalType,
    month: str,
) -> Dict[str, float]:
    """
    指定月份各贵金属类型的市值（展示用）

    当月没有记录时沿用最近一次的均价，使走势图保持上月金额而不是掉到 0。

    Returns:
        {metal_type: 市值}
    """
    result: Dict[str, float] = {}
    for metal_type, records in records_by_metal_type.items():
        upto = records_up_to(records, month)
        grams = total_grams(upto)
        if not upto or grams == 0:
            result[metal_type] = 0.0
            continue
        price = month_average_price(records, month) or latest_average_price(records, month)
        result[metal_type] = grams * (price or 0.0)
    return result


def calculate_total_metal_value(records_by_metal_type: RecordsByMetalType, month: str) -> float:
    """指定月份所有贵金属的总市值（估值模式）"""
    return sum(calculate_monthly_metal_values(records_by_metal_type, month).values())


def get_previous_month_metal_value(
    records_by_metal_type: RecordsByMetalType,
    current_month: str,
) -> float:
    """
    上月贵金属市值；上月为 0 时继续往前找，最多回溯 METAL_LOOKBACK_MONTHS 个月

    早于最早记录月份时停止，找不到返回 0。
    """
    months = metal_months(records_by_metal_type)
    if not months:
        return 0.0
    for i in range(1, METAL_LOOKBACK_MONTHS + 1):
        search = add_months(current_month, -i)
        value = calculate_total_metal_value(records_by_metal_type, search)
        if value > 0:
            return value
        if search < months[0]:
            break
    return 0.0


# ═══════════════════════════════════════════════════════
#  收益模式
# ═══════════════════════════════════════════════════════

def calculate_monthly_accumulated_profit(
    records_by_metal_type: RecordsByMetalType,
    month: str,
) -> Dict[str, float]:
    """
    指定月份各贵金属类型的单月收益

    单月收益 = 当月均价 × 当月累计克数 - 上月市值 - 当月购买金额
    上月市值 = 上月累计克数 × 上月均价（上月无记录时取此前最近一次均价）
    当月没有记录（未定价）时该类型收益为 0。

    Returns:
        {metal_type: 单月收益}
    """
    result: Dict[str, float] = {}
    prev = previous_month(month)
    for metal_type, records in records_by_metal_type.items():
        price = month_average_price(records, month)
        if not price:
            result[metal_type] = 0.0
            continue

        current_value = total_grams(records_up_to(records, month)) * price

        prev_records = records_up_to(records, prev)
        prev_price = month_average_price(records, prev)
        if not prev_price and prev_records:
            prev_price = latest_average_price(records, prev)
        previous_value = (prev_price or 0.0) * total_grams(prev_records)

        bought = total_amount(r for r in records if r.date == month)
        result[metal_type] = current_value - previous_value - bought
        logger.debug(
            "metal %s %s: value=%.2f prev=%.2f bought=%.2f",
            metal_type, month, current_value, previous_value, bought,
        )
    return result


def calculate_monthly_total_profit(
    records_by_metal_type: RecordsByMetalType,
    month: str,
) -> Dict[str, float]:
    """
    指定月份各贵金属类型的累计收益

    累计收益 = 当月均价 × 当月累计克数 - 累计购买金额；当月未定价为 0。
    """
    result: Dict[str, float] = {}
    for metal_type, records in records_by_metal_type.items():
        upto = records_up_to(records, month)
        price = month_average_price(records, month)
        if not upto or not price:
            result[metal_type] = 0.0
            continue
        result[metal_type] = price * total_grams(upto) - total_amount(upto)
    return result


# ═══════════════════════════════════════════════════════
#  统计卡片
# ═══════════════════════════════════════════════════════

def _lifetime_profit(records: Sequence[PreciousMetalRecord]) -> float:
    """整体收益 = 最新均价 × 累计克数 - 累计金额"""
    if not records:
        return 0.0
    latest = max(records, key=lambda r: r.date)
    return latest.average_price * total_grams(records) - total_amount(records)


def average_monthly_profit(records: Sequence[PreciousMetalRecord]) -> float:
    """平均月度收益 = 整体收益 / 非重复月份数量"""
    months = {r.date for r in records}
    if not months:
        return 0.0
    return _lifetime_profit(records) / len(months)


def calculate_metal_stats(
    records: Sequence[PreciousMetalRecord],
    filter_month: Optional[str] = None,
    records_by_metal_type: Optional[RecordsByMetalType] = None,
) -> MetalTypeStats:
    """
    贵金属统计（支持月份筛选）

    指定了月份和分组记录时，月度收益取该月单月收益；
    否则取平均月度收益。
    """
    if filter_month:
        filtered = records_up_to(records, filter_month)
    else:
        filtered = [r for r in records if is_month_token(r.date)]
    if not filtered:
        return MetalTypeStats(
            total_grams=0.0, total_amount=0.0, current_value=0.0,
            monthly_profit=0.0, total_profit=0.0,
        )

    grams = total_grams(filtered)
    amount = total_amount(filtered)
    latest = max(filtered, key=lambda r: r.date)
    current = latest.average_price * grams

    if filter_month and records_by_metal_type:
        monthly = sum(
            calculate_monthly_accumulated_profit(records_by_metal_type, filter_month).values()
        )
    else:
        monthly = average_monthly_profit(filtered)

    return MetalTypeStats(
        total_grams=grams,
        total_amount=amount,
        current_value=current,
        monthly_profit=monthly,
        total_profit=current - amount,
    )
