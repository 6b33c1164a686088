"""
风险分布 — 按风险等级汇总当前资产
"""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from config.constants import PERCENT, RISK_LEVEL_ORDER, RiskLevel, get_default_risk_level
from models import InvestmentRecord, RecordSet, RiskAnalysisData

from . import metals, time_deposit


def _asset_type_value(records: List[InvestmentRecord], month: str) -> float:
    """
    单个资产类型截至 month 的资产

    普通投资：每个账户最新一条记录的快照（最新记录无快照则不计）
    定期存款：本金 + 累计利息
    """
    upto = [r for r in records if r.date <= month]

    latest_by_account: Dict[str, InvestmentRecord] = {}
    for r in sorted((r for r in upto if not r.is_time_deposit), key=lambda r: r.date):
        latest_by_account[r.account] = r
    normal = sum(
        r.snapshot for r in latest_by_account.values() if r.snapshot is not None
    )

    deposits = sum(
        time_deposit.current_value(r, month) for r in upto if r.is_time_deposit
    )
    return normal + deposits


def calculate_risk_distribution(
    record_set: RecordSet,
    month: str,
    mapping: Optional[Mapping[str, RiskLevel]] = None,
) -> List[RiskAnalysisData]:
    """
    计算所有资产的风险分布

    Args:
        record_set: 记录集合
        month: 估值月份（定期存款计息截止月、贵金属/快照截止月）
        mapping: 资产类型 → 风险等级；未提供或未列出的类型使用默认映射

    Returns:
        按风险等级从低到高排序，资产为 0 的等级不返回
    """
    def level_of(asset_type: str) -> RiskLevel:
        if mapping and asset_type in mapping:
            return RiskLevel(mapping[asset_type])
        return get_default_risk_level(asset_type)

    buckets: Dict[RiskLevel, dict] = {
        level: {"total": 0.0, "types": [], "count": 0} for level in RiskLevel
    }

    def add(asset_type: str, value: float, count: int) -> None:
        if value <= 0:
            return
        bucket = buckets[level_of(asset_type)]
        bucket["total"] += value
        if asset_type not in bucket["types"]:
            bucket["types"].append(asset_type)
        bucket["count"] += count

    for asset_type, records in record_set.records_by_type.items():
        if records:
            add(asset_type, _asset_type_value(list(records), month), len(records))

    for metal_type, records in record_set.records_by_metal_type.items():
        upto = metals.records_up_to(records, month)
        if not upto:
            continue
        price = metals.latest_average_price(upto, month) or 0.0
        add(metal_type, price * metals.total_grams(upto), len(records))

    grand_total = sum(b["total"] for b in buckets.values())
    result = [
        RiskAnalysisData(
            risk_level=level,
            total_assets=b["total"],
            percentage=b["total"] / grand_total * PERCENT if grand_total > 0 else 0.0,
            asset_types=list(b["types"]),
            asset_count=b["count"],
        )
        for level, b in buckets.items()
        if b["total"] > 0
    ]
    result.sort(key=lambda d: RISK_LEVEL_ORDER[d.risk_level])
    return result
