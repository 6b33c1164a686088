"""
快照聚合 — 按账户分组快照并按日期排序

所有收益计算的基础。没有快照的记录不进入估值链，
但仍计入当月投资金额。
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence

from models import InvestmentRecord, SnapshotData
from utils.months import is_month_token


def flatten_records(records_by_type: Mapping[str, Sequence[InvestmentRecord]]) -> List[InvestmentRecord]:
    """按类型分组的记录 → 扁平列表（跳过月份格式不合规的记录）"""
    return [
        r for records in (records_by_type or {}).values() for r in records
        if is_month_token(r.date)
    ]


def group_snapshots_by_account(
    records: Iterable[InvestmentRecord],
) -> Dict[str, List[SnapshotData]]:
    """
    按账户分组快照数据并按日期升序排序

    月份格式不合规的记录视同没有快照。
    没有任何快照记录的账户不会出现在结果中（不是空列表），
    调用方应把「不存在」理解为「无数据」而不是「0」。

    Returns:
        {account: [SnapshotData, ...]}
    """
    by_account: Dict[str, List[SnapshotData]] = {}
    for r in records:
        if r.snapshot is None or not is_month_token(r.date):
            continue
        by_account.setdefault(r.account, []).append(
            SnapshotData(date=r.date, snapshot=r.snapshot)
        )
    for snapshots in by_account.values():
        snapshots.sort(key=lambda s: s.date)
    return by_account


def investment_by_account_month(
    records: Iterable[InvestmentRecord],
) -> Dict[tuple, float]:
    """{(account, month): 当月投资合计}，供逐对计算时查表"""
    totals: Dict[tuple, float] = {}
    for r in records:
        key = (r.account, r.date)
        totals[key] = totals.get(key, 0.0) + (r.amount or 0.0)
    return totals


def month_investment(
    records: Iterable[InvestmentRecord],
    account: str,
    month: str,
) -> float:
    """某账户某月的投资金额合计"""
    return sum(
        r.amount or 0.0 for r in records
        if r.account == account and r.date == month
    )


def latest_snapshot_at_or_before(
    snapshots_by_account: Mapping[str, Sequence[SnapshotData]],
    month: str,
) -> float:
    """各账户截至 month（含）的最新快照之和；账户在此之前没有快照则不计入"""
    total = 0.0
    for snapshots in snapshots_by_account.values():
        valid = [s for s in snapshots if s.date <= month]
        if valid:
            total += valid[-1].snapshot
    return total
