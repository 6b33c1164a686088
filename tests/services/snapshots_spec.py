"""快照聚合测试。"""
from __future__ import annotations

from models import InvestmentRecord
from services.performance import (
    group_snapshots_by_account,
    latest_snapshot_at_or_before,
    month_investment,
)


def test_group_sorts_by_date(multi_account):
    records = list(reversed(multi_account.all_records()))
    grouped = group_snapshots_by_account(records)
    assert set(grouped) == {"A", "B"}
    assert [s.date for s in grouped["A"]] == ["2024-01", "2024-02", "2024-03"]


def test_account_without_snapshot_has_no_key():
    """没有快照的账户不出现，而不是空列表。"""
    records = [
        InvestmentRecord(id="1", date="2024-01", amount=100, account="无快照", asset_type="基金"),
        InvestmentRecord(id="2", date="2024-01", amount=100, account="有快照", asset_type="基金", snapshot=100),
    ]
    grouped = group_snapshots_by_account(records)
    assert "无快照" not in grouped
    assert list(grouped) == ["有快照"]


def test_missing_snapshot_still_counts_as_investment():
    records = [
        InvestmentRecord(id="1", date="2024-02", amount=300, account="A", asset_type="股票"),
        InvestmentRecord(id="2", date="2024-02", amount=200, account="A", asset_type="股票", snapshot=900),
    ]
    assert month_investment(records, "A", "2024-02") == 500


def test_latest_snapshot_at_or_before(gap_account):
    grouped = group_snapshots_by_account(gap_account.all_records())
    assert latest_snapshot_at_or_before(grouped, "2024-03") == 1100
    assert latest_snapshot_at_or_before(grouped, "2023-12") == 0
