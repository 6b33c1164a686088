"""月度收益 / ROI 计算测试。"""
from __future__ import annotations

import pytest

from models import InvestmentRecord, RecordSet
from services.performance import (
    calculate_asset_type_stats,
    calculate_assets_for_month,
    calculate_monthly_investment_data,
    calculate_monthly_investment_data_by_account,
    calculate_monthly_profit,
    calculate_overall_monthly_roi,
    calculate_overall_return_rate,
)


def test_simple_3_month_end_to_end(simple_3_month):
    """首月收益为 0，第二个月收益 = 1000 - 10000。"""
    data = calculate_monthly_investment_data(simple_3_month.records_by_type)
    assert [d.month for d in data] == ["2024-01", "2024-02"]
    assert data[0].profit == 0
    assert data[0].investment == 10000
    assert data[0].roi == 0
    assert data[1].profit == -9000
    assert data[1].roi == pytest.approx(-0.9)


def test_gap_produces_no_entry(gap_account):
    """02 → 04 不连续：两侧都不产生记录，之后的连续配对照常计算。"""
    data = calculate_monthly_investment_data(gap_account.records_by_type)
    assert [d.month for d in data] == ["2024-01", "2024-04"]
    assert data[1].profit == 50


def test_aggregate_sums_before_roi(multi_account):
    """跨账户先累加收益与投资，再计算 ROI。"""
    data = {d.month: d for d in calculate_monthly_investment_data(multi_account.records_by_type)}
    assert data["2024-01"].profit == 0
    assert data["2024-01"].investment == 3000
    assert data["2024-02"].profit == -200
    assert data["2024-02"].investment == 500
    assert data["2024-02"].roi == pytest.approx(-0.4)


def test_by_account(multi_account):
    series = {s.account: s.data for s in calculate_monthly_investment_data_by_account(
        multi_account.records_by_type)}
    assert series["A"][1].profit == -400
    assert series["A"][1].roi == pytest.approx(-0.8)
    assert series["B"][1].profit == 200
    assert series["B"][1].roi == 0


def test_single_snapshot_account_has_empty_series():
    rs = RecordSet.from_records([
        InvestmentRecord(id="1", date="2024-01", amount=100, account="单月", asset_type="基金", snapshot=100),
    ])
    assert calculate_monthly_investment_data(rs.records_by_type) == []


def test_overall_roi_with_metal(mixed):
    """并入贵金属单月收益与购买金额后重新计算 ROI。"""
    data = {
        d.month: d for d in calculate_overall_monthly_roi(
            mixed.records_by_type, mixed.records_by_metal_type, include_metal=True,
        )
    }
    assert data["2024-01"].investment == 14000
    assert data["2024-02"].profit == pytest.approx(-8900)
    assert data["2024-02"].investment == pytest.approx(10410)
    assert data["2024-02"].roi == pytest.approx(-8900 / 10410)


def test_overall_roi_without_metal_ignores_metals(mixed):
    data = calculate_overall_monthly_roi(mixed.records_by_type, mixed.records_by_metal_type)
    assert [d.profit for d in data] == [0, -9000]


def test_assets_for_month_includes_deposit_interest(mixed):
    assets = calculate_assets_for_month("2024-03", mixed.all_records())
    assert assets.normal_investment_assets == 12000
    assert assets.time_deposit_assets == pytest.approx(100500)
    assert assets.total_assets == pytest.approx(112500)


def test_asset_based_monthly_profit(simple_3_month):
    records = simple_3_month.all_records()
    assert calculate_monthly_profit("2024-01", records) == 0
    assert calculate_monthly_profit("2024-02", records) == -9000
    assert calculate_overall_return_rate("2024-02", records) == pytest.approx(-90)


def test_asset_based_rate_uses_previous_snapshot_without_investment(gap_account):
    """当月无投资时分母为上月快照。"""
    records = gap_account.all_records()
    assert calculate_overall_return_rate("2024-02", records) == pytest.approx(10)


def test_asset_type_stats(simple_3_month):
    stats = calculate_asset_type_stats(simple_3_month.all_records())
    assert stats.total_investment == 30000
    assert stats.current_assets == 12000
    assert stats.total_profit == -18000
    assert stats.return_rate == pytest.approx(-60)
    assert calculate_asset_type_stats([]).total_investment == 0


def test_malformed_month_is_skipped(simple_3_month, malformed_records):
    """单条月份格式不合规的记录被跳过，其他月份结果不变。"""
    bad_records, _ = malformed_records
    raw = {"股票": simple_3_month.records_by_type["股票"] + (bad_records[0],)}
    expected = calculate_monthly_investment_data(simple_3_month.records_by_type)
    assert calculate_monthly_investment_data(raw) == expected
    assert calculate_monthly_investment_data_by_account(raw)[0].data == expected

    records = list(raw["股票"])
    assert calculate_assets_for_month("2024-03", records).total_assets == 12000
    assert calculate_asset_type_stats(records).total_investment == 30000
