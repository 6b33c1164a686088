"""
Dashboard 服务 — 一次计算，多处使用

所有图表共享的基础数据在这里集中计算并缓存：
- 缓存键只有 (记录集版本, 视图模式)，显示窗口不参与
- 记录集合以下划线参数传入，不参与哈希
- 所有日期窗口都在取出缓存结果之后再截取
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional

import pandas as pd
import streamlit as st

from config import CACHE_TTL, FILTER_TYPES
from models import (
    AccountSeries,
    AssetTypeSeries,
    DateRange,
    InvestmentRecord,
    MonthlyReturnData,
    RecordSet,
    SnapshotData,
)
from services.performance import (
    calculate_assets_for_month,
    calculate_blended_monthly_return,
    calculate_monthly_accumulated_profit,
    calculate_monthly_investment_data_by_account,
    calculate_monthly_metal_values,
    calculate_monthly_profit,
    calculate_monthly_return_by_account,
    calculate_monthly_return_by_asset_type,
    calculate_overall_return_rate,
    calculate_precious_metal_monthly_returns,
    calculate_total_metal_value,
    filter_frame,
    filter_monthly_data,
    get_all_unique_months,
    group_snapshots_by_account,
    latest_snapshot_at_or_before,
)
from utils.months import previous_month

logger = logging.getLogger(__name__)


class CacheKey(NamedTuple):
    """基础数据的缓存键（显示窗口不在其中）"""
    version: str
    filter_type: str = "all"


@dataclass
class BaseDashboardData:
    """Dashboard 所有图表共享的基础计算结果（始终基于完整历史）"""
    all_months: List[str] = field(default_factory=list)

    # 普通投资
    monthly_profits: Dict[str, float] = field(default_factory=dict)
    return_by_account: List[AccountSeries] = field(default_factory=list)
    return_by_asset_type: List[AssetTypeSeries] = field(default_factory=list)
    roi_by_account: List[AccountSeries] = field(default_factory=list)
    snapshots_by_account: Dict[str, List[SnapshotData]] = field(default_factory=dict)
    time_deposit_records: List[InvestmentRecord] = field(default_factory=list)

    # 月度资产：总资产含贵金属，投资资产不含
    monthly_total_assets: Dict[str, float] = field(default_factory=dict)
    monthly_investment_assets: Dict[str, float] = field(default_factory=dict)

    # 贵金属
    monthly_metal_values: Dict[str, Dict[str, float]] = field(default_factory=dict)
    monthly_metal_profits: Dict[str, Dict[str, float]] = field(default_factory=dict)
    metal_returns: List[MonthlyReturnData] = field(default_factory=list)

    # 整体收益率（all: 混合；investment: 基于资产；metal: 空）
    overall_returns: List[MonthlyReturnData] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.all_months


def _asset_based_returns(records: List[InvestmentRecord], months: List[str],
                         monthly_profits: Dict[str, float]) -> List[MonthlyReturnData]:
    """普通投资模式的整体收益率：基于月末资产差额"""
    snapshots = group_snapshots_by_account(records)
    return [
        MonthlyReturnData(
            month=month,
            return_rate=calculate_overall_return_rate(month, records),
            previous_snapshot=latest_snapshot_at_or_before(snapshots, previous_month(month)),
            profit=monthly_profits.get(month, 0.0),
        )
        for month in months
    ]


def _pivot(series: List[AccountSeries], value_field: str) -> Optional[pd.DataFrame]:
    """按账户分组的序列 → 月份 × 账户 透视表，缺失月份为 NaN"""
    if not series:
        return None
    months = get_all_unique_months(series)
    df = pd.DataFrame(
        {g.account: {d.month: getattr(d, value_field) for d in g.data} for g in series},
        index=months,
    )
    df.index.name = "month"
    return df


class DashboardService:
    """
    Dashboard 服务

    所有方法为 @staticmethod；compute_base_data 按 CacheKey 缓存。
    """

    @staticmethod
    @st.cache_data(ttl=CACHE_TTL)
    def compute_base_data(key: CacheKey, _record_set: RecordSet) -> BaseDashboardData:
        """
        计算所有基础数据

        Args:
            key: CacheKey(version, filter_type)，唯一参与哈希的参数
            _record_set: 完整记录集合（不参与哈希）

        Returns:
            BaseDashboardData；出错时直接抛出，异常结果不进入缓存
        """
        return DashboardService._build(key.filter_type, _record_set)

    @staticmethod
    def _build(filter_type: str, record_set: RecordSet) -> BaseDashboardData:
        records = record_set.all_records()
        by_type = record_set.records_by_type
        by_metal = record_set.records_by_metal_type
        months = record_set.all_months()
        include_investment = filter_type in ("all", "investment")
        include_metal = filter_type in ("all", "metal")

        data = BaseDashboardData(all_months=months)

        # ── 普通投资 ──
        if include_investment:
            data.monthly_profits = {m: calculate_monthly_profit(m, records) for m in months}
            data.return_by_account = calculate_monthly_return_by_account(by_type)
            data.return_by_asset_type = calculate_monthly_return_by_asset_type(by_type)
            data.roi_by_account = calculate_monthly_investment_data_by_account(by_type)
            data.snapshots_by_account = group_snapshots_by_account(records)
            data.time_deposit_records = record_set.time_deposit_records()

        # ── 月度资产 ──
        for month in months:
            invested = calculate_assets_for_month(month, records).total_assets if include_investment else 0.0
            metal = calculate_total_metal_value(by_metal, month) if include_metal else 0.0
            data.monthly_investment_assets[month] = invested
            data.monthly_total_assets[month] = invested + metal

        # ── 贵金属 ──
        if include_metal and by_metal:
            for month in months:
                data.monthly_metal_values[month] = calculate_monthly_metal_values(by_metal, month)
                data.monthly_metal_profits[month] = calculate_monthly_accumulated_profit(by_metal, month)
            data.metal_returns = calculate_precious_metal_monthly_returns(by_metal)

        # ── 整体收益率 ──
        if filter_type == "all":
            data.overall_returns = calculate_blended_monthly_return(record_set)
        elif filter_type == "investment":
            investment_months = sorted({r.date for r in records})
            data.overall_returns = _asset_based_returns(
                records, investment_months, data.monthly_profits,
            )

        logger.debug(
            "dashboard base data: %s months, %s accounts, mode=%s",
            len(months), len(data.snapshots_by_account), filter_type,
        )
        return data

    @staticmethod
    def load(record_set: RecordSet, filter_type: str = "all") -> BaseDashboardData:
        """
        按记录集版本取基础数据（命中缓存时不重新计算）

        计算出错时记录日志并返回空结构，下次调用会重新计算。
        """
        if filter_type not in FILTER_TYPES:
            raise ValueError(f"未知的视图模式: {filter_type!r}")
        key = CacheKey(record_set.version, filter_type)
        try:
            return DashboardService.compute_base_data(key, record_set)
        except Exception:
            logger.exception("dashboard base data failed (version=%s)", key.version)
            return BaseDashboardData()

    @staticmethod
    def overall_return_series(
        record_set: RecordSet,
        date_range: Optional[DateRange] = None,
        filter_type: str = "all",
    ) -> Optional[List[MonthlyReturnData]]:
        """
        整体收益率走势

        Returns:
            窗口内的月度收益率；贵金属模式不显示收益率，返回 None
        """
        if filter_type == "metal":
            return None
        base = DashboardService.load(record_set, filter_type)
        return filter_monthly_data(base.overall_returns, date_range)

    @staticmethod
    def monthly_profit_frame(
        record_set: RecordSet,
        date_range: Optional[DateRange] = None,
        filter_type: str = "all",
    ) -> Optional[pd.DataFrame]:
        """
        月度收益与月末资产

        Returns:
            DataFrame(month, profit, total_assets, investment_assets) 或 None
        """
        base = DashboardService.load(record_set, filter_type)
        if base.is_empty:
            return None
        df = pd.DataFrame({
            "month": base.all_months,
            "profit": [base.monthly_profits.get(m, 0.0) for m in base.all_months],
            "total_assets": [base.monthly_total_assets.get(m, 0.0) for m in base.all_months],
            "investment_assets": [base.monthly_investment_assets.get(m, 0.0) for m in base.all_months],
        })
        return filter_frame(df, date_range).reset_index(drop=True)

    @staticmethod
    def roi_frame_by_account(
        record_set: RecordSet,
        date_range: Optional[DateRange] = None,
    ) -> Optional[pd.DataFrame]:
        """各账户月度 ROI 透视表（index=month，columns=account）"""
        base = DashboardService.load(record_set, "investment")
        df = _pivot(base.roi_by_account, "roi")
        return filter_frame(df, date_range, column=None)

    @staticmethod
    def return_frame_by_account(
        record_set: RecordSet,
        date_range: Optional[DateRange] = None,
    ) -> Optional[pd.DataFrame]:
        """各账户月度收益率透视表（%）"""
        base = DashboardService.load(record_set, "investment")
        df = _pivot(base.return_by_account, "return_rate")
        return filter_frame(df, date_range, column=None)

    @staticmethod
    def clear_cache() -> None:
        """记录集合变化后由调用方触发（版本号变化时无需调用）"""
        DashboardService.compute_base_data.clear()
