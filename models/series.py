"""
派生序列模型 — 计算结果

全部按需从记录集合重新计算，不持久化，只以 (账户, 月份) 或 (月份) 为键。
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from config.constants import RiskLevel


@dataclass(frozen=True)
class SnapshotData:
    """单个账户某月的快照"""
    date: str
    snapshot: float


@dataclass(frozen=True)
class MonthlyInvestmentData:
    """月度收益 / 投资 / 投入产出比（roi 为比值，不乘 100）"""
    month: str
    profit: float
    investment: float
    roi: float


@dataclass(frozen=True)
class MonthlyReturnData:
    """月度收益率（return_rate 为百分比，5.2 表示 5.2%）"""
    month: str
    return_rate: float
    previous_snapshot: float
    profit: float


@dataclass(frozen=True)
class AccountSeries:
    """按账户分组的月度序列"""
    account: str
    data: List = field(default_factory=list)


@dataclass(frozen=True)
class AssetTypeSeries:
    """按资产类型分组的月度序列"""
    asset_type: str
    data: List = field(default_factory=list)


@dataclass(frozen=True)
class DateRange:
    """
    显示窗口（闭区间）

    只用于截取已计算好的结果，绝不参与计算。
    两端均为 None 表示不筛选。
    """
    start_month: Optional[str] = None
    end_month: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return not self.start_month and not self.end_month

    def contains(self, month: str) -> bool:
        if self.start_month and month < self.start_month:
            return False
        if self.end_month and month > self.end_month:
            return False
        return True


@dataclass(frozen=True)
class AssetsBreakdown:
    """某月末的资产构成（普通投资 + 定期存款本息）"""
    normal_investment_assets: float
    time_deposit_assets: float

    @property
    def total_assets(self) -> float:
        return self.normal_investment_assets + self.time_deposit_assets


@dataclass(frozen=True)
class AssetTypeStats:
    """资产类型统计卡片"""
    total_investment: float
    current_assets: float
    total_profit: float
    return_rate: float


@dataclass(frozen=True)
class MetalTypeStats:
    """贵金属类型统计卡片"""
    total_grams: float
    total_amount: float
    current_value: float
    monthly_profit: float
    total_profit: float


@dataclass(frozen=True)
class RiskAnalysisData:
    """单个风险等级的资产分布"""
    risk_level: RiskLevel
    total_assets: float
    percentage: float
    asset_types: List[str]
    asset_count: int
