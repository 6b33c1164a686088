"""数据模型 — 输入记录 + 派生序列"""
from models.records import (
    InvestmentRecord,
    PreciousMetalRecord,
    RecordSet,
    check_record,
    check_metal_record,
)
from models.series import (
    SnapshotData,
    MonthlyInvestmentData,
    MonthlyReturnData,
    AccountSeries,
    AssetTypeSeries,
    DateRange,
    AssetsBreakdown,
    AssetTypeStats,
    MetalTypeStats,
    RiskAnalysisData,
)

__all__ = [
    "InvestmentRecord",
    "PreciousMetalRecord",
    "RecordSet",
    "check_record",
    "check_metal_record",
    "SnapshotData",
    "MonthlyInvestmentData",
    "MonthlyReturnData",
    "AccountSeries",
    "AssetTypeSeries",
    "DateRange",
    "AssetsBreakdown",
    "AssetTypeStats",
    "MetalTypeStats",
    "RiskAnalysisData",
]
