"""配置统一导出"""
from config.constants import (
    ASSET_TYPES,
    TIME_DEPOSIT_ASSET_TYPE,
    PRECIOUS_METAL_TYPES,
    RiskLevel,
    RISK_LEVEL_ORDER,
    DEFAULT_ASSET_RISK_MAPPING,
    DEFAULT_RISK_LEVEL,
    get_default_risk_level,
    FILTER_TYPES,
    PERCENT,
    METAL_LOOKBACK_MONTHS,
)
from config.settings import CACHE_TTL, configure_logging

__all__ = [
    "ASSET_TYPES",
    "TIME_DEPOSIT_ASSET_TYPE",
    "PRECIOUS_METAL_TYPES",
    "RiskLevel",
    "RISK_LEVEL_ORDER",
    "DEFAULT_ASSET_RISK_MAPPING",
    "DEFAULT_RISK_LEVEL",
    "get_default_risk_level",
    "FILTER_TYPES",
    "PERCENT",
    "METAL_LOOKBACK_MONTHS",
    "CACHE_TTL",
    "configure_logging",
]
