"""
资产分类与计算常量 — Single Source of Truth

本文件是整个系统中关于「资产类型」「贵金属类型」「风险等级映射」的唯一定义处。
计算引擎只认这里的规范标签；中英文标签互转属于外部迁移层，不在此处理。
"""
from enum import Enum
from typing import Dict, FrozenSet, List

# ═══════════════════════════════════════════════════════
#  普通投资资产类型
# ═══════════════════════════════════════════════════════

ASSET_TYPES: List[str] = [
    "股票", "基金", "债券", "现金", "定期存款", "其他",
]

# 定期存款在 records_by_type 中的分组标签
TIME_DEPOSIT_ASSET_TYPE: str = "定期存款"


# ═══════════════════════════════════════════════════════
#  贵金属类型
# ═══════════════════════════════════════════════════════

PRECIOUS_METAL_TYPES: List[str] = [
    "黄金", "白银", "铂金", "钯金",
]


# ═══════════════════════════════════════════════════════
#  风险等级
# ═══════════════════════════════════════════════════════

class RiskLevel(str, Enum):
    """
    5 级风险等级（按 ORDER 从低到高）

    - LOW:         资本保全为主，收益稳定
    - MEDIUM_LOW:  风险较低，收益平稳
    - MEDIUM:      风险适中，收益波动
    - MEDIUM_HIGH: 风险较高，收益不确定
    - HIGH:        高风险，可能大幅亏损
    """
    LOW         = "low"
    MEDIUM_LOW  = "medium_low"
    MEDIUM      = "medium"
    MEDIUM_HIGH = "medium_high"
    HIGH        = "high"


RISK_LEVEL_ORDER: Dict[RiskLevel, int] = {
    RiskLevel.LOW:         1,
    RiskLevel.MEDIUM_LOW:  2,
    RiskLevel.MEDIUM:      3,
    RiskLevel.MEDIUM_HIGH: 4,
    RiskLevel.HIGH:        5,
}

# 资产类型 → 默认风险等级（未列出的类型按 MEDIUM 处理）
DEFAULT_ASSET_RISK_MAPPING: Dict[str, RiskLevel] = {
    # 投资类型
    "现金":     RiskLevel.LOW,
    "定期存款": RiskLevel.LOW,
    "债券":     RiskLevel.MEDIUM_LOW,
    "基金":     RiskLevel.MEDIUM,
    "股票":     RiskLevel.HIGH,
    "其他":     RiskLevel.MEDIUM,
    # 贵金属类型
    "黄金":     RiskLevel.MEDIUM,
    "白银":     RiskLevel.MEDIUM_HIGH,
    "铂金":     RiskLevel.MEDIUM_HIGH,
    "钯金":     RiskLevel.HIGH,
}

DEFAULT_RISK_LEVEL: RiskLevel = RiskLevel.MEDIUM


def get_default_risk_level(asset_type: str) -> RiskLevel:
    """获取资产类型的默认风险等级"""
    return DEFAULT_ASSET_RISK_MAPPING.get(asset_type, DEFAULT_RISK_LEVEL)


# ═══════════════════════════════════════════════════════
#  Dashboard 视图模式
# ═══════════════════════════════════════════════════════

# all: 普通投资 + 定期存款 + 贵金属；investment: 仅普通投资；metal: 仅贵金属
FILTER_TYPES: FrozenSet[str] = frozenset({"all", "investment", "metal"})

# 收益率以百分比表示（5.2 表示 5.2%）
PERCENT: float = 100.0

# 查找上月贵金属市值时最多回溯的月数
METAL_LOOKBACK_MONTHS: int = 12
