"""
持仓记录模型 — 计算引擎的只读输入

- InvestmentRecord:     普通投资（含定期存款）的月度投入/快照记录
- PreciousMetalRecord:  贵金属单笔购买记录
- RecordSet:            某一时刻的完整记录集合（按类型分组 + 版本号）

所有模型都是 frozen dataclass，计算函数只读不写。
记录的增删改、持久化与迁移由外部存储负责。
"""
from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from utils.months import add_months, is_month_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvestmentRecord:
    """
    普通投资记录（一个账户一个月的投入与快照）

    金额约定：
    - amount   当月投入金额（可为 0）
    - snapshot 当月月末账户总市值；None 表示当月未记录快照
    """
    id: str
    date: str
    amount: float
    account: str
    asset_type: str
    snapshot: Optional[float] = None
    note: Optional[str] = None

    # 定期存款专用字段
    is_time_deposit: bool = False
    deposit_term_months: Optional[int] = None
    annual_interest_rate: Optional[float] = None  # 5 表示年化 5%
    maturity_date: Optional[str] = None

    # 股票专用字段（引擎不使用，原样携带）
    shares: Optional[float] = None
    share_price: Optional[float] = None

    @classmethod
    def create(cls, **fields) -> "InvestmentRecord":
        """
        创建记录，定期存款自动推导 maturity_date

        到期月 = 起息月 + 存期月数
        """
        term = fields.get("deposit_term_months")
        if (
            fields.get("is_time_deposit")
            and term
            and not fields.get("maturity_date")
            and is_month_token(fields.get("date", ""))
        ):
            fields["maturity_date"] = add_months(fields["date"], int(term))
        return cls(**fields)

    @property
    def has_snapshot(self) -> bool:
        return self.snapshot is not None

    @property
    def is_valid_time_deposit(self) -> bool:
        """定期存款且存期、利率均为正数"""
        return bool(
            self.is_time_deposit
            and is_month_token(self.date)
            and self.deposit_term_months
            and self.deposit_term_months > 0
            and self.annual_interest_rate
            and self.annual_interest_rate > 0
        )


@dataclass(frozen=True)
class PreciousMetalRecord:
    """
    贵金属购买记录

    - price_per_gram: 实际购买单价（计算成本）
    - average_price:  当月市场均价（用户输入，只用于估值）
    """
    id: str
    date: str
    metal_type: str
    account: str
    grams: float
    price_per_gram: float
    average_price: float
    note: Optional[str] = None

    @property
    def cost(self) -> float:
        """购买金额 = 克数 × 每克购买价"""
        return self.grams * self.price_per_gram


def check_record(record: InvestmentRecord) -> List[str]:
    """
    检查普通投资记录的约束，返回问题列表（空列表表示合规）

    仅用于录入/导入时提示，不影响计算：计算引擎对不合规记录做静默降级。
    """
    problems: List[str] = []
    if not is_month_token(record.date):
        problems.append(f"日期格式必须为 YYYY-MM: {record.date!r}")
    if record.is_time_deposit:
        if not record.deposit_term_months or record.deposit_term_months <= 0:
            problems.append("定期存款缺少有效存期")
        if not record.annual_interest_rate or record.annual_interest_rate <= 0:
            problems.append("定期存款缺少有效年化利率")
        if (
            record.deposit_term_months
            and record.deposit_term_months > 0
            and is_month_token(record.date)
        ):
            expected = add_months(record.date, record.deposit_term_months)
            if record.maturity_date and record.maturity_date != expected:
                problems.append(
                    f"到期日应为 {expected}，实际为 {record.maturity_date}"
                )
    return problems


def check_metal_record(record: PreciousMetalRecord) -> List[str]:
    """检查贵金属记录的约束（克数、单价、均价必须为正）"""
    problems: List[str] = []
    if not is_month_token(record.date):
        problems.append(f"日期格式必须为 YYYY-MM: {record.date!r}")
    for name in ("grams", "price_per_gram", "average_price"):
        if not getattr(record, name) or getattr(record, name) <= 0:
            problems.append(f"{name} 必须为正数")
    return problems


# ═══════════════════════════════════════════════════════
#  记录集合
# ═══════════════════════════════════════════════════════

def _well_formed(grouped: Optional[Mapping[str, Iterable]]) -> Dict[str, tuple]:
    """按分组剔除月份格式不合规的记录"""
    result: Dict[str, tuple] = {}
    for key, records in (grouped or {}).items():
        kept = []
        for r in records:
            if is_month_token(r.date):
                kept.append(r)
            else:
                logger.warning("skip record %s (%s): malformed month %r", r.id, key, r.date)
        if kept:
            result[key] = tuple(kept)
    return result


def _checksum(
    records_by_type: Mapping[str, Tuple[InvestmentRecord, ...]],
    records_by_metal_type: Mapping[str, Tuple[PreciousMetalRecord, ...]],
) -> str:
    """记录集合的内容校验和（同样的数据总得到同样的版本号）"""
    payload = {
        "investments": {
            k: [asdict(r) for r in v] for k, v in sorted(records_by_type.items())
        },
        "metals": {
            k: [asdict(r) for r in v] for k, v in sorted(records_by_metal_type.items())
        },
    }
    raw = json.dumps(payload, ensure_ascii=False, sort_keys=True, default=str)
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class RecordSet:
    """
    某一时刻的完整记录集合

    外部存储负责提供一致的快照；version 用作缓存键的一部分。
    未显式提供 version 时，按记录内容计算校验和。

    月份不是 YYYY-MM 的记录在构建时剔除（记录警告），不进入任何计算，
    单条坏记录不会影响其他月份。
    """
    records_by_type: Mapping[str, Tuple[InvestmentRecord, ...]] = field(default_factory=dict)
    records_by_metal_type: Mapping[str, Tuple[PreciousMetalRecord, ...]] = field(default_factory=dict)
    version: str = ""

    def __post_init__(self):
        by_type = _well_formed(self.records_by_type)
        by_metal = _well_formed(self.records_by_metal_type)
        object.__setattr__(self, "records_by_type", by_type)
        object.__setattr__(self, "records_by_metal_type", by_metal)
        if not self.version:
            object.__setattr__(self, "version", _checksum(by_type, by_metal))

    @classmethod
    def from_records(
        cls,
        records: Iterable[InvestmentRecord] = (),
        metal_records: Iterable[PreciousMetalRecord] = (),
        *,
        version: str = "",
    ) -> "RecordSet":
        """从扁平列表构建，按 asset_type / metal_type 分组（保持原顺序）"""
        by_type: Dict[str, List[InvestmentRecord]] = {}
        for r in records:
            by_type.setdefault(r.asset_type, []).append(r)
        by_metal: Dict[str, List[PreciousMetalRecord]] = {}
        for r in metal_records:
            by_metal.setdefault(r.metal_type, []).append(r)
        return cls(
            records_by_type={k: tuple(v) for k, v in by_type.items()},
            records_by_metal_type={k: tuple(v) for k, v in by_metal.items()},
            version=version,
        )

    def all_records(self) -> List[InvestmentRecord]:
        return [r for records in self.records_by_type.values() for r in records]

    def all_metal_records(self) -> List[PreciousMetalRecord]:
        return [r for records in self.records_by_metal_type.values() for r in records]

    def time_deposit_records(self) -> List[InvestmentRecord]:
        return [r for r in self.all_records() if r.is_time_deposit]

    def ordinary_records(self) -> List[InvestmentRecord]:
        """非定期存款的普通投资记录"""
        return [r for r in self.all_records() if not r.is_time_deposit]

    def all_months(self) -> List[str]:
        """投资记录与贵金属记录涉及的所有月份（升序去重）"""
        months = {r.date for r in self.all_records() if r.date}
        months |= {r.date for r in self.all_metal_records() if r.date}
        return sorted(months)

    def is_empty(self) -> bool:
        return not self.all_records() and not self.all_metal_records()
