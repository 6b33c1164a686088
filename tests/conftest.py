"""测试夹具：构建最小可用的记录集合。"""
from __future__ import annotations

from pathlib import Path

import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from models import InvestmentRecord, PreciousMetalRecord, RecordSet


def _record(id_, date, amount, account, asset_type="股票", snapshot=None, **extra):
    return InvestmentRecord.create(
        id=id_, date=date, amount=amount, account=account,
        asset_type=asset_type, snapshot=snapshot, **extra,
    )


def _simple_3_month_records():
    """单账户连续 3 个月，每月投入 10000。"""
    return [
        _record("s1", "2024-01", 10000, "测试账户", snapshot=10000),
        _record("s2", "2024-02", 10000, "测试账户", snapshot=11000),
        _record("s3", "2024-03", 10000, "测试账户", snapshot=12000),
    ]


def _deposit_record():
    """10 万元 6 个月定期，年化 3%（每月利息 250）。"""
    return _record(
        "d1", "2024-01", 100000, "银行", asset_type="定期存款",
        is_time_deposit=True, deposit_term_months=6, annual_interest_rate=3,
    )


def _gold_records():
    """1 月买 10 克（均价 400），2 月再买 1 克（均价 410）。"""
    return [
        PreciousMetalRecord(
            id="g1", date="2024-01", metal_type="黄金", account="银行",
            grams=10, price_per_gram=400, average_price=400,
        ),
        PreciousMetalRecord(
            id="g2", date="2024-02", metal_type="黄金", account="银行",
            grams=1, price_per_gram=410, average_price=410,
        ),
    ]


@pytest.fixture
def simple_3_month() -> RecordSet:
    return RecordSet.from_records(_simple_3_month_records())


@pytest.fixture
def multi_account() -> RecordSet:
    """两个账户：A（股票）与 B（基金），各 3 个月。"""
    return RecordSet.from_records([
        _record("a1", "2024-01", 1000, "A", snapshot=1000),
        _record("a2", "2024-02", 500, "A", snapshot=1600),
        _record("a3", "2024-03", 0, "A", snapshot=1700),
        _record("b1", "2024-01", 2000, "B", asset_type="基金", snapshot=2000),
        _record("b2", "2024-02", 0, "B", asset_type="基金", snapshot=2100),
        _record("b3", "2024-03", 100, "B", asset_type="基金", snapshot=2300),
    ])


@pytest.fixture
def gap_account() -> RecordSet:
    """快照缺少 2024-03：02 → 04 不连续。"""
    return RecordSet.from_records([
        _record("x1", "2024-01", 1000, "G", snapshot=1000),
        _record("x2", "2024-02", 0, "G", snapshot=1100),
        _record("x4", "2024-04", 0, "G", snapshot=1300),
        _record("x5", "2024-05", 0, "G", snapshot=1350),
    ])


@pytest.fixture
def deposit() -> InvestmentRecord:
    return _deposit_record()


@pytest.fixture
def gold_by_type():
    return {"黄金": tuple(_gold_records())}


@pytest.fixture
def metal_only() -> RecordSet:
    return RecordSet.from_records(metal_records=_gold_records())


@pytest.fixture
def mixed() -> RecordSet:
    """普通投资（simple_3_month）+ 定期存款 + 黄金。"""
    return RecordSet.from_records(
        _simple_3_month_records() + [_deposit_record()],
        _gold_records(),
    )


def _malformed_records():
    """月份写成 "2024-6" 的普通投资、定期存款与黄金记录各一条。"""
    return (
        [
            _record("bad1", "2024-6", 5000, "测试账户", snapshot=20000),
            _record(
                "bad2", "2024-6", 50000, "银行", asset_type="定期存款",
                is_time_deposit=True, deposit_term_months=3, annual_interest_rate=2,
            ),
        ],
        [
            PreciousMetalRecord(
                id="bad3", date="2024-6", metal_type="黄金", account="银行",
                grams=5, price_per_gram=450, average_price=450,
            ),
        ],
    )


@pytest.fixture
def malformed_records():
    return _malformed_records()


@pytest.fixture
def mixed_with_malformed() -> RecordSet:
    """mixed 加上三条月份格式不合规的记录。"""
    bad_records, bad_metals = _malformed_records()
    return RecordSet.from_records(
        _simple_3_month_records() + [_deposit_record()] + bad_records,
        _gold_records() + bad_metals,
    )


@pytest.fixture
def gold_500_by_type():
    """1 月买 10 克（500/克，均价 500），2 月再买 10 克（510/克，均价 510）。"""
    return {"黄金": (
        PreciousMetalRecord(
            id="p1", date="2024-01", metal_type="黄金", account="银行",
            grams=10, price_per_gram=500, average_price=500,
        ),
        PreciousMetalRecord(
            id="p2", date="2024-02", metal_type="黄金", account="银行",
            grams=10, price_per_gram=510, average_price=510,
        ),
    )}
