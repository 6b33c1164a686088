"""
显示范围筛选 — 计算范围与显示范围分离

计算总是基于完整历史（首月基准、上月快照都依赖窗口之前的数据）；
日期窗口只在计算完成后用来截取结果。

不要把 filter_records_by_date_range 的结果再交给计算函数：
窗口第一个月会失去上月快照，收益与收益率都会出错。
"""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence, TypeVar

import pandas as pd

from models import AccountSeries, AssetTypeSeries, DateRange

T = TypeVar("T")


def _month_of(item: Any) -> str:
    if isinstance(item, Mapping):
        return item["month"]
    return item.month


def _is_open(date_range: Optional[DateRange]) -> bool:
    return date_range is None or date_range.is_open


def filter_months(months: Iterable[str], date_range: Optional[DateRange]) -> List[str]:
    """月份列表按窗口截取（闭区间）"""
    if _is_open(date_range):
        return list(months)
    return [m for m in months if date_range.contains(m)]


def filter_monthly_data(series: Sequence[T], date_range: Optional[DateRange]) -> List[T]:
    """
    截取已计算好的月度序列

    元素可以是带 .month 属性的对象，也可以是含 "month" 键的 dict。
    不修改输入，返回新列表。
    """
    if _is_open(date_range):
        return list(series)
    return [item for item in series if date_range.contains(_month_of(item))]


def filter_series_by_key(series_by_key: Sequence, date_range: Optional[DateRange]) -> List:
    """
    截取按账户 / 资产类型分组的序列

    截取后没有数据的分组整组移除。
    """
    if _is_open(date_range):
        return list(series_by_key)

    result = []
    for group in series_by_key:
        data = filter_monthly_data(group.data, date_range)
        if not data:
            continue
        if isinstance(group, AccountSeries):
            result.append(AccountSeries(account=group.account, data=data))
        elif isinstance(group, AssetTypeSeries):
            result.append(AssetTypeSeries(asset_type=group.asset_type, data=data))
        else:
            raise TypeError(f"不支持的分组序列类型: {type(group).__name__}")
    return result


def filter_frame(
    df: pd.DataFrame,
    date_range: Optional[DateRange],
    column: Optional[str] = "month",
) -> pd.DataFrame:
    """
    截取 DataFrame

    column 为 None 时按索引截取（透视表以月份为索引）。
    """
    if df is None or df.empty or _is_open(date_range):
        return df

    months = df.index.to_series() if column is None else df[column]
    mask = pd.Series(True, index=df.index)
    if date_range.start_month:
        mask &= months >= date_range.start_month
    if date_range.end_month:
        mask &= months <= date_range.end_month
    return df[mask.values]


def filter_records_by_date_range(records: Iterable[T], date_range: Optional[DateRange]) -> List[T]:
    """原始记录按 date 截取（只用于记录表格展示）"""
    if _is_open(date_range):
        return list(records)
    return [r for r in records if date_range.contains(r.date)]
