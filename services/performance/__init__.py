"""
绩效计算引擎 — 纯函数，输入记录，输出收益 / ROI / 收益率序列

依赖方向：snapshots / time_deposit / metals → profit / returns → overall → scope
"""
from .snapshots import (
    flatten_records,
    group_snapshots_by_account,
    investment_by_account_month,
    month_investment,
    latest_snapshot_at_or_before,
)
from .time_deposit import (
    monthly_interest,
    calculate_maturity_date,
    is_matured,
    profit_for_month,
    total_profit,
    marginal_profit,
    current_value,
    average_monthly_profit,
    accrual_months,
)
from .metals import (
    total_grams,
    total_amount,
    month_average_price,
    market_value_for_profit,
    month_purchase_cost,
    calculate_monthly_metal_values,
    calculate_total_metal_value,
    get_previous_month_metal_value,
    calculate_monthly_accumulated_profit,
    calculate_monthly_total_profit,
    calculate_metal_stats,
)
from .returns import (
    select_denominator,
    return_rate,
    calculate_monthly_return_by_account,
    calculate_overall_monthly_return,
    calculate_time_deposit_returns,
    calculate_monthly_return_by_asset_type,
    calculate_precious_metal_monthly_returns,
    get_all_unique_months,
    align_to_months,
)
from .profit import (
    roi,
    calculate_monthly_investment_data,
    calculate_monthly_investment_data_by_account,
    calculate_overall_monthly_roi,
    calculate_assets_for_month,
    calculate_current_month_investment,
    calculate_monthly_profit,
    calculate_overall_return_rate,
    calculate_asset_type_stats,
)
from .overall import (
    blended_months,
    blended_month_components,
    calculate_blended_monthly_return,
)
from .scope import (
    filter_months,
    filter_monthly_data,
    filter_series_by_key,
    filter_frame,
    filter_records_by_date_range,
)
from .risk import calculate_risk_distribution

__all__ = [
    "flatten_records",
    "group_snapshots_by_account",
    "investment_by_account_month",
    "month_investment",
    "latest_snapshot_at_or_before",
    "monthly_interest",
    "calculate_maturity_date",
    "is_matured",
    "profit_for_month",
    "total_profit",
    "marginal_profit",
    "current_value",
    "average_monthly_profit",
    "accrual_months",
    "total_grams",
    "total_amount",
    "month_average_price",
    "market_value_for_profit",
    "month_purchase_cost",
    "calculate_monthly_metal_values",
    "calculate_total_metal_value",
    "get_previous_month_metal_value",
    "calculate_monthly_accumulated_profit",
    "calculate_monthly_total_profit",
    "calculate_metal_stats",
    "select_denominator",
    "return_rate",
    "calculate_monthly_return_by_account",
    "calculate_overall_monthly_return",
    "calculate_time_deposit_returns",
    "calculate_monthly_return_by_asset_type",
    "calculate_precious_metal_monthly_returns",
    "get_all_unique_months",
    "align_to_months",
    "roi",
    "calculate_monthly_investment_data",
    "calculate_monthly_investment_data_by_account",
    "calculate_overall_monthly_roi",
    "calculate_assets_for_month",
    "calculate_current_month_investment",
    "calculate_monthly_profit",
    "calculate_overall_return_rate",
    "calculate_asset_type_stats",
    "blended_months",
    "blended_month_components",
    "calculate_blended_monthly_return",
    "filter_months",
    "filter_monthly_data",
    "filter_series_by_key",
    "filter_frame",
    "filter_records_by_date_range",
    "calculate_risk_distribution",
]
