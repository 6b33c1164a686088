"""
业务逻辑层

目录结构：
- services/performance/   绩效计算引擎（纯函数）
- services/dashboard.py   Dashboard 基础数据 + 缓存

架构规则：
- services/ → models/ + config/ + utils/（可以调用）
- performance/ 不依赖 dashboard，也不读取缓存
"""
from services.dashboard import BaseDashboardData, CacheKey, DashboardService

__all__ = [
    "BaseDashboardData",
    "CacheKey",
    "DashboardService",
]
