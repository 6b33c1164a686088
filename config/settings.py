"""
运行时配置 — 环境变量覆盖

- HOLDINGS_CACHE_TTL: Dashboard 计算结果缓存秒数（默认 600）
- HOLDINGS_LOG_LEVEL: 日志级别（默认 WARNING）
"""
import logging
import os
from typing import Optional

DEFAULT_CACHE_TTL = 600


def get_cache_ttl() -> int:
    """缓存 TTL（秒），非法值回退默认值"""
    raw = os.getenv("HOLDINGS_CACHE_TTL", "")
    try:
        ttl = int(raw)
    except ValueError:
        return DEFAULT_CACHE_TTL
    return ttl if ttl > 0 else DEFAULT_CACHE_TTL


def get_log_level() -> int:
    name = os.getenv("HOLDINGS_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


# 注意：此值在 import 时固定
CACHE_TTL = get_cache_ttl()


def configure_logging(level: Optional[int] = None) -> None:
    """为引擎的 logger 设置级别（应用启动时调用一次）"""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    root.setLevel(level if level is not None else get_log_level())
