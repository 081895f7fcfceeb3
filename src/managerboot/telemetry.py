"""Telemetry - 统一日志和指标入口

日志格式: [module] msg，消息自带组件前缀（[Bootstrap] / [Loader] / [AssetServer]）
指标示例: bootstrap.init.ok, bootstrap.init.failed, bootstrap.entry.invoked
"""

import logging
from collections import Counter

_LOG_FORMAT = "[%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """获取带模块前缀的 logger

    Args:
        name: 模块名（通常使用 __name__）
    """
    return logging.getLogger(name)


def setup_logging(level: str | int = "INFO") -> None:
    """配置根 logger（仅由 CLI 这类宿主调用）"""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=_LOG_FORMAT)


class Metrics:
    """指标收集 facade

    只提供计数器，内存存储；key 为 (指标名, 排序后的标签)。
    """

    def __init__(self):
        self._counters: Counter[tuple[str, tuple[tuple[str, str], ...]]] = Counter()

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """递增计数器

        Args:
            name: 指标名（如 "bootstrap.init.failed"）
            labels: 可选标签（如 {"reason": "unreachable"}）
            value: 递增值，默认 1
        """
        self._counters[name, _label_key(labels)] += value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """获取计数器值（用于测试）"""
        return self._counters[name, _label_key(labels)]

    def reset(self) -> None:
        """重置所有指标（用于测试）"""
        self._counters.clear()


def _label_key(labels: dict[str, str] | None) -> tuple[tuple[str, str], ...]:
    return tuple(sorted((labels or {}).items()))


# 全局指标实例
metrics = Metrics()
