"""启动错误定义

本层只有一种错误：InitializationError（模块无法从给定位置实例化）。
BootstrapStateError 用于拒绝重复启动。
"""

from enum import Enum


class FailureReason(Enum):
    """初始化失败原因"""

    UNREACHABLE = "unreachable"  # 资源不存在 / 无法读取 / 网络错误
    MALFORMED = "malformed"  # 头部截断、marshal 数据损坏、模块体执行失败
    INCOMPATIBLE = "incompatible"  # 解释器版本不符、缺少 host 函数、无入口

    @property
    def label(self) -> str:
        """日志和指标使用的短标签"""
        return self.value


class InitializationError(Exception):
    """模块初始化失败

    原始异常通过 __cause__ 链接，不做吞没。

    Attributes:
        location: 模块位置（原样，未修改）
        reason: 失败原因
        detail: 可读描述
    """

    def __init__(self, location: str, reason: FailureReason, detail: str):
        self.location = location
        self.reason = reason
        self.detail = detail
        super().__init__(f"cannot initialize module at {location!r} ({reason.label}): {detail}")


class BootstrapStateError(RuntimeError):
    """bootstrap 已经启动过（不支持重试或重复启动）"""
