"""Host 环境 - 提供给模块的 host 函数

模块执行前，所有 host 函数被注入模块命名空间，同时整个环境以 __host__ 暴露。
模块可以通过 __host_requires__ 声明依赖的 host 函数名。
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .. import config
from ..telemetry import get_logger


class HostEnvironment:
    """host 函数注册表"""

    def __init__(self, functions: Mapping[str, Callable[..., Any]] | None = None):
        self._functions: dict[str, Callable[..., Any]] = {}
        for name, fn in (functions or {}).items():
            self.provide(name, fn)

    def provide(self, name: str, fn: Callable[..., Any]) -> None:
        """注册 host 函数

        Raises:
            TypeError: fn 不可调用
            ValueError: name 不是合法标识符
        """
        if not name.isidentifier():
            raise ValueError(f"invalid host function name: {name!r}")
        if not callable(fn):
            raise TypeError(f"host function {name!r} is not callable")
        self._functions[name] = fn

    def missing(self, required: Iterable[str]) -> list[str]:
        """返回 required 中 host 没有提供的名字（保持声明顺序）"""
        return [name for name in required if name not in self._functions]

    def inject(self, namespace: dict[str, Any]) -> None:
        """注入到模块命名空间"""
        namespace.update(self._functions)
        namespace[config.HOST_ATTR] = self

    @property
    def names(self) -> list[str]:
        return sorted(self._functions)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __getitem__(self, name: str) -> Callable[..., Any]:
        return self._functions[name]

    def __len__(self) -> int:
        return len(self._functions)


def default_host() -> HostEnvironment:
    """命令行宿主提供的 host 函数

    - log(message): 以 managerboot.module logger 输出模块消息
    """
    module_logger = get_logger("managerboot.module")
    return HostEnvironment({"log": lambda message: module_logger.info(f"[Module] {message}")})
