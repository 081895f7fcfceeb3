"""Binary module capability

bootstrap 只依赖 BinaryModule 接口：实例化完成后暴露一个无参入口。
LoadedModule 是 instantiate() 返回的真实实现，测试可以替换为 fake。
"""

import types
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class BinaryModule(ABC):
    """已实例化的 binary module"""

    location: str  # 模块来源位置

    @property
    @abstractmethod
    def name(self) -> str:
        """模块名"""

    @abstractmethod
    def run(self) -> Any:
        """调用入口函数，移交控制权"""


class LoadedModule(BinaryModule):
    """由 .pyc 执行得到的模块

    Attributes:
        location: 模块来源位置
        module: 执行后的模块对象
        entry_point: 解析出的入口函数
    """

    def __init__(self, location: str, module: types.ModuleType, entry_point: Callable[[], Any]):
        self.location = location
        self.module = module
        self.entry_point = entry_point

    @property
    def name(self) -> str:
        return self.module.__name__

    def run(self) -> Any:
        return self.entry_point()

    def __repr__(self) -> str:
        return f"LoadedModule(name={self.name!r}, location={self.location!r})"
