"""模块实例化 - fetch → decode → execute → 校验 host 依赖 → 解析入口

所有失败统一转换为 InitializationError，原始异常作为 __cause__ 保留。
"""

import importlib.abc
import importlib.machinery
import importlib.util
import types
from pathlib import PurePosixPath
from urllib.parse import urlsplit

import httpx

from .. import config
from ..errors import FailureReason, InitializationError
from ..telemetry import get_logger
from .capability import LoadedModule
from .fetch import fetch_module_bytes, is_remote
from .format import decode_module
from .host import HostEnvironment

logger = get_logger(__name__)


def module_name_for(location: str) -> str:
    """由位置推导模块名：thoth_manager_bg.pyc -> thoth_manager_bg"""
    path = urlsplit(location).path if is_remote(location) else location.replace("\\", "/")
    stem = PurePosixPath(path).stem.replace("-", "_").replace(".", "_")
    return stem if stem.isidentifier() else "manager_module"


async def instantiate(
    location: str,
    *,
    host: HostEnvironment | None = None,
    entry_point: str = config.ENTRY_POINT,
    client: httpx.AsyncClient | None = None,
) -> LoadedModule:
    """从 location 实例化 binary module

    Args:
        location: 文件路径或 http(s) URL
        host: 提供给模块的 host 函数，None 表示不提供任何函数
        entry_point: 入口函数名
        client: 远程获取时使用的 httpx 客户端

    Returns:
        LoadedModule，入口函数已解析但尚未调用

    Raises:
        InitializationError: 任意原因导致实例化未完成
    """
    host = host if host is not None else HostEnvironment()

    data = await fetch_module_bytes(location, client=client)
    code = decode_module(data, location)

    module = _load(code, host, location)

    required = getattr(module, config.HOST_REQUIRES_ATTR, ())
    if isinstance(required, str):
        required = (required,)
    missing = host.missing(required)
    if missing:
        raise InitializationError(
            location,
            FailureReason.INCOMPATIBLE,
            f"missing host functions: {', '.join(missing)}",
        )

    entry = getattr(module, entry_point, None)
    if entry is None:
        raise InitializationError(
            location, FailureReason.INCOMPATIBLE, f"entry point {entry_point!r} not found"
        )
    if not callable(entry):
        raise InitializationError(
            location, FailureReason.INCOMPATIBLE, f"entry point {entry_point!r} is not callable"
        )

    logger.info(f"[Loader] Module {module.__name__} instantiated from {location}")
    return LoadedModule(location, module, entry)


class BytecodeLoader(importlib.abc.Loader):
    """从已解码的 code object 执行模块

    exec_module 之前把 host 函数注入模块命名空间。
    """

    def __init__(self, code: types.CodeType, host: HostEnvironment):
        self.code = code
        self.host = host

    def create_module(self, spec: importlib.machinery.ModuleSpec) -> None:
        return None  # 使用默认模块创建

    def exec_module(self, module: types.ModuleType) -> None:
        self.host.inject(module.__dict__)
        exec(self.code, module.__dict__)


def _load(code: types.CodeType, host: HostEnvironment, location: str) -> types.ModuleType:
    """创建并执行模块

    NameError 视为缺少 host 提供的名字（INCOMPATIBLE），其余异常为 MALFORMED。
    """
    spec = importlib.machinery.ModuleSpec(
        module_name_for(location), BytecodeLoader(code, host), origin=location
    )
    spec.has_location = True
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except NameError as e:
        raise InitializationError(
            location, FailureReason.INCOMPATIBLE, f"unresolved name during execution: {e}"
        ) from e
    except Exception as e:
        raise InitializationError(
            location, FailureReason.MALFORMED, f"module body raised {type(e).__name__}: {e}"
        ) from e
    return module
