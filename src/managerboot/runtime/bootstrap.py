"""Bootstrap - 加载 binary module 并移交控制权

职责：
- 请求异步实例化模块（唯一的挂起点）
- 实例化成功后恰好调用一次入口函数
- 实例化失败时记录并原样抛出，不重试、不回退

不负责：
- 入口函数之后的任何行为（控制权已交给模块）
- 模块的生成、版本、打包
"""

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable
from enum import Enum

from .. import config
from ..errors import BootstrapStateError, InitializationError
from ..loader import BinaryModule, HostEnvironment, instantiate
from ..telemetry import get_logger, metrics

logger = get_logger(__name__)

Initializer = Callable[[str], Awaitable[BinaryModule]]

# 进程级 bootstrap，防止重复启动
_current_bootstrap: "Bootstrap | None" = None


class BootState(Enum):
    """bootstrap 状态

    NOT_STARTED → INITIALIZING → RUNNING | FAILED
    RUNNING / FAILED 为终态，不会回到 INITIALIZING。
    """

    NOT_STARTED = "not_started"
    INITIALIZING = "initializing"
    RUNNING = "running"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in {BootState.RUNNING, BootState.FAILED}


class Bootstrap:
    """两阶段启动：实例化模块，然后调用入口

    Args:
        location: 模块位置，原样传给 initializer
        initializer: 实例化函数，None 使用 loader.instantiate
        host: 提供给模块的 host 函数（仅用于默认 initializer）
    """

    def __init__(
        self,
        location: str | None = None,
        initializer: Initializer | None = None,
        host: HostEnvironment | None = None,
    ):
        if initializer is not None and host is not None:
            raise ValueError("host only applies to the default initializer")
        self.location = location if location is not None else config.MODULE_LOCATION
        self._initializer = initializer or functools.partial(instantiate, host=host)
        self._state = BootState.NOT_STARTED
        self._module: BinaryModule | None = None
        self._entry_task: asyncio.Future | None = None

    @property
    def state(self) -> BootState:
        return self._state

    @property
    def module(self) -> BinaryModule | None:
        """实例化成功的模块，失败或未启动时为 None"""
        return self._module

    @property
    def entry_task(self) -> "asyncio.Future | None":
        """入口函数返回 awaitable 时调度出的 task（bootstrap 不等待它）"""
        return self._entry_task

    async def start(self) -> None:
        """执行启动序列，每个实例只能调用一次

        Raises:
            BootstrapStateError: 已经启动过
            InitializationError: 模块实例化失败（入口不会被调用）
            Exception: 入口函数抛出的异常，原样传播
        """
        if self._state is not BootState.NOT_STARTED:
            raise BootstrapStateError(f"bootstrap already {self._state.value}, no retry")

        self._state = BootState.INITIALIZING
        logger.info(f"[Bootstrap] Initializing module from {self.location}")

        try:
            module = await self._initializer(self.location)
        except InitializationError as e:
            self._fail(e, e.reason.label)
            raise
        except BaseException as e:
            # 包括 CancelledError / KeyboardInterrupt，状态必须进入终态
            self._fail(e, type(e).__name__)
            raise

        self._module = module
        self._state = BootState.RUNNING
        if config.METRICS_ENABLED:
            metrics.inc("bootstrap.init.ok")
            metrics.inc("bootstrap.entry.invoked")
        logger.info(f"[Bootstrap] Module {module.name} ready, handing over to entry point")

        result = module.run()
        if inspect.isawaitable(result):
            self._entry_task = asyncio.ensure_future(result)

    def _fail(self, error: BaseException, reason: str) -> None:
        self._state = BootState.FAILED
        if config.METRICS_ENABLED:
            metrics.inc("bootstrap.init.failed", {"reason": reason})
        logger.error(f"[Bootstrap] Initialization failed: {type(error).__name__}: {error}")


async def start(
    location: str | None = None,
    *,
    initializer: Initializer | None = None,
    host: HostEnvironment | None = None,
) -> Bootstrap:
    """进程级启动入口

    Args:
        location: 模块位置，None 使用 config.MODULE_LOCATION
        initializer: 实例化函数（测试时注入 fake）
        host: 提供给模块的 host 函数

    Returns:
        已完成启动序列的 Bootstrap

    Raises:
        BootstrapStateError: 本进程已经调用过 start()
    """
    global _current_bootstrap

    if _current_bootstrap is not None:
        raise BootstrapStateError(
            "start() has already been called. "
            "Use get_current_bootstrap() to access the existing bootstrap."
        )

    _current_bootstrap = Bootstrap(location, initializer, host)
    await _current_bootstrap.start()
    return _current_bootstrap


def get_current_bootstrap() -> "Bootstrap | None":
    """获取本进程的 Bootstrap

    如果 start() 还没调用，返回 None。
    """
    return _current_bootstrap


def _reset_for_testing() -> None:
    """重置 bootstrap 状态（仅用于测试）"""
    global _current_bootstrap
    _current_bootstrap = None
