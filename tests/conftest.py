"""Pytest 配置"""

import py_compile
import textwrap
from pathlib import Path

import pytest

from managerboot.runtime import bootstrap as bootstrap_module
from managerboot.telemetry import metrics


@pytest.fixture
def anyio_backend():
    """指定 anyio 只使用 asyncio backend"""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_runtime():
    """每次测试前后重置指标和进程级 bootstrap"""
    metrics.reset()
    bootstrap_module._reset_for_testing()
    yield
    metrics.reset()
    bootstrap_module._reset_for_testing()


@pytest.fixture
def compile_module(tmp_path):
    """把一段源码编译成 .pyc，返回 .pyc 路径字符串"""

    def _compile(source: str, name: str = "thoth_manager_bg") -> str:
        src = tmp_path / f"{name}.py"
        src.write_text(textwrap.dedent(source))
        target = tmp_path / f"{name}.pyc"
        py_compile.compile(str(src), cfile=str(target), doraise=True)
        return str(target)

    return _compile


@pytest.fixture
def module_bytes(compile_module):
    """把一段源码编译后读回字节"""

    def _bytes(source: str) -> bytes:
        return Path(compile_module(source)).read_bytes()

    return _bytes
