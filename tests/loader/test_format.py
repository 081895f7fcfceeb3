"""模块格式解码测试"""

import importlib.util
import marshal
import types

import pytest

from managerboot.errors import FailureReason, InitializationError
from managerboot.loader.format import HEADER_SIZE, decode_module


def _header(magic: bytes = importlib.util.MAGIC_NUMBER, flags: int = 0) -> bytes:
    return magic + flags.to_bytes(4, "little") + b"\x00" * 8


class TestDecodeModule:
    """decode_module 测试"""

    def test_decode_compiled_module(self, module_bytes):
        """编译产物解码为 code object"""
        data = module_bytes("def run_app():\n    pass\n")
        code = decode_module(data, "mod.pyc")
        assert isinstance(code, types.CodeType)
        assert "run_app" in code.co_names

    def test_truncated_header(self):
        """头部不足 16 字节为 MALFORMED"""
        with pytest.raises(InitializationError) as exc_info:
            decode_module(b"\x00" * (HEADER_SIZE - 1), "mod.pyc")
        assert exc_info.value.reason is FailureReason.MALFORMED
        assert "truncated" in exc_info.value.detail

    def test_other_interpreter_magic(self):
        """其他解释器版本的 magic 为 INCOMPATIBLE"""
        data = _header(magic=b"\x00\x00\r\n") + marshal.dumps(compile("x = 1", "m", "exec"))
        with pytest.raises(InitializationError) as exc_info:
            decode_module(data, "mod.pyc")
        assert exc_info.value.reason is FailureReason.INCOMPATIBLE

    def test_invalid_flags(self):
        """未知 flags 位为 MALFORMED"""
        data = _header(flags=0x10) + marshal.dumps(compile("x = 1", "m", "exec"))
        with pytest.raises(InitializationError) as exc_info:
            decode_module(data, "mod.pyc")
        assert exc_info.value.reason is FailureReason.MALFORMED

    def test_undecodable_payload(self):
        """marshal 无法解码为 MALFORMED，保留原始异常"""
        with pytest.raises(InitializationError) as exc_info:
            decode_module(_header() + b"\xff\xfe\xfd", "mod.pyc")
        assert exc_info.value.reason is FailureReason.MALFORMED
        assert exc_info.value.__cause__ is not None

    def test_payload_not_code(self):
        """payload 不是 code object 为 MALFORMED"""
        with pytest.raises(InitializationError) as exc_info:
            decode_module(_header() + marshal.dumps({"run_app": 1}), "mod.pyc")
        assert exc_info.value.reason is FailureReason.MALFORMED
        assert "not a code object" in exc_info.value.detail
