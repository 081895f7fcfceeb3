"""Binary module 格式 - 编译后的字节码文件

布局（与解释器写出的 .pyc 一致）：
- 0..4   magic number（解释器版本）
- 4..8   flags（小端 uint32）
- 8..16  源文件 mtime/size，或源文件 hash
- 16..   marshal 序列化的 code object
"""

import importlib.util
import marshal
import types

from ..errors import FailureReason, InitializationError

HEADER_SIZE = 16


def decode_module(data: bytes, location: str) -> types.CodeType:
    """校验头部并反序列化 code object

    Args:
        data: 模块完整字节
        location: 模块位置（仅用于错误信息）

    Raises:
        InitializationError: MALFORMED（截断/损坏）或 INCOMPATIBLE（版本不符）
    """
    if len(data) < HEADER_SIZE:
        raise InitializationError(
            location,
            FailureReason.MALFORMED,
            f"truncated header: {len(data)} bytes, need {HEADER_SIZE}",
        )

    magic = data[:4]
    if magic != importlib.util.MAGIC_NUMBER:
        raise InitializationError(
            location,
            FailureReason.INCOMPATIBLE,
            f"magic number {magic.hex()} does not match interpreter "
            f"{importlib.util.MAGIC_NUMBER.hex()}",
        )

    flags = int.from_bytes(data[4:8], "little")
    if flags & ~0b11:
        raise InitializationError(
            location, FailureReason.MALFORMED, f"invalid header flags: {flags:#x}"
        )

    try:
        code = marshal.loads(data[HEADER_SIZE:])
    except (EOFError, ValueError, TypeError) as e:
        raise InitializationError(
            location, FailureReason.MALFORMED, f"undecodable payload: {e}"
        ) from e

    if not isinstance(code, types.CodeType):
        raise InitializationError(
            location,
            FailureReason.MALFORMED,
            f"payload is {type(code).__name__}, not a code object",
        )
    return code
