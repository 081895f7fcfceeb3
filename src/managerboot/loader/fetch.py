"""模块获取 - 从文件路径或 HTTP(S) 地址读取模块字节"""

import asyncio
from pathlib import Path

import httpx

from .. import config
from ..errors import FailureReason, InitializationError
from ..telemetry import get_logger, metrics

logger = get_logger(__name__)


def is_remote(location: str) -> bool:
    """位置是否为 http(s) URL"""
    return location.lower().startswith(config.REMOTE_SCHEMES)


async def fetch_module_bytes(
    location: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> bytes:
    """读取模块字节

    Args:
        location: 文件路径或 http(s) URL
        client: 可选的 httpx 客户端（测试时注入 MockTransport）
        timeout: 远程获取超时（秒），None 使用配置默认值

    Raises:
        InitializationError: UNREACHABLE
    """
    if not location:
        raise InitializationError(location, FailureReason.UNREACHABLE, "empty module location")

    if is_remote(location):
        data = await _fetch_remote(
            location, client, config.FETCH_TIMEOUT if timeout is None else timeout
        )
    else:
        data = await _read_local(location)

    if config.METRICS_ENABLED:
        metrics.inc("loader.fetch.bytes", value=len(data))
    logger.debug(f"[Loader] Fetched {len(data)} bytes from {location}")
    return data


async def _read_local(location: str) -> bytes:
    path = Path(location)
    try:
        return await asyncio.to_thread(path.read_bytes)
    except (OSError, ValueError) as e:
        # ValueError: 路径中含 NUL 等非法字符
        detail = getattr(e, "strerror", None) or e
        raise InitializationError(
            location, FailureReason.UNREACHABLE, f"{type(e).__name__}: {detail}"
        ) from e


async def _fetch_remote(
    location: str, client: httpx.AsyncClient | None, timeout: float
) -> bytes:
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=timeout)
    try:
        response = await client.get(location)
        response.raise_for_status()
        return response.content
    except httpx.TimeoutException as e:
        raise InitializationError(
            location, FailureReason.UNREACHABLE, f"timed out after {timeout}s"
        ) from e
    except httpx.HTTPStatusError as e:
        raise InitializationError(
            location, FailureReason.UNREACHABLE, f"HTTP {e.response.status_code}"
        ) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise InitializationError(
            location, FailureReason.UNREACHABLE, f"{type(e).__name__}: {e}"
        ) from e
    finally:
        if owns_client:
            await client.aclose()
