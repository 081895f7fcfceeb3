"""命令行入口

- managerboot run    加载 manager 模块并移交控制权
- managerboot serve  启动资源服务器
"""

import argparse
import asyncio
import sys

from . import config
from .errors import InitializationError
from .loader import HostEnvironment, default_host
from .runtime import start
from .telemetry import get_logger, setup_logging
from .web import serve

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="managerboot")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="日志级别")
    sub = parser.add_subparsers(dest="command", required=True)

    run_parser = sub.add_parser("run", help="加载模块并调用入口")
    run_parser.add_argument(
        "--location", default=config.MODULE_LOCATION, help="模块路径或 http(s) URL"
    )

    serve_parser = sub.add_parser("serve", help="启动资源服务器")
    serve_parser.add_argument("-H", "--host", default=config.SERVER_HOST)
    serve_parser.add_argument("-p", "--port", type=int, default=config.SERVER_PORT)
    serve_parser.add_argument(
        "-K", "--keep-alive", type=int, default=config.SERVER_KEEP_ALIVE, help="keep-alive 秒数"
    )
    serve_parser.add_argument("--module-file", default=config.MODULE_LOCATION)
    return parser


async def _run(location: str, host: HostEnvironment | None = None) -> None:
    """bootstrap 宿主：入口返回 awaitable 时保持事件循环直到其结束"""
    bootstrap = await start(location, host=host)
    if bootstrap.entry_task is not None:
        await bootstrap.entry_task


def main(argv: list[str] | None = None) -> int:
    """入口函数，返回进程退出码"""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.command == "run":
            asyncio.run(_run(args.location, default_host()))
        else:
            asyncio.run(
                serve(
                    host=args.host,
                    port=args.port,
                    keep_alive=args.keep_alive,
                    module_file=args.module_file,
                )
            )
    except InitializationError as e:
        logger.error(f"[Bootstrap] Application did not start: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nStopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
