"""资源服务器启动"""

from pathlib import Path

import uvicorn

from .. import config
from .app import create_app, module_url


async def serve(
    host: str = config.SERVER_HOST,
    port: int = config.SERVER_PORT,
    keep_alive: int = config.SERVER_KEEP_ALIVE,
    module_file: str | Path = config.MODULE_LOCATION,
) -> None:
    """启动资源服务器，直到被停止"""
    app = create_app(module_file)
    uvicorn_config = uvicorn.Config(
        app,
        host=host,
        port=port,
        timeout_keep_alive=keep_alive,
        log_level=config.LOG_LEVEL.lower(),
        access_log=False,  # 由 AssetServer 中间件记录
    )
    uvicorn_server = uvicorn.Server(uvicorn_config)

    print(f"managerboot asset server starting at http://{host}:{port}{module_url(module_file)}")
    await uvicorn_server.serve()
