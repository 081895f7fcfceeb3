"""静态资源服务 - 提供 bootstrap 获取的 binary module 和 manifest

所有响应带 Cache-Control: no-cache；未匹配的 GET 路径返回 index 页面。
"""

import asyncio
import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from fastapi.templating import Jinja2Templates

from .. import __version__, config
from ..telemetry import get_logger
from .manifest import Manifest, build_manifest

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


def module_url(module_file: str | Path, prefix: str = config.URL_PREFIX) -> str:
    """模块在服务上的路径，如 /admin/thoth_manager_bg.pyc"""
    return f"{prefix.rstrip('/')}/{Path(module_file).name}"


def create_app(
    module_file: str | Path = config.MODULE_LOCATION,
    prefix: str = config.URL_PREFIX,
) -> FastAPI:
    """创建资源服务应用

    Args:
        module_file: 本地模块文件，请求时读取（不缓存，便于替换构建产物）
        prefix: URL 前缀
    """
    module_path = Path(module_file)
    prefix = prefix.rstrip("/")
    manifest = build_manifest(scope=prefix or "/")
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    no_cache = {"Cache-Control": config.CACHE_CONTROL}

    app = FastAPI(title="managerboot", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=config.CORS_ALLOWED_METHODS,
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        """访问日志: client "METHOD path" status bytes "referer" "user-agent" seconds"""
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        client = request.client.host if request.client else "-"
        logger.info(
            f'[AssetServer] {client} "{request.method} {request.url.path}" '
            f'{response.status_code} {response.headers.get("content-length", "-")} '
            f'"{request.headers.get("referer", "-")}" '
            f'"{request.headers.get("user-agent", "-")}" {elapsed:.6f}'
        )
        return response

    @app.get(module_url(module_path, prefix))
    async def module_file_route():
        """binary module 字节"""
        try:
            data = await asyncio.to_thread(module_path.read_bytes)
        except OSError as e:
            logger.error(f"[AssetServer] Cannot read module {module_path}: {e}")
            return Response(
                content="Module not available",
                status_code=404,
                media_type="text/plain",
                headers=no_cache,
            )
        return Response(content=data, media_type=config.MODULE_MEDIA_TYPE, headers=no_cache)

    @app.get(f"{prefix}/manifest.json", response_model=Manifest)
    async def manifest_route(response: Response):
        """web app manifest"""
        response.headers["Cache-Control"] = config.CACHE_CONTROL
        return manifest

    @app.get("/{path:path}", include_in_schema=False)
    async def index(request: Request, path: str):
        """其余路径统一返回 index 页面"""
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "manifest": manifest,
                "prefix": prefix,
                "module_url": module_url(module_path, prefix),
                "entry_point": config.ENTRY_POINT,
                "base_url": str(request.base_url).rstrip("/"),
            },
            headers=no_cache,
        )

    logger.info(f"[AssetServer] Serving {module_path} at {module_url(module_path, prefix)}")
    return app
