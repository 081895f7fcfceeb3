"""Web 服务模块"""

from managerboot.web.app import create_app, module_url
from managerboot.web.server import serve

__all__ = ["create_app", "module_url", "serve"]
