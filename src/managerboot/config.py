"""managerboot 配置

配置分为以下几类：
- 模块配置：binary module 位置、入口函数名
- 加载配置：远程获取超时
- 服务配置：静态资源服务器
- 日志/指标配置
"""

import os

# === 模块配置 ===
MODULE_LOCATION = os.environ.get(
    "MANAGERBOOT_MODULE_LOCATION", "static/pkg/thoth_manager_bg.pyc"
)  # 路径或 http(s) URL
ENTRY_POINT = "run_app"  # 模块入口函数（无参数）
HOST_REQUIRES_ATTR = "__host_requires__"  # 模块声明所需 host 函数的属性名
HOST_ATTR = "__host__"  # 注入到模块命名空间的 HostEnvironment

# === 加载配置 ===
FETCH_TIMEOUT = float(os.environ.get("MANAGERBOOT_FETCH_TIMEOUT", "30"))  # 秒
REMOTE_SCHEMES = ("http://", "https://")

# === 静态资源服务配置 ===
SERVER_HOST = os.environ.get("MANAGERBOOT_HOST", "0.0.0.0")
SERVER_PORT = int(os.environ.get("MANAGERBOOT_PORT", "8080"))
SERVER_KEEP_ALIVE = int(os.environ.get("MANAGERBOOT_KEEP_ALIVE", "5"))  # 秒
URL_PREFIX = "/admin"
CACHE_CONTROL = "no-cache"
MODULE_MEDIA_TYPE = "application/x-python-code"
CORS_ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]

# === 日志配置 ===
LOG_LEVEL = os.environ.get("MANAGERBOOT_LOG_LEVEL", "INFO")

# === 指标配置 ===
METRICS_ENABLED = True  # 是否启用指标收集
