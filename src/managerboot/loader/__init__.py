"""Loader module - 获取并实例化 binary module"""

from .capability import BinaryModule, LoadedModule
from .fetch import fetch_module_bytes
from .format import decode_module
from .host import HostEnvironment, default_host
from .instantiate import instantiate

__all__ = [
    "BinaryModule",
    "LoadedModule",
    "HostEnvironment",
    "default_host",
    "decode_module",
    "fetch_module_bytes",
    "instantiate",
]
