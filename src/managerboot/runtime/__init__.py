"""Runtime module - Bootstrap and lifecycle management"""

from .bootstrap import (
    Bootstrap,
    BootState,
    get_current_bootstrap,
    start,
)

__all__ = [
    "start",
    "Bootstrap",
    "BootState",
    "get_current_bootstrap",
]
