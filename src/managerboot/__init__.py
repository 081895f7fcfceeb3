"""managerboot - 加载预编译 manager 模块并移交控制权"""

__version__ = "0.1.0"
