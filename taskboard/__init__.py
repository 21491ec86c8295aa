"""Taskboard - 内存任务管理服务"""

__version__ = "1.0.0"
