"""任务服务自定义异常"""


class TaskboardError(Exception):
    """任务服务基础异常"""
    pass


class TaskNotFoundError(TaskboardError):
    """任务不存在错误"""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"任务不存在: {task_id}")


class BadInputError(TaskboardError):
    """请求体无法解析"""
    pass


class StoreUnavailableError(TaskboardError):
    """存储不可用（预留给持久化后端）"""
    pass
