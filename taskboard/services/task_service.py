import logging
from typing import List

from ..models.task import Task, TaskCreate, TaskPatch
from ..storage.task_store import TaskStore

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, store: TaskStore):
        self.store = store

    def create_task(self, data: TaskCreate) -> Task:
        """创建单个任务"""
        task = self.store.create(data)
        logger.info(f"任务已创建: {task.id}, 标题: {task.title!r}")
        return task

    def create_tasks(self, items: List[TaskCreate]) -> List[Task]:
        """批量创建任务"""
        tasks = self.store.create_many(items)
        logger.info(f"任务已批量创建: {[task.id for task in tasks]}")
        return tasks

    def list_tasks(self) -> List[Task]:
        """列出所有任务（包括已归档）"""
        return self.store.list_all()

    def get_task(self, task_id: str) -> Task:
        """查询任务"""
        return self.store.get(task_id)

    def update_task(self, task_id: str, patch: TaskPatch) -> Task:
        """部分更新任务，只合并请求中出现的字段"""
        if not patch.fields:
            logger.info(f"更新请求不含有效字段，仅刷新修改时间: {task_id}")
        return self.store.update(task_id, patch)

    def archive_task(self, task_id: str) -> Task:
        """归档任务（已归档的任务会再次归档并刷新时间）"""
        task = self.store.archive(task_id)
        logger.info(f"任务已归档: {task_id}")
        return task

    def count_tasks(self) -> int:
        """任务总数（包括已归档）"""
        return self.store.count()
