import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List

from ..exceptions import TaskNotFoundError
from ..models.task import Task, TaskCreate, TaskPatch, TaskStatus
from .locks import ReadWriteLock

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskStore(ABC):
    """任务存储接口，所有读写都经过它"""

    @abstractmethod
    def create(self, data: TaskCreate) -> Task:
        """创建任务并返回存储后的记录"""

    @abstractmethod
    def create_many(self, items: List[TaskCreate]) -> List[Task]:
        """批量创建任务"""

    @abstractmethod
    def list_all(self) -> List[Task]:
        """返回全部任务（包括已归档）的快照"""

    @abstractmethod
    def get(self, task_id: str) -> Task:
        """按 ID 获取任务，不存在时抛出 TaskNotFoundError"""

    @abstractmethod
    def update(self, task_id: str, patch: TaskPatch) -> Task:
        """部分更新任务，不存在时抛出 TaskNotFoundError"""

    @abstractmethod
    def archive(self, task_id: str) -> Task:
        """归档任务（软删除），不存在时抛出 TaskNotFoundError"""

    @abstractmethod
    def count(self) -> int:
        """任务总数"""


class InMemoryTaskStore(TaskStore):
    """
    任务存储（内存）

    整个存储共用一把读写锁：写操作在写锁内完成完整的读-改-写，
    读操作持有读锁。对外返回的都是副本，调用方无法绕过锁修改状态。
    记录不会被物理删除，存储在进程生命周期内只增不减。
    """

    def __init__(self):
        self._tasks: Dict[str, Task] = {}
        self._lock = ReadWriteLock()

    def create(self, data: TaskCreate) -> Task:
        with self._lock.write():
            task = self._insert(data)
        logger.debug(f"创建任务: {task.id}")
        return task.model_copy()

    def create_many(self, items: List[TaskCreate]) -> List[Task]:
        with self._lock.write():
            tasks = [self._insert(data) for data in items]
        logger.debug(f"批量创建任务: {len(tasks)} 条")
        return [task.model_copy() for task in tasks]

    def list_all(self) -> List[Task]:
        with self._lock.read():
            return [task.model_copy() for task in self._tasks.values()]

    def get(self, task_id: str) -> Task:
        with self._lock.read():
            return self._require(task_id).model_copy()

    def update(self, task_id: str, patch: TaskPatch) -> Task:
        with self._lock.write():
            task = self._require(task_id)
            if patch.is_set("title"):
                task.title = patch.title
            if patch.is_set("status"):
                task.status = patch.status
            task.updated_at = self._next_timestamp(task)
            result = task.model_copy()
        logger.debug(f"更新任务: {task_id}, 字段: {sorted(patch.fields)}")
        return result

    def archive(self, task_id: str) -> Task:
        with self._lock.write():
            task = self._require(task_id)
            now = self._next_timestamp(task)
            task.status = TaskStatus.ARCHIVED
            task.archived_at = now
            task.updated_at = now
            result = task.model_copy()
        logger.debug(f"归档任务: {task_id}")
        return result

    def count(self) -> int:
        with self._lock.read():
            return len(self._tasks)

    def _insert(self, data: TaskCreate) -> Task:
        # 调用方必须持有写锁
        task_id = str(uuid.uuid4())
        while task_id in self._tasks:
            task_id = str(uuid.uuid4())

        now = _utcnow()
        task = Task(
            id=task_id,
            title=data.title,
            status=TaskStatus.CREATED,
            created_at=now,
            updated_at=now,
        )
        self._tasks[task_id] = task
        return task

    def _require(self, task_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            logger.warning(f"任务不存在: {task_id}")
            raise TaskNotFoundError(task_id)
        return task

    @staticmethod
    def _next_timestamp(task: Task) -> datetime:
        # 系统时钟回拨时也不让 updated_at 倒退
        return max(_utcnow(), task.updated_at)
