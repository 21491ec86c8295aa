from typing import Any, Dict, List, Union

from fastapi import APIRouter, Body, Depends, Response, status
from pydantic import ValidationError

from ..exceptions import BadInputError
from ..models.task import Task, TaskCreate, TaskPatch
from ..services.task_service import TaskService
from ..storage.task_store import InMemoryTaskStore

router = APIRouter(prefix="/tasks", tags=["任务管理"])
task_store = InMemoryTaskStore()
task_service = TaskService(task_store)


def get_task_service() -> TaskService:
    return task_service


def _parse_create(item: Dict[str, Any]) -> TaskCreate:
    try:
        return TaskCreate.model_validate(item)
    except ValidationError as e:
        raise BadInputError(f"请求体格式错误: {e.errors()[0]['msg']}") from e


@router.get(
    "",
    response_model=List[Task],
    summary="列出所有任务",
    description="返回全部任务，包括已归档的任务"
)
def list_tasks(service: TaskService = Depends(get_task_service)):
    return service.list_tasks()


@router.post(
    "",
    response_model=Union[Task, List[Task]],
    status_code=status.HTTP_201_CREATED,
    summary="创建任务",
    description="请求体为单个对象时创建一个任务，为数组时批量创建"
)
def create_task(
    payload: Union[Dict[str, Any], List[Dict[str, Any]]] = Body(...),
    service: TaskService = Depends(get_task_service),
):
    """
    创建任务

    - **title**: 任务标题（可选）
    - id、status 和时间戳由服务端生成，请求中的值会被忽略
    """
    if isinstance(payload, list):
        return service.create_tasks([_parse_create(item) for item in payload])
    return service.create_task(_parse_create(payload))


@router.get(
    "/{task_id}",
    response_model=Task,
    summary="查询任务",
    description="根据任务 ID 查询任务详情"
)
def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    return service.get_task(task_id)


@router.put(
    "/{task_id}",
    response_model=Task,
    summary="更新任务",
    description="部分更新任务，只修改请求中出现的字段"
)
def update_task(
    task_id: str,
    payload: Dict[str, Any] = Body(...),
    service: TaskService = Depends(get_task_service),
):
    """
    部分更新任务

    - **title**: 新标题（可选）
    - **status**: 新状态（可选，任意字符串）
    - 字段类型不是字符串时忽略该字段，不会拒绝整个请求
    """
    return service.update_task(task_id, TaskPatch.from_payload(payload))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="归档任务",
    description="软删除：任务仍可查询，状态变为 archived 并记录归档时间"
)
def archive_task(task_id: str, service: TaskService = Depends(get_task_service)):
    service.archive_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
