"""测试公共 fixtures"""

import pytest
from fastapi.testclient import TestClient

from taskboard.api.tasks import get_task_service
from taskboard.main import app
from taskboard.services.task_service import TaskService
from taskboard.storage.task_store import InMemoryTaskStore


@pytest.fixture
def store():
    """每个测试独立的内存存储"""
    return InMemoryTaskStore()


@pytest.fixture
def service(store):
    return TaskService(store)


@pytest.fixture
def client(service):
    """接入独立存储的测试客户端"""
    app.dependency_overrides[get_task_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
