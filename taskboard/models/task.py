from datetime import datetime
from typing import Any, Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskStatus:
    """状态标记（status 为自由文本，这里只是服务端写入的约定值）"""
    CREATED = "created"
    ARCHIVED = "archived"


class Task(BaseModel):
    """任务模型"""
    id: str = Field(..., description="任务ID（服务端生成）")
    title: str = Field(default="", description="任务标题")
    status: str = Field(default=TaskStatus.CREATED, description="任务状态")
    created_at: datetime = Field(..., description="创建时间")
    updated_at: datetime = Field(..., description="最后修改时间")
    archived_at: Optional[datetime] = Field(None, description="归档时间（未归档时为空）")


class TaskCreate(BaseModel):
    """创建任务请求，客户端提供的 id/status/时间戳一律忽略"""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default="", description="任务标题（null 视为空标题）")

    @field_validator("title", mode="after")
    @classmethod
    def _null_title(cls, value: Optional[str]) -> str:
        return "" if value is None else value


class TaskPatch(BaseModel):
    """
    部分更新请求

    每个字段要么带字符串值出现，要么缺省；只有出现的字段会合并到任务上。
    显式传入 None 等同于缺省。
    """
    title: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "TaskPatch":
        """
        从原始 JSON 对象构建补丁

        类型不是字符串的字段直接丢弃（该字段保持不变），不会导致整个请求失败。

        Args:
            data: 解码后的 JSON 对象

        Returns:
            TaskPatch 实例，model_fields_set 只包含有效字段
        """
        accepted = {
            name: value
            for name, value in data.items()
            if name in cls.model_fields and isinstance(value, str)
        }
        return cls(**accepted)

    @property
    def fields(self) -> FrozenSet[str]:
        return frozenset(name for name in self.model_fields_set if getattr(self, name) is not None)

    def is_set(self, name: str) -> bool:
        return name in self.fields
