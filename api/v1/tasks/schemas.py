from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from models.task import TaskPriority, TaskStatus
from api.v1.auth.schemas import UserPublic


class TaskCreate(BaseModel):
    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.medium
    assignee_id: int
    deadline: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, value):
        if not value.strip():
            raise ValueError("Task title is required")
        return value.strip()


class TaskUpdate(BaseModel):
    """Only these fields may change after creation."""

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    assignee_id: Optional[int] = None
    deadline: Optional[datetime] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, value):
        if value is not None and not value.strip():
            raise ValueError("Task title cannot be blank")
        return value.strip() if value is not None else value


class TaskOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    progress: int
    project_id: int
    assignee_id: int
    created_by_id: int
    deadline: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TaskWithAssignee(TaskOut):
    assignee: Optional[UserPublic] = None
