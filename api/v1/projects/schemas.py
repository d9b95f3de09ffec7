from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from models.user import UserRole
from api.v1.auth.schemas import UserPublic


class ProjectCreate(BaseModel):
    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    deadline: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, value):
        if not value.strip():
            raise ValueError("Project title is required")
        return value.strip()


class ProjectOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    deadline: Optional[datetime] = None
    workspace_id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProjectMemberAdd(BaseModel):
    user_id: int


class ProjectMemberOut(BaseModel):
    id: int
    project_id: int
    user_id: int
    # Inherited from the workspace membership
    role: Optional[UserRole] = None


class ProjectMemberWithUser(ProjectMemberOut):
    user: UserPublic
