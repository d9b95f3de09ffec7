from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from models.user import UserRole
from api.v1.auth.schemas import UserPublic

# -----------------------------
#  Workspaces
# -----------------------------

class WorkspaceCreate(BaseModel):
    name: str = Field(..., max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    deadline: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, value):
        if not value.strip():
            raise ValueError("Workspace name is required")
        return value.strip()


class WorkspaceOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    deadline: Optional[datetime] = None
    admin_id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

# -----------------------------
#  Members
# -----------------------------

class WorkspaceMemberAdd(BaseModel):
    user_id: int
    role: UserRole = UserRole.member


class WorkspaceMemberOut(BaseModel):
    id: int
    workspace_id: int
    user_id: int
    role: UserRole

    model_config = ConfigDict(from_attributes=True)


class WorkspaceMemberWithUser(WorkspaceMemberOut):
    user: UserPublic

# -----------------------------
#  Activity timeline
# -----------------------------

class ActivityOut(BaseModel):
    id: int
    workspace_id: int
    type: str
    content: str
    entity_id: Optional[int] = None
    entity_type: Optional[str] = None
    created_at: Optional[datetime] = None
    # Empty for anonymous entries such as feedback submissions
    user_id: Optional[int] = None
    user: Optional[UserPublic] = None
