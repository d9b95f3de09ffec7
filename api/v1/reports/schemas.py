from pydantic import BaseModel
from typing import Dict, List


class MemberContribution(BaseModel):
    user_id: int
    name: str
    assigned: int = 0
    completed: int = 0


class WorkspaceReport(BaseModel):
    workspace_id: int
    project_count: int
    member_count: int
    task_total: int
    tasks_by_status: Dict[str, int]
    tasks_by_priority: Dict[str, int]
    completed_tasks: int
    completion_rate: int
    average_progress: float
    contributions: List[MemberContribution]
