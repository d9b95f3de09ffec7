from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.db.dependencies import get_db
from models.user import User
from api.v1.auth.utils import get_current_user

from .schemas import WorkspaceReport
from .services import workspace_report

report_router = APIRouter(tags=["Reports"])


@report_router.get("/workspaces/{workspace_id}/reports", response_model=WorkspaceReport)
def workspace_report_route(
    workspace_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return workspace_report(db, workspace_id, current_user)
