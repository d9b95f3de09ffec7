from .user import User, UserRole
from .workspace import Workspace
from .workspace_member import WorkspaceMember
from .project import Project
from .project_member import ProjectMember
from .task import Task, TaskStatus, TaskPriority
from .feedback import Feedback
from .activity import Activity
