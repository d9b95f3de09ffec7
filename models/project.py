from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from core.db.base import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    deadline = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False, index=True)
    workspace = relationship("Workspace", back_populates="projects")

    members = relationship("ProjectMember", back_populates="project")
    tasks = relationship("Task", back_populates="project")
