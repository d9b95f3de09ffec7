from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from core.db.base import Base


class Feedback(Base):
    """Write-side peer feedback record.

    ``submitted_by_id`` exists for audit and rate limiting only. Nothing that
    leaves the service reads it: every read path goes through
    ``core.anonymizer.anonymize`` which builds a projection without it.
    """

    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False, index=True)
    target_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    effort_score = Column(Integer, nullable=False)
    communication_score = Column(Integer, nullable=False)
    reliability_score = Column(Integer, nullable=False)
    comments = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    submitted_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    workspace = relationship("Workspace")
    target_user = relationship("User", foreign_keys=[target_user_id])

    __table_args__ = (
        CheckConstraint("effort_score BETWEEN 1 AND 5", name="ck_feedback_effort_score"),
        CheckConstraint("communication_score BETWEEN 1 AND 5", name="ck_feedback_communication_score"),
        CheckConstraint("reliability_score BETWEEN 1 AND 5", name="ck_feedback_reliability_score"),
    )
