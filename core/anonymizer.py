"""Read-side projection for peer feedback.

``AnonymousFeedback`` has no submitter field, so anything typed as it cannot
leak who wrote a review. The projection is applied for every caller role,
admins included.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from models.feedback import Feedback

SCORE_FIELDS = ("effort_score", "communication_score", "reliability_score")


class AnonymousFeedback(BaseModel):
    id: int
    workspace_id: int
    target_user_id: int
    effort_score: int
    communication_score: int
    reliability_score: int
    comments: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(extra="forbid")


class FeedbackSummary(BaseModel):
    target_user_id: Optional[int] = None
    count: int = 0
    effort_score: float = 0.0
    communication_score: float = 0.0
    reliability_score: float = 0.0


def anonymize_one(record: Feedback) -> AnonymousFeedback:
    return AnonymousFeedback(
        id=record.id,
        workspace_id=record.workspace_id,
        target_user_id=record.target_user_id,
        effort_score=record.effort_score,
        communication_score=record.communication_score,
        reliability_score=record.reliability_score,
        comments=record.comments,
        created_at=record.created_at,
    )


def anonymize(records: Iterable[Feedback]) -> List[AnonymousFeedback]:
    return [anonymize_one(record) for record in records]


def summarize(records: Iterable[AnonymousFeedback], target_user_id: Optional[int] = None) -> FeedbackSummary:
    """Mean scores and submission count; every field is 0 when nothing was submitted."""
    items = list(records)
    if not items:
        return FeedbackSummary(target_user_id=target_user_id)

    count = len(items)
    means = {
        field: round(sum(getattr(item, field) for item in items) / count, 2)
        for field in SCORE_FIELDS
    }
    return FeedbackSummary(target_user_id=target_user_id, count=count, **means)
