from pydantic import BaseModel, Field
from typing import Optional

# Read-side shapes live with the anonymizer so no response can carry a submitter
from core.anonymizer import AnonymousFeedback, FeedbackSummary  # noqa: F401

MIN_SCORE = 1
MAX_SCORE = 5


class FeedbackCreate(BaseModel):
    target_user_id: int
    effort_score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    communication_score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    reliability_score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    comments: Optional[str] = None
