from datetime import datetime, timezone
from typing import List, Optional, Set

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CompletionRecord(BaseModel):
    quiz_id: str
    completed_at: datetime


class User(BaseModel):
    id: Optional[str] = None
    email: str
    hashed_password: str
    role: str = "ROLE_USER"
    created_at: datetime = Field(default_factory=utcnow)
    last_login: Optional[datetime] = None
    authored_quiz_ids: List[str] = []
    completions: List[CompletionRecord] = []


class Quiz(BaseModel):
    """A single multiple-choice question.

    `correct_options` holds indices into `options`; the service guarantees they
    are in range before a quiz is ever saved, and nothing mutates them later.
    """

    id: Optional[str] = None
    author_id: str
    title: str
    text: str
    options: List[str]
    correct_options: Set[int]
    created_at: datetime = Field(default_factory=utcnow)
