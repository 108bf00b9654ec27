from pydantic import BaseModel, EmailStr, Field, computed_field, field_validator
from typing import Generic, List, Optional, Set, TypeVar
from datetime import datetime

from webquiz.models.domain import Quiz

T = TypeVar("T")

CORRECT_FEEDBACK = "Congratulations, you're right!"
WRONG_FEEDBACK = "Wrong answer! Please, try again."


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=5, description="at least 5 characters")

class UserPublic(BaseModel):
    id: str
    email: str
    role: str
    created_at: datetime
    last_login: Optional[datetime] = None

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class QuizCreate(BaseModel):
    title: str
    text: str
    options: List[str] = Field(..., min_length=2, description="at least two answer options")
    answer: Set[int] = Field(..., min_length=1, description="indices of the correct options")

    @field_validator("title", "text")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

class QuizSummary(BaseModel):
    id: str
    title: str
    text: str
    options: List[str]

    @classmethod
    def from_quiz(cls, quiz: Quiz) -> "QuizSummary":
        return cls(id=quiz.id, title=quiz.title, text=quiz.text, options=quiz.options)

class Solution(BaseModel):
    answer: Set[int] = Field(default_factory=set)

class SolutionFeedback(BaseModel):
    success: bool

    @computed_field
    @property
    def feedback(self) -> str:
        return CORRECT_FEEDBACK if self.success else WRONG_FEEDBACK


class Page(BaseModel, Generic[T]):
    items: List[T]
    page: int
    size: int
    total: int

    @computed_field
    @property
    def total_pages(self) -> int:
        return -(-self.total // self.size) if self.size else 0
