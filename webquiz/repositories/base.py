from typing import Protocol

from webquiz.models.domain import CompletionRecord, Quiz, User
from webquiz.models.schemas import Page


class QuizStore(Protocol):
    def find_by_id(self, quiz_id: str) -> Quiz | None: ...
    def find_page(self, page: int, size: int) -> Page[Quiz]: ...
    def save(self, quiz: Quiz) -> Quiz: ...
    def delete(self, quiz: Quiz) -> None: ...


class UserStore(Protocol):
    """`save` writes the whole record; the add/remove methods change one list
    field atomically and leave the rest of the stored record untouched."""

    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: str) -> User | None: ...
    def save(self, user: User) -> User: ...
    def touch_last_login(self, user: User) -> None: ...
    def add_completion(self, user_id: str, record: CompletionRecord) -> None: ...
    def add_authored_quiz(self, user_id: str, quiz_id: str) -> None: ...
    def remove_authored_quiz(self, user_id: str, quiz_id: str) -> None: ...
