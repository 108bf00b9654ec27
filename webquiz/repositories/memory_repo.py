"""In-process stores used when STORAGE_BACKEND=memory and by the tests.

Entities are copied on the way in and out so callers only see changes they
explicitly save, the same as with Firestore.
"""

import itertools
import threading
from datetime import datetime, timezone

from webquiz.models.domain import CompletionRecord, Quiz, User
from webquiz.models.schemas import Page


class InMemoryQuizRepository:
    def __init__(self):
        self._quizzes: dict[str, Quiz] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def find_by_id(self, quiz_id: str) -> Quiz | None:
        with self._lock:
            quiz = self._quizzes.get(quiz_id)
            return quiz.model_copy(deep=True) if quiz else None

    def find_page(self, page: int, size: int) -> Page[Quiz]:
        with self._lock:
            ordered = list(self._quizzes.values())
        start = page * size
        items = [q.model_copy(deep=True) for q in ordered[start:start + size]]
        return Page[Quiz](items=items, page=page, size=size, total=len(ordered))

    def save(self, quiz: Quiz) -> Quiz:
        with self._lock:
            quiz_id = quiz.id or str(next(self._ids))
            stored = quiz.model_copy(update={"id": quiz_id}, deep=True)
            self._quizzes[quiz_id] = stored
            return stored.model_copy(deep=True)

    def delete(self, quiz: Quiz) -> None:
        with self._lock:
            self._quizzes.pop(quiz.id, None)


class InMemoryUserRepository:
    def __init__(self):
        self._users: dict[str, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user.model_copy(deep=True)
        return None

    def find_by_id(self, user_id: str) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy(deep=True) if user else None

    def save(self, user: User) -> User:
        with self._lock:
            user_id = user.id or f"u{next(self._ids)}"
            stored = user.model_copy(update={"id": user_id}, deep=True)
            self._users[user_id] = stored
            return stored.model_copy(deep=True)

    def touch_last_login(self, user: User) -> None:
        with self._lock:
            stored = self._users.get(user.id)
            if stored is not None:
                stored.last_login = datetime.now(timezone.utc)

    def add_completion(self, user_id: str, record: CompletionRecord) -> None:
        with self._lock:
            self._users[user_id].completions.append(record.model_copy())

    def add_authored_quiz(self, user_id: str, quiz_id: str) -> None:
        with self._lock:
            authored = self._users[user_id].authored_quiz_ids
            if quiz_id not in authored:
                authored.append(quiz_id)

    def remove_authored_quiz(self, user_id: str, quiz_id: str) -> None:
        with self._lock:
            authored = self._users[user_id].authored_quiz_ids
            if quiz_id in authored:
                authored.remove(quiz_id)
