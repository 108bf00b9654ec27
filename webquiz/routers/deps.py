"""Wiring shared by the routers: which stores back the services and who is calling."""

from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from webquiz.core.config import settings
from webquiz.core.errors import NotAuthenticatedError
from webquiz.core.security import decode_subject
from webquiz.db.firestore import get_db
from webquiz.models.domain import User
from webquiz.repositories.base import QuizStore, UserStore
from webquiz.repositories.memory_repo import InMemoryQuizRepository, InMemoryUserRepository
from webquiz.repositories.quizzes_repo import FirestoreQuizRepository
from webquiz.repositories.users_repo import FirestoreUserRepository
from webquiz.services.quiz_service import QuizLifecycleService

# auto_error=False: a request without a token is anonymous, not rejected here
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


@lru_cache(maxsize=1)
def _memory_stores() -> tuple[InMemoryQuizRepository, InMemoryUserRepository]:
    return InMemoryQuizRepository(), InMemoryUserRepository()


def get_quiz_store() -> QuizStore:
    if settings.STORAGE_BACKEND == "memory":
        return _memory_stores()[0]
    return FirestoreQuizRepository(get_db())


def get_user_store() -> UserStore:
    if settings.STORAGE_BACKEND == "memory":
        return _memory_stores()[1]
    return FirestoreUserRepository(get_db())


def get_quiz_service(
    quizzes: QuizStore = Depends(get_quiz_store),
    users: UserStore = Depends(get_user_store),
) -> QuizLifecycleService:
    return QuizLifecycleService(quizzes, users, page_size=settings.PAGE_SIZE)


def get_acting_user(
    token: Optional[str] = Depends(oauth2_scheme),
    users: UserStore = Depends(get_user_store),
) -> Optional[User]:
    if token is None:
        return None
    try:
        user_id = decode_subject(token)
    except JWTError:
        raise NotAuthenticatedError("Could not validate credentials")
    user = users.find_by_id(user_id)
    if user is None:
        raise NotAuthenticatedError("Could not validate credentials")
    return user


def require_user(user: Optional[User] = Depends(get_acting_user)) -> User:
    if user is None:
        raise NotAuthenticatedError("not authenticated")
    return user
