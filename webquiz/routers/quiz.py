import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from webquiz.models.domain import CompletionRecord, User
from webquiz.models.schemas import Page, QuizCreate, QuizSummary, Solution, SolutionFeedback
from webquiz.core.config import settings
from webquiz.routers.deps import get_acting_user, get_quiz_service, require_user
from webquiz.services.quiz_service import QuizLifecycleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/quizzes", tags=["Quiz"])

@router.get("", response_model=Page[QuizSummary])
def list_quizzes(
    page: int = Query(0, ge=0, le=settings.MAX_PAGE),
    _: User = Depends(require_user),  # auth gate
    service: QuizLifecycleService = Depends(get_quiz_service),
):
    return service.list_quizzes(page)

@router.post("", response_model=QuizSummary)
def create_quiz(
    payload: QuizCreate,
    user: Optional[User] = Depends(get_acting_user),
    service: QuizLifecycleService = Depends(get_quiz_service),
):
    return service.create_quiz(user, payload.title, payload.text, payload.options, payload.answer)

# declared before /{quiz_id} so "completed" is not taken for an id
@router.get("/completed", response_model=Page[CompletionRecord])
def get_completed(
    page: int = Query(0, ge=0, le=settings.MAX_PAGE),
    user: Optional[User] = Depends(get_acting_user),
    service: QuizLifecycleService = Depends(get_quiz_service),
):
    logger.debug("Completed quizzes page %d for user %s", page, user.id if user else None)
    return service.get_completions(user, page)

@router.get("/{quiz_id}", response_model=QuizSummary)
def get_quiz(
    quiz_id: str,
    _: User = Depends(require_user),
    service: QuizLifecycleService = Depends(get_quiz_service),
):
    return service.get_quiz(quiz_id)

@router.post("/{quiz_id}/solve", response_model=SolutionFeedback)
def solve_quiz(
    quiz_id: str,
    solution: Solution,
    user: Optional[User] = Depends(get_acting_user),
    service: QuizLifecycleService = Depends(get_quiz_service),
):
    return service.evaluate_answer(user, quiz_id, solution.answer)

@router.delete("/{quiz_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_quiz(
    quiz_id: str,
    user: Optional[User] = Depends(get_acting_user),
    service: QuizLifecycleService = Depends(get_quiz_service),
):
    logger.debug("Delete request for quiz %s", quiz_id)
    service.delete_quiz(user, quiz_id)
