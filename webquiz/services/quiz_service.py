import logging
from datetime import datetime
from typing import AbstractSet, Callable, Optional, Sequence

from webquiz.core.errors import (
    InvalidAnswerIndexError,
    NotAuthenticatedError,
    NotFoundError,
    PermissionDeniedError,
)
from webquiz.models.domain import CompletionRecord, Quiz, User, utcnow
from webquiz.models.schemas import Page, QuizSummary, SolutionFeedback
from webquiz.repositories.base import QuizStore, UserStore
from webquiz.services.answer_evaluator import AnswerEvaluator
from webquiz.services.quiz_policy import QuizAuthorizationPolicy

logger = logging.getLogger(__name__)

PAGE_SIZE = 10


class QuizLifecycleService:
    """Entry point for everything a caller can do with quizzes.

    Every operation that needs an identity takes the already-authenticated
    `acting_user`; `None` means the caller is anonymous and the operation
    fails with NotAuthenticatedError before touching any store. Failures are
    raised where they are detected and never retried.
    """

    def __init__(
        self,
        quizzes: QuizStore,
        users: UserStore,
        evaluator: AnswerEvaluator | None = None,
        policy: QuizAuthorizationPolicy | None = None,
        clock: Callable[[], datetime] = utcnow,
        page_size: int = PAGE_SIZE,
    ):
        self.quizzes = quizzes
        self.users = users
        self.evaluator = evaluator or AnswerEvaluator()
        self.policy = policy or QuizAuthorizationPolicy()
        self.clock = clock
        self.page_size = page_size

    def get_quiz(self, quiz_id: str) -> QuizSummary:
        return QuizSummary.from_quiz(self._find_quiz(quiz_id))

    def list_quizzes(self, page: int) -> Page[QuizSummary]:
        result = self.quizzes.find_page(page, self.page_size)
        return Page[QuizSummary](
            items=[QuizSummary.from_quiz(q) for q in result.items],
            page=result.page,
            size=result.size,
            total=result.total,
        )

    def create_quiz(
        self,
        acting_user: Optional[User],
        title: str,
        text: str,
        options: Sequence[str],
        answer: AbstractSet[int],
    ) -> QuizSummary:
        user = self._require_user(acting_user)
        invalid = {i for i in answer if not 0 <= i < len(options)}
        if invalid:
            raise InvalidAnswerIndexError(
                f"answer indices {sorted(invalid)} must correspond to an option index (0..{len(options) - 1})",
                invalid,
            )

        quiz = self.quizzes.save(Quiz(
            author_id=user.id,
            title=title,
            text=text,
            options=list(options),
            correct_options=set(answer),
            created_at=self.clock(),
        ))
        self.users.add_authored_quiz(user.id, quiz.id)
        logger.debug("User %s added quiz %s", user.id, quiz.id)
        return QuizSummary.from_quiz(quiz)

    def delete_quiz(self, acting_user: Optional[User], quiz_id: str) -> None:
        user = self._require_user(acting_user)
        quiz = self._find_quiz(quiz_id)
        if not self.policy.can_delete(user, quiz):
            logger.warning("User %s tried to delete quiz %s authored by %s", user.id, quiz.id, quiz.author_id)
            raise PermissionDeniedError("user is not the author of this quiz and thus not allowed to delete it")

        self.quizzes.delete(quiz)
        self.users.remove_authored_quiz(user.id, quiz.id)
        logger.info("Quiz %s deleted by its author %s", quiz.id, user.id)

    def evaluate_answer(
        self, acting_user: Optional[User], quiz_id: str, submitted: AbstractSet[int]
    ) -> SolutionFeedback:
        user = self._require_user(acting_user)
        quiz = self._find_quiz(quiz_id)

        success = self.evaluator.evaluate(submitted, quiz.correct_options)
        logger.debug("Answer %s for quiz %s: %s", sorted(submitted), quiz.id, "correct" if success else "wrong")
        if success:
            self.users.add_completion(user.id, CompletionRecord(quiz_id=quiz.id, completed_at=self.clock()))
        return SolutionFeedback(success=success)

    def get_completions(self, acting_user: Optional[User], page: int) -> Page[CompletionRecord]:
        user = self._require_user(acting_user)
        # the caller's copy may predate completions recorded by other requests
        stored = self.users.find_by_id(user.id) or user
        ordered = sorted(stored.completions, key=lambda c: c.completed_at, reverse=True)
        start = page * self.page_size
        return Page[CompletionRecord](
            items=ordered[start:start + self.page_size],
            page=page,
            size=self.page_size,
            total=len(ordered),
        )

    def _require_user(self, acting_user: Optional[User]) -> User:
        if acting_user is None:
            raise NotAuthenticatedError("not authenticated")
        return acting_user

    def _find_quiz(self, quiz_id: str) -> Quiz:
        quiz = self.quizzes.find_by_id(quiz_id)
        if quiz is None:
            raise NotFoundError(f"quiz with id {quiz_id} does not exist")
        return quiz
