# =============================================================================
# TESTS - QuizLifecycleService
# =============================================================================
# Runs against the in-memory stores with a fake clock (see conftest.py)
# =============================================================================

import pytest

from webquiz.core.errors import (
    InvalidAnswerIndexError,
    NotAuthenticatedError,
    NotFoundError,
    PermissionDeniedError,
)
from webquiz.models.schemas import QuizSummary

OPTIONS = ["A", "B", "C", "D"]


def completions_of(user_repo, user):
    return user_repo.find_by_id(user.id).completions


class TestGetQuiz:

    def test_returns_summary(self, service, sample_quiz):
        summary = service.get_quiz(sample_quiz.id)

        assert isinstance(summary, QuizSummary)
        assert summary.title == "Letters"
        assert summary.options == OPTIONS

    def test_summary_hides_answer_and_author(self, service, sample_quiz):
        data = service.get_quiz(sample_quiz.id).model_dump()

        assert set(data) == {"id", "title", "text", "options"}

    def test_unknown_id_raises_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.get_quiz("404")


class TestListQuizzes:

    def test_pages_of_ten(self, service, author):
        for i in range(12):
            service.create_quiz(author, f"Quiz {i}", "text", OPTIONS, {0})

        first = service.list_quizzes(0)
        second = service.list_quizzes(1)

        assert len(first.items) == 10
        assert len(second.items) == 2
        assert first.total == second.total == 12
        assert first.total_pages == 2
        assert [q.title for q in first.items][:2] == ["Quiz 0", "Quiz 1"]

    def test_page_past_the_end_is_empty(self, service, sample_quiz):
        page = service.list_quizzes(3)

        assert page.items == []
        assert page.total == 1

    def test_empty_store(self, service):
        page = service.list_quizzes(0)

        assert page.items == []
        assert page.total_pages == 0


class TestCreateQuiz:

    def test_anonymous_is_rejected(self, service, quiz_repo):
        with pytest.raises(NotAuthenticatedError):
            service.create_quiz(None, "t", "q", OPTIONS, {0})

        assert quiz_repo.find_page(0, 10).total == 0

    def test_author_is_recorded(self, service, quiz_repo, user_repo, author):
        summary = service.create_quiz(author, "t", "q", OPTIONS, {1, 3})

        stored = quiz_repo.find_by_id(summary.id)
        assert stored.author_id == author.id
        assert stored.correct_options == {1, 3}
        assert user_repo.find_by_id(author.id).authored_quiz_ids == [summary.id]

    def test_last_option_index_is_valid(self, service, author):
        summary = service.create_quiz(author, "t", "q", OPTIONS, {3})

        assert summary.id is not None

    @pytest.mark.parametrize("answer", [{4}, {5}, {-1}, {0, 1, 4}, {0, 1, 2, 3, 100}])
    def test_any_out_of_range_index_fails(self, service, quiz_repo, author, answer):
        """One bad index is enough, however many valid ones accompany it."""
        with pytest.raises(InvalidAnswerIndexError) as exc_info:
            service.create_quiz(author, "t", "q", OPTIONS, answer)

        assert exc_info.value.invalid == {i for i in answer if not 0 <= i < 4}
        assert quiz_repo.find_page(0, 10).total == 0

    def test_authentication_is_checked_before_indices(self, service):
        with pytest.raises(NotAuthenticatedError):
            service.create_quiz(None, "t", "q", OPTIONS, {9})


class TestDeleteQuiz:

    def test_author_deletes(self, service, quiz_repo, user_repo, author, sample_quiz):
        service.delete_quiz(author, sample_quiz.id)

        assert quiz_repo.find_by_id(sample_quiz.id) is None
        assert user_repo.find_by_id(author.id).authored_quiz_ids == []

    def test_other_user_gets_permission_denied(self, service, quiz_repo, other_user, sample_quiz):
        with pytest.raises(PermissionDeniedError):
            service.delete_quiz(other_user, sample_quiz.id)

        assert quiz_repo.find_by_id(sample_quiz.id) is not None

    def test_anonymous_gets_not_authenticated(self, service, sample_quiz):
        with pytest.raises(NotAuthenticatedError):
            service.delete_quiz(None, sample_quiz.id)

    def test_anonymous_checked_before_existence(self, service):
        with pytest.raises(NotAuthenticatedError):
            service.delete_quiz(None, "404")

    def test_unknown_quiz_raises_not_found(self, service, author):
        with pytest.raises(NotFoundError):
            service.delete_quiz(author, "404")

    def test_deleted_quiz_cannot_be_solved(self, service, author, sample_quiz):
        service.delete_quiz(author, sample_quiz.id)

        with pytest.raises(NotFoundError):
            service.evaluate_answer(author, sample_quiz.id, {2})


class TestEvaluateAnswer:

    def test_correct_answer_records_one_completion(self, service, user_repo, clock, other_user, sample_quiz):
        feedback = service.evaluate_answer(other_user, sample_quiz.id, {2})

        assert feedback.success is True
        records = completions_of(user_repo, other_user)
        assert len(records) == 1
        assert records[0].quiz_id == sample_quiz.id
        assert records[0].completed_at == clock.now

    def test_wrong_answer_records_nothing(self, service, user_repo, other_user, sample_quiz):
        feedback = service.evaluate_answer(other_user, sample_quiz.id, {1})

        assert feedback.success is False
        assert feedback.feedback == "Wrong answer! Please, try again."
        assert completions_of(user_repo, other_user) == []

    def test_superset_is_not_a_completion(self, service, user_repo, other_user, sample_quiz):
        feedback = service.evaluate_answer(other_user, sample_quiz.id, {1, 2})

        assert feedback.success is False
        assert completions_of(user_repo, other_user) == []

    def test_repeat_solves_are_all_recorded(self, service, user_repo, clock, other_user, sample_quiz):
        service.evaluate_answer(other_user, sample_quiz.id, {2})
        clock.advance(minutes=1)
        service.evaluate_answer(other_user, sample_quiz.id, {2})

        assert len(completions_of(user_repo, other_user)) == 2

    def test_anonymous_is_rejected(self, service, sample_quiz):
        with pytest.raises(NotAuthenticatedError):
            service.evaluate_answer(None, sample_quiz.id, {2})

    def test_unknown_quiz_raises_not_found(self, service, other_user):
        with pytest.raises(NotFoundError):
            service.evaluate_answer(other_user, "404", {2})


class TestGetCompletions:

    def test_most_recent_first(self, service, clock, author, other_user):
        first = service.create_quiz(author, "first", "q", OPTIONS, {0})
        second = service.create_quiz(author, "second", "q", OPTIONS, {1})

        service.evaluate_answer(other_user, first.id, {0})
        clock.advance(hours=1)
        service.evaluate_answer(other_user, second.id, {1})

        page = service.get_completions(other_user, 0)

        assert [c.quiz_id for c in page.items] == [second.id, first.id]
        assert page.items[0].completed_at > page.items[1].completed_at

    def test_pages_of_ten(self, service, clock, other_user, sample_quiz):
        for _ in range(12):
            clock.advance(seconds=1)
            service.evaluate_answer(other_user, sample_quiz.id, {2})

        first = service.get_completions(other_user, 0)
        second = service.get_completions(other_user, 1)

        assert len(first.items) == 10
        assert len(second.items) == 2
        assert first.total == 12
        assert first.items[0].completed_at == clock.now

    def test_no_completions(self, service, other_user):
        assert service.get_completions(other_user, 0).items == []

    def test_anonymous_is_rejected(self, service):
        with pytest.raises(NotAuthenticatedError):
            service.get_completions(None, 0)


class TestEndToEndScenario:
    """Create, solve right, solve wrong, bad create, forbidden and anonymous delete."""

    def test_scenario(self, service, user_repo, author, other_user):
        quiz = service.create_quiz(author, "Letters", "Pick C", ["A", "B", "C", "D"], {2})

        assert service.evaluate_answer(other_user, quiz.id, {2}).success is True
        assert len(completions_of(user_repo, other_user)) == 1

        assert service.evaluate_answer(other_user, quiz.id, {2, 1}).success is False
        assert len(completions_of(user_repo, other_user)) == 1

        with pytest.raises(InvalidAnswerIndexError):
            service.create_quiz(author, "Bad", "Pick?", ["A", "B", "C", "D"], {5})

        with pytest.raises(PermissionDeniedError):
            service.delete_quiz(other_user, quiz.id)

        with pytest.raises(NotAuthenticatedError):
            service.delete_quiz(None, quiz.id)


class TestOverlappingRequests:
    """Each request works on its own copy of the user loaded at request start."""

    def test_two_copies_both_record_completions(self, service, user_repo, clock, other_user, sample_quiz):
        first_copy = user_repo.find_by_id(other_user.id)
        second_copy = user_repo.find_by_id(other_user.id)

        service.evaluate_answer(first_copy, sample_quiz.id, {2})
        clock.advance(seconds=1)
        service.evaluate_answer(second_copy, sample_quiz.id, {2})

        assert len(completions_of(user_repo, other_user)) == 2

    def test_create_with_stale_copy_keeps_completions(self, service, user_repo, author, sample_quiz):
        stale = user_repo.find_by_id(author.id)
        service.evaluate_answer(user_repo.find_by_id(author.id), sample_quiz.id, {2})

        created = service.create_quiz(stale, "t", "q", OPTIONS, {0})

        stored = user_repo.find_by_id(author.id)
        assert len(stored.completions) == 1
        assert stored.authored_quiz_ids == [sample_quiz.id, created.id]

    def test_completions_listed_from_store(self, service, user_repo, other_user, sample_quiz):
        stale = user_repo.find_by_id(other_user.id)
        service.evaluate_answer(other_user, sample_quiz.id, {2})

        assert service.get_completions(stale, 0).total == 1
