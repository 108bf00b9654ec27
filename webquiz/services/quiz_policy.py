from webquiz.models.domain import Quiz, User


class QuizAuthorizationPolicy:
    """Only a quiz's author may delete it."""

    def can_delete(self, acting_user: User, quiz: Quiz) -> bool:
        return acting_user.id is not None and acting_user.id == quiz.author_id
