"""Load a demo author and a few sample quizzes into the configured store.

Run from the repository root:  python -m seeding.seed_firestore
"""
import logging

from webquiz.core.errors import NotFoundError
from webquiz.core.logging import configure_logging
from webquiz.core.security import password_hasher
from webquiz.models.domain import User
from webquiz.routers.deps import get_quiz_store, get_user_store
from webquiz.services.quiz_service import QuizLifecycleService

logger = logging.getLogger("seeding")

DEMO_EMAIL = "demo@webquiz.dev"
DEMO_PASSWORD = "demo-password"

SEED_QUIZZES = [
    {
        "title": "The Java Logo",
        "text": "What is depicted on the Java logo?",
        "options": ["Robot", "Tea leaf", "Cup of coffee", "Bug"],
        "answer": {2},
    },
    {
        "title": "Coffee drinks",
        "text": "Select only coffee drinks.",
        "options": ["Americano", "Tea", "Cappuccino", "Sprite"],
        "answer": {0, 2},
    },
    {
        "title": "Math1",
        "text": "Which of the following is equal to 4?",
        "options": ["1+3", "2+2", "8-1", "1+5"],
        "answer": {0, 1},
    },
]


def seed_quizzes(service: QuizLifecycleService, author: User) -> list[str]:
    """Create the sample quizzes `author` does not have yet; returns the new quiz ids."""
    existing = set()
    for quiz_id in author.authored_quiz_ids:
        try:
            existing.add(service.get_quiz(quiz_id).title)
        except NotFoundError:
            logger.warning("Demo author lists missing quiz %s", quiz_id)
    ids = []
    for data in SEED_QUIZZES:
        if data["title"] in existing:
            continue
        summary = service.create_quiz(author, data["title"], data["text"], data["options"], data["answer"])
        ids.append(summary.id)
    return ids


def seed_demo_data() -> list[str]:
    users = get_user_store()
    author = users.find_by_email(DEMO_EMAIL)
    if author is None:
        author = users.save(User(email=DEMO_EMAIL, hashed_password=password_hasher.hash(DEMO_PASSWORD)))
    service = QuizLifecycleService(get_quiz_store(), users)
    return seed_quizzes(service, author)


if __name__ == "__main__":
    configure_logging()
    quiz_ids = seed_demo_data()
    logger.info("Seeded %d quizzes: %s", len(quiz_ids), ", ".join(quiz_ids))
