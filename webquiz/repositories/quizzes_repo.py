import logging

from google.cloud import firestore

from webquiz.db.firestore import QUIZZES
from webquiz.models.domain import Quiz
from webquiz.models.schemas import Page

logger = logging.getLogger(__name__)


def quiz_to_doc(quiz: Quiz) -> dict:
    data = quiz.model_dump(exclude={"id"})
    # Firestore has no set type
    data["correct_options"] = sorted(quiz.correct_options)
    return data

def quiz_from_doc(doc) -> Quiz:
    return Quiz(id=doc.id, **doc.to_dict())


class FirestoreQuizRepository:
    def __init__(self, db: firestore.Client):
        self.db = db

    @property
    def collection(self):
        return self.db.collection(QUIZZES)

    def find_by_id(self, quiz_id: str) -> Quiz | None:
        doc = self.collection.document(quiz_id).get()
        return quiz_from_doc(doc) if doc.exists else None

    def find_page(self, page: int, size: int) -> Page[Quiz]:
        q = self.collection.order_by("created_at", direction=firestore.Query.ASCENDING)
        docs = list(q.offset(page * size).limit(size).stream())
        total = self.collection.count().get()[0][0].value
        return Page[Quiz](items=[quiz_from_doc(d) for d in docs], page=page, size=size, total=total)

    def save(self, quiz: Quiz) -> Quiz:
        ref = self.collection.document(quiz.id) if quiz.id else self.collection.document()
        ref.set(quiz_to_doc(quiz))
        logger.debug("Stored quiz %s", ref.id)
        return quiz.model_copy(update={"id": ref.id})

    def delete(self, quiz: Quiz) -> None:
        self.collection.document(quiz.id).delete()
