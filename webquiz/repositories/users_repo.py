from datetime import datetime, timezone

from google.cloud import firestore

from webquiz.db.firestore import USERS
from webquiz.models.domain import CompletionRecord, User


def user_from_doc(doc) -> User:
    return User(id=doc.id, **doc.to_dict())


class FirestoreUserRepository:
    def __init__(self, db: firestore.Client):
        self.db = db

    @property
    def collection(self):
        return self.db.collection(USERS)

    def find_by_email(self, email: str) -> User | None:
        docs = list(self.collection.where("email", "==", email).limit(1).stream())
        return user_from_doc(docs[0]) if docs else None

    def find_by_id(self, user_id: str) -> User | None:
        doc = self.collection.document(user_id).get()
        return user_from_doc(doc) if doc.exists else None

    def save(self, user: User) -> User:
        ref = self.collection.document(user.id) if user.id else self.collection.document()
        ref.set(user.model_dump(exclude={"id"}))
        return user.model_copy(update={"id": ref.id})

    def touch_last_login(self, user: User) -> None:
        self.collection.document(user.id).update({"last_login": datetime.now(timezone.utc)})

    # array transforms are applied server side; repeat solves stay distinct
    # through their microsecond completed_at
    def add_completion(self, user_id: str, record: CompletionRecord) -> None:
        self.collection.document(user_id).update({"completions": firestore.ArrayUnion([record.model_dump()])})

    def add_authored_quiz(self, user_id: str, quiz_id: str) -> None:
        self.collection.document(user_id).update({"authored_quiz_ids": firestore.ArrayUnion([quiz_id])})

    def remove_authored_quiz(self, user_id: str, quiz_id: str) -> None:
        self.collection.document(user_id).update({"authored_quiz_ids": firestore.ArrayRemove([quiz_id])})
