import os, json, base64, pathlib
from functools import lru_cache

from google.cloud import firestore
from google.oauth2 import service_account

from webquiz.core.config import settings

QUIZZES = "quizzes"
USERS = "users"


def _client_for(creds: service_account.Credentials) -> firestore.Client:
    project = settings.GOOGLE_CLOUD_PROJECT or os.getenv("GOOGLE_CLOUD_PROJECT") or creds.project_id
    return firestore.Client(project=project, credentials=creds)


@lru_cache(maxsize=1)
def get_db() -> firestore.Client:
    """Create the Firestore client on first use and reuse it afterwards."""
    # 1) base64-encoded service account key
    key_b64 = os.getenv("FIREBASE_KEY_B64")
    if key_b64:
        creds = service_account.Credentials.from_service_account_info(
            json.loads(base64.b64decode(key_b64))
        )
        return _client_for(creds)

    # 2) key file path from env or settings
    path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or settings.GOOGLE_APPLICATION_CREDENTIALS
    if path and pathlib.Path(path).exists():
        return _client_for(service_account.Credentials.from_service_account_file(path))

    # 3) application default credentials / emulator
    return firestore.Client(project=settings.GOOGLE_CLOUD_PROJECT)
