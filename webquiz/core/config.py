from pydantic_settings import BaseSettings
from pydantic import AnyHttpUrl
from typing import List, Literal, Optional

class Settings(BaseSettings):
    ENV: str = "development"
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ALGORITHM: str = "HS256"

    CORS_ORIGINS: List[AnyHttpUrl] = []

    # "memory" keeps everything in-process (local runs, tests)
    STORAGE_BACKEND: Literal["firestore", "memory"] = "firestore"
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = None
    GOOGLE_CLOUD_PROJECT: Optional[str] = None

    PAGE_SIZE: int = 10
    # highest page index accepted; keeps Firestore offsets bounded
    MAX_PAGE: int = 1000
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
