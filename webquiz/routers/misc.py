from fastapi import APIRouter
from webquiz.core.config import settings

router = APIRouter(tags=["Misc"])

@router.get("/health")
def health():
    return {"status": "ok", "storage": settings.STORAGE_BACKEND}
