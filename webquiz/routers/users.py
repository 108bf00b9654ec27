# webquiz/routers/users.py
from fastapi import APIRouter, Depends
from webquiz.models.domain import User
from webquiz.models.schemas import UserPublic
from webquiz.routers.deps import require_user

router = APIRouter(prefix="/api/users", tags=["Users"])

@router.get("/me", response_model=UserPublic)
def read_me(current_user: User = Depends(require_user)):
    return UserPublic(
        id=current_user.id,
        email=current_user.email,
        role=current_user.role,
        created_at=current_user.created_at,
        last_login=current_user.last_login,
    )
