from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from webquiz.models.schemas import Token, UserCreate
from webquiz.repositories.base import UserStore
from webquiz.routers.deps import get_user_store
from webquiz.services.auth_service import register_user, login_user

router = APIRouter(prefix="/api/auth", tags=["Auth"])

@router.post("/register", response_model=Token)
def register(payload: UserCreate, users: UserStore = Depends(get_user_store)):
    token = register_user(users, payload.email, payload.password)
    return {"access_token": token, "token_type": "bearer"}

@router.post("/login", response_model=Token)
def login(form: OAuth2PasswordRequestForm = Depends(), users: UserStore = Depends(get_user_store)):
    # OAuth2 calls it "username"; here it is the email the user registered with
    token = login_user(users, form.username, form.password)
    return {"access_token": token, "token_type": "bearer"}
