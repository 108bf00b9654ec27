import logging

from pydantic import EmailStr, TypeAdapter, ValidationError

from webquiz.core.errors import NotAuthenticatedError, RegistrationError
from webquiz.core.security import PasswordHasher, create_access_token, password_hasher
from webquiz.models.domain import User
from webquiz.repositories.base import UserStore

logger = logging.getLogger(__name__)

_email = TypeAdapter(EmailStr)


def normalize_email(email: str) -> str:
    """Same normalization UserCreate applies on registration (domain lowercased)."""
    return _email.validate_python(email)


def register_user(users: UserStore, email: str, password: str, hasher: PasswordHasher = password_hasher) -> str:
    email = normalize_email(email)
    if users.find_by_email(email):
        raise RegistrationError("a user account for this email has already been created")
    user = users.save(User(email=email, hashed_password=hasher.hash(password)))
    logger.info("Registered user %s", user.id)
    return create_access_token(user.id)

def login_user(users: UserStore, email: str, password: str, hasher: PasswordHasher = password_hasher) -> str:
    try:
        email = normalize_email(email)
    except ValidationError:
        logger.warning("Failed login for malformed email %r", email)
        raise NotAuthenticatedError("Incorrect email or password")
    user = users.find_by_email(email)
    if not user or not hasher.verify(password, user.hashed_password):
        logger.warning("Failed login for %s", email)
        raise NotAuthenticatedError("Incorrect email or password")
    users.touch_last_login(user)
    return create_access_token(user.id)
