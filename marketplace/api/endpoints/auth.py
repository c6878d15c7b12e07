"""
Auth endpoints - registration, login and the current identity.
Login failures never reveal whether the email exists.
"""

import logging

from fastapi import APIRouter, status
from sqlalchemy.exc import IntegrityError

from marketplace.core.dependencies import CurrentUser
from marketplace.core.exceptions import BadRequestError, ConflictError, UnauthorizedError
from marketplace.core.security import create_access_token, hash_password, verify_password
from marketplace.db.models.user import User
from marketplace.db.repositories.user_repository import UserRepository
from marketplace.db.session import DbSession
from marketplace.schemas.user import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    UserCreate,
    UserProfile,
    UserPublic,
)

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_CREDENTIALS = "Invalid credentials"


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(token=create_access_token(user.id), user=UserPublic.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(session: DbSession, data: UserCreate):
    """Create a user and sign them in. 400 names the field that is already taken."""
    repo = UserRepository(session)
    existing = await repo.find_by_email_or_username(data.email, data.username)
    if existing:
        if existing.email == data.email:
            raise ConflictError("Email already used")
        raise ConflictError("Username already taken")
    user = User(
        username=data.username,
        email=data.email,
        hashed_password=hash_password(data.password),
    )
    try:
        user = await repo.add(user)
    except IntegrityError as exc:
        # Lost a race with a concurrent registration for the same email/username
        raise ConflictError("Email or username already used") from exc
    logger.info("Registered user %s (%s)", user.id, user.username)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(session: DbSession, data: LoginRequest):
    if not data.email or not data.password:
        raise BadRequestError("Please provide email and password")
    user = await UserRepository(session).get_by_email(data.email.strip())
    if not user or not verify_password(data.password, user.hashed_password):
        raise UnauthorizedError(INVALID_CREDENTIALS)
    logger.info("User %s logged in", user.id)
    return _auth_response(user)


@router.get("/me", response_model=MeResponse)
async def me(user: CurrentUser):
    """Profile of the authenticated user, including rating metadata."""
    return MeResponse(user=UserProfile.model_validate(user))
