"""
FastAPI dependencies - bearer-token authentication.
Protected routes declare `user: CurrentUser` and receive the stored User row.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.core.security import token_subject
from marketplace.db.models.user import User
from marketplace.db.repositories.user_repository import UserRepository
from marketplace.db.session import DbSession

security = HTTPBearer(auto_error=False)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


async def get_current_user(
    session: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> User:
    """Resolve the bearer token to a user. Raises 401 if missing, invalid, or the user is gone."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=_BEARER_CHALLENGE,
        )
    user_id = token_subject(credentials.credentials)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers=_BEARER_CHALLENGE,
        )
    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers=_BEARER_CHALLENGE,
        )
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
