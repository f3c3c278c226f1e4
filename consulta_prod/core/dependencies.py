# consulta_prod/core/dependencies.py
"""Shared FastAPI dependencies: database session and authenticated principal."""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from consulta_prod.auth.dao import UserDAO
from consulta_prod.auth.models import User
from consulta_prod.auth.security import decode_access_token
from consulta_prod.core.database import get_db
from consulta_prod.core.exceptions import AuthenticationError, AuthorizationError

# Core database dependency
SessionDep = Annotated[Session, Depends(get_db)]

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    session: SessionDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """Resolve the ``Authorization: Bearer <token>`` header to an active account."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")

    payload = decode_access_token(credentials.credentials)
    user = UserDAO(session).get_by_id(payload["sub"])
    if user is None or not user.active:
        raise AuthenticationError("Invalid token")

    # Picked up by the request logging middleware
    request.state.username = user.username
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_admin(user: CurrentUserDep) -> User:
    """Capability check guarding the administrator-only handlers."""
    if not user.is_admin:
        raise AuthorizationError("Admin access required")
    return user


AdminDep = Annotated[User, Depends(require_admin)]
