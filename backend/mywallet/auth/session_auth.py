"""
Session Authentication

Resolves the ``Authorization: Bearer <token>`` header to the user the
session was issued for.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from mywallet.core.exceptions import AuthError
from mywallet.repositories.base import WalletRepository
from mywallet.repositories.factory import get_repository
from mywallet.schemas.ledger_models import User
from mywallet.services.session_service import SessionService

# HTTP Bearer scheme for Authorization header; a missing or non-Bearer
# header yields None so the 401 comes from our own error handler
security = HTTPBearer(auto_error=False)


def get_session_service(
    request: Request,
    repository: WalletRepository = Depends(get_repository),
) -> SessionService:
    settings = request.app.state.settings
    return SessionService(repository, ttl_minutes=settings.session_ttl_minutes)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    sessions: SessionService = Depends(get_session_service),
) -> User:
    """
    Dependency that resolves the bearer token and returns the current user.

    Usage:
        @router.get("/protected")
        def protected_route(user: User = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise AuthError("Missing authentication token")

    return sessions.resolve_session(credentials.credentials)
