from __future__ import annotations

from datetime import datetime, timedelta, timezone

from mywallet.core.exceptions import AuthError
from mywallet.core.logging import get_logger
from mywallet.core.security import generate_token, is_well_formed_token
from mywallet.core.utils import utc_now_iso
from mywallet.repositories.base import WalletRepository
from mywallet.schemas.ledger_models import Session, User

logger = get_logger("mywallet.services.session")


class SessionService:
    """Issues opaque bearer tokens and resolves them back to users.

    Sessions never expire unless ``ttl_minutes`` is set.
    """

    def __init__(self, repository: WalletRepository, ttl_minutes: int | None = None) -> None:
        self.repository = repository
        self.ttl = timedelta(minutes=ttl_minutes) if ttl_minutes else None

    def create_session(self, user: User) -> str:
        session = Session(
            token=generate_token(),
            user_id=user.id,
            user_name=user.name,
            created_at=utc_now_iso(),
        )
        self.repository.insert_session(session)
        logger.info(f"Session {session.token[:6]}... issued for user {user.id}")
        return session.token

    def resolve_session(self, token: str | None) -> User:
        """Return the user a bearer token was issued to.

        Raises:
            AuthError: If the token is missing, malformed, unknown or expired,
                or its user no longer exists
        """
        if not token:
            raise AuthError("Missing authentication token")
        if not is_well_formed_token(token):
            raise AuthError("Invalid authentication token")

        session = self.repository.find_session(token)
        if session is None:
            logger.debug(f"Unknown session token {token[:6]}...")
            raise AuthError("Invalid authentication token")

        if self._is_expired(session):
            logger.info(f"Expired session for user {session.user_id}")
            raise AuthError("Authentication token has expired")

        user = self.repository.get_user(session.user_id)
        if user is None:
            logger.warning(f"Session {token[:6]}... points at missing user {session.user_id}")
            raise AuthError("Invalid authentication token")
        return user

    def _is_expired(self, session: Session) -> bool:
        if self.ttl is None:
            return False
        try:
            issued_at = datetime.fromisoformat(session.created_at)
        except ValueError:
            return True
        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=timezone.utc)
        return datetime.now(timezone.utc) - issued_at > self.ttl
