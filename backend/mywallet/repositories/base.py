"""
Storage Port

Abstract interface every MyWallet store implements. Services receive an
instance instead of reaching for a global connection, and the application
lifespan owns open()/close().

Backend failures surface as StoreError; "not found" is signalled with None,
never with an exception.
"""

from abc import ABC, abstractmethod
from typing import Optional

from mywallet.schemas.ledger_models import Session, Transaction, User


class WalletRepository(ABC):
    """Persistence operations needed by the credential, session and ledger services."""

    def open(self) -> None:
        """Acquire backend resources. Called once at process start."""

    def close(self) -> None:
        """Release backend resources. Called once at shutdown."""

    # =========================================================================
    # Users
    # =========================================================================

    @abstractmethod
    def find_user_by_name(self, name: str) -> Optional[User]:
        """Return the user with exactly this name, if any."""

    @abstractmethod
    def find_user_by_email(self, email: str) -> Optional[User]:
        """Return the user with exactly this email, if any."""

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        """Return a user by id, if it exists."""

    @abstractmethod
    def insert_user(self, user: User) -> User:
        """Persist a new user. The id is already assigned by the caller."""

    # =========================================================================
    # Sessions
    # =========================================================================

    @abstractmethod
    def insert_session(self, session: Session) -> Session:
        """Persist a new session keyed by its token."""

    @abstractmethod
    def find_session(self, token: str) -> Optional[Session]:
        """Return the session for a token, if any."""

    # =========================================================================
    # Transactions
    # =========================================================================

    @abstractmethod
    def insert_transaction(self, transaction: Transaction) -> Transaction:
        """Append a transaction to its owner's ledger."""

    @abstractmethod
    def list_transactions(self, user_id: str) -> list[Transaction]:
        """Return a user's transactions in insertion order."""
