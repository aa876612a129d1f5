"""
Firestore Repository

WalletRepository implementation backed by Firestore.

Data Structure:
    users/{user_id}                         - Credentials (name, email, password hash)
    users/{user_id}/transactions/{txn_id}   - Ledger entries (sub-collection)
    sessions/{token}                        - Bearer token -> user association
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional

import firebase_admin
from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1 import FieldFilter

from mywallet.core.exceptions import StoreError
from mywallet.core.logging import get_logger
from mywallet.repositories.base import WalletRepository
from mywallet.schemas.ledger_models import Session, Transaction, User

logger = get_logger("mywallet.repositories.firestore")


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate Firestore client failures into StoreError."""
    try:
        yield
    except google_exceptions.GoogleAPIError as e:
        logger.error(f"Firestore {operation} failed: {e}")
        raise StoreError(str(e), details={"operation": operation}) from e


class FirestoreRepository(WalletRepository):
    """Repository using Firestore for users, sessions and transactions."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        database_id: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self.project_id = project_id
        self.database_id = database_id
        self.db = client

        # Collection references
        self.users_collection = "users"
        self.sessions_collection = "sessions"
        self.transactions_collection = "transactions"

    def open(self) -> None:
        if self.db is not None:
            return

        # Initialize Firebase Admin SDK with Application Default Credentials
        if not firebase_admin._apps:
            options = {"projectId": self.project_id} if self.project_id else None
            firebase_admin.initialize_app(options=options)

        if self.database_id:
            self.db = firestore.client(database_id=self.database_id)
        else:
            self.db = firestore.client()
        logger.info(f"Firestore client ready (project={self.project_id or 'default'})")

    def close(self) -> None:
        if self.db is not None and hasattr(self.db, "close"):
            self.db.close()
        self.db = None

    def _client(self):
        if self.db is None:
            raise StoreError("Firestore repository is not open")
        return self.db

    # =========================================================================
    # Users
    # =========================================================================

    def find_user_by_name(self, name: str) -> Optional[User]:
        return self._find_user("name", name)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self._find_user("email", email)

    def _find_user(self, field: str, value: str) -> Optional[User]:
        query = (
            self._client()
            .collection(self.users_collection)
            .where(filter=FieldFilter(field, "==", value))
            .limit(1)
        )
        with _store_errors(f"user lookup by {field}"):
            docs = list(query.stream())
        if not docs:
            return None
        return User.from_document(docs[0].id, docs[0].to_dict())

    def get_user(self, user_id: str) -> Optional[User]:
        with _store_errors("user get"):
            doc = self._client().collection(self.users_collection).document(user_id).get()
        if not doc.exists:
            return None
        return User.from_document(doc.id, doc.to_dict())

    def insert_user(self, user: User) -> User:
        with _store_errors("user insert"):
            self._client().collection(self.users_collection).document(user.id).set(
                user.to_document()
            )
        return user

    # =========================================================================
    # Sessions
    # =========================================================================

    def insert_session(self, session: Session) -> Session:
        with _store_errors("session insert"):
            self._client().collection(self.sessions_collection).document(session.token).set(
                session.to_document()
            )
        return session

    def find_session(self, token: str) -> Optional[Session]:
        with _store_errors("session get"):
            doc = self._client().collection(self.sessions_collection).document(token).get()
        if not doc.exists:
            return None
        return Session(token=doc.id, **doc.to_dict())

    # =========================================================================
    # Transactions (sub-collection of the owning user)
    # =========================================================================

    def insert_transaction(self, transaction: Transaction) -> Transaction:
        txn_ref = (
            self._client()
            .collection(self.users_collection)
            .document(transaction.user_id)
            .collection(self.transactions_collection)
            .document(transaction.id)
        )
        with _store_errors("transaction insert"):
            txn_ref.set(transaction.to_document())
        return transaction

    def list_transactions(self, user_id: str) -> list[Transaction]:
        transactions_ref = (
            self._client()
            .collection(self.users_collection)
            .document(user_id)
            .collection(self.transactions_collection)
        )
        # created_at is an ISO timestamp, so lexical order is insertion order
        with _store_errors("transaction list"):
            docs = list(transactions_ref.order_by("created_at").stream())
        return [Transaction.from_document(doc.id, doc.to_dict()) for doc in docs]
