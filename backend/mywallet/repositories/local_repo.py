import json
import os
import threading
from pathlib import Path
from typing import Any, Optional
from uuid import uuid4

from mywallet.core.exceptions import StoreError
from mywallet.repositories.base import WalletRepository
from mywallet.schemas.ledger_models import Session, Transaction, User


class LocalRepository(WalletRepository):
    """JSON-file store for development and tests.

    data/users/{user_id}.json, data/sessions/{token}.json and one
    data/transactions/{user_id}.json list per user (append order kept).
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        root = base_dir or Path(__file__).resolve().parents[2] / "data"
        self.data_dir = Path(root)
        self.user_dir = self.data_dir / "users"
        self.session_dir = self.data_dir / "sessions"
        self.transaction_dir = self.data_dir / "transactions"
        # Serializes the read-append-rewrite of per-user transaction lists
        self._transactions_lock = threading.Lock()

    def open(self) -> None:
        try:
            self.user_dir.mkdir(parents=True, exist_ok=True)
            self.session_dir.mkdir(parents=True, exist_ok=True)
            self.transaction_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Cannot create data directory {self.data_dir}: {e}") from e

    def _read(self, path: Path) -> Any:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read {path.name}: {e}") from e

    def _write(self, path: Path, payload: Any) -> None:
        # Readers only ever see the old or the new file, never a partial one
        tmp_path = path.with_name(f".{path.stem}.{uuid4().hex}.tmp")
        try:
            tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StoreError(f"Cannot write {path.name}: {e}") from e

    @staticmethod
    def _safe_key(key: str) -> bool:
        return bool(key) and Path(key).name == key and not key.startswith(".")

    # Users

    def find_user_by_name(self, name: str) -> Optional[User]:
        return self._find_user("name", name)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self._find_user("email", email)

    def _find_user(self, field: str, value: str) -> Optional[User]:
        for path in sorted(self.user_dir.glob("*.json")):
            data = self._read(path)
            if data.get(field) == value:
                return User.from_document(path.stem, data)
        return None

    def get_user(self, user_id: str) -> Optional[User]:
        if not self._safe_key(user_id):
            return None
        path = self.user_dir / f"{user_id}.json"
        if not path.exists():
            return None
        return User.from_document(user_id, self._read(path))

    def insert_user(self, user: User) -> User:
        self._write(self.user_dir / f"{user.id}.json", user.to_document())
        return user

    # Sessions

    def insert_session(self, session: Session) -> Session:
        self._write(self.session_dir / f"{session.token}.json", session.to_document())
        return session

    def find_session(self, token: str) -> Optional[Session]:
        if not self._safe_key(token):
            return None
        path = self.session_dir / f"{token}.json"
        if not path.exists():
            return None
        return Session(token=token, **self._read(path))

    # Transactions

    def insert_transaction(self, transaction: Transaction) -> Transaction:
        path = self.transaction_dir / f"{transaction.user_id}.json"
        with self._transactions_lock:
            entries = self._read(path) if path.exists() else []
            entries.append({"id": transaction.id, **transaction.to_document()})
            self._write(path, entries)
        return transaction

    def list_transactions(self, user_id: str) -> list[Transaction]:
        if not self._safe_key(user_id):
            return []
        path = self.transaction_dir / f"{user_id}.json"
        if not path.exists():
            return []
        return [Transaction.from_document(entry["id"], entry) for entry in self._read(path)]
