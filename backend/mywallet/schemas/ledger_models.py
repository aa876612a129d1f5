"""
Ledger Domain Models

Records handed between repositories and services: users, sessions and
ledger transactions.
"""

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel


class TransactionKind(str, Enum):
    """Direction of a ledger entry."""

    INCOME = "income"
    EXPENSE = "expense"


class User(BaseModel):
    """A registered user as stored in the users collection."""

    id: str
    name: str
    email: str
    password_hash: str
    created_at: str = ""

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "User":
        return cls(id=doc_id, **{k: v for k, v in data.items() if k != "id"})

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "password_hash": self.password_hash,
            "created_at": self.created_at,
        }


class Session(BaseModel):
    """Association between an opaque bearer token and a user."""

    token: str
    user_id: str
    user_name: str
    created_at: str = ""

    def to_document(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "user_name": self.user_name,
            "created_at": self.created_at,
        }


class Transaction(BaseModel):
    """An immutable ledger entry owned by a user."""

    id: str
    user_id: str
    kind: TransactionKind
    description: str
    amount: Decimal
    date: str
    created_at: str = ""

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.kind == TransactionKind.INCOME else -self.amount

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "Transaction":
        return cls(
            id=doc_id,
            user_id=data["user_id"],
            kind=TransactionKind(data["kind"]),
            description=data["description"],
            # Amounts are persisted as strings to keep exact cents
            amount=Decimal(str(data["amount"])),
            date=data["date"],
            created_at=data.get("created_at", ""),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "kind": self.kind.value,
            "description": self.description,
            "amount": str(self.amount),
            "date": self.date,
            "created_at": self.created_at,
        }
