from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from mywallet.schemas.ledger_models import Transaction, TransactionKind


class EntryType(str, Enum):
    """Transaction type as it appears in the URL and in responses."""

    ENTRADA = "entrada"
    SAIDA = "saida"

    @property
    def kind(self) -> TransactionKind:
        return TransactionKind.INCOME if self is EntryType.ENTRADA else TransactionKind.EXPENSE

    @classmethod
    def from_kind(cls, kind: TransactionKind) -> "EntryType":
        return cls.ENTRADA if kind == TransactionKind.INCOME else cls.SAIDA


class SignUpRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    token: str
    userName: str


class TransactionCreate(BaseModel):
    descricao: str = Field(..., description="Free-text description of the entry.")
    valor: Decimal = Field(..., description="Positive amount with at most two decimal places.")


class TransactionResponse(BaseModel):
    id: str
    tipo: EntryType
    descricao: str
    valor: float
    data: str

    @classmethod
    def from_transaction(cls, txn: Transaction) -> "TransactionResponse":
        return cls(
            id=txn.id,
            tipo=EntryType.from_kind(txn.kind),
            descricao=txn.description,
            valor=float(txn.amount),
            data=txn.date,
        )


class HomeResponse(BaseModel):
    transactions: list[TransactionResponse]
    total: float
