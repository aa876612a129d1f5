from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import uuid4

from mywallet.core.exceptions import ValidationError
from mywallet.core.logging import get_logger
from mywallet.core.utils import CENT, day_month_label, quantize_cents, to_decimal, utc_now_iso
from mywallet.repositories.base import WalletRepository
from mywallet.schemas.ledger_models import Transaction, TransactionKind, User

logger = get_logger("mywallet.services.ledger")


class LedgerService:
    def __init__(self, repository: WalletRepository) -> None:
        self.repository = repository

    def append(
        self,
        user: User,
        kind: TransactionKind | str,
        description: str,
        amount: Any,
    ) -> Transaction:
        """Record an income or expense entry for the user.

        Args:
            user: Owner of the entry
            kind: "income" or "expense"
            description: Non-empty free text
            amount: Positive number with at most two decimal places

        Returns:
            The stored transaction, stamped with today's DD/MM label

        Raises:
            ValidationError: If any argument breaks its rule
        """
        errors: list[str] = []

        try:
            kind = TransactionKind(kind)
        except ValueError:
            errors.append('"tipo" must be one of [entrada, saida]')

        description = (description or "").strip()
        if not description:
            errors.append('"descricao" is not allowed to be empty')

        errors.extend(self._amount_errors(amount))
        if errors:
            raise ValidationError(errors)

        transaction = Transaction(
            id=str(uuid4()),
            user_id=user.id,
            kind=kind,
            description=description,
            amount=to_decimal(amount),
            date=day_month_label(),
            created_at=utc_now_iso(),
        )
        self.repository.insert_transaction(transaction)
        logger.info(f"Recorded {kind.value} of {transaction.amount} for user {user.id}")
        return transaction

    def list_for_user(self, user: User) -> tuple[list[Transaction], Decimal]:
        """Return the user's transactions (insertion order) and their balance.

        The balance is recomputed from every stored entry on each call.
        """
        transactions = self.repository.list_transactions(user.id)
        return transactions, self.balance(transactions)

    @staticmethod
    def balance(transactions: list[Transaction]) -> Decimal:
        total = sum((txn.signed_amount for txn in transactions), Decimal("0"))
        return quantize_cents(total)

    @staticmethod
    def _amount_errors(amount: Any) -> list[str]:
        if isinstance(amount, bool) or amount is None:
            return ['"valor" must be a number']
        try:
            value = to_decimal(amount)
        except (InvalidOperation, ValueError):
            return ['"valor" must be a number']
        if not value.is_finite():
            return ['"valor" must be a number']
        if value <= 0:
            return ['"valor" must be a positive number']
        try:
            exact = value == value.quantize(CENT)
        except InvalidOperation:
            return ['"valor" is too large']
        if not exact:
            return ['"valor" must have at most 2 decimal places']
        return []
