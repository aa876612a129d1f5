"""Pytest fixtures and configuration."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from mywallet.core.config import Settings
from mywallet.repositories.local_repo import LocalRepository
from mywallet.schemas.ledger_models import Transaction, TransactionKind, User
from mywallet.services.credential_service import CredentialService
from mywallet.services.ledger_service import LedgerService
from mywallet.services.session_service import SessionService

# Minimum bcrypt cost keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"file://{tmp_path / 'data'}",
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
        cors_origins=["http://localhost:3000"],
    )


@pytest.fixture
def repository(tmp_path: Path) -> Generator[LocalRepository, None, None]:
    """An opened JSON-file repository in a temporary directory."""
    repo = LocalRepository(tmp_path / "data")
    repo.open()
    yield repo
    repo.close()


@pytest.fixture
def credential_service(repository: LocalRepository) -> CredentialService:
    return CredentialService(repository, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def session_service(repository: LocalRepository) -> SessionService:
    return SessionService(repository)


@pytest.fixture
def ledger_service(repository: LocalRepository) -> LedgerService:
    return LedgerService(repository)


@pytest.fixture
def registered_user(credential_service: CredentialService) -> User:
    """Ana, registered with password "abc"."""
    credential_service.register("Ana", "ana@x.com", "abc")
    return credential_service.authenticate("ana@x.com", "abc")


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    return [
        Transaction(
            id="t1",
            user_id="u1",
            kind=TransactionKind.INCOME,
            description="Salário",
            amount=Decimal("1500.50"),
            date="05/03",
        ),
        Transaction(
            id="t2",
            user_id="u1",
            kind=TransactionKind.EXPENSE,
            description="Aluguel",
            amount=Decimal("800.00"),
            date="06/03",
        ),
        Transaction(
            id="t3",
            user_id="u1",
            kind=TransactionKind.EXPENSE,
            description="Café",
            amount=Decimal("5.25"),
            date="07/03",
        ),
    ]


@pytest.fixture
def client(settings: Settings, repository: LocalRepository) -> Generator[TestClient, None, None]:
    """Test client running the full app against the temporary repository."""
    from mywallet.main import create_app

    app = create_app(settings, repository=repository)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    """Register and log in Ana, returning the bearer header."""
    client.post("/cadastro", json={"name": "Ana", "email": "ana@x.com", "password": "abc"})
    response = client.post("/", json={"email": "ana@x.com", "password": "abc"})
    return {"Authorization": f"Bearer {response.json()['token']}"}
