"""
Repository factory.

Maps the configured DATABASE_URL onto a concrete WalletRepository:

    firestore://<project>[/<database>]  -> FirestoreRepository
    file://<directory>                  -> LocalRepository
"""

from pathlib import Path
from urllib.parse import urlparse

from fastapi import Request

from mywallet.core.exceptions import ConfigurationError
from mywallet.repositories.base import WalletRepository


def build_repository(database_url: str) -> WalletRepository:
    parsed = urlparse(database_url)

    if parsed.scheme == "firestore":
        # Imported lazily so the local store works without Google credentials
        from mywallet.repositories.firestore_repo import FirestoreRepository

        database_id = parsed.path.strip("/") or None
        return FirestoreRepository(project_id=parsed.netloc or None, database_id=database_id)

    if parsed.scheme == "file":
        # file://./data is relative, file:///srv/data is absolute
        directory = parsed.netloc + parsed.path
        if not directory:
            raise ConfigurationError("file:// DATABASE_URL needs a directory")
        from mywallet.repositories.local_repo import LocalRepository

        return LocalRepository(Path(directory))

    raise ConfigurationError(
        f"Unsupported DATABASE_URL scheme: {parsed.scheme or database_url!r}"
    )


def get_repository(request: Request) -> WalletRepository:
    """FastAPI dependency returning the store opened by the app lifespan."""
    return request.app.state.repository
