from __future__ import annotations

from uuid import uuid4

from email_validator import EmailNotValidError, validate_email

from mywallet.core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from mywallet.core.logging import get_logger
from mywallet.core.security import BCRYPT_MAX_BYTES, hash_password, verify_password
from mywallet.core.utils import utc_now_iso
from mywallet.repositories.base import WalletRepository
from mywallet.schemas.ledger_models import User

logger = get_logger("mywallet.services.credential")


class CredentialService:
    MIN_PASSWORD_LENGTH = 3

    def __init__(self, repository: WalletRepository, bcrypt_rounds: int = 10) -> None:
        self.repository = repository
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, name: str, email: str, password: str) -> str:
        """Create a user account.

        Args:
            name: Display name, unique across users
            email: Login email, unique across users
            password: Plaintext password; only its bcrypt hash is stored

        Returns:
            The new user's id

        Raises:
            ValidationError: If any field breaks its format rule
            ConflictError: If the name or email is already taken
        """
        name = (name or "").strip()
        errors = self._name_errors(name) + self._email_errors(email) + self._password_errors(password)
        if errors:
            raise ValidationError(errors)

        email = self._normalize_email(email)

        # Lookup-before-insert: concurrent registrations can still race
        if self.repository.find_user_by_name(name):
            logger.info(f"Registration rejected, name taken: {name}")
            raise ConflictError("Usuário já cadastrado!")
        if self.repository.find_user_by_email(email):
            logger.info(f"Registration rejected, email taken: {email}")
            raise ConflictError("Usuário já cadastrado!")

        user = User(
            id=str(uuid4()),
            name=name,
            email=email,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
            created_at=utc_now_iso(),
        )
        self.repository.insert_user(user)
        logger.info(f"Registered user {user.id}")
        return user.id

    def authenticate(self, email: str, password: str) -> User:
        """Check login credentials.

        Raises:
            ValidationError: If the email or password is malformed
            NotFoundError: If no user has this email
            AuthError: If the password does not match
        """
        errors = self._email_errors(email) + self._password_errors(password)
        if errors:
            raise ValidationError(errors)

        user = self.repository.find_user_by_email(self._normalize_email(email))
        if user is None:
            logger.warning(f"Login for unknown email: {email}")
            raise NotFoundError("Usuário não cadastrado!")

        if not verify_password(password, user.password_hash):
            logger.warning(f"Invalid password for user {user.id}")
            raise AuthError("Senha incorreta!")

        return user

    @staticmethod
    def _normalize_email(email: str) -> str:
        return email.strip().lower()

    @staticmethod
    def _name_errors(name: str) -> list[str]:
        return [] if name else ['"name" is not allowed to be empty']

    @staticmethod
    def _email_errors(email: str) -> list[str]:
        if not email or not email.strip():
            return ['"email" is not allowed to be empty']
        try:
            validate_email(email.strip(), check_deliverability=False)
        except EmailNotValidError:
            return ['"email" must be a valid email']
        return []

    @classmethod
    def _password_errors(cls, password: str) -> list[str]:
        if not password or len(password) < cls.MIN_PASSWORD_LENGTH:
            return [f'"password" length must be at least {cls.MIN_PASSWORD_LENGTH} characters long']
        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            return [f'"password" must be at most {BCRYPT_MAX_BYTES} bytes long']
        return []
