from fastapi import APIRouter, Depends, Request, Response, status

from mywallet.auth.session_auth import get_current_user, get_session_service
from mywallet.repositories.base import WalletRepository
from mywallet.repositories.factory import get_repository
from mywallet.schemas.ledger_models import User
from mywallet.schemas.models import (
    EntryType,
    HomeResponse,
    LoginRequest,
    LoginResponse,
    SignUpRequest,
    TransactionCreate,
    TransactionResponse,
)
from mywallet.services.credential_service import CredentialService
from mywallet.services.ledger_service import LedgerService
from mywallet.services.session_service import SessionService

router = APIRouter()


def get_credential_service(
    request: Request,
    repository: WalletRepository = Depends(get_repository),
) -> CredentialService:
    return CredentialService(repository, bcrypt_rounds=request.app.state.settings.bcrypt_rounds)


def get_ledger_service(
    repository: WalletRepository = Depends(get_repository),
) -> LedgerService:
    return LedgerService(repository)


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/cadastro", status_code=status.HTTP_201_CREATED)
def sign_up(
    payload: SignUpRequest,
    credentials: CredentialService = Depends(get_credential_service),
) -> Response:
    """Register a new user. Responds 201 with an empty body."""
    credentials.register(payload.name, payload.email, payload.password)
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    credentials: CredentialService = Depends(get_credential_service),
    sessions: SessionService = Depends(get_session_service),
) -> LoginResponse:
    """Check credentials and open a new session."""
    user = credentials.authenticate(payload.email, payload.password)
    token = sessions.create_session(user)
    return LoginResponse(token=token, userName=user.name)


@router.get("/home", response_model=HomeResponse)
def home(
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
) -> HomeResponse:
    """List the current user's transactions with the running balance."""
    transactions, total = ledger.list_for_user(user)
    return HomeResponse(
        transactions=[TransactionResponse.from_transaction(txn) for txn in transactions],
        total=float(total),
    )


@router.post("/nova-transacao/{tipo}", status_code=status.HTTP_201_CREATED)
def create_transaction(
    tipo: EntryType,
    payload: TransactionCreate,
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
) -> Response:
    """Append an income (entrada) or expense (saida) entry."""
    ledger.append(user, tipo.kind, payload.descricao, payload.valor)
    return Response(status_code=status.HTTP_201_CREATED)
