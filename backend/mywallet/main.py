from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from mywallet.api.routes import router as api_router
from mywallet.core.config import Settings, load_env_file
from mywallet.core.exceptions import AuthError, MyWalletError, ValidationError
from mywallet.core.logging import get_logger, setup_logging
from mywallet.repositories.base import WalletRepository
from mywallet.repositories.factory import build_repository

logger = get_logger("mywallet.main")


def create_app(
    settings: Settings | None = None,
    repository: WalletRepository | None = None,
) -> FastAPI:
    """Build the API around one settings object and one store."""
    if settings is None:
        load_env_file()
        settings = Settings.from_env()
    setup_logging(settings.log_level)

    store = repository or build_repository(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.open()
        logger.info(f"{type(store).__name__} opened")
        yield
        store.close()
        logger.info(f"{type(store).__name__} closed")

    app = FastAPI(title="MyWallet API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.repository = store

    # Browsers send credentials only to explicit origins, never to "*"
    allow_all = "*" in settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    app.add_exception_handler(MyWalletError, handle_wallet_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    app.include_router(api_router)
    return app


async def handle_wallet_error(request: Request, exc: MyWalletError):
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=exc.status_code, content=exc.errors)
    if isinstance(exc, AuthError):
        return PlainTextResponse(
            exc.message,
            status_code=exc.status_code,
            headers={"WWW-Authenticate": "Bearer"},
        )
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    """Render body/path validation failures as a flat list of messages."""
    messages = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())[1:]]
        field = ".".join(location) or "body"
        messages.append(f'"{field}" {error.get("msg", "is invalid")}')
    return JSONResponse(status_code=422, content=messages)
