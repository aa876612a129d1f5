"""Command-line entry point: serve the API on the configured port."""

import uvicorn

from mywallet.core.config import Settings, load_env_file


def run() -> None:
    load_env_file()
    settings = Settings.from_env()
    # The app is built by the factory inside the server process, not at import
    uvicorn.run(
        "mywallet.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    run()
