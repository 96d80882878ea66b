"""FastAPI application entry point."""

import uvicorn

from src.application import create_app
from src.config import settings

app = create_app()

__all__ = ["app", "run"]


def run() -> None:
    """Serve the application with Uvicorn."""

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    run()
