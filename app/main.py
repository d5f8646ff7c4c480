"""
Основная точка входа в приложение.

Этот файл отвечает за сборку FastAPI-приложения и запуск HTTP-сервера.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, get_settings
from app.core.logging_config import setup_logging
from app.handlers import admin, auth, common, content
from app.services.content_service import ContentService
from app.services.sheet_store import GoogleSheetStore, SheetStore
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None, sheet_store: SheetStore | None = None
) -> FastAPI:
    """Собирает приложение. sheet_store можно подменить (например, в тестах)."""
    settings = settings or get_settings()
    store = sheet_store or GoogleSheetStore(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            await store.authorize()
        except Exception:
            logger.critical(
                "Failed to start: Google Sheets authorization error.", exc_info=True
            )
            raise
        logger.info("Backend ready.")
        yield

    app = FastAPI(title="Ebook App Backend", lifespan=lifespan)

    # Сохраняем экземпляры сервисов в state для доступа из обработчиков
    app.state.settings = settings
    app.state.user_service = UserService(store, settings)
    app.state.content_service = ContentService(store, settings)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(StarletteHTTPException, common.http_exception_handler)
    app.add_exception_handler(
        RequestValidationError, common.validation_exception_handler
    )

    app.include_router(common.router)
    app.include_router(auth.router)
    app.include_router(content.router)
    app.include_router(admin.router)
    return app


def main() -> None:
    """Основная функция для запуска сервера."""
    settings = get_settings()
    setup_logging(settings.log_level)

    logger.info(f"Starting backend on port {settings.port}...")
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
