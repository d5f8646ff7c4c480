"""
Общие обработчики: статус сервиса и преобразование ошибок в JSON.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

router = APIRouter()

STATUS_TEXT = (
    "Backend de la App Ebook funcionando con Google Sheets! Rutas: "
    "/api/auth/register, /api/auth/login, /api/content/ebooks, "
    "/api/content/classes, /api/content/plans."
)


@router.get("/", response_class=PlainTextResponse)
async def status() -> str:
    return STATUS_TEXT


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Все ошибки отдаются в формате {"message": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info(f"Malformed request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400, content={"message": "Cuerpo de la solicitud inválido."}
    )
