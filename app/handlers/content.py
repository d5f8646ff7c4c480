"""
Обработчики выдачи контента. Доступны только с токеном.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.dependencies import get_content_service, get_current_user
from app.models.user import User
from app.services.content_service import ContentKind, ContentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/content", tags=["content"])

_ERROR_MESSAGES = {
    "ebooks": "Error del servidor al obtener ebooks.",
    "classes": "Error del servidor al obtener clases.",
    "plans": "Error del servidor al obtener planes nutricionales.",
}


async def _list_content(kind: ContentKind, user: User, service: ContentService):
    try:
        return await service.list_content(kind, user.membership)
    except Exception as e:
        logger.error(f"Failed to load {kind}: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": _ERROR_MESSAGES[kind]})


@router.get("/ebooks")
async def get_ebooks(
    user: User = Depends(get_current_user),
    service: ContentService = Depends(get_content_service),
):
    return await _list_content("ebooks", user, service)


@router.get("/classes")
async def get_classes(
    user: User = Depends(get_current_user),
    service: ContentService = Depends(get_content_service),
):
    return await _list_content("classes", user, service)


@router.get("/plans")
async def get_plans(
    user: User = Depends(get_current_user),
    service: ContentService = Depends(get_content_service),
):
    return await _list_content("plans", user, service)
