"""
Зависимости FastAPI: доступ к сервисам и проверка токена доступа.
"""

import logging

import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import Settings
from app.core.security import decode_access_token
from app.models.user import User
from app.services.content_service import ContentService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_content_service(request: Request) -> ContentService:
    return request.app.state.content_service


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_app_settings),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """
    Проверяет Bearer-токен и загружает актуальную запись пользователя.

    Запись перечитывается из таблицы на каждый запрос, поэтому смена
    подписки видна сразу.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=401, detail="Acceso denegado. No se proporcionó token."
        )

    try:
        payload = decode_access_token(
            token=credentials.credentials, secret=settings.jwt_secret
        )
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected access token: {e}")
        raise HTTPException(status_code=403, detail="Token inválido o expirado.")

    user_id = payload.get("userId")
    if not user_id:
        logger.warning("Access token without userId claim.")
        raise HTTPException(status_code=403, detail="Token inválido o expirado.")

    try:
        user = await user_service.get_user_by_id(str(user_id))
    except Exception as e:
        logger.error(f"Failed to load user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error del servidor.")

    if user is None:
        raise HTTPException(status_code=404, detail="Usuario no encontrado.")
    return user
