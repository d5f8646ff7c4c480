"""
Обработчики регистрации и входа.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.core.config import Settings
from app.core.dependencies import get_app_settings, get_user_service
from app.core.security import create_access_token
from app.models.requests import CredentialsIn
from app.models.user import User
from app.services.user_service import EmailAlreadyRegisteredError, UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

MISSING_CREDENTIALS = "Por favor, introduce email y contraseña."
INVALID_CREDENTIALS = "Credenciales inválidas."


def _issue_token(user: User, settings: Settings) -> str:
    return create_access_token(
        secret=settings.jwt_secret,
        user_id=user.user_id,
        email=user.email,
        expires_minutes=settings.jwt_expire_minutes,
    )


@router.post("/register", status_code=201)
async def register(
    payload: CredentialsIn,
    settings: Settings = Depends(get_app_settings),
    user_service: UserService = Depends(get_user_service),
) -> dict:
    """Регистрирует пользователя с бесплатной подпиской и сразу выдает токен."""
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail=MISSING_CREDENTIALS)

    try:
        user = await user_service.register(payload.email, payload.password)
        return {
            "message": "Usuario registrado con éxito.",
            "token": _issue_token(user, settings),
            "user": user.to_public(),
        }
    except EmailAlreadyRegisteredError:
        raise HTTPException(status_code=400, detail="El email ya está registrado.")
    except Exception as e:
        logger.error(f"Failed to register user: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "Error del servidor al registrar usuario."},
        )


@router.post("/login")
async def login(
    payload: CredentialsIn,
    settings: Settings = Depends(get_app_settings),
    user_service: UserService = Depends(get_user_service),
) -> dict:
    """
    Вход по email и паролю.

    Неизвестный email и неверный пароль дают одинаковый ответ.
    """
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail=MISSING_CREDENTIALS)

    try:
        user = await user_service.authenticate(payload.email, payload.password)
        if user is None:
            raise HTTPException(status_code=400, detail=INVALID_CREDENTIALS)
        return {
            "message": "Inicio de sesión exitoso.",
            "token": _issue_token(user, settings),
            "user": user.to_public(),
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to log in: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "Error del servidor al iniciar sesión."},
        )
