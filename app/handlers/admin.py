"""
Административные обработчики.

Маршрут не защищен токеном: предполагается, что его вызывает только
доверенная сторона (платежный webhook или панель администратора).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.core.dependencies import get_user_service
from app.models.requests import UpdateMembershipIn
from app.models.user import MEMBERSHIP_TIERS
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/update-membership")
async def update_membership(
    payload: UpdateMembershipIn,
    user_service: UserService = Depends(get_user_service),
) -> dict:
    """Меняет уровень подписки пользователя."""
    if not payload.user_id or not payload.new_membership:
        raise HTTPException(
            status_code=400, detail="Se requiere userId y newMembership."
        )
    if payload.new_membership not in MEMBERSHIP_TIERS:
        raise HTTPException(
            status_code=400,
            detail=f"newMembership debe ser uno de: {', '.join(MEMBERSHIP_TIERS)}.",
        )

    try:
        updated = await user_service.update_membership(
            payload.user_id, payload.new_membership
        )
        if not updated:
            raise HTTPException(status_code=404, detail="Usuario no encontrado.")
        return {
            "message": (
                f"Membresía del usuario {payload.user_id} "
                f"actualizada a {payload.new_membership}."
            )
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update membership: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "Error del servidor al actualizar membresía."},
        )
