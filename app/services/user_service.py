"""
Сервисный модуль для управления пользователями.

Лист пользователей читается при каждом обращении: кэша нет, чтобы смена
подписки вступала в силу без повторного входа.
"""

import logging
import uuid
from datetime import datetime, timezone

from fastapi.concurrency import run_in_threadpool

from app.core.config import Settings
from app.core.security import hash_password, verify_password
from app.models.user import MembershipTier, User
from app.services import record_locator
from app.services.partial_updater import apply_patch
from app.services.row_codec import USERS_SCHEMA, encode_for_append
from app.services.schema_guard import ensure_header
from app.services.sheet_store import SheetStore

logger = logging.getLogger(__name__)


class EmailAlreadyRegisteredError(Exception):
    """Пользователь с таким email уже есть в таблице."""


def utcnow_iso() -> str:
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class UserService:
    """
    Сервис для работы с данными пользователей.
    """

    def __init__(self, store: SheetStore, settings: Settings):
        self.store = store
        self.sheet_name = settings.users_sheet_name

    async def find_by_email(self, email: str) -> User | None:
        found = await record_locator.find(self.store, self.sheet_name, "email", email)
        return User.from_record(found.record) if found else None

    async def get_user_by_id(self, user_id: str) -> User | None:
        found = await record_locator.find(
            self.store, self.sheet_name, "userId", user_id
        )
        return User.from_record(found.record) if found else None

    async def register(self, email: str, password: str) -> User:
        """
        Регистрирует пользователя с подпиской 'free'.

        Проверка уникальности и добавление строки не атомарны: две
        одновременные регистрации одного email могут пройти обе.
        """
        await ensure_header(self.store, self.sheet_name, USERS_SCHEMA)

        if await self.find_by_email(email) is not None:
            logger.info(f"Registration rejected, email already registered: {email}")
            raise EmailAlreadyRegisteredError(email)

        now = utcnow_iso()
        user = User(
            user_id=str(uuid.uuid4()),
            email=email,
            password_hash=await run_in_threadpool(hash_password, password),
            membership="free",
            created_at=now,
            updated_at=now,
        )
        await self.store.append(
            self.sheet_name, encode_for_append(USERS_SCHEMA, user.to_record())
        )
        logger.info(f"User {user.user_id} registered.")
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Возвращает пользователя или None, не уточняя причину отказа."""
        user = await self.find_by_email(email)
        if user is None:
            return None
        if not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.info(f"Wrong password for user {user.user_id}.")
            return None
        return user

    async def update_membership(self, user_id: str, membership: MembershipTier) -> bool:
        found = await record_locator.find(
            self.store, self.sheet_name, "userId", user_id
        )
        if found is None:
            logger.warning(f"User {user_id} not found for membership update.")
            return False

        updated = await apply_patch(
            self.store,
            self.sheet_name,
            found.row_index,
            {"membership": membership, "updatedAt": utcnow_iso()},
        )
        if updated:
            logger.info(f"Membership of user {user_id} set to '{membership}'.")
        return updated
