"""
Модуль для работы с паролями и токенами доступа.

Пароли хранятся в таблице только в виде хеша. Токен - JWT с идентификатором
и email пользователя; уровень подписки в токен не кладется и всегда
перечитывается из таблицы.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
JWT_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    """Возвращает хеш пароля для записи в колонку passwordHash."""
    if not password:
        raise ValueError("Password must not be empty")
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # В ячейке лежит что-то, что не является хешем passlib
        return False


def create_access_token(
    *, secret: str, user_id: str, email: str, expires_minutes: int = 60
) -> str:
    """
    Выпускает подписанный токен доступа.

    Args:
        secret: Секрет подписи (settings.jwt_secret, пустым быть не может).
        user_id: Значение колонки userId.
        email: Email пользователя.
        expires_minutes: Время жизни токена.

    Returns:
        JWT с claims userId, email, iat, exp.
    """
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=expires_minutes)
    claims: dict[str, Any] = {
        "userId": user_id,
        "email": email,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(*, token: str, secret: str) -> dict[str, Any]:
    """
    Проверяет подпись и срок действия токена.

    Любая проблема с токеном (пустой, чужая подпись, истек) приводит к
    jwt.InvalidTokenError, которую обработчик превращает в 403.
    """
    if not token:
        raise jwt.InvalidTokenError("Empty token")
    return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
