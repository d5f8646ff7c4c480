"""
Тела HTTP-запросов.

Поля необязательные: отсутствие значения проверяется в обработчике, чтобы
вернуть 400 с понятным сообщением, а не 422.
"""

from pydantic import BaseModel, Field


class CredentialsIn(BaseModel):
    email: str | None = None
    password: str | None = None


class UpdateMembershipIn(BaseModel):
    user_id: str | None = Field(default=None, alias="userId")
    new_membership: str | None = Field(default=None, alias="newMembership")
