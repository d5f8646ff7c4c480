"""
Модели данных, связанные с пользователем.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.services.row_codec import Record

MembershipTier = Literal["free", "premium"]
MEMBERSHIP_TIERS: tuple[str, ...] = ("free", "premium")


class User(BaseModel):
    """
    Модель пользователя, представляющая строку листа пользователей.

    Атрибуты:
        user_id (str): Уникальный идентификатор, выдается при регистрации.
        email (str): Email, уникален (проверяется при регистрации).
        password_hash (str): Хеш пароля, никогда не отдается клиенту.
        membership (str): Уровень подписки, 'free' или 'premium'.
        created_at (str): Время регистрации, ISO-8601.
        updated_at (str): Время последнего изменения, ISO-8601.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    email: str
    password_hash: str = Field(default="", alias="passwordHash", repr=False)
    # В таблицу могут вручную вписать что угодно, поэтому здесь просто str
    membership: str = "free"
    created_at: str = Field(default="", alias="createdAt")
    updated_at: str = Field(default="", alias="updatedAt")

    @classmethod
    def from_record(cls, record: Record) -> "User":
        return cls.model_validate({k: v or "" for k, v in record.items()})

    def to_record(self) -> Record:
        return self.model_dump(by_alias=True)

    def to_public(self) -> dict[str, str]:
        return {"id": self.user_id, "email": self.email, "membership": self.membership}
