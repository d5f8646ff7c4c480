"""
Модуль конфигурации проекта.

Загружает настройки из переменных окружения с помощью Pydantic Settings.
Обеспечивает централизованный и безопасный доступ к конфигурационным данным.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Основные настройки приложения.

    Атрибуты:
        port (int): Порт HTTP-сервера.
        jwt_secret (str): Секрет для подписи токенов доступа.
        jwt_expire_minutes (int): Время жизни токена в минутах.
        google_sheet_id (str): ID Google-таблицы, которая служит хранилищем.
        google_service_account_email (str | None): Email сервисного аккаунта.
        google_private_key (str | None): Приватный ключ сервисного аккаунта.
        google_credentials_file (Path): JSON-файл сервисного аккаунта, если ключ не задан.
        users_sheet_name, ebooks_sheet_name, classes_sheet_name, plans_sheet_name:
            Названия листов таблицы.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # --- HTTP Settings ---
    port: int = Field(default=5000, description="HTTP port")
    cors_allow_origins_str: str = Field(
        default="*",
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of allowed CORS origins",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @computed_field
    @property
    def cors_allow_origins(self) -> list[str]:
        """Преобразует строку cors_allow_origins_str в список origin'ов."""
        if not self.cors_allow_origins_str:
            return []
        return [item.strip() for item in self.cors_allow_origins_str.split(",")]

    # --- Auth Settings ---
    jwt_secret: str = Field(
        ..., min_length=1, description="Secret used to sign access tokens"
    )
    jwt_expire_minutes: int = Field(default=60, description="Access token lifetime")

    # --- Google API Settings ---
    google_sheet_id: str = Field(..., description="Google Sheet ID used as storage")
    google_service_account_email: str | None = Field(
        default=None, description="Service account email"
    )
    google_private_key: str | None = Field(
        default=None, description="Service account private key (PEM)"
    )
    google_credentials_file: Path = Field(
        default=Path("credentials.json"),
        description="Service account JSON file, used when the key is not in env",
    )

    @field_validator("google_private_key")
    @classmethod
    def unescape_private_key(cls, value: str | None) -> str | None:
        # Ключ в .env обычно хранится в одну строку с экранированными переводами строк
        if value is None:
            return None
        return value.replace("\\n", "\n")

    # --- Sheet Names ---
    users_sheet_name: str = Field(default="Usuarios")
    ebooks_sheet_name: str = Field(default="Ebooks")
    classes_sheet_name: str = Field(default="Clases")
    plans_sheet_name: str = Field(default="PlanesNutricionales")


@lru_cache
def get_settings() -> Settings:
    """Возвращает единственный экземпляр настроек для всего процесса."""
    return Settings()
