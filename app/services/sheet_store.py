"""
Сервисный модуль для инкапсуляции работы с Google Sheets API.

Таблица используется как хранилище: здесь живут только "сырые" операции
над сеткой значений (чтение листа целиком, добавление строки, чтение и
перезапись диапазона). Строки, заголовки и ключи появляются уровнем выше.

Подключение к API создается один раз на процесс, лениво, при первом
обращении (или на старте приложения). Параллельные первые вызовы ждут одну
и ту же попытку авторизации.
"""

import asyncio
import enum
import logging
from typing import Protocol

import gspread
import requests.exceptions
from google.oauth2.service_account import Credentials
from gspread.exceptions import APIError
from gspread.utils import absolute_range_name
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.core.config import Settings

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

Cell = str
Grid = list[list[Cell]]


def is_retryable_gspread_error(exception: BaseException) -> bool:
    return isinstance(exception, APIError) and exception.response.status_code >= 500


# Повторяем только первичное подключение. Запросы к листам не повторяются:
# ошибка уходит наверх и превращается в 500 для конкретного запроса.
connect_retry = retry(
    retry=(
        retry_if_exception_type(requests.exceptions.RequestException)
        | retry_if_exception(is_retryable_gspread_error)
    ),
    wait=wait_exponential(multiplier=2, min=2, max=30),
    stop=stop_after_attempt(5),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


def row_range(row_index: int) -> str:
    """A1-диапазон, покрывающий всю физическую строку (нумерация с 1)."""
    if row_index < 1:
        raise ValueError(f"Row index must be >= 1, got {row_index}")
    return f"{row_index}:{row_index}"


HEADER_RANGE = row_range(1)


class SheetStore(Protocol):
    """
    Минимальный контракт хранилища-таблицы.

    Любая реализация (Google Sheets, in-memory для тестов) должна
    предоставлять эти операции.
    """

    async def authorize(self) -> None: ...

    async def bulk_read(self, sheet_name: str) -> Grid: ...

    async def append(self, sheet_name: str, row: list[Cell]) -> None: ...

    async def read_range(self, sheet_name: str, range_spec: str) -> Grid: ...

    async def update_range(
        self, sheet_name: str, range_spec: str, grid: Grid
    ) -> None: ...


class AuthState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    AUTHORIZING = "authorizing"
    READY = "ready"


class GoogleSheetStore:
    """
    Реализация SheetStore поверх gspread.

    Все вызовы gspread синхронные, поэтому выполняются в отдельном потоке,
    чтобы не блокировать event loop.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._spreadsheet: gspread.Spreadsheet | None = None
        self._pending: asyncio.Task | None = None

    @property
    def state(self) -> AuthState:
        if self._spreadsheet is not None:
            return AuthState.READY
        if self._pending is not None:
            return AuthState.AUTHORIZING
        return AuthState.UNINITIALIZED

    def _build_client(self) -> gspread.Client:
        email = self.settings.google_service_account_email
        private_key = self.settings.google_private_key
        if email and private_key:
            logger.info(f"Using service account {email} from environment.")
            creds = Credentials.from_service_account_info(
                {
                    "type": "service_account",
                    "client_email": email,
                    "private_key": private_key,
                    "token_uri": TOKEN_URI,
                },
                scopes=SCOPES,
            )
            return gspread.authorize(creds)

        credentials_file = self.settings.google_credentials_file
        if not credentials_file.exists():
            logger.error(f"Credentials file not found at: {credentials_file}")
            raise FileNotFoundError(
                f"Google credentials file not found at {credentials_file}"
            )
        logger.info(f"Using service account file {credentials_file}.")
        return gspread.service_account(filename=str(credentials_file), scopes=SCOPES)

    @connect_retry
    def _connect(self) -> gspread.Spreadsheet:
        """Создает клиента и открывает таблицу (первый сетевой вызов)."""
        client = self._build_client()
        try:
            return client.open_by_key(self.settings.google_sheet_id)
        except gspread.exceptions.SpreadsheetNotFound:
            logger.error(
                f"Spreadsheet with ID '{self.settings.google_sheet_id}' not found."
            )
            raise

    async def authorize(self) -> None:
        """
        Идемпотентная авторизация: первый вызов платит за подключение,
        остальные ждут тот же результат или сразу возвращаются.
        """
        if self._spreadsheet is not None:
            return

        if self._pending is None:
            logger.info("Authorizing Google Sheets API client...")
            self._pending = asyncio.ensure_future(asyncio.to_thread(self._connect))

        pending = self._pending
        try:
            spreadsheet = await asyncio.shield(pending)
        except Exception:
            # Неудачная попытка не кэшируется: следующий вызов начнет заново
            if self._pending is pending:
                self._pending = None
            raise

        if self._spreadsheet is None:
            self._spreadsheet = spreadsheet
            self._pending = None
            logger.info("Google Sheets API client authorized.")

    async def _ready(self) -> gspread.Spreadsheet:
        await self.authorize()
        assert self._spreadsheet is not None
        return self._spreadsheet

    async def bulk_read(self, sheet_name: str) -> Grid:
        spreadsheet = await self._ready()
        logger.debug(f"Reading sheet '{sheet_name}'.")
        response = await asyncio.to_thread(
            spreadsheet.values_get, absolute_range_name(sheet_name)
        )
        return response.get("values", [])

    async def append(self, sheet_name: str, row: list[Cell]) -> None:
        spreadsheet = await self._ready()
        logger.debug(f"Appending row to sheet '{sheet_name}'.")
        await asyncio.to_thread(
            spreadsheet.values_append,
            absolute_range_name(sheet_name),
            {"valueInputOption": "RAW"},
            {"values": [row]},
        )

    async def read_range(self, sheet_name: str, range_spec: str) -> Grid:
        spreadsheet = await self._ready()
        response = await asyncio.to_thread(
            spreadsheet.values_get, absolute_range_name(sheet_name, range_spec)
        )
        return response.get("values", [])

    async def update_range(self, sheet_name: str, range_spec: str, grid: Grid) -> None:
        spreadsheet = await self._ready()
        logger.debug(f"Updating range {range_spec} of sheet '{sheet_name}'.")
        await asyncio.to_thread(
            spreadsheet.values_update,
            absolute_range_name(sheet_name, range_spec),
            {"valueInputOption": "RAW"},
            {"values": grid},
        )
