"""
Общие фикстуры: in-memory реализация SheetStore и настройки для тестов.
"""

import re

import pytest

from app.core.config import Settings

_ROW_RANGE = re.compile(r"^(\d+):(\d+)$")


class InMemorySheetStore:
    """
    Хранилище-таблица в памяти с тем же контрактом, что и GoogleSheetStore.

    Поддерживает только построчные диапазоны вида "N:N", как и код приложения.
    Все записи складываются в `writes`, чтобы тесты могли их проверять.
    """

    def __init__(self, sheets: dict[str, list[list[str]]] | None = None):
        self.sheets = {name: [list(r) for r in grid] for name, grid in (sheets or {}).items()}
        self.writes: list[tuple[str, str, list]] = []
        self.authorize_calls = 0

    async def authorize(self) -> None:
        self.authorize_calls += 1

    def _rows(self, range_spec: str) -> tuple[int, int]:
        match = _ROW_RANGE.match(range_spec)
        if not match:
            raise ValueError(f"Unsupported range: {range_spec}")
        return int(match.group(1)), int(match.group(2))

    async def bulk_read(self, sheet_name: str) -> list[list[str]]:
        return [list(r) for r in self.sheets.get(sheet_name, [])]

    async def append(self, sheet_name: str, row: list[str]) -> None:
        self.writes.append(("append", sheet_name, list(row)))
        self.sheets.setdefault(sheet_name, []).append(list(row))

    async def read_range(self, sheet_name: str, range_spec: str) -> list[list[str]]:
        first, last = self._rows(range_spec)
        grid = self.sheets.get(sheet_name, [])
        return [list(r) for r in grid[first - 1 : last] if r]

    async def update_range(
        self, sheet_name: str, range_spec: str, grid: list[list[str]]
    ) -> None:
        self.writes.append(("update", sheet_name, [list(r) for r in grid]))
        first, _ = self._rows(range_spec)
        sheet = self.sheets.setdefault(sheet_name, [])
        for offset, row in enumerate(grid):
            index = first - 1 + offset
            while len(sheet) <= index:
                sheet.append([])
            sheet[index] = list(row)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret="test-secret",
        google_sheet_id="test-sheet-id",
        users_sheet_name="Usuarios",
        ebooks_sheet_name="Ebooks",
        classes_sheet_name="Clases",
        plans_sheet_name="PlanesNutricionales",
    )


@pytest.fixture
def sheet_store() -> InMemorySheetStore:
    return InMemorySheetStore()
