"""
Тесты для поиска записей.
"""

import logging

import pytest

from app.services.record_locator import find

SHEET = "Usuarios"
HEADER = ["userId", "email"]


def _sheet(n: int) -> list[list[str]]:
    return [HEADER] + [[f"id-{k}", f"user{k}@x.com"] for k in range(n)]


@pytest.mark.asyncio
@pytest.mark.parametrize("n", [1, 5])
async def test_row_index_is_offset_plus_two(sheet_store, n):
    """Тест: запись со смещением k находится в физической строке k + 2."""
    sheet_store.sheets[SHEET] = _sheet(n)

    for k in {0, n - 1}:
        found = await find(sheet_store, SHEET, "userId", f"id-{k}")
        assert found is not None
        assert found.row_index == k + 2
        assert found.record == {"userId": f"id-{k}", "email": f"user{k}@x.com"}


@pytest.mark.asyncio
async def test_no_data_rows(sheet_store):
    sheet_store.sheets[SHEET] = _sheet(0)
    assert await find(sheet_store, SHEET, "userId", "id-0") is None


@pytest.mark.asyncio
async def test_empty_sheet(sheet_store):
    assert await find(sheet_store, SHEET, "userId", "id-0") is None


@pytest.mark.asyncio
async def test_first_match_wins(sheet_store):
    sheet_store.sheets[SHEET] = [HEADER, ["id-1", "dup@x.com"], ["id-2", "dup@x.com"]]

    found = await find(sheet_store, SHEET, "email", "dup@x.com")

    assert found.record["userId"] == "id-1"
    assert found.row_index == 2


@pytest.mark.asyncio
async def test_exact_match_only(sheet_store):
    """Тест: сравнение без учета регистра не выполняется."""
    sheet_store.sheets[SHEET] = [HEADER, ["id-1", "A@x.com"]]
    assert await find(sheet_store, SHEET, "email", "a@x.com") is None


@pytest.mark.asyncio
async def test_unknown_column_is_not_found(sheet_store, caplog):
    """Тест: отсутствующая колонка - это 'не найдено' с предупреждением, без исключения."""
    sheet_store.sheets[SHEET] = _sheet(2)

    with caplog.at_level(logging.WARNING):
        found = await find(sheet_store, SHEET, "phone", "123")

    assert found is None
    assert "Column 'phone' not found" in caplog.text
