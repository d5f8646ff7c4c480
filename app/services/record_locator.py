"""
Поиск записи по значению колонки.
"""

import logging
from dataclasses import dataclass

from app.services.row_codec import Record, decode, header_of
from app.services.sheet_store import SheetStore

logger = logging.getLogger(__name__)

# Строка 1 - заголовок, а физические строки нумеруются с 1
FIRST_DATA_ROW = 2


@dataclass(frozen=True)
class LocatedRecord:
    record: Record
    row_index: int


async def find(
    store: SheetStore, sheet_name: str, column: str, value: str
) -> LocatedRecord | None:
    """
    Линейный поиск первой записи, у которой record[column] == value.

    Сравнение строгое: без приведения типов и регистра. Дубликаты ключей
    не обнаруживаются, побеждает первое совпадение.
    """
    grid = await store.bulk_read(sheet_name)
    schema = header_of(grid)
    if column not in schema:
        logger.warning(
            f"Column '{column}' not found in header of sheet '{sheet_name}': {list(schema)}"
        )
        return None

    for offset, record in enumerate(decode(grid)):
        if record[column] == value:
            return LocatedRecord(record=record, row_index=offset + FIRST_DATA_ROW)
    return None
