"""
Проверка и восстановление заголовка листа.
"""

import logging

from app.services.row_codec import Schema, header_of
from app.services.sheet_store import HEADER_RANGE, SheetStore

logger = logging.getLogger(__name__)


async def ensure_header(store: SheetStore, sheet_name: str, expected: Schema) -> bool:
    """
    Гарантирует, что первая строка листа совпадает с ожидаемой схемой.

    - в листе нет ни одной строки: заголовок добавляется первой строкой;
    - первая строка пустая, но ниже есть данные: она перезаписывается
      заголовком (append записал бы заголовок после данных);
    - заголовок отличается: первая строка перезаписывается на месте
      (существующие строки данных не перестраиваются);
    - заголовок совпадает: ничего не пишется.

    Returns:
        True, если заголовок был записан.
    """
    current_rows = await store.read_range(sheet_name, HEADER_RANGE)

    if not current_rows and not await store.bulk_read(sheet_name):
        await store.append(sheet_name, list(expected))
        logger.info(f"Header for sheet '{sheet_name}' created.")
        return True

    current = header_of(current_rows)
    if current == tuple(expected):
        return False

    logger.warning(
        f"Header mismatch in sheet '{sheet_name}': {list(current)} != {list(expected)}. "
        "Overwriting row 1."
    )
    await store.update_range(sheet_name, HEADER_RANGE, [list(expected)])
    return True
