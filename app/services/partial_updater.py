"""
Частичное обновление строки листа.

API перезаписывает диапазон целиком, поэтому строка сначала читается
полностью, в нее вносятся изменения, и только потом она записывается
обратно. Операция не транзакционная: параллельная запись в ту же строку
между чтением и записью будет потеряна.
"""

import logging
from collections.abc import Mapping
from typing import Any

from app.services.record_locator import FIRST_DATA_ROW
from app.services.row_codec import header_of
from app.services.sheet_store import HEADER_RANGE, SheetStore, row_range

logger = logging.getLogger(__name__)


async def apply_patch(
    store: SheetStore, sheet_name: str, row_index: int, patch: Mapping[str, Any]
) -> bool:
    """
    Вносит изменения из patch в строку row_index, не трогая остальные ячейки.

    Ключи, которых нет в заголовке, игнорируются.

    Returns:
        False, если у листа нет заголовка и запись не выполнялась.
    """
    if row_index < FIRST_DATA_ROW:
        raise ValueError(f"Row {row_index} is not a data row")

    schema = header_of(await store.read_range(sheet_name, HEADER_RANGE))
    if not schema:
        logger.error(f"No header found in sheet '{sheet_name}', update skipped.")
        return False

    current_rows = await store.read_range(sheet_name, row_range(row_index))
    merged = list(current_rows[0]) if current_rows else []
    if len(merged) < len(schema):
        merged.extend([""] * (len(schema) - len(merged)))

    for column, value in patch.items():
        if column not in schema:
            logger.debug(f"Ignoring unknown column '{column}' for sheet '{sheet_name}'.")
            continue
        merged[schema.index(column)] = value

    await store.update_range(sheet_name, row_range(row_index), [merged])
    logger.info(f"Row {row_index} of sheet '{sheet_name}' updated: {sorted(patch)}")
    return True
