"""
Преобразование "сырых" строк листа в записи-словари и обратно.

Первая строка листа - заголовок (схема). Значение записи определяется
позицией ячейки относительно заголовка.
"""

from collections.abc import Mapping, Sequence
from typing import Any

Schema = tuple[str, ...]
Record = dict[str, Any]

USERS_SCHEMA: Schema = (
    "userId",
    "email",
    "passwordHash",
    "membership",
    "createdAt",
    "updatedAt",
)


def header_of(grid: Sequence[Sequence[str]]) -> Schema:
    """Возвращает заголовок листа или пустую схему, если его нет."""
    if not grid or not grid[0] or not any(grid[0]):
        return ()
    return tuple(grid[0])


def decode_row(schema: Schema, row: Sequence[str]) -> Record:
    # Пустые хвостовые ячейки API просто не возвращает
    return {
        column: row[index] if index < len(row) else ""
        for index, column in enumerate(schema)
    }


def decode(grid: Sequence[Sequence[str]]) -> list[Record]:
    """
    Декодирует лист целиком в список записей.

    Пустой лист и лист из одного заголовка дают пустой список.
    """
    schema = header_of(grid)
    if not schema:
        return []
    return [decode_row(schema, row) for row in grid[1:]]


def encode_for_append(schema: Schema, values: Mapping[str, Any]) -> list[Any]:
    """
    Раскладывает значения по колонкам в порядке схемы.

    Порядок берется из канонической схемы, а не из текущего заголовка листа;
    отсутствующие поля становятся пустыми строками.
    """
    return [values.get(column, "") for column in schema]
