"""
Фильтр контента по уровню подписки.
"""

from collections.abc import Iterable

from app.services.row_codec import Record

PREMIUM = "premium"
SENSITIVE_FIELDS = ("fileURL", "videoURL")


def is_premium_content(record: Record) -> bool:
    flag = record.get("premiumAccess")
    return bool(flag) and str(flag).upper() == "TRUE"


def filter_by_membership(records: Iterable[Record], membership: str) -> list[Record]:
    """
    Скрывает ссылки премиального контента от пользователей без подписки.

    Запись не удаляется: метаданные остаются видны (например, чтобы
    предложить подписку), а чувствительные поля становятся None.
    """
    is_premium_user = (membership or "").lower() == PREMIUM
    result = []
    for record in records:
        if is_premium_content(record) and not is_premium_user:
            record = {**record, **{field: None for field in SENSITIVE_FIELDS}}
        else:
            record = dict(record)
        result.append(record)
    return result
