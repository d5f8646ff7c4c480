"""
Сервис выдачи контента (ебуки, классы, планы питания).

Контент только читается: листы заполняются вручную.
"""

import logging
from typing import Literal

from app.core.config import Settings
from app.services.membership import filter_by_membership
from app.services.row_codec import Record, decode
from app.services.sheet_store import SheetStore

logger = logging.getLogger(__name__)

ContentKind = Literal["ebooks", "classes", "plans"]


class ContentService:
    def __init__(self, store: SheetStore, settings: Settings):
        self.store = store
        self.sheet_names: dict[str, str] = {
            "ebooks": settings.ebooks_sheet_name,
            "classes": settings.classes_sheet_name,
            "plans": settings.plans_sheet_name,
        }

    async def list_content(self, kind: ContentKind, membership: str) -> list[Record]:
        sheet_name = self.sheet_names[kind]
        records = decode(await self.store.bulk_read(sheet_name))
        logger.debug(
            f"Loaded {len(records)} {kind} from '{sheet_name}' for '{membership}' user."
        )
        return filter_by_membership(records, membership)
