"""
Persistence for elected officials.

``contact_info`` is stored as JSON text and decoded when rows are read
back.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..db.provider import DatabaseProvider
from ..schemas.elected_official import (
    ElectedOfficialCreate,
    ElectedOfficialRead,
    ElectedOfficialUpdate,
)
from . import row_value

logger = logging.getLogger(__name__)

OFFICIAL_FIELDS = (
    "first_name",
    "last_name",
    "party",
    "party_id",
    "position",
    "region",
    "constituency",
    "mandate_start",
    "mandate_end",
    "assembly_id",
    "bio",
    "image_url",
)
OFFICIAL_COLUMNS = ("id",) + OFFICIAL_FIELDS + ("contact_info",)


class ElectedOfficialsRepository:
    def __init__(self, provider: DatabaseProvider) -> None:
        self.db = provider.get_db()

    async def find_all(self) -> List[ElectedOfficialRead]:
        rows = await self.db.select_from("elected_official").select(list(OFFICIAL_COLUMNS)).execute()
        return [self._row_to_official(row) for row in rows]

    async def find_by_id(self, official_id: str) -> Optional[ElectedOfficialRead]:
        row = await (
            self.db.select_from("elected_official")
            .where("id", "=", official_id)
            .select(list(OFFICIAL_COLUMNS))
            .execute_take_first()
        )
        return self._row_to_official(row) if row else None

    async def find_by_assembly(self, assembly_id: str) -> List[ElectedOfficialRead]:
        rows = await (
            self.db.select_from("elected_official")
            .where("assembly_id", "=", assembly_id)
            .select(list(OFFICIAL_COLUMNS))
            .execute()
        )
        return [self._row_to_official(row) for row in rows]

    async def find_by_party(self, party_id: str) -> List[ElectedOfficialRead]:
        rows = await (
            self.db.select_from("elected_official")
            .where("party_id", "=", party_id)
            .select(list(OFFICIAL_COLUMNS))
            .execute()
        )
        return [self._row_to_official(row) for row in rows]

    async def create(self, data: ElectedOfficialCreate) -> ElectedOfficialRead:
        now = datetime.now(timezone.utc)
        values: Dict[str, Any] = {"id": str(uuid.uuid4())}
        values.update({field: getattr(data, field) for field in OFFICIAL_FIELDS})
        values["contact_info"] = data.contact_info.model_dump_json() if data.contact_info else None
        values["created_at"] = now
        values["updated_at"] = now
        row = await (
            self.db.insert_into("elected_official")
            .values(values)
            .returning(list(OFFICIAL_COLUMNS))
            .execute_take_first_or_throw()
        )
        logger.info("Inserted elected official %s", values["id"])
        return self._row_to_official(row)

    async def update(self, official_id: str, updates: ElectedOfficialUpdate) -> ElectedOfficialRead:
        update_data: Dict[str, Any] = {
            field: getattr(updates, field)
            for field in OFFICIAL_FIELDS
            if getattr(updates, field) is not None
        }
        if updates.contact_info is not None:
            update_data["contact_info"] = updates.contact_info.model_dump_json()
        update_data["updated_at"] = datetime.now(timezone.utc)
        row = await (
            self.db.update_table("elected_official")
            .set(update_data)
            .where("id", "=", official_id)
            .returning(list(OFFICIAL_COLUMNS))
            .execute_take_first_or_throw()
        )
        return self._row_to_official(row)

    async def delete(self, official_id: str) -> bool:
        result = await self.db.delete_from("elected_official").where("id", "=", official_id).execute()
        return result[0]["affected"] > 0

    @staticmethod
    def _row_to_official(row: Mapping[str, Any]) -> ElectedOfficialRead:
        """Convert an ``elected_official`` row to an ``ElectedOfficialRead``."""
        contact_info = row_value(row, "contact_info")
        # Stored as JSON text; rows seeded directly may carry a dict.
        if isinstance(contact_info, str):
            try:
                contact_info = json.loads(contact_info)
            except json.JSONDecodeError:
                contact_info = None
        fields = {field: row_value(row, field) for field in OFFICIAL_FIELDS}
        return ElectedOfficialRead(id=row_value(row, "id"), contact_info=contact_info, **fields)
