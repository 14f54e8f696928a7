"""
Business logic for elected officials.
"""

import logging
from typing import List

from ..repositories.elected_officials_repository import ElectedOfficialsRepository
from ..schemas.elected_official import (
    ElectedOfficialCreate,
    ElectedOfficialRead,
    ElectedOfficialUpdate,
)

logger = logging.getLogger(__name__)


class ElectedOfficialService:
    """Service for managing elected officials."""

    def __init__(self, repository: ElectedOfficialsRepository) -> None:
        self.repository = repository

    async def list_officials(self) -> List[ElectedOfficialRead]:
        return await self.repository.find_all()

    async def list_by_assembly(self, assembly_id: str) -> List[ElectedOfficialRead]:
        return await self.repository.find_by_assembly(assembly_id)

    async def list_by_party(self, party_id: str) -> List[ElectedOfficialRead]:
        return await self.repository.find_by_party(party_id)

    async def get_official(self, official_id: str) -> ElectedOfficialRead:
        official = await self.repository.find_by_id(official_id)
        if official is None:
            raise ValueError(f"Elected official with ID {official_id} not found")
        return official

    async def create_official(self, data: ElectedOfficialCreate) -> ElectedOfficialRead:
        logger.info("Creating elected official %s %s", data.first_name, data.last_name)
        return await self.repository.create(data)

    async def update_official(self, official_id: str, updates: ElectedOfficialUpdate) -> ElectedOfficialRead:
        await self.get_official(official_id)
        logger.info("Updating elected official %s", official_id)
        return await self.repository.update(official_id, updates)

    async def delete_official(self, official_id: str) -> bool:
        await self.get_official(official_id)
        logger.info("Deleting elected official %s", official_id)
        return await self.repository.delete(official_id)
