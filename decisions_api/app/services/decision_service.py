"""
Business logic for decisions.

There are no validation rules on vote tallies; the service only makes
sure a decision exists before reading its votes, updating or deleting
it.
"""

import logging
from typing import List, Optional

from ..repositories.decisions_repository import DecisionsRepository
from ..schemas.decision import (
    DecisionCreate,
    DecisionFilters,
    DecisionRead,
    DecisionUpdate,
    IndividualVoteRead,
)

logger = logging.getLogger(__name__)


class DecisionService:
    """Service for managing decisions and reading their votes."""

    def __init__(self, repository: DecisionsRepository) -> None:
        self.repository = repository

    async def list_decisions(self, filters: Optional[DecisionFilters] = None) -> List[DecisionRead]:
        return await self.repository.find_all(filters)

    async def get_decision(self, decision_id: str) -> DecisionRead:
        """Return a decision or raise ``ValueError`` if it does not exist."""
        decision = await self.repository.find_by_id(decision_id)
        if decision is None:
            raise ValueError(f"Decision with ID {decision_id} not found")
        return decision

    async def list_votes(self, decision_id: str) -> List[IndividualVoteRead]:
        await self.get_decision(decision_id)
        return await self.repository.find_votes_by_decision_id(decision_id)

    async def create_decision(self, data: DecisionCreate) -> DecisionRead:
        logger.info("Creating decision '%s'", data.title)
        return await self.repository.create(data)

    async def update_decision(self, decision_id: str, updates: DecisionUpdate) -> DecisionRead:
        await self.get_decision(decision_id)
        logger.info("Updating decision %s", decision_id)
        return await self.repository.update(decision_id, updates)

    async def delete_decision(self, decision_id: str) -> None:
        await self.get_decision(decision_id)
        deleted = await self.repository.delete(decision_id)
        if not deleted:
            raise ValueError(f"Decision with ID {decision_id} not found")
        logger.info("Deleted decision %s", decision_id)
