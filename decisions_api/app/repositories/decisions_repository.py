"""
Persistence for decisions and their individual votes.

Decision rows flatten the vote tally into columns (``in_favor``,
``against`` ...) while the API nests it under ``results_overview``.
This module performs that mapping in both directions.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..db.provider import DatabaseProvider
from ..schemas.decision import (
    DecisionCreate,
    DecisionFilters,
    DecisionRead,
    DecisionUpdate,
    IndividualVoteRead,
)
from . import row_value

logger = logging.getLogger(__name__)

DECISION_FIELDS = ("title", "summary", "full_text", "date", "source", "assembly_id")
RESULT_FIELDS = ("in_favor", "against", "abstention", "absent", "total_voters", "is_passed")
DECISION_COLUMNS = ("id",) + DECISION_FIELDS + RESULT_FIELDS
VOTE_COLUMNS = ("id", "decision_id", "elected_official_id", "vote_value")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DecisionsRepository:
    """Decision queries issued through the configured database."""

    def __init__(self, provider: DatabaseProvider) -> None:
        self.db = provider.get_db()

    async def find_all(self, filters: Optional[DecisionFilters] = None) -> List[DecisionRead]:
        query = (
            self.db.select_from("decision")
            .left_join("assembly", "assembly.id", "decision.assembly_id")
            .select([f"decision.{column}" for column in DECISION_COLUMNS])
        )
        if filters:
            if filters.assembly_id:
                query = query.where("decision.assembly_id", "=", filters.assembly_id)
            if filters.date_from:
                query = query.where("decision.date", ">=", filters.date_from)
            if filters.date_to:
                query = query.where("decision.date", "<=", filters.date_to)
            if filters.search_term:
                term = f"%{filters.search_term}%"
                query = query.where(
                    lambda eb: eb.or_([
                        eb("decision.title", "ilike", term),
                        eb("decision.summary", "ilike", term),
                        eb("decision.full_text", "ilike", term),
                    ])
                )
            # TODO: filter by party_id once votes can be joined to officials.
        rows = await query.execute()
        return [self._row_to_decision(row) for row in rows]

    async def find_by_id(self, decision_id: str) -> Optional[DecisionRead]:
        row = await (
            self.db.select_from("decision")
            .where("id", "=", decision_id)
            .select(list(DECISION_COLUMNS))
            .execute_take_first()
        )
        return self._row_to_decision(row) if row else None

    async def find_votes_by_decision_id(self, decision_id: str) -> List[IndividualVoteRead]:
        rows = await (
            self.db.select_from("individual_vote")
            .where("decision_id", "=", decision_id)
            .select(list(VOTE_COLUMNS))
            .execute()
        )
        return [
            IndividualVoteRead(**{column: row_value(row, column) for column in VOTE_COLUMNS})
            for row in rows
        ]

    async def create(self, data: DecisionCreate) -> DecisionRead:
        now = _utcnow()
        values: Dict[str, Any] = {
            "id": str(uuid.uuid4()),
            "title": data.title,
            "summary": data.summary,
            "full_text": data.full_text,
            "date": data.date,
            "source": data.source,
            "assembly_id": data.assembly_id,
            **data.results_overview.model_dump(),
            "created_at": now,
            "updated_at": now,
        }
        row = await (
            self.db.insert_into("decision")
            .values(values)
            .returning(list(DECISION_COLUMNS))
            .execute_take_first_or_throw()
        )
        logger.info("Inserted decision %s", values["id"])
        return self._row_to_decision(row)

    async def update(self, decision_id: str, updates: DecisionUpdate) -> DecisionRead:
        provided = updates.model_dump(exclude_none=True)
        update_data: Dict[str, Any] = {
            field: provided[field] for field in DECISION_FIELDS if field in provided
        }
        update_data.update(provided.get("results_overview", {}))
        update_data["updated_at"] = _utcnow()
        row = await (
            self.db.update_table("decision")
            .set(update_data)
            .where("id", "=", decision_id)
            .returning(list(DECISION_COLUMNS))
            .execute_take_first_or_throw()
        )
        return self._row_to_decision(row)

    async def delete(self, decision_id: str) -> bool:
        """Delete a decision and its votes.

        Returns ``True`` if the decision row was removed.
        """
        await self.db.delete_from("individual_vote").where("decision_id", "=", decision_id).execute()
        result = await self.db.delete_from("decision").where("id", "=", decision_id).execute()
        return result[0]["affected"] > 0

    @staticmethod
    def _row_to_decision(row: Mapping[str, Any]) -> DecisionRead:
        """Convert a ``decision`` row to a ``DecisionRead`` schema instance."""
        results = {field: row_value(row, field) for field in RESULT_FIELDS}
        return DecisionRead(
            id=row_value(row, "id"),
            title=row_value(row, "title"),
            summary=row_value(row, "summary"),
            full_text=row_value(row, "full_text"),
            date=row_value(row, "date"),
            source=row_value(row, "source"),
            assembly_id=row_value(row, "assembly_id"),
            results_overview=results,
        )
