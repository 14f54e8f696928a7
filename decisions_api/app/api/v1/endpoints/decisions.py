"""
Decision endpoints for API v1.

CRUD operations for decisions plus read access to the individual
votes cast on each decision.  Missing decisions yield HTTP 404.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from decisions_api.app.api.deps import get_decision_service
from decisions_api.app.schemas.decision import (
    DecisionCreate,
    DecisionFilters,
    DecisionRead,
    DecisionUpdate,
    IndividualVoteRead,
)
from decisions_api.app.services.decision_service import DecisionService

router = APIRouter()


@router.get("/", response_model=List[DecisionRead])
async def list_decisions(
    assembly_id: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    party_id: Optional[str] = Query(None),
    search_term: Optional[str] = Query(None),
    service: DecisionService = Depends(get_decision_service),
) -> List[DecisionRead]:
    """List decisions.

    - **assembly_id**: only decisions of this assembly.
    - **date_from**, **date_to**: inclusive range on the decision date.
    - **search_term**: case-insensitive match on title, summary or full text.
    - **party_id**: accepted but not applied yet.
    """
    filters = DecisionFilters(
        assembly_id=assembly_id,
        date_from=date_from,
        date_to=date_to,
        party_id=party_id,
        search_term=search_term,
    )
    return await service.list_decisions(filters)


@router.get("/{decision_id}", response_model=DecisionRead)
async def get_decision(
    decision_id: str,
    service: DecisionService = Depends(get_decision_service),
) -> DecisionRead:
    """Retrieve a single decision by its ID."""
    try:
        return await service.get_decision(decision_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get("/{decision_id}/votes", response_model=List[IndividualVoteRead])
async def list_decision_votes(
    decision_id: str,
    service: DecisionService = Depends(get_decision_service),
) -> List[IndividualVoteRead]:
    """List the individual votes cast on a decision."""
    try:
        return await service.list_votes(decision_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/", response_model=DecisionRead, status_code=status.HTTP_201_CREATED)
async def create_decision(
    decision: DecisionCreate,
    service: DecisionService = Depends(get_decision_service),
) -> DecisionRead:
    """Create a new decision."""
    return await service.create_decision(decision)


@router.put("/{decision_id}", response_model=DecisionRead)
async def update_decision(
    decision_id: str,
    updates: DecisionUpdate,
    service: DecisionService = Depends(get_decision_service),
) -> DecisionRead:
    """Update an existing decision.

    Partial updates are supported; unspecified fields remain unchanged.
    """
    try:
        return await service.update_decision(decision_id, updates)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{decision_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_decision(
    decision_id: str,
    service: DecisionService = Depends(get_decision_service),
) -> None:
    """Delete a decision together with its individual votes."""
    try:
        await service.delete_decision(decision_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return None
