"""
Elected official endpoints for API v1.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from decisions_api.app.api.deps import get_elected_official_service
from decisions_api.app.schemas.elected_official import (
    ElectedOfficialCreate,
    ElectedOfficialRead,
    ElectedOfficialUpdate,
)
from decisions_api.app.services.elected_official_service import ElectedOfficialService

router = APIRouter()


@router.get("/", response_model=List[ElectedOfficialRead])
async def list_officials(
    assembly_id: Optional[str] = Query(None),
    party_id: Optional[str] = Query(None),
    service: ElectedOfficialService = Depends(get_elected_official_service),
) -> List[ElectedOfficialRead]:
    """List elected officials, optionally restricted to one assembly or party.

    When both filters are given, ``assembly_id`` wins.
    """
    if assembly_id:
        return await service.list_by_assembly(assembly_id)
    if party_id:
        return await service.list_by_party(party_id)
    return await service.list_officials()


@router.get("/{official_id}", response_model=ElectedOfficialRead)
async def get_official(
    official_id: str,
    service: ElectedOfficialService = Depends(get_elected_official_service),
) -> ElectedOfficialRead:
    try:
        return await service.get_official(official_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/", response_model=ElectedOfficialRead, status_code=status.HTTP_201_CREATED)
async def create_official(
    official: ElectedOfficialCreate,
    service: ElectedOfficialService = Depends(get_elected_official_service),
) -> ElectedOfficialRead:
    return await service.create_official(official)


@router.put("/{official_id}", response_model=ElectedOfficialRead)
async def update_official(
    official_id: str,
    updates: ElectedOfficialUpdate,
    service: ElectedOfficialService = Depends(get_elected_official_service),
) -> ElectedOfficialRead:
    """Update an elected official; unspecified fields remain unchanged."""
    try:
        return await service.update_official(official_id, updates)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{official_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_official(
    official_id: str,
    service: ElectedOfficialService = Depends(get_elected_official_service),
) -> None:
    try:
        await service.delete_official(official_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return None
