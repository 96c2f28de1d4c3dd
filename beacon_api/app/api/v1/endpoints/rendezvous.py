"""
Rendezvous query endpoints for API v1.

Read‑only access to recorded rendezvous by id or by day.  Recording
happens through the public ``/b/{beacon_key}`` route.
"""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from beacon_api.app.api.deps import get_beacon_service
from beacon_api.app.schemas.rendezvous import RendezvousRead
from beacon_api.app.services.beacon_service import BeaconService

router = APIRouter()


@router.get("/", response_model=List[RendezvousRead])
async def list_rendezvous_by_date(
    created_on: date = Query(..., alias="date", description="UTC day, e.g. 2026-10-19"),
    service: BeaconService = Depends(get_beacon_service),
) -> List[RendezvousRead]:
    return await service.find_rendezvous_by_date(created_on)


@router.get("/{rendezvous_id}", response_model=RendezvousRead)
async def get_rendezvous(
    rendezvous_id: int,
    service: BeaconService = Depends(get_beacon_service),
) -> RendezvousRead:
    found = await service.get_rendezvous(rendezvous_id)
    if found is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rendezvous not found")
    return found
