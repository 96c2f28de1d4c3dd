"""
Beacon endpoints for API v1.

Create beacons, list them (optionally filtered by owner or creation
date), fetch one by id or by key, and read a beacon's rendezvous
history.  Ownership is a plain tag; there is no authentication.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from beacon_api.app.api.deps import get_beacon_service
from beacon_api.app.schemas.beacon import BeaconCreate, BeaconRead
from beacon_api.app.schemas.rendezvous import RendezvousRead
from beacon_api.app.services.beacon_service import BeaconService

router = APIRouter()


@router.post("/", response_model=BeaconRead, status_code=status.HTTP_201_CREATED)
async def create_beacon(
    beacon_in: BeaconCreate,
    service: BeaconService = Depends(get_beacon_service),
) -> BeaconRead:
    """Issue a new beacon.

    The response carries the generated ``key``; clients embed
    ``/b/{key}`` wherever they want fetches to be recorded.
    """
    return await service.create(beacon_in.owner_id, beacon_in.name, beacon_in.description)


@router.get("/", response_model=List[BeaconRead])
async def list_beacons(
    owner_id: Optional[str] = Query(None, description="Only beacons of this owner"),
    created_on: Optional[date] = Query(None, alias="date", description="Only beacons created on this UTC day"),
    service: BeaconService = Depends(get_beacon_service),
) -> List[BeaconRead]:
    """List beacons, oldest first."""
    if owner_id is not None:
        beacons = await service.find_beacons_for_owner(owner_id)
        if created_on is not None:
            beacons = [b for b in beacons if b.creation_date.date() == created_on]
        return beacons
    if created_on is not None:
        return await service.find_beacons_by_date(created_on)
    return await service.list_beacons()


@router.get("/id/{beacon_id}", response_model=BeaconRead)
async def get_beacon(
    beacon_id: int,
    service: BeaconService = Depends(get_beacon_service),
) -> BeaconRead:
    beacon = await service.get_beacon(beacon_id)
    if beacon is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Beacon not found")
    return beacon


@router.get("/{beacon_key}", response_model=BeaconRead)
async def find_beacon(
    beacon_key: str,
    partial: bool = Query(False, description="Match any beacon whose key contains the given text"),
    service: BeaconService = Depends(get_beacon_service),
) -> BeaconRead:
    """Retrieve a beacon by key.

    Returns 404 when nothing matches and 409 when a partial key
    matches more than one beacon.
    """
    beacon = await service.find_beacon(beacon_key, partial=partial)
    if beacon is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Beacon not found")
    return beacon


@router.get("/{beacon_key}/rendezvous", response_model=List[RendezvousRead])
async def list_beacon_rendezvous(
    beacon_key: str,
    service: BeaconService = Depends(get_beacon_service),
) -> List[RendezvousRead]:
    """Rendezvous history of one beacon, oldest first."""
    return await service.find_rendezvous_for_beacon(beacon_key)
