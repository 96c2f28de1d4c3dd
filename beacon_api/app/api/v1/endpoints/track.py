"""
Public rendezvous route.

``GET /b/{beacon_key}`` is the URL clients embed.  Each fetch of a
known beacon is recorded with the requester's address and answered
with the configured payload file.  Unknown keys get a 404 and leave no
record; a missing payload file is a 500 and records nothing either.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse

from beacon_api.app.api.deps import client_address, get_beacon_service, get_settings
from beacon_api.app.core.config import Settings
from beacon_api.app.core.exceptions import ConfigurationError
from beacon_api.app.services.beacon_service import BeaconService

router = APIRouter()

DEFAULT_PAYLOAD = Path(__file__).resolve().parents[3] / "static" / "beacon.gif"


def resolve_payload(settings: Settings) -> Path:
    """Return the payload file to serve, or raise ``ConfigurationError``."""
    path = Path(settings.payload_path) if settings.payload_path else DEFAULT_PAYLOAD
    if not path.is_file():
        raise ConfigurationError(f"Payload file not found: {path}")
    return path


@router.get("/b/{beacon_key}", response_class=FileResponse)
async def rendezvous(
    beacon_key: str,
    request: Request,
    service: BeaconService = Depends(get_beacon_service),
    settings: Settings = Depends(get_settings),
) -> FileResponse:
    payload = resolve_payload(settings)
    await service.record_rendezvous(beacon_key, client_address(request))
    return FileResponse(
        payload,
        media_type=settings.payload_media_type,
        headers={"Cache-Control": "no-store, max-age=0"},
    )
