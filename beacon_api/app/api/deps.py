"""
FastAPI dependencies shared by the v1 endpoints.

The application factory attaches the configured ``BeaconService`` and
``Settings`` to ``app.state``; these helpers hand them to route
handlers so no handler touches module‑level state.
"""

from fastapi import Request

from beacon_api.app.core.config import Settings
from beacon_api.app.services.beacon_service import BeaconService


def get_beacon_service(request: Request) -> BeaconService:
    return request.app.state.beacon_service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def client_address(request: Request) -> str:
    """Return the network origin of ``request``.

    Behind a trusted proxy ``ProxyHeadersMiddleware`` has already
    replaced the socket peer with the forwarded client.  Returns
    ``"unknown"`` when the transport reports no peer.
    """
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
