"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
The rendezvous route that clients actually fetch lives outside the
versioned API (see ``endpoints.track``) and is mounted by ``main``.
"""

from fastapi import APIRouter

from .endpoints import beacons, rendezvous

router = APIRouter()

router.include_router(beacons.router, prefix="/beacons", tags=["beacons"])
router.include_router(rendezvous.router, prefix="/rendezvous", tags=["rendezvous"])
