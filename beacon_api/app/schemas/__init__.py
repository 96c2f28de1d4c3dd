"""
Pydantic schema definitions for API payloads.

Beacons and rendezvous are returned by the stores directly as these
models, so the API layer and the service layer share one
representation.
"""
