"""
Pydantic models for rendezvous records.

A rendezvous is written every time a beacon is fetched and carries the
requester's address and the time of the fetch.
"""

from datetime import datetime

from pydantic import BaseModel


class RendezvousRead(BaseModel):
    """A stored rendezvous."""

    id: int
    beacon_key: str
    remote_address: str
    creation_date: datetime

    model_config = {
        "from_attributes": True,
        "frozen": True,
    }
