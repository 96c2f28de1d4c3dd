"""
Pydantic models for beacon data.

``BeaconCreate`` is the request body for issuing a beacon.  The field
names of the first public client (``userId``, ``beaconName``) are still
accepted as aliases.  ``BeaconRead`` is the stored entity as returned
by ``BeaconStore`` and the API.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field


class BeaconCreate(BaseModel):
    """Schema for requesting a new beacon."""

    owner_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("owner_id", "ownerId", "userId"),
        examples=["u1"],
    )
    name: str = Field(
        ...,
        validation_alias=AliasChoices("name", "beaconName"),
        examples=["Newsletter open tracker"],
    )
    description: str = Field(..., examples=["Embedded in the October issue"])


class BeaconRead(BaseModel):
    """A stored beacon."""

    id: int
    key: str
    owner_id: str
    name: str
    description: str
    creation_date: datetime

    model_config = {
        "from_attributes": True,
        "frozen": True,
    }
