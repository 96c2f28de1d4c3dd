"""
Domain error taxonomy.

Services raise these instead of leaking ``sqlite3`` errors.  Endpoints
translate them into HTTP responses: ``BeaconNotFound`` becomes 404,
``AmbiguousResult`` 409 and the remaining errors 500.
"""


class BeaconError(Exception):
    """Base class for all beacon service errors."""


class DuplicateKey(BeaconError):
    """An insert collided with an existing beacon key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Beacon key already exists: {key}")
        self.key = key


class AmbiguousResult(BeaconError):
    """A single‑result lookup matched more than one record."""

    def __init__(self, key: str) -> None:
        super().__init__(f"More than one beacon matches key: {key}")
        self.key = key


class BeaconNotFound(BeaconError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Beacon not found: {key}")
        self.key = key


class BeaconCreationFailed(BeaconError):
    """Key generation kept colliding until the retry budget ran out."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Unable to create beacon after {attempts} attempts")
        self.attempts = attempts


class StorageError(BeaconError):
    """Unexpected failure in the persistence backend."""


class ConfigurationError(BeaconError):
    """Required configuration (e.g. the payload file) is missing."""
