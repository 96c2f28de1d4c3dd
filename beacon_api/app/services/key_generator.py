"""
Beacon key generation.

A key is a random integer of at least 130 bits drawn from the
operating system's CSPRNG, written in radix 32 (digits ``0-9a-v``) and
zero‑padded to a fixed width.  Keys are not checked for uniqueness
here; ``BeaconStore.insert`` rejects duplicates.
"""

import math
import secrets
from random import Random
from typing import Optional

MIN_KEY_BITS = 130
ALPHABET = "0123456789abcdefghijklmnopqrstuv"


def encode_base32(value: int, width: int = 0) -> str:
    """Encode a non‑negative integer in radix 32, padded to ``width``."""
    if value < 0:
        raise ValueError("value must be non-negative")
    digits = []
    while value:
        value, remainder = divmod(value, 32)
        digits.append(ALPHABET[remainder])
    return "".join(reversed(digits)).rjust(max(width, 1), "0")


class KeyGenerator:
    """Produces hard‑to‑guess beacon keys."""

    def __init__(self, bits: int = MIN_KEY_BITS, rng: Optional[Random] = None) -> None:
        if bits < MIN_KEY_BITS:
            raise ValueError(f"Beacon keys need at least {MIN_KEY_BITS} bits of entropy, got {bits}")
        self.bits = bits
        self.length = math.ceil(bits / 5)
        self._rng = rng or secrets.SystemRandom()

    def generate(self) -> str:
        return encode_base32(self._rng.getrandbits(self.bits), self.length)
