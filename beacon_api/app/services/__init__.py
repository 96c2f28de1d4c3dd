"""
Service layer.

Key generation, the beacon and rendezvous stores, and the
``BeaconService`` that orchestrates them.  Stores talk to SQLite and
are handed to the service explicitly, so handlers never reach for a
module‑level store.
"""
