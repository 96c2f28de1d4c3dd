"""
Application package initializer.

The service issues beacons (high‑entropy tracking keys) and records
every rendezvous, i.e. each time a beacon is fetched.  Persistence and
business rules live in ``services``, request/response models in
``schemas`` and HTTP routes in ``api/v1/endpoints``.  The FastAPI
application itself is assembled by ``main.create_app``.
"""
