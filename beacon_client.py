"""Beacon API client.

A thin wrapper around the Beacon API's REST endpoints using the
``requests`` library, plus a small command line front end.

The client exposes:

* :meth:`BeaconAPI.create_beacon` – issue a new beacon for an owner.
* :meth:`BeaconAPI.list_beacons` – list beacons, optionally by owner or day.
* :meth:`BeaconAPI.get_beacon` – fetch one beacon by (partial) key.
* :meth:`BeaconAPI.list_rendezvous` – rendezvous history of a beacon.
* :meth:`BeaconAPI.trigger` – fetch a beacon's public URL, recording a rendezvous.

Every method returns a tuple ``(data, error)``: on success ``error`` is
``None``; on failure ``data`` is ``None`` (or an empty list) and
``error`` is a dictionary with ``status_code`` and ``message``.

Command line usage::

    python beacon_client.py --url http://localhost:8000 create u1 "Newsletter" "October issue"
    python beacon_client.py list --owner u1
    python beacon_client.py show 1a2b3c
    python beacon_client.py history <key>
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

Error = Dict[str, Any]


class BeaconAPI:
    """Client for interacting with the Beacon API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _send(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[requests.Response], Optional[Error]]:
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform a JSON request relative to :attr:`base_url`."""
        response, error = self._send(method, path, params=params, json_body=json_body)
        if error is not None:
            return None, error
        if response.content:
            return response.json(), None
        return None, None

    # ------------------------------------------------------------------
    # Beacon operations
    # ------------------------------------------------------------------
    def create_beacon(self, owner_id: str, name: str, description: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        payload = {"owner_id": owner_id, "name": name, "description": description}
        return self._request("POST", f"{API_PREFIX}/beacons/", json_body=payload)

    def list_beacons(
        self, owner_id: Optional[str] = None, day: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """List beacons, optionally restricted to an owner and/or a day (``YYYY-MM-DD``)."""
        params: Dict[str, Any] = {}
        if owner_id:
            params["owner_id"] = owner_id
        if day:
            params["date"] = day
        data, error = self._request("GET", f"{API_PREFIX}/beacons/", params=params or None)
        return data or [], error

    def get_beacon(self, key: str, partial: bool = False) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        params = {"partial": "true"} if partial else None
        return self._request("GET", f"{API_PREFIX}/beacons/{key}", params=params)

    def list_rendezvous(self, key: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", f"{API_PREFIX}/beacons/{key}/rendezvous")
        return data or [], error

    def trigger(self, key: str) -> Tuple[Optional[bytes], Optional[Error]]:
        """Fetch the public beacon URL and return the payload bytes."""
        response, error = self._send("GET", f"/b/{key}")
        if error is not None:
            return None, error
        return response.content, None


def _print(data: Any, error: Optional[Error]) -> int:
    if error is not None:
        print(f"[!] {error['message']} (status {error['status_code']})", file=sys.stderr)
        return 1
    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Command line client for the Beacon API.")
    ap.add_argument("--url", default=os.getenv("BEACON_API_URL", "http://localhost:8000"), help="Server base URL")
    sub = ap.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Issue a new beacon")
    create.add_argument("owner_id")
    create.add_argument("name")
    create.add_argument("description")

    listing = sub.add_parser("list", help="List beacons")
    listing.add_argument("--owner", help="Only beacons of this owner")
    listing.add_argument("--date", help="Only beacons created on this day (YYYY-MM-DD)")

    show = sub.add_parser("show", help="Show one beacon")
    show.add_argument("key")
    show.add_argument("--partial", action="store_true", help="Match on a key fragment")

    history = sub.add_parser("history", help="Show the rendezvous history of a beacon")
    history.add_argument("key")

    args = ap.parse_args(argv)
    client = BeaconAPI(base_url=args.url)

    if args.command == "create":
        return _print(*client.create_beacon(args.owner_id, args.name, args.description))
    if args.command == "list":
        return _print(*client.list_beacons(owner_id=args.owner, day=args.date))
    if args.command == "show":
        return _print(*client.get_beacon(args.key, partial=args.partial))
    return _print(*client.list_rendezvous(args.key))


if __name__ == "__main__":
    sys.exit(main())
