"""Exchange API client.

This module defines a small client wrapper around the exchange REST
API, suitable for scripts and chat bots that drive an exchange.  The
client uses the ``requests`` library internally.

Every method returns a tuple ``(data, error)``: on success ``data``
holds the parsed JSON response (or ``None`` for empty responses) and
``error`` is ``None``; on failure ``data`` is ``None`` and ``error`` is
a dictionary with the keys ``status_code``, ``code`` and ``message``.
``code`` is the machine‑readable error code sent by the API (for
example ``locked`` or ``invalid_state``) when there is one.

Administrative methods need the exchange secret, which is sent in the
``Authorization`` header as ``Bearer <secret>``.

The module can also be used from the command line::

    python exchange_client.py --base-url http://127.0.0.1:7669 create "Summer Book Swap"
    python exchange_client.py get 1 --name alice
    python exchange_client.py stage 1 Voting --secret RarityBoopsDerpy
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class ExchangeClient:
    """Client for interacting with the exchange API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://127.0.0.1:7669``.
                The ``/api/v1`` prefix is added by the client.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
        secret: str | None = None,
    ) -> Result:
        """Perform an HTTP request against ``/api/v1<path>``."""
        url = f"{self.base_url}/api/v1{path}"
        headers: Dict[str, str] = {}
        if secret:
            headers["Authorization"] = f"Bearer {secret}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            code = None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    code = err_json.get("code")
                    message = err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not isinstance(message, str):
                message = json.dumps(message)
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "code": code, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Exchange operations
    # ------------------------------------------------------------------
    def create_exchange(
        self,
        title: str,
        user_max: Optional[int] = None,
        assignment_factor: Optional[float] = None,
    ) -> Result:
        """Create an exchange.  The returned record contains the secret."""
        body: Dict[str, Any] = {"title": title}
        if user_max is not None:
            body["user_max"] = user_max
        if assignment_factor is not None:
            body["assignment_factor"] = assignment_factor
        return self._request("POST", "/exchanges/", json_body=body)

    def get_exchange(self, exchange_id: int, name: Optional[str] = None) -> Result:
        params = {"name": name} if name else None
        return self._request("GET", f"/exchanges/{exchange_id}", params=params)

    def get_exchange_admin(self, exchange_id: int, secret: str) -> Result:
        return self._request("GET", f"/exchanges/{exchange_id}/admin", secret=secret)

    def delete_exchange(self, exchange_id: int, secret: str) -> Result:
        return self._request("DELETE", f"/exchanges/{exchange_id}", secret=secret)

    def change_stage(self, exchange_id: int, secret: str, stage: str) -> Result:
        return self._request(
            "PATCH", f"/exchanges/{exchange_id}/stage", json_body={"stage": stage}, secret=secret
        )

    def update_results(
        self,
        exchange_id: int,
        secret: str,
        user_max: Optional[int] = None,
        assignment_factor: Optional[float] = None,
    ) -> Result:
        body: Dict[str, Any] = {}
        if user_max is not None:
            body["user_max"] = user_max
        if assignment_factor is not None:
            body["assignment_factor"] = assignment_factor
        return self._request(
            "PATCH", f"/exchanges/{exchange_id}/results", json_body=body, secret=secret
        )

    # ------------------------------------------------------------------
    # Submission and ballot operations
    # ------------------------------------------------------------------
    def add_submission(self, exchange_id: int, name: str, stories: Sequence[Sequence[str]]) -> Result:
        body = {"name": name, "stories": [list(entry) for entry in stories]}
        return self._request("POST", f"/exchanges/{exchange_id}/submissions", json_body=body)

    def delete_submission(
        self, exchange_id: int, secret: str, stories: Sequence[Sequence[str]]
    ) -> Result:
        body = {"stories": [list(entry) for entry in stories]}
        return self._request(
            "DELETE", f"/exchanges/{exchange_id}/submissions", json_body=body, secret=secret
        )

    def cast_votes(self, exchange_id: int, name: str, ballot: Sequence[Tuple[int, Sequence[str]]]) -> Result:
        """Cast a ballot given as ``(priority, stories)`` pairs."""
        votes: List[Dict[str, Any]] = [
            {"priority": priority, "entry": {"stories": list(stories)}}
            for priority, stories in ballot
        ]
        return self._request(
            "POST", f"/exchanges/{exchange_id}/votes", json_body={"name": name, "votes": votes}
        )

    def delete_votes(self, exchange_id: int, secret: str, name: str) -> Result:
        return self._request(
            "DELETE", f"/exchanges/{exchange_id}/votes/{quote(name, safe='')}", secret=secret
        )


def _parse_stories(values: Sequence[str]) -> List[List[str]]:
    """Parse ``"A,B"`` style arguments into entries."""
    return [[item.strip() for item in value.split(",") if item.strip()] for value in values]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Drive an exchange from the command line.")
    ap.add_argument("--base-url", default="http://127.0.0.1:7669", help="Service base URL")
    ap.add_argument("--secret", help="Exchange secret for administrative commands")
    sub = ap.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Create an exchange")
    create.add_argument("title")
    create.add_argument("--user-max", type=int)
    create.add_argument("--assignment-factor", type=float)

    get = sub.add_parser("get", help="Show an exchange")
    get.add_argument("exchange_id", type=int)
    get.add_argument("--name", help="Participant asking")
    get.add_argument("--admin", action="store_true", help="Show the full record (needs --secret)")

    stage = sub.add_parser("stage", help="Change the stage of an exchange")
    stage.add_argument("exchange_id", type=int)
    stage.add_argument("stage", choices=["Submission", "Voting", "Selection", "Frozen"])

    submit = sub.add_parser("submit", help="Add entries, each given as comma separated stories")
    submit.add_argument("exchange_id", type=int)
    submit.add_argument("name")
    submit.add_argument("entries", nargs="+")

    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    client = ExchangeClient(base_url=args.base_url)

    if args.command == "create":
        data, error = client.create_exchange(args.title, args.user_max, args.assignment_factor)
    elif args.command == "get" and args.admin:
        data, error = client.get_exchange_admin(args.exchange_id, args.secret or "")
    elif args.command == "get":
        data, error = client.get_exchange(args.exchange_id, args.name)
    elif args.command == "stage":
        data, error = client.change_stage(args.exchange_id, args.secret or "", args.stage)
    else:
        data, error = client.add_submission(args.exchange_id, args.name, _parse_stories(args.entries))

    if error:
        print(f"[!] {error['message']} ({error['status_code']})", file=sys.stderr)
        return 1
    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
