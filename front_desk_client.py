"""Front desk client for the gym membership API.

This module wraps the HTTP API in a small client built on the
``requests`` library and exposes it as a command line tool for
front‑desk staff.  It covers the same flows as the browser panel:

* :meth:`FrontDeskClient.list_classes` – the class catalog.
* :meth:`FrontDeskClient.get_member` – a member with their enrollments.
* :meth:`FrontDeskClient.register_member` – register a new member.
* :meth:`FrontDeskClient.deactivate_member` – deregister a member.
* :meth:`FrontDeskClient.enroll` – enroll a member in a class.
* :meth:`FrontDeskClient.cancel_enrollment` – cancel an enrollment.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list) and
``error`` is a dictionary with keys ``status_code`` and ``message``.
The message is the one sent by the API, so business rule rejections
such as a full class reach the operator verbatim.

Usage:
    python front_desk_client.py clases
    python front_desk_client.py socio 12
    python front_desk_client.py registrar Ana Diaz ana@x.com
    python front_desk_client.py inscribir 12 3
    python front_desk_client.py cancelar 12 3
    python front_desk_client.py baja 12
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

DEFAULT_BASE_URL = os.getenv("GYM_API_URL", "http://localhost:3000")

Error = Dict[str, Any]


class FrontDeskClient:
    """Client for the gym membership API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/clases``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Classes
    # ------------------------------------------------------------------
    def list_classes(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/api/clases")
        if error:
            return [], error
        return data or [], None

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------
    def get_member(self, member_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/api/socios/{member_id}")

    def register_member(
        self, nombre: str, apellido: str, email: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Register a member; the result carries the new ``socioId``."""
        payload = {"nombre": nombre, "apellido": apellido, "email": email}
        return self._request("POST", "/api/socios", json_body=payload)

    def deactivate_member(self, member_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("DELETE", f"/api/socios/{member_id}")

    # ------------------------------------------------------------------
    # Enrollments
    # ------------------------------------------------------------------
    def enroll(self, member_id: int, class_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        payload = {"socioId": member_id, "claseId": class_id}
        return self._request("POST", "/api/inscripciones", json_body=payload)

    def cancel_enrollment(
        self, member_id: int, class_id: int
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        payload = {"socioId": member_id, "claseId": class_id}
        return self._request("DELETE", "/api/inscripciones", json_body=payload)

    @staticmethod
    def available_classes(member: Dict[str, Any], catalog: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Return the catalog entries the member is not enrolled in yet."""
        enrolled = {clase["id"] for clase in member.get("inscripciones", [])}
        return [clase for clase in catalog if clase["id"] not in enrolled]


# ----------------------------------------------------------------------
# Command line interface
# ----------------------------------------------------------------------
def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Front desk tool for the gym membership API.")
    ap.add_argument("--url", default=DEFAULT_BASE_URL, help="Base URL of the API")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("clases", help="List all classes")

    socio = sub.add_parser("socio", help="Show a member, their classes and the classes still available")
    socio.add_argument("socio_id", type=int)

    registrar = sub.add_parser("registrar", help="Register a new member")
    registrar.add_argument("nombre")
    registrar.add_argument("apellido")
    registrar.add_argument("email")

    for name, help_text in (("inscribir", "Enroll a member in a class"), ("cancelar", "Cancel an enrollment")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("socio_id", type=int)
        cmd.add_argument("clase_id", type=int)

    baja = sub.add_parser("baja", help="Deregister (deactivate) a member")
    baja.add_argument("socio_id", type=int)
    return ap


def main(argv: Optional[List[str]] = None, client: Optional[FrontDeskClient] = None) -> int:
    """Run one CLI command and return the process exit code."""
    args = _build_parser().parse_args(argv)
    client = client or FrontDeskClient(base_url=args.url)

    if args.command == "clases":
        result, error = client.list_classes()
    elif args.command == "socio":
        result, error = client.get_member(args.socio_id)
        if not error:
            catalog, error = client.list_classes()
            result["disponibles"] = client.available_classes(result, catalog)
    elif args.command == "registrar":
        result, error = client.register_member(args.nombre, args.apellido, args.email)
    elif args.command == "inscribir":
        result, error = client.enroll(args.socio_id, args.clase_id)
    elif args.command == "cancelar":
        result, error = client.cancel_enrollment(args.socio_id, args.clase_id)
    else:
        result, error = client.deactivate_member(args.socio_id)

    if error:
        print(f"[!] {error['message']}", file=sys.stderr)
        return 1
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    sys.exit(main())
