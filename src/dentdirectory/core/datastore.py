from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests

from .http import HttpClient


class DataAccessError(RuntimeError):
    pass


DEFAULT_TABLES: Dict[str, str] = {
    "regions": "states",
    "sub_regions": "cities",
    "entries": "stores",
}


@dataclass
class DatastoreClient:
    """Read-only client for a Supabase (PostgREST) endpoint.

    One instance is built per run and handed to the query functions in
    ``core.queries``; tests substitute any object with the same ``select``.
    """

    url: str
    key: str
    http: HttpClient
    tables: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TABLES))

    def _endpoint(self, table: str) -> str:
        return f"{self.url.rstrip('/')}/rest/v1/{table}"

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.key,
            "Authorization": f"Bearer {self.key}",
            "Accept": "application/json",
        }

    def select(
        self,
        table: str,
        *,
        columns: str = "*",
        eq: Optional[Dict[str, Any]] = None,
        order: Optional[Tuple[str, bool]] = None,
    ) -> List[Dict[str, Any]]:
        """Run ``select columns from table where col = value ... order by``.

        ``order`` is ``(column, ascending)``. Every failure surfaces as
        DataAccessError with the underlying message.
        """
        params: List[Tuple[str, str]] = [("select", compact_columns(columns))]
        for col, value in (eq or {}).items():
            params.append((col, f"eq.{value}"))
        if order:
            col, ascending = order
            params.append(("order", f"{col}.{'asc' if ascending else 'desc'}"))

        try:
            resp = self.http.get(self._endpoint(table), params=params, headers=self._headers())
        except (requests.RequestException, ValueError) as ex:
            raise DataAccessError(f"{table}: {ex}") from ex

        if not resp.ok:
            raise DataAccessError(f"{table}: HTTP {resp.status_code}: {_error_message(resp)}")
        try:
            data = resp.json()
        except ValueError as ex:
            raise DataAccessError(f"{table}: response is not JSON: {ex}") from ex
        if not isinstance(data, list):
            raise DataAccessError(f"{table}: expected a list of rows, got {type(data).__name__}")
        return data


def compact_columns(columns: str) -> str:
    """Drop whitespace outside double quotes; PostgREST's select parser rejects it."""
    out = []
    quoted = False
    for ch in columns:
        if ch.isspace() and not quoted:
            continue
        if ch == '"':
            quoted = not quoted
        out.append(ch)
    return "".join(out)


def _error_message(resp: requests.Response) -> str:
    # PostgREST errors are {"message": ..., "details": ..., "hint": ..., "code": ...}
    try:
        body = resp.json()
    except ValueError:
        return (resp.text or resp.reason or "").strip()
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return str(body)
