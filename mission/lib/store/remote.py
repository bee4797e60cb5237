"""Remote entity store reached over JSON-over-HTTP.

Every primitive is one POST to `{url}/api/store`:

    {"op": "insert", "kind": "tasks", "fields": {...}}
    {"op": "patch", "kind": "tasks", "id": "...", "fields": {...}}
    {"op": "get", "kind": "tasks", "id": "..."}
    {"op": "scan", "kind": "tasks", "index": "by_status", "eq": "done", "order": "asc", "limit": 5}

Responses are `{"status": "success", "value": ...}` or
`{"status": "error", "errorMessage": "..."}`. A patch answers `true`, or
`false` when the record does not exist.
"""

import logging
from typing import Any

import httpx

from mission.errors import NotFoundError, StoreError
from mission.lib.patch import UNSET
from mission.lib.store import base
from mission.lib.store.base import Order, Record

logger = logging.getLogger(__name__)


class HttpStore:
    def __init__(
        self,
        url: str,
        deploy_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {"Content-Type": "application/json"}
        if deploy_key:
            headers["Authorization"] = f"Bearer {deploy_key}"
        self.url = url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.url, headers=headers, timeout=timeout, transport=transport
        )

    def insert(self, kind: str, fields: Record) -> str:
        base.check_kind(kind)
        base.check_fields(fields)
        return self._call("insert", kind=kind, fields=fields)

    def patch(self, kind: str, record_id: str, fields: Record) -> None:
        base.check_kind(kind)
        base.check_fields(fields)
        found = self._call("patch", kind=kind, id=record_id, fields=fields)
        if found is False:
            raise NotFoundError(f"{kind} record not found: {record_id}")

    def get(self, kind: str, record_id: str) -> Record | None:
        base.check_kind(kind)
        return self._call("get", kind=kind, id=record_id)

    def scan(
        self,
        kind: str,
        index: str | None = None,
        eq: Any = UNSET,
        order: Order = "asc",
        limit: int | None = None,
    ) -> list[Record]:
        base.check_scan(kind, index, eq, order, limit)
        args: dict[str, Any] = {"kind": kind, "order": order}
        if index is not None:
            args["index"] = index
        if eq is not UNSET:
            args["eq"] = eq
        if limit is not None:
            args["limit"] = limit
        return self._call("scan", **args) or []

    def close(self) -> None:
        self._client.close()

    def _call(self, op: str, **args: Any) -> Any:
        logger.debug(f"{op} {args.get('kind')} -> {self.url}")
        try:
            resp = self._client.post("/api/store", json={"op": op, **args})
        except httpx.HTTPError as e:
            raise StoreError(f"Store {op} failed: {e}") from e

        if resp.is_error:
            raise StoreError(f"Store {op} failed: {resp.text}", status=resp.status_code)

        try:
            body = resp.json()
        except ValueError as e:
            raise StoreError(f"Store {op} returned invalid JSON", status=resp.status_code) from e

        if not isinstance(body, dict):
            raise StoreError(f"Store {op} returned unexpected body", status=resp.status_code)
        if body.get("status") == "error":
            raise StoreError(
                f"Store {op} error: {body.get('errorMessage', 'unknown error')}",
                status=resp.status_code,
            )
        return body.get("value")
