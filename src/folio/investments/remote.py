"""Remote investments service client.

Thin async wrapper around the ``/api/investments`` REST endpoints. The
service names the amount field ``value``; this module is the only place
that knows it; everything above works with ``amount``.
"""

from __future__ import annotations

import asyncio
import functools
import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from loguru import logger

from folio.core.config import DEFAULT_API_URL
from folio.core.exceptions import NotFound, SerializationFailure, TransportFailure, ValidationRejected
from folio.investments.models import Investment, InvestmentFormData, json_number
from folio.investments.repository import InvestmentRepository

WIRE_AMOUNT_FIELD = "value"


def to_wire(form: InvestmentFormData) -> dict[str, Any]:
    """Request body for create/update."""
    return {
        "name": form.name,
        "type": form.type.value,
        WIRE_AMOUNT_FIELD: json_number(form.amount),
        "date": form.date.isoformat(),
    }


def from_wire(record: Any, base: dict[str, Any] | None = None) -> Investment:
    """Build an Investment from a service record.

    Fields missing from *record* are taken from *base*, so a partial
    response to an update still yields a complete record.
    """
    if not isinstance(record, dict):
        raise SerializationFailure(f"Expected an investment object, got {type(record).__name__}")

    data = dict(base or {})
    data.update(record)
    if WIRE_AMOUNT_FIELD in record:
        data["amount"] = record[WIRE_AMOUNT_FIELD]
    elif "amount" not in data:
        data["amount"] = 0
    data.pop(WIRE_AMOUNT_FIELD, None)

    try:
        return Investment.from_dict(data)
    except (KeyError, ValueError, TypeError) as e:
        raise SerializationFailure(f"Malformed investment record {record!r}: {e}") from e


class RemoteInvestmentRepository(InvestmentRepository):
    """Investments stored by a remote REST service."""

    def __init__(self, base_url: str = DEFAULT_API_URL, timeout: int = 15):
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str = "", payload: dict[str, Any] | None = None, action: str = "") -> Any:
        url = self.base_url
        if path:
            url = f"{url}/{urllib.parse.quote(path, safe='')}"

        data = None
        headers: dict[str, str] = {"Accept": "application/json"}
        if payload is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(payload).encode("utf-8")

        logger.debug(f"{method} {url}")
        req = urllib.request.Request(url=url, data=data, method=method, headers=headers)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            body = e.read() if hasattr(e, "read") else b""
            raise self._error_for_status(e.code, body, action) from e
        except urllib.error.URLError as e:
            raise TransportFailure(f"{action}: service unreachable ({e.reason})") from e
        except (TimeoutError, ConnectionError) as e:
            raise TransportFailure(f"{action}: {e}") from e

        if not raw:
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SerializationFailure(f"{action}: response is not valid JSON") from e

    @staticmethod
    def _error_for_status(status: int, body: bytes, action: str) -> Exception:
        """Map a non-2xx response to a repository error.

        The message is the first available of: the ``errors`` list joined
        with ", ", the ``error`` string, or *action*.
        """
        errors: list[str] = []
        message = ""
        try:
            parsed = json.loads(body.decode("utf-8")) if body else {}
        except (UnicodeDecodeError, json.JSONDecodeError):
            parsed = {}
        if isinstance(parsed, dict):
            if isinstance(parsed.get("errors"), list):
                errors = [str(e) for e in parsed["errors"] if e]
            message = ", ".join(errors) or str(parsed.get("error") or "")
        message = message or action

        if status == 404:
            return NotFound(message)
        if status >= 500:
            return TransportFailure(message)
        return ValidationRejected(message, errors=errors or [message])

    async def _call(self, *args: Any, **kwargs: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(self._request, *args, **kwargs))

    async def list(self) -> list[Investment]:
        records = await self._call("GET", action="Failed to load investments")
        if records is None:
            return []
        if not isinstance(records, list):
            raise SerializationFailure("Failed to load investments: expected a JSON array")
        return [from_wire(r) for r in records]

    async def create(self, form: InvestmentFormData) -> Investment:
        body = to_wire(form)
        record = await self._call("POST", payload=body, action="Failed to create investment")
        return from_wire(record)

    async def update(self, investment_id: str, form: InvestmentFormData) -> Investment:
        body = to_wire(form)
        record = await self._call("PUT", investment_id, payload=body, action="Failed to update investment")
        base = {
            "id": investment_id,
            "name": form.name,
            "type": form.type.value,
            "amount": form.amount,
            "date": form.date.isoformat(),
        }
        return from_wire(record or {}, base=base)

    async def delete(self, investment_id: str) -> None:
        await self._call("DELETE", investment_id, action="Failed to delete investment")
