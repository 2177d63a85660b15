"""Local investment repository.

Keeps every record in a single storage key (``investments``) as a JSON
array. The array is read on demand and rewritten in full on every
mutation, under a lock so overlapping calls never lose each other's
writes. Ids are short random strings, unique within the local set only.
"""

from __future__ import annotations

import asyncio
import json
import secrets
import string
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from loguru import logger

from folio.core.exceptions import NotFound, SerializationFailure, TransportFailure
from folio.core.storage import StorageBackend, StorageError
from folio.investments.models import Investment, InvestmentFormData
from folio.investments.repository import InvestmentRepository

INVESTMENTS_KEY = "investments"
ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 9

# Written on first load when the key is absent.
SEED_INVESTMENTS: list[dict[str, Any]] = [
    {"id": "1", "name": "Tesouro Selic 2029", "type": "Bond", "amount": 5000, "date": "2024-01-15"},
    {"id": "2", "name": "Fundo Imobiliário XPLG11", "type": "Fund", "amount": 3000, "date": "2024-02-10"},
    {"id": "3", "name": "Petrobras PETR4", "type": "Stock", "amount": 2500, "date": "2024-03-05"},
    {"id": "4", "name": "IVVB11", "type": "ETF", "amount": 1500, "date": "2024-03-20"},
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LocalInvestmentRepository(InvestmentRepository):
    """Investments kept in one key of a ``StorageBackend``.

    Args:
        storage: Where the JSON array lives.
        key: Storage key holding the array.
        latency: Seconds to sleep per operation, mimicking a network round trip.
        seed: Records written when the key does not exist yet.
        clock: Source of ``created_at``/``updated_at`` timestamps.
    """

    def __init__(
        self,
        storage: StorageBackend,
        key: str = INVESTMENTS_KEY,
        latency: float = 0.5,
        seed: list[dict[str, Any]] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.storage = storage
        self.key = key
        self.latency = latency
        self.seed = SEED_INVESTMENTS if seed is None else seed
        self.clock = clock
        self._lock = asyncio.Lock()

    async def _pause(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)

    async def _read(self) -> list[Investment]:
        try:
            if not await self.storage.exists(self.key):
                records = [Investment.from_dict(r) for r in self.seed]
                logger.info(f"No '{self.key}' key yet; seeding {len(records)} example investments")
                await self._write(records)
                return records
            raw = await self.storage.load(self.key)
        except StorageError as e:
            raise TransportFailure(f"Cannot read local investments: {e}") from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SerializationFailure(f"Stored investments under '{self.key}' are not valid JSON") from e
        if not isinstance(data, list):
            raise SerializationFailure(f"Stored investments under '{self.key}' are not a list")

        try:
            return [Investment.from_dict(item) for item in data]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise SerializationFailure(f"Malformed stored investment: {e}") from e

    async def _write(self, records: list[Investment]) -> None:
        payload = json.dumps([r.to_dict() for r in records], ensure_ascii=False).encode("utf-8")
        try:
            await self.storage.save(self.key, payload, content_type="application/json")
        except StorageError as e:
            raise TransportFailure(f"Cannot write local investments: {e}") from e

    @staticmethod
    def _new_id(taken: set[str]) -> str:
        while True:
            candidate = "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))
            if candidate not in taken:
                return candidate

    async def list(self) -> list[Investment]:
        await self._pause()
        async with self._lock:
            return await self._read()

    async def create(self, form: InvestmentFormData) -> Investment:
        await self._pause()
        async with self._lock:
            records = await self._read()
            investment = Investment(
                id=self._new_id({r.id for r in records}),
                name=form.name,
                type=form.type,
                amount=form.amount,
                date=form.date,
                created_at=self.clock(),
            )
            records.append(investment)
            await self._write(records)
        logger.debug(f"Created local investment {investment.id}")
        return investment

    async def update(self, investment_id: str, form: InvestmentFormData) -> Investment:
        await self._pause()
        async with self._lock:
            records = await self._read()
            for i, record in enumerate(records):
                if record.id == investment_id:
                    records[i] = record.apply(form, updated_at=self.clock())
                    await self._write(records)
                    return records[i]
        raise NotFound(f"Investment {investment_id} not found")

    async def delete(self, investment_id: str) -> None:
        await self._pause()
        async with self._lock:
            records = await self._read()
            remaining = [r for r in records if r.id != investment_id]
            if len(remaining) == len(records):
                raise NotFound(f"Investment {investment_id} not found")
            await self._write(remaining)
