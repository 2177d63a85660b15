"""Investment Store: the in-memory list the UI renders from.

The store owns the canonical list for a session. Every mutation goes
through the repository first; the list changes only after the
repository confirms, so there is nothing to roll back on failure.

Repository errors stop here: each is turned into a single failure
notification and the mutation method returns ``None``. Form errors are
different: they raise ``FormValidationError`` before anything is
dispatched and produce no notification.

No locking is done. Two overlapping calls both run, and the list
reflects whichever completes last.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum

from loguru import logger

from folio.core.events import (
    INVESTMENT_CREATED,
    INVESTMENT_DELETED,
    INVESTMENT_UPDATED,
    INVESTMENTS_LOADED,
    Event,
)
from folio.core.exceptions import InvestmentError
from folio.core.notifications import Notifier, Variant
from folio.investments.models import Investment, InvestmentFormData, InvestmentSummary
from folio.investments.repository import InvestmentRepository
from folio.investments.summary import summarize
from folio.investments.validation import ensure_valid


class LoadState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class InvestmentStore:
    """Holds the session's investments and applies confirmed mutations."""

    def __init__(self, repository: InvestmentRepository, notifier: Notifier | None = None):
        self.repository = repository
        self.notifier = notifier or Notifier()
        self._investments: list[Investment] = []
        self.state = LoadState.IDLE

    @property
    def investments(self) -> list[Investment]:
        """A copy of the current list; mutate through the store methods."""
        return list(self._investments)

    @property
    def loading(self) -> bool:
        return self.state is LoadState.LOADING

    def get(self, investment_id: str) -> Investment | None:
        return next((inv for inv in self._investments if inv.id == investment_id), None)

    def summary(self) -> InvestmentSummary:
        """Recomputed from the current list on every call."""
        return summarize(self._investments)

    async def _emit(self, name: str, payload: dict) -> None:
        await self.notifier.bus.emit(Event(name=name, payload=payload, source="store"))

    async def load(self) -> list[Investment]:
        """Fetch all records. Ends in READY whether or not the fetch worked."""
        self.state = LoadState.LOADING
        try:
            self._investments = await self.repository.list()
            logger.debug(f"Loaded {len(self._investments)} investments")
            await self._emit(INVESTMENTS_LOADED, {"count": len(self._investments)})
        except InvestmentError as e:
            logger.warning(f"Loading investments failed: {e}")
            await self.notifier.failure("Failed to load investments", str(e))
        finally:
            self.state = LoadState.READY
        return self.investments

    async def create(self, form: InvestmentFormData) -> Investment | None:
        ensure_valid(form)
        try:
            investment = await self.repository.create(form)
        except InvestmentError as e:
            logger.warning(f"Creating investment '{form.name}' failed: {e}")
            await self.notifier.failure(str(e) or "Failed to create investment")
            return None

        self._investments.append(investment)
        await self.notifier.success("Investment added", f"{form.name} was added successfully.")
        await self._emit(INVESTMENT_CREATED, investment.to_dict())
        return investment

    async def update(self, investment_id: str, form: InvestmentFormData) -> Investment | None:
        ensure_valid(form)
        try:
            updated = await self.repository.update(investment_id, form)
        except InvestmentError as e:
            logger.warning(f"Updating investment {investment_id} failed: {e}")
            await self.notifier.failure(str(e) or "Failed to update investment")
            return None

        for i, inv in enumerate(self._investments):
            if inv.id == investment_id:
                # Fields the backing store did not return keep their held values.
                updated = replace(
                    updated,
                    created_at=updated.created_at or inv.created_at,
                    updated_at=updated.updated_at or inv.updated_at,
                )
                self._investments[i] = updated
                break
        else:
            # Backing store has it but this session does not: the list is stale.
            logger.warning(f"Investment {investment_id} updated remotely but missing from the local list")
            await self.notifier.failure(
                f"Investment {investment_id} is not in the current list",
                "Reload to see the latest investments.",
            )
            return None

        await self.notifier.success("Investment updated", f"{form.name} was updated successfully.")
        await self._emit(INVESTMENT_UPDATED, updated.to_dict())
        return updated

    async def delete(self, investment_id: str) -> bool:
        try:
            await self.repository.delete(investment_id)
        except InvestmentError as e:
            logger.warning(f"Deleting investment {investment_id} failed: {e}")
            await self.notifier.failure(str(e) or "Failed to delete investment")
            return False

        self._investments = [inv for inv in self._investments if inv.id != investment_id]
        await self.notifier.success(
            "Investment deleted",
            "Investment removed successfully.",
            variant=Variant.DESTRUCTIVE,
        )
        await self._emit(INVESTMENT_DELETED, {"id": investment_id})
        return True
