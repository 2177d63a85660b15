"""InvestmentRepository: the contract for investment backing stores.

Two implementations exist: a remote REST service and a local key-value
slot. Exactly one is active per deployment, chosen by
``storage.backend`` in the configuration.

Repositories raise ``InvestmentError`` subclasses on failure and never
talk to the user; reporting outcomes is the store's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from folio.core.exceptions import ConfigurationError
from folio.investments.models import Investment, InvestmentFormData

if TYPE_CHECKING:
    from folio.core.config import Config


class InvestmentRepository(ABC):
    """Async CRUD over investment records."""

    @abstractmethod
    async def list(self) -> list[Investment]:
        """Fetch every record in the backing store."""

    @abstractmethod
    async def create(self, form: InvestmentFormData) -> Investment:
        """Store a new record and return it with its assigned id."""

    @abstractmethod
    async def update(self, investment_id: str, form: InvestmentFormData) -> Investment:
        """Replace the editable fields of a record and return the result.

        Raises:
            NotFound: No record has ``investment_id``.
        """

    @abstractmethod
    async def delete(self, investment_id: str) -> None:
        """Remove a record.

        Raises:
            NotFound: No record has ``investment_id``.
        """


def create_repository(config: Config) -> InvestmentRepository:
    """Build the repository selected by ``storage.backend``."""
    backend = str(config.get("storage.backend", "local")).strip().lower()

    if backend == "remote":
        from folio.investments.remote import RemoteInvestmentRepository

        return RemoteInvestmentRepository(
            base_url=config.get("api.base_url"),
            timeout=int(config.get("api.timeout", 15)),
        )

    if backend == "local":
        from folio.core.storage import LocalStorage
        from folio.investments.local import LocalInvestmentRepository

        storage = LocalStorage(base_path=config.get("storage.path"))
        return LocalInvestmentRepository(storage, latency=float(config.get("storage.latency", 0.5)))

    raise ConfigurationError(f"Unknown storage backend {backend!r}; expected 'local' or 'remote'")
