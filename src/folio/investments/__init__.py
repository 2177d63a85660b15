"""Investment tracking: models, validation, aggregation, persistence, and the store."""

from .models import Investment, InvestmentFormData, InvestmentSummary, InvestmentType
from .repository import InvestmentRepository, create_repository
from .store import InvestmentStore, LoadState
from .summary import chart_series, format_currency, format_date, summarize, type_share
from .validation import ensure_valid, validate_form

__all__ = [
    "Investment",
    "InvestmentFormData",
    "InvestmentRepository",
    "InvestmentStore",
    "InvestmentSummary",
    "InvestmentType",
    "LoadState",
    "chart_series",
    "create_repository",
    "ensure_valid",
    "format_currency",
    "format_date",
    "summarize",
    "type_share",
    "validate_form",
]
