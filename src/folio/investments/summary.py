"""Aggregation over the in-memory investment list.

``summarize`` is pure and cheap; callers recompute it on every read
instead of caching it. The remaining helpers turn a summary into what the
summary cards and charts display.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from folio.investments.models import Investment, InvestmentSummary, InvestmentType

_CENT = Decimal("0.01")


def summarize(investments: Iterable[Investment]) -> InvestmentSummary:
    """Total, count, and per-type totals of *investments*."""
    total = Decimal("0")
    count = 0
    distribution: dict[InvestmentType, Decimal] = {}

    for inv in investments:
        amount = inv.amount if inv.amount is not None else Decimal("0")
        total += amount
        count += 1
        distribution[inv.type] = distribution.get(inv.type, Decimal("0")) + amount

    return InvestmentSummary(
        total_amount=total,
        total_investments=count,
        distribution_by_type=distribution,
    )


def type_share(summary: InvestmentSummary, investment_type: InvestmentType) -> Decimal:
    """Percentage of the total held in *investment_type*, rounded to 0.1."""
    amount = summary.distribution_by_type.get(investment_type)
    if not amount or not summary.total_amount:
        return Decimal("0.0")
    return (amount / summary.total_amount * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def chart_series(summary: InvestmentSummary, localized: bool = False) -> tuple[list[str], list[Decimal]]:
    """Labels and values for a pie or bar chart of the distribution.

    Both lists are empty when there is nothing to render.
    """
    labels: list[str] = []
    values: list[Decimal] = []
    for investment_type, amount in summary.distribution_by_type.items():
        labels.append(investment_type.label if localized else investment_type.value)
        values.append(amount)
    return labels, values


def format_currency(value: Decimal | int | float, symbol: str = "R$") -> str:
    """Format as Brazilian currency, e.g. ``R$ 1.234,56``."""
    amount = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,.2f}"  # 1,234.56
    localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{symbol} {localized}"


def format_date(value: date) -> str:
    """Format as ``dd/mm/yyyy``."""
    return value.strftime("%d/%m/%Y")
