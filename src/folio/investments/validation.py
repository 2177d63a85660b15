"""Form validation, run before any mutation reaches a backing store."""

from __future__ import annotations

from datetime import date

from folio.core.exceptions import FormValidationError
from folio.investments.models import InvestmentFormData

NAME_REQUIRED = "Name is required"
AMOUNT_NOT_POSITIVE = "Amount must be greater than zero"
DATE_IN_FUTURE = "Date cannot be in the future"


def validate_form(form: InvestmentFormData, today: date | None = None) -> dict[str, str]:
    """Check *form* and return field -> message for every violation.

    An empty dict means the form is valid. *today* defaults to the current
    date at the moment of the call, so a form that was valid yesterday is
    judged again on every submission.
    """
    today = today or date.today()
    errors: dict[str, str] = {}

    if not (form.name or "").strip():
        errors["name"] = NAME_REQUIRED
    if form.amount <= 0:
        errors["amount"] = AMOUNT_NOT_POSITIVE
    if form.date > today:
        errors["date"] = DATE_IN_FUTURE

    return errors


def ensure_valid(form: InvestmentFormData, today: date | None = None) -> None:
    """Raise FormValidationError if *form* has any violation."""
    errors = validate_form(form, today=today)
    if errors:
        raise FormValidationError(errors)
