"""Core investment data models.

Framework-agnostic representations of an investment entry, the form data
used to create or edit one, and the derived summary. Both backing stores
produce these models; wire-format quirks stay inside the adapters.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from folio.core.exceptions import FormValidationError


class InvestmentType(Enum):
    """Investment category. Values are the canonical wire names."""

    STOCK = "Stock"
    FUND = "Fund"
    BOND = "Bond"
    ETF = "ETF"
    CRYPTO = "Crypto"

    @property
    def label(self) -> str:
        """Localized (pt-BR) display label."""
        return _LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> InvestmentType:
        """Accept a member, its value, its name, or its localized label."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text.casefold() in (member.value.casefold(), member.name.casefold(), member.label.casefold()):
                return member
        raise ValueError(f"Unknown investment type: {value!r}")


_LABELS = {
    InvestmentType.STOCK: "Ação",
    InvestmentType.FUND: "Fundo",
    InvestmentType.BOND: "Título",
    InvestmentType.ETF: "ETF",
    InvestmentType.CRYPTO: "Crypto",
}


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # Accept full ISO timestamps as sent by some servers ("2024-01-01T00:00:00.000Z")
    return date.fromisoformat(text[:10])


def to_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def json_number(value: Decimal) -> int | float:
    """Render a Decimal as the plainest JSON number."""
    return int(value) if value == value.to_integral_value() else float(value)


@dataclass
class InvestmentFormData:
    """The user-editable fields of an investment.

    Edits replace all four fields at once.
    """

    name: str
    type: InvestmentType
    amount: Decimal
    date: date

    def __post_init__(self):
        self.type = InvestmentType.parse(self.type)
        self.amount = to_decimal(self.amount)
        self.date = to_date(self.date)

    @classmethod
    def parse(cls, name: Any, type: Any, amount: Any, date: Any) -> InvestmentFormData:
        """Build form data from raw input, reporting every unparseable field.

        Raises:
            FormValidationError: keyed by the fields that could not be parsed.
        """
        errors: dict[str, str] = {}
        try:
            parsed_type = InvestmentType.parse(type)
        except ValueError:
            errors["type"] = f"Type must be one of: {', '.join(t.value for t in InvestmentType)}"
        try:
            parsed_amount = to_decimal(amount)
        except ValueError:
            errors["amount"] = "Amount must be a number"
        try:
            parsed_date = to_date(date)
        except ValueError:
            errors["date"] = "Date must be in YYYY-MM-DD format"
        if errors:
            raise FormValidationError(errors)
        return cls(name=str(name), type=parsed_type, amount=parsed_amount, date=parsed_date)


@dataclass
class Investment:
    """A recorded investment.

    Attributes:
        id: Unique, immutable identifier assigned by the backing store.
        name: Display name, e.g. "Fundo Imobiliário XPLG11".
        type: Category.
        amount: Invested amount.
        date: Date the investment was made.
        created_at: Set by the backing store on create (optional).
        updated_at: Set by the backing store on update (optional).
    """

    id: str
    name: str
    type: InvestmentType
    amount: Decimal
    date: date
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        self.id = str(self.id) if self.id is not None else ""
        if not self.id:
            raise ValueError("Investment id cannot be empty")
        self.type = InvestmentType.parse(self.type)
        self.amount = to_decimal(self.amount)
        self.date = to_date(self.date)
        self.created_at = to_datetime(self.created_at)
        self.updated_at = to_datetime(self.updated_at)

    @property
    def form(self) -> InvestmentFormData:
        """The editable fields, e.g. to prefill an edit form."""
        return InvestmentFormData(name=self.name, type=self.type, amount=self.amount, date=self.date)

    def apply(self, form: InvestmentFormData, updated_at: datetime | None = None) -> Investment:
        """Return a copy with the editable fields replaced by *form*."""
        return replace(
            self,
            name=form.name,
            type=form.type,
            amount=form.amount,
            date=form.date,
            updated_at=updated_at or self.updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict using the domain field names."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "amount": json_number(self.amount),
            "date": self.date.isoformat(),
        }
        if self.created_at:
            data["createdAt"] = self.created_at.isoformat()
        if self.updated_at:
            data["updatedAt"] = self.updated_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Investment:
        """Inverse of ``to_dict``. Raises KeyError/ValueError on malformed input."""
        return cls(
            id=data["id"],
            name=data["name"],
            type=data["type"],
            amount=data["amount"],
            date=data["date"],
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )


@dataclass
class InvestmentSummary:
    """Point-in-time aggregate over a list of investments.

    ``distribution_by_type`` only has keys for types that are present.
    """

    total_amount: Decimal = Decimal("0")
    total_investments: int = 0
    distribution_by_type: dict[InvestmentType, Decimal] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.total_investments == 0
