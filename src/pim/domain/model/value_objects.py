"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from pim.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Duty-free price amount with its currency or unit.

    Both parts are optional because catalog prices arrive partially
    filled (e.g. a unit without an amount yet).  Uses Decimal so the
    amount keeps the scale it was entered with ("10.00" stays "10.00").
    """

    amount: Decimal | None = None
    unit: str | None = None

    def __post_init__(self) -> None:
        if self.amount is not None and not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        amount = str(self.amount) if self.amount is not None else ""
        return f"{amount}{self.unit or ''}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | int | Decimal | None, unit: str | None = None) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if amount is None or amount == "":
            return Money(None, unit or None)
        try:
            return Money(Decimal(str(amount)), unit or None)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
