"""
Domain models for receipt validation and scoring.

These models represent a purchase receipt after it has been accepted by
the validator, plus the failure records produced when it is not.

Design Decisions:
- Using frozen dataclasses for immutable, typed domain objects
- Decimal for all monetary values to avoid floating-point errors
- Points are attached exactly once, producing a new Receipt instance
- Failure codes are an Enum so callers can branch on them
"""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from decimal import Decimal, localcontext
from enum import Enum
from typing import Any


# Accepted amounts have at most this many digits on either side of the point
MAX_INTEGER_DIGITS = 15
MAX_FRACTION_DIGITS = 30

# Wide enough that sums and products of accepted amounts are never rounded
MONEY_PRECISION = 2 * (MAX_INTEGER_DIGITS + MAX_FRACTION_DIGITS)


def money_context():
    """Decimal context for arithmetic on monetary amounts."""
    return localcontext(prec=MONEY_PRECISION)


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    """Exact sum of monetary amounts."""
    with money_context():
        return sum(amounts, Decimal(0))


class FailureCode(Enum):
    """Kinds of validation failure reported for a submitted receipt."""
    MISSING_FIELD = "MissingField"
    INVALID_DATE_FORMAT = "InvalidDateFormat"
    INVALID_TIME_FORMAT = "InvalidTimeFormat"
    UNPARSABLE_NUMBER = "UnparsableNumber"
    NEGATIVE_AMOUNT = "NegativeAmount"
    TOTAL_MISMATCH = "TotalMismatch"
    MALFORMED_PAYLOAD = "MalformedPayload"


class PointsAlreadyAssigned(Exception):
    """Raised when points are attached to a receipt that already has them."""


@dataclass(frozen=True)
class ValidationFailure:
    """
    A single failed validation check.

    `field` is the JSON path of the offending value, e.g. "items[2].price".
    """
    code: FailureCode
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "code": self.code.value,
            "field": self.field,
            "message": self.message,
        }


@dataclass(frozen=True)
class Item:
    """One purchased line on a receipt."""
    short_description: str
    price: Decimal

    @property
    def trimmed_length(self) -> int:
        """Length of the description without surrounding whitespace."""
        return len(self.short_description.strip())


@dataclass(frozen=True)
class Receipt:
    """
    A single purchase event that passed validation.

    `points` stays None until the scoring engine has run; use
    `with_points` to attach the score.
    """
    retailer: str
    purchase_date: str
    purchase_time: str
    total: Decimal
    items: tuple[Item, ...] = ()
    points: int | None = None

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def item_sum(self) -> Decimal:
        """Sum of all item prices."""
        return sum_amounts(item.price for item in self.items)

    @property
    def is_scored(self) -> bool:
        return self.points is not None

    def with_points(self, points: int) -> "Receipt":
        """
        Return a copy of this receipt carrying its computed points.

        Raises:
            PointsAlreadyAssigned: If the receipt has already been scored.
            ValueError: If points is negative.
        """
        if self.points is not None:
            raise PointsAlreadyAssigned(
                f"Receipt already scored with {self.points} points"
            )
        if points < 0:
            raise ValueError(f"Points must be non-negative, got {points}")
        return replace(self, points=points)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the submitted JSON field names."""
        return {
            "retailer": self.retailer,
            "purchaseDate": self.purchase_date,
            "purchaseTime": self.purchase_time,
            "items": [
                {"shortDescription": item.short_description, "price": str(item.price)}
                for item in self.items
            ],
            "total": str(self.total),
            "points": self.points,
        }


@dataclass
class ValidationResult:
    """
    Outcome of validating one submitted receipt.

    Mutable because failures are collected incrementally during validation.
    Either `receipt` is set and `failures` is empty, or the receipt was
    rejected and `failures` lists every check that failed.
    """
    receipt: Receipt | None = None
    failures: list[ValidationFailure] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        """True if every validation check passed."""
        return self.receipt is not None and not self.failures

    @property
    def failure_codes(self) -> list[FailureCode]:
        return [failure.code for failure in self.failures]

    @property
    def message(self) -> str:
        """All failure messages joined into one human-readable string."""
        return "; ".join(failure.message for failure in self.failures)
