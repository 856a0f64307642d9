"""
Validation rules for submitted receipts.

This module contains pure functions that check a raw receipt payload.
No side effects, no I/O - just structural and numeric checks.

Checks performed:
1. Required fields present (retailer non-blank)
2. Purchase date and time match their loose syntactic patterns
3. Total and item prices parse as non-negative decimals of bounded size
4. Item prices sum exactly to the declared total

Design Decisions:
- Every check runs; failures are accumulated, never short-circuited
- Date/time patterns are intentionally permissive (month 19, hour 29 pass);
  real calendar validity is a separate, optional second tier
- Decimal arithmetic makes the total comparison exact
"""

import re
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from .models import (
    MAX_FRACTION_DIGITS,
    MAX_INTEGER_DIGITS,
    FailureCode,
    Item,
    Receipt,
    ValidationFailure,
    ValidationResult,
    money_context,
    sum_amounts,
)


DATE_PATTERN = re.compile(r"[0-9]{4}-[0-1][1-9]-[0-2][0-9]")
TIME_PATTERN = re.compile(r"[0-2][0-9]:[0-5][0-9]")

CALENDAR_DATE_FORMAT = "%Y-%m-%d"
CLOCK_TIME_FORMAT = "%H:%M"


def _missing(field_path: str, message: str | None = None) -> ValidationFailure:
    return ValidationFailure(
        code=FailureCode.MISSING_FIELD,
        field=field_path,
        message=message or f"missing required field {field_path}",
    )


def validate_retailer(retailer: Any) -> list[ValidationFailure]:
    """Retailer must be present and contain at least one non-blank character."""
    if not isinstance(retailer, str) or not retailer.strip():
        return [_missing("retailer", "retailer must not be empty")]
    return []


def validate_purchase_date(
    purchase_date: Any,
    strict_calendar: bool = False,
) -> list[ValidationFailure]:
    """
    Check the purchase date against YYYY-MM-DD.

    The syntactic tier accepts some impossible dates ("2022-19-00").
    With strict_calendar the date must also exist on the calendar.
    """
    if purchase_date is None or purchase_date == "":
        return [_missing("purchaseDate")]

    if not isinstance(purchase_date, str) or not DATE_PATTERN.fullmatch(purchase_date):
        return [
            ValidationFailure(
                code=FailureCode.INVALID_DATE_FORMAT,
                field="purchaseDate",
                message=f"invalid purchase date format: {purchase_date!r} (expected YYYY-MM-DD)",
            )
        ]

    if strict_calendar:
        try:
            datetime.strptime(purchase_date, CALENDAR_DATE_FORMAT)
        except ValueError:
            return [
                ValidationFailure(
                    code=FailureCode.INVALID_DATE_FORMAT,
                    field="purchaseDate",
                    message=f"purchase date {purchase_date!r} is not a calendar date",
                )
            ]

    return []


def validate_purchase_time(
    purchase_time: Any,
    strict_calendar: bool = False,
) -> list[ValidationFailure]:
    """
    Check the purchase time against HH:MM.

    The syntactic tier accepts hours up to 29. With strict_calendar the
    time must also be a real clock time.
    """
    if purchase_time is None or purchase_time == "":
        return [_missing("purchaseTime")]

    if not isinstance(purchase_time, str) or not TIME_PATTERN.fullmatch(purchase_time):
        return [
            ValidationFailure(
                code=FailureCode.INVALID_TIME_FORMAT,
                field="purchaseTime",
                message=f"invalid purchase time format: {purchase_time!r} (expected HH:MM)",
            )
        ]

    if strict_calendar:
        try:
            datetime.strptime(purchase_time, CLOCK_TIME_FORMAT)
        except ValueError:
            return [
                ValidationFailure(
                    code=FailureCode.INVALID_TIME_FORMAT,
                    field="purchaseTime",
                    message=f"purchase time {purchase_time!r} is not a clock time",
                )
            ]

    return []


def parse_amount(value: Any, field_path: str) -> tuple[Decimal | None, list[ValidationFailure]]:
    """
    Parse a monetary amount submitted as text.

    Returns the parsed Decimal (None on failure) and the failures found.
    Only finite, non-negative decimals within the digit bounds are accepted.
    """
    if value is None or value == "":
        return None, [_missing(field_path)]

    if not isinstance(value, str):
        return None, [
            ValidationFailure(
                code=FailureCode.UNPARSABLE_NUMBER,
                field=field_path,
                message=f"{field_path} must be a decimal amount given as text, got {value!r}",
            )
        ]

    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        amount = None

    if amount is None or not amount.is_finite():
        return None, [
            ValidationFailure(
                code=FailureCode.UNPARSABLE_NUMBER,
                field=field_path,
                message=f"{field_path} is not a decimal number: {value!r}",
            )
        ]

    integer_digits = amount.adjusted() + 1 if amount != 0 else 0
    fraction_digits = max(0, -amount.as_tuple().exponent)
    if integer_digits > MAX_INTEGER_DIGITS or fraction_digits > MAX_FRACTION_DIGITS:
        return None, [
            ValidationFailure(
                code=FailureCode.UNPARSABLE_NUMBER,
                field=field_path,
                message=(
                    f"{field_path} is out of range: {value!r} (at most {MAX_INTEGER_DIGITS} "
                    f"integer and {MAX_FRACTION_DIGITS} fractional digits)"
                ),
            )
        ]

    if amount < 0:
        return None, [
            ValidationFailure(
                code=FailureCode.NEGATIVE_AMOUNT,
                field=field_path,
                message=f"{field_path} must not be negative: {value!r}",
            )
        ]

    return amount, []


def parse_items(raw_items: Any) -> tuple[list[Item] | None, list[ValidationFailure]]:
    """
    Parse the items array.

    Returns None instead of a list when any item could not be parsed;
    every item is still visited so all failures are reported.
    """
    if raw_items is None:
        return [], []

    if not isinstance(raw_items, list):
        return None, [_missing("items", "items must be a list of {shortDescription, price} objects")]

    items: list[Item] = []
    failures: list[ValidationFailure] = []

    for i, raw_item in enumerate(raw_items):
        path = f"items[{i}]"
        if not isinstance(raw_item, Mapping):
            failures.append(_missing(path, f"{path} must be an object"))
            continue

        description = raw_item.get("shortDescription")
        if not isinstance(description, str):
            failures.append(_missing(f"{path}.shortDescription"))

        price, price_failures = parse_amount(raw_item.get("price"), f"{path}.price")
        failures.extend(price_failures)

        if isinstance(description, str) and price is not None:
            items.append(Item(short_description=description, price=price))

    if failures:
        return None, failures
    return items, []


def validate_total_matches_items(total: Decimal, items: list[Item]) -> list[ValidationFailure]:
    """
    Validate that item prices sum to the receipt total.

    Rule: Total - Sum(Items.Price) == 0, compared exactly.
    """
    with money_context():
        remainder = total - sum_amounts(item.price for item in items)
    if remainder != 0:
        return [
            ValidationFailure(
                code=FailureCode.TOTAL_MISMATCH,
                field="total",
                message=f"total {total} does not match item prices (off by {remainder})",
            )
        ]
    return []


def validate_receipt(
    raw: Mapping[str, Any],
    *,
    strict_calendar: bool = False,
) -> ValidationResult:
    """
    Run every validation check on a raw receipt payload.

    Args:
        raw: Decoded receipt using the submitted JSON field names
        strict_calendar: Also require a real calendar date and clock time

    Returns:
        ValidationResult holding either the accepted Receipt or every failure
    """
    if not isinstance(raw, Mapping):
        return ValidationResult(
            failures=[
                ValidationFailure(
                    code=FailureCode.MALFORMED_PAYLOAD,
                    field="",
                    message="receipt must be a JSON object",
                )
            ]
        )

    failures: list[ValidationFailure] = []

    retailer = raw.get("retailer")
    purchase_date = raw.get("purchaseDate")
    purchase_time = raw.get("purchaseTime")

    failures.extend(validate_retailer(retailer))
    failures.extend(validate_purchase_date(purchase_date, strict_calendar))
    failures.extend(validate_purchase_time(purchase_time, strict_calendar))

    total, total_failures = parse_amount(raw.get("total"), "total")
    failures.extend(total_failures)

    items, item_failures = parse_items(raw.get("items"))
    failures.extend(item_failures)

    # Only compare sums when every amount parsed
    if total is not None and items is not None:
        failures.extend(validate_total_matches_items(total, items))

    if failures:
        return ValidationResult(failures=failures)

    return ValidationResult(
        receipt=Receipt(
            retailer=retailer,
            purchase_date=purchase_date,
            purchase_time=purchase_time,
            total=total,
            items=tuple(items),
        )
    )
