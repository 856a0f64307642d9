"""
Reward-points rules for accepted receipts.

Each rule is a pure function of the receipt returning a non-negative
integer. The engine sums them; rule order only matters for breakdowns.

Rules:
- round_dollar_total: 50 if the total has no cents
- quarter_multiple_total: 25 if the total is a multiple of 0.25
- retailer_alphanumeric: 1 per [A-Za-z0-9] character in the retailer name
- item_pairs: 5 for every two items
- item_description_length: ceil(price * 0.2) per item whose trimmed
  description length is a multiple of 3
- odd_purchase_day: 6 if the purchase day is odd
- afternoon_purchase: 10 if purchased in [14:00, 16:00)
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal

from .models import Receipt, money_context


ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
ITEM_PAIR_POINTS = 5
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10

QUARTERS_PER_DOLLAR = 4
DESCRIPTION_PRICE_MULTIPLIER = Decimal("0.2")
DESCRIPTION_LENGTH_FACTOR = 3
AFTERNOON_START_HOUR = 14
AFTERNOON_END_HOUR = 16

ALPHANUMERIC = re.compile(r"[A-Za-z0-9]")


@dataclass(frozen=True)
class RuleContribution:
    """Points awarded by a single rule."""
    rule_name: str
    points: int


def _is_whole(amount: Decimal) -> bool:
    return amount == amount.to_integral_value()


def round_dollar_total(receipt: Receipt) -> int:
    return ROUND_DOLLAR_POINTS if _is_whole(receipt.total) else 0


def quarter_multiple_total(receipt: Receipt) -> int:
    with money_context():
        quarters = receipt.total * QUARTERS_PER_DOLLAR
    return QUARTER_MULTIPLE_POINTS if _is_whole(quarters) else 0


def retailer_alphanumeric(receipt: Receipt) -> int:
    """One point per ASCII letter or digit; spaces and punctuation count nothing."""
    return len(ALPHANUMERIC.findall(receipt.retailer))


def item_pairs(receipt: Receipt) -> int:
    return (receipt.item_count // 2) * ITEM_PAIR_POINTS


def description_bonus(price: Decimal) -> int:
    """
    Points for one qualifying item: price * 0.2 rounded up.

    A value with no fractional part is kept as is, it never gains +1.
    """
    with money_context():
        scaled = price * DESCRIPTION_PRICE_MULTIPLIER
    return int(scaled.to_integral_value(rounding=ROUND_CEILING))


def item_description_length(receipt: Receipt) -> int:
    return sum(
        description_bonus(item.price)
        for item in receipt.items
        if item.trimmed_length % DESCRIPTION_LENGTH_FACTOR == 0
    )


def odd_purchase_day(receipt: Receipt) -> int:
    day = int(receipt.purchase_date[-2:])
    return ODD_DAY_POINTS if day % 2 == 1 else 0


def afternoon_purchase(receipt: Receipt) -> int:
    hour = int(receipt.purchase_time[:2])
    return AFTERNOON_POINTS if AFTERNOON_START_HOUR <= hour < AFTERNOON_END_HOUR else 0


Rule = Callable[[Receipt], int]

RECEIPT_RULES: tuple[Rule, ...] = (
    round_dollar_total,
    quarter_multiple_total,
    retailer_alphanumeric,
    item_pairs,
    item_description_length,
)

# Receipt-level bonuses that legacy scoring applied once per item
TIMING_RULES: tuple[Rule, ...] = (
    odd_purchase_day,
    afternoon_purchase,
)


class ScoringEngine:
    """
    Sums every scoring rule for an accepted receipt.

    Args:
        per_item_receipt_bonuses: Multiply the odd-day and afternoon
            bonuses by the item count, matching legacy point totals.
    """

    def __init__(self, per_item_receipt_bonuses: bool = False) -> None:
        self.per_item_receipt_bonuses = per_item_receipt_bonuses

    def breakdown(self, receipt: Receipt) -> list[RuleContribution]:
        """Points contributed by each rule, in evaluation order."""
        contributions = [
            RuleContribution(rule.__name__, rule(receipt)) for rule in RECEIPT_RULES
        ]

        multiplier = receipt.item_count if self.per_item_receipt_bonuses else 1
        contributions.extend(
            RuleContribution(rule.__name__, rule(receipt) * multiplier)
            for rule in TIMING_RULES
        )
        return contributions

    def score(self, receipt: Receipt) -> int:
        """Total points for the receipt; always a non-negative integer."""
        return sum(c.points for c in self.breakdown(receipt))


def score_receipt(receipt: Receipt, *, per_item_receipt_bonuses: bool = False) -> int:
    """Score a receipt with a one-off engine."""
    return ScoringEngine(per_item_receipt_bonuses=per_item_receipt_bonuses).score(receipt)
