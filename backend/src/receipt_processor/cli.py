"""
Command-line scoring of receipt JSON files.

Usage:
    receipt-processor score examples/target.json
    receipt-processor score receipts/*.json --breakdown --per-item-bonuses
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from receipt_processor.domain.models import ValidationResult
from receipt_processor.domain.scoring import ScoringEngine
from receipt_processor.domain.validation import validate_receipt

logger = logging.getLogger(__name__)


def setup_logging(level: str = "WARNING") -> None:
    """Configure logging for the command-line tool."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )


def score_file(
    file_path: Path,
    engine: ScoringEngine,
    strict_calendar: bool = False,
    show_breakdown: bool = False,
) -> bool:
    """Validate and score one file, printing the outcome. Returns True if accepted."""
    try:
        raw = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"{file_path}: cannot read receipt: {e}")
        return False

    result: ValidationResult = validate_receipt(raw, strict_calendar=strict_calendar)

    if not result.accepted:
        print(f"{file_path}: REJECTED")
        for failure in result.failures:
            print(f"  [{failure.code.value}] {failure.field}: {failure.message}")
        return False

    points = engine.score(result.receipt)
    print(f"{file_path}: {points} points")

    if show_breakdown:
        for contribution in engine.breakdown(result.receipt):
            print(f"  {contribution.rule_name:<26} {contribution.points:>5}")

    logger.debug(f"Scored {file_path} ({result.receipt.item_count} items)")
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="receipt-processor",
        description="Validate and score purchase receipts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Score a single receipt
  receipt-processor score target.json

  # Show points per rule for several receipts
  receipt-processor score receipts/*.json --breakdown
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    score = subparsers.add_parser("score", help="Score receipt JSON files")
    score.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="Receipt JSON files to score",
    )
    score.add_argument(
        "--per-item-bonuses",
        action="store_true",
        help="Apply odd-day and afternoon bonuses once per item",
    )
    score.add_argument(
        "--strict-calendar",
        action="store_true",
        help="Reject impossible dates and times",
    )
    score.add_argument(
        "--breakdown", "-b",
        action="store_true",
        help="Print the points contributed by each rule",
    )
    score.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)

    engine = ScoringEngine(per_item_receipt_bonuses=args.per_item_bonuses)

    all_accepted = True
    for file_path in args.files:
        accepted = score_file(
            file_path,
            engine,
            strict_calendar=args.strict_calendar,
            show_breakdown=args.breakdown,
        )
        all_accepted = all_accepted and accepted

    return 0 if all_accepted else 1


if __name__ == "__main__":
    sys.exit(main())
