from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from trackpulse.app import (
    ask_copilot,
    change_shipment_status,
    create_shipment,
    download_invoice_pdf,
    list_products,
    list_shipments,
    shipment_indicators,
)
from trackpulse.config import configure_logging
from trackpulse.domain.copilot import MIN_QUESTION_LENGTH
from trackpulse.domain.errors import ShipmentError
from trackpulse.domain.model import NewShipment, Role, ShipmentProduct, ShipmentState
from trackpulse.domain.reconciliation.notes import format_date

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from trackpulse.domain.model import ShipmentRecord

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track shipments backed by Holded invoices")
    subparsers = parser.add_subparsers(dest="command", required=True)

    shipments = subparsers.add_parser("shipments", help="List shipments")
    shipments.add_argument(
        "--state",
        choices=[state.value for state in ShipmentState],
        help="Only show shipments in this state",
    )

    transition = subparsers.add_parser("transition", help="Change the status of a shipment")
    transition.add_argument("shipment_id", help="Shipment id or invoice id")
    transition.add_argument(
        "--to",
        dest="target",
        required=True,
        choices=[state.value for state in ShipmentState],
        help="Target status",
    )
    transition.add_argument(
        "--role",
        required=True,
        choices=[role.value for role in Role],
        help="Role performing the change",
    )
    transition.add_argument(
        "--confirm",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Explicitly set whether the order is confirmed",
    )
    transition.add_argument(
        "--issue",
        type=str,
        help="Issue description (required when reporting an issue)",
    )

    create = subparsers.add_parser("create", help="Create a shipment and its invoice")
    create.add_argument("--title", type=str, required=True, help="Shipment title")
    create.add_argument("--origin", type=str, required=True, help="Origin location")
    create.add_argument("--destination", type=str, required=True, help="Destination location")
    create.add_argument(
        "--eta",
        type=str,
        required=True,
        help="Estimated delivery date (YYYY-MM-DD or ISO-8601)",
    )
    create.add_argument(
        "--product",
        dest="products",
        action="append",
        required=True,
        metavar="PRODUCT_ID:UNITS",
        help="Product and units to ship (repeatable)",
    )

    pdf = subparsers.add_parser("pdf", help="Download the invoice PDF of a shipment")
    pdf.add_argument("shipment_id", help="Shipment id or invoice id")
    pdf.add_argument("--output", type=Path, help="Destination file (defaults to invoice-<id>.pdf)")

    subparsers.add_parser("products", help="List products and stock levels")
    subparsers.add_parser("indicators", help="Show key shipment indicators")

    ask = subparsers.add_parser("ask", help="Ask the logistics copilot")
    ask.add_argument("question", help="Question for the copilot")
    ask.add_argument("--shipment", dest="shipment_id", help="Shipment to use as context")

    return parser.parse_args(list(argv))


def _parse_iso_datetime(value: str) -> datetime:
    try:
        normalized = value.strip()
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        dt = datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise ValueError(f"Invalid ISO timestamp: {value}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _parse_product(value: str) -> ShipmentProduct:
    product_id, separator, units = value.rpartition(":")
    if not separator or not product_id:
        raise ValueError(f"Expected PRODUCT_ID:UNITS, got {value!r}")
    try:
        count = int(units)
    except ValueError as exc:
        raise ValueError(f"Invalid unit count in {value!r}") from exc
    if count <= 0:
        raise ValueError(f"Units must be positive in {value!r}")
    return ShipmentProduct(product_id=product_id, units=count)


def _build_new_shipment(args: argparse.Namespace) -> NewShipment:
    products = tuple(_parse_product(value) for value in args.products)
    product_ids = [item.product_id for item in products]
    if len(set(product_ids)) != len(product_ids):
        raise ValueError("Each product may only be listed once")
    return NewShipment(
        title=args.title.strip(),
        origin=args.origin.strip(),
        destination=args.destination.strip(),
        estimated_delivery=_parse_iso_datetime(args.eta),
        products=products,
    )


def _validate(args: argparse.Namespace) -> NewShipment | None:
    if args.command == "ask" and len(args.question.strip()) < MIN_QUESTION_LENGTH:
        raise ValueError(f"Question must be at least {MIN_QUESTION_LENGTH} characters")
    if args.command == "create":
        return _build_new_shipment(args)
    return None


def _describe(record: ShipmentRecord) -> str:
    parts = [
        f"{record.id} [{record.state}]",
        record.title,
        f"{record.origin or '?'} -> {record.destination or '?'}",
        f"eta {format_date(record.estimated_delivery)}",
    ]
    if record.order_confirmed:
        parts.append("confirmed")
    if record.issue_description:
        parts.append(f"issue: {record.issue_description}")
    if record.foreign_tags:
        parts.append(f"tags: {', '.join(record.foreign_tags)}")
    return " | ".join(parts)


def _run(args: argparse.Namespace, new_shipment: NewShipment | None) -> None:
    if args.command == "shipments":
        for record in list_shipments():
            if args.state is None or record.state == args.state:
                log.info(_describe(record))
    elif args.command == "transition":
        record = change_shipment_status(
            args.shipment_id,
            ShipmentState(args.target),
            Role(args.role),
            confirmation=args.confirm,
            issue_text=args.issue,
        )
        log.info(_describe(record))
    elif args.command == "create" and new_shipment is not None:
        record = create_shipment(new_shipment)
        log.info(_describe(record))
    elif args.command == "pdf":
        content = download_invoice_pdf(args.shipment_id)
        output: Path = args.output or Path(f"invoice-{args.shipment_id}.pdf")
        output.write_bytes(content)
        log.info("Wrote %s bytes to %s", len(content), output)
    elif args.command == "products":
        for product in list_products():
            log.info(
                "%s | %s (%s) | %s units",
                product.id,
                product.name,
                product.sku or "no SKU",
                product.stock_level,
            )
    elif args.command == "indicators":
        indicators = shipment_indicators()
        log.info(
            "Shipments today: %s | With issues: %s | Average delivery time: %s",
            indicators.shipments_today,
            indicators.shipments_with_issue,
            indicators.average_delivery_time,
        )
    elif args.command == "ask":
        answer = ask_copilot(args.question, shipment_id=args.shipment_id)
        log.info(answer.answer)
        if answer.suggested_actions:
            log.info("Suggested actions: %s", answer.suggested_actions)
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        new_shipment = _validate(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _run(parsed_args, new_shipment)
    except ShipmentError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
