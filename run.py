"""
Back-office command line for the register.

Operates on the persisted local session (today's orders) and the remote
closing ledger. The cashier-facing UI drives RegisterSession directly.
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path

from pydantic import TypeAdapter

import config
from db import create_db_and_tables
from models.inventory import InventoryRecordDTO
from services.analytics import AnalyticsService
from services.register import RegisterSession, business_today
from utils.catalog_loader import load_catalog
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

INVENTORY_ADAPTER = TypeAdapter(dict[str, InventoryRecordDTO])


def load_inventory(path: str | None) -> dict[str, InventoryRecordDTO]:
    """Manual counts keyed by product id, e.g. {"sd_ginger": {"opening": 3, "closing": 1}}."""
    if not path:
        return {}
    return INVENTORY_ADAPTER.validate_json(Path(path).read_text(encoding="utf-8"))


async def open_session() -> RegisterSession:
    await create_db_and_tables()
    session = RegisterSession(load_catalog())
    await session.load()
    return session


async def cmd_summary(args) -> int:
    session = await open_session()
    summary = AnalyticsService.build_sales_summary(session.orders, session.catalog.products)
    print(AnalyticsService.format_summary_text(summary, session.catalog.products))
    return 0


async def cmd_close_day(args) -> int:
    session = await open_session()
    business_date = date.fromisoformat(args.date) if args.date else business_today()
    result = await session.close_day(load_inventory(args.inventory), business_date)
    print(json.dumps(result.record.model_dump(mode="json"), ensure_ascii=False, indent=2))
    if not result.synced:
        print(f"Closing not synced, orders kept: {result.error}", file=sys.stderr)
        return 1
    return 0


async def cmd_history(args) -> int:
    session = await open_session()
    records = await session.fetch_history(date.fromisoformat(args.start), date.fromisoformat(args.end))
    for record in records:
        print(f"{record.date.isoformat()}  revenue={record.total_revenue}  profit={record.total_profit}  "
              f"orders={record.order_count}  variance={record.inventory_variance}")
    totals = AnalyticsService.summarize_history(records)
    print(json.dumps(totals.model_dump(mode="json"), ensure_ascii=False))
    return 0


async def cmd_insight(args) -> int:
    session = await open_session()
    print(await session.generate_insight())
    return 0


def main():
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Stall register back office",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py summary
  python run.py close-day --inventory counts.json
  python run.py history --start 2026-10-01 --end 2026-10-17
  python run.py insight
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("summary", help="Print today's sales summary")

    close_day = subparsers.add_parser("close-day", help="Close the business day and sync the ledger")
    close_day.add_argument("--inventory", type=str, help="JSON file with manual stock counts")
    close_day.add_argument("--date", type=str, help=f"Business date (YYYY-MM-DD), default today in {config.TIMEZONE}")

    history = subparsers.add_parser("history", help="List closing records in a date range")
    history.add_argument("--start", type=str, required=True, help="First date (YYYY-MM-DD)")
    history.add_argument("--end", type=str, required=True, help="Last date (YYYY-MM-DD)")

    subparsers.add_parser("insight", help="Generate the daily business report")

    args = parser.parse_args()
    setup_logging()

    commands = {
        "summary": cmd_summary,
        "close-day": cmd_close_day,
        "history": cmd_history,
        "insight": cmd_insight,
    }
    try:
        sys.exit(asyncio.run(commands[args.command](args)))
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
