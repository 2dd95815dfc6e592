#!/usr/bin/env python3
"""CLI for Person Service management tasks.

Usage:
    python -m cli <command>

Commands:
    create-tables  Create database tables from the models
    seed           Insert the demo persons (existing ids are skipped)
"""

import argparse
import asyncio
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def _create_tables() -> None:
    from core.database import create_engine, create_tables, dispose_engine

    engine = create_engine()
    try:
        await create_tables(engine)
    finally:
        await dispose_engine(engine)


async def _seed() -> int:
    from core.database import (
        create_engine,
        create_session_maker,
        create_tables,
        dispose_engine,
    )
    from services.seed_service import seed_demo_persons

    engine = create_engine()
    try:
        await create_tables(engine)
        async with create_session_maker(engine)() as session:
            inserted = await seed_demo_persons(session)
            await session.commit()
        return inserted
    finally:
        await dispose_engine(engine)


def cmd_create_tables() -> int:
    """Create database tables."""
    logger.info("Creating database tables...")
    asyncio.run(_create_tables())
    logger.info("Tables ready")
    return 0


def cmd_seed() -> int:
    """Insert demo persons."""
    logger.info("Seeding demo persons...")
    inserted = asyncio.run(_seed())
    logger.info(f"Inserted {inserted} persons")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Person Service CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "create-tables",
        help="Create database tables from the models",
    )
    subparsers.add_parser(
        "seed",
        help="Insert the demo persons (existing ids are skipped)",
    )

    args = parser.parse_args()

    if args.command == "create-tables":
        return cmd_create_tables()
    elif args.command == "seed":
        return cmd_seed()
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
