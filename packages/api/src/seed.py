# This project was developed with assistance from AI tools.
"""CLI entrypoint for demo data seeding into the SQL store.

Usage:
    python -m src.seed                  # Seed demo data
    python -m src.seed --create-tables  # Create the schema first
    python -m src.seed --force          # Add any missing demo records
"""

import argparse
import asyncio
import json
import logging
import sys

from db import Base, engine

from .repositories.sql import SqlAlchemyRepository
from .services.seed.seeder import seed_demo_data


async def main(force: bool = False, create_tables: bool = False) -> None:
    """Run demo data seeding."""
    if create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    result = await seed_demo_data(SqlAlchemyRepository(), force=force)
    await engine.dispose()
    print(json.dumps(result, indent=2, default=str))

    if result.get("status") == "already_seeded":
        print("\nDemo data already seeded. Use --force to add missing records.")
        sys.exit(0)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed hostel admissions demo data")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Seed even when demo data is already present",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create database tables before seeding",
    )
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main(force=args.force, create_tables=args.create_tables))
