#!/usr/bin/env python3
"""Seed the DuckDB database with sample plots and soil readings.

Usage:
    python scripts/seed_soil_data.py                 # 3 plots x 3 daily readings
    python scripts/seed_soil_data.py --plots 5 --readings 10
    python scripts/seed_soil_data.py --reset         # clear soil data first
"""

import argparse
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import uuid4

# Add the repository root to sys.path so imports like `backend.*` work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from backend.db.deps import get_db_path, open_connection
from backend.db.repository import DuckDBPlotStore, DuckDBSoilDataRepository
from backend.models.soil_data import SoilDataCreate
from backend.services import logger
from backend.services.soil_data import SoilDataService

MOISTURE_RANGE = (20.0, 45.0)
PH_RANGE = (5.5, 8.5)
TEMPERATURE_RANGE = (15.0, 30.0)


def build_readings(plot_ids, readings_per_plot, now, rng):
    """One reading per plot per day, going back from ``now``."""
    payloads = []
    for plot_id in plot_ids:
        for day in range(readings_per_plot):
            payloads.append(
                SoilDataCreate(
                    plot_id=plot_id,
                    moisture=round(rng.uniform(*MOISTURE_RANGE), 2),
                    ph=round(rng.uniform(*PH_RANGE), 2),
                    temperature=round(rng.uniform(*TEMPERATURE_RANGE), 1),
                    timestamp=now - timedelta(days=day),
                )
            )
    return payloads


def seed(connection, plots: int, readings: int, reset: bool = False, seed_value: int | None = None):
    """Create ``plots`` plots with ``readings`` readings each; returns the created records."""
    rng = random.Random(seed_value)
    plot_store = DuckDBPlotStore(connection)
    service = SoilDataService(DuckDBSoilDataRepository(connection), plot_store)

    if reset:
        logger.info("Clearing existing soil data")
        connection.execute("DELETE FROM soil_data")

    plot_ids = []
    for index in range(1, plots + 1):
        plot = plot_store.insert(uuid4(), f"Plot {index}")
        plot_ids.append(plot.id)
    logger.info("Created %s plots", len(plot_ids))

    payloads = build_readings(plot_ids, readings, datetime.now(timezone.utc), rng)
    created = service.bulk_create(payloads)
    logger.info("Created %s soil data records", len(created))
    return created


def main():
    parser = argparse.ArgumentParser(description="Seed sample soil data")
    parser.add_argument("--db", type=Path, default=None, help="DuckDB file (defaults to SOILDATA_DB_PATH)")
    parser.add_argument("--plots", type=int, default=3, help="Number of plots to create")
    parser.add_argument("--readings", type=int, default=3, help="Readings per plot, one per day")
    parser.add_argument("--reset", action="store_true", help="Delete existing soil data first")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible values")
    args = parser.parse_args()

    db_path = args.db or get_db_path()
    logger.info("Starting database seed at %s", db_path)
    connection = open_connection(db_path)
    try:
        seed(connection, args.plots, args.readings, reset=args.reset, seed_value=args.seed)
    finally:
        connection.close()
    logger.info("Seeding completed successfully")


if __name__ == "__main__":
    main()
