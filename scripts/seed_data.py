from __future__ import annotations

import argparse

from services.api.app.db.database import db_session
from services.api.app.db.init_db import init_db
from services.api.app.db.seed import DEFAULT_STOCK, seed_menu


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the Tavola starter menu")
    parser.add_argument("--stock", type=int, default=DEFAULT_STOCK, help="initial stock per item")
    args = parser.parse_args()

    init_db()

    db = db_session()
    try:
        added = seed_menu(db, stock=args.stock)
        print(f"Seeded menu items={added}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
