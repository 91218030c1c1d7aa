import asyncio
import sys
from pathlib import Path

"""
Seed a few demo items with some stock history.

Items that already exist (by name, case-insensitive) are left alone.

Run:
- inside backend/: `python scripts/seed_demo_items.py`
- from repo root: `python backend/scripts/seed_demo_items.py`
"""

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from core.errors import DuplicateName  # noqa: E402
from db.database import async_session_maker, create_db_and_tables  # noqa: E402
from db.inventory import repository  # noqa: E402


DEMO_ITEMS = [
    # name, description, restock_point, adjustments
    ("Tornillo 6mm", "Caja de tornillos de acero", 50, [("add", 200), ("remove", 120), ("remove", 45)]),
    ("Tuerca 6mm", "Tuercas hexagonales", 40, [("add", 100), ("remove", 30)]),
    ("Cinta aislante", None, 5, [("add", 12), ("remove", 4), ("add", 6)]),
    ("Guantes de nitrilo", "Talla M", 10, [("add", 10)]),
]


async def main() -> None:
    await create_db_and_tables()

    async with async_session_maker() as db:
        created = 0
        for name, description, restock_point, adjustments in DEMO_ITEMS:
            try:
                item = await repository.create_item(
                    db,
                    name=name,
                    description=description,
                    restock_point=restock_point,
                )
            except DuplicateName:
                print(f"Skipping existing item: {name}")
                continue

            for type_, units in adjustments:
                await repository.adjust_stock(db, item.id, units=units, type=type_)
            created += 1
            print(f"Created {name}: {item.current_units} units (restock at {restock_point})")

        print(f"Done. Created {created} items.")


if __name__ == "__main__":
    asyncio.run(main())
