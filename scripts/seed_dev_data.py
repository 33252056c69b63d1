"""Dev data seeder for Habit Pet.

Usage:
    python scripts/seed_dev_data.py

Creates the item catalog, two challenges, the players alice and bob
(password: Password123!) with their pet, tasks, inventory, group and
challenge participation. Safe to run repeatedly.
"""

from __future__ import annotations

import sys
from pathlib import Path

# The app package lives under backend/; make it importable from the repo root.
BACKEND_DIR = Path(__file__).resolve().parent.parent / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.db.seed import run  # noqa: E402


if __name__ == "__main__":
    sys.exit(run())
