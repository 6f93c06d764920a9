#!/usr/bin/env python3
"""Insert the demo users (1 admin, 5 owners, 5 customers); existing emails are skipped."""
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lease_api.core.config import get_settings  # noqa: E402
from lease_api.core.logging_config import configure_logging  # noqa: E402
from lease_api.db.create_tables import create_all  # noqa: E402
from lease_api.services.seed_service import SeedService  # noqa: E402


if __name__ == "__main__":
    configure_logging(get_settings().log_level)
    create_all()
    inserted = SeedService().bootstrap_users()
    print(f"{inserted} demo users inserted.")
