#!/usr/bin/env python3
"""
Register a car for an existing OWNER directly in the database.

Usage:
  python scripts/add_car.py --owner-id 2 --model "Honda Civic"
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure lease_api is importable when run from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lease_api.services.car_service import CarService  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Register a car for an owner")
    ap.add_argument("--owner-id", type=int, required=True, help="ID of a user with role OWNER")
    ap.add_argument("--model", required=True, help="Car model (e.g. 'Honda Civic')")
    args = ap.parse_args()

    car = CarService().register(args.owner_id, args.model)
    print("OK: car registered")
    print(f"  ID: {car.id}")
    print(f"  Model: {car.model}")
    print(f"  Status: {car.status.value}")
    print(f"  Owner: {car.owner.email}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
