#!/usr/bin/env python3
"""
Write the lease history export to a file.

Usage:
  python scripts/export_leases.py --format pdf --out lease-history.pdf
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lease_api.services.report_service import ReportService  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Export lease history")
    ap.add_argument("--format", default="csv", choices=["csv", "pdf"])
    ap.add_argument("--out", help="Output path (default: lease-history.<format>)")
    args = ap.parse_args()

    result = ReportService().export(args.format)
    out = Path(args.out or result.filename)
    out.write_bytes(result.content)
    print(f"OK: wrote {out} ({len(result.content)} bytes, {result.media_type})")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
