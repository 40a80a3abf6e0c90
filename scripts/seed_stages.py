#!/usr/bin/env python3
"""Seed the default production stages for an organization.

This script is runnable directly (python scripts/seed_stages.py --org ORG) and also import-safe.
If you see `ModuleNotFoundError: No module named 'mfgtrack'`, run from the project root or set PYTHONPATH=. before running.
"""
import sys
from pathlib import Path

# Ensure project root is on sys.path when running the script directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import argparse

from mfgtrack.db import SessionLocal, Base, engine
from mfgtrack.core import stage_catalog


def main(argv=None):
    parser = argparse.ArgumentParser(description='Seed the five-stage default pipeline for an organization.')
    parser.add_argument('--org', required=True, help='Organization id to seed stages for')
    parser.add_argument('--no-create-tables', action='store_true',
                        help='Skip creating tables (use when the schema is managed by alembic)')
    parser.add_argument('--list', action='store_true', help='Only list the current stages')
    args = parser.parse_args(argv)

    if not args.no_create_tables:
        Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        if args.list:
            stages = stage_catalog.list_stages(db, args.org)
        else:
            stages = stage_catalog.seed_default_stages(db, args.org)
            print(f"Organization {args.org} has {len(stages)} active stages")
        for stage in stages:
            state = "active" if stage.is_active else "inactive"
            print(f"  {stage.sequence_order:>3}  {stage.stage_name} ({stage.stage_type}, {state})")
    return 0


if __name__ == '__main__':
    sys.exit(main())
