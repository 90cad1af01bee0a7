#!/usr/bin/env python3
"""
List or delete uploaded images that no report references.

These are left behind when an image was written but the report insert
failed afterwards.

    python scripts/cleanup_orphaned_uploads.py          # dry run
    python scripts/cleanup_orphaned_uploads.py --delete
    python scripts/cleanup_orphaned_uploads.py --delete --min-age 3600

Files younger than --min-age seconds are skipped so an image whose report
is still being created is never removed.
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config.database import SessionLocal, UPLOAD_DIR  # noqa: E402
from api.garbage_reports.garbage_reports_service import DatabaseReportStore  # noqa: E402
from api.uploads.uploads_service import (  # noqa: E402
    ORPHAN_MIN_AGE_SECONDS,
    find_orphaned_uploads,
    remove_orphaned_uploads,
)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--delete", action="store_true", help="remove the files instead of listing them")
    parser.add_argument(
        "--min-age",
        type=float,
        default=ORPHAN_MIN_AGE_SECONDS,
        help="only consider files last modified at least this many seconds ago (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        store = DatabaseReportStore(db)
        if args.delete:
            paths = remove_orphaned_uploads(store, UPLOAD_DIR, min_age=args.min_age)
            verb = "Removed"
        else:
            paths = find_orphaned_uploads(store, UPLOAD_DIR, min_age=args.min_age)
            verb = "Orphaned"
    finally:
        db.close()

    for p in paths:
        print(f"{verb}: {p}")
    print(f"{len(paths)} file(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
