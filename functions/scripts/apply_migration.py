"""
Apply a SQL migration to the hosted database through the exec_sql RPC.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storefront.config import get_settings
from storefront.migrations import MigrationRunner

logger = logging.getLogger(__name__)

DEFAULT_MIGRATION = (
    ROOT / "migrations" / "20251019130000_fix_infinite_recursion_final.sql"
)


def main() -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Apply a SQL migration file")
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=DEFAULT_MIGRATION,
        help="Migration file to apply",
    )
    parser.add_argument(
        "--supabase-url",
        type=str,
        default=settings.supabase_url,
        help="Project URL (defaults to SUPABASE_URL)",
    )
    parser.add_argument(
        "--service-key",
        type=str,
        default=settings.supabase_service_role_key,
        help="Service-role key (defaults to SUPABASE_SERVICE_ROLE_KEY)",
    )
    parser.add_argument(
        "--anon-key",
        type=str,
        default=settings.supabase_anon_key,
        help="Anon key used for the fallback request",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    try:
        sql = args.path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Error reading migration %s: %s", args.path, exc)
        return 1

    try:
        runner = MigrationRunner(args.supabase_url, args.service_key, args.anon_key)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    report = runner.apply(sql)
    logger.info(
        "Migration completed: %d/%d statements succeeded",
        report.succeeded,
        report.total,
    )
    if report.failed:
        logger.warning("Failed statements: %s", report.failed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
