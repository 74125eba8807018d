#!/usr/bin/env python3
"""
Recalculate stored TPS profiles against the current scoring configuration.

Pages through the bulk-recalculate endpoint, rescores each assessment locally
and submits the new profiles. Runs as a dry run unless --apply is given.

    python scripts/bulk_recalculate.py --base-url http://localhost:8000 --token $TOKEN --apply
"""

import argparse
import asyncio
import json
import logging
import os
import sys

from dotenv import load_dotenv

from tps_scoring.application.use_cases import BulkRecalculationRunner
from tps_scoring.domain.scoring import parse_overrides
from tps_scoring.domain.services import PersonalityProfileService
from tps_scoring.infrastructure.external_services import HTTPBulkRecalculationClient
from tps_scoring.monitoring import setup_logging

load_dotenv()

logger = logging.getLogger("bulk_recalculate")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bulk recalculation of stored TPS profiles")
    parser.add_argument("--base-url", default=os.getenv("TPS_API_URL", "http://localhost:8000"))
    parser.add_argument("--token", default=os.getenv("TPS_ADMIN_TOKEN"), help="Admin bearer token")
    parser.add_argument("--apply", action="store_true", help="Write profiles (default is a dry run)")
    parser.add_argument("--since", help="Only assessments updated at or after this ISO timestamp")
    parser.add_argument("--variant", help="Only assessments of this questionnaire variant")
    parser.add_argument("--page-size", type=int, default=200)
    parser.add_argument("--overrides", help="Scoring overrides JSON document to use instead of the server's active one")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    if not args.token:
        logger.error("An admin token is required (--token or TPS_ADMIN_TOKEN)")
        return 2

    overrides = None
    if args.overrides:
        with open(args.overrides, encoding="utf-8") as f:
            overrides = parse_overrides(json.load(f))

    client = HTTPBulkRecalculationClient(args.base_url, args.token)
    try:
        runner = BulkRecalculationRunner(
            client,
            PersonalityProfileService(),
            overrides=overrides,
            page_size=args.page_size,
        )
        report = await runner.run(dry_run=not args.apply, since=args.since, variant=args.variant)
    finally:
        await client.close()

    logger.info(
        f"Operation {report.operation_id}: listed {report.listed}, submitted {report.submitted}, "
        f"updated {report.success}, errors {len(report.errors)}, skipped {len(report.skipped)}"
    )
    for error in report.errors + report.skipped:
        logger.warning(f"{error.get('id')}: {error.get('error')}")

    return 1 if report.errors else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
