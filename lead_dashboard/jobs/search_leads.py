"""Lead search job: shared by the HTTP API and the command line."""

import argparse
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from lead_dashboard.core.config import ConfigError, get_settings, require_api_key
from lead_dashboard.export.formats import CONTENT_TYPES, export_results
from lead_dashboard.models import ScoredLead
from lead_dashboard.search.aggregator import (
    SearchProvider,
    aggregate_leads,
    google_places_provider,
    validate_location,
)
from lead_dashboard.search.industries import INDUSTRY_QUERIES

logger = logging.getLogger(__name__)


def run_search_job(
    *,
    location: object,
    industries: Optional[Iterable[str]] = None,
    custom_query: Optional[str] = None,
    provider: Optional[SearchProvider] = None,
) -> List[ScoredLead]:
    """Validate configuration and input, then run the aggregated lead search.

    An empty or missing industry list searches every known industry.
    """
    settings = get_settings()
    api_key = require_api_key(settings)
    location = validate_location(location)

    industry_keys = list(industries) if industries else None
    if provider is None:
        provider = google_places_provider(api_key, max_result_count=settings.max_result_count)

    return aggregate_leads(
        location,
        industry_keys,
        custom_query,
        provider,
        max_workers=settings.search_max_workers,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search and rank business leads")
    parser.add_argument("--location", required=True, help="City, region or postal code to search")
    parser.add_argument(
        "--industry",
        dest="industries",
        action="append",
        choices=sorted(INDUSTRY_QUERIES),
        help="Industry to search (repeatable, defaults to all)",
    )
    parser.add_argument("--custom", dest="custom_query", help="Extra free-text query, e.g. 'crane rental'")
    parser.add_argument("--export", dest="export_format", choices=sorted(CONTENT_TYPES), help="Write results to a file")
    parser.add_argument("--output", dest="output", help="Output path for --export (defaults to leads.<format>)")
    return parser


def _print_table(leads: List[ScoredLead]) -> None:
    for lead in leads:
        row = lead.to_dict()
        print(f"{row['lead_score']:>2} {row['lead_label']:<5} {row['name'][:40]:<40} {row['phone']:<18} {row['website']}")


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)

    try:
        leads = run_search_job(location=args.location, industries=args.industries, custom_query=args.custom_query)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    except ValueError as exc:
        logger.error("Invalid search: %s", exc)
        return 2

    logger.info("Found %d leads", len(leads))
    if not args.export_format:
        _print_table(leads)
        return 0

    if not leads:
        logger.warning("No leads found; nothing to export.")
        return 0

    output = Path(args.output or f"leads.{args.export_format}")
    output.write_bytes(
        export_results(
            args.export_format,
            [lead.to_dict() for lead in leads],
            location=args.location,
            industries=args.industries or (),
        )
    )
    logger.info("Wrote %d leads to %s", len(leads), output)
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as exc:  # pragma: no cover - CLI fallback
        logger.error("Lead search failed: %s", exc, exc_info=True)
        raise SystemExit(1) from exc
