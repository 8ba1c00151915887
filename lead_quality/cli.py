"""Command line interface for scoring a spreadsheet of business leads."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .aggregation import group_leads, rank_leads, stats_for_scored
from .config import DEFAULT_POLICY, load_policy
from .freemium import select_preview
from .ingestion import export_leads, export_scored_leads, load_leads


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Score, tier, and preview business leads against a searched location",
    )
    parser.add_argument("input", help="Path to the input spreadsheet (CSV, TSV, or XLSX)")
    parser.add_argument("output", help="Path where the results should be written (CSV, TSV, XLSX, or JSON)")
    parser.add_argument("--location", required=True, help="The location that was searched, e.g. 'Dublin, Ireland'")
    parser.add_argument("--business-type", default="", help="The business type that was searched")
    parser.add_argument("--config", help="Optional scoring configuration file (YAML or JSON)")
    parser.add_argument(
        "--view",
        choices=["grouped", "ranked", "freemium"],
        default="grouped",
        help="Write leads grouped by tier, ranked by score, or only the free preview",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    policy = load_policy(args.config) if args.config else DEFAULT_POLICY
    leads = load_leads(args.input)
    if not leads:
        logging.warning("No leads found in %s", args.input)

    if args.view == "freemium":
        preview = select_preview(leads, policy)
        export_leads(list(preview.preview), args.output)
        logging.info(
            "Previewing %s of %s leads; %s hidden, unlock price %s",
            preview.preview_size,
            len(leads),
            preview.hidden_count,
            preview.unlock_price_units,
        )
    else:
        if args.view == "ranked":
            scored = rank_leads(leads, args.location, policy)
        else:
            scored = group_leads(leads, args.location, policy).flatten()
        export_scored_leads(scored, args.output)
        stats = stats_for_scored(scored)
        logging.info(
            "Scored %s leads for %s: %s excellent, %s okay, %s poor (average %s)",
            stats.total,
            args.location,
            stats.excellent,
            stats.okay,
            stats.poor,
            stats.average_score,
        )
        logging.info(
            "Contact coverage: %s with email, %s with phone, %s with website",
            stats.total_with_email,
            stats.total_with_phone,
            stats.total_with_website,
        )

    logging.info("Results written to %s", Path(args.output).resolve())
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
