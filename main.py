"""CLI entry point for the candidate search engine."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from src.core.config import Settings
from src.core.errors import SchemaError
from src.core.schemas import Filters, SortPolicy
from src.ingest.adapter import SchemaAdapter, load_payload
from src.pipeline.orchestrator import (
    export_candidates_json,
    export_results_json,
    format_results_table,
    search,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Candidate search engine - normalize profile payloads and rank candidates",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- convert subcommand ---
    convert_parser = subparsers.add_parser(
        "convert",
        help="Normalize a profile payload into canonical candidate JSON",
    )
    _add_common_args(convert_parser)
    convert_parser.add_argument(
        "--output",
        help="Write canonical JSON to this file instead of stdout",
    )

    # --- rank subcommand ---
    rank_parser = subparsers.add_parser("rank", help="Rank candidates against a recruiter query")
    _add_common_args(rank_parser)
    rank_parser.add_argument(
        "--filters",
        help="Path to a filters YAML file; flags below override its values",
    )
    rank_parser.add_argument("--query", "-q", help="Free-text query matched against name/title/summary")
    rank_parser.add_argument(
        "--require", action="append", dest="required_skills", metavar="SKILL",
        help="Required skill (repeatable); all must be present",
    )
    rank_parser.add_argument(
        "--prefer", action="append", dest="preferred_skills", metavar="SKILL",
        help="Preferred skill (repeatable); each hit adds to the score",
    )
    rank_parser.add_argument("--title", action="append", dest="titles", help="Title filter (repeatable)")
    rank_parser.add_argument(
        "--industry", action="append", dest="industries", help="Industry filter (repeatable)",
    )
    rank_parser.add_argument(
        "--location", action="append", dest="locations", help="Location filter (repeatable)",
    )
    rank_parser.add_argument(
        "--company", action="append", dest="companies", help="Company filter (repeatable)",
    )
    rank_parser.add_argument(
        "--open-to-work-only",
        action="store_true",
        default=None,
        help="Only keep candidates open to work",
    )
    rank_parser.add_argument("--min-years", type=int, help="Minimum years of experience (0 = any)")
    rank_parser.add_argument("--max-years", type=int, help="Maximum years of experience (0 = any)")
    rank_parser.add_argument(
        "--sort",
        default=SortPolicy.RELEVANCE.value,
        choices=[p.value for p in SortPolicy],
        help="Sort policy (default: relevance)",
    )
    rank_parser.add_argument(
        "--search-in-results",
        help="Keep only results whose name/title/company/skills contain this text",
    )
    rank_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )

    return parser.parse_args(argv)


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data", required=True, help="Path to the profile payload JSON file")
    parser.add_argument(
        "--config",
        help="Path to settings YAML file (default: built-in settings)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str | None) -> Settings:
    return Settings.from_yaml(path) if path else Settings()


def build_filters(args: argparse.Namespace) -> Filters:
    """Merge the optional filters file with command-line overrides."""
    base = Filters.from_yaml(args.filters) if args.filters else Filters()
    overrides: dict[str, Any] = {}
    for field in (
        "query", "required_skills", "preferred_skills", "titles", "industries",
        "locations", "companies", "open_to_work_only", "min_years", "max_years",
    ):
        value = getattr(args, field)
        if value is not None:
            overrides[field] = value
    if not overrides:
        return base
    return Filters.model_validate({**base.model_dump(), **overrides})


def cmd_convert(args: argparse.Namespace) -> None:
    """Handle convert subcommand."""
    settings = load_settings(args.config)
    payload = load_payload(args.data)
    candidates = SchemaAdapter(settings).convert(payload)
    output = export_candidates_json(candidates)

    if args.output:
        path = Path(args.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(output)
        print(f"Wrote {len(candidates)} candidates to {path}")
    else:
        print(output)


def cmd_rank(args: argparse.Namespace) -> None:
    """Handle rank subcommand."""
    settings = load_settings(args.config)
    filters = build_filters(args)
    payload = load_payload(args.data)

    result = search(
        payload,
        filters,
        settings,
        sort_policy=args.sort,
        free_text=args.search_in_results,
    )

    if args.export == "json":
        print(export_results_json(result))
    else:
        print(format_results_table(result))


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    handler = cmd_convert if args.command == "convert" else cmd_rank
    try:
        handler(args)
    except (FileNotFoundError, SchemaError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
