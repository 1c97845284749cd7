"""
CLI entry point for the GoCollect API client.

Exposes item search, insights, sold examples and staged sales from the
command line. Results are printed to stdout as JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from src.gocollect_client.api_client import GoCollectClient
from src.gocollect_client.exceptions import GoCollectError
from src.gocollect_client.models import SoldExample, StagedSale
from src.utils.config_loader import AppConfig, load_config, load_env
from src.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command line parser.

    Returns:
        argparse.ArgumentParser: Parser with one subcommand per resource.
    """
    parser = argparse.ArgumentParser(
        prog="gocollect",
        description="GoCollect API command line client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m src.main search "Hulk #181" --limit 10
    python -m src.main insights 12345 --grade 9.8 --company CGC
    python -m src.main insights --cgc-id 0123456789 --grade 9.8
    python -m src.main sold-example create data/sale.json
    python -m src.main staged-sale get partner-42
        """,
    )

    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=Path("config/config.yaml"),
        help="Path to configuration file",
    )
    parser.add_argument(
        "--base-url",
        help="Override the API base URL (default: from config)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: from config, none if unset)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search catalog items")
    search.add_argument("query", help="Search text")
    search.add_argument("--cam", help="Category filter (e.g. Comics)")
    search.add_argument("--limit", type=int, help="Maximum number of results")

    insights = subparsers.add_parser("insights", help="Get pricing insights for an item")
    insights.add_argument("item_id", nargs="?", type=int, help="GoCollect item ID")
    insights.add_argument("--cgc-id", help="Look up by CGC certification ID instead")
    insights.add_argument("--grade", required=True, help="Grade (e.g. 9.8)")
    insights.add_argument("--company", help="Certification company filter")
    insights.add_argument("--label", help="Label filter")

    for name, noun in (("sold-example", "sold example"), ("staged-sale", "staged sale")):
        resource = subparsers.add_parser(name, help=f"Create or fetch a {noun}")
        actions = resource.add_subparsers(dest="action", required=True)
        get = actions.add_parser("get", help=f"Fetch a {noun} by partner sale ID")
        get.add_argument("sale_id", help="Partner sale ID")
        create = actions.add_parser("create", help=f"Submit a {noun} from a JSON file")
        create.add_argument("file", type=Path, help="JSON file with the record")

    return parser


def _load_record(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def run_command(args: argparse.Namespace, client: GoCollectClient) -> int:
    """
    Run one subcommand against the API.

    Args:
        args: Parsed command line arguments.
        client: Configured API client.

    Returns:
        int: Exit code (0 for success).
    """
    if args.command == "search":
        items = client.collectibles.search_items(args.query, cam=args.cam, limit=args.limit)
        logger.info(f"Search returned {len(items)} items")
        _print_json([item.to_dict() for item in items])

    elif args.command == "insights":
        if args.cgc_id:
            insights = client.insights.get_item_insights_by_cgc_id(
                args.cgc_id, args.grade, company=args.company, label=args.label
            )
        else:
            insights = client.insights.get_item_insights(
                args.item_id, args.grade, company=args.company, label=args.label
            )
        _print_json(insights.to_dict())

    elif args.command == "sold-example":
        if args.action == "create":
            example = SoldExample.from_api_response(_load_record(args.file))
            client.sold_examples.create_sold_example(example)
            logger.info(f"Created sold example {example.partner_sale_id}")
        else:
            _print_json(client.sold_examples.get_sold_example(args.sale_id).to_dict())

    elif args.command == "staged-sale":
        if args.action == "create":
            sale = StagedSale.from_api_response(_load_record(args.file))
            client.staged_sales.create_staged_sale(sale)
            logger.info(f"Created staged sale {sale.partner_sale_id}")
        else:
            _print_json(client.staged_sales.get_staged_sale(args.sale_id).to_dict())

    return 0


def create_client(args: argparse.Namespace, config: AppConfig) -> GoCollectClient:
    """Apply command line overrides to config and build the client."""
    if args.base_url:
        config.gocollect.base_url = args.base_url
    if args.timeout is not None:
        config.gocollect.timeout = args.timeout
    return GoCollectClient.from_config(config)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        int: Exit code.
    """
    load_env()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "insights" and args.item_id is None and not args.cgc_id:
        parser.error("insights requires an ITEM_ID or --cgc-id")

    config = load_config(args.config)

    log_level = logging.DEBUG if args.verbose else config.logging.level
    setup_logging(
        level=log_level,
        log_file=Path(config.logging.file) if config.logging.file else None,
        log_format=config.logging.format,
        json_format=args.json_logs or config.logging.json,
    )

    try:
        with create_client(args, config) as client:
            return run_command(args, client)
    except GoCollectError as e:
        logger.debug(f"Command failed: {e.to_dict()}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except (OSError, ValueError, ArithmeticError, KeyError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
