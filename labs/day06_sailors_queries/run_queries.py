#!/usr/bin/env python
"""
CLI entrypoint for the Sailors/Boats/Reserves query lab.

Usage:
    # Run all queries with both techniques on the literal fixture
    python run_queries.py

    # Show the SQL each query stands for
    python run_queries.py --show-sql

    # Benchmark on 100k synthetic sailors, joins only
    python run_queries.py --source synthetic --scale 100000 --techniques join
"""

import argparse
import sys
from pathlib import Path

# Add labs to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from day06_sailors_queries.flows.pipeline import run_queries_flow
from day06_sailors_queries.src.config_loader import Config, load_config
from day06_sailors_queries.src.queries import QueryParams, sql_text
from day06_sailors_queries.src.report import console, print_frame, print_section_header, print_sql
from day06_sailors_queries.src.schema import QueryLabError
from day06_sailors_queries.src.utils.logging_config import setup_logging
from pydantic import ValidationError
from rich.panel import Panel


def _csv(value: str) -> list[str]:
    return [x.strip() for x in value.split(",") if x.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sailors/Boats/Reserves queries with composite keys and joins",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_queries.py
  python run_queries.py --queries q3 --techniques composite_key,reference
  python run_queries.py --q2-join-column sid --show-sql
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to queries.yaml (default: uses $QUERIES_CONFIG)",
    )
    parser.add_argument(
        "--source",
        type=str,
        choices=["literal", "synthetic"],
        help="Override dataset source",
    )
    parser.add_argument("--scale", type=int, help="Override number of synthetic sailors")
    parser.add_argument("--seed", type=int, help="Override random seed")
    parser.add_argument(
        "--techniques",
        type=_csv,
        help="Comma-separated techniques (composite_key, join, reference)",
    )
    parser.add_argument("--queries", type=_csv, help="Comma-separated queries (q1, q2, q3)")
    parser.add_argument("--bid", type=int, help="Boat id for Q1")
    parser.add_argument("--sname", type=str, help="Sailor name for Q2")
    parser.add_argument(
        "--q2-join-column",
        choices=["bid", "sid"],
        help="Reserves column matched against Boats.bid in Q2",
    )
    parser.add_argument(
        "--bag", action="store_true", help="Keep duplicate result rows (SQL without DISTINCT)"
    )
    parser.add_argument(
        "--no-validate", action="store_true", help="Skip the reference comparison"
    )
    parser.add_argument("--show-sql", action="store_true", help="Print the SQL of each query")
    parser.add_argument("--max-rows", type=int, default=20, help="Rows shown per result")

    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Return a re-validated copy of config with CLI overrides applied."""
    data = config.model_dump()

    if args.source:
        data["dataset"]["source"] = args.source
    if args.scale is not None:
        data["dataset"]["scale"] = args.scale
    if args.seed is not None:
        data["dataset"]["seed"] = args.seed
    if args.techniques:
        data["techniques"]["enabled"] = args.techniques
    if args.queries:
        data["queries"]["enabled"] = args.queries
    if args.bid is not None:
        data["queries"]["q1"]["bid"] = args.bid
    if args.sname is not None:
        data["queries"]["q2"]["sname"] = args.sname
    if args.q2_join_column:
        data["queries"]["q2"]["join_column"] = args.q2_join_column
    if args.bag:
        data["queries"]["distinct"] = False
    if args.no_validate:
        data["techniques"]["validate_results"] = False

    return Config(**data)


def print_results(summary: dict, config: Config, show_sql: bool, max_rows: int) -> None:
    params = QueryParams.from_config(config.queries)

    for query in config.queries.enabled:
        print_section_header(query.upper())
        if show_sql:
            print_sql(sql_text(query, params))

        for technique_name, outcomes in summary["results"].items():
            outcome = outcomes[query]
            status = {True: "✅", False: "❌", None: "·"}[outcome["matches_reference"]]
            print_frame(outcome["result"], title=f"{status} {technique_name}", max_rows=max_rows)
            if outcome["error"]:
                console.print(f"  [red]{outcome['error']}[/red]")


def main() -> int:
    args = build_parser().parse_args()

    setup_logging()

    try:
        config = apply_overrides(load_config(args.config), args)
    except (FileNotFoundError, ValidationError) as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        return 2

    console.print(
        Panel.fit(
            "[bold magenta]Sailors, Boats, Reserves[/bold magenta]\n"
            "[dim]SQL queries as composite keys and joins[/dim]",
            border_style="magenta",
        )
    )

    try:
        summary = run_queries_flow(config=config)
    except QueryLabError as e:
        console.print(f"[red]{e.__class__.__name__}:[/red] {e}")
        return 2

    print_results(summary, config, args.show_sql, args.max_rows)

    if not summary["all_match"]:
        console.print("\n[bold red]✗ Techniques disagree with the reference[/bold red]")
        return 1

    console.print("\n[bold green]✓ All queries complete[/bold green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
