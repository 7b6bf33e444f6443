"""
DAG ledger CLI

Usage modes:
- Default run: load the database, analyze it, print the three averages
- JSON: print or write the statistics with analysis counters
- Export: write GraphML for external tools
- Utility: show version
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import os
import sys
from typing import Any, Dict, List

from . import __version__
from .config import AnalysisConfig, load_config
from .engine import Analyzer
from .enums import UnreachablePolicy
from .errors import LedgerError
from .graph import AnnotatedGraph
from .loader import load_vertices_from_file
from .metrics import summarize

DEFAULT_DATABASE = "database.txt"


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative: {value}")
    return number


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="dag-ledger",
        description="Compute depth and reference statistics of a DAG ledger database",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Utilities / meta
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")

    # Primary input
    p.add_argument(
        "database_file_path",
        nargs="?",
        default=os.environ.get("DATABASE_FILE_PATH", DEFAULT_DATABASE),
        help="The path to the file with the database (env: DATABASE_FILE_PATH)",
    )

    # Analysis config overrides
    p.add_argument("--config", type=str, default="", help="Optional YAML config file")
    p.add_argument("--allow-cycles", action="store_true", help="Do not reject graphs with cycles")
    p.add_argument(
        "--unreachable",
        choices=[policy.value for policy in UnreachablePolicy],
        default=None,
        help="Treatment of vertices unreachable from the root",
    )
    p.add_argument("--precision", type=non_negative_int, default=None, help="Decimal places in the text report")

    # Output / export
    p.add_argument("--json", action="store_true", help="Print statistics as JSON")
    p.add_argument("--out", type=str, default="", help="Optional output JSON file path")
    p.add_argument("--export-graphml", type=str, default="", help="Export the analyzed graph to GraphML at given path")

    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> AnalysisConfig:
    cfg = load_config(args.config) if args.config else AnalysisConfig()
    if args.allow_cycles:
        cfg.reject_cycles = False
    if args.unreachable is not None:
        cfg.unreachable_policy = UnreachablePolicy(args.unreachable)
    if args.precision is not None:
        cfg.precision = args.precision
    return cfg


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def format_report(stats: Dict[str, float], precision: int) -> str:
    return "\n".join(
        [
            f"AVG DAG DEPTH: {stats['avg_depth_per_vertex']:.{precision}f}",
            f"AVG NODES PER DEPTH:  {stats['avg_vertices_per_depth']:.{precision}f}",
            f"AVG REF:  {stats['avg_inbound_refs_per_vertex']:.{precision}f}",
        ]
    )


def run(args: argparse.Namespace) -> int:
    cfg = build_config(args)

    vertices = load_vertices_from_file(args.database_file_path)
    graph = AnnotatedGraph.build(vertices)
    analyzer = Analyzer(graph, config=cfg)
    analyzer.run()
    logging.info(
        "Analyzed %d vertices (%d reachable, %d inbound references)",
        len(graph),
        analyzer.stats["reachable"],
        graph.edge_count(),
    )

    if args.export_graphml:
        logging.info("Exporting GraphML to %s", args.export_graphml)
        graph.export_graphml(args.export_graphml)

    stats = summarize(graph, cfg)
    if args.json or args.out:
        summary: Dict[str, Any] = {
            "vertices": len(graph),
            "edges": graph.edge_count(),
            # NaN is not valid JSON
            "statistics": {k: None if math.isnan(v) else v for k, v in stats.items()},
            "analysis": analyzer.stats,
        }
        if args.out:
            with open(args.out, "w", encoding="utf-8") as f:
                json.dump(summary, f, indent=2, allow_nan=False)
        else:
            print(json.dumps(summary, indent=2, allow_nan=False))
        return 0

    print(format_report(stats, cfg.precision))
    return 0


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.version:
        print(__version__)
        return 0

    try:
        return run(args)
    except (LedgerError, OSError, ValueError) as e:
        logging.debug("Analysis failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
