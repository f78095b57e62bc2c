# sqlbench/cli/benchmark_cli.py
import argparse
from typing import List, Optional

from sqlbench.consts.TpchTables import QUERY_NUMBERS


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def build_benchmark_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="sqlbench",
                                 description="TPC-H query benchmark for DuckDB: timings, logical plans and result samples")
    ap.add_argument("--debug", action="store_true",
                    help="Echo each statement before it is executed")
    ap.add_argument("--query-path", type=str, required=True,
                    help="Directory containing q<N>.sql query files")
    ap.add_argument("--data-path", type=str, required=True,
                    help="Directory containing <table>.parquet files")
    ap.add_argument("--output", type=str, required=True,
                    help="Directory for plans, result samples and the results report")
    ap.add_argument("--query", type=int, choices=list(QUERY_NUMBERS), metavar="N",
                    help=f"Query number ({QUERY_NUMBERS.start}-{QUERY_NUMBERS.stop - 1}). "
                         "If omitted, all queries are executed.")
    ap.add_argument("--concurrency", type=_positive_int, required=True,
                    help="Engine parallelism (DuckDB threads)")
    ap.add_argument("--iterations", type=_positive_int, required=True,
                    help="Number of times to run each query")
    ap.add_argument("--rev", type=str, default=None,
                    help="Optional revision (e.g. git SHA) recorded in the results file")
    return ap


def parse_benchmark_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_benchmark_parser().parse_args(argv)
