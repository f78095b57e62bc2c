#!/usr/bin/env python3
"""
Benchmark entry point.

Binds the TPC-H dataset, runs one query or the whole suite against DuckDB and
writes the results report. Exit status is non-zero only for fatal failures.
"""
from typing import List, Optional
import sys

import yaml

from sqlbench.cli.benchmark_cli import parse_benchmark_args
from sqlbench.config.benchmark_config import BenchmarkConfig
from sqlbench.config.config_loader import ConfigLoader
from sqlbench.errors import BenchmarkError
from sqlbench.service.driver.driver import Driver
from sqlbench.service.engine.duckdb_engine import DuckdbEngine
from sqlbench.util.log_config import setup_logger

logger = setup_logger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_benchmark_args(argv)
    command_line = [sys.argv[0]] + list(argv) if argv is not None else list(sys.argv)

    try:
        engine_settings = ConfigLoader().engine_settings()
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load engine settings: {e}")
        return 1

    config = BenchmarkConfig.from_args(args, engine_settings)
    logger.debug(str(config))

    try:
        with DuckdbEngine(threads=config.concurrency, settings=config.engine_settings) as engine:
            Driver(engine, config, argv=command_line).run()
    except BenchmarkError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
