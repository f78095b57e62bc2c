"""sqlbench: TPC-H style query benchmark harness for DuckDB."""

__version__ = "0.1.0"
