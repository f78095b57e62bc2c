"""Shared fixtures for the sqlbench test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import duckdb
import pyarrow as pa
import pytest

from sqlbench.config.benchmark_config import BenchmarkConfig
from sqlbench.consts.TpchTables import TPCH_TABLES
from sqlbench.errors import EngineExecutionError
from sqlbench.service.engine.engine import Engine, LogicalPlan, PlanNode, ResultHandle

TABLE_ROWS = {
    "customer": "SELECT * FROM (VALUES (1, 'Customer#1', 1), (2, 'Customer#2', 2)) t(c_custkey, c_name, c_nationkey)",
    "lineitem": "SELECT * FROM (VALUES (1, 1, 17.0, 'N'), (1, 2, 36.0, 'R'), (2, 1, 8.0, 'N')) "
                "t(l_orderkey, l_linenumber, l_quantity, l_returnflag)",
    "nation": "SELECT * FROM (VALUES (1, 'FRANCE', 1), (2, 'GERMANY', 1)) t(n_nationkey, n_name, n_regionkey)",
    "orders": "SELECT * FROM (VALUES (1, 1, 100.5), (2, 2, 20.25)) t(o_orderkey, o_custkey, o_totalprice)",
    "part": "SELECT * FROM (VALUES (1, 'bolt'), (2, 'nut')) t(p_partkey, p_name)",
    "partsupp": "SELECT * FROM (VALUES (1, 1, 10), (2, 1, 5)) t(ps_partkey, ps_suppkey, ps_availqty)",
    "region": "SELECT * FROM (VALUES (1, 'EUROPE')) t(r_regionkey, r_name)",
    "supplier": "SELECT * FROM (VALUES (1, 'Supplier#1', 1)) t(s_suppkey, s_name, s_nationkey)",
}


def write_dataset(data_path: Path, tables: Optional[List[str]] = None) -> Path:
    """Write tiny parquet files for the given tables (all TPC-H tables by default)."""
    data_path.mkdir(parents=True, exist_ok=True)
    con = duckdb.connect()
    try:
        for table in tables if tables is not None else TPCH_TABLES:
            target = str(data_path / f"{table}.parquet").replace("'", "''")
            con.execute(f"COPY ({TABLE_ROWS[table]}) TO '{target}' (FORMAT PARQUET)")
    finally:
        con.close()
    return data_path


def write_queries(query_path: Path, queries: Dict[int, str]) -> Path:
    query_path.mkdir(parents=True, exist_ok=True)
    for number, sql in queries.items():
        (query_path / f"q{number}.sql").write_text(sql, encoding="utf-8")
    return query_path


class FakeClock:
    """Monotonic clock advanced explicitly by the fake engine."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingEngine(Engine):
    """
    In-memory Engine double.

    Statements containing FAIL, and every submission after
    `fail_after_submissions`, raise EngineExecutionError. Statements
    containing EMPTY return no rows. Every call is recorded in `calls`.
    """

    def __init__(self, clock: Optional[FakeClock] = None, statement_seconds: float = 0.25,
                 fail_after_submissions: Optional[int] = None) -> None:
        self.clock = clock
        self.statement_seconds = statement_seconds
        self.fail_after_submissions = fail_after_submissions
        self.calls: List[tuple] = []
        self.registered: List[str] = []
        self.submissions = 0

    def register_table(self, name, path):
        self.calls.append(("register_table", name))
        self.registered.append(name)

    def explain(self, sql):
        self.calls.append(("explain", sql))
        scan = PlanNode(name="SEQ_SCAN", details=["Table: lineitem"])
        return LogicalPlan(root=PlanNode(name="PROJECTION", details=[f"sql: {sql}"], children=[scan]))

    def submit(self, sql):
        self.calls.append(("submit", sql))
        self.submissions += 1
        limit = self.fail_after_submissions
        if "FAIL" in sql or (limit is not None and self.submissions > limit):
            raise EngineExecutionError(sql, "Binder Error: table FAIL does not exist")
        if self.clock is not None:
            self.clock.advance(self.statement_seconds)
        return ResultHandle(sql=sql)

    def collect(self, handle):
        self.calls.append(("collect", handle.sql))
        if "EMPTY" in handle.sql:
            return []
        return [
            pa.RecordBatch.from_pydict({"sql": [handle.sql], "n": [1]}),
            pa.RecordBatch.from_pydict({"sql": ["second batch"], "n": [2]}),
        ]

    def effective_config(self):
        return {"threads": "2", "memory_limit": "1GB"}

    def engine_version(self):
        return "0.0-test"


@pytest.fixture
def dataset(tmp_path: Path) -> Path:
    return write_dataset(tmp_path / "data")


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def recording_engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def make_config(tmp_path: Path):
    def _make(query_path: Path, data_path: Path, output_path: Path, **overrides) -> BenchmarkConfig:
        values = dict(
            query_path=query_path,
            data_path=data_path,
            output_path=output_path,
            concurrency=2,
            iterations=1,
        )
        values.update(overrides)
        return BenchmarkConfig(**values)

    return _make
