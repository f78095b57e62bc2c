import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import duckdb
import pyarrow as pa

from sqlbench.errors import EngineExecutionError
from sqlbench.service.engine.engine import Engine, LogicalPlan, PlanNode, ResultHandle
from sqlbench.util.log_config import setup_logger

logger = setup_logger(__name__)

# Rows per collected record batch; the csv sample is the first of these.
RECORD_BATCH_SIZE = 8192

LOGICAL_PLAN_KEYS = ("logical_opt", "logical_plan")


class DuckdbEngine(Engine):

    def __init__(self, threads: int, settings: Optional[Mapping[str, str]] = None, database: str = ":memory:"):
        config: Dict[str, Any] = dict(settings or {})
        config["threads"] = int(threads)
        self.tables: Dict[str, Path] = {}
        logger.debug(f"Connecting to DuckDB {duckdb.__version__} ({database}) with config {config}")
        try:
            self.connection = duckdb.connect(database=database, config=config)
            self.connection.execute("SET explain_output = 'optimized_only'")
        except duckdb.Error as e:
            raise EngineExecutionError("<connect>", f"Failed to open DuckDB connection: {e}") from e

    def register_table(self, name: str, path: Path) -> None:
        # a table rather than a view, so plan scans name it
        escaped = str(path).replace("'", "''")
        sql = f"CREATE OR REPLACE TABLE \"{name}\" AS SELECT * FROM read_parquet('{escaped}')"
        self._execute(sql)
        self.tables[name] = Path(path)

    def explain(self, sql: str) -> LogicalPlan:
        rows = self._execute(f"EXPLAIN (FORMAT JSON) {sql}", original_sql=sql).fetchall()
        if not rows:
            raise EngineExecutionError(sql, "EXPLAIN returned no plan")
        plans = {row[0]: row[1] for row in rows}
        raw = next((plans[key] for key in LOGICAL_PLAN_KEYS if key in plans), rows[0][1])
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise EngineExecutionError(sql, f"Unreadable EXPLAIN output: {e}") from e
        root = parse_plan_json(data)
        for _, node in root.walk():
            table = scanned_table(node, self.tables)
            if table is not None:
                node.source = self.tables[table].name
        return LogicalPlan(root=root)

    def submit(self, sql: str) -> ResultHandle:
        return ResultHandle(sql=sql, cursor=self._execute(sql))

    def collect(self, handle: ResultHandle) -> List[pa.RecordBatch]:
        cursor = handle.cursor
        # statements without a result set (DDL) have nothing to fetch
        if cursor is None or cursor.description is None:
            return []
        # fetch_record_batch is deprecated in favour of to_arrow_reader on newer releases
        reader_for = getattr(cursor, "to_arrow_reader", None) or cursor.fetch_record_batch
        try:
            reader = reader_for(RECORD_BATCH_SIZE)
            return [batch for batch in reader if batch.num_rows > 0]
        except duckdb.Error as e:
            raise EngineExecutionError(handle.sql, str(e)) from e

    def effective_config(self) -> Dict[str, str]:
        rows = self._execute("SELECT name, value FROM duckdb_settings() ORDER BY name").fetchall()
        return {name: "" if value is None else str(value) for name, value in rows}

    def engine_version(self) -> str:
        return duckdb.__version__

    def close(self) -> None:
        self.connection.close()

    def _execute(self, sql: str, original_sql: Optional[str] = None):
        try:
            return self.connection.execute(sql)
        except duckdb.Error as e:
            raise EngineExecutionError(original_sql or sql, str(e)) from e


def _format_extra_info(extra_info: Any) -> List[str]:
    if not extra_info:
        return []
    if isinstance(extra_info, dict):
        details = []
        for key, value in extra_info.items():
            if isinstance(value, list):
                value = ", ".join(str(v).strip() for v in value if str(v).strip())
            value = str(value).strip()
            if value:
                details.append(f"{key}: {value}")
        return details
    # older releases render extra_info as one string with [INFOSEPARATOR] lines
    lines = [line.strip() for line in str(extra_info).splitlines()]
    return [line for line in lines if line and line != "[INFOSEPARATOR]"]


def _parse_node(data: Dict[str, Any]) -> PlanNode:
    return PlanNode(
        name=str(data.get("name", "UNKNOWN")).strip(),
        details=_format_extra_info(data.get("extra_info")),
        children=[_parse_node(child) for child in data.get("children", [])],
    )


def scanned_table(node: PlanNode, tables: Mapping[str, Path]) -> Optional[str]:
    """Return the registered table a scan node reads, or None for any other node."""
    if "SCAN" not in node.name.upper():
        return None
    for detail in node.details:
        # "Table: lineitem" on json extra_info, a bare "lineitem" line on older releases
        candidate = detail.split(": ", 1)[-1].strip().strip('"')
        if candidate in tables:
            return candidate
    return None


def parse_plan_json(data: Any) -> PlanNode:
    """Build a PlanNode tree from DuckDB's JSON EXPLAIN output (a node or a list of roots)."""
    if isinstance(data, dict):
        return _parse_node(data)
    roots = [_parse_node(node) for node in data]
    if len(roots) == 1:
        return roots[0]
    return PlanNode(name="PLAN", children=roots)
