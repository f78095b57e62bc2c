import sys
import time
from typing import List, Mapping, Optional

from sqlbench.consts.QueryStatus import QueryStatus
from sqlbench.models.benchmark_result import BenchmarkRun, QueryFailure, QueryResult
from sqlbench.models.query_outcome import QueryOutcome
from sqlbench.service.engine.engine import Engine


class ResultAggregator:
    """Owns the BenchmarkRun record for one invocation. Records are only ever appended."""

    def __init__(self, engine: Engine, revision: Optional[str] = None, argv: Optional[List[str]] = None):
        self.run = BenchmarkRun(
            system_time=int(time.time() * 1000),
            engine_version=engine.engine_version(),
            engine_revision=revision,
            command_line_args=list(sys.argv if argv is None else argv),
        )

    def record_config(self, options: Mapping[str, object]) -> None:
        """Store a snapshot of the engine configuration; later changes to `options` are not seen."""
        self.run.config = {str(k): str(v) for k, v in options.items()}

    def record_table_binding(self, duration_ms: int) -> None:
        self.run.register_tables_time = int(duration_ms)

    def record_query_result(self, query_number: int, durations: List[int]) -> None:
        self.run.query_times.append(QueryResult(query_number, list(durations)))

    def record_query_failure(self, query_number: int, error_kind: str, message: str,
                             durations: List[int]) -> None:
        self.run.failures.append(QueryFailure(query_number, error_kind, message, list(durations)))

    def record_outcome(self, outcome: QueryOutcome) -> None:
        if outcome.status == QueryStatus.OK:
            self.record_query_result(outcome.query_number, outcome.durations)
        else:
            self.record_query_failure(outcome.query_number, outcome.error_kind or "",
                                      outcome.message or "", outcome.durations)
