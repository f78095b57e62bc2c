from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from sqlbench.config.benchmark_config import BenchmarkConfig
from sqlbench.consts.DriverState import DriverState
from sqlbench.consts.TpchTables import QUERY_NUMBERS
from sqlbench.errors import (
    ArtifactWriteError,
    BenchmarkError,
    EngineExecutionError,
    QueryFileMissing,
    SingleQueryFailed,
)
from sqlbench.models.benchmark_result import BenchmarkRun
from sqlbench.models.query_outcome import QueryOutcome
from sqlbench.service.aggregator.result_aggregator import ResultAggregator
from sqlbench.service.dataset.dataset_binder import DatasetBinder
from sqlbench.service.engine.engine import Engine
from sqlbench.service.query.query_source import QuerySource
from sqlbench.service.report.report_writer import ReportWriter
from sqlbench.service.runner.query_runner import QueryRunner
from sqlbench.util.cal_utils import calculate_stat_summary
from sqlbench.util.file_utils import ensure_dir
from sqlbench.util.log_config import setup_logger

logger = setup_logger(__name__)

# Failures that are fatal only to the query they happen in.
QUERY_ERRORS = (QueryFileMissing, EngineExecutionError, ArtifactWriteError)


@dataclass
class DriverResult:
    report_path: Path
    run: BenchmarkRun
    outcomes: List[QueryOutcome] = field(default_factory=list)

    @property
    def failed(self) -> List[QueryOutcome]:
        return [o for o in self.outcomes if not o.ok]


class Driver:
    """
    Top-level control of one benchmark invocation.

    INITIALIZING -> DATASET_BOUND -> RUNNING -> COMPLETED, or FAILED on a fatal error.

    Dataset binding is a hard prerequisite: any binding error propagates and no
    report is written. Once the dataset is bound the report is always written,
    including when an explicitly requested single query fails; in that case
    SingleQueryFailed is raised after the write.
    """

    def __init__(self, engine: Engine, config: BenchmarkConfig, argv: Optional[List[str]] = None):
        self.engine = engine
        self.config = config
        self.state = DriverState.INITIALIZING
        self.current_query: Optional[int] = None
        self.outcomes: List[QueryOutcome] = []
        self.aggregator = ResultAggregator(engine, revision=config.rev, argv=argv)
        self.query_source = QuerySource(config.query_path)
        self.report_writer = ReportWriter(config.output_path)

    def query_numbers(self) -> List[int]:
        if self.config.query is not None:
            return [self.config.query]
        return list(QUERY_NUMBERS)

    def run(self) -> DriverResult:
        try:
            self._bind_dataset()
        except BenchmarkError:
            self.state = DriverState.FAILED
            raise

        self.state = DriverState.RUNNING
        for query_number in self.query_numbers():
            self.current_query = query_number
            outcome = self._attempt(query_number)
            self.aggregator.record_outcome(outcome)
            self.outcomes.append(outcome)
        self.current_query = None

        try:
            report_path = self.report_writer.write(self.aggregator.run)
        except BenchmarkError:
            self.state = DriverState.FAILED
            raise
        self._log_summary()

        if self.config.query is not None and not self.outcomes[0].ok:
            self.state = DriverState.FAILED
            raise SingleQueryFailed(self.outcomes[0])

        self.state = DriverState.COMPLETED
        return DriverResult(report_path=report_path, run=self.aggregator.run, outcomes=list(self.outcomes))

    def _bind_dataset(self) -> None:
        ensure_dir(self.config.output_path)
        self.aggregator.record_config(self.engine.effective_config())
        binder = DatasetBinder(self.engine, self.config.data_path)
        self.aggregator.record_table_binding(binder.bind())
        self.state = DriverState.DATASET_BOUND

    def _attempt(self, query_number: int) -> QueryOutcome:
        runner = None
        try:
            batch = self.query_source.load(query_number)
            runner = QueryRunner(
                self.engine,
                batch,
                query_number,
                self.config.iterations,
                self.config.output_path,
                debug=self.config.debug,
            )
            return QueryOutcome.succeeded(query_number, runner.run())
        except QUERY_ERRORS as e:
            logger.error(f"Fail: query {query_number}: {e}")
            partial = runner.durations if runner is not None else []
            return QueryOutcome.failed(query_number, e, partial)

    def _log_summary(self) -> None:
        rows = []
        for outcome in self.outcomes:
            if outcome.ok:
                s = calculate_stat_summary(outcome.durations)
                rows.append([outcome.query_number, "ok", s.min, f"{s.avg:.1f}", s.max])
            else:
                rows.append([outcome.query_number, outcome.error_kind, "-", "-", "-"])
        table = tabulate(rows, headers=["query", "status", "min ms", "avg ms", "max ms"], tablefmt="github")
        logger.info("Summary:\n" + table)
        failed = sum(1 for o in self.outcomes if not o.ok)
        logger.info(f"{len(self.outcomes) - failed}/{len(self.outcomes)} queries completed")
