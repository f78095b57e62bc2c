import time
from pathlib import Path
from typing import List

import pyarrow as pa

from sqlbench.errors import ArtifactWriteError
from sqlbench.models.statement_batch import StatementBatch
from sqlbench.service.engine.engine import Engine, LogicalPlan
from sqlbench.service.plan_export.qpml import QPML_EXTENSION, write_qpml
from sqlbench.util.cal_utils import calculate_stat_summary
from sqlbench.util.file_utils import write_text_artifact
from sqlbench.util.log_config import setup_logger

logger = setup_logger(__name__)


class QueryRunner:
    """
    Runs one query's statement batch for a number of iterations.

    Each statement's submit-and-collect round trip is timed; the iteration
    duration is the sum over the batch. Plans and a result sample are captured
    on the first iteration only, outside the timed region.

    `durations` is filled as iterations complete, so the caller can still read
    the partial data when `run` raises.
    """

    def __init__(self, engine: Engine, batch: StatementBatch, query_number: int,
                 iterations: int, output_path: Path, debug: bool = False):
        self.engine = engine
        self.batch = batch
        self.query_number = query_number
        self.iterations = iterations
        self.output_path = Path(output_path)
        self.debug = debug
        self.durations: List[int] = []

    def run(self) -> List[int]:
        for iteration in range(self.iterations):
            # duration for executing all statements in the file
            total_duration_millis = 0
            for i, sql in enumerate(self.batch):
                total_duration_millis += self._run_statement(iteration, i, sql)
            self.durations.append(total_duration_millis)

        summary = calculate_stat_summary(self.durations)
        logger.info(f"Query {self.query_number}: {len(self.durations)} iteration(s), "
                    f"min={summary.min} ms, avg={summary.avg:.1f} ms, max={summary.max} ms")
        return self.durations

    def _run_statement(self, iteration: int, index: int, sql: str) -> int:
        if self.debug:
            # echoed regardless of the log level
            print(f"Query {self.query_number}: {sql}", flush=True)

        file_suffix = self.batch.part_suffix(index)
        capture = iteration == 0

        plan = self.engine.explain(sql) if capture else None

        start = time.perf_counter()
        handle = self.engine.submit(sql)
        batches = self.engine.collect(handle)
        duration_millis = int((time.perf_counter() - start) * 1000)

        logger.info(f"Query {self.query_number}{file_suffix} executed in: {duration_millis} ms")

        if capture:
            self._write_artifacts(file_suffix, plan, batches)
        return duration_millis

    def artifact_stem(self, file_suffix: str) -> str:
        return f"q{self.query_number}{file_suffix}"

    def _write_artifacts(self, file_suffix: str, plan: LogicalPlan, batches: List[pa.RecordBatch]) -> None:
        stem = self.artifact_stem(file_suffix)

        write_text_artifact(self.output_path / f"{stem}_logical_plan.txt", plan.display_indent())
        write_qpml(plan, self.output_path / f"{stem}_logical_plan.{QPML_EXTENSION}")

        if not batches:
            logger.info("Empty result set returned")
            return

        csv_path = self.output_path / f"{stem}.csv"
        try:
            df = pa.Table.from_batches([batches[0]]).to_pandas()
            df.to_csv(csv_path, index=False)
        except (OSError, pa.ArrowException) as e:
            raise ArtifactWriteError(csv_path, str(e)) from e
