"""Error kinds raised by the benchmark harness."""
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlbench.models.query_outcome import QueryOutcome


class BenchmarkError(Exception):
    """Base class for every error the harness raises on purpose."""

    kind = "BenchmarkError"


class DatasetMissing(BenchmarkError):
    """A required table file does not exist. Fatal to the whole run."""

    kind = "DatasetMissing"

    def __init__(self, table_name: str, path: Path):
        self.table_name = table_name
        self.path = Path(path)
        super().__init__(f"Path does not exist: {self.path} (table '{table_name}')")


class QueryFileMissing(BenchmarkError):
    kind = "QueryFileMissing"

    def __init__(self, query_number: int, path: Path, reason: str = "file not found"):
        self.query_number = query_number
        self.path = Path(path)
        super().__init__(f"Query {query_number}: cannot load {self.path}: {reason}")


class EngineExecutionError(BenchmarkError):
    """A statement failed inside the engine."""

    kind = "EngineExecutionError"

    def __init__(self, sql: str, message: str):
        self.sql = sql
        self.message = message
        super().__init__(message)


class ArtifactWriteError(BenchmarkError):
    """A plan, csv or report file could not be persisted."""

    kind = "ArtifactWriteError"

    def __init__(self, path: Path, message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"Failed to write {self.path}: {message}")


class SingleQueryFailed(BenchmarkError):
    """An explicitly requested query failed; carries the recorded outcome."""

    kind = "SingleQueryFailed"

    def __init__(self, outcome: "QueryOutcome"):
        self.outcome = outcome
        super().__init__(f"Query {outcome.query_number} failed: {outcome.message}")
