"""Models for benchmark data structures."""

from .benchmark_result import BenchmarkRun, QueryFailure, QueryResult
from .query_outcome import QueryOutcome
from .statement_batch import StatementBatch

__all__ = ["BenchmarkRun", "QueryFailure", "QueryResult", "QueryOutcome", "StatementBatch"]
