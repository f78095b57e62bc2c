"""Benchmark result data models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import json


@dataclass
class QueryResult:
    """Iteration durations (ms) for one completed query, one entry per iteration."""
    query_number: int
    durations: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"query_number": self.query_number, "durations": list(self.durations)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'QueryResult':
        return cls(query_number=int(data["query_number"]), durations=[int(d) for d in data["durations"]])


@dataclass
class QueryFailure:
    """
    A query that raised before all iterations completed.

    `durations` holds the totals of the iterations that finished before the error.
    """
    query_number: int
    error_kind: str
    message: str
    durations: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query_number": self.query_number,
            "error_kind": self.error_kind,
            "message": self.message,
            "durations": list(self.durations),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'QueryFailure':
        return cls(
            query_number=int(data["query_number"]),
            error_kind=data["error_kind"],
            message=data["message"],
            durations=[int(d) for d in data.get("durations", [])],
        )


@dataclass
class BenchmarkRun:
    """
    Top-level record of one benchmark invocation.

    This is the structure that gets serialized to the results-<system_time>.json report.
    """
    system_time: int
    engine_version: str
    engine_revision: Optional[str] = None
    config: Dict[str, str] = field(default_factory=dict)
    command_line_args: List[str] = field(default_factory=list)
    register_tables_time: int = 0
    query_times: List[QueryResult] = field(default_factory=list)
    failures: List[QueryFailure] = field(default_factory=list)

    def durations_for(self, query_number: int) -> Optional[List[int]]:
        """Return the recorded durations of a completed query, or None."""
        for result in self.query_times:
            if result.query_number == query_number:
                return result.durations
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "system_time": self.system_time,
            "engine_version": self.engine_version,
            "engine_revision": self.engine_revision,
            "config": dict(self.config),
            "command_line_args": list(self.command_line_args),
            "register_tables_time": self.register_tables_time,
            "query_times": [r.to_dict() for r in self.query_times],
            "failures": [f.to_dict() for f in self.failures],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BenchmarkRun':
        """Create BenchmarkRun from dictionary."""
        return cls(
            system_time=int(data["system_time"]),
            engine_version=data["engine_version"],
            engine_revision=data.get("engine_revision"),
            config=dict(data.get("config", {})),
            command_line_args=list(data.get("command_line_args", [])),
            register_tables_time=int(data.get("register_tables_time", 0)),
            query_times=[QueryResult.from_dict(r) for r in data.get("query_times", [])],
            failures=[QueryFailure.from_dict(f) for f in data.get("failures", [])],
        )

    @classmethod
    def load_from_file(cls, file_path: str) -> 'BenchmarkRun':
        """Load a benchmark run from a JSON report file."""
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)
