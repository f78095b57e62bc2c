from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import pyarrow as pa


@dataclass
class PlanNode:
    """
    One operator of a logical plan.

    `source` is the data file a scan reads, when the engine can tell which registered table it is.
    """
    name: str
    details: List[str] = field(default_factory=list)
    children: List['PlanNode'] = field(default_factory=list)
    source: Optional[str] = None

    def label(self) -> str:
        if not self.details:
            return self.name
        return f"{self.name}: {'; '.join(self.details)}"

    def walk(self, depth: int = 0) -> Iterator[tuple]:
        """Yield (depth, node) pairs in pre-order."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)


@dataclass
class LogicalPlan:
    """The engine's optimized logical plan for one statement."""
    root: PlanNode

    def display_indent(self) -> str:
        """Render one node per line, indented two spaces per level."""
        lines = [f"{'  ' * depth}{node.label()}" for depth, node in self.root.walk()]
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.display_indent()


@dataclass
class ResultHandle:
    """Pending result of a submitted statement, consumed by Engine.collect."""
    sql: str
    cursor: Any = None


class Engine(ABC):
    """
    Narrow interface over the SQL engine under test.

    Implementations must raise EngineExecutionError for any failure inside the engine.
    """

    @abstractmethod
    def register_table(self, name: str, path: Path) -> None:
        pass

    @abstractmethod
    def explain(self, sql: str) -> LogicalPlan:
        """Return the logical plan of `sql` without executing it."""
        pass

    @abstractmethod
    def submit(self, sql: str) -> ResultHandle:
        pass

    @abstractmethod
    def collect(self, handle: ResultHandle) -> List[pa.RecordBatch]:
        """Pull every output row of a submitted statement; only non-empty batches are returned."""
        pass

    @abstractmethod
    def effective_config(self) -> Dict[str, str]:
        pass

    @abstractmethod
    def engine_version(self) -> str:
        pass

    def close(self) -> None:
        pass

    def __enter__(self) -> 'Engine':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
