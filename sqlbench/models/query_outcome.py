from dataclasses import dataclass, field
from typing import List, Optional

from sqlbench.consts.QueryStatus import QueryStatus


@dataclass
class QueryOutcome:
    """Tagged per-query result collected by the driver instead of raising."""
    query_number: int
    status: QueryStatus
    durations: List[int] = field(default_factory=list)
    error_kind: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == QueryStatus.OK

    @classmethod
    def succeeded(cls, query_number: int, durations: List[int]) -> 'QueryOutcome':
        return cls(query_number=query_number, status=QueryStatus.OK, durations=list(durations))

    @classmethod
    def failed(cls, query_number: int, error: Exception, durations: List[int]) -> 'QueryOutcome':
        return cls(
            query_number=query_number,
            status=QueryStatus.FAILED,
            durations=list(durations),
            error_kind=getattr(error, "kind", type(error).__name__),
            message=str(error),
        )
