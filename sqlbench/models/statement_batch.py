from dataclasses import dataclass
from typing import Iterator, Tuple

from sqlbench.consts.TpchTables import STATEMENT_SEPARATOR


@dataclass(frozen=True)
class StatementBatch:
    """Ordered, non-empty SQL statements loaded from one query file."""

    statements: Tuple[str, ...]

    @classmethod
    def from_text(cls, sql: str, separator: str = STATEMENT_SEPARATOR) -> 'StatementBatch':
        """Split on the separator, strip each fragment and drop the empty ones."""
        fragments = (fragment.strip() for fragment in sql.split(separator))
        return cls(tuple(fragment for fragment in fragments if fragment))

    @property
    def is_multipart(self) -> bool:
        return len(self.statements) > 1

    def part_suffix(self, index: int) -> str:
        """Artifact suffix for the statement at `index` (0-based): '' or '_part_<index+1>'."""
        return f"_part_{index + 1}" if self.is_multipart else ""

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self) -> Iterator[str]:
        return iter(self.statements)
