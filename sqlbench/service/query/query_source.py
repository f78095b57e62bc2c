from pathlib import Path

from sqlbench.errors import QueryFileMissing
from sqlbench.models.statement_batch import StatementBatch
from sqlbench.util.file_utils import load_query_from_file
from sqlbench.util.log_config import setup_logger

logger = setup_logger(__name__)


class QuerySource:
    """Loads q<N>.sql files from a query directory."""

    def __init__(self, query_path: Path):
        self.query_path = Path(query_path)

    def query_file(self, query_number: int) -> Path:
        return self.query_path / f"q{query_number}.sql"

    def load(self, query_number: int) -> StatementBatch:
        filename = self.query_file(query_number)
        logger.info(f"Executing query {query_number} from {filename}")
        try:
            sql = load_query_from_file(filename)
        except (OSError, UnicodeDecodeError) as e:
            raise QueryFileMissing(query_number, filename, str(e)) from e
        batch = StatementBatch.from_text(sql)
        if not batch:
            raise QueryFileMissing(query_number, filename, "no statements")
        logger.debug(f"Query {query_number}: {len(batch)} statement(s)")
        return batch
