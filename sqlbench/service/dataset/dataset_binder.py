import time
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Optional

from sqlbench.consts.TpchTables import TPCH_TABLES
from sqlbench.errors import DatasetMissing
from sqlbench.service.engine.engine import Engine
from sqlbench.util.log_config import setup_logger

logger = setup_logger(__name__)

DATA_FILE_EXTENSION = "parquet"


class DatasetBinder:
    """
    Registers the fixed table set with the engine.

    The first missing file aborts binding; no later table is registered.
    """

    def __init__(self, engine: Engine, data_path: Path, tables: Optional[List[str]] = None):
        self.engine = engine
        self.data_path = Path(data_path)
        self.tables = list(TPCH_TABLES if tables is None else tables)
        self.binding: Dict[str, Path] = OrderedDict()

    def table_path(self, table: str) -> Path:
        return self.data_path / f"{table}.{DATA_FILE_EXTENSION}"

    def bind(self) -> int:
        """
        Register every table and return the total registration time in milliseconds.

        Raises:
            DatasetMissing: on the first table whose file does not exist
            EngineExecutionError: if the engine rejects a registration
        """
        self.binding.clear()
        start = time.perf_counter()
        for table in self.tables:
            path = self.table_path(table)
            if not path.exists():
                logger.error(f"Path does not exist: {path}")
                raise DatasetMissing(table, path)
            self.engine.register_table(table, path)
            self.binding[table] = path
            logger.debug(f"Registered table {table} -> {path}")
        setup_time = int((time.perf_counter() - start) * 1000)
        logger.info(f"Setup time was {setup_time} ms")
        return setup_time
