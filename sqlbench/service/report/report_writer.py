from pathlib import Path

from sqlbench.models.benchmark_result import BenchmarkRun
from sqlbench.util.file_utils import atomic_write_text
from sqlbench.util.log_config import setup_logger

logger = setup_logger(__name__)

REPORT_EXTENSION = "json"


class ReportWriter:
    """Writes the run record to <output>/results-<system_time>.json, all or nothing."""

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)

    def report_path(self, run: BenchmarkRun) -> Path:
        return self.output_path / f"results-{run.system_time}.{REPORT_EXTENSION}"

    def write(self, run: BenchmarkRun) -> Path:
        path = atomic_write_text(self.report_path(run), run.to_json())
        logger.info(f"✓ Results exported to: {path.resolve()}")
        return path
