import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional


@dataclass
class BenchmarkConfig:
    query_path: Path
    data_path: Path
    output_path: Path
    concurrency: int
    iterations: int
    query: Optional[int] = None
    rev: Optional[str] = None
    debug: bool = False
    engine_settings: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_args(cls, args: argparse.Namespace, engine_settings: Optional[Dict[str, str]] = None) -> 'BenchmarkConfig':
        return cls(
            query_path=Path(args.query_path),
            data_path=Path(args.data_path),
            output_path=Path(args.output),
            concurrency=args.concurrency,
            iterations=args.iterations,
            query=args.query,
            rev=args.rev,
            debug=args.debug,
            engine_settings=dict(engine_settings or {}),
        )

    def __str__(self):
        return (f"BenchmarkConfig(\n"
                f"  query_path={self.query_path.resolve()},\n"
                f"  data_path={self.data_path.resolve()},\n"
                f"  output_path={self.output_path.resolve()},\n"
                f"  query={self.query if self.query is not None else 'all'},\n"
                f"  concurrency={self.concurrency},\n"
                f"  iterations={self.iterations},\n"
                f"  rev={self.rev},\n"
                f"  debug={self.debug},\n"
                f"  engine_settings={self.engine_settings}\n"
                f")")
