import os
import tempfile
from pathlib import Path
from typing import Union

from sqlbench.errors import ArtifactWriteError


def load_query_from_file(
    file_path: Union[str, os.PathLike],
    *,
    encoding: str = "utf-8",
) -> str:
    """
    Load text content from a file.

    Raises:
        ValueError: If file_path is empty/whitespace.
        FileNotFoundError: If the file doesn't exist.
        IsADirectoryError: If the path is a directory.
        OSError: For other I/O errors (e.g., permission denied).
    """
    if not file_path or (isinstance(file_path, str) and not file_path.strip()):
        raise ValueError("File path cannot be empty or None")

    p = Path(file_path).expanduser()

    if not p.exists():
        raise FileNotFoundError(f"File not found: {p}")
    if p.is_dir():
        raise IsADirectoryError(f"Path is a directory, not a file: {p}")

    return p.read_text(encoding=encoding)


def ensure_dir(path: Union[str, os.PathLike]) -> Path:
    """Create the directory (and parents) if needed and return it as a Path."""
    p = Path(path)
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ArtifactWriteError(p, str(e)) from e
    return p


def write_text_artifact(path: Path, content: str) -> Path:
    """Write a per-query artifact, reporting I/O failures as ArtifactWriteError."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise ArtifactWriteError(path, str(e)) from e
    return path


def atomic_write_text(path: Path, content: str) -> Path:
    """
    Write `content` to `path` so that readers see either the old file or the complete new one.

    The text goes to a temporary file in the same directory, which is flushed,
    fsynced and then moved over the target with os.replace.
    """
    path = Path(path)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ArtifactWriteError(path, str(e)) from e
    return path
