"""Directive extraction from query source files.

Walks a directory for ``.sql`` files and pulls out the comment blocks that
carry generator directives, e.g.::

    --! selectOne GetUser
    --! $1: id int64
    SELECT * FROM users WHERE id = $1;
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .codegen.core.errors import SourceError
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_MARKER = "--!"


@dataclass(frozen=True)
class DirectiveBlock:
    """Raw directive lines found in one source file."""

    source: str
    key: str
    line_number: int
    lines: tuple[str, ...]


def query_key(path: str | Path, root: str | Path) -> str:
    """Lookup key of a query file: its POSIX path relative to the root.

    Args:
        path: Path of the query file.
        root: Directory the walk started from.

    Raises:
        SourceError: If the file is not under the root.
    """
    try:
        return Path(path).relative_to(Path(root)).as_posix()
    except ValueError as e:
        raise SourceError(f"{path} is not inside {root}") from e


def scan_lines(
    lines: Iterable[str], marker: str = DEFAULT_MARKER
) -> Iterator[tuple[int, list[str]]]:
    """Group consecutive directive lines.

    Args:
        lines: Lines of one file.
        marker: Comment prefix that introduces a directive line.

    Yields:
        Tuples of (1-based line number of the first line, directive lines with
        the marker stripped).
    """
    block: list[str] = []
    start = 0

    for number, raw in enumerate(lines, start=1):
        stripped = raw.strip()
        if stripped.startswith(marker):
            if not block:
                start = number
            block.append(stripped[len(marker):].strip())
        elif block:
            yield start, block
            block = []

    if block:
        yield start, block


def extract_file(
    path: str | Path, root: str | Path, marker: str = DEFAULT_MARKER
) -> list[DirectiveBlock]:
    """Extract every directive block from one file.

    Raises:
        SourceError: If the file cannot be read.
    """
    path = Path(path)
    key = query_key(path, root)
    logger.debug(f"Scanning {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            return [
                DirectiveBlock(str(path), key, start, tuple(lines))
                for start, lines in scan_lines(f, marker)
            ]
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading file {path}: {e}")
        raise SourceError(f"Error reading file {path}: {e}") from e


def walk_directory(
    root: str | Path, suffix: str = ".sql", marker: str = DEFAULT_MARKER
) -> Iterator[DirectiveBlock]:
    """Yield directive blocks from every matching file under root.

    Files are visited in sorted path order so repeated runs discover
    invocations in the same order.

    Raises:
        SourceError: If root is not a directory or a file cannot be read.
    """
    root = Path(root)
    if not root.is_dir():
        logger.error(f"Directory not found: {root}")
        raise SourceError(f"Directory not found: {root}")

    paths = sorted(p for p in root.rglob(f"*{suffix}") if p.is_file())
    logger.info(f"Found {len(paths)} {suffix} file(s) under {root}")

    for path in paths:
        yield from extract_file(path, root, marker)
