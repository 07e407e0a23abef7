"""Formatting and writing of generated code."""

import shlex
import subprocess
import sys
from pathlib import Path

from .codegen.core.errors import OutputError
from .logging_config import get_logger

logger = get_logger(__name__)


def format_source(code: str, formatter: str | None) -> str:
    """Pipe code through an external formatter such as ``goimports``.

    Args:
        code: Generated source.
        formatter: Formatter command line; ``None`` or empty skips formatting.

    Returns:
        Formatted source.

    Raises:
        OutputError: If the formatter is missing or rejects the code.
    """
    if not formatter:
        return code

    command = shlex.split(formatter)
    logger.debug(f"Formatting with {command}")

    try:
        completed = subprocess.run(
            command,
            input=code,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise OutputError(f"Formatter not found: {command[0]}") from e

    if completed.returncode != 0:
        raise OutputError(
            f"Formatter {command[0]} failed: {completed.stderr.strip()}"
        )

    return completed.stdout


def write_output(
    code: str,
    output_file: str | Path | None = None,
    formatter: str | None = None,
) -> None:
    """Format code and write it to a file, or to stdout when no file is given.

    Raises:
        OutputError: If formatting or writing fails.
    """
    code = format_source(code, formatter)

    if output_file is None:
        sys.stdout.write(code)
        return

    path = Path(output_file)
    try:
        if path.parent != Path(""):
            path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(code, encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing {path}: {e}")
        raise OutputError(f"Error writing {path}: {e}") from e

    logger.info(f"Wrote {path}")
