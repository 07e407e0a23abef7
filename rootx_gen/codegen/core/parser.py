"""
Parser for query directive blocks.

A directive block names a command and the method to generate on its
first line, followed by one line per positional parameter:

    selectOne GetUser
    $1: id int64
    $2: name string

Any structural problem raises DirectiveError; a malformed directive would
corrupt every generated artifact, so there is no partial recovery.
"""

from typing import List, Optional, Sequence, Tuple

from ...logging_config import get_logger
from .commands import CommandRegistry
from .errors import DirectiveError, UnknownCommandError
from .invocation import Invocation, Param

logger = get_logger(__name__)


class DirectiveParser:
    """Convert raw directive lines into Invocations."""

    def __init__(self, registry: CommandRegistry):
        """
        Initialize parser.

        Args:
            registry: Command table used to resolve command names
        """
        self.registry = registry

    def parse(
        self,
        lines: Sequence[str],
        key: str,
        source: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> Invocation:
        """
        Parse one directive block.

        Args:
            lines: Directive lines with comment markers already removed
            key: Query lookup key for this block
            source: Source file, for diagnostics
            line_number: 1-based line of the first directive line in source

        Returns:
            Parsed Invocation

        Raises:
            DirectiveError: If the block is malformed
            UnknownCommandError: If the command is not registered
        """
        if not lines:
            raise DirectiveError("Empty directive block", source, line_number)

        header, param_lines = lines[0], lines[1:]
        command_name, method_name = self._split(header, 2, source, line_number)

        try:
            command = self.registry.lookup(command_name)
        except UnknownCommandError as e:
            raise UnknownCommandError(str(e), source, line_number) from None

        params = self._parse_params(param_lines, source, line_number)
        invocation = Invocation(command, key, method_name, tuple(params))

        logger.debug(
            f"Parsed {command_name} {method_name} with {len(params)} param(s) for key {key}"
        )
        return invocation

    def _parse_params(
        self,
        lines: Sequence[str],
        source: Optional[str],
        first_line: Optional[int],
    ) -> List[Param]:
        params = []
        for index, line in enumerate(lines, start=1):
            line_number = first_line + index if first_line else None
            marker, name, type_ = self._split(line, 3, source, line_number)
            expected = f"${index}:"
            if marker != expected:
                raise DirectiveError(
                    f"Parameter line is bad: '{line.strip()}'; "
                    f"expected marker {expected}, got {marker}",
                    source,
                    line_number,
                )
            params.append(Param(name, type_))
        return params

    @staticmethod
    def _split(
        line: str,
        count: int,
        source: Optional[str],
        line_number: Optional[int],
    ) -> Tuple[str, ...]:
        parts = line.split()
        if len(parts) != count:
            raise DirectiveError(
                f"Bad line: '{line.strip()}'; "
                f"expected {count} components, got {len(parts)}",
                source,
                line_number,
            )
        return tuple(parts)


def parse_directive(
    registry: CommandRegistry,
    lines: Sequence[str],
    key: str,
    source: Optional[str] = None,
    line_number: Optional[int] = None,
) -> Invocation:
    """Convenience wrapper around DirectiveParser.parse()."""
    return DirectiveParser(registry).parse(lines, key, source, line_number)
