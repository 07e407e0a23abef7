"""
rootx-gen Code Generation Module

Generates Go data-access methods, mocks and interfaces from directives
embedded in SQL files.
"""

from typing import List, Optional

from ..logging_config import get_logger
from .core.commands import CommandRegistry
from .core.config import GeneratorConfig, load_config
from .core.errors import GeneratorError
from .core.generator import GenerationResult, QueryDriver, generate_code
from .core.invocation import Invocation
from .core.parser import DirectiveParser
from .registry import DriverRegistry, get_driver, list_supported_modes

logger = get_logger(__name__)


def load_invocations(
    config: GeneratorConfig, registry: Optional[CommandRegistry] = None
) -> List[Invocation]:
    """
    Parse every directive under the configured directory.

    Args:
        config: Run configuration (directory, file suffix, directive marker)
        registry: Command table; built from config if omitted

    Returns:
        Invocations in discovery order

    Raises:
        DirectiveError: On the first malformed directive
        SourceError: If the directory or a file cannot be read
    """
    from ..extractor import walk_directory

    registry = registry or CommandRegistry.initialize(config)
    parser = DirectiveParser(registry)

    invocations = []
    for block in walk_directory(
        config.directory, config.file_suffix, config.directive_marker
    ):
        try:
            invocation = parser.parse(
                block.lines, block.key, block.source, block.line_number
            )
        except GeneratorError:
            logger.error(
                f"Could not parse command found in {block.source}, {list(block.lines)}"
            )
            raise
        invocations.append(invocation)

    logger.info(f"Parsed {len(invocations)} directive(s)")
    return invocations


def generate_from_directory(config: GeneratorConfig) -> GenerationResult:
    """
    Generate code for every directive under config.directory.

    Structural directive errors propagate; everything after parsing is
    reported through the returned GenerationResult.
    """
    invocations = load_invocations(config)
    driver = get_driver(config.mode, config)
    return generate_code(driver, invocations, config.package_name)


__version__ = "0.1.0"

__all__ = [
    "CommandRegistry",
    "DirectiveParser",
    "DriverRegistry",
    "GenerationResult",
    "GeneratorConfig",
    "QueryDriver",
    "generate_code",
    "generate_from_directory",
    "get_driver",
    "list_supported_modes",
    "load_config",
    "load_invocations",
]
