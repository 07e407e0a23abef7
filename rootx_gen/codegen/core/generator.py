"""
Base driver interface for all generation modes.

Defines the start/handle/finish contract every driver implements and the
generic loop that feeds invocations through a driver.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ...logging_config import get_logger
from .config import GeneratorConfig
from .errors import DriverStateError, GeneratorError
from .invocation import Invocation, Role
from .naming import interface_name, is_go_identifier, is_go_reserved, receiver_clause
from .templates import (
    GENERATED_NOTICE,
    TemplateEngine,
    create_template_engine,
    get_default_template_engine,
)

logger = get_logger(__name__)


class DriverState(Enum):
    CREATED = "created"
    ACCUMULATING = "accumulating"
    FINISHED = "finished"


class QueryDriver(ABC):
    """Abstract base class for all generation drivers."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        """Initialize driver with optional configuration."""
        self.config = config or GeneratorConfig()
        self.template_engine = template_engine or self._create_template_engine()
        self.state = DriverState.CREATED
        self.template_errors: List[str] = []
        self._parts: List[str] = []

    def _create_template_engine(self) -> TemplateEngine:
        if self.config.template_dir:
            return create_template_engine(Path(self.config.template_dir))
        return get_default_template_engine()

    @property
    @abstractmethod
    def mode_name(self) -> str:
        """Return the generation mode (e.g., 'code', 'mock')."""
        pass

    # Lifecycle

    def start(self):
        """Begin accumulating output."""
        self._require(DriverState.CREATED, "start")
        self.state = DriverState.ACCUMULATING
        self.on_start()

    def handle(self, invocation: Invocation):
        """Consume one invocation."""
        self._require(DriverState.ACCUMULATING, "handle")
        self.on_handle(invocation)

    def finish(self):
        """Flush anything accumulated and close the driver."""
        self._require(DriverState.ACCUMULATING, "finish")
        self.on_finish()
        self.state = DriverState.FINISHED

    def _require(self, state: DriverState, operation: str):
        if self.state is not state:
            raise DriverStateError(
                f"{type(self).__name__}.{operation}() called in state "
                f"'{self.state.value}', expected '{state.value}'"
            )

    def on_start(self):
        """Hook run by start()."""
        pass

    @abstractmethod
    def on_handle(self, invocation: Invocation):
        """Hook run by handle() for each invocation."""
        pass

    def on_finish(self):
        """Hook run by finish()."""
        pass

    # Output helpers

    @property
    def output(self) -> str:
        """Everything emitted so far, one blank line between declarations."""
        return "\n\n".join(self._parts)

    def emit(self, text: str):
        self._parts.append(text)

    def role_type(self, role: Role) -> str:
        """Configured type string for a role."""
        if role is Role.READ:
            return self.config.read_type
        return self.config.write_type

    def render_function(self, invocation: Invocation, role: Role, body: str) -> str:
        """Render one Go method bound to a role's receiver."""
        context = {
            "receiver": receiver_clause(self.role_type(role)),
            "signature": invocation.signature(),
            "body": body,
        }
        return self.template_engine.render_template("function.go.j2", context)

    def render_interface(self, role: Role, signatures: Sequence[str]) -> str:
        """Render one Go interface declaration for a role."""
        context = {
            "name": interface_name(self.role_type(role)),
            "signatures": list(signatures),
        }
        return self.template_engine.render_template("interface.go.j2", context)

    def render_header(self, package_name: str) -> str:
        context = {"notice": GENERATED_NOTICE, "package_name": package_name}
        return self.template_engine.render_template("header.go.j2", context)

    def format_code(self, code: str) -> str:
        """
        Apply basic whitespace cleanup to generated code.

        Args:
            code: Raw generated code

        Returns:
            Code without trailing whitespace or runs of blank lines, ending
            in a single newline
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"


def validate_invocations(invocations: Sequence[Invocation]) -> List[str]:
    """
    Check invocations for names that would not compile as Go.

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []
    seen: Dict[str, str] = {}

    for invocation in invocations:
        where = f"{invocation.key} ({invocation.name})"

        if not is_go_identifier(invocation.name):
            warnings.append(f"{where}: method name is not a valid Go identifier")

        if invocation.name in seen:
            warnings.append(
                f"{where}: method {invocation.name} already generated from "
                f"{seen[invocation.name]}"
            )
        else:
            seen[invocation.name] = invocation.key

        for param in invocation.params:
            if is_go_reserved(param.name):
                warnings.append(
                    f"{where}: parameter '{param.name}' is a Go reserved word"
                )
            elif not is_go_identifier(param.name):
                warnings.append(
                    f"{where}: parameter '{param.name}' is not a valid Go identifier"
                )

    return warnings


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
        template_errors: List[str] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
            template_errors: Methods whose body was replaced by an ERROR marker
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.template_errors = template_errors or []
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    driver: QueryDriver, invocations: Sequence[Invocation], package_name: str
) -> GenerationResult:
    """
    Run a driver over invocations in order.

    Args:
        driver: Fresh driver instance
        invocations: Invocations in discovery order
        package_name: Go package for the generated file

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = validate_invocations(invocations)

        driver.start()
        for invocation in invocations:
            driver.handle(invocation)
        driver.finish()

        parts = [driver.render_header(package_name)]
        if driver.output:
            parts.append(driver.output)
        code = driver.format_code("\n\n".join(parts))

        metadata = {
            "mode": driver.mode_name,
            "package": package_name,
            "invocation_count": len(invocations),
            "read_count": sum(1 for i in invocations if not i.command.write_only),
            "write_only_count": sum(1 for i in invocations if i.command.write_only),
        }

        result = GenerationResult(
            code,
            warnings=warnings + driver.template_errors,
            metadata=metadata,
            template_errors=list(driver.template_errors),
        )
        logger.info(
            f"Generated {driver.mode_name} output for {len(invocations)} invocation(s)"
        )
        return result

    except GeneratorError as e:
        logger.error(f"Code generation failed: {e}")
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
