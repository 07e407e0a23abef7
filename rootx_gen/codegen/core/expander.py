"""
Method body expansion.

Binds an invocation, a role type and a command body template into the
finished text of one Go method body.
"""

from dataclasses import dataclass
from typing import Optional

from jinja2 import TemplateError as JinjaTemplateError

from ...logging_config import get_logger
from .invocation import Invocation
from .naming import receiver_variable
from .templates import TemplateEngine, get_default_template_engine

logger = get_logger(__name__)


@dataclass(frozen=True)
class Expansion:
    """Expanded body text, plus the defect that replaced it if any."""

    text: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BodyExpander:
    """Fill the ``var``, ``file`` and ``params`` slots of a body template."""

    def __init__(self, engine: Optional[TemplateEngine] = None):
        self.engine = engine or get_default_template_engine()

    def expand(self, invocation: Invocation, role_type: str, template: str) -> Expansion:
        """
        Expand a body template for one emitted method.

        A broken template only breaks its own method: the body becomes an
        ``ERROR`` marker so the remaining defects in the run still surface.

        Args:
            invocation: Invocation being emitted
            role_type: Receiver type string of the role, e.g. ``(r *Reader)``
            template: Body template to expand

        Returns:
            Expansion with the body text
        """
        context = {
            "var": receiver_variable(role_type),
            "file": invocation.key,
            "params": invocation.param_names(),
        }
        try:
            return Expansion(self.engine.render_string(template, context))
        except JinjaTemplateError as e:
            message = f"{invocation.command.name} {invocation.name}: {e}"
            logger.warning(f"Template expansion failed for {message}")
            return Expansion(f"ERROR {e}", error=message)
