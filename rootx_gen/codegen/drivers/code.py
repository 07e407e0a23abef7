"""
Implementation driver.

Emits one Go method per role an invocation applies to, with bodies that
call the rootx helper library.
"""

from typing import Optional

from ..core.commands import Command
from ..core.expander import BodyExpander
from ..core.generator import QueryDriver
from ..core.invocation import Invocation


class CodeDriver(QueryDriver):
    """Driver producing the data-access implementation."""

    def __init__(self, config=None, template_engine=None, expander: Optional[BodyExpander] = None):
        super().__init__(config, template_engine)
        self.expander = expander or BodyExpander(self.template_engine)

    @property
    def mode_name(self) -> str:
        return "code"

    def body_template(self, command: Command) -> str:
        """Template used for method bodies of a command."""
        return command.code_template

    def on_handle(self, invocation: Invocation):
        template = self.body_template(invocation.command)

        # Write-only commands get no read-role method.
        for role in invocation.roles():
            expansion = self.expander.expand(invocation, self.role_type(role), template)
            if not expansion.ok:
                self.template_errors.append(expansion.error)
            self.emit(self.render_function(invocation, role, expansion.text))
