"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with the Go layout templates used by every driver.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateSyntaxError,
    meta,
)
from jinja2 import TemplateError as JinjaTemplateError

from .errors import GeneratorError


class TemplateError(GeneratorError):
    """Exception raised for template-related errors."""

    pass


# Slots a command body template may reference.
BODY_SLOTS = frozenset({"var", "file", "params"})


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        # Files on disk take precedence over in-memory templates.
        self._memory_loader = DictLoader({})
        loaders = [self._memory_loader]
        if self.template_dir and self.template_dir.exists():
            loaders.insert(0, FileSystemLoader(str(self.template_dir)))

        # Go source is never escaped, and a missing slot must fail loudly.
        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            undefined=StrictUndefined,
            lstrip_blocks=True,
        )

        self._env.filters["indent"] = self._indent_filter
        self._env.filters["comment"] = self._comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {str(e)}"
            ) from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Raises:
            jinja2.TemplateError: Syntax errors and undefined slots are left to
                the caller, which decides how severe they are.
        """
        template = self._env.from_string(template_string)
        return template.render(**context)

    def undeclared_variables(self, template_string: str) -> set:
        """Names a template string reads from its context."""
        return meta.find_undeclared_variables(self._env.parse(template_string))

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        self._memory_loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return template_name in self._env.list_templates()

    # Template filters for code generation

    def _indent_filter(self, value: str, width: int = 1, char: str = "\t") -> str:
        """Indent all lines in a string."""
        indent = char * width
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else line for line in lines)

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


def validate_template(template: str, engine: Optional[TemplateEngine] = None) -> List[str]:
    """
    Check a body template against the fixed slot set.

    Returns:
        List of problems (empty if the template is usable)
    """
    engine = engine or get_default_template_engine()
    try:
        names = engine.undeclared_variables(template)
    except TemplateSyntaxError as e:
        return [f"syntax error on line {e.lineno}: {e.message}"]

    return [f"unknown slot '{name}'" for name in sorted(names - BODY_SLOTS)]


# Built-in templates for Go output
GO_HEADER_TEMPLATE = """{{ notice | comment }}

package {{ package_name }}"""

GO_FUNCTION_TEMPLATE = """func {{ receiver }} {{ signature }} {
{{ body | indent }}
}"""

GO_INTERFACE_TEMPLATE = """type {{ name }} interface {
{%- for signature in signatures %}
{{ signature | indent }}
{%- endfor %}
}"""

GENERATED_NOTICE = "Code generated by rootx-gen. DO NOT EDIT."

# Default template engine instance
_default_engine = None


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine with the built-in Go templates registered."""
    engine = TemplateEngine(template_dir)
    if not engine.template_exists("header.go.j2"):
        engine.add_template("header.go.j2", GO_HEADER_TEMPLATE)
    if not engine.template_exists("function.go.j2"):
        engine.add_template("function.go.j2", GO_FUNCTION_TEMPLATE)
    if not engine.template_exists("interface.go.j2"):
        engine.add_template("interface.go.j2", GO_INTERFACE_TEMPLATE)
    return engine


def get_default_template_engine() -> TemplateEngine:
    """Get the default template engine instance."""
    global _default_engine
    if _default_engine is None:
        _default_engine = create_template_engine()
    return _default_engine
