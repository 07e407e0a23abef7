"""
Command-line interface for rootx-gen.

    rootx-gen --pkg store --dir sql -o store/queries.go \\
        --read-type "(r *Reader)" --write-type "(w *Writer)"
"""

import argparse
import logging
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .codegen import generate_from_directory
from .codegen.core.commands import CommandRegistry
from .codegen.core.config import GeneratorConfig, get_config_manager, load_config
from .codegen.core.errors import GeneratorError
from .codegen.core.generator import GenerationResult
from .logging_config import get_logger, setup_logging
from .output import write_output

logger = get_logger(__name__)

# stdout is reserved for generated code in dry-run mode.
console = Console(stderr=True, soft_wrap=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rootx-gen",
        description="Generate Go data-access code from directives in SQL files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rootx-gen --pkg store --dir sql -o store/queries.go --read-type "(r *Reader)" --write-type "(w *Writer)"
  rootx-gen --pkg store --dir sql --mode mock --dry-run --read-type "(m *MockReader)" --write-type "(m *MockWriter)"
  rootx-gen --pkg store --dir sql --mode interface -o store/iface.go --read-type Reader --write-type Writer
  rootx-gen --list-commands
        """.strip(),
    )

    parser.add_argument("--pkg", metavar="NAME", help="Go package to use")
    parser.add_argument("--dir", metavar="PATH", help="Directory containing sql files")
    parser.add_argument("--output", "-o", metavar="FILE", help="Output file")
    parser.add_argument(
        "--mode",
        help="Mode for generator: code | mock | interface, or an alias "
        "(impl, mocks, iface) (default: code)",
    )

    roles = parser.add_argument_group("role types")
    roles.add_argument(
        "--read-type",
        "--readType",
        dest="read_type",
        metavar="TYPE",
        help="Type of instance to use for read methods",
    )
    roles.add_argument(
        "--write-type",
        "--writeType",
        dest="write_type",
        metavar="TYPE",
        help="Type of instance to use for write methods",
    )

    output = parser.add_argument_group("output")
    output.add_argument(
        "--formatter",
        metavar="CMD",
        help="Command to use to format source code (gofmt, goimports); "
        "empty string disables formatting (default: goimports)",
    )
    output.add_argument(
        "--dry-run",
        "--dryRun",
        dest="dry_run",
        action="store_true",
        default=None,
        help="Output to STDOUT instead of writing files",
    )

    parser.add_argument(
        "--psql",
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Whether to use Postgres insert strategy, using "RETURNING id" (default: on)',
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Debug logging and result metadata"
    )
    parser.add_argument(
        "--list-commands",
        action="store_true",
        help="List supported directive commands and exit",
    )

    return parser


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge CLI flags over the config file and defaults."""
    overrides: Dict[str, Any] = {
        "package_name": args.pkg,
        "directory": args.dir,
        "output_file": args.output,
        "mode": args.mode,
        "read_type": args.read_type,
        "write_type": args.write_type,
        "formatter": args.formatter,
        "dry_run": args.dry_run,
        "psql": args.psql,
    }
    custom_config = {k: v for k, v in overrides.items() if v is not None}
    return load_config(custom_config=custom_config, config_file=args.config)


def _list_commands(config: GeneratorConfig) -> int:
    """Print the command table the current configuration produces."""
    registry = CommandRegistry.initialize(config)

    table = Table(title="Directive Commands", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Command", style="bold green", no_wrap=True)
    table.add_column("Capability", style="cyan")
    table.add_column("Injected", style="blue")
    table.add_column("Returns")
    table.add_column("Implementation", style="dim")

    for command in registry:
        table.add_row(
            command.name,
            command.capability.value,
            command.injected_param or "-",
            command.return_type,
            escape(command.code_template),
        )

    Console().print(table)
    return 0


def _report(result: GenerationResult, verbose: bool):
    for warning in result.warnings:
        console.print(f"[yellow]⚠ {escape(warning)}[/yellow]")

    if verbose:
        table = Table(box=box.SIMPLE, show_header=False)
        for key, value in result.metadata.items():
            table.add_row(key, str(value))
        console.print(table)


def run(config: GeneratorConfig, verbose: bool = False) -> int:
    """
    Run one generation pass.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    errors: List[str] = get_config_manager().validate_config(config)
    if errors:
        for error in errors:
            console.print(f"[red]✗[/red] {escape(error)}")
        return 1

    result = generate_from_directory(config)
    if not result.success:
        console.print(f"[red]✗ Error:[/red] {escape(result.error_message)}")
        return 1

    _report(result, verbose)

    formatter = config.formatter
    if result.template_errors:
        # The formatter would reject ERROR markers; keep them visible instead.
        console.print(
            f"[red]✗ {len(result.template_errors)} method body(ies) failed to "
            "expand; writing unformatted output[/red]"
        )
        formatter = None

    output_file = None if config.dry_run else config.output_file
    write_output(result.code, output_file, formatter)

    if output_file:
        console.print(f"[green]✓[/green] Generated {escape(str(output_file))}")

    return 1 if result.template_errors else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the rootx-gen command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, console)

    try:
        config = _build_config(args)
        if args.list_commands:
            return _list_commands(config)
        return run(config, args.verbose)
    except GeneratorError as e:
        logger.debug("Generation aborted", exc_info=True)
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1
