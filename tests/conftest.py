"""Shared fixtures for rootx_gen tests."""

import pytest

from rootx_gen.codegen.core.commands import CommandRegistry
from rootx_gen.codegen.core.config import GeneratorConfig
from rootx_gen.codegen.core.parser import DirectiveParser


@pytest.fixture
def registry():
    return CommandRegistry.initialize(GeneratorConfig(psql=True))


@pytest.fixture
def parser(registry):
    return DirectiveParser(registry)


@pytest.fixture
def config():
    return GeneratorConfig(
        package_name="store",
        directory="sql",
        read_type="(r *Reader)",
        write_type="(w *Writer)",
        formatter=None,
        dry_run=True,
    )


@pytest.fixture
def sql_dir(tmp_path):
    """A small query tree with interleaved read and write directives."""
    root = tmp_path / "sql"
    (root / "users").mkdir(parents=True)
    (root / "orders").mkdir()

    (root / "users" / "get_user.sql").write_text(
        "--! selectOne GetUser\n"
        "--! $1: id int64\n"
        "SELECT * FROM users WHERE id = $1;\n"
    )
    (root / "users" / "create_user.sql").write_text(
        "--! insert CreateUser\n"
        "--! $1: name string\n"
        "--! $2: email string\n"
        "INSERT INTO users (name, email) VALUES ($1, $2) RETURNING id;\n"
    )
    (root / "orders" / "list_orders.sql").write_text(
        "--! selectAll ListOrders\n"
        "--! $1: userID int64\n"
        "SELECT * FROM orders WHERE user_id = $1;\n"
    )
    (root / "orders" / "delete_order.sql").write_text(
        "--! deleteOne DeleteOrder\n"
        "--! $1: id int64\n"
        "DELETE FROM orders WHERE id = $1;\n"
    )
    (root / "README.md").write_text("--! selectOne Ignored\n")
    return root
