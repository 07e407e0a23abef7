"""Tests for directive extraction from SQL files."""

import pytest

from rootx_gen.codegen.core.errors import SourceError
from rootx_gen.extractor import extract_file, query_key, scan_lines, walk_directory


def test_scan_lines_groups_consecutive_directives():
    lines = [
        "--! selectOne GetUser\n",
        "--!   $1: id int64\n",
        "SELECT * FROM users WHERE id = $1;\n",
        "\n",
        "  --! exec Touch\n",
        "UPDATE users SET seen = now();\n",
        "-- plain comment\n",
    ]

    blocks = list(scan_lines(lines))

    assert blocks == [
        (1, ["selectOne GetUser", "$1: id int64"]),
        (5, ["exec Touch"]),
    ]


def test_scan_lines_block_at_end_of_file():
    assert list(scan_lines(["SELECT 1;", "--! exec Last"])) == [(2, ["exec Last"])]


def test_scan_lines_custom_marker():
    assert list(scan_lines(["#! exec X", "--! exec Y"], marker="#!")) == [(1, ["exec X"])]


def test_query_key(tmp_path):
    assert query_key(tmp_path / "users" / "get.sql", tmp_path) == "users/get.sql"


def test_query_key_outside_root(tmp_path):
    with pytest.raises(SourceError):
        query_key("/elsewhere/get.sql", tmp_path)


def test_extract_file(sql_dir):
    blocks = extract_file(sql_dir / "users" / "create_user.sql", sql_dir)

    assert len(blocks) == 1
    block = blocks[0]
    assert block.key == "users/create_user.sql"
    assert block.line_number == 1
    assert block.lines == ("insert CreateUser", "$1: name string", "$2: email string")


def test_walk_directory_sorted_and_filtered(sql_dir):
    keys = [block.key for block in walk_directory(sql_dir)]

    assert keys == [
        "orders/delete_order.sql",
        "orders/list_orders.sql",
        "users/create_user.sql",
        "users/get_user.sql",
    ]


def test_walk_missing_directory(tmp_path):
    with pytest.raises(SourceError, match="Directory not found"):
        list(walk_directory(tmp_path / "missing"))
