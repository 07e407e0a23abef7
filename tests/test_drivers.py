"""Tests for the code, mock and interface drivers."""

import pytest

from rootx_gen.codegen.core.commands import CommandRegistry
from rootx_gen.codegen.core.config import GeneratorConfig
from rootx_gen.codegen.core.errors import DriverStateError, RegistryError
from rootx_gen.codegen.core.generator import DriverState, generate_code
from rootx_gen.codegen.core.parser import DirectiveParser
from rootx_gen.codegen.drivers import CodeDriver, InterfaceDriver, MockDriver
from rootx_gen.codegen.registry import DriverRegistry, get_driver, list_supported_modes

DIRECTIVES = [
    (["deleteOne DeleteOrder", "$1: id int64"], "orders/delete_order.sql"),
    (["selectAll ListOrders", "$1: userID int64"], "orders/list_orders.sql"),
    (["insert CreateUser", "$1: name string"], "users/create_user.sql"),
    (["selectOne GetUser", "$1: id int64"], "users/get_user.sql"),
    (["exists UserExists", "$1: email string"], "users/user_exists.sql"),
]


def parse_all(registry):
    parser = DirectiveParser(registry)
    return [parser.parse(lines, key) for lines, key in DIRECTIVES]


def run(driver, invocations):
    driver.start()
    for invocation in invocations:
        driver.handle(invocation)
    driver.finish()
    return driver.output


def methods(output):
    return output.split("\n\n")


class TestCodeDriver:
    def test_read_method_for_select_one(self, parser, config):
        invocation = parser.parse(["selectOne GetUser", "$1: id int64"], "users/get_user.sql")

        output = run(CodeDriver(config), [invocation])

        read_method, write_method = methods(output)
        assert read_method == (
            "func (r *Reader) GetUser(instance interface{}, id int64) error {\n"
            '\treturn rootx.SelectOne(r, "users/get_user.sql", instance, id)\n'
            "}"
        )
        assert write_method.startswith("func (w *Writer) GetUser(instance interface{}, id int64) error {")
        assert 'rootx.SelectOne(w, "users/get_user.sql", instance, id)' in write_method

    def test_write_only_commands_have_no_read_method(self, registry, config):
        output = run(CodeDriver(config), parse_all(registry))

        for name in ("DeleteOrder", "CreateUser"):
            assert f"(r *Reader) {name}(" not in output
            assert f"(w *Writer) {name}(" in output

    def test_method_count(self, registry, config):
        output = run(CodeDriver(config), parse_all(registry))

        # three read-capable commands emit two methods, two write-only emit one
        assert len(methods(output)) == 8

    def test_psql_insert(self, registry, config):
        output = run(CodeDriver(config), parse_all(registry))

        assert 'return rootx.InsertPsql(w, "users/create_user.sql", name)' in output

    def test_alteration_only_changes_insert_bodies(self, config):
        plain = parse_all(CommandRegistry.initialize(GeneratorConfig(psql=False)))
        psql = parse_all(CommandRegistry.initialize(GeneratorConfig(psql=True)))

        before = methods(run(CodeDriver(config), plain))
        after = methods(run(CodeDriver(config), psql))

        assert len(before) == len(after)
        changed = [(b, a) for b, a in zip(before, after) if b != a]
        assert len(changed) == 1
        b, a = changed[0]
        assert "CreateUser" in b and "rootx.Insert(" in b
        assert "CreateUser" in a and "rootx.InsertPsql(" in a
        assert b.splitlines()[0] == a.splitlines()[0]

    def test_template_error_is_localized(self, config):
        registry = CommandRegistry()
        registry.alter("exists", "return {{ nope }}")
        registry.freeze()
        driver = CodeDriver(config)

        output = run(driver, parse_all(registry))

        assert len(driver.template_errors) == 2
        assert output.count("\tERROR ") == 2
        assert 'rootx.SelectOne(r, "users/get_user.sql", instance, id)' in output

    def test_layout_template_from_directory(self, parser, tmp_path):
        (tmp_path / "function.go.j2").write_text(
            "// {{ signature }}\nfunc {{ receiver }} {{ signature }} {\n{{ body | indent }}\n}"
        )
        config = GeneratorConfig(
            read_type="(r *Reader)", write_type="(w *Writer)", template_dir=str(tmp_path)
        )
        invocation = parser.parse(["deleteOne DeleteOrder", "$1: id int64"], "o.sql")

        output = run(CodeDriver(config), [invocation])

        assert output.startswith("// DeleteOrder(id int64) error\nfunc (w *Writer) DeleteOrder(")


class TestMockDriver:
    def test_mock_bodies(self, registry):
        config = GeneratorConfig(read_type="(m *MockReader)", write_type="(m *MockWriter)")

        output = run(MockDriver(config), parse_all(registry))

        assert (
            "func (m *MockReader) GetUser(instance interface{}, id int64) error {\n"
            "\tinstance = m.Thing\n"
            "\treturn m.Error\n"
            "}"
        ) in output
        assert "\treturn m.Int64, m.Error" in output
        assert "(m *MockReader) CreateUser(" not in output

    def test_mock_signatures_match_code(self, registry, config):
        code = methods(run(CodeDriver(config), parse_all(registry)))
        mock = methods(run(MockDriver(config), parse_all(registry)))

        assert [m.splitlines()[0] for m in code] == [m.splitlines()[0] for m in mock]


class TestInterfaceDriver:
    def test_two_interfaces_in_encounter_order(self, registry):
        config = GeneratorConfig(read_type="Reader", write_type="Writer")

        output = run(InterfaceDriver(config), parse_all(registry))

        assert output == (
            "type Reader interface {\n"
            "\tListOrders(instances interface{}, userID int64) error\n"
            "\tGetUser(instance interface{}, id int64) error\n"
            "\tUserExists(email string) (bool, error)\n"
            "}\n"
            "\n"
            "type Writer interface {\n"
            "\tDeleteOrder(id int64) error\n"
            "\tCreateUser(name string) (int64, error)\n"
            "}"
        )

    def test_interface_names_from_receiver_types(self, registry, config):
        output = run(InterfaceDriver(config), parse_all(registry))

        assert output.startswith("type Reader interface {")
        assert "type Writer interface {" in output

    def test_empty_interfaces_still_emitted(self, config):
        output = run(InterfaceDriver(config), [])

        assert output == "type Reader interface {\n}\n\ntype Writer interface {\n}"

    def test_select_one_signature(self, parser, config):
        invocation = parser.parse(["selectOne GetUser", "$1: id int64"], "users/get_user.sql")

        output = run(InterfaceDriver(config), [invocation])

        assert "\tGetUser(instance interface{}, id int64) error\n" in output


class TestLifecycle:
    def test_handle_before_start(self, parser, config):
        driver = CodeDriver(config)
        invocation = parser.parse(["exec Vacuum"], "vacuum.sql")

        with pytest.raises(DriverStateError, match="handle"):
            driver.handle(invocation)

    def test_start_twice(self, config):
        driver = InterfaceDriver(config)
        driver.start()

        with pytest.raises(DriverStateError):
            driver.start()

    def test_handle_after_finish(self, parser, config):
        driver = MockDriver(config)
        driver.start()
        driver.finish()

        assert driver.state is DriverState.FINISHED
        with pytest.raises(DriverStateError):
            driver.handle(parser.parse(["exec Vacuum"], "vacuum.sql"))

    def test_generate_code_reports_reused_driver(self, config):
        driver = CodeDriver(config)
        run(driver, [])

        result = generate_code(driver, [], "store")

        assert not result.success
        assert isinstance(result.exception, DriverStateError)


class TestGenerateCode:
    def test_full_file(self, registry):
        config = GeneratorConfig(read_type="Reader", write_type="Writer")
        invocations = parse_all(registry)[2:4]

        result = generate_code(InterfaceDriver(config), invocations, "store")

        assert result.success
        assert result.code == (
            "// Code generated by rootx-gen. DO NOT EDIT.\n"
            "\n"
            "package store\n"
            "\n"
            "type Reader interface {\n"
            "\tGetUser(instance interface{}, id int64) error\n"
            "}\n"
            "\n"
            "type Writer interface {\n"
            "\tCreateUser(name string) (int64, error)\n"
            "}\n"
        )
        assert result.metadata["mode"] == "interface"
        assert result.metadata["invocation_count"] == 2

    def test_warnings_for_go_names(self, parser, config):
        invocations = [
            parser.parse(["selectOne GetUser", "$1: type string"], "a.sql"),
            parser.parse(["exists GetUser", "$1: id int64"], "b.sql"),
        ]

        result = generate_code(CodeDriver(config), invocations, "store")

        assert result.success
        assert any("reserved word" in w for w in result.warnings)
        assert any("already generated from a.sql" in w for w in result.warnings)


class TestDriverRegistry:
    def test_builtin_modes(self):
        assert list_supported_modes() == ["code", "interface", "mock"]

    def test_aliases(self, config):
        assert isinstance(get_driver("impl", config), CodeDriver)
        assert isinstance(get_driver("MOCK", config), MockDriver)
        assert isinstance(get_driver("iface", config), InterfaceDriver)

    def test_unknown_mode(self):
        with pytest.raises(RegistryError, match="No driver registered"):
            get_driver("yaml")

    def test_rejects_non_driver(self):
        with pytest.raises(RegistryError):
            DriverRegistry().register("bogus", dict)

    def test_driver_from_dict_config(self):
        driver = get_driver("code", {"read_type": "(r *R)", "write_type": "(w *W)"})

        assert driver.config.read_type == "(r *R)"

    def test_supports_aliases(self):
        registry = DriverRegistry()
        registry.register("interface", InterfaceDriver, aliases=["iface"])

        assert registry.supports("IFACE")
        assert registry.supports("interface")
        assert not registry.supports("yaml")
