"""Tests for the PL/SQL CRUD package renderer."""
import re

import pytest

from crud_generator.config import NamingConfig
from crud_generator.procedures.renderer import (
    Procedure,
    build_procedures,
    render,
    render_crud_package,
    render_table_schema,
)
from crud_generator.sql_schema.extractor import Column, extract_table_schema


def _signature(block: str, procedure: str) -> str:
    """Return the parameter list text of one procedure in a rendered block."""
    match = re.search(rf'PROCEDURE {procedure}\((.*?)\n  \)', block, re.DOTALL)
    assert match, f"{procedure} not found"
    return match.group(1)


@pytest.fixture
def orders_package(orders_description):
    return render_table_schema(extract_table_schema(orders_description))


# =============================================================================
# Golden Output Tests
# =============================================================================

class TestGoldenOutput:
    """Rendered text must match the reference package byte for byte."""

    def test_declarations(self, orders_package, orders_fixture):
        assert orders_package.declarations == orders_fixture["spec"]

    def test_definitions(self, orders_package, orders_fixture):
        assert orders_package.definitions == orders_fixture["body"]

    def test_package_name(self, orders_package):
        assert orders_package.package_name == "ORDERS_package"
        assert orders_package.table_name == "ORDERS"

    def test_as_text(self, orders_package, orders_fixture):
        assert orders_package.as_text() == f"{orders_fixture['spec']}\n\n{orders_fixture['body']}"

    def test_deterministic(self, orders_description):
        schema = extract_table_schema(orders_description)
        first = render_table_schema(schema)
        second = render_table_schema(extract_table_schema(orders_description))

        assert first == second
        assert first.as_text() == second.as_text()


# =============================================================================
# Parameter List Tests
# =============================================================================

class TestParameterLists:
    """Test parameter naming, ordering and comma placement."""

    def test_example_from_single_line(self):
        schema = extract_table_schema(
            'table_name("ORDERS"); table_attr("ID").primarykey; table_attr("TOTAL");'
        )
        package = render_table_schema(schema)
        spec = package.declarations

        assert _signature(spec, "create_ORDERS").split() == ["c_TOTAL", "IN", "ORDERS.TOTAL%TYPE"]
        assert "u_ID IN ORDERS.ID%TYPE,\n    u_TOTAL IN ORDERS.TOTAL%TYPE" in _signature(spec, "update_ORDERS")
        assert _signature(spec, "delete_ORDERS").split() == ["d_ID", "IN", "ORDERS.ID%TYPE"]
        assert _signature(spec, "gid_ORDERS_by_id").split() == ["gid_ID", "IN", "ORDERS.ID%TYPE"]
        assert "  PROCEDURE get_all_ORDERS;\n" in spec
        assert spec.count("PROCEDURE ") == 5

    @pytest.mark.parametrize("column_count", [1, 2, 5])
    def test_comma_count(self, column_count):
        """N parameters are separated by exactly N-1 commas."""
        columns = [Column("ID", is_primary_key=True)]
        columns += [Column(f"COL{i}") for i in range(column_count)]
        package = render_crud_package("T", columns, "ID")

        create_params = _signature(package.declarations, "create_T")
        update_params = _signature(package.declarations, "update_T")

        assert create_params.count(",") == column_count - 1
        assert update_params.count(",") == column_count
        assert not create_params.rstrip().endswith(",")
        assert not update_params.rstrip().endswith(",")

    def test_primary_key_last(self):
        """A trailing primary key column leaves no dangling comma."""
        columns = [Column("NAME"), Column("TOTAL"), Column("ID", is_primary_key=True)]
        package = render_crud_package("T", columns, "ID")

        create_params = _signature(package.definitions, "create_T")
        assert create_params.count(",") == 1
        assert create_params.endswith("c_TOTAL IN T.TOTAL%TYPE")

    def test_primary_key_excluded_from_value_lists(self):
        columns = [Column("A"), Column("ID", is_primary_key=True), Column("B")]
        package = render_crud_package("T", columns, "ID")
        body = package.definitions

        assert "c_ID" not in package.declarations
        assert "INSERT INTO T (A, B)\n    VALUES (c_A, c_B);" in body
        assert "UPDATE T SET\n      A = u_A,\n      B = u_B\n    WHERE ID = u_ID;" in body
        assert body.count("u_ID IN T.ID%TYPE") == 1
        assert body.count("    d_ID IN T.ID%TYPE") == 1
        assert body.count("gid_ID IN T.ID%TYPE") == 1

    def test_several_flagged_columns(self):
        """Every flagged column stays out of the value lists; only the chosen key is looked up."""
        columns = [Column("ID", is_primary_key=True), Column("UUID", is_primary_key=True), Column("NAME")]
        package = render_crud_package("T", columns, "UUID")
        body = package.definitions

        assert "INSERT INTO T (NAME)\n    VALUES (c_NAME);" in body
        assert "UPDATE T SET\n      NAME = u_NAME\n    WHERE UUID = u_UUID;" in body
        assert re.findall(r'u_(\w+) IN', _signature(package.declarations, "update_T")) == ["UUID", "NAME"]
        assert "c_ID" not in package.declarations
        assert "u_ID" not in body
        assert body.count("u_UUID IN T.UUID%TYPE") == 1
        assert "WHERE UUID = d_UUID;" in body
        assert "WHERE UUID = gid_UUID;" in body

    def test_column_order_follows_input(self):
        columns = [Column("ID", is_primary_key=True), Column("Z"), Column("A"), Column("M")]
        package = render_crud_package("T", columns, "ID")

        assert "INSERT INTO T (Z, A, M)" in package.definitions
        update_params = _signature(package.declarations, "update_T")
        assert re.findall(r'u_(\w+) IN', update_params) == ["ID", "Z", "A", "M"]

    def test_empty_primary_key_renders_unchecked(self):
        """The renderer doesn't validate; a missing key yields broken references."""
        package = render("T", [Column("A")], "")

        assert "WHERE  = u_;" in package.definitions
        assert "DELETE FROM T WHERE  = d_;" in package.definitions

    def test_custom_naming(self):
        naming = NamingConfig(
            create_prefix="p_new_",
            update_prefix="p_upd_",
            delete_prefix="p_del_",
            get_by_id_prefix="p_id_",
            package_suffix="_api"
        )
        package = render_crud_package("T", [Column("ID", True), Column("A")], "ID", naming)

        assert package.package_name == "T_api"
        assert "p_new_A IN T.A%TYPE" in package.declarations
        assert "WHERE ID = p_upd_ID;" in package.definitions
        assert "WHERE ID = p_del_ID;" in package.definitions
        assert "WHERE ID = p_id_ID;" in package.definitions
        assert package.definitions.endswith("END T_api;\n")


# =============================================================================
# Procedure Builder Tests
# =============================================================================

class TestProcedure:
    """Test the procedure builder."""

    def test_build_order(self):
        procedures = build_procedures("T", [Column("ID", True), Column("A")], "ID")
        assert [p.name for p in procedures] == [
            "create_T", "update_T", "delete_T", "gid_T_by_id", "get_all_T"
        ]

    def test_declaration_without_arguments(self):
        proc = Procedure(name="get_all_T", takes_arguments=False)
        assert proc.declaration() == "  PROCEDURE get_all_T;"

    def test_declaration_with_empty_parameter_list(self):
        proc = Procedure(name="create_T")
        assert proc.declaration() == "  PROCEDURE create_T(\n  );"

    def test_definition_layout(self):
        proc = Procedure(
            name="p",
            parameters=("    a IN T.A%TYPE",),
            statements=("NULL;",),
            local_declarations=("x NUMBER;",)
        )
        assert proc.definition() == (
            "  PROCEDURE p(\n"
            "    a IN T.A%TYPE\n"
            "  ) IS\n"
            "    x NUMBER;\n"
            "  BEGIN\n"
            "    NULL;\n"
            "  END p;"
        )
