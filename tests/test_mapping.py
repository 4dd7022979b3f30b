"""
Tests for column role suggestion and mapping persistence.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from bizpulse.config import ROLE_CANDIDATES
from bizpulse.data.mapping import (
    ColumnRoleMapping,
    normalize_key,
    suggest_column,
    suggest_mapping,
)
from bizpulse.data.mapping_store import MappingStore


class TestNormalizeKey:

    def test_strips_case_space_underscore_hyphen(self):
        assert normalize_key("  Order_Total - USD ") == "ordertotalusd"

    def test_empty(self):
        assert normalize_key("") == ""
        assert normalize_key(None) == ""


class TestSuggestColumn:
    """Tests for the two-pass name matcher."""

    def test_exact_match_beats_earlier_substring(self):
        """Exact pass runs over every candidate before any substring match."""
        columns = ["Total Revenue", "Sales"]
        # "revenue" is a substring of "totalrevenue", but "sales" matches exactly
        assert suggest_column(columns, ["revenue", "sales"]) == "Sales"

    def test_substring_match(self):
        assert suggest_column(["Gross Sales USD"], ["revenue", "sales"]) == "Gross Sales USD"

    def test_candidate_order_breaks_ties(self):
        columns = ["Amount", "Revenue"]
        assert suggest_column(columns, ROLE_CANDIDATES["revenue"]) == "Revenue"

    def test_reverse_substring(self):
        """Column name contained in the candidate also matches."""
        assert suggest_column(["Order"], ["ordertotal"]) == "Order"

    def test_no_match(self):
        assert suggest_column(["foo", "bar"], ROLE_CANDIDATES["date"]) is None

    def test_blank_column_names_ignored(self):
        assert suggest_column(["   ", "Sales"], ["revenue", "sales"]) == "Sales"


class TestSuggestMapping:
    """Tests for full role suggestion."""

    def test_reference_columns(self):
        mapping = suggest_mapping(["Order Total", "COGS", "SKU", "Order Date"])

        assert mapping.revenue_column == "Order Total"
        assert mapping.cost_columns == ("COGS",)
        assert mapping.product_column == "SKU"
        assert mapping.date_column == "Order Date"

    def test_single_cost_column_selected(self):
        mapping = suggest_mapping(["Date", "Revenue", "COGS", "Rent", "Salary"])

        assert mapping.cost_columns == ("COGS",)

    def test_unmatched_roles_unset(self):
        mapping = suggest_mapping(["foo", "bar"])

        assert mapping.revenue_column is None
        assert mapping.cost_columns == ()
        assert mapping.product_column is None
        assert mapping.date_column is None


class TestColumnRoleMapping:
    """Tests for mapping value semantics."""

    def test_cost_columns_deduplicated_in_order(self):
        mapping = ColumnRoleMapping(cost_columns=["Rent", "COGS", "Rent"])
        assert mapping.cost_columns == ("Rent", "COGS")

    def test_empty_strings_become_unset(self):
        mapping = ColumnRoleMapping(revenue_column="", date_column="")
        assert mapping.revenue_column is None
        assert mapping.date_column is None

    def test_resolve_drops_stale_references(self):
        mapping = ColumnRoleMapping(
            revenue_column="Revenue",
            cost_columns=("COGS", "Gone"),
            product_column="Removed",
            date_column="Date",
        )

        resolved = mapping.resolve(["Date", "Revenue", "COGS"])

        assert resolved.revenue_column == "Revenue"
        assert resolved.cost_columns == ("COGS",)
        assert resolved.product_column is None
        assert resolved.date_column == "Date"

    def test_toggle_cost_column(self):
        mapping = ColumnRoleMapping(cost_columns=("COGS",))

        added = mapping.toggle_cost_column("Rent")
        removed = added.toggle_cost_column("COGS")

        assert added.cost_columns == ("COGS", "Rent")
        assert removed.cost_columns == ("Rent",)
        assert mapping.cost_columns == ("COGS",)

    def test_dict_round_trip(self):
        mapping = ColumnRoleMapping("Revenue", ("COGS", "Rent"), "Product", "Date")
        assert ColumnRoleMapping.from_dict(mapping.to_dict()) == mapping

    def test_from_dict_tolerates_bad_costs(self):
        mapping = ColumnRoleMapping.from_dict({"revenue_column": "Revenue", "cost_columns": "COGS"})
        assert mapping.revenue_column == "Revenue"
        assert mapping.cost_columns == ()


class TestMappingStore:
    """Tests for per-source mapping persistence."""

    def test_save_and_load(self, tmp_path):
        store = MappingStore(tmp_path / "mappings.json")
        mapping = ColumnRoleMapping("Revenue", ("COGS",), "Product", "Date")

        store.save("sales.csv", mapping)

        assert store.load("sales.csv") == mapping
        assert store.load("other.csv") is None

    def test_keyed_by_source_name(self, tmp_path):
        store = MappingStore(tmp_path / "mappings.json")
        store.save("a.csv", ColumnRoleMapping(revenue_column="A"))
        store.save("b.csv", ColumnRoleMapping(revenue_column="B"))

        assert store.load("a.csv").revenue_column == "A"
        assert store.load("b.csv").revenue_column == "B"

    def test_missing_or_corrupt_file(self, tmp_path):
        path = tmp_path / "mappings.json"
        store = MappingStore(path)
        assert store.load("sales.csv") is None

        path.write_text("{not json", encoding="utf-8")
        assert store.load("sales.csv") is None

    def test_no_source_name_is_ignored(self, tmp_path):
        path = tmp_path / "mappings.json"
        store = MappingStore(path)

        store.save("", ColumnRoleMapping(revenue_column="Revenue"))

        assert not path.exists()
        assert store.load("") is None

    def test_forget(self, tmp_path):
        store = MappingStore(tmp_path / "mappings.json")
        store.save("sales.csv", ColumnRoleMapping(revenue_column="Revenue"))

        store.forget("sales.csv")

        assert store.load("sales.csv") is None
