"""
Unit tests for path_addressing module.
"""

import logging
import pytest

from datamodel.path_addressing import (
    parse_path,
    format_path,
    join_path,
    get_value,
    set_value
)


class TestParsePath:
    """Test class for path parsing."""
    
    def test_parse_dotted_and_bracketed(self):
        """Test names and indices are returned in source order."""
        assert parse_path("a.b[0].c") == ["a", "b", 0, "c"]
    
    def test_parse_positions_scenario(self):
        """Test parsing the positions quantity path."""
        assert parse_path("positions[0].qty") == ["positions", 0, "qty"]
    
    def test_parse_index_directly_after_name(self):
        """Test an index segment may follow a name without separator."""
        assert parse_path("customer.positions[2].name") == ["customer", "positions", 2, "name"]
    
    def test_parse_consecutive_indices(self):
        """Test nested array indices."""
        assert parse_path("matrix[1][12]") == ["matrix", 1, 12]
    
    def test_parse_indices_are_ints(self):
        """Test index segments are integers and names are strings."""
        segments = parse_path("rows[3].cell")
        assert isinstance(segments[1], int)
        assert isinstance(segments[0], str)
    
    def test_parse_empty_and_invalid_input(self):
        """Test empty or non-string input yields no segments."""
        assert parse_path("") == []
        assert parse_path(None) == []
        assert parse_path(42) == []
    
    def test_parse_single_name(self):
        """Test a plain property name."""
        assert parse_path("invoiceNumber") == ["invoiceNumber"]


class TestFormatPath:
    """Test class for path formatting."""
    
    def test_format_mixed_segments(self):
        """Test formatting is the inverse of parsing."""
        assert format_path(["a", 0, "b"]) == "a[0].b"
        assert parse_path(format_path(["x", "y", 2, 3, "z"])) == ["x", "y", 2, 3, "z"]
    
    def test_format_empty(self):
        """Test empty segment list."""
        assert format_path([]) == ""
    
    def test_join_path(self):
        """Test joining a prefix with a child name."""
        assert join_path("", "customer") == "customer"
        assert join_path("customer", "name") == "customer.name"
        assert join_path("positions[0]", "qty") == "positions[0].qty"


class TestGetValue:
    """Test class for reading values by path."""
    
    def setup_method(self):
        """Set up test data before each test."""
        self.data = {
            "customer": {"name": "ACME"},
            "positions": [{"qty": 5}, {"qty": 7}]
        }
    
    def test_get_nested_value(self):
        """Test reading nested object and array values."""
        assert get_value(self.data, "customer.name") == "ACME"
        assert get_value(self.data, "positions[1].qty") == 7
    
    def test_get_missing_returns_none(self):
        """Test unresolved segments return None."""
        assert get_value(self.data, "customer.city") is None
        assert get_value(self.data, "positions[5].qty") is None
        assert get_value(self.data, "unknown.deep[0]") is None
    
    def test_get_kind_mismatch_returns_none(self):
        """Test an index on a dict or a name on a list does not resolve."""
        assert get_value(self.data, "customer[0]") is None
        assert get_value(self.data, "positions.qty") is None
    
    def test_get_custom_default(self):
        """Test the default is returned for missing values."""
        marker = object()
        assert get_value(self.data, "customer.city", marker) is marker
    
    def test_get_empty_path_returns_root(self):
        """Test an empty path addresses the data itself."""
        assert get_value(self.data, "") is self.data
    
    def test_get_with_segment_list(self):
        """Test already parsed segments are accepted."""
        assert get_value(self.data, ["positions", 0, "qty"]) == 5


class TestSetValue:
    """Test class for writing values by path."""
    
    def test_set_creates_intermediate_containers(self):
        """Test writing into an empty dict creates lists and dicts."""
        data = {}
        set_value(data, "positions[0].qty", 5)
        assert data == {"positions": [{"qty": 5}]}
    
    def test_set_returns_same_object(self):
        """Test set mutates in place and returns its input."""
        data = {}
        assert set_value(data, "a.b", 1) is data
    
    def test_set_then_get_round_trip(self):
        """Test a written value is read back as the same object."""
        data = {"customer": {"name": "x"}}
        value = {"street": "Main"}
        for path in ["customer.address", "positions[2].meta.tags[1]", "a.b.c"]:
            set_value(data, path, value)
            assert get_value(data, path) is value
    
    def test_set_pads_list(self):
        """Test writing past the end pads with None."""
        data = {"rows": []}
        set_value(data, "rows[2]", "c")
        assert data == {"rows": [None, None, "c"]}
    
    def test_set_keeps_existing_siblings(self):
        """Test existing containers are reused."""
        data = {"customer": {"name": "ACME"}}
        set_value(data, "customer.city", "Berlin")
        assert data == {"customer": {"name": "ACME", "city": "Berlin"}}
    
    def test_set_overwrites_scalar_with_list(self, caplog):
        """Test a scalar in the way of an index segment is replaced and logged."""
        data = {"positions": "none yet"}
        with caplog.at_level(logging.WARNING, logger="datamodel.path_addressing"):
            set_value(data, "positions[0].qty", 1)
        assert data == {"positions": [{"qty": 1}]}
        assert "Lossy overwrite" in caplog.text
    
    def test_set_overwrites_list_with_dict(self, caplog):
        """Test a list in the way of a name segment is replaced with a dict."""
        data = {"customer": [1, 2]}
        with caplog.at_level(logging.WARNING, logger="datamodel.path_addressing"):
            set_value(data, "customer.name", "ACME")
        assert data == {"customer": {"name": "ACME"}}
        assert "Lossy overwrite" in caplog.text
    
    def test_set_none_intermediate_is_not_reported_as_loss(self, caplog):
        """Test replacing a None placeholder is silent."""
        data = {"customer": None}
        with caplog.at_level(logging.WARNING, logger="datamodel.path_addressing"):
            set_value(data, "customer.name", "ACME")
        assert data == {"customer": {"name": "ACME"}}
        assert "Lossy overwrite" not in caplog.text
    
    def test_set_on_mismatched_root_is_ignored(self):
        """Test the caller's root is never replaced."""
        data = {"a": 1}
        set_value(data, "[0]", "x")
        assert data == {"a": 1}
    
    def test_set_on_list_root(self):
        """Test a list root accepts index paths."""
        data = []
        set_value(data, "[1].name", "b")
        assert data == [None, {"name": "b"}]
    
    def test_set_empty_path_is_ignored(self):
        """Test an empty path writes nothing."""
        data = {"a": 1}
        set_value(data, "", 2)
        assert data == {"a": 1}
