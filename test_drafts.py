"""
Unit tests for drafts module.
"""

import json
import pytest

from datamodel.changes import Change
from datamodel.drafts import CREATE, EDIT, Draft, schema_at
from datamodel.exceptions import SchemaPathError
from datamodel.schema_nodes import ArraySchema, LeafSchema


INVOICE_SCHEMA = {
    "properties": {
        "customer": {"type": "object", "properties": {"name": {"type": "string"}}},
        "positions": {
            "type": "array",
            "items": {"type": "object", "properties": {
                "qty": {"type": "number"},
                "tags": {"type": "array", "items": {"type": "string"}}
            }}
        },
        "currency": {"type": "string", "default": "EUR"}
    }
}


@pytest.fixture
def stored_invoice():
    """Stored invoice data as it would come from the backend."""
    return {
        "customer": {"name": "ACME"},
        "positions": [{"qty": 5, "tags": []}, {"qty": 1, "tags": ["rush"]}],
        "currency": "EUR"
    }


class TestSchemaAt:
    """Test cases for schema lookup by data path."""
    
    def test_schema_at_paths(self):
        """Test names step into properties and indices into items."""
        assert isinstance(schema_at(INVOICE_SCHEMA, "positions"), ArraySchema)
        assert schema_at(INVOICE_SCHEMA, "positions[3].qty") == LeafSchema(type="number")
        assert schema_at(INVOICE_SCHEMA, "positions[0].tags[2]") == LeafSchema(type="string")
    
    def test_schema_at_outside_schema(self):
        """Test paths leaving the schema give None."""
        assert schema_at(INVOICE_SCHEMA, "customer.street") is None
        assert schema_at(INVOICE_SCHEMA, "customer[0]") is None


class TestCreateDraft:
    """Test cases for the create flow."""
    
    def test_create_seeds_sample(self):
        """Test a create draft starts from sample data."""
        draft = Draft.create(INVOICE_SCHEMA)
        
        assert draft.flow == CREATE
        assert draft.data == {
            "customer": {"name": "name_example"},
            "positions": [{"qty": 0, "tags": ["tags_example"]}],
            "currency": "EUR"
        }
        assert draft.has_changes() is False
    
    def test_set_and_get(self):
        """Test writes are visible to reads and tracked as changes."""
        draft = Draft.create(INVOICE_SCHEMA).set("customer.name", "Globex")
        
        assert draft.get("customer.name") == "Globex"
        assert draft.changes() == [
            Change(path="customer.name", kind="changed", old="name_example", new="Globex")
        ]
    
    def test_drafts_do_not_share_data(self):
        """Test two drafts of one schema are independent."""
        first = Draft.create(INVOICE_SCHEMA)
        second = Draft.create(INVOICE_SCHEMA)
        
        first.set("positions[0].qty", 7)
        first.add_item("positions")
        
        assert second.get("positions[0].qty") == 0
        assert len(second.get("positions")) == 1
    
    def test_invalid_flow(self):
        """Test an unknown flow is rejected."""
        with pytest.raises(ValueError):
            Draft(INVOICE_SCHEMA, flow="publish")


class TestEditDraft:
    """Test cases for the edit flow."""
    
    def test_edit_copies_stored_data(self, stored_invoice):
        """Test editing never touches the stored instance."""
        draft = Draft.edit(INVOICE_SCHEMA, stored_invoice)
        draft.set("customer.name", "Initech")
        draft.remove_item("positions", 0)
        
        assert stored_invoice["customer"]["name"] == "ACME"
        assert len(stored_invoice["positions"]) == 2
        assert draft.flow == EDIT
        assert draft.has_changes()
    
    def test_edit_without_data(self):
        """Test an edit draft without data starts empty."""
        assert Draft(INVOICE_SCHEMA, flow=EDIT).data == {}


class TestDraftArrays:
    """Test cases for array operations on drafts."""
    
    def test_add_and_remove_item(self, stored_invoice):
        """Test rows are added blank and removed by index."""
        draft = Draft.edit(INVOICE_SCHEMA, stored_invoice)
        
        draft.add_item("positions")
        assert draft.get("positions[2]") == {"qty": 0, "tags": []}
        
        draft.remove_item("positions", 2)
        assert draft.data == stored_invoice
        assert draft.has_changes() is False
    
    def test_nested_array(self, stored_invoice):
        """Test adding to an array inside an array item."""
        draft = Draft.edit(INVOICE_SCHEMA, stored_invoice).add_item("positions[1].tags")
        assert draft.get("positions[1].tags") == ["rush", ""]
    
    def test_move_item(self, stored_invoice):
        """Test rows can be reordered."""
        draft = Draft.edit(INVOICE_SCHEMA, stored_invoice).move_item("positions", 1, 0)
        assert [row["qty"] for row in draft.get("positions")] == [1, 5]
    
    def test_non_array_path_raises(self):
        """Test array operations on other fields raise SchemaPathError."""
        draft = Draft.create(INVOICE_SCHEMA)
        
        with pytest.raises(SchemaPathError) as exc_info:
            draft.add_item("customer")
        assert exc_info.value.actual_kind == "object"
        
        with pytest.raises(SchemaPathError, match="addresses nothing"):
            draft.remove_item("missing", 0)


class TestDraftViews:
    """Test cases for fields, display tree and payload."""
    
    def test_fields_expand_arrays(self, stored_invoice):
        """Test arrays are expanded against the current data."""
        draft = Draft.edit(INVOICE_SCHEMA, stored_invoice)
        
        assert [d.path for d in draft.fields()] == [
            "customer",
            "customer.name",
            "positions",
            "positions[0].qty",
            "positions[0].tags",
            "positions[1].qty",
            "positions[1].tags",
            "positions[1].tags[0]",
            "currency"
        ]
    
    def test_display_tree(self, stored_invoice):
        """Test the display tree reflects the draft data."""
        lines = Draft.edit(INVOICE_SCHEMA, stored_invoice).display_tree()
        assert [line.label for line in lines[:3]] == ["currency", "customer", "name"]
    
    def test_to_payload(self, stored_invoice):
        """Test the JSON payload keeps non-ASCII text."""
        draft = Draft.edit(INVOICE_SCHEMA, stored_invoice).set("customer.name", "Müller & Söhne")
        
        payload = draft.to_payload()
        assert "Müller" in payload
        assert json.loads(payload) == draft.data
        assert json.loads(draft.to_payload(indent=2)) == draft.data
