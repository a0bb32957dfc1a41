"""
Block Type Tests

The tagged union: each kind carries only its own attributes, layouts keep
column_count and columns in agreement, and stored dicts parse back strictly.
"""

import pytest

from signature_builder.kernel.types import Block, Image, Layout, Paragraph, Spacer, tree_from_dict


class TestTaggedUnion:
    def test_kind_tags(self):
        assert Paragraph(id="p").kind == "paragraph"
        assert Layout(id="L").kind == "layout"

    def test_kind_specific_attributes(self):
        assert not hasattr(Spacer(id="s"), "image_source")
        assert not hasattr(Image(id="i"), "spacer_height")

    def test_to_dict(self):
        d = Spacer(id="s", spacer_height=8).to_dict()
        assert d == {"id": "s", "kind": "spacer", "content_style": {}, "container_style": {}, "spacer_height": 8}


class TestLayoutInvariant:
    def test_columns_filled(self):
        assert Layout(id="L", column_count=3).columns == [[], [], []]

    def test_mismatch_rejected(self):
        with pytest.raises(ValueError):
            Layout(id="L", column_count=2, columns=[[]])

    def test_zero_columns_rejected(self):
        with pytest.raises(ValueError):
            Layout(id="L", column_count=0)


class TestFromDict:
    def test_nested_layout(self):
        data = [
            {
                "id": "L",
                "kind": "layout",
                "column_count": 2,
                "columns": [[{"id": "p", "kind": "paragraph", "content": "x"}], []],
            }
        ]
        tree = tree_from_dict(data)
        assert isinstance(tree[0], Layout)
        assert tree[0].columns[0][0] == Paragraph(id="p", content="x")

    def test_missing_fields_take_defaults(self):
        block = Block.from_dict({"id": "s", "kind": "spacer"})
        assert block == Spacer(id="s")

    def test_foreign_keys_ignored(self):
        block = Block.from_dict({"id": "s", "kind": "spacer", "image_source": "x"})
        assert not hasattr(block, "image_source")

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            Block.from_dict({"id": "x", "kind": "video"})

    def test_missing_id(self):
        with pytest.raises(ValueError):
            Block.from_dict({"kind": "heading"})

    def test_tree_must_be_list(self):
        with pytest.raises(ValueError):
            tree_from_dict({"id": "x"})
