"""
Signature Renderer -- Determinism and Escaping Tests

Render the same tree many times, verify byte-identical output.
User content is escaped; {{placeholder}} tokens pass through untouched.
"""

from signature_builder.kernel.operations import insert_op, style_op, update_op
from signature_builder.kernel.reducer import replay
from signature_builder.kernel.renderer import render
from signature_builder.kernel.types import (
    ColumnTarget,
    Heading,
    Image,
    Paragraph,
    RenderOptions,
    tree_from_dict,
    tree_to_dict,
)


def make_ops():
    return [
        insert_op("heading", block_id="h"),
        update_op("h", content="{{name}}"),
        insert_op("layout", block_id="L"),
        insert_op("image", ColumnTarget("L", 0), block_id="logo"),
        insert_op("paragraph", ColumnTarget("L", 1), block_id="role"),
        update_op("role", content="{{role}}\n{{email}} | {{phone}}"),
        style_op("role", "content", color="#334155", fontSize="14px"),
        insert_op("spacer", block_id="s"),
        insert_op("button", block_id="b"),
        update_op("b", content="Book a call", link_target="https://example.com/book"),
    ]


class TestDeterminism:
    def test_hundred_renders_identical(self):
        tree = replay(make_ops())
        first = render(tree)
        for _ in range(100):
            assert render(tree) == first

    def test_equal_trees_render_equal(self):
        a = replay(make_ops())
        b = replay(make_ops())
        assert render(a) == render(b)

    def test_serialized_tree_renders_identical(self):
        tree = replay(make_ops())
        restored = tree_from_dict(tree_to_dict(tree))
        assert render(restored) == render(tree)

    def test_style_key_order_preserved(self):
        tree = [Paragraph(id="p", content_style={"fontSize": "14px", "color": "#000"})]
        html = render(tree, RenderOptions(fragment=True))
        assert '<p style="font-size:14px;color:#000;">' in html


class TestPlaceholders:
    def test_placeholders_untouched(self):
        html = render(replay(make_ops()))
        for token in ("{{name}}", "{{role}}", "{{email}}", "{{phone}}"):
            assert token in html

    def test_placeholder_with_newline(self):
        html = render(replay(make_ops()))
        assert "{{role}}<br>{{email}} | {{phone}}" in html


class TestEscaping:
    def test_text_escaped(self):
        html = render([Heading(id="h", content="<script>alert('x')</script>")], RenderOptions(fragment=True))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_attribute_escaped(self):
        tree = [Image(id="i", image_source='https://example.com/a.png" onerror="x')]
        html = render(tree, RenderOptions(fragment=True))
        assert 'onerror="x"' not in html
        assert "&quot;" in html

    def test_style_value_escaped(self):
        tree = [Paragraph(id="p", content="x", content_style={"color": '"><b>'})]
        html = render(tree, RenderOptions(fragment=True))
        assert "<b>" not in html

    def test_ampersand(self):
        html = render([Paragraph(id="p", content="R&D")], RenderOptions(fragment=True))
        assert "R&amp;D" in html
