"""Style model tests: kebab-case names, inline serialization, merging."""

from signature_builder.kernel.styles import inline_style, merge_styles, style_value, to_kebab_case


class TestKebabCase:
    def test_camel_case(self):
        assert to_kebab_case("backgroundColor") == "background-color"
        assert to_kebab_case("borderTopLeftRadius") == "border-top-left-radius"

    def test_already_lower(self):
        assert to_kebab_case("color") == "color"


class TestInlineStyle:
    def test_order_preserved(self):
        assert inline_style({"fontSize": "14px", "color": "#000"}) == "font-size:14px;color:#000;"

    def test_empty(self):
        assert inline_style({}) == ""

    def test_skips_empty_values(self):
        assert inline_style({"color": "", "padding": None, "margin": "0"}) == "margin:0;"

    def test_numbers(self):
        assert inline_style({"lineHeight": 1.5}) == "line-height:1.5;"

    def test_escapes_values(self):
        assert inline_style({"fontFamily": '"Inter", sans-serif'}) == "font-family:&quot;Inter&quot;, sans-serif;"


class TestMergeStyles:
    def test_override_and_append(self):
        merged = merge_styles({"color": "#000", "padding": "0"}, {"color": "#fff", "margin": "0"})
        assert list(merged.items()) == [("color", "#fff"), ("padding", "0"), ("margin", "0")]

    def test_none_removes(self):
        assert merge_styles({"color": "#000", "padding": "0"}, {"color": None}) == {"padding": "0"}

    def test_inputs_untouched(self):
        base = {"color": "#000"}
        overrides = {"color": "#fff"}
        merge_styles(base, overrides)
        assert base == {"color": "#000"}
        assert overrides == {"color": "#fff"}


class TestStyleValue:
    def test_present(self):
        assert style_value({"width": "120px"}, "width") == "120px"

    def test_default(self):
        assert style_value({}, "width", "100%") == "100%"
        assert style_value({"width": ""}, "width", "auto") == "auto"
