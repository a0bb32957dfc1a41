"""
Signature Kernel — Renderer

Pure function: (tree, options?) → HTML string
No IO. Deterministic: same tree in, byte-identical markup out.

Email clients get nested tables, inline styles and attribute fallbacks
(bgcolor, width, valign) because many of them drop <style> blocks and
ignore most CSS layout. Every block becomes one row of its enclosing table:

    <tr><td style="{container_style}">{block markup}</td></tr>

Layouts nest a table with one cell per column, each holding its own rows.
Rows are concatenated without whitespace; stray text nodes between table
cells show up as gaps in some clients.
"""

from __future__ import annotations

import re
from html import escape as _html_escape

from signature_builder.kernel.styles import inline_style, merge_styles, style_value
from signature_builder.kernel.types import (
    Block,
    Button,
    Heading,
    Image,
    Layout,
    Paragraph,
    RenderOptions,
    Spacer,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(tree: list[Block], options: RenderOptions | None = None) -> str:
    """
    Render the whole tree as an email-safe HTML document.
    An empty tree renders the empty outer table shell.
    """
    opts = options or RenderOptions()
    table = _render_outer_table(tree, opts)
    if opts.fragment:
        return table

    parts: list[str] = []
    parts.append("<!DOCTYPE html>")
    parts.append("<html>")
    parts.append("<head>")
    parts.append('<meta charset="utf-8">')
    parts.append('<meta name="viewport" content="width=device-width, initial-scale=1.0">')
    parts.append("<style>body{margin:0;padding:0;}p,h1{margin:0;}</style>")
    parts.append("</head>")
    parts.append(f'<body style="background-color:{escape(opts.body_background)};">')
    parts.append(f"<center>{table}</center>")
    parts.append("</body>")
    parts.append("</html>")
    return "\n".join(parts)


def render_rows(blocks: list[Block]) -> str:
    """One <tr> per block, in order."""
    return "".join(_render_row(b) for b in blocks)


def render_block(block: Block) -> str:
    """The markup of a single block, without its wrapping row."""
    return _render_block(block)


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

_PRESENTATION = 'border="0" cellpadding="0" cellspacing="0" role="presentation"'


def _render_outer_table(tree: list[Block], opts: RenderOptions) -> str:
    style = inline_style(
        {
            "background": opts.canvas_background,
            "width": "100%",
            "maxWidth": f"{opts.max_width}px",
        }
    )
    return f'<table align="center" {_PRESENTATION} style="{style}"><tbody>{render_rows(tree)}</tbody></table>'


# ---------------------------------------------------------------------------
# Rows and blocks
# ---------------------------------------------------------------------------


def _render_row(block: Block) -> str:
    return f"<tr><td{_style_attr(block.container_style)}>{_render_block(block)}</td></tr>"


def _render_block(block: Block) -> str:
    if isinstance(block, Heading):
        return f"<h1{_style_attr(block.content_style)}>{_render_text(block.content)}</h1>"

    if isinstance(block, Paragraph):
        return f"<p{_style_attr(block.content_style)}>{_render_text(block.content)}</p>"

    if isinstance(block, Button):
        return _render_button(block)

    if isinstance(block, Image):
        return _render_image(block)

    if isinstance(block, Spacer):
        height = _pixels(block.spacer_height)
        return f'<div style="height:{height}px;line-height:{height}px;font-size:1px;">&#8202;</div>'

    if isinstance(block, Layout):
        return _render_layout(block)

    return ""


def _render_button(block: Button) -> str:
    background = style_value(block.content_style, "backgroundColor", "#4f46e5")
    radius = style_value(block.content_style, "borderRadius", "0px")
    align = style_value(block.container_style, "textAlign")

    cell_style = inline_style({"borderRadius": radius, "background": background})
    link_style = inline_style(merge_styles(block.content_style, {"display": "inline-block"}))
    align_attr = f' align="{escape(align)}"' if align else ""

    return (
        f"<table{align_attr} {_PRESENTATION}><tr>"
        f'<td align="center" bgcolor="{escape(background)}" style="{cell_style}">'
        f'<a href="{escape(block.link_target)}" target="_blank" style="{link_style}">'
        f"{_render_text(block.content)}</a>"
        f"</td></tr></table>"
    )


_PX_RE = re.compile(r"^(\d+)(px)?$")


def _render_image(block: Image) -> str:
    # An explicit width attribute keeps Outlook from rendering the image at natural size
    match = _PX_RE.match(style_value(block.content_style, "width"))
    width = match.group(1) if match else "100%"

    img = (
        f'<img src="{escape(block.image_source)}" alt="" width="{width}"'
        f"{_style_attr(block.content_style)}>"
    )
    if block.link_target:
        return f'<a href="{escape(block.link_target)}" target="_blank">{img}</a>'
    return img


def _render_layout(block: Layout) -> str:
    width = _format_percent(100 / block.column_count)
    cells: list[str] = []
    for column in block.columns:
        if column:
            inner = f'<table width="100%" {_PRESENTATION}><tbody>{render_rows(column)}</tbody></table>'
            cells.append(f'<td width="{width}%" valign="top" style="padding:0 5px;">{inner}</td>')
        else:
            # Keeps the grid: the cell exists but takes no height
            cells.append(
                f'<td width="{width}%" valign="top" style="padding:0 5px;font-size:0;line-height:0;">&nbsp;</td>'
            )
    return f'<table width="100%" {_PRESENTATION}><tbody><tr>{"".join(cells)}</tr></tbody></table>'


def _pixels(value: object) -> int:
    """20 or "20px" → 20; any other value → 0"""
    match = _PX_RE.match(str(value).strip())
    return int(match.group(1)) if match else 0


def _format_percent(value: float) -> str:
    """50.0 → "50", 33.333… → "33.33" """
    if value == int(value):
        return str(int(value))
    return f"{value:.2f}"


def _style_attr(styles: dict) -> str:
    css = inline_style(styles)
    return f' style="{css}"' if css else ""


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def escape(text: str) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)


def _render_text(text: str) -> str:
    """
    Escape user text verbatim. Newlines become <br>.
    {{placeholders}} pass through untouched.
    """
    text = escape(text)
    return text.replace("\r\n", "\n").replace("\n", "<br>")
