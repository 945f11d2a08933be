"""Lightweight markdown-to-HTML conversion for model replies.

Handles the subset the prompts ask for: ``#``/``##``/``###`` headings,
``*``/``-``/``1.`` list items, ``**bold**`` and ``*italic*``. Tables are
expected to arrive as HTML already and are left alone, as is any other line
that starts with ``<``.

Classification is line-local. A list item never looks at its neighbours, so
numbered and bulleted lines both end up inside ``<ul>``; there is no ``<ol>``
output and no nesting.
"""

import re

_ORDERED_ITEM = re.compile(r"^\d+\.\s")
# Spans never cross a tag, so a span cannot open in one line and close in another
_BOLD = re.compile(r"\*\*([^<]*?)\*\*")
_ITALIC = re.compile(r"\*([^*<]*?)\*")
_P_BEFORE_BLOCK = re.compile(r"<p><(ul|ol|table)>")
_P_AFTER_BLOCK = re.compile(r"</(ul|ol|table)></p>")


def convert_line(line: str) -> tuple[str, bool]:
    """
    Render a single line as block-level HTML.

    Returns:
        Tuple of (html, is_list_item)
    """
    if line.startswith("### "):
        return f"<h3>{line[4:]}</h3>", False
    if line.startswith("## "):
        return f"<h2>{line[3:]}</h2>", False
    if line.startswith("# "):
        return f"<h1>{line[2:]}</h1>", False

    if line.startswith("* ") or line.startswith("- "):
        return f"<li>{line[2:]}</li>", True
    if _ORDERED_ITEM.match(line):
        return f"<li>{_ORDERED_ITEM.sub('', line, count=1)}</li>", True

    stripped = line.strip()
    if stripped and not stripped.startswith("<"):
        return f"<p>{line}</p>", False

    # Blank lines and raw HTML pass through
    return line, False


def convert_blocks(markdown: str) -> str:
    """
    Convert every line and wrap each run of list items in one ``<ul>``.

    Blank lines between two items do not break the run.
    """
    blocks: list[str] = []
    items: list[str] = []
    gap: list[str] = []

    def flush() -> None:
        if items:
            blocks.append(f"<ul>{''.join(items)}</ul>")
            items.clear()
        blocks.extend(gap)
        gap.clear()

    for line in markdown.split("\n"):
        html, is_item = convert_line(line)
        if is_item:
            gap.clear()
            items.append(html)
        elif items and not line.strip():
            gap.append(html)
        else:
            flush()
            blocks.append(html)
    flush()

    return "".join(blocks)


def apply_inline_formatting(html: str) -> str:
    """Bold first, so single-asterisk matching can't eat a bold span."""
    html = _BOLD.sub(r"<strong>\1</strong>", html)
    return _ITALIC.sub(r"<em>\1</em>", html)


def markdown_to_html(markdown: str) -> str:
    """Convert the supported markdown subset to HTML. Never raises."""
    if not markdown:
        return ""

    html = convert_blocks(markdown)
    html = apply_inline_formatting(html)

    # A paragraph can't contain a list or table
    html = _P_BEFORE_BLOCK.sub(r"<\1>", html)
    return _P_AFTER_BLOCK.sub(r"</\1>", html)
