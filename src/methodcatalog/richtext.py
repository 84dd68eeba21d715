"""Rich-text collaborator used by form screens for descriptions."""

from __future__ import annotations

import re
from html.parser import HTMLParser
from typing import Protocol

_BLOCK_TAGS = frozenset(
    {"p", "div", "br", "li", "ul", "ol", "h1", "h2", "h3", "h4", "h5", "h6", "tr", "table"}
)
_SKIP_TAGS = frozenset({"script", "style"})
_BLANK_LINES = re.compile(r"\n\s*\n+")


class RichTextConverter(Protocol):
    """Converts between the stored rich form, editor HTML and plain text."""

    def rich_to_html(self, rich: str) -> str: ...

    def html_to_rich(self, html_text: str) -> str: ...

    def html_to_plain_text(self, html_text: str) -> str: ...


class _TextExtractor(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._parts: list[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:  # noqa: ARG002
        if tag in _SKIP_TAGS:
            self._skip_depth += 1
        elif tag in _BLOCK_TAGS:
            self._parts.append("\n")

    def handle_endtag(self, tag: str) -> None:
        if tag in _SKIP_TAGS:
            self._skip_depth = max(0, self._skip_depth - 1)
        elif tag in _BLOCK_TAGS:
            self._parts.append("\n")

    def handle_data(self, data: str) -> None:
        if not self._skip_depth:
            self._parts.append(data)

    def text(self) -> str:
        joined = "".join(self._parts)
        lines = [" ".join(line.split()) for line in joined.splitlines()]
        return _BLANK_LINES.sub("\n\n", "\n".join(lines)).strip()


class HtmlRichTextConverter:
    """Treats HTML as the rich form. Plain text is the markup stripped out."""

    def rich_to_html(self, rich: str) -> str:
        return rich

    def html_to_rich(self, html_text: str) -> str:
        return html_text

    def html_to_plain_text(self, html_text: str) -> str:
        if not html_text:
            return ""
        parser = _TextExtractor()
        parser.feed(html_text)
        parser.close()
        return parser.text()
