"""
Markdown rendering of docblock text.

Block mode renders whole descriptions; line mode renders a single line and
drops the paragraph wrapper so the result can sit inside table cells and
definition lists.
"""

from __future__ import annotations

import re

import markdown

DEFAULT_EXTENSIONS = ("fenced_code", "tables", "sane_lists")

_SINGLE_PARAGRAPH_RE = re.compile(r"^<p>(.*)</p>$", re.DOTALL)


class MarkdownMarkup:
    def __init__(self, extensions=DEFAULT_EXTENSIONS):
        self.extensions = list(extensions)

    def _convert(self, text):
        # Markdown instances are not reentrant
        md = markdown.Markdown(output_format="html", extensions=self.extensions)
        return md.convert(text)

    def block(self, text):
        if not text:
            return ""
        return self._convert(text)

    def line(self, text):
        if not text:
            return ""
        html = self._convert(text).strip()
        m = _SINGLE_PARAGRAPH_RE.match(html)
        if m and "<p>" not in m.group(1):
            return m.group(1)
        return html
