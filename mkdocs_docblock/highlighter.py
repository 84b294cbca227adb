"""PHP source highlighting for constant values and inline code samples."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import PhpLexer


class SourceCodeHighlighter:
    def __init__(self, css_class="php"):
        self.formatter = HtmlFormatter(nowrap=True, cssclass=css_class)

    def highlight(self, source):
        # startinline: values are PHP fragments without an opening tag
        lexer = PhpLexer(startinline=True)
        return highlight(source, lexer, self.formatter).rstrip("\n")
