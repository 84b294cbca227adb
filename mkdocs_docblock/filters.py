"""
Docblock text filters.

DocFilters turns docblock descriptions and annotation values into HTML:
inline ``{@internal}`` / ``{@link}`` / ``{@see}`` tags, Markdown, and links
to other documented elements. Every entry point takes the element the text
belongs to; references are resolved in that element's scope.

Unresolvable references never raise. Each entry point has its own fallback
(escaped guess name, original text, or nothing) and those differences are
part of the output format.
"""

from __future__ import annotations

import re

from markupsafe import Markup, escape

from .elements import Resolved
from .highlighter import SourceCodeHighlighter
from .inline_tags import resolve_internal_tags, resolve_link_tags
from .links import ElementLinkFactory, element_classes
from .markup import DEFAULT_EXTENSIONS, MarkdownMarkup
from .strings import (
    dedent_once,
    is_uri,
    parse_type,
    scheme,
    split,
    split_list,
    split_types,
)

# Text outside <code>/<pre> spans gets its hand-wrapped lines merged
_MERGE_SPANS_RE = re.compile(r"(?:<(code|pre)>.+?</\1>)|([^<]*)", re.DOTALL)
_WRAPPED_LINE_RE = re.compile(r"\n(?:\t| )+")
_DESCRIPTION_START_RE = re.compile(r"[\n\r\t $]")


class FilterConfig:
    def __init__(self, *, show_internal=False, markdown_extensions=DEFAULT_EXTENSIONS):
        self.show_internal = show_internal
        self.markdown_extensions = tuple(markdown_extensions)


class DocFilters:
    def __init__(
        self,
        resolver,
        links=None,
        markup=None,
        highlighter=None,
        config=None,
    ):
        self.config = config or FilterConfig()
        self.resolver = resolver
        self.links = links or ElementLinkFactory()
        self.markup = markup or MarkdownMarkup(self.config.markdown_extensions)
        self.highlighter = highlighter or SourceCodeHighlighter()

    # ── links ──

    def resolve_link(self, definition, element):
        """Link to the element *definition* refers to.

        ``Foo[]`` renders ``<code><a ...>Foo</a>[]</code>`` when ``Foo``
        resolves. Otherwise the resolver's guess name comes back escaped and
        bare: no ``[]`` and no ``<code>`` wrapper.
        """
        if not definition:
            return ""
        return self._type_link(parse_type(definition), element)

    def type_links(self, annotation, element):
        tokens, _ = split_types(annotation)
        return "|".join(self._type_link(token, element) for token in tokens)

    def _type_link(self, token, element):
        if not token.name:
            return ""
        result = self.resolver.resolve(token.name, element)
        if isinstance(result, Resolved):
            return f"<code>{self._symbol_link(result.element)}{token.suffix}</code>"
        return str(escape(result.guess or token.name.lstrip("\\")))

    def _symbol_link(self, target):
        return self.links.render_symbol_link(target, element_classes(target))

    def _resolves(self, reference, element):
        return isinstance(self.resolver.resolve(reference, element), Resolved)

    # ── descriptions ──

    def description(self, annotation, element):
        m = _DESCRIPTION_START_RE.search(annotation)
        text = annotation[m.start() :].strip() if m else ""
        return self.doc(text or annotation, element)

    def short_description(self, element, block=False):
        return self.doc(element.short_description, element, block)

    def long_description(self, element):
        def merge(m):
            if m.group(2):
                return _WRAPPED_LINE_RE.sub(" ", m.group(2))
            return m.group(0)

        text = _MERGE_SPANS_RE.sub(merge, element.long_description or "")
        return self.doc(text, element, True)

    def doc(self, text, element, block=False):
        # {@internal} must go before Markdown and {@link} after it
        text = self.internal_tags(text)
        if block:
            text = self.markup.block(text)
        else:
            text = self.markup.line(text)
        return self.link_tags(text, element)

    def internal_tags(self, text):
        return resolve_internal_tags(text or "", self.config.show_internal)

    def link_tags(self, html, element):
        return resolve_link_tags(html, lambda content: self._link_tag(content, element))

    def _link_tag(self, content, element):
        target, description = split(content)
        if is_uri(target):
            # Markdown already escaped the text
            url = Markup(target).unescape()
            label = Markup(description).unescape()
            return self.links.render_external_link(url, label or url)

        token = parse_type(target)
        result = self.resolver.resolve(token.name, element)
        if not isinstance(result, Resolved):
            return content
        link = f"<code>{self._symbol_link(result.element)}{token.suffix}</code>"
        return f"{link} {description}" if description else link

    # ── annotations ──

    def annotation(self, name, value, element):
        if name in ("return", "throws"):
            return self._types_with_description(value, element)
        if name == "license":
            url, description = split(value)
            if scheme(url) and not is_uri(url):
                return str(escape(value))
            return self.links.render_external_link(url, description or url)
        if name == "link":
            url, description = split(value)
            if is_uri(url):
                return self.links.render_external_link(url, description or url)
            return ""
        if name == "see":
            return self._see(value, element)
        if name in ("uses", "usedby"):
            return self._uses(value, element)
        return self.doc(value, element)

    def _types_with_description(self, value, element):
        _, description = split_types(value)
        out = self.type_links(value, element)
        if description:
            out += "<br>" + self.doc(description, element)
        return out

    def _see(self, value, element):
        doc = []
        for item in split_list(value):
            if self._resolves(item, element):
                doc.append(self.type_links(item, element))
            else:
                doc.append(self.doc(item, element))
        return ", ".join(doc)

    def _uses(self, value, element):
        target, description = split(value)
        separator = " " if element.is_class_shaped or not description else "<br>"
        # Unresolved targets render nothing, unlike @see and {@link}
        if not self._resolves(target, element):
            return ""
        return (self.type_links(target, element) + separator + str(escape(description))).strip()

    # ── highlighting ──

    def highlight_code(self, source, element):
        token = parse_type(source.lstrip("\\"))
        if token.name and self._resolves(token.name, element):
            return self._type_link(token, element)
        return self.highlighter.highlight(source)

    def highlight_value(self, definition, element):
        return self.highlight_code(dedent_once(definition), element)
