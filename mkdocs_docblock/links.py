"""
HTML link builders for documented elements and external URLs.
"""

from __future__ import annotations

import re

from markupsafe import escape

from .elements import ElementKind

_URL_UNSAFE_RE = re.compile(r"[^\w.-]+")

_KIND_URL_PREFIX = {
    ElementKind.CLASS: "class",
    ElementKind.INTERFACE: "class",
    ElementKind.TRAIT: "class",
    ElementKind.FUNCTION: "function",
    ElementKind.CONSTANT: "constant",
}


def element_classes(element):
    classes = []
    if element.deprecated:
        classes.append("deprecated")
    if not element.valid:
        classes.append("invalid")
    return classes


class LinkBuilder:
    def build(self, url, text, classes=()):
        label = escape(text)
        attrs = f' href="{escape(url)}"'
        if classes:
            attrs += f' class="{escape(" ".join(classes))}"'
        return f"<a{attrs}>{label}</a>"


def _slug(name):
    return _URL_UNSAFE_RE.sub(".", name.lstrip("\\")).strip(".")


def default_url(element):
    """ApiGen-style file naming: ``class-App.Model.User.html#_save``."""
    if element.is_member:
        owner = f"class-{_slug(element.declaring_class)}.html"
        if element.kind == ElementKind.METHOD:
            return f"{owner}#_{element.name}"
        if element.kind == ElementKind.PROPERTY:
            return f"{owner}#${element.name}"
        return f"{owner}#{element.name}"
    prefix = _KIND_URL_PREFIX.get(element.kind, "element")
    name = f"{element.namespace}\\{element.name}" if element.namespace else element.name
    return f"{prefix}-{_slug(name)}.html"


class ElementLinkFactory:
    """Renders symbol links and external links.

    ``url_for`` decides where an element lives; the factory only builds the
    markup around it.
    """

    def __init__(self, url_for=None, link_builder=None):
        self.url_for = url_for or default_url
        self.link_builder = link_builder or LinkBuilder()

    def render_symbol_link(self, element, classes=()):
        return self.link_builder.build(self.url_for(element), element.qualified_name, classes)

    def render_external_link(self, url, label=""):
        return self.link_builder.build(url, label or url)
