"""
Page renderer for documented elements.

Takes DocElement objects from the symbol index and turns them into Markdown
headings with anchor IDs followed by an HTML body: descriptions and the
annotation list, rendered through DocFilters.
"""

from __future__ import annotations

import re

from markupsafe import escape

from .elements import ElementKind

_KIND_LABELS = {
    ElementKind.CLASS: "Class",
    ElementKind.INTERFACE: "Interface",
    ElementKind.TRAIT: "Trait",
    ElementKind.METHOD: "Method",
    ElementKind.PROPERTY: "Property",
    ElementKind.CONSTANT: "Constant",
    ElementKind.FUNCTION: "Function",
    ElementKind.FILE: "",
}

_KIND_ANCHOR_PREFIX = {
    ElementKind.CLASS: "class",
    ElementKind.INTERFACE: "interface",
    ElementKind.TRAIT: "trait",
    ElementKind.METHOD: "method",
    ElementKind.PROPERTY: "property",
    ElementKind.CONSTANT: "constant",
    ElementKind.FUNCTION: "function",
    ElementKind.FILE: "file",
}

_ANCHOR_UNSAFE_RE = re.compile(r"[^\w-]+")


def anchor_id(element):
    prefix = _KIND_ANCHOR_PREFIX.get(element.kind, "sym")
    slug = _ANCHOR_UNSAFE_RE.sub("-", element.qualified_name).strip("-")
    return f"{prefix}-{slug}"


class RenderConfig:
    def __init__(self, *, heading_level=3, members=True, annotations=True):
        self.heading_level = heading_level
        self.members = members
        self.annotations = annotations


def _heading(text, level):
    return f"{'#' * level} {text}"


def _annotation_list(element, filters):
    rows = []
    for name, value in element.annotations:
        html = filters.annotation(name, value, element)
        if not html:
            continue
        rows.append(f'<dt>@{escape(name)}</dt><dd>{html}</dd>')
    if not rows:
        return ""
    return '<dl class="annotations">' + "".join(rows) + "</dl>"


def render_element(element, filters, cfg=None):
    if cfg is None:
        cfg = RenderConfig()

    parts = []
    label = _KIND_LABELS.get(element.kind, "")
    htxt = f"`{element.qualified_name}`"
    if label:
        htxt = f"{label}: {htxt}"

    parts.append(f'<a id="{anchor_id(element)}"></a>')
    parts.append("")
    parts.append(_heading(htxt, cfg.heading_level))
    parts.append("")

    classes = ["docblock"]
    if element.deprecated:
        classes.append("deprecated")
    if not element.valid:
        classes.append("invalid")

    body = []
    if element.short_description:
        body.append(filters.short_description(element, block=True))
    if element.long_description:
        body.append(filters.long_description(element))
    if cfg.annotations:
        body.append(_annotation_list(element, filters))
    body = [b.strip() for b in body if b and b.strip()]
    if body:
        parts += [f'<div class="{" ".join(classes)}">', *body, "</div>", ""]

    if cfg.members and element.members:
        mcfg = RenderConfig(
            heading_level=cfg.heading_level + 1,
            members=True,
            annotations=cfg.annotations,
        )
        for member in element.members:
            parts.append(render_element(member, filters, mcfg))

    return "\n".join(parts)


def render_single(table, name, filters, cfg=None):
    element = table.find(name.strip())
    if element is None:
        return f"<!-- docblock: symbol '{escape(name)}' not found -->\n"
    return render_element(element, filters, cfg)
