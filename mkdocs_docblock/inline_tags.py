"""
Inline ``{@name ...}`` tag scanning.

Two passes use this scanner. The ``{@internal}`` pass runs on raw docblock
text before Markdown rendering and tracks nested braces; the
``{@link}``/``{@see}`` pass runs on rendered HTML and stops at the first
closing brace.
"""

from __future__ import annotations

from typing import Callable, Iterator, NamedTuple, Optional

INTERNAL_TAG = "internal"
LINK_TAGS = frozenset({"link", "see"})


class InlineTag(NamedTuple):
    name: str
    content: Optional[str]
    start: int
    end: int


def _word_end(text, pos):
    while pos < len(text) and (text[pos].isalnum() or text[pos] == "_"):
        pos += 1
    return pos


def _closing_brace(text, pos, nested):
    """Index of the ``}`` closing a tag whose content starts at *pos*, or -1.

    With *nested*, balanced ``{ }`` pairs inside the content are skipped and
    the first unmatched ``}`` terminates.
    """
    depth = 0
    for i in range(pos, len(text)):
        ch = text[i]
        if ch == "{" and nested:
            depth += 1
        elif ch == "}":
            if depth == 0:
                return i
            depth -= 1
    return -1


def _match_at(text, start, names, nested):
    name_end = _word_end(text, start + 2)
    if name_end == start + 2 or name_end >= len(text):
        return None
    name = text[start + 2 : name_end]
    if names is not None and name not in names:
        return None

    if text[name_end] == "}":
        return InlineTag(name, None, start, name_end + 1)
    if not text[name_end].isspace():
        return None

    content_start = name_end
    while content_start < len(text) and text[content_start].isspace():
        content_start += 1
    close = _closing_brace(text, content_start, nested)
    if close == -1:
        return None
    return InlineTag(name, text[content_start:close] or None, start, close + 1)


def iter_tags(text, names=None, nested=True) -> Iterator[InlineTag]:
    """Yield top-level tags in *text*; tags nested in a match are not yielded."""
    pos = 0
    while True:
        start = text.find("{@", pos)
        if start == -1:
            return
        tag = _match_at(text, start, names, nested)
        if tag is None:
            pos = start + 1
            continue
        yield tag
        pos = tag.end


def replace_tags(
    text: str,
    callback: Callable[[InlineTag], Optional[str]],
    names=None,
    nested=True,
) -> str:
    """Replace each tag with ``callback(tag)``; ``None`` keeps the tag as is."""
    if not text or "{@" not in text:
        return text or ""
    out = []
    last = 0
    for tag in iter_tags(text, names, nested):
        replacement = callback(tag)
        out.append(text[last : tag.start])
        out.append(text[tag.start : tag.end] if replacement is None else replacement)
        last = tag.end
    out.append(text[last:])
    return "".join(out)


def resolve_internal_tags(text, show_internal):
    def replace(tag):
        if tag.name != INTERNAL_TAG:
            return None
        if show_internal and tag.content is not None:
            return tag.content
        return ""

    return replace_tags(text, replace)


def resolve_link_tags(text, render):
    """Replace ``{@link ...}`` and ``{@see ...}`` with ``render(content)``.

    Tags without content are left untouched.
    """

    def replace(tag):
        if tag.content is None:
            return None
        return render(tag.content)

    return replace_tags(text, replace, names=LINK_TAGS, nested=False)
