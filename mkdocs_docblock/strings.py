"""
Small text helpers shared by the filters: value splitting, type lists and
absolute URI detection.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_WS_RE = re.compile(r"\s+")
_COMMA_RE = re.compile(r"\s*,\s*")
_SCHEME_RE = re.compile(r"^([a-z][a-z\d+.-]*):(?!:)", re.IGNORECASE)
_URI_RE = re.compile(r"^[a-z][a-z\d+.-]*:(?!:)\S+$", re.IGNORECASE)
_INDENT_RE = re.compile(r"^(?: {4}|\t)", re.MULTILINE)

URI_SCHEMES = frozenset({"http", "https", "ftp", "mailto"})
ARRAY_SUFFIX = "[]"


def split(value):
    """Split *value* on its first run of whitespace.

    Always returns a pair; the second item is ``""`` when there is nothing
    after the first token.
    """
    parts = _WS_RE.split(value.strip(), maxsplit=1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def split_list(value):
    return _COMMA_RE.split(value.strip())


def scheme(value):
    m = _SCHEME_RE.match(value or "")
    return m.group(1).lower() if m else ""


def is_uri(value):
    """Absolute URI with one of the URI_SCHEMES."""
    return bool(value) and _URI_RE.match(value) is not None and scheme(value) in URI_SCHEMES


def dedent_once(text):
    return _INDENT_RE.sub("", text)


@dataclass(frozen=True)
class TypeToken:
    name: str
    suffix: str = ""


def parse_type(definition):
    """Turn ``Foo[]`` into ``TypeToken("Foo", "[]")``."""
    definition = definition.strip()
    if definition.endswith(ARRAY_SUFFIX):
        return TypeToken(definition[: -len(ARRAY_SUFFIX)], ARRAY_SUFFIX)
    return TypeToken(definition)


def split_types(value):
    """Split a type-bearing annotation value into type tokens and description.

    ``"int|Foo[] the result"`` gives ``[int, Foo[]]`` and ``"the result"``.
    A value starting with a parameter name (``$x ...``) carries no type.
    """
    types, description = split(value)
    if not types or types.startswith("$"):
        return [], description
    return [parse_type(t) for t in types.split("|")], description
