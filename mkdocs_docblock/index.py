"""
Symbol index loading.

The symbol index is produced by an external source parser and lists the
documented elements as YAML (JSON works too). Example entry::

    - name: User
      kind: class
      namespace: App\\Model
      page: api/model.md
      aliases: {Repository: App\\Data\\Repository}
      short_description: A registered user.
      annotations:
        - [see, Repository]
      members:
        - name: save
          kind: method
          annotations:
            - [return, bool true on success]
"""

from __future__ import annotations

import logging

import yaml

from .elements import DocElement, ElementKind
from .resolver import SymbolTable

log = logging.getLogger("mkdocs.plugins.docblock")


def _annotations(raw):
    if raw is not None and not isinstance(raw, list):
        log.warning("docblock: ignoring annotations %r, expected a list", raw)
        return []
    out = []
    for item in raw or []:
        if isinstance(item, dict):
            out.extend((str(k), "" if v is None else str(v)) for k, v in item.items())
        elif isinstance(item, (list, tuple)) and item:
            value = item[1] if len(item) > 1 else ""
            out.append((str(item[0]), "" if value is None else str(value)))
        else:
            log.warning("docblock: ignoring malformed annotation %r", item)
    return out


def _text(value):
    return "" if value is None else str(value)


def _element(entry, parent=None):
    if not isinstance(entry, dict) or not entry.get("name"):
        log.error("docblock: bad symbol entry %r, skipping", entry)
        return None
    try:
        kind = ElementKind(str(entry.get("kind", "method" if parent else "class")).lower())
    except ValueError:
        log.warning("docblock: unknown kind %r for %s, skipping", entry.get("kind"), entry["name"])
        return None

    aliases = entry.get("aliases")
    if aliases is None:
        aliases = parent.aliases if parent else {}
    if not isinstance(aliases, dict):
        log.error("docblock: aliases of %s must be a mapping, skipping", entry["name"])
        return None

    element = DocElement(
        name=str(entry["name"]).lstrip("$"),
        kind=kind,
        namespace=_text(entry.get("namespace", parent.namespace if parent else "")).strip("\\"),
        declaring_class=parent.qualified_name if parent else "",
        deprecated=bool(entry.get("deprecated", False)),
        valid=bool(entry.get("valid", True)),
        short_description=_text(entry.get("short_description")),
        long_description=_text(entry.get("long_description")),
        aliases={str(k): str(v) for k, v in aliases.items()},
        annotations=_annotations(entry.get("annotations")),
        page=_text(entry.get("page")) or (parent.page if parent else ""),
    )
    members = entry.get("members") or []
    if not isinstance(members, list):
        log.error("docblock: members of %s must be a list, ignoring them", entry["name"])
        members = []
    if element.is_class_shaped:
        for raw in members:
            member = _element(raw, element)
            if member is not None:
                element.members.append(member)
    return element


def build_symbol_table(entries):
    elements = []
    for entry in entries or []:
        element = _element(entry)
        if element is not None:
            elements.append(element)
    return SymbolTable(elements)


def load_symbol_index(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        log.error("docblock: cannot read symbol index %s: %s", path, exc)
        return SymbolTable()
    except yaml.YAMLError as exc:
        log.error("docblock: malformed symbol index %s: %s", path, exc)
        return SymbolTable()

    if isinstance(data, dict):
        data = data.get("symbols", [])
    if not isinstance(data, list):
        log.error("docblock: symbol index %s must be a list of symbols", path)
        return SymbolTable()
    return build_symbol_table(data)
