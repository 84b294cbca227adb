"""
Symbol table and reference resolution.

ElementResolver maps textual references found in docblocks (``Foo``,
``\\App\\Foo``, ``Foo::bar()``, ``$name``, ``helper()``) to documented
elements, looking in the context element's scope before the global table.
"""

from __future__ import annotations

import logging

from .elements import ElementKind, Resolved, Unresolved

log = logging.getLogger("mkdocs.plugins.docblock")

_SIMPLE_TYPES = frozenset(
    {
        "array",
        "bool",
        "boolean",
        "callable",
        "callback",
        "double",
        "false",
        "float",
        "int",
        "integer",
        "iterable",
        "mixed",
        "never",
        "null",
        "object",
        "resource",
        "scalar",
        "string",
        "true",
        "void",
    }
)
_SELF_NAMES = frozenset({"self", "static", "$this"})


def _key(name):
    return name.lstrip("\\").lower()


class SymbolTable:
    """Read-only lookup of documented elements by qualified name."""

    def __init__(self, elements=()):
        self._classes = {}
        self._functions = {}
        self._constants = {}
        self._members = {}
        for element in elements:
            self.add(element)

    def add(self, element):
        kind = element.kind
        qname = element.qualified_name
        if element.is_class_shaped:
            self._classes.setdefault(_key(qname), element)
            for member in element.members:
                self.add(member)
        elif element.is_member:
            cls = _key(element.declaring_class)
            if kind == ElementKind.METHOD:
                self._members.setdefault((cls, "method", element.name.lower()), element)
            elif kind == ElementKind.PROPERTY:
                self._members.setdefault((cls, "property", element.name), element)
            else:
                self._members.setdefault((cls, "constant", element.name), element)
        elif kind == ElementKind.FUNCTION:
            self._functions.setdefault(_key(qname[:-2]), element)
        elif kind == ElementKind.CONSTANT:
            self._constants.setdefault(qname.lstrip("\\"), element)

    def __len__(self):
        return len(self._classes) + len(self._functions) + len(self._constants) + len(
            self._members
        )

    def get_class(self, name):
        return self._classes.get(_key(name))

    def get_function(self, name):
        return self._functions.get(_key(name))

    def get_constant(self, name):
        return self._constants.get(name.lstrip("\\"))

    def get_member(self, class_name, member):
        cls = _key(class_name)
        if member.endswith("()"):
            return self._members.get((cls, "method", member[:-2].lower()))
        if member.startswith("$"):
            return self._members.get((cls, "property", member[1:]))
        return (
            self._members.get((cls, "constant", member))
            or self._members.get((cls, "property", member))
            or self._members.get((cls, "method", member.lower()))
        )

    def find(self, qualified_name):
        """Look up an element by its exact ``qualified_name``."""
        if "::" in qualified_name:
            cls, _, member = qualified_name.partition("::")
            return self.get_member(cls, member)
        if qualified_name.endswith("()"):
            return self.get_function(qualified_name[:-2])
        return self.get_class(qualified_name) or self.get_constant(qualified_name)


class ElementResolver:
    def __init__(self, table):
        self.table = table

    def resolve(self, reference, context):
        definition = (reference or "").strip()
        guess = definition.lstrip("\\")
        if not definition or definition.lower() in _SIMPLE_TYPES:
            return Unresolved(guess)
        element = self._find(definition, context)
        if element is None:
            log.debug("docblock: unresolved reference %r", definition)
            return Unresolved(guess)
        return Resolved(element)

    # ── lookup ──

    def _scope_class(self, context):
        if context is None:
            return ""
        if context.is_class_shaped:
            return context.qualified_name
        return context.declaring_class

    def _find(self, definition, context):
        scope = self._scope_class(context)

        if "::" in definition:
            class_part, _, member = definition.partition("::")
            if class_part in _SELF_NAMES:
                cls = self.table.get_class(scope) if scope else None
            else:
                cls = self._find_class(class_part, context)
            if cls is None:
                return None
            return self.table.get_member(cls.qualified_name, member)

        if scope and (definition.endswith("()") or definition.startswith("$")):
            member = self.table.get_member(scope, definition)
            if member is not None:
                return member

        if definition.startswith("$"):
            return None

        if definition.endswith("()"):
            return self._find_in_namespace(definition[:-2], context, self.table.get_function)

        cls = self._find_class(definition, context)
        if cls is not None:
            return cls
        if scope:
            member = self.table.get_member(scope, definition)
            if member is not None:
                return member
        return self._find_in_namespace(
            definition, context, self.table.get_constant
        ) or self._find_in_namespace(definition, context, self.table.get_function)

    def _find_class(self, name, context):
        if name.startswith("\\"):
            return self.table.get_class(name)
        if context is not None:
            first, sep, rest = name.partition("\\")
            aliases = {k.lower(): v for k, v in context.aliases.items()}
            target = aliases.get(first.lower())
            if target:
                found = self.table.get_class(f"{target}\\{rest}" if sep else target)
                if found is not None:
                    return found
        return self._find_in_namespace(name, context, self.table.get_class)

    def _find_in_namespace(self, name, context, lookup):
        if name.startswith("\\"):
            return lookup(name)
        namespace = context.namespace if context is not None else ""
        if namespace:
            found = lookup(f"{namespace}\\{name}")
            if found is not None:
                return found
        return lookup(name)
