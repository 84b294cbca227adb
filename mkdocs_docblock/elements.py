"""
Documented elements and resolution results.

A DocElement is one documented symbol from the symbol index (class, method,
property, function, constant) or a documentation page used as a resolution
context. The rendering core only ever reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class ElementKind(Enum):
    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"
    METHOD = "method"
    PROPERTY = "property"
    CONSTANT = "constant"
    FUNCTION = "function"
    FILE = "file"


CLASS_KINDS = frozenset({ElementKind.CLASS, ElementKind.INTERFACE, ElementKind.TRAIT})
MEMBER_KINDS = frozenset({ElementKind.METHOD, ElementKind.PROPERTY, ElementKind.CONSTANT})


@dataclass
class DocElement:
    name: str
    kind: ElementKind
    namespace: str = ""
    declaring_class: str = ""
    deprecated: bool = False
    valid: bool = True
    short_description: str = ""
    long_description: str = ""
    aliases: dict[str, str] = field(default_factory=dict)
    annotations: list[tuple[str, str]] = field(default_factory=list)
    page: str = ""
    members: list[DocElement] = field(default_factory=list)

    @property
    def is_class_shaped(self):
        return self.kind in CLASS_KINDS

    @property
    def is_member(self):
        return self.kind in MEMBER_KINDS and bool(self.declaring_class)

    @property
    def qualified_name(self):
        """Name as it is written in references, e.g. ``App\\User::save()``."""
        if self.is_member:
            if self.kind == ElementKind.METHOD:
                return f"{self.declaring_class}::{self.name}()"
            if self.kind == ElementKind.PROPERTY:
                return f"{self.declaring_class}::${self.name}"
            return f"{self.declaring_class}::{self.name}"
        name = f"{self.namespace}\\{self.name}" if self.namespace else self.name
        if self.kind == ElementKind.FUNCTION:
            return f"{name}()"
        return name


@dataclass(frozen=True)
class Resolved:
    element: DocElement


@dataclass(frozen=True)
class Unresolved:
    guess: str


ResolutionResult = Union[Resolved, Unresolved]
