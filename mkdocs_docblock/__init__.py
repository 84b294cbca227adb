"""
mkdocs-docblock: PHP docblock rendering for MkDocs.

Renders documentation comments and their annotations into HTML, resolving
references to other documented classes, methods, properties, functions and
constants into links.
"""

__version__ = "1.0.0"
