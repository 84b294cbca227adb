"""
MkDocs plugin for rendering PHP docblocks with cross-references.

Loads a symbol index on config, expands ``::: php:docblock`` directives into
rendered element documentation, and resolves inline ``{@internal}``,
``{@link}`` and ``{@see}`` tags on every page: the internal pass runs on the
page Markdown, the link pass on the HTML MkDocs renders from it.
"""

from __future__ import annotations

import logging
import os
import re
from functools import partial

from mkdocs.config import config_options
from mkdocs.config.base import Config as MkDocsConfig
from mkdocs.plugins import BasePlugin

from .elements import DocElement, ElementKind
from .filters import DocFilters, FilterConfig
from .highlighter import SourceCodeHighlighter
from .index import load_symbol_index
from .links import ElementLinkFactory
from .markup import DEFAULT_EXTENSIONS, MarkdownMarkup
from .renderer import RenderConfig, anchor_id, render_single
from .resolver import ElementResolver, SymbolTable

log = logging.getLogger("mkdocs.plugins.docblock")

_DIRECTIVE_RE = re.compile(
    r"^(?P<indent>[ \t]*):::[ \t]+php:docblock[ \t]*\n"
    r"(?P<body>(?:(?P=indent)[ \t]+:\w+:.*(?:\n|$))*)",
    re.MULTILINE,
)
_OPTION_RE = re.compile(r"^\s+:(\w+):\s*(.+)$", re.MULTILINE)
_FENCE_RE = re.compile(
    r"^[ \t]*(?P<fence>```+|~~~+).*?^[ \t]*(?P=fence)[ \t]*$", re.MULTILINE | re.DOTALL
)
_PRE_RE = re.compile(r"<pre\b.*?</pre>", re.DOTALL)


class DocblockConfig(MkDocsConfig):
    symbols_file = config_options.Type(str, default="")
    show_internal = config_options.Type(bool, default=False)
    heading_level = config_options.Type(int, default=3)
    members = config_options.Type(bool, default=True)
    annotations = config_options.Type(bool, default=True)
    inline_tags = config_options.Type(bool, default=True)
    markdown_extensions = config_options.Type(list, default=list(DEFAULT_EXTENSIONS))


def _outside(pattern, text, fn):
    """Apply *fn* to *text* with every *pattern* match kept out of its reach."""
    protected = {}
    counter = [0]

    def _protect(m):
        key = f"\x00DBLK{counter[0]}\x00"
        protected[key] = m.group(0)
        counter[0] += 1
        return key

    text = fn(pattern.sub(_protect, text))
    for key, val in protected.items():
        text = text.replace(key, val)
    return text


class DocblockPlugin(BasePlugin[DocblockConfig]):

    def __init__(self):
        super().__init__()
        self._table = SymbolTable()
        self._resolver = ElementResolver(self._table)
        self._filter_config = FilterConfig()
        self._markup = MarkdownMarkup()
        self._highlighter = SourceCodeHighlighter()
        self._use_dir_urls = True

    # ── Symbol links ──

    def _element_url(self, element, current_page_uri=None):
        anchor = anchor_id(element)
        target = element.page
        if not target or (current_page_uri and target == current_page_uri):
            return f"#{anchor}"

        if current_page_uri:
            # With use_directory_urls, foo/bar.md is served as foo/bar/index.html
            if self._use_dir_urls:
                target_dir = target.removesuffix(".md")
                if os.path.basename(target_dir) == "index":
                    target_dir = os.path.dirname(target_dir)
                current_dir = current_page_uri.removesuffix(".md")
                if os.path.basename(current_dir) == "index":
                    current_dir = os.path.dirname(current_dir)
                rel = os.path.relpath(target_dir or ".", current_dir or ".").replace(os.sep, "/")
                rel = "./" if rel == "." else rel + "/"
            else:
                from_dir = os.path.dirname(current_page_uri)
                rel = os.path.relpath(target, from_dir or ".").replace(os.sep, "/")
                rel = rel.removesuffix(".md") + ".html"
        else:
            rel = target.removesuffix(".md") + ".html"

        return f"{rel}#{anchor}"

    def _filters_for(self, page_uri=None):
        links = ElementLinkFactory(url_for=partial(self._element_url, current_page_uri=page_uri))
        return DocFilters(
            self._resolver,
            links=links,
            markup=self._markup,
            highlighter=self._highlighter,
            config=self._filter_config,
        )

    def _page_context(self, page):
        meta = getattr(page, "meta", None) or {}
        aliases = meta.get("uses") or {}
        return DocElement(
            name=getattr(page, "title", None) or "",
            kind=ElementKind.FILE,
            namespace=str(meta.get("namespace", "")).strip("\\"),
            aliases=dict(aliases) if isinstance(aliases, dict) else {},
        )

    # ── Directives ──

    def _rcfg(self):
        return RenderConfig(
            heading_level=self.config["heading_level"],
            members=self.config["members"],
            annotations=self.config["annotations"],
        )

    def _handle_directive(self, match, filters):
        opts = {}
        for m in _OPTION_RE.finditer(match.group("body")):
            opts[m.group(1)] = m.group(2).strip()
        name = opts.get("name", "")
        if not name:
            return "<!-- docblock: missing :name: for php:docblock -->\n"
        cfg = self._rcfg()
        if "heading_level" in opts:
            try:
                cfg.heading_level = int(opts["heading_level"])
            except ValueError:
                log.warning("docblock: bad :heading_level: %r for %s", opts["heading_level"], name)
        if "members" in opts:
            cfg.members = opts["members"].lower() in ("true", "yes", "1")
        if "annotations" in opts:
            cfg.annotations = opts["annotations"].lower() in ("true", "yes", "1")
        if self._table.find(name.strip()) is None:
            log.warning("docblock: symbol %s not found in the symbol index", name)
        return render_single(self._table, name, filters, cfg) + "\n"

    # ── MkDocs lifecycle hooks ──

    def on_config(self, config, **kwargs):
        config_dir = os.path.dirname(config.get("config_file_path", "") or "") or os.getcwd()
        self._use_dir_urls = config.get("use_directory_urls", True)

        self._table = SymbolTable()
        path = self.config["symbols_file"]
        if path:
            if not os.path.isabs(path):
                path = os.path.normpath(os.path.join(config_dir, path))
            self._table = load_symbol_index(path)
            log.info("docblock: symbol index loaded, %d symbols indexed", len(self._table))

        self._resolver = ElementResolver(self._table)
        self._filter_config = FilterConfig(
            show_internal=self.config["show_internal"],
            markdown_extensions=self.config["markdown_extensions"],
        )
        self._markup = MarkdownMarkup(self._filter_config.markdown_extensions)
        return config

    def on_page_markdown(self, markdown, *, page, config, files, **kwargs):
        src_uri = getattr(page.file, "src_uri", None) or page.file.src_path
        filters = self._filters_for(src_uri)
        md = _DIRECTIVE_RE.sub(lambda m: self._handle_directive(m, filters), markdown)
        if not self.config["inline_tags"]:
            return md
        return _outside(_FENCE_RE, md, filters.internal_tags)

    def on_page_content(self, html, *, page, config, files, **kwargs):
        if not self.config["inline_tags"]:
            return html
        src_uri = getattr(page.file, "src_uri", None) or page.file.src_path
        filters = self._filters_for(src_uri)
        context = self._page_context(page)
        return _outside(_PRE_RE, html, lambda text: filters.link_tags(text, context))
