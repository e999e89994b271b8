"""HTML generator for the Blog Builder.

Turns the expression list of one page into a complete HTML document. The
site configuration supplies the title suffix, stylesheet bundle, icon, menu
entries and analytics snippet; files referenced by the page (code listings,
the analytics snippet) are read relative to the site root.

Failed reads do not stop emission: they are accumulated in the returned
BlogResult so that a build can report every missing file at once.
"""

from datetime import date
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

import constants
from common.base.logging_config import get_logger
from common.config.site_config import Config
from common.errors import CannotReadFile, RenderError
from common.result import BlogResult
from .expression import (
    Expression,
    ExpressionType,
    Menu,
    Newline,
    Pagename,
    Paragraph,
)
from .htmlblocks import (
    create_code_block,
    create_date_line,
    create_emphasis,
    create_heading,
    create_hyperlink,
    create_icon_link,
    create_image,
    create_menu,
    create_notice,
    create_stylesheet_links,
    create_tile,
    sanitize_html,
)

logger = get_logger(__name__)


class ParagraphAggregator:
    """Collects inline content and flushes to paragraph HTML."""

    def __init__(self):
        self._parts: List[str] = []

    def add(self, content: str) -> None:
        if content:
            self._parts.append(content)

    def has_content(self) -> bool:
        return bool(self._parts)

    def flush(self) -> str:
        """Flush the current paragraph and return HTML."""
        if not self._parts:
            return ""
        content = "".join(self._parts)
        self._parts = []
        if not content.strip():
            return ""
        return f"<p>{content}</p>"


def title_from_page_name(page_name: str) -> str:
    """Derive a display title from a page's file name: `my-first_post` -> `My First Post`."""
    stem = Path(page_name).name
    words = stem.replace("-", " ").replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def _with_paragraph_children(expressions: Sequence[Expression]) -> Iterator[Expression]:
    """Top-level expressions, each paragraph followed by its children."""
    for expression in expressions:
        yield expression
        if isinstance(expression, Paragraph):
            yield from expression.children


class HTMLGenerator:
    """
    Converts the expressions of one page into an HTML document.

    Each expression type has a `_generate_<type>` method returning its bare
    HTML; `render()` adds the paragraph wrapper for inline content at the top
    level of a page.
    """

    def __init__(self, config: Optional[Config] = None,
                 root: Optional[Union[str, Path]] = None,
                 today: Optional[date] = None):
        """Initialize the HTML generator.

        Args:
            config: Site configuration; without it no menu, analytics, icon or style is emitted
            root: Site root that referenced files are resolved against (defaults to the working directory)
            today: Date shown by `::date` (defaults to the current date)
        """
        self.config = config
        self.root = Path(root) if root is not None else Path.cwd()
        self.today = today
        self.result: BlogResult[str] = BlogResult()

    def render(self, expression: Expression, top: bool = False) -> str:
        """
        Render one expression.

        :param expression: The expression to render
        :param top: Whether the expression sits at the top level of the page
        :return: HTML; inline content (and paragraphs) at the top level is wrapped in <p>
        :raises RenderError: For Error expressions and unresolved menu placeholders
        """
        method = getattr(self, f"_generate_{expression.type.name.lower()}")
        content = method(expression)
        if top and (expression.inline or expression.type == ExpressionType.PARAGRAPH):
            return f"<p>{content}</p>"
        return content

    def emit(self, expressions: Sequence[Expression], page_name: str) -> BlogResult[str]:
        """
        Generate the full HTML document for a page.

        :param expressions: Validated top-level expressions of the page
        :param page_name: Source file name without extension, relative to the source directory
        :return: The document, plus any file read failures met on the way
        """
        self.result = BlogResult()
        logger.debug(f"Emitting page {page_name} ({len(expressions)} expressions)")

        parts = ["<html>", "<head>", '<meta charset="utf-8">']
        analytics = self._read_analytics()
        if analytics:
            parts.append(analytics)
        parts.append(f"<title>{sanitize_html(self.page_title(expressions, page_name))}</title>")
        if self.config is not None:
            if self.config.site.style is not None:
                parts.append(create_stylesheet_links(self.config.site.style))
            if self.config.site.icon:
                parts.append(create_icon_link(self.config.site.icon))
        parts.extend(["</head>", "<body>"])
        body = self._generate_body(expressions)
        if body:
            parts.append(body)
        parts.extend(["</body>", "</html>"])

        return self.result.ok("\n".join(parts) + "\n")

    def page_title(self, expressions: Sequence[Expression], page_name: str) -> str:
        """Title of the page, suffixed with the site name except on the index page."""
        site_name = self.config.site.name if self.config is not None else ""
        if page_name == constants.INDEX_PAGE_NAME and site_name:
            return site_name

        title = next(
            (e.name for e in _with_paragraph_children(expressions) if isinstance(e, Pagename)),
            title_from_page_name(page_name),
        )
        if not site_name:
            return title
        return f"{title} | {site_name}"

    def _generate_body(self, expressions: Sequence[Expression]) -> str:
        segments: List[str] = []
        paragraph = ParagraphAggregator()

        def flush_paragraph() -> None:
            p_html = paragraph.flush()
            if p_html:
                segments.append(p_html)

        def append_menu() -> None:
            flush_paragraph()
            menu_html = self._expand_menu()
            if menu_html:
                segments.append(menu_html)

        for expression in expressions:
            if isinstance(expression, Newline):
                flush_paragraph()

            elif isinstance(expression, Pagename):
                continue

            elif isinstance(expression, Menu):
                append_menu()

            elif isinstance(expression, Paragraph):
                # A paragraph closes whatever inline content preceded it on its line
                for child in expression.children:
                    if isinstance(child, Menu):
                        append_menu()
                    else:
                        paragraph.add(self.render(child))
                flush_paragraph()

            elif expression.inline:
                paragraph.add(self.render(expression))

            else:
                flush_paragraph()
                generated = self.render(expression, top=True)
                if generated:
                    segments.append(generated)

        flush_paragraph()
        return "\n".join(segments)

    def _expand_menu(self) -> str:
        if self.config is None or self.config.menu is None:
            return ""
        return create_menu(self.config.menu.entries)

    def _read_file(self, relative: str) -> Optional[str]:
        path = self.root / relative
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            self.result.err(CannotReadFile(path, e.strerror or str(e)))
            return None

    def _read_analytics(self) -> Optional[str]:
        if self.config is None or self.config.analytics is None:
            return None
        snippet = self._read_file(self.config.analytics.tag)
        return snippet.strip() if snippet else None

    def _generate_heading(self, expression) -> str:
        return create_heading(expression.level, expression.text)

    def _generate_paragraph(self, expression) -> str:
        return "".join(
            self._expand_menu() if isinstance(child, Menu) else self.render(child)
            for child in expression.children
        )

    def _generate_text(self, expression) -> str:
        return sanitize_html(expression.value)

    def _generate_italic(self, expression) -> str:
        return create_emphasis(expression.text, italic=True)

    def _generate_bold(self, expression) -> str:
        return create_emphasis(expression.text, bold=True)

    def _generate_bold_italic(self, expression) -> str:
        return create_emphasis(expression.text, bold=True, italic=True)

    def _generate_hyperlink(self, expression) -> str:
        return create_hyperlink(expression.text, expression.href)

    def _generate_image(self, expression) -> str:
        return create_image(expression.href, expression.alt)

    def _generate_floating_image(self, expression) -> str:
        return create_image(expression.href, expression.alt, floating=True)

    def _generate_tile(self, expression) -> str:
        return create_tile(expression.title, expression.href, expression.image,
                           expression.description)

    def _generate_notice(self, expression) -> str:
        return create_notice(expression.message)

    def _generate_work_in_progress(self, expression) -> str:
        return create_notice(expression.message, css_class="wip")

    def _generate_code(self, expression) -> str:
        """Include a source file as an escaped code listing."""
        code = self._read_file(expression.path)
        if code is None:
            return ""
        return create_code_block(expression.language, code)

    def _generate_pagename(self, expression) -> str:
        return ""

    def _generate_date(self, expression) -> str:
        return create_date_line(self.today or date.today())

    def _generate_menu(self, expression) -> str:
        raise RenderError("menu placeholder reached the renderer without being expanded")

    def _generate_newline(self, expression) -> str:
        return ""

    def _generate_error(self, expression) -> str:
        raise RenderError(f"cannot render a parse error: {expression.error.message}")


def render(expression: Expression, top: bool = False) -> str:
    """Render a single expression without any site configuration."""
    return HTMLGenerator().render(expression, top=top)


def emit(expressions: Sequence[Expression], config: Config, page_name: str,
         root: Optional[Union[str, Path]] = None, today: Optional[date] = None) -> BlogResult[str]:
    """
    Convenience function to generate a page document.

    Args:
        expressions: Validated top-level expressions of the page
        config: Site configuration
        page_name: Source file name without extension
        root: Site root for referenced files
        today: Date shown by `::date`

    Returns:
        BlogResult holding the HTML, or the read failures met while emitting
    """
    return HTMLGenerator(config, root=root, today=today).emit(expressions, page_name)
