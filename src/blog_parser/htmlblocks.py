"""HTML generation functions for Blog Builder elements."""

import html
from datetime import date
from typing import Optional, Sequence, Tuple

import constants
from common.config.site_config import SiteStyle

# Font and asset links emitted alongside the stylesheet, per style
STYLE_LINKS = {
    SiteStyle.TECH: (
        '<link rel="preconnect" href="https://fonts.googleapis.com">',
        '<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>',
        '<link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Fira+Code&family=Inter:wght@400;700&display=swap">',
    ),
    SiteStyle.MODERN: (
        '<link rel="preconnect" href="https://fonts.googleapis.com">',
        '<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>',
        '<link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Montserrat:wght@400;700&display=swap">',
    ),
    SiteStyle.CITIZEN: (
        '<link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Merriweather:wght@400;700&display=swap">',
    ),
    SiteStyle.TRUTH: (
        '<link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=EB+Garamond&display=swap">',
    ),
}

def sanitize_html(text: str) -> str:
    """Escape text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

def attribute(value: str) -> str:
    """Escape an attribute value, quotes included."""
    return html.escape(value, quote=True)

def create_heading(level: int, text: str) -> str:
    return f"<h{level}>{sanitize_html(text)}</h{level}>"

def create_emphasis(text: str, bold: bool = False, italic: bool = False) -> str:
    """
    Generate HTML for emphasized text.

    :param text: Text content
    :param bold: Wrap in <strong>
    :param italic: Wrap in <em>
    :return: Formatted HTML string
    """
    content = sanitize_html(text)
    if italic:
        content = f"<em>{content}</em>"
    if bold:
        content = f"<strong>{content}</strong>"
    return content

def create_hyperlink(text: str, href: str) -> str:
    return f'<a href="{attribute(href)}">{sanitize_html(text)}</a>'

def create_image(href: str, alt: str, floating: bool = False) -> str:
    class_attr = ' class="floating"' if floating else ''
    return f'<img src="{attribute(href)}"{class_attr} alt="{attribute(alt)}">'

def create_tile(title: str, href: str, image: str, description: Optional[str] = None) -> str:
    """
    Generate HTML for a clickable tile.

    The whole card navigates to `href` on click and shows `image` as its
    background.
    """
    # The href sits inside a single-quoted JavaScript string
    js_href = href.replace("\\", "\\\\").replace("'", "\\'")
    parts = [
        f'<div class="tile" onclick="window.location=\'{attribute(js_href)}\';" '
        f'style="background-image: url(\'{attribute(image)}\'); cursor: pointer; background-position: center;">',
        f'<div class="tile-title">{sanitize_html(title)}</div>',
    ]
    if description is not None:
        parts.append(f'<div class="desc">{sanitize_html(description)}</div>')
    parts.append('</div>')
    return "".join(parts)

def create_notice(message: str, css_class: str = "notice") -> str:
    return f'<div class="{css_class}">{sanitize_html(message)}</div>'

def create_code_block(language: str, code: str) -> str:
    return f'<pre><code class="language-{attribute(language)}">{sanitize_html(code)}</code></pre>'

def create_date_line(today: date) -> str:
    return f'<h6 class="last-updated-date">Last Updated {today.strftime("%A, %B %d, %Y")}</h6>'

def create_menu(entries: Sequence[Tuple[str, str]]) -> str:
    """
    Generate HTML for the site menu.

    :param entries: (name, link) pairs, in display order
    :return: A menu div with one anchor per entry
    """
    anchors = "".join(create_hyperlink(name, link) for name, link in entries)
    return f'<div class="menu">{anchors}</div>'

def create_stylesheet_links(style: SiteStyle) -> str:
    links = [f'<link rel="stylesheet" href="/{constants.STYLESHEET_FILE_NAME}">']
    links.extend(STYLE_LINKS.get(style, ()))
    return "\n".join(links)

def create_icon_link(icon: str) -> str:
    return f'<link rel="icon" href="{attribute(icon)}">'
