"""
HTML building blocks shared by the built-in templates.
"""

from __future__ import annotations

import html
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from src.domain.entities import Seo, Socials, Theme

PAGE_LABELS = {
    "home": "Home",
    "about": "About",
    "projects": "Projects",
    "contact": "Contact",
}

FONT_STACKS = {
    "inter": "Inter, system-ui, sans-serif",
    "serif": "Georgia, 'Times New Roman', serif",
    "mono": "'JetBrains Mono', ui-monospace, monospace",
}


def escape(text: object) -> str:
    """Escape HTML special characters; None renders as an empty string."""
    if text is None:
        return ""
    return html.escape(str(text), quote=True)


@dataclass(frozen=True)
class MetaTag:
    name: str | None = None
    property: str | None = None
    content: str = ""


def seo_meta_tags(seo: Seo | None) -> list[MetaTag]:
    if seo is None:
        return []
    tags = [
        MetaTag(name="description", content=seo.description),
        MetaTag(property="og:title", content=seo.title),
        MetaTag(property="og:description", content=seo.description),
        MetaTag(property="og:type", content="profile"),
    ]
    if seo.image:
        tags.append(MetaTag(property="og:image", content=seo.image))
    return tags


def meta_tags_html(tags: Iterable[MetaTag]) -> str:
    parts: list[str] = []
    for tag in tags:
        if tag.property:
            parts.append(
                f'<meta property="{escape(tag.property)}" content="{escape(tag.content)}" />'
            )
        elif tag.name:
            parts.append(f'<meta name="{escape(tag.name)}" content="{escape(tag.content)}" />')
    return "\n    ".join(parts)


def theme_css(theme: Theme) -> str:
    """CSS custom properties for the active colour scheme."""
    colors = theme.active_colors()
    font = FONT_STACKS.get(theme.font, FONT_STACKS["inter"])
    return (
        ":root {"
        f" --bg: {colors.bg}; --text: {colors.text}; --accent: {colors.accent};"
        f" --primary: {theme.primary_color}; --font: {font};"
        " }"
        " body { background: var(--bg); color: var(--text); font-family: var(--font); }"
        " a { color: var(--accent); }"
    )


def page_url(base_path: str, page: str) -> str:
    base = base_path.rstrip("/")
    if page == "home":
        return base or "/"
    return f"{base}/{page}"


def nav_html(nav_pages: Sequence[str], current: str, base_path: str, css_class: str) -> str:
    if not nav_pages:
        return ""
    links = []
    for page in nav_pages:
        label = PAGE_LABELS.get(page, page.title())
        current_attr = ' aria-current="page"' if page == current else ""
        href = escape(page_url(base_path, page))
        links.append(f'<a href="{href}"{current_attr}>{escape(label)}</a>')
    return f'<nav class="{css_class}">{" ".join(links)}</nav>'


def socials_html(socials: Socials) -> str:
    items = []
    for channel, value in socials.channels().items():
        href = f"mailto:{value}" if channel == "email" else value
        items.append(f'<li><a href="{escape(href)}" rel="me">{escape(channel.title())}</a></li>')
    if not items:
        return ""
    return f'<ul class="socials">{"".join(items)}</ul>'


def tags_html(values: Iterable[str], css_class: str = "tags") -> str:
    items = "".join(f"<li>{escape(v)}</li>" for v in values)
    return f'<ul class="{css_class}">{items}</ul>' if items else ""


def document(
    *,
    title: str,
    theme: Theme,
    body: str,
    seo: Seo | None = None,
    extra_css: str = "",
) -> str:
    """Wrap a rendered body in a complete HTML document."""
    meta = meta_tags_html(seo_meta_tags(seo))
    scheme = "dark" if theme.dark_mode_enabled else "light"
    return f"""<!DOCTYPE html>
<html lang="en" data-theme="{scheme}">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{escape(title)}</title>
    {meta}
    <style>{theme_css(theme)} {extra_css}</style>
</head>
<body>
{body}
</body>
</html>"""
