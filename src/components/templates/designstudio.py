"""
DesignStudio - image-led gallery layout for designers.
"""

from __future__ import annotations

from src.domain.entities import ContentDocument, Project

from ._base import PageTemplate
from ._html import escape, socials_html


class DesignStudioTemplate(PageTemplate):
    template_id = "designstudio"
    extra_css = (
        ".gallery { display: grid; grid-template-columns: repeat(auto-fill, minmax(20rem, 1fr));"
        " gap: 2rem; }"
        " .tile img { width: 100%; aspect-ratio: 4 / 3; object-fit: cover; }"
        " .display { font-size: 4rem; letter-spacing: -0.03em; color: var(--primary); }"
    )

    def layout(self, data: ContentDocument, nav: str, body: str) -> str:
        return (
            f'<header class="studio"><span class="mark">{escape(data.personal.name)}</span>{nav}'
            f"</header>\n<main>{body}</main>"
        )

    def home(self, data: ContentDocument, base_path: str) -> str:
        p = data.personal
        tiles = "".join(self._tile(proj, base_path) for proj in data.projects[:6])
        return (
            f'<section><h1 class="display">{escape(p.title)}</h1><p>{escape(p.bio)}</p></section>'
            + (f'<section class="gallery">{tiles}</section>' if tiles else "")
        )

    def about(self, data: ContentDocument, base_path: str) -> str:
        p = data.personal
        photo = f'<img src="{escape(p.photo)}" alt="{escape(p.name)}" />' if p.photo else ""
        timeline = "".join(
            f"<dt>{escape(e.period)}</dt><dd>{escape(e.position)}, {escape(e.company)}</dd>"
            for e in data.experience
        )
        skills = ", ".join(escape(s.name) for s in data.skills)
        return (
            f"<section>{photo}<h1>{escape(p.name)}</h1>"
            f"<p>{escape(p.long_bio or p.bio)}</p></section>"
            + (f"<section><h2>Timeline</h2><dl>{timeline}</dl></section>" if timeline else "")
            + (f"<section><h2>Tools</h2><p>{skills}</p></section>" if skills else "")
        )

    def projects(self, data: ContentDocument, base_path: str) -> str:
        tiles = "".join(self._tile(proj, base_path) for proj in data.projects)
        return f'<h1 class="display">Work</h1><section class="gallery">{tiles}</section>'

    def contact(self, data: ContentDocument, base_path: str) -> str:
        email = data.socials.email
        cta = (
            f'<p><a class="cta" href="mailto:{escape(email)}">{escape(email)}</a></p>'
            if email
            else ""
        )
        return f'<h1 class="display">Let\'s work together</h1>{cta}{socials_html(data.socials)}'

    def project_detail(self, data: ContentDocument, project: Project, base_path: str) -> str:
        images = "".join(f'<img src="{escape(src)}" alt="" />' for src in project.images)
        link = (
            f'<p><a href="{escape(project.live_url)}">View live</a></p>' if project.live_url else ""
        )
        return (
            f'<article><h1 class="display">{escape(project.title)}</h1>'
            f"<p>{escape(project.full_description or project.short_description)}</p>"
            f'<div class="gallery">{images}</div>'
            f"<p>{escape(', '.join(project.techs))}</p>{link}</article>"
        )

    def _tile(self, project: Project, base_path: str) -> str:
        cover = (
            f'<img src="{escape(project.images[0])}" alt="{escape(project.title)}" />'
            if project.images
            else ""
        )
        return (
            f'<a class="tile" href="{escape(self.project_url(base_path, project))}">'
            f"{cover}<h3>{escape(project.title)}</h3></a>"
        )
