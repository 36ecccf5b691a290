"""
DevFolio - developer portfolio with a terminal-style hero and tech-tag cards.
"""

from __future__ import annotations

from src.domain.entities import ContentDocument, Project

from ._base import PageTemplate
from ._html import escape, socials_html, tags_html


class DevFolioTemplate(PageTemplate):
    template_id = "devfolio"
    extra_css = (
        ".hero code { font-family: ui-monospace, monospace; color: var(--accent); }"
        " .cards { display: grid; grid-template-columns: repeat(auto-fill, minmax(16rem, 1fr));"
        " gap: 1rem; }"
        " .card { border: 1px solid var(--accent); border-radius: 0.5rem; padding: 1rem; }"
        " .tags li { display: inline; margin-right: 0.5rem; }"
    )

    def home(self, data: ContentDocument, base_path: str) -> str:
        p = data.personal
        featured = [proj for proj in data.projects if proj.featured] or data.projects[:3]
        cards = "".join(self._card(proj, base_path) for proj in featured)
        location = f"<p class=\"location\">{escape(p.location)}</p>" if p.location else ""
        return (
            '<section class="hero">'
            f"<code>$ whoami</code><h1>{escape(p.name)}</h1>"
            f"<h2>{escape(p.title)}</h2><p>{escape(p.bio)}</p>{location}"
            "</section>"
            + (f'<section><h3>Featured work</h3><div class="cards">{cards}</div></section>'
               if cards else "")
        )

    def about(self, data: ContentDocument, base_path: str) -> str:
        p = data.personal
        jobs = "".join(
            f"<li><strong>{escape(e.position)}</strong> @ {escape(e.company)}"
            f" <span>{escape(e.period)}</span><p>{escape(e.description)}</p></li>"
            for e in data.experience
        )
        groups: dict[str, list[str]] = {}
        for skill in data.skills:
            label = skill.name if skill.level is None else f"{skill.name} ({skill.level}%)"
            groups.setdefault(skill.category, []).append(label)
        skills = "".join(
            f"<h4>{escape(category)}</h4>{tags_html(names)}" for category, names in groups.items()
        )
        photo = f'<img src="{escape(p.photo)}" alt="{escape(p.name)}" />' if p.photo else ""
        cv = f'<a class="cv" href="{escape(p.cv)}">Download CV</a>' if p.cv else ""
        return (
            f"<section>{photo}<h1>About</h1><p>{escape(p.long_bio or p.bio)}</p>{cv}</section>"
            + (f"<section><h2>Experience</h2><ol>{jobs}</ol></section>" if jobs else "")
            + (f"<section><h2>Skills</h2>{skills}</section>" if skills else "")
        )

    def projects(self, data: ContentDocument, base_path: str) -> str:
        cards = "".join(self._card(proj, base_path) for proj in data.projects)
        return f'<h1>Projects</h1><div class="cards">{cards}</div>'

    def contact(self, data: ContentDocument, base_path: str) -> str:
        return f"<h1>Contact</h1><p>Get in touch.</p>{socials_html(data.socials)}"

    def project_detail(self, data: ContentDocument, project: Project, base_path: str) -> str:
        images = "".join(
            f'<img src="{escape(src)}" alt="{escape(project.title)}" />' for src in project.images
        )
        links = []
        if project.live_url:
            links.append(f'<a href="{escape(project.live_url)}">Live demo</a>')
        if project.source_url:
            links.append(f'<a href="{escape(project.source_url)}">Source</a>')
        narrative = ""
        if project.challenges:
            narrative += f"<h2>Challenges</h2><p>{escape(project.challenges)}</p>"
        if project.solution:
            narrative += f"<h2>Solution</h2><p>{escape(project.solution)}</p>"
        return (
            f"<article><h1>{escape(project.title)}</h1>"
            f"<p>{escape(project.full_description or project.short_description)}</p>"
            f"{tags_html(project.techs)}{images}{narrative}"
            f"<p>{' '.join(links)}</p></article>"
        )

    def _card(self, project: Project, base_path: str) -> str:
        return (
            f'<div class="card"><h3><a href="{escape(self.project_url(base_path, project))}">'
            f"{escape(project.title)}</a></h3>"
            f"<p>{escape(project.short_description)}</p>{tags_html(project.techs)}</div>"
        )
