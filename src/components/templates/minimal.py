"""
Minimal - single column, text-first layout.
"""

from __future__ import annotations

from src.domain.entities import ContentDocument, Project

from ._base import PageTemplate
from ._html import escape, socials_html


class MinimalTemplate(PageTemplate):
    template_id = "minimal"
    extra_css = "main { max-width: 40rem; margin: 0 auto; line-height: 1.6; }"

    def home(self, data: ContentDocument, base_path: str) -> str:
        p = data.personal
        return f"<h1>{escape(p.name)}</h1><p>{escape(p.title)}</p><p>{escape(p.bio)}</p>"

    def about(self, data: ContentDocument, base_path: str) -> str:
        p = data.personal
        jobs = "".join(
            f"<li>{escape(e.position)}, {escape(e.company)} ({escape(e.period)})</li>"
            for e in data.experience
        )
        return f"<h1>About</h1><p>{escape(p.long_bio or p.bio)}</p>" + (
            f"<ul>{jobs}</ul>" if jobs else ""
        )

    def projects(self, data: ContentDocument, base_path: str) -> str:
        items = "".join(
            f'<li><a href="{escape(self.project_url(base_path, proj))}">{escape(proj.title)}</a>'
            f" - {escape(proj.short_description)}</li>"
            for proj in data.projects
        )
        return f"<h1>Projects</h1><ul>{items}</ul>" if items else "<h1>Projects</h1>"

    def contact(self, data: ContentDocument, base_path: str) -> str:
        return f"<h1>Contact</h1>{socials_html(data.socials)}"

    def project_detail(self, data: ContentDocument, project: Project, base_path: str) -> str:
        return (
            f"<article><h1>{escape(project.title)}</h1>"
            f"<p>{escape(project.full_description or project.short_description)}</p>"
            f"<p>{escape(', '.join(project.techs))}</p></article>"
        )
