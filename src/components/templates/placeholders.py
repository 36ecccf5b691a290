"""
Placeholder content used by the authoring preview.

Sections the author has not filled in yet are taken from sample data matching
the template's category, so a half-finished draft still previews as a full
site.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.domain.entities import (
    ContentDocument,
    Experience,
    PersonalInfo,
    Project,
    Skill,
    Socials,
    TemplateCategory,
)

from .models import TemplateConfig


def _sample(category: TemplateCategory) -> ContentDocument:
    if category == "designer":
        personal = PersonalInfo(
            name="Jordan Rivera",
            title="Product Designer",
            bio="I design calm, useful interfaces for people who are short on time.",
        )
        projects = [
            Project(
                id="sample-brand",
                title="Brand Refresh",
                short_description="Identity system for a neighbourhood coffee roaster.",
                techs=["Figma", "Illustrator"],
                featured=True,
            ),
            Project(
                id="sample-app",
                title="Travel App",
                short_description="Mobile booking flow redesigned around a single screen.",
                techs=["Figma", "Prototyping"],
            ),
        ]
        skills = [Skill(name="UI Design", level=90, category="Design")]
    else:
        personal = PersonalInfo(
            name="Alex Morgan",
            title="Software Engineer",
            bio="I build reliable web services and the tools that keep them running.",
        )
        projects = [
            Project(
                id="sample-api",
                title="Open Data API",
                short_description="Public API serving transit timetables to a million riders.",
                techs=["Python", "PostgreSQL"],
                featured=True,
            ),
            Project(
                id="sample-cli",
                title="Deploy CLI",
                short_description="Command line tool that ships services with one command.",
                techs=["Go"],
            ),
        ]
        skills = [
            Skill(name="Python", level=90, category="Languages"),
            Skill(name="Docker", level=75, category="Tools"),
        ]

    return ContentDocument(
        personal=personal,
        experience=[
            Experience(
                id="sample-role",
                company="Example Co",
                position=personal.title,
                period="2021 - Present",
                description="Leading day-to-day work on the company's main product.",
            )
        ],
        projects=projects,
        skills=skills,
        socials=Socials(email="hello@example.com", website="https://example.com"),
    )


def preview_document(
    sections: Mapping[str, Any], template: TemplateConfig
) -> ContentDocument:
    """
    Merge the author's sections over placeholder data.

    A section counts as filled when it is present and not empty; list
    sections left empty show the sample entries instead.
    """
    sample = _sample(template.category)
    merged: dict[str, Any] = {}
    for name in ContentDocument.model_fields:
        value = sections.get(name)
        merged[name] = value if value else getattr(sample, name)
    return ContentDocument.model_validate(merged)
