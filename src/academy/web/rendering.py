"""HTML page rendering with Jinja2.

Shared by the live page routes and the static site builder. Every
render function returns None when the requested content doesn't exist.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from academy.config.app_config import load_app_config
from academy.config.sections import get_section, list_sections
from academy.core.markdown_renderer import extract_excerpt, render_markdown
from academy.core.progress import get_learning_path, get_section_progress
from academy.core.topics import (
    count_by_difficulty,
    get_all_topics,
    get_related_topics,
    get_section_data,
    get_topic_by_slug,
    get_topic_navigation,
    get_unmet_prerequisites,
)
from academy.core.tutorials import (
    get_all_categories,
    get_all_tags,
    get_all_tutorials,
    get_featured_tutorials,
    get_related_tutorials,
    get_tutorial_by_slug,
)

logger = structlog.get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Jinja2 environment for the site templates."""
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _render(template_name: str, **context: Any) -> str:
    site = load_app_config().site
    template = get_environment().get_template(template_name)
    return template.render(site=site, nav_sections=list_sections(), **context)


def render_home_page(content_dir: Path) -> str:
    """Landing page: curriculum stats, sections and featured tutorials."""
    topics = get_all_topics(content_dir)
    return _render(
        "home.html",
        stats={"topics": len(topics), **count_by_difficulty(topics)},
        sections=get_section_data(content_dir),
        featured=get_featured_tutorials(content_dir)[:3],
    )


def render_section_page(
    section_id: str, content_dir: Path, completed: Iterable[str] = ()
) -> str | None:
    """Section overview with progress bar and topic list."""
    section = get_section(section_id)
    if section is None:
        return None

    completed = list(completed)
    path = get_learning_path(section_id, content_dir, completed)
    topics = [t for t in get_all_topics(content_dir) if t.section == section_id]

    return _render(
        "section.html",
        section=section,
        topics=topics,
        completed=set(completed),
        progress=get_section_progress(section_id, content_dir, completed),
        current=path.current,
    )


def render_topic_page(
    section_id: str, slug: str, content_dir: Path, completed: Iterable[str] = ()
) -> str | None:
    """Topic article with table of contents and navigation.

    Unmet prerequisites are listed, never enforced.
    """
    topic = get_topic_by_slug(slug, content_dir, section=section_id)
    if topic is None:
        return None

    site = load_app_config().site
    rendered = render_markdown(topic.content)
    by_slug = {t.slug: t for t in get_all_topics(content_dir)}
    unmet = []
    for prereq in get_unmet_prerequisites(topic, completed):
        target = by_slug.get(prereq)
        unmet.append(
            {
                "slug": prereq,
                "title": target.frontmatter.title if target else prereq,
                "section": target.section if target else None,
            }
        )

    logger.debug("render_topic_page", slug=slug, unmet_prerequisites=len(unmet))

    return _render(
        "topic.html",
        section=get_section(section_id),
        topic=topic,
        excerpt=topic.frontmatter.description
        or extract_excerpt(topic.content, site.excerpt_length),
        body=Markup(rendered.html),
        toc=rendered.table_of_contents,
        navigation=get_topic_navigation(slug, section_id, content_dir),
        related=get_related_topics(slug, content_dir, limit=site.related_limit),
        unmet=unmet,
    )


def render_tutorials_page(content_dir: Path) -> str:
    """Tutorial index with category counts, tags and difficulty stats."""
    tutorials = get_all_tutorials(content_dir)
    categories = [
        {
            **category,
            "count": sum(1 for t in tutorials if t.frontmatter.category == category["id"]),
        }
        for category in get_all_categories()
    ]
    stats = {"total": len(tutorials)}
    for difficulty in ("beginner", "intermediate", "advanced"):
        stats[difficulty] = sum(
            1 for t in tutorials if t.frontmatter.difficulty.value == difficulty
        )

    return _render(
        "tutorials.html",
        tutorials=tutorials,
        categories=categories,
        tags=get_all_tags(content_dir),
        stats=stats,
    )


def render_tutorial_page(category: str, slug: str, content_dir: Path) -> str | None:
    """Single tutorial article."""
    tutorial = get_tutorial_by_slug(slug, content_dir, category=category)
    if tutorial is None:
        return None

    site = load_app_config().site
    rendered = render_markdown(tutorial.content)
    return _render(
        "tutorial.html",
        tutorial=tutorial,
        excerpt=tutorial.frontmatter.description
        or extract_excerpt(tutorial.content, site.excerpt_length),
        body=Markup(rendered.html),
        toc=rendered.table_of_contents,
        related=get_related_tutorials(slug, content_dir, limit=site.related_limit),
    )
