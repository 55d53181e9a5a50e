"""Standalone tutorials (pre-curriculum content).

Tutorials live in content/tutorials/<category>/<slug>.md and are listed
newest first, unlike curriculum topics which follow a declared order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from academy.config.app_config import load_app_config
from academy.core.frontmatter import FrontMatterError, read_markdown_file
from academy.core.topics import (
    Difficulty,
    as_enum,
    as_str_list,
    get_frontmatter_field,
)
from academy.utils.text_utils import ReadingTime, calculate_reading_time, title_from_slug
from academy.utils.validators import is_plain_name

logger = structlog.get_logger(__name__)

CATEGORIES: list[dict[str, str]] = [
    {"id": "apex", "name": "Apex", "description": "Salesforce Apex programming language"},
    {
        "id": "lwc",
        "name": "Lightning Web Components",
        "description": "Modern UI framework for Salesforce",
    },
    {
        "id": "integration",
        "name": "Integration",
        "description": "Connecting Salesforce with external systems",
    },
    {
        "id": "testing",
        "name": "Testing",
        "description": "Testing strategies and best practices",
    },
]

CATEGORY_IDS = [c["id"] for c in CATEGORIES]


@dataclass
class TutorialFrontmatter:
    """Metadata block of a tutorial file."""

    title: str
    category: str
    difficulty: Difficulty = Difficulty.BEGINNER
    read_time: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)
    prerequisites: list[str] = field(default_factory=list)
    related_tutorials: list[str] = field(default_factory=list)
    last_updated: str = ""
    featured: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "category": self.category,
            "difficulty": self.difficulty.value,
            "read_time": self.read_time,
            "description": self.description,
            "tags": self.tags,
            "prerequisites": self.prerequisites,
            "related_tutorials": self.related_tutorials,
            "last_updated": self.last_updated,
            "featured": self.featured,
        }


@dataclass
class Tutorial:
    """One tutorial: front-matter plus markdown body."""

    slug: str
    frontmatter: TutorialFrontmatter
    content: str
    reading_time: ReadingTime

    def to_dict(self, include_content: bool = False) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "slug": self.slug,
            "frontmatter": self.frontmatter.to_dict(),
            "reading_time": self.reading_time.to_dict(),
        }
        if include_content:
            data["content"] = self.content
        return data


def _load_tutorial(path: Path, category: str) -> Tutorial | None:
    slug = path.stem
    try:
        data, body = read_markdown_file(path)
    except FileNotFoundError:
        logger.warning("tutorial_missing", slug=slug, category=category, path=str(path))
        return None
    except FrontMatterError as e:
        logger.warning("tutorial_skipped", slug=slug, category=category, error=str(e))
        return None

    frontmatter = TutorialFrontmatter(
        title=str(data.get("title") or title_from_slug(slug)),
        category=category,
        difficulty=as_enum(Difficulty, data.get("difficulty"), Difficulty.BEGINNER, slug),
        read_time=str(get_frontmatter_field(data, "read_time", "readTime", "") or ""),
        description=str(data.get("description") or ""),
        tags=as_str_list(data.get("tags")),
        prerequisites=as_str_list(data.get("prerequisites")),
        related_tutorials=as_str_list(
            get_frontmatter_field(data, "related_tutorials", "relatedTutorials", [])
        ),
        last_updated=str(get_frontmatter_field(data, "last_updated", "lastUpdated", "") or ""),
        featured=bool(data.get("featured", False)),
    )

    return Tutorial(
        slug=slug,
        frontmatter=frontmatter,
        content=body,
        reading_time=calculate_reading_time(body, load_app_config().site.words_per_minute),
    )


def get_tutorial_by_slug(
    slug: str, content_dir: Path, category: str | None = None
) -> Tutorial | None:
    """Find a tutorial by slug, in one category or all of them."""
    if not is_plain_name(slug) or (category and category not in CATEGORY_IDS):
        return None
    categories = [category] if category else CATEGORY_IDS

    for cat in categories:
        path = content_dir / "tutorials" / cat / f"{slug}.md"
        if path.exists():
            return _load_tutorial(path, cat)

    return None


def get_all_tutorials(content_dir: Path) -> list[Tutorial]:
    """All tutorials, most recently updated first.

    ISO dates sort correctly as strings; undated tutorials go last.
    """
    tutorials: list[Tutorial] = []

    for category in CATEGORY_IDS:
        category_path = content_dir / "tutorials" / category
        if not category_path.exists():
            continue
        for file in sorted(category_path.glob("*.md")):
            tutorial = _load_tutorial(file, category)
            if tutorial is not None:
                tutorials.append(tutorial)

    dated = [t for t in tutorials if t.frontmatter.last_updated]
    undated = [t for t in tutorials if not t.frontmatter.last_updated]
    dated.sort(key=lambda t: t.frontmatter.last_updated, reverse=True)
    return dated + undated


def get_tutorials_by_category(category: str, content_dir: Path) -> list[Tutorial]:
    return [t for t in get_all_tutorials(content_dir) if t.frontmatter.category == category]


def get_tutorials_by_tag(tag: str, content_dir: Path) -> list[Tutorial]:
    return [t for t in get_all_tutorials(content_dir) if tag in t.frontmatter.tags]


def get_featured_tutorials(content_dir: Path) -> list[Tutorial]:
    return [t for t in get_all_tutorials(content_dir) if t.frontmatter.featured]


def get_related_tutorials(slug: str, content_dir: Path, limit: int = 3) -> list[Tutorial]:
    """Tutorials sharing a tag or the category with the given one."""
    current = get_tutorial_by_slug(slug, content_dir)
    if current is None:
        return []

    current_tags = set(current.frontmatter.tags)
    related = [
        t
        for t in get_all_tutorials(content_dir)
        if t.slug != slug
        and (
            current_tags.intersection(t.frontmatter.tags)
            or t.frontmatter.category == current.frontmatter.category
        )
    ]
    return related[:limit]


def get_all_tags(content_dir: Path) -> list[str]:
    """Sorted unique tags across all tutorials."""
    tags: set[str] = set()
    for tutorial in get_all_tutorials(content_dir):
        tags.update(tutorial.frontmatter.tags)
    return sorted(tags)


def get_all_categories() -> list[dict[str, str]]:
    return [dict(c) for c in CATEGORIES]
