"""Topic curriculum module.

Responsibilities:
- Load topic records from content/topics/<section>/<slug>.md
- Sort and group topics by section and declared order
- Derive display data: related topics, navigation, search, counts

Topic files are read on every call; the content tree is small and static.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterable

import structlog

from academy.config.app_config import load_app_config
from academy.config.sections import Section, get_section_order, list_sections
from academy.core.frontmatter import FrontMatterError, read_markdown_file
from academy.utils.text_utils import (
    ReadingTime,
    calculate_reading_time,
    title_from_slug,
)
from academy.utils.validators import is_plain_name

logger = structlog.get_logger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class Difficulty(str, Enum):
    """How demanding a topic is."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ExamWeight(str, Enum):
    """Importance of a topic for the certification exam."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class TopicFrontmatter:
    """Metadata block of a topic file."""

    title: str
    section: str
    order: int = 0
    difficulty: Difficulty = Difficulty.BEGINNER
    read_time: str = ""
    description: str = ""
    overview: str = ""
    concepts: list[str] = field(default_factory=list)
    prerequisites: list[str] = field(default_factory=list)
    related_topics: list[str] = field(default_factory=list)
    last_updated: str = ""
    exam_weight: ExamWeight = ExamWeight.MEDIUM

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "section": self.section,
            "order": self.order,
            "difficulty": self.difficulty.value,
            "read_time": self.read_time,
            "description": self.description,
            "overview": self.overview,
            "concepts": self.concepts,
            "prerequisites": self.prerequisites,
            "related_topics": self.related_topics,
            "last_updated": self.last_updated,
            "exam_weight": self.exam_weight.value,
        }


@dataclass
class Topic:
    """One topic: front-matter plus markdown body."""

    slug: str
    frontmatter: TopicFrontmatter
    content: str
    reading_time: ReadingTime

    @property
    def section(self) -> str:
        return self.frontmatter.section

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


@dataclass
class TopicNavigation:
    """Neighbours of a topic inside its section."""

    previous: Topic | None = None
    next: Topic | None = None


@dataclass
class SectionData:
    """A catalog section with the number of topics it holds."""

    section: Section
    topic_count: int = 0


@dataclass
class DanglingReference:
    """A slug cross-reference that names no loaded topic."""

    source_slug: str
    field_name: str  # "prerequisites" | "related_topics"
    target_slug: str


# =============================================================================
# FRONT-MATTER COERCION
# =============================================================================


def get_frontmatter_field(data: dict[str, Any], snake: str, camel: str, default: Any) -> Any:
    """Read a key that authors may write in camelCase or snake_case."""
    if camel in data:
        return data[camel]
    return data.get(snake, default)


def as_str_list(value: Any) -> list[str]:
    """Coerce a list field; a lone scalar becomes a one-item list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return [str(value)]
    logger.warning("invalid_frontmatter_list", value=value)
    return []


def _as_int(value: Any, slug: str, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("invalid_frontmatter_int", slug=slug, field=field_name, value=value)
        return 0


def as_enum(enum_cls: type[Enum], value: Any, default: Enum, slug: str) -> Any:
    if value is None:
        return default
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        logger.warning(
            "invalid_frontmatter_enum",
            slug=slug,
            field=enum_cls.__name__,
            value=value,
            default=default.value,
        )
        return default


def build_topic_frontmatter(
    data: dict[str, Any], slug: str, section: str
) -> TopicFrontmatter:
    """Coerce raw front-matter into a well-typed TopicFrontmatter.

    The section always comes from the directory the file lives in.
    """
    return TopicFrontmatter(
        title=str(data.get("title") or title_from_slug(slug)),
        section=section,
        order=_as_int(data.get("order", 0), slug, "order"),
        difficulty=as_enum(Difficulty, data.get("difficulty"), Difficulty.BEGINNER, slug),
        read_time=str(get_frontmatter_field(data, "read_time", "readTime", "") or ""),
        description=str(data.get("description") or ""),
        overview=str(data.get("overview") or ""),
        concepts=as_str_list(data.get("concepts")),
        prerequisites=as_str_list(data.get("prerequisites")),
        related_topics=as_str_list(get_frontmatter_field(data, "related_topics", "relatedTopics", [])),
        last_updated=str(get_frontmatter_field(data, "last_updated", "lastUpdated", "") or ""),
        exam_weight=as_enum(
            ExamWeight,
            get_frontmatter_field(data, "exam_weight", "examWeight", None),
            ExamWeight.MEDIUM,
            slug,
        ),
    )


# =============================================================================
# LOADING
# =============================================================================


def load_topic(
    path: Path,
    section: str,
    words_per_minute: int | None = None,
) -> Topic | None:
    """Load a single topic file.

    Args:
        path: Path to the markdown file
        section: Section id (the parent directory name)
        words_per_minute: Reading speed for the reading-time estimate

    Returns:
        Topic, or None if the file is missing or its front-matter is invalid
    """
    slug = path.stem
    try:
        data, body = read_markdown_file(path)
    except FileNotFoundError:
        logger.warning("topic_missing", slug=slug, section=section, path=str(path))
        return None
    except FrontMatterError as e:
        logger.warning("topic_skipped", slug=slug, section=section, error=str(e))
        return None

    if words_per_minute is None:
        words_per_minute = load_app_config().site.words_per_minute

    return Topic(
        slug=slug,
        frontmatter=build_topic_frontmatter(data, slug, section),
        content=body,
        reading_time=calculate_reading_time(body, words_per_minute),
    )


def _section_rank(section: str, order: list[str]) -> int:
    return order.index(section) if section in order else len(order)


def _topic_sort_key(topic: Topic, order: list[str]) -> tuple[int, int, str]:
    return (_section_rank(topic.section, order), topic.frontmatter.order, topic.slug)


def get_all_topics(
    content_dir: Path, words_per_minute: int | None = None
) -> list[Topic]:
    """Load every topic of every known section.

    Args:
        content_dir: Directory containing topics/

    Returns:
        Topics sorted by section order, then by their declared order
    """
    section_order = get_section_order()
    topics: list[Topic] = []

    for section in section_order:
        section_path = content_dir / "topics" / section
        if not section_path.exists():
            continue

        for file in sorted(section_path.glob("*.md")):
            topic = load_topic(file, section, words_per_minute)
            if topic is not None:
                topics.append(topic)

    topics.sort(key=lambda t: _topic_sort_key(t, section_order))
    logger.debug("topics_loaded", count=len(topics), content_dir=str(content_dir))
    return topics


def get_topic_by_slug(
    slug: str,
    content_dir: Path,
    section: str | None = None,
    words_per_minute: int | None = None,
) -> Topic | None:
    """Find a topic by slug.

    Args:
        slug: File stem of the topic
        content_dir: Directory containing topics/
        section: Restrict the search to one section

    Returns:
        The first match in section order, or None. Unknown sections and slugs
        that are not a plain file name never touch the filesystem.
    """
    section_order = get_section_order()
    if not is_plain_name(slug) or (section and section not in section_order):
        return None
    sections = [section] if section else section_order

    for sect in sections:
        path = content_dir / "topics" / sect / f"{slug}.md"
        if path.exists():
            return load_topic(path, sect, words_per_minute)

    return None


def get_topics_by_section(section: str, content_dir: Path) -> list[Topic]:
    """Topics of one section, sorted by declared order."""
    topics = [t for t in get_all_topics(content_dir) if t.section == section]
    return sorted(topics, key=lambda t: (t.frontmatter.order, t.slug))


def get_section_data(content_dir: Path) -> list[SectionData]:
    """Every catalog section in navigation order, with its topic count."""
    topics = get_all_topics(content_dir)
    return [
        SectionData(
            section=section,
            topic_count=sum(1 for t in topics if t.section == section.id),
        )
        for section in list_sections()
    ]


# =============================================================================
# DERIVED DISPLAY DATA
# =============================================================================


def get_related_topics(slug: str, content_dir: Path, limit: int = 3) -> list[Topic]:
    """Topics worth reading next to the given one.

    A topic is related if it shares the section, shares a concept, or is
    listed in the current topic's related_topics.
    """
    current = get_topic_by_slug(slug, content_dir)
    if current is None:
        return []

    current_concepts = set(current.frontmatter.concepts)
    explicit = set(current.frontmatter.related_topics)

    related = []
    for topic in get_all_topics(content_dir):
        if topic.slug == slug:
            continue
        same_section = topic.section == current.section
        common_concepts = bool(current_concepts.intersection(topic.frontmatter.concepts))
        if same_section or common_concepts or topic.slug in explicit:
            related.append(topic)

    return related[:limit]


def search_topics(query: str, content_dir: Path) -> list[Topic]:
    """Case-insensitive search over title, description, concepts and body."""
    normalized = query.lower().strip()
    if not normalized:
        return []

    def matches(topic: Topic) -> bool:
        fm = topic.frontmatter
        return (
            normalized in fm.title.lower()
            or normalized in fm.description.lower()
            or any(normalized in c.lower() for c in fm.concepts)
            or normalized in topic.content.lower()
        )

    results = [t for t in get_all_topics(content_dir) if matches(t)]
    logger.info("topics_search", query=normalized, results=len(results))
    return results


def get_topic_navigation(slug: str, section: str, content_dir: Path) -> TopicNavigation:
    """Previous and next topic within a section."""
    topics = get_topics_by_section(section, content_dir)
    index = next((i for i, t in enumerate(topics) if t.slug == slug), -1)
    if index < 0:
        return TopicNavigation()

    return TopicNavigation(
        previous=topics[index - 1] if index > 0 else None,
        next=topics[index + 1] if index < len(topics) - 1 else None,
    )


def get_unmet_prerequisites(topic: Topic, completed: Iterable[str]) -> list[str]:
    """Prerequisite slugs the learner hasn't completed, in declared order."""
    done = set(completed)
    return [slug for slug in topic.frontmatter.prerequisites if slug not in done]


def filter_topics(
    topics: list[Topic],
    difficulty: Difficulty | None = None,
    exam_weight: ExamWeight | None = None,
) -> list[Topic]:
    """Keep topics matching every given filter."""
    result = topics
    if difficulty is not None:
        result = [t for t in result if t.frontmatter.difficulty == difficulty]
    if exam_weight is not None:
        result = [t for t in result if t.frontmatter.exam_weight == exam_weight]
    return result


def count_by_difficulty(topics: Iterable[Topic]) -> dict[str, int]:
    """Topic counts per difficulty, zeros included."""
    counts = {d.value: 0 for d in Difficulty}
    for topic in topics:
        counts[topic.frontmatter.difficulty.value] += 1
    return counts


def count_by_exam_weight(topics: Iterable[Topic]) -> dict[str, int]:
    """Topic counts per exam weight, zeros included."""
    counts = {w.value: 0 for w in ExamWeight}
    for topic in topics:
        counts[topic.frontmatter.exam_weight.value] += 1
    return counts


def find_dangling_references(topics: list[Topic]) -> list[DanglingReference]:
    """Cross-references that point at no loaded topic."""
    known = {t.slug for t in topics}
    dangling = []
    for topic in topics:
        for field_name in ("prerequisites", "related_topics"):
            for target in getattr(topic.frontmatter, field_name):
                if target not in known:
                    dangling.append(
                        DanglingReference(
                            source_slug=topic.slug,
                            field_name=field_name,
                            target_slug=target,
                        )
                    )
    return dangling
