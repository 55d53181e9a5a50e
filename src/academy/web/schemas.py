"""Pydantic schemas for the Web API.

Serialization models for sections, topics, tutorials and learner progress.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from academy.config.sections import Section
from academy.core.markdown_renderer import TocItem
from academy.core.progress import LearningPathPosition, SectionProgress
from academy.core.topics import Topic
from academy.core.tutorials import Tutorial
from academy.utils.text_utils import ReadingTime


# =============================================================================
# SHARED
# =============================================================================


class ReadingTimeResponse(BaseModel):
    """Reading time estimate."""

    text: str
    minutes: float
    time: int
    words: int

    @classmethod
    def from_reading_time(cls, rt: ReadingTime) -> ReadingTimeResponse:
        return cls(text=rt.text, minutes=rt.minutes, time=rt.time, words=rt.words)


class TocItemResponse(BaseModel):
    """Table of contents entry."""

    id: str
    title: str
    level: int

    @classmethod
    def from_item(cls, item: TocItem) -> TocItemResponse:
        return cls(id=item.id, title=item.title, level=item.level)


# =============================================================================
# TOPIC SCHEMAS
# =============================================================================


class TopicLink(BaseModel):
    """Minimal reference to a topic for navigation."""

    slug: str
    title: str
    section: str

    @classmethod
    def from_topic(cls, topic: Topic | None) -> TopicLink | None:
        if topic is None:
            return None
        return cls(slug=topic.slug, title=topic.frontmatter.title, section=topic.section)


class TopicSummary(BaseModel):
    """Topic card data."""

    slug: str
    title: str
    section: str
    order: int
    difficulty: str
    exam_weight: str
    description: str = ""
    read_time: str = ""
    concepts: list[str] = Field(default_factory=list)
    prerequisites: list[str] = Field(default_factory=list)
    reading_time: ReadingTimeResponse

    @classmethod
    def from_topic(cls, topic: Topic) -> TopicSummary:
        fm = topic.frontmatter
        return cls(
            slug=topic.slug,
            title=fm.title,
            section=fm.section,
            order=fm.order,
            difficulty=fm.difficulty.value,
            exam_weight=fm.exam_weight.value,
            description=fm.description,
            read_time=fm.read_time,
            concepts=fm.concepts,
            prerequisites=fm.prerequisites,
            reading_time=ReadingTimeResponse.from_reading_time(topic.reading_time),
        )


class TopicListResponse(BaseModel):
    """Response for list of topics."""

    topics: list[TopicSummary]
    count: int


class TopicDetail(TopicSummary):
    """Full topic page data."""

    overview: str = ""
    related_topics: list[str] = Field(default_factory=list)
    last_updated: str = ""
    html: str
    table_of_contents: list[TocItemResponse] = Field(default_factory=list)
    previous: TopicLink | None = None
    next: TopicLink | None = None
    related: list[TopicSummary] = Field(default_factory=list)
    unmet_prerequisites: list[str] = Field(default_factory=list)


class TopicStatsResponse(BaseModel):
    """Aggregate counts across the curriculum."""

    total: int
    by_section: dict[str, int]
    by_difficulty: dict[str, int]
    by_exam_weight: dict[str, int]


# =============================================================================
# SECTION SCHEMAS
# =============================================================================


class SectionProgressResponse(BaseModel):
    """Progress bar data."""

    completed: int = 0
    total: int = 0
    percentage: int = 0

    @classmethod
    def from_progress(cls, progress: SectionProgress) -> SectionProgressResponse:
        return cls(
            completed=progress.completed,
            total=progress.total,
            percentage=progress.percentage,
        )


class LearningPathResponse(BaseModel):
    """Learner position inside a section."""

    current: TopicLink | None = None
    next: TopicLink | None = None
    previous: TopicLink | None = None
    progress: int = 0

    @classmethod
    def from_position(cls, position: LearningPathPosition) -> LearningPathResponse:
        return cls(
            current=TopicLink.from_topic(position.current),
            next=TopicLink.from_topic(position.next),
            previous=TopicLink.from_topic(position.previous),
            progress=position.progress,
        )


class SectionSummary(BaseModel):
    """Section card data."""

    id: str
    name: str
    description: str = ""
    icon: str = ""
    color: str = "gray"
    topic_count: int = 0

    @classmethod
    def from_section(cls, section: Section, topic_count: int) -> SectionSummary:
        return cls(
            id=section.id,
            name=section.name,
            description=section.description,
            icon=section.icon,
            color=section.color,
            topic_count=topic_count,
        )


class SectionListResponse(BaseModel):
    """Response for list of sections."""

    sections: list[SectionSummary]
    count: int


class SectionDetail(SectionSummary):
    """Section page data."""

    topics: list[TopicSummary]
    progress: SectionProgressResponse
    learning_path: LearningPathResponse


# =============================================================================
# TUTORIAL SCHEMAS
# =============================================================================


class TutorialSummary(BaseModel):
    """Tutorial card data."""

    slug: str
    title: str
    category: str
    difficulty: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    featured: bool = False
    last_updated: str = ""
    reading_time: ReadingTimeResponse

    @classmethod
    def from_tutorial(cls, tutorial: Tutorial) -> TutorialSummary:
        fm = tutorial.frontmatter
        return cls(
            slug=tutorial.slug,
            title=fm.title,
            category=fm.category,
            difficulty=fm.difficulty.value,
            description=fm.description,
            tags=fm.tags,
            featured=fm.featured,
            last_updated=fm.last_updated,
            reading_time=ReadingTimeResponse.from_reading_time(tutorial.reading_time),
        )


class TutorialListResponse(BaseModel):
    """Response for list of tutorials."""

    tutorials: list[TutorialSummary]
    count: int


class TutorialDetail(TutorialSummary):
    """Full tutorial page data."""

    prerequisites: list[str] = Field(default_factory=list)
    html: str
    table_of_contents: list[TocItemResponse] = Field(default_factory=list)
    related: list[TutorialSummary] = Field(default_factory=list)


class CategoryResponse(BaseModel):
    """Tutorial category."""

    id: str
    name: str
    description: str
    tutorial_count: int = 0


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]
    count: int


class TagListResponse(BaseModel):
    tags: list[str]
    count: int


# =============================================================================
# PROGRESS SCHEMAS
# =============================================================================


class TopicActionRequest(BaseModel):
    """Request body naming a topic."""

    slug: str = Field(..., min_length=1, max_length=200)


class LearnerProgressResponse(BaseModel):
    """Response for a learner's progress."""

    learner_id: str
    completed_topics: list[str]
    bookmarked_topics: list[str]
    current_path: str | None = None
    last_visited: str = ""
    sections: dict[str, SectionProgressResponse] = Field(default_factory=dict)


class BookmarkResponse(BaseModel):
    slug: str
    bookmarked: bool


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
