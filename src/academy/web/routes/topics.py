"""Topic endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, Query, status

from academy.config.app_config import get_content_dir, load_app_config
from academy.config.sections import get_section_order
from academy.core.markdown_renderer import render_markdown
from academy.core.progress import load_progress_state
from academy.core.topics import (
    Difficulty,
    ExamWeight,
    count_by_difficulty,
    count_by_exam_weight,
    filter_topics,
    get_all_topics,
    get_related_topics,
    get_topic_by_slug,
    get_topic_navigation,
    get_unmet_prerequisites,
    search_topics,
)
from academy.web.schemas import (
    TocItemResponse,
    TopicDetail,
    TopicLink,
    TopicListResponse,
    TopicStatsResponse,
    TopicSummary,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/topics", tags=["topics"])


@router.get("", response_model=TopicListResponse)
async def list_topics(
    section: str | None = None,
    difficulty: Difficulty | None = None,
    exam_weight: ExamWeight | None = None,
) -> TopicListResponse:
    """List topics in curriculum order, optionally filtered."""
    topics = get_all_topics(get_content_dir())
    if section:
        topics = [t for t in topics if t.section == section]
    topics = filter_topics(topics, difficulty=difficulty, exam_weight=exam_weight)

    logger.info("topics_list", count=len(topics), section=section)

    summaries = [TopicSummary.from_topic(t) for t in topics]
    return TopicListResponse(topics=summaries, count=len(summaries))


@router.get("/search", response_model=TopicListResponse)
async def search(q: str = Query(default="", max_length=200)) -> TopicListResponse:
    """Search topics by title, description, concepts and body."""
    summaries = [TopicSummary.from_topic(t) for t in search_topics(q, get_content_dir())]
    return TopicListResponse(topics=summaries, count=len(summaries))


@router.get("/stats", response_model=TopicStatsResponse)
async def topic_stats() -> TopicStatsResponse:
    """Topic counts per section, difficulty and exam weight."""
    topics = get_all_topics(get_content_dir())
    by_section = {s: 0 for s in get_section_order()}
    for topic in topics:
        by_section[topic.section] = by_section.get(topic.section, 0) + 1

    return TopicStatsResponse(
        total=len(topics),
        by_section=by_section,
        by_difficulty=count_by_difficulty(topics),
        by_exam_weight=count_by_exam_weight(topics),
    )


@router.get("/{slug}", response_model=TopicDetail)
async def get_topic(
    slug: str,
    section: str | None = None,
    learner_id: str | None = None,
) -> TopicDetail:
    """Get a rendered topic with navigation and related topics."""
    content_dir = get_content_dir()
    topic = get_topic_by_slug(slug, content_dir, section=section)

    if topic is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Topic '{slug}' not found",
        )

    rendered = render_markdown(topic.content)
    navigation = get_topic_navigation(topic.slug, topic.section, content_dir)
    related = get_related_topics(
        topic.slug, content_dir, limit=load_app_config().site.related_limit
    )
    completed = load_progress_state().completed_for(learner_id)

    summary = TopicSummary.from_topic(topic)
    return TopicDetail(
        **summary.model_dump(),
        overview=topic.frontmatter.overview,
        related_topics=topic.frontmatter.related_topics,
        last_updated=topic.frontmatter.last_updated,
        html=rendered.html,
        table_of_contents=[TocItemResponse.from_item(i) for i in rendered.table_of_contents],
        previous=TopicLink.from_topic(navigation.previous),
        next=TopicLink.from_topic(navigation.next),
        related=[TopicSummary.from_topic(t) for t in related],
        unmet_prerequisites=get_unmet_prerequisites(topic, completed),
    )
