"""Section endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, Query, status

from academy.config.app_config import get_content_dir
from academy.config.sections import get_section
from academy.core.progress import (
    get_learning_path,
    get_section_progress,
    load_progress_state,
)
from academy.core.topics import get_section_data, get_topics_by_section
from academy.web.schemas import (
    LearningPathResponse,
    SectionDetail,
    SectionListResponse,
    SectionProgressResponse,
    SectionSummary,
    TopicSummary,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/sections", tags=["sections"])


@router.get("", response_model=SectionListResponse)
async def list_all_sections() -> SectionListResponse:
    """List sections in navigation order with their topic counts."""
    sections = [
        SectionSummary.from_section(data.section, topic_count=data.topic_count)
        for data in get_section_data(get_content_dir())
    ]

    return SectionListResponse(sections=sections, count=len(sections))


@router.get("/{section_id}", response_model=SectionDetail)
async def get_section_detail(
    section_id: str,
    learner_id: str | None = Query(default=None, description="Learner for progress data"),
) -> SectionDetail:
    """Get a section with its topics, progress and learning path."""
    section = get_section(section_id)
    if section is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Section '{section_id}' not found",
        )

    content_dir = get_content_dir()
    topics = get_topics_by_section(section_id, content_dir)
    completed = load_progress_state().completed_for(learner_id)

    logger.info(
        "section_detail",
        section_id=section_id,
        topics=len(topics),
        learner_id=learner_id,
    )

    summary = SectionSummary.from_section(section, topic_count=len(topics))
    return SectionDetail(
        **summary.model_dump(),
        topics=[TopicSummary.from_topic(t) for t in topics],
        progress=SectionProgressResponse.from_progress(
            get_section_progress(section_id, content_dir, completed)
        ),
        learning_path=LearningPathResponse.from_position(
            get_learning_path(section_id, content_dir, completed)
        ),
    )
