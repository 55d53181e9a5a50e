"""Learner progress endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, status

from academy.config.app_config import get_content_dir
from academy.config.sections import get_section_order
from academy.core.progress import (
    LearnerProgress,
    get_section_progress,
    load_progress_state,
    save_progress_state,
)
from academy.core.topics import get_topic_by_slug
from academy.web.schemas import (
    BookmarkResponse,
    LearnerProgressResponse,
    SectionProgressResponse,
    TopicActionRequest,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/progress", tags=["progress"])


def _to_response(learner: LearnerProgress) -> LearnerProgressResponse:
    content_dir = get_content_dir()
    sections = {
        section_id: SectionProgressResponse.from_progress(
            get_section_progress(section_id, content_dir, learner.completed_topics)
        )
        for section_id in get_section_order()
    }
    return LearnerProgressResponse(
        learner_id=learner.learner_id,
        completed_topics=learner.completed_topics,
        bookmarked_topics=learner.bookmarked_topics,
        current_path=learner.current_path,
        last_visited=learner.last_visited,
        sections=sections,
    )


def _require_topic(slug: str) -> None:
    if get_topic_by_slug(slug, get_content_dir()) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Topic '{slug}' not found",
        )


@router.get("/{learner_id}", response_model=LearnerProgressResponse)
async def get_progress(learner_id: str) -> LearnerProgressResponse:
    """Get a learner's progress. Unknown learners have empty progress."""
    state = load_progress_state()
    learner = state.get(learner_id) or LearnerProgress(learner_id=learner_id)
    return _to_response(learner)


@router.post("/{learner_id}/completed", response_model=LearnerProgressResponse)
async def mark_completed(learner_id: str, body: TopicActionRequest) -> LearnerProgressResponse:
    """Mark a topic as completed for a learner."""
    _require_topic(body.slug)

    state = load_progress_state()
    learner = state.get_or_create(learner_id)
    if learner.mark_completed(body.slug):
        logger.info("topic_completed", learner_id=learner_id, slug=body.slug)
    save_progress_state(state)

    return _to_response(learner)


@router.delete("/{learner_id}/completed/{slug}", response_model=LearnerProgressResponse)
async def unmark_completed(learner_id: str, slug: str) -> LearnerProgressResponse:
    """Remove a topic from a learner's completed list."""
    state = load_progress_state()
    learner = state.get(learner_id)

    if learner is None or not learner.unmark_completed(slug):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Topic '{slug}' is not completed for learner '{learner_id}'",
        )

    save_progress_state(state)
    return _to_response(learner)


@router.post("/{learner_id}/bookmarks", response_model=BookmarkResponse)
async def toggle_bookmark(learner_id: str, body: TopicActionRequest) -> BookmarkResponse:
    """Toggle a bookmark on a topic."""
    _require_topic(body.slug)

    state = load_progress_state()
    bookmarked = state.get_or_create(learner_id).toggle_bookmark(body.slug)
    save_progress_state(state)

    return BookmarkResponse(slug=body.slug, bookmarked=bookmarked)
