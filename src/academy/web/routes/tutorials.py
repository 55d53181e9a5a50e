"""Tutorial endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, status

from academy.config.app_config import get_content_dir, load_app_config
from academy.core.markdown_renderer import render_markdown
from academy.core.tutorials import (
    get_all_categories,
    get_all_tags,
    get_all_tutorials,
    get_related_tutorials,
    get_tutorial_by_slug,
)
from academy.web.schemas import (
    CategoryListResponse,
    CategoryResponse,
    TagListResponse,
    TocItemResponse,
    TutorialDetail,
    TutorialListResponse,
    TutorialSummary,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/tutorials", tags=["tutorials"])


@router.get("", response_model=TutorialListResponse)
async def list_tutorials(
    category: str | None = None,
    tag: str | None = None,
    featured: bool | None = None,
) -> TutorialListResponse:
    """List tutorials, newest first, optionally filtered."""
    tutorials = get_all_tutorials(get_content_dir())
    if category:
        tutorials = [t for t in tutorials if t.frontmatter.category == category]
    if tag:
        tutorials = [t for t in tutorials if tag in t.frontmatter.tags]
    if featured is not None:
        tutorials = [t for t in tutorials if t.frontmatter.featured == featured]

    logger.info("tutorials_list", count=len(tutorials), category=category, tag=tag)

    summaries = [TutorialSummary.from_tutorial(t) for t in tutorials]
    return TutorialListResponse(tutorials=summaries, count=len(summaries))


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories() -> CategoryListResponse:
    """List tutorial categories with tutorial counts."""
    tutorials = get_all_tutorials(get_content_dir())
    categories = [
        CategoryResponse(
            **c,
            tutorial_count=sum(1 for t in tutorials if t.frontmatter.category == c["id"]),
        )
        for c in get_all_categories()
    ]
    return CategoryListResponse(categories=categories, count=len(categories))


@router.get("/tags", response_model=TagListResponse)
async def list_tags() -> TagListResponse:
    """List every tag used by a tutorial."""
    tags = get_all_tags(get_content_dir())
    return TagListResponse(tags=tags, count=len(tags))


@router.get("/{slug}", response_model=TutorialDetail)
async def get_tutorial(slug: str, category: str | None = None) -> TutorialDetail:
    """Get a rendered tutorial with related tutorials."""
    content_dir = get_content_dir()
    tutorial = get_tutorial_by_slug(slug, content_dir, category=category)

    if tutorial is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tutorial '{slug}' not found",
        )

    rendered = render_markdown(tutorial.content)
    related = get_related_tutorials(
        tutorial.slug, content_dir, limit=load_app_config().site.related_limit
    )

    summary = TutorialSummary.from_tutorial(tutorial)
    return TutorialDetail(
        **summary.model_dump(),
        prerequisites=tutorial.frontmatter.prerequisites,
        html=rendered.html,
        table_of_contents=[TocItemResponse.from_item(i) for i in rendered.table_of_contents],
        related=[TutorialSummary.from_tutorial(t) for t in related],
    )
