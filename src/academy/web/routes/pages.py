"""Server-rendered HTML pages."""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import HTMLResponse

from academy.config.app_config import get_content_dir
from academy.core.progress import load_progress_state
from academy.web.rendering import (
    render_home_page,
    render_section_page,
    render_topic_page,
    render_tutorial_page,
    render_tutorials_page,
)

router = APIRouter(tags=["pages"], include_in_schema=False)


def _or_404(page: str | None, what: str) -> HTMLResponse:
    if page is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{what} not found",
        )
    return HTMLResponse(page)


@router.get("/", response_class=HTMLResponse)
async def home_page() -> HTMLResponse:
    return HTMLResponse(render_home_page(get_content_dir()))


@router.get("/sections/{section_id}", response_class=HTMLResponse)
async def section_page(section_id: str, learner_id: str | None = None) -> HTMLResponse:
    completed = load_progress_state().completed_for(learner_id)
    page = render_section_page(section_id, get_content_dir(), completed)
    return _or_404(page, f"Section '{section_id}'")


@router.get("/sections/{section_id}/{slug}", response_class=HTMLResponse)
async def topic_page(
    section_id: str, slug: str, learner_id: str | None = None
) -> HTMLResponse:
    completed = load_progress_state().completed_for(learner_id)
    page = render_topic_page(section_id, slug, get_content_dir(), completed)
    return _or_404(page, f"Topic '{slug}'")


@router.get("/tutorials", response_class=HTMLResponse)
async def tutorials_page() -> HTMLResponse:
    return HTMLResponse(render_tutorials_page(get_content_dir()))


@router.get("/tutorials/{category}/{slug}", response_class=HTMLResponse)
async def tutorial_page(category: str, slug: str) -> HTMLResponse:
    page = render_tutorial_page(category, slug, get_content_dir())
    return _or_404(page, f"Tutorial '{slug}'")
