"""Route handlers for the site."""

from academy.web.routes.health import router as health_router
from academy.web.routes.sections import router as sections_router
from academy.web.routes.topics import router as topics_router
from academy.web.routes.tutorials import router as tutorials_router
from academy.web.routes.progress import router as progress_router
from academy.web.routes.pages import router as pages_router

__all__ = [
    "health_router",
    "sections_router",
    "topics_router",
    "tutorials_router",
    "progress_router",
    "pages_router",
]
