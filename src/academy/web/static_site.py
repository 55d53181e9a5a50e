"""Static site build.

Renders every page the server can produce into <out_dir>/<url>/index.html
so the site can be hosted without Python.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from academy.config.app_config import get_content_dir
from academy.config.sections import list_sections
from academy.core.topics import get_all_topics
from academy.core.tutorials import get_all_tutorials
from academy.web.rendering import (
    render_home_page,
    render_section_page,
    render_topic_page,
    render_tutorial_page,
    render_tutorials_page,
)

logger = structlog.get_logger(__name__)


@dataclass
class BuildResult:
    """Outcome of a static build."""

    out_dir: Path
    pages: list[Path] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


def _write_page(out_dir: Path, url_path: str, html: str | None, result: BuildResult) -> None:
    if html is None:
        return
    target = out_dir / url_path.strip("/") / "index.html"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(html, encoding="utf-8")
    result.pages.append(target)


def build_site(out_dir: Path, data_dir: Path | None = None) -> BuildResult:
    """Render the whole site to static files.

    Pages are rendered without learner progress.

    Args:
        out_dir: Output directory (created if missing)
        data_dir: Data directory. Defaults to the configured one

    Returns:
        BuildResult listing the written files
    """
    content_dir = get_content_dir(data_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    result = BuildResult(out_dir=out_dir)

    _write_page(out_dir, "/", render_home_page(content_dir), result)

    for section in list_sections():
        _write_page(
            out_dir,
            f"/sections/{section.id}",
            render_section_page(section.id, content_dir),
            result,
        )

    for topic in get_all_topics(content_dir):
        _write_page(
            out_dir,
            f"/sections/{topic.section}/{topic.slug}",
            render_topic_page(topic.section, topic.slug, content_dir),
            result,
        )

    _write_page(out_dir, "/tutorials", render_tutorials_page(content_dir), result)

    for tutorial in get_all_tutorials(content_dir):
        category = tutorial.frontmatter.category
        _write_page(
            out_dir,
            f"/tutorials/{category}/{tutorial.slug}",
            render_tutorial_page(category, tutorial.slug, content_dir),
            result,
        )

    logger.info("site_built", out_dir=str(out_dir), pages=result.page_count)
    return result
