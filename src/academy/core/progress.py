"""Learner progress tracking.

Responsibilities:
- Persist per-learner completed and bookmarked topics
- Derive section progress (completed / total) for progress bars
- Locate the learner's current position in a section's learning path

State persistence:
- data/state/progress_v1.json
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

import structlog

from academy.config.app_config import get_state_dir
from academy.core.topics import Topic, get_topics_by_section
from academy.utils.text_utils import round_half_up

logger = structlog.get_logger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

PROGRESS_SCHEMA = "progress_v1"
PROGRESS_FILENAME = "progress_v1.json"


# =============================================================================
# DISPLAY DATA
# =============================================================================


@dataclass
class SectionProgress:
    """Progress bar data for one section."""

    completed: int
    total: int
    percentage: int

    def to_dict(self) -> dict[str, int]:
        return {
            "completed": self.completed,
            "total": self.total,
            "percentage": self.percentage,
        }


@dataclass
class LearningPathPosition:
    """Where a learner stands inside a section."""

    current: Topic | None = None
    next: Topic | None = None
    previous: Topic | None = None
    progress: int = 0


def calculate_percentage(completed: int, total: int) -> int:
    """completed / total as a whole percentage, 0 for an empty total."""
    if total <= 0:
        return 0
    return round_half_up(completed / total * 100)


def get_section_progress(
    section: str, content_dir: Path, completed_slugs: Iterable[str] = ()
) -> SectionProgress:
    """Count completed topics of a section.

    Completed slugs outside the section are ignored, so stale entries
    never push the percentage past 100.
    """
    slugs = {t.slug for t in get_topics_by_section(section, content_dir)}
    completed = len(slugs.intersection(completed_slugs))
    return SectionProgress(
        completed=completed,
        total=len(slugs),
        percentage=calculate_percentage(completed, len(slugs)),
    )


def get_learning_path(
    section: str, content_dir: Path, completed_slugs: Iterable[str] = ()
) -> LearningPathPosition:
    """Current, next and previous topic for a learner in a section.

    The current topic is the first one not yet completed. Once every
    topic is done the learner stays on the last one.
    """
    topics = get_topics_by_section(section, content_dir)
    if not topics:
        return LearningPathPosition()

    done = set(completed_slugs)
    current_index = next(
        (i for i, t in enumerate(topics) if t.slug not in done),
        len(topics) - 1,
    )

    return LearningPathPosition(
        current=topics[current_index],
        next=topics[current_index + 1] if current_index + 1 < len(topics) else None,
        previous=topics[current_index - 1] if current_index > 0 else None,
        progress=calculate_percentage(current_index + 1, len(topics)),
    )


# =============================================================================
# PERSISTENT STATE
# =============================================================================


@dataclass
class LearnerProgress:
    """Completed and bookmarked topics of one learner."""

    learner_id: str
    completed_topics: list[str] = field(default_factory=list)
    bookmarked_topics: list[str] = field(default_factory=list)
    current_path: str | None = None
    last_visited: str = ""

    def touch(self) -> None:
        """Record activity now."""
        self.last_visited = datetime.now(timezone.utc).isoformat()

    def mark_completed(self, slug: str) -> bool:
        """Mark a topic as completed. Returns False if it already was."""
        self.touch()
        if slug in self.completed_topics:
            return False
        self.completed_topics.append(slug)
        return True

    def unmark_completed(self, slug: str) -> bool:
        """Remove a topic from the completed list. Returns True if removed."""
        if slug not in self.completed_topics:
            return False
        self.completed_topics.remove(slug)
        self.touch()
        return True

    def toggle_bookmark(self, slug: str) -> bool:
        """Flip the bookmark on a topic. Returns the new bookmarked state."""
        self.touch()
        if slug in self.bookmarked_topics:
            self.bookmarked_topics.remove(slug)
            return False
        self.bookmarked_topics.append(slug)
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "learner_id": self.learner_id,
            "completed_topics": self.completed_topics,
            "bookmarked_topics": self.bookmarked_topics,
            "current_path": self.current_path,
            "last_visited": self.last_visited,
        }


@dataclass
class ProgressState:
    """All learners' progress."""

    learners: dict[str, LearnerProgress] = field(default_factory=dict)

    def get(self, learner_id: str) -> LearnerProgress | None:
        return self.learners.get(learner_id)

    def get_or_create(self, learner_id: str) -> LearnerProgress:
        """Get or create progress for a learner."""
        if learner_id not in self.learners:
            self.learners[learner_id] = LearnerProgress(learner_id=learner_id)
        return self.learners[learner_id]

    def completed_for(self, learner_id: str | None) -> list[str]:
        """Completed slugs of a learner, empty for unknown or anonymous."""
        if not learner_id or learner_id not in self.learners:
            return []
        return list(self.learners[learner_id].completed_topics)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "$schema": PROGRESS_SCHEMA,
            "learners": [lp.to_dict() for lp in self.learners.values()],
        }


def load_progress_state(state_dir: Path | None = None) -> ProgressState:
    """Load progress state from disk, or return fresh state.

    Args:
        state_dir: State directory. Defaults to <data_dir>/state

    Returns:
        ProgressState object (fresh if file missing or corrupted)
    """
    if state_dir is None:
        state_dir = get_state_dir()

    state_path = state_dir / PROGRESS_FILENAME
    if not state_path.exists():
        return ProgressState()

    try:
        with open(state_path, encoding="utf-8") as f:
            data = json.load(f)

        if data.get("$schema") != PROGRESS_SCHEMA:
            logger.warning(
                "progress_state_invalid_schema",
                expected=PROGRESS_SCHEMA,
                got=data.get("$schema"),
            )
            return ProgressState()

        learners: dict[str, LearnerProgress] = {}
        for lp_data in data.get("learners", []):
            learner_id = lp_data["learner_id"]
            learners[learner_id] = LearnerProgress(
                learner_id=learner_id,
                completed_topics=lp_data.get("completed_topics", []),
                bookmarked_topics=lp_data.get("bookmarked_topics", []),
                current_path=lp_data.get("current_path"),
                last_visited=lp_data.get("last_visited", ""),
            )

        return ProgressState(learners=learners)

    except (json.JSONDecodeError, OSError, KeyError, AttributeError) as e:
        logger.error("progress_state_load_failed", error=str(e))
        return ProgressState()


def save_progress_state(state: ProgressState, state_dir: Path | None = None) -> Path:
    """Persist progress state to disk.

    Returns:
        Path to saved state file
    """
    if state_dir is None:
        state_dir = get_state_dir()

    state_dir.mkdir(parents=True, exist_ok=True)
    state_path = state_dir / PROGRESS_FILENAME

    with open(state_path, "w", encoding="utf-8") as f:
        json.dump(state.to_dict(), f, indent=2, ensure_ascii=False)

    logger.info("progress_state_saved", path=str(state_path), learners=len(state.learners))
    return state_path
