"""Content lookup helpers.

Slug conventions:
- topic and tutorial slugs are the markdown file stem ("variables-and-data-types")
- section ids are the directory names under content/topics/
- a topic reference is "slug" or "section/slug", either part of the slug
  may be abbreviated to a prefix ("apex/var")

Functions:
- is_plain_name(name) -> bool: Safe to use as one path component
- resolve_topic_ref(ref, topics) -> TopicRef: Resolve a reference to one topic
- get_available_sections(content_dir) -> list[str]: Section dirs on disk
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TopicRef:
    """A topic's location: section directory and file stem."""

    section: str
    slug: str

    def __str__(self) -> str:
        return f"{self.section}/{self.slug}"


class AmbiguousSlugError(Exception):
    """Raised when a reference matches more than one topic."""

    def __init__(self, ref: str, matches: list[TopicRef]):
        self.ref = ref
        self.matches = matches
        super().__init__(
            f"'{ref}' is ambiguous, qualify it with a section:\n"
            + "\n".join(f"  - {m}" for m in matches)
        )


class SlugNotFoundError(Exception):
    """Raised when no topic matches a reference."""

    def __init__(self, ref: str, section: str | None = None):
        self.ref = ref
        self.section = section
        where = f" in section '{section}'" if section else ""
        super().__init__(f"No topic found matching '{ref}'{where}")


def is_plain_name(name: str) -> bool:
    """True if name is a single path component (no separators, not . or ..)."""
    if not name or name in (".", ".."):
        return False
    return "/" not in name and "\\" not in name and "\x00" not in name


def resolve_topic_ref(ref: str, topics: list[TopicRef]) -> TopicRef:
    """Resolve "slug" or "section/slug" (slug may be a prefix) to one topic.

    An exact slug beats prefix matches. The same slug in two sections is
    ambiguous unless the reference names the section.

    Raises:
        SlugNotFoundError: If nothing matches
        AmbiguousSlugError: If more than one topic matches
    """
    section, _, prefix = ref.rpartition("/")
    pool = [t for t in topics if t.section == section] if section else list(topics)

    exact = [t for t in pool if t.slug == prefix]
    matches = exact or [t for t in pool if t.slug.startswith(prefix)]

    if not matches:
        raise SlugNotFoundError(prefix, section or None)
    if len(matches) > 1:
        raise AmbiguousSlugError(ref, sorted(matches, key=str))
    return matches[0]


def get_available_sections(content_dir: Path) -> list[str]:
    """Get section directory names present under content/topics/.

    Args:
        content_dir: Path to the content directory

    Returns:
        Sorted list of section ids that have a directory on disk
    """
    topics_dir = content_dir / "topics"
    if not topics_dir.exists():
        return []

    return sorted(
        d.name
        for d in topics_dir.iterdir()
        if d.is_dir() and not d.name.startswith(".")
    )
