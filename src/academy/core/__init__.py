"""Core content logic.

Modules:
- frontmatter: YAML front-matter parsing
- topics: Curriculum topic loading, grouping and display helpers
- tutorials: Standalone tutorial loading and filtering
- progress: Learner progress persistence and progress-bar data
- markdown_renderer: Markdown to HTML with table of contents
"""

__all__ = [
    "frontmatter",
    "topics",
    "tutorials",
    "progress",
    "markdown_renderer",
]
