"""Markdown to HTML rendering for topic and tutorial pages.

Built on Python-Markdown with a small extension that:
- normalizes fenced code languages ("js" -> "javascript")
- tags headings with level classes and h1 headings with a section class
- turns emoji-prefixed blockquotes into callouts
- wraps tables in a scrollable container

Usage:
    from academy.core.markdown_renderer import render_markdown

    rendered = render_markdown(topic.content)
    rendered.html, rendered.table_of_contents
"""

from __future__ import annotations

import html
import re
import xml.etree.ElementTree as etree
from dataclasses import dataclass, field
from typing import Any

import markdown
from markdown.extensions import Extension
from markdown.extensions.toc import TocExtension
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor

from academy.utils.text_utils import slugify

# Fence aliases; other valid names pass through, missing or invalid ones become "text"
LANGUAGE_ALIASES = {
    "js": "javascript",
    "ts": "typescript",
    "html": "markup",
    "xml": "markup",
    "cls": "apex",
}

VALID_LANGUAGE = re.compile(r"^[a-zA-Z0-9_+-]*$")

FENCE_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,})[ \t]*(?P<lang>[^\s`{]+)?(?P<rest>.*)$"
)

# (keywords, css class) in priority order, matched against lowercased h1 text
SECTION_CLASSES: list[tuple[tuple[str, ...], str]] = [
    (("core concepts",), "section-concepts"),
    (("code examples",), "section-code"),
    (("common gotchas", "gotcha"), "section-gotchas"),
    (("exam tips", "exam"), "section-exam"),
    (("practice exercises", "exercise"), "section-practice"),
    (("type conversion", "casting"), "section-conversion"),
    (("constants", "final"), "section-constants"),
    (("related topics",), "section-related"),
]

CALLOUT_PATTERN = re.compile(
    "^(?P<icon>\U0001F4A1|⚠️?|\U0001F480|ℹ️?|✅|\U0001F3AF)\\s*"
    r"(?P<type>TIP|WARNING|ERROR|INFO|EXAM[-_]TRAP|BEST[-_]PRACTICE):\s*(?P<body>.*)$",
    re.IGNORECASE | re.DOTALL,
)


@dataclass
class TocItem:
    """One heading in the table of contents."""

    id: str
    title: str
    level: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "level": self.level}


@dataclass
class RenderedMarkdown:
    """HTML output plus the headings it contains."""

    html: str
    table_of_contents: list[TocItem] = field(default_factory=list)


def normalize_language(language: str) -> str:
    """Map a fence info string to the language class used by the templates."""
    lang = language.lower()
    if not lang or not VALID_LANGUAGE.match(lang):
        return "text"
    return LANGUAGE_ALIASES.get(lang, lang)


def section_class_for(heading_text: str) -> str:
    """CSS class for a top-level heading, empty when none applies."""
    lowered = heading_text.lower()
    for keywords, css_class in SECTION_CLASSES:
        if any(k in lowered for k in keywords):
            return css_class
    return ""


class CodeLanguagePreprocessor(Preprocessor):
    """Rewrite opening code fences with a normalized language."""

    def run(self, lines: list[str]) -> list[str]:
        result = []
        open_fence: str | None = None
        for line in lines:
            match = FENCE_PATTERN.match(line)
            if match:
                fence = match.group("fence")
                lang = match.group("lang")
                if open_fence is None:
                    open_fence = fence
                    line = f"{fence}{normalize_language(lang or '')}{match.group('rest')}"
                elif (
                    fence[0] == open_fence[0]
                    and len(fence) >= len(open_fence)
                    and not lang
                ):
                    open_fence = None
            result.append(line)
        return result


class HeadingClassTreeprocessor(Treeprocessor):
    """Add heading-N classes, plus a section class on h1."""

    def run(self, root: etree.Element) -> None:
        for el in root.iter():
            if el.tag not in ("h1", "h2", "h3", "h4", "h5", "h6"):
                continue
            level = int(el.tag[1])
            classes = [f"heading-{level}"]
            if level == 1:
                section_class = section_class_for("".join(el.itertext()))
                if section_class:
                    classes.append(section_class)
            el.set("class", " ".join(classes))


class CalloutTreeprocessor(Treeprocessor):
    """Turn "💡 TIP: ..." blockquotes into callout boxes."""

    def run(self, root: etree.Element) -> None:
        for el in list(root.iter("blockquote")):
            if len(el) == 0 or el[0].tag != "p":
                continue
            first = el[0]
            match = CALLOUT_PATTERN.match(first.text or "")
            if match is None:
                continue

            callout_type = match.group("type").lower().replace("_", "-")
            el.tag = "div"
            el.set("class", f"callout callout-{callout_type}")
            el.set("data-icon", match.group("icon"))
            first.text = match.group("body")

            title = etree.Element("h5", {"class": "callout-title"})
            title.text = callout_type.replace("-", " ").title()
            el.insert(0, title)


class TableWrapperTreeprocessor(Treeprocessor):
    """Wrap every table in div.table-wrapper."""

    def run(self, root: etree.Element) -> None:
        for parent in list(root.iter()):
            for index, child in enumerate(list(parent)):
                if child.tag != "table":
                    continue
                child.set("class", "content-table")
                wrapper = etree.Element("div", {"class": "table-wrapper"})
                wrapper.tail = child.tail
                child.tail = None
                parent.remove(child)
                parent.insert(index, wrapper)
                wrapper.append(child)


class AcademyExtension(Extension):
    """Registers the academy processors on a Markdown instance."""

    def extendMarkdown(self, md: markdown.Markdown) -> None:
        # Before fenced_code (25)
        md.preprocessors.register(CodeLanguagePreprocessor(md), "academy_code_language", 28)
        # After inline (20), before prettify (10) and toc (5)
        md.treeprocessors.register(HeadingClassTreeprocessor(md), "academy_headings", 15)
        md.treeprocessors.register(TableWrapperTreeprocessor(md), "academy_tables", 13)
        # After toc so callout titles stay out of the table of contents
        md.treeprocessors.register(CalloutTreeprocessor(md), "academy_callouts", 4)


def _toc_slugify(value: str, separator: str) -> str:
    return slugify(value, separator)


def _flatten_toc(tokens: list[dict[str, Any]]) -> list[TocItem]:
    items: list[TocItem] = []
    for token in tokens:
        items.append(
            TocItem(
                id=token["id"],
                title=html.unescape(token["name"]),
                level=int(token["level"]),
            )
        )
        items.extend(_flatten_toc(token.get("children", [])))
    return items


def _build_markdown() -> markdown.Markdown:
    return markdown.Markdown(
        extensions=[
            "fenced_code",
            "tables",
            TocExtension(
                slugify=_toc_slugify,
                anchorlink=True,
                anchorlink_class="anchor-link",
            ),
            AcademyExtension(),
        ],
        output_format="html",
    )


def render_markdown(text: str) -> RenderedMarkdown:
    """Convert markdown to HTML and collect its table of contents.

    A fresh Markdown instance is built per call; instances keep state.
    """
    md = _build_markdown()
    body = md.convert(text)
    return RenderedMarkdown(
        html=body,
        table_of_contents=_flatten_toc(getattr(md, "toc_tokens", [])),
    )


# Applied in order to strip markdown down to plain text
_EXCERPT_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"#{1,6}\s+"), ""),  # headers
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),  # bold
    (re.compile(r"\*(.*?)\*"), r"\1"),  # italic
    (re.compile(r"`(.*?)`"), r"\1"),  # inline code
    (re.compile(r"\[(.*?)\]\(.*?\)"), r"\1"),  # links
    (re.compile(r">\s+"), ""),  # blockquotes
    (re.compile(r"\n\s*\n"), " "),
    (re.compile(r"\n"), " "),
]


def extract_excerpt(content: str, max_length: int = 160) -> str:
    """Plain-text teaser of a markdown body.

    Cuts at the last word boundary when it falls in the final 20% of
    the limit, otherwise hard-cuts, and appends "...".
    """
    plain = content
    for pattern, replacement in _EXCERPT_RULES:
        plain = pattern.sub(replacement, plain)
    plain = plain.strip()

    if len(plain) <= max_length:
        return plain

    truncated = plain[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > max_length * 0.8:
        return truncated[:last_space] + "..."

    return truncated + "..."
