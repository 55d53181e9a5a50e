"""CLI commands for the academy site.

Commands:
- sections: List sections with topic counts
- topics: List topics, optionally filtered
- show: Show one topic's metadata and outline
- search: Search topics
- stats: Curriculum counts by section, difficulty and exam weight
- validate: Report content problems (bad front-matter, dangling slugs)
- complete / progress: Track a learner's completed topics
- build: Render the static site
- serve: Run the web server
"""

import os
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from academy.config.app_config import get_content_dir, get_state_dir
from academy.config.sections import get_section_order, list_sections
from academy.core.frontmatter import FrontMatterError, read_markdown_file
from academy.core.markdown_renderer import render_markdown
from academy.core.progress import (
    get_section_progress,
    load_progress_state,
    save_progress_state,
)
from academy.core.topics import (
    Difficulty,
    ExamWeight,
    count_by_difficulty,
    count_by_exam_weight,
    filter_topics,
    find_dangling_references,
    get_all_topics,
    get_section_data,
    get_topic_by_slug,
    search_topics,
)
from academy.utils.validators import (
    AmbiguousSlugError,
    SlugNotFoundError,
    TopicRef,
    get_available_sections,
    resolve_topic_ref,
)

app = typer.Typer(
    name="academy",
    help="Markdown curriculum site for Salesforce development.",
    no_args_is_help=True,
)

console = Console()

DIFFICULTY_STYLES = {
    "beginner": "green",
    "intermediate": "yellow",
    "advanced": "red",
}


def _content_dir() -> Path:
    return get_content_dir()


def _resolve_topic_or_exit(ref: str) -> TopicRef:
    """Resolve "slug" or "section/slug" to one topic, or exit with helpful error."""
    topics = [TopicRef(t.section, t.slug) for t in get_all_topics(_content_dir())]
    try:
        return resolve_topic_ref(ref, topics)
    except (SlugNotFoundError, AmbiguousSlugError) as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _parse_enum(enum_cls, value: str | None, option: str):
    if value is None:
        return None
    try:
        return enum_cls(value.lower())
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        console.print(f"[red]✗ Invalid {option} '{escape(value)}'. Use one of: {allowed}[/red]")
        raise typer.Exit(code=1)


def _topics_table(topics, title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Section", style="cyan")
    table.add_column("#", justify="right", width=3)
    table.add_column("Slug")
    table.add_column("Title")
    table.add_column("Difficulty")
    table.add_column("Exam", justify="center")
    table.add_column("Read", justify="right")

    for topic in topics:
        fm = topic.frontmatter
        style = DIFFICULTY_STYLES.get(fm.difficulty.value, "white")
        table.add_row(
            fm.section,
            str(fm.order),
            escape(topic.slug),
            escape(fm.title),
            f"[{style}]{fm.difficulty.value}[/{style}]",
            fm.exam_weight.value,
            topic.reading_time.text,
        )
    return table


@app.command()
def sections() -> None:
    """List sections in navigation order."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Topics", justify="right")
    table.add_column("Description", style="dim")

    for data in get_section_data(_content_dir()):
        section = data.section
        table.add_row(
            section.id,
            escape(f"{section.icon} {section.name}"),
            str(data.topic_count),
            escape(section.description),
        )

    console.print(table)


@app.command()
def topics(
    section: str | None = typer.Option(None, "--section", "-s", help="Only this section"),
    difficulty: str | None = typer.Option(
        None, "--difficulty", "-d", help="beginner, intermediate or advanced"
    ),
    exam_weight: str | None = typer.Option(
        None, "--exam-weight", "-e", help="low, medium or high"
    ),
) -> None:
    """List topics in curriculum order."""
    all_topics = get_all_topics(_content_dir())
    if section:
        all_topics = [t for t in all_topics if t.section == section]

    selected = filter_topics(
        all_topics,
        difficulty=_parse_enum(Difficulty, difficulty, "difficulty"),
        exam_weight=_parse_enum(ExamWeight, exam_weight, "exam weight"),
    )

    if not selected:
        console.print("[yellow]⚠ No topics match[/yellow]")
        return

    console.print(_topics_table(selected, f"{len(selected)} topics"))


@app.command()
def show(
    slug: str = typer.Argument(..., help="Topic slug, section/slug, or a unique prefix"),
) -> None:
    """Show a topic's metadata and table of contents."""
    ref = _resolve_topic_or_exit(slug)
    topic = get_topic_by_slug(ref.slug, _content_dir(), section=ref.section)
    if topic is None:
        console.print(f"[red]✗ Topic '{escape(str(ref))}' could not be loaded[/red]")
        raise typer.Exit(code=1)

    fm = topic.frontmatter
    console.print(f"[bold]{escape(fm.title)}[/bold]  [dim]({fm.section} #{fm.order})[/dim]")
    console.print(f"  [dim]slug:[/dim]          {escape(topic.slug)}")
    console.print(f"  [dim]difficulty:[/dim]    {fm.difficulty.value}")
    console.print(f"  [dim]exam weight:[/dim]   {fm.exam_weight.value}")
    console.print(f"  [dim]reading time:[/dim]  {topic.reading_time.text} ({topic.reading_time.words} words)")
    if fm.prerequisites:
        console.print(f"  [dim]prerequisites:[/dim] {escape(', '.join(fm.prerequisites))}")
    if fm.concepts:
        console.print(f"  [dim]concepts:[/dim]      {escape(', '.join(fm.concepts))}")
    if fm.description:
        console.print(f"\n{escape(fm.description)}")

    toc = render_markdown(topic.content).table_of_contents
    if toc:
        console.print("\n[bold]Contents[/bold]")
        for item in toc:
            indent = "  " * (item.level - 1)
            console.print(f"  {indent}- {escape(item.title)} [dim]#{item.id}[/dim]")


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for"),
) -> None:
    """Search topics by title, description, concepts and body."""
    results = search_topics(query, _content_dir())
    if not results:
        console.print(f"[yellow]⚠ No topics match '{escape(query)}'[/yellow]")
        return
    console.print(_topics_table(results, f"{len(results)} results for '{escape(query)}'"))


@app.command()
def stats() -> None:
    """Show curriculum counts."""
    all_topics = get_all_topics(_content_dir())

    console.print(f"[bold]{len(all_topics)} topics[/bold]")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Group")
    table.add_column("Value", style="cyan")
    table.add_column("Topics", justify="right")

    for data in get_section_data(_content_dir()):
        table.add_row("section", data.section.id, str(data.topic_count))
    for name, count in count_by_difficulty(all_topics).items():
        table.add_row("difficulty", name, str(count))
    for name, count in count_by_exam_weight(all_topics).items():
        table.add_row("exam weight", name, str(count))

    console.print(table)


@app.command()
def validate() -> None:
    """Report content problems.

    Checks for unreadable front-matter, section directories missing from
    the catalog, and prerequisites/related slugs naming no topic.
    Exits with code 1 if any problem is found.
    """
    content_dir = _content_dir()
    problems = 0

    known_sections = set(get_section_order())
    for section_id in get_available_sections(content_dir):
        if section_id not in known_sections:
            console.print(f"[yellow]⚠ Section directory not in catalog: {section_id}[/yellow]")
            problems += 1

    for section_id in get_section_order():
        for path in sorted((content_dir / "topics" / section_id).glob("*.md")):
            try:
                read_markdown_file(path)
            except FrontMatterError as e:
                console.print(f"[red]✗ {escape(str(e))}[/red]")
                problems += 1

    all_topics = get_all_topics(content_dir)
    for ref in find_dangling_references(all_topics):
        console.print(
            f"[yellow]⚠ {escape(ref.source_slug)}: {ref.field_name} -> "
            f"'{escape(ref.target_slug)}' not found[/yellow]"
        )
        problems += 1

    if problems:
        console.print(f"[red]✗ {problems} problem(s) in {len(all_topics)} topics[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ {len(all_topics)} topics OK[/green]")


@app.command()
def complete(
    learner_id: str = typer.Argument(..., help="Learner identifier"),
    slug: str = typer.Argument(..., help="Topic slug, section/slug, or a unique prefix"),
    undo: bool = typer.Option(False, "--undo", help="Remove from completed"),
) -> None:
    """Mark a topic as completed for a learner."""
    resolved = _resolve_topic_or_exit(slug).slug
    state = load_progress_state(get_state_dir())
    learner = state.get_or_create(learner_id)
    who = escape(learner_id)

    if undo:
        if not learner.unmark_completed(resolved):
            console.print(f"[yellow]⚠ {resolved} was not completed[/yellow]")
            return
        save_progress_state(state, get_state_dir())
        console.print(f"[green]✓ {resolved} unmarked for {who}[/green]")
        return

    if learner.mark_completed(resolved):
        console.print(f"[green]✓ {resolved} completed for {who}[/green]")
    else:
        console.print(f"[dim]{resolved} was already completed[/dim]")
    save_progress_state(state, get_state_dir())


@app.command()
def progress(
    learner_id: str = typer.Argument(..., help="Learner identifier"),
) -> None:
    """Show a learner's progress per section."""
    state = load_progress_state(get_state_dir())
    learner = state.get(learner_id)
    completed = learner.completed_topics if learner else []

    table = Table(title=f"Progress for {escape(learner_id)}", show_header=True, header_style="bold")
    table.add_column("Section", style="cyan")
    table.add_column("Completed", justify="right")
    table.add_column("%", justify="right")

    for section in list_sections():
        sp = get_section_progress(section.id, _content_dir(), completed)
        table.add_row(section.name, f"{sp.completed}/{sp.total}", f"{sp.percentage}%")

    console.print(table)
    if learner and learner.bookmarked_topics:
        console.print(f"[dim]bookmarks:[/dim] {', '.join(learner.bookmarked_topics)}")


@app.command()
def build(
    out: Path = typer.Option(Path("site"), "--out", "-o", help="Output directory"),
) -> None:
    """Render the whole site to static HTML."""
    from academy.web.static_site import build_site

    result = build_site(out)
    console.print(f"[green]✓ {result.page_count} pages written to {result.out_dir}[/green]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the web server."""
    import uvicorn

    console.print(f"[blue]Serving on http://{host}:{port}[/blue]")
    if os.environ.get("ACADEMY_DATA_DIR"):
        console.print(f"  [dim]data:[/dim] {os.environ['ACADEMY_DATA_DIR']}")
    uvicorn.run("academy.web.api:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
