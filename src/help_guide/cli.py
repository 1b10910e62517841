"""Click CLI for inspecting user guide documents."""

import click


@click.group()
def cli():
    """guide — User guide document CLI."""


def _setup_logging(verbose):
    import logging

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


def _resolve_document(document_path, project_path):
    """Use the explicit document path, else [document] path from config."""
    from pathlib import Path

    from help_guide.config import load_config, resolve_document_path

    if document_path:
        return Path(document_path)
    project = Path(project_path).resolve()
    try:
        return resolve_document_path(load_config(project), project)
    except RuntimeError as e:
        raise click.UsageError(str(e)) from e


def _load(document_path, project_path):
    from help_guide.document.parser import load_document

    return load_document(_resolve_document(document_path, project_path))


def _resolve_build(build, project_path):
    from pathlib import Path

    from help_guide.config import load_config, resolve_build_number

    if build is not None:
        return build
    try:
        return resolve_build_number(load_config(Path(project_path).resolve()))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="[build] number") from e


@cli.command()
@click.argument("project_path", default=".", type=click.Path(exists=True))
def init(project_path):
    """Initialize a .help_guide directory with config.toml."""
    from pathlib import Path

    from help_guide.config import create_default_config

    try:
        path = create_default_config(Path(project_path).resolve())
    except FileExistsError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Created {path}")


@cli.command()
@click.argument("document_path", required=False, type=click.Path())
@click.option("--project", "project_path", default=".", type=click.Path(exists=True),
              help="Project root holding .help_guide/config.toml.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output.")
def sections(document_path, project_path, verbose):
    """List the sections of a guide document."""
    _setup_logging(verbose)
    document = _load(document_path, project_path)

    if not document.sections:
        click.echo("No content.")
        return
    for i, section in enumerate(document.sections):
        title = section.title or "(untitled)"
        click.echo(f"[{i}] {title} ({len(section.articles)} articles)")
    for entry in document.feedback:
        click.echo(f"Feedback: {entry.label} {entry.detail}")


@cli.command()
@click.argument("document_path", required=False, type=click.Path())
@click.option("-q", "--query", default=None, help="Case-insensitive search text.")
@click.option("--project", "project_path", default=".", type=click.Path(exists=True),
              help="Project root holding .help_guide/config.toml.")
@click.option("--build", type=int, default=None,
              help="Host build number (defaults to [build] number in config).")
@click.option("--group", "group_title", default=None,
              help="Flatten results into one section with this title.")
@click.option("--no-feedback", is_flag=True, help="Omit the feedback section.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output.")
def search(document_path, query, project_path, build, group_title, no_feedback, verbose):
    """Show the filtered view of a guide document."""
    from help_guide.query.engine import QueryEngine

    _setup_logging(verbose)
    document = _load(document_path, project_path)
    engine = QueryEngine(
        document,
        query=query,
        build_number=_resolve_build(build, project_path),
        group_title=group_title,
        include_feedback=not no_feedback,
    )

    if engine.section_count == 0:
        click.echo("No results.")
        return
    for section_index in range(engine.section_count):
        click.echo(f"== {engine.section_title(section_index) or '(untitled)'}")
        for row in range(engine.row_count(section_index)):
            article = engine.article_at(section_index, row)
            if article is not None:
                key = f" [{article.key}]" if article.key else ""
                click.echo(f"  {article.title}{key}")
                continue
            entry = engine.feedback_at(section_index, row)
            if entry is not None:
                click.echo(f"  {entry.label}: {entry.detail}")
        detail = engine.section_detail(section_index)
        if detail:
            click.echo(f"  -- {detail}")


@cli.command()
@click.argument("key")
@click.argument("document_path", required=False, type=click.Path())
@click.option("--project", "project_path", default=".", type=click.Path(exists=True),
              help="Project root holding .help_guide/config.toml.")
@click.option("--related", is_flag=True, help="Also list related articles.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output.")
def article(key, document_path, project_path, related, verbose):
    """Print the article with the given KEY."""
    _setup_logging(verbose)
    document = _load(document_path, project_path)

    found = document.article_for_key(key)
    if found is None:
        raise click.ClickException(f"No article with key {key!r}")

    click.echo(found.title)
    click.echo("")
    click.echo(found.body)

    if related:
        click.echo("")
        related_articles = document.related_articles(found)
        if not related_articles:
            click.echo("No related articles.")
        for other in related_articles:
            click.echo(f"Related: {other.title} [{other.key}]")
