#!/usr/bin/env python3
"""
CLI interface for Inky Reader - reader mode for web pages.

This module provides the main command-line interface using Click framework:
extracting articles, rendering pages in reader mode, and showing
configuration.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import get_config
from .exceptions import ComponentUnavailable, SourceError
from .extractors.extractor_factory import ExtractorFactory, ExtractorType
from .extractors.snapshot import DocumentSnapshot
from .models import ExtractionResult
from .reader.controller import PageContext
from .reader.notifier import ConsoleNotifier
from .reader.page_view import HtmlPageView
from .reader.state_store import FileStateStore
from .utils import load_source, sanitize_filename, truncate_text

console = Console()
logger = logging.getLogger(__name__)

ENGINE_CHOICES = [extractor_type.value for extractor_type in ExtractorType]


def setup_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True
    )


def _load(config, source: str):
    extractor_config = config.get_extractor_config()
    try:
        return load_source(
            source,
            user_agent=extractor_config.get('user_agent', 'inky-reader/1.0.0'),
            timeout=extractor_config.get('timeout', 30)
        )
    except SourceError as e:
        console.print(f"[red]Error loading page:[/red] {e}")
        sys.exit(1)


@click.group(help="Reader mode and e-ink filtering for web pages")
@click.version_option(version="1.0.0", prog_name="inky-reader")
@click.option('--config', '-c', 'config_file',
              type=click.Path(exists=True, readable=True),
              help="Path to custom configuration file")
@click.option("-v", "--verbose", is_flag=True,
              help="Enable verbose output")
@click.pass_context
def main(ctx, config_file, verbose):
    """Main CLI entry point."""
    ctx.ensure_object(dict)
    setup_logging(verbose)

    config = get_config()
    if config_file:
        config.load_user_config(config_file)

    ctx.obj['config'] = config
    ctx.obj['verbose'] = verbose


@main.command("extract")
@click.argument("source")
@click.option("-e", "--engine", type=click.Choice(ENGINE_CHOICES),
              help="Extraction engine to try first")
@click.option("-f", "--format", "output_format",
              type=click.Choice(['json', 'markdown', 'html']),
              default='json', show_default=True,
              help="Output format")
@click.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True),
              help="Write the result to a file instead of stdout")
@click.pass_context
def extract_cmd(ctx, source: str, engine: Optional[str], output_format: str,
                output_file: Optional[str]):
    """Extract the article from a URL or HTML file."""
    config = ctx.obj['config']
    html, url = _load(config, source)

    try:
        factory = ExtractorFactory(config)
        result: ExtractionResult = factory.extract(DocumentSnapshot.from_html(html, url), engine)
    except ComponentUnavailable as e:
        console.print(f"[red]Extractor unavailable:[/red] {e}")
        sys.exit(1)

    if result.failed:
        console.print(f"[red]Extraction failed:[/red] {result.error_message}")
        sys.exit(1)

    article = result.article
    if output_format == 'json':
        data = article.to_dict()
        data['extractor'] = result.extractor_used
        rendered = json.dumps(data, ensure_ascii=False, indent=2)
    elif output_format == 'markdown':
        from .processors.markdown_converter import MarkdownConverter
        rendered = MarkdownConverter().render_article(article)
    else:
        rendered = article.content

    if output_file:
        Path(output_file).write_text(rendered, encoding='utf-8')
        console.print(f"[green]✅ Extracted:[/green] {truncate_text(article.title or '(untitled)', 60)}")
        console.print(f"[blue]Output:[/blue] {output_file}")
    else:
        click.echo(rendered)


@main.command("read")
@click.argument("source")
@click.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True),
              help="Output HTML filename (auto-generated if not specified)")
@click.option("-e", "--engine", type=click.Choice(ENGINE_CHOICES),
              help="Extraction engine to use")
@click.option("--remember", is_flag=True,
              help="Record the reader state in the state file")
@click.pass_context
def read_cmd(ctx, source: str, output_file: Optional[str], engine: Optional[str],
             remember: bool):
    """Render a page in reader mode and save the result."""
    config = ctx.obj['config']
    if engine:
        config.set('extractors.engine', engine)

    html, url = _load(config, source)

    page_view = HtmlPageView.from_html(html, url,
                                       page_filter=config.get_reader_config().get('page_filter'))
    state_store = FileStateStore(config.expand_path(config.get('state.path'))) if remember else None
    context = PageContext(page_view, config=config, notifier=ConsoleNotifier(console),
                          state_store=state_store)

    result = context.toggle()
    if not result.success:
        sys.exit(1)

    article = context.session.current_article
    if not output_file:
        output_file = f"{sanitize_filename(article.title or 'article', 80)}_reader.html"

    Path(output_file).write_text(page_view.to_html(), encoding='utf-8')

    console.print(f"[blue]Title:[/blue] {article.title or '(untitled)'}")
    console.print(f"[blue]Byline:[/blue] {article.byline or 'Unknown'}")
    console.print(f"[blue]Word count:[/blue] {article.word_count:,}")
    console.print(f"[blue]Output:[/blue] {output_file}")


@main.command("info")
@click.option("--check-deps", is_flag=True,
              help="Check optional dependencies")
@click.pass_context
def info_cmd(ctx, check_deps: bool):
    """Show configuration and available extractors."""
    config = ctx.obj['config']

    if check_deps:
        console.print("[blue]Checking dependencies...[/blue]\n")
        console.print(f"[green]✅[/green] Python: {sys.version.split()[0]}")

        deps = [
            ('bs4', 'HTML parsing'),
            ('lxml', 'Parser backend'),
            ('markdownify', 'Markdown output'),
            ('requests', 'Page download'),
        ]
        for dep_name, description in deps:
            try:
                __import__(dep_name)
                console.print(f"[green]✅[/green] {dep_name}: Available ({description})")
            except ImportError:
                console.print(f"[yellow]⚠️[/yellow] {dep_name}: Not available ({description})")
        return

    console.print("[blue]Inky Reader v1.0.0[/blue]")
    console.print("Reader mode and e-ink filtering for web pages\n")

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="blue")
    table.add_row("Engine", str(config.get('extractors.engine')))
    table.add_row("Fallback", str(config.get('extractors.fallback')))
    table.add_row("Available engines", ", ".join(ExtractorFactory(config).get_available_extractors()))
    table.add_row("Activation delay", f"{config.get('reader.activation_delay')}s")
    table.add_row("Page filter", str(config.get('reader.page_filter')))
    console.print(table)

    console.print("\n[blue]Usage examples:[/blue]")
    console.print("  inky-reader extract https://example.com/article")
    console.print("  inky-reader extract page.html -f markdown")
    console.print("  inky-reader read https://example.com/article -o article.html")


if __name__ == "__main__":
    main()
