"""
Command-line interface for the article rewriter.

Uses Typer to serve the HTTP endpoint or run one-off fetches and rewrites
from the shell. Loads .env files for API key configuration.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console

from .app import create_app
from .config import AppConfig, load_config
from .core.errors import RewriterError
from .core.types import ARTICLE_TYPES, STYLES, RewriteRequest
from .fetch.fetcher import ContentFetcher
from .logging_utils import setup_llm_logger, setup_logging
from .runner import build_service

app = typer.Typer(add_completion=False)
console = Console()


def _prepare(config: Path | None, log_level: str | None, api_key: str | None = None) -> AppConfig:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    if api_key:
        cfg.provider.api_key = api_key
    setup_logging(cfg.logging)
    return cfg


@app.command()
def serve(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, envvar="REWRITER_CONFIG"),
    host: str | None = typer.Option(None, "--host", help="Bind address."),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port."),
    debug: bool = typer.Option(False, "--debug/--no-debug"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Serve the rewrite endpoint with Flask's development server."""
    cfg = _prepare(config, log_level)
    service = build_service(cfg, llm_logger=setup_llm_logger(cfg.logging))
    flask_app = create_app(cfg, service)
    flask_app.run(host=host or cfg.server.host, port=port or cfg.server.port, debug=debug)


@app.command()
def rewrite(
    url: str = typer.Option(..., "--url", "-u", help="Article URL."),
    article_type: str | None = typer.Option(None, "--type", "-t", help=f"Article type: {', '.join(ARTICLE_TYPES)}."),
    style: str | None = typer.Option(None, "--style", "-s", help=f"Writing style: {', '.join(STYLES)}."),
    custom_prompt: str | None = typer.Option(None, "--custom-prompt", help="Extra instructions."),
    template: str | None = typer.Option(None, "--template", help="Prompt template: rich or simple."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the article to a file."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, envvar="REWRITER_CONFIG"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    api_key: str | None = typer.Option(None, "--api-key", help="Override the backend API key."),
):
    """Fetch one article and print the rewritten version."""
    cfg = _prepare(config, log_level, api_key)
    if template:
        cfg.prompt.template = template
    service = build_service(cfg, llm_logger=setup_llm_logger(cfg.logging))
    request = RewriteRequest(url=url, type=article_type, style=style, custom_prompt=custom_prompt)
    try:
        result = service.run(request)
    except RewriterError as exc:
        console.print(f"[red]Error:[/red] {exc.message}")
        raise typer.Exit(code=1) from exc

    if output:
        output.write_text(result.content, encoding="utf-8")
        console.print(f"Article written: {output}")
    else:
        console.print(result.content, markup=False)
    console.print(
        f"[dim]{result.original_length} -> {result.rewritten_length} chars at {result.timestamp}[/dim]"
    )


@app.command()
def fetch(
    url: str = typer.Option(..., "--url", "-u", help="Article URL."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, envvar="REWRITER_CONFIG"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Fetch one article through the proxy list and print its plain text."""
    cfg = _prepare(config, log_level)
    article = ContentFetcher(cfg.fetch).fetch_article(url)
    if article is None:
        console.print("[red]Error:[/red] Failed to fetch content from URL")
        raise typer.Exit(code=1)
    console.print(article.text, markup=False)
    if article.truncated:
        console.print(f"[dim](truncated to {cfg.fetch.max_chars} chars)[/dim]")


if __name__ == "__main__":
    app()
