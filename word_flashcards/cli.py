"""Command-line interface for studying word pairs in the terminal."""

import logging

import click
import requests
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from word_flashcards import configure_logging, install_exception_hook
from word_flashcards.config import Settings, get_settings
from word_flashcards.models import Loaded, SessionState
from word_flashcards.session import WordPairSession
from word_flashcards.view import (
    LOADING_MESSAGE,
    NEXT_WORD_LABEL,
    SHOW_ANSWER_LABEL,
    ViewState,
    render,
)
from word_flashcards.word_source import WordSourceClient

console = Console()

ACTIONS = {"n": NEXT_WORD_LABEL, "s": SHOW_ANSWER_LABEL, "q": "Quit"}


def configure_verbose_logging() -> None:
    """Configure verbose debug logging."""
    logger.remove()
    logger.add(
        lambda msg: console.print(msg, end="", markup=False, highlight=False),
        level="DEBUG",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
    console.print("[dim]Debug logging enabled[/dim]")


def configure_quiet_logging(log_file: str | None = None, level: str = "INFO") -> None:
    """Show only warnings and errors on stderr; log_file gets everything at level."""
    configure_logging(log_file=log_file, level=level, console_level="WARNING")

    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def load_settings_or_abort() -> Settings:
    """Load settings from the environment/.env or abort with a readable message."""
    try:
        return get_settings()
    except ValidationError as e:
        console.print("[bold red]Error:[/bold red] Invalid configuration")
        console.print("\nCheck WORD_SOURCE_URL and the other settings in your .env file.\n")
        console.print(f"Details: {escape(str(e))}")
        raise click.Abort from e


def build_session(
    settings: Settings, http: requests.Session, base_url: str | None = None
) -> WordPairSession:
    """Wire a WordPairSession to the configured Word Source."""
    try:
        client = WordSourceClient(
            base_url or settings.word_source_url,
            http,
            path=settings.word_source_path,
            timeout=settings.request_timeout,
        )
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise click.Abort from e
    return WordPairSession(client, max_repeat_retries=settings.max_repeat_retries)


def print_view(view: ViewState) -> None:
    """Print the visible parts of a rendered view."""
    if view.loading_visible:
        console.print(f"[dim]{LOADING_MESSAGE}[/dim]")
    if view.error_visible:
        console.print(f"[bold red]Error:[/bold red] {escape(view.error_text)}")
    if view.english_visible:
        console.print(f"[bold]English:[/bold] {escape(view.english_text)}")
    if view.german_visible:
        console.print(f"[bold]German:[/bold] [green]{escape(view.german_text)}[/green]")


def print_state(state: SessionState) -> None:
    print_view(render(state))


def setup_logging(settings: Settings, verbose: bool) -> None:
    if verbose:
        configure_verbose_logging()
    else:
        configure_quiet_logging(settings.log_file, settings.log_level)


@click.group()
def cli() -> None:
    """Study English/German word pairs fetched from a Word Source."""
    install_exception_hook()


@cli.command()
@click.option(
    "--base-url",
    "-u",
    default=None,
    help="Word Source base address (default: WORD_SOURCE_URL setting)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def study(base_url: str | None, verbose: bool) -> None:
    """Run an interactive flash card session.

    Shows an English word; press s to reveal the German translation,
    n for the next word and q to quit.
    """
    settings = load_settings_or_abort()
    setup_logging(settings, verbose)

    console.rule(f"[bold]{escape(settings.app_title)}[/bold]")
    prompt = ", ".join(f"[{key}] {label}" for key, label in ACTIONS.items())

    with requests.Session() as http:
        session = build_session(settings, http, base_url)
        session.subscribe(print_state)
        session.initialize()

        while True:
            action = click.prompt(
                prompt,
                type=click.Choice(list(ACTIONS)),
                show_choices=False,
                default="q",
                show_default=False,
            )
            if action == "q":
                break
            if action == "s":
                if not session.reveal_answer() and not isinstance(session.state, Loaded):
                    console.print("[yellow]No word to reveal.[/yellow] Press n to try again.")
            elif action == "n":
                session.request_next_word()

    logger.debug("Study session finished")
    console.print("[dim]Bye![/dim]")


@cli.command()
@click.option(
    "--base-url",
    "-u",
    default=None,
    help="Word Source base address (default: WORD_SOURCE_URL setting)",
)
@click.option("--show-answer", "-a", is_flag=True, help="Also print the German translation")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def word(ctx: click.Context, base_url: str | None, show_answer: bool, verbose: bool) -> None:
    """Fetch and print a single word pair."""
    settings = load_settings_or_abort()
    setup_logging(settings, verbose)

    with requests.Session() as http:
        session = build_session(settings, http, base_url)
        session.initialize()
        if show_answer:
            session.reveal_answer()

    print_state(session.state)
    if not isinstance(session.state, Loaded):
        ctx.exit(1)


if __name__ == "__main__":
    cli()
