from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from config import EnlightenSettings, get_settings
from enlighten import Enlightener
from enlighten.exceptions import EnlightenError

app = typer.Typer(help="Mark glossary words in HTML and build indices and word lists.")


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), backtrace=False, diagnose=False)


def load_settings(language: Optional[str], source_url: Optional[str], no_cache: bool) -> EnlightenSettings:
    settings = get_settings()
    update: dict = {}
    if language:
        update["language"] = language.lower()
    if source_url:
        update["source_url"] = source_url
    if no_cache:
        update["cache_path"] = None
    return settings.model_copy(update=update)


async def runner(settings: EnlightenSettings, action) -> str:
    async with Enlightener(settings) as enlightener:
        await enlightener.wait_ready()
        return action(enlightener)


def run(settings: EnlightenSettings, action) -> None:
    configure_logging(settings.log_level)
    try:
        output = asyncio.run(runner(settings, action))
    except EnlightenError as exc:
        logger.error("{}", exc)
        raise typer.Exit(code=1)
    typer.echo(output)


def read_markup(path: Optional[Path]) -> str:
    if path is None:
        return ""
    return path.read_text(encoding="utf-8")


LanguageOption = typer.Option(None, "--language", "-l", help="Glossary language code.")
SourceOption = typer.Option(None, "--source-url", help="Glossary URL or file path template.")
NoCacheOption = typer.Option(False, "--no-cache", help="Skip the local glossary cache.")


@app.command()
def annotate(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="HTML file to annotate."),
    first_only: bool = typer.Option(False, "--first-only", help="Mark only the first occurrence of each word."),
    method: Optional[str] = typer.Option(None, "--method", help='"index" or the name of a click callback.'),
    language: Optional[str] = LanguageOption,
    source_url: Optional[str] = SourceOption,
    no_cache: bool = NoCacheOption,
) -> None:
    """Print the file with glossary words turned into clickable markers."""
    markup = read_markup(path)
    settings = load_settings(language, source_url, no_cache)
    run(settings, lambda enlightener: enlightener.parse_text(markup, not first_only, method))


@app.command()
def index(
    path: Optional[Path] = typer.Argument(None, exists=True, dir_okay=False, help="HTML file; omit for all words."),
    plain: bool = typer.Option(False, "--plain", help="List titles without links."),
    language: Optional[str] = LanguageOption,
    source_url: Optional[str] = SourceOption,
    no_cache: bool = NoCacheOption,
) -> None:
    """Print an alphabetical index of the glossary words in a file."""
    markup = read_markup(path)
    settings = load_settings(language, source_url, no_cache)
    run(settings, lambda enlightener: enlightener.build_index(markup, linked=not plain))


@app.command()
def wordlist(
    path: Optional[Path] = typer.Argument(None, exists=True, dir_okay=False, help="HTML file; omit for all words."),
    language: Optional[str] = LanguageOption,
    source_url: Optional[str] = SourceOption,
    no_cache: bool = NoCacheOption,
) -> None:
    """Print the glossary words of a file with their explanations."""
    markup = read_markup(path)
    settings = load_settings(language, source_url, no_cache)
    run(settings, lambda enlightener: enlightener.build_wordlist(markup))


@app.command()
def ids(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="HTML file to scan."),
    language: Optional[str] = LanguageOption,
    source_url: Optional[str] = SourceOption,
    no_cache: bool = NoCacheOption,
) -> None:
    """Print the ids of the glossary words found in a file."""
    markup = read_markup(path)
    settings = load_settings(language, source_url, no_cache)
    run(settings, lambda enlightener: " ".join(str(entry_id) for entry_id in sorted(enlightener.find_entry_ids(markup))))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
