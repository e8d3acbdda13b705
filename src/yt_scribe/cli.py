"""
cli.py — Command-line interface for yt-scribe.

Provides the `yt-scribe` command group (registered as a console script
in pyproject.toml):

    get        Fetch a transcript and print it (or write it to a file).
    languages  List the caption tracks a video offers.
    serve      Run the HTTP API.

Usage examples:
    yt-scribe get "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    yt-scribe get dQw4w9WgXcQ --lang de --format srt -o rick.srt
    yt-scribe languages https://youtu.be/dQw4w9WgXcQ
    yt-scribe serve --port 8000
"""

from __future__ import annotations

import logging
import sys

import click
import requests

from yt_scribe.catalog import fetch_catalog
from yt_scribe.credentials import fetch_api_key
from yt_scribe.errors import PipelineError
from yt_scribe.formatters import FORMATS
from yt_scribe.pipeline import extract
from yt_scribe.resolver import parse_video_id
from yt_scribe.selector import select_track


def _fail(exc: PipelineError) -> None:
    """Print a clean one-line error to stderr and exit non-zero."""
    click.echo(f"Error [{exc.kind.value}]: {exc.message}", err=True)
    sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group — the top-level `yt-scribe` command
# ---------------------------------------------------------------------------

@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log each pipeline stage to stderr.")
def main(verbose: bool) -> None:
    """
    YT-Scribe — timestamped YouTube transcripts from any video URL.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Subcommand: get — fetch a transcript
# ---------------------------------------------------------------------------

@main.command()
@click.argument("video", metavar="URL_OR_ID")
@click.option(
    "--format", "-f",
    "fmt",                           # avoid shadowing the builtin "format"
    type=click.Choice(FORMATS, case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format: plain text, SRT subtitles, or JSON with timestamps.",
)
@click.option(
    "--lang", "-l",
    default=None,
    help="Exact language code (e.g. 'de'). Defaults to the first human-made track.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write output to a file instead of stdout.",
)
def get(video: str, fmt: str, lang: str | None, output: str | None) -> None:
    """
    Fetch a YouTube video transcript.

    VIDEO can be any YouTube URL (watch, youtu.be, embed, shorts, live)
    or an 11-character video ID.
    """
    try:
        text = extract(video, language=lang, fmt=fmt.lower())
    except PipelineError as exc:
        _fail(exc)
        return

    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(text)
            fh.write("\n")
        click.echo(f"Transcript written to {output}", err=True)
    else:
        click.echo(text)


# ---------------------------------------------------------------------------
# Subcommand: languages — list available caption tracks
# ---------------------------------------------------------------------------

@main.command()
@click.argument("video", metavar="URL_OR_ID")
def languages(video: str) -> None:
    """
    List the caption tracks available for a video.

    The track `get` would pick without --lang is marked with "*".
    """
    try:
        video_id = parse_video_id(video)
        with requests.Session() as session:
            api_key = fetch_api_key(video_id, session=session)
            tracks = fetch_catalog(video_id, api_key, session=session)
        default = select_track(tracks)
    except PipelineError as exc:
        _fail(exc)
        return

    for track in tracks:
        marker = "*" if track is default else " "
        kind = "auto" if track.is_auto_generated else "manual"
        click.echo(f"{marker} {track.language_code:<8} {kind:<6} {track.name}")


# ---------------------------------------------------------------------------
# Subcommand: serve — run the HTTP API
# ---------------------------------------------------------------------------

@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind.")
@click.option(
    "--port",
    type=int,
    default=3000,
    show_default=True,
    envvar="PORT",
    help="Port to listen on (also read from $PORT).",
)
def serve(host: str, port: int) -> None:
    """Run the yt-scribe HTTP API with uvicorn."""
    # Imported here so the CLI's other commands don't pay for uvicorn.
    import uvicorn

    uvicorn.run("yt_scribe.api:app", host=host, port=port)
