"""
Music Session CLI - entry point

Subcommands:
    demo    Play the sample queue scenario and print every session change
    albums  List the bundled sample albums
    queue   List the sample starter queue
    search  Look up tracks on TheAudioDB
"""

import argparse
import sys
from concurrent.futures import Future
from typing import Optional

from loguru import logger

from music_session.core.config import Config, load_config
from music_session.core.console import get_console, print_event
from music_session.core.output import setup_from_config
from music_session.domain.library.catalog import (
    albums_by_source,
    sample_albums,
    sample_queue_tracks,
)
from music_session.domain.library.lookup import TrackLookupService
from music_session.domain.library.models import Track, TrackSource
from music_session.domain.playback.coordinator import SessionCoordinator, build_coordinator
from music_session.domain.playback.scheduler import ManualScheduler, ThreadScheduler
from music_session.presenter import PlayerPresenter, SearchPresenter


def _find_track(title: str) -> Track:
    for album in sample_albums():
        for track in album.tracks:
            if track.title == title:
                return track
    raise KeyError(title)


def _await_load(
    coordinator: SessionCoordinator, future: Optional[Future], config: Config
) -> None:
    """Block until a load settles (real time) or jump the virtual clock past it."""
    if future is None:
        return
    scheduler = coordinator.scheduler
    if isinstance(scheduler, ManualScheduler):
        scheduler.advance(
            max(config.player.local_load_delay, config.player.remote_load_delay)
        )
    else:
        future.result(timeout=config.player.remote_load_delay + 5.0)


def run_demo(config: Config, instant: bool = False) -> int:
    """Play Bohemian Rhapsody (local), then skip to Stan (remote).

    Args:
        config: Application configuration
        instant: Use a virtual clock instead of waiting for load delays

    Returns:
        Exit code
    """
    scheduler = ManualScheduler() if instant else ThreadScheduler()
    coordinator = build_coordinator(config.player, scheduler=scheduler)
    presenter = PlayerPresenter(coordinator, albums=sample_albums())

    def show(stream: str, value: object) -> None:
        if stream in ("status", "current_track", "source"):
            print_event(stream, value)

    presenter.on_change(show)

    try:
        bohemian = _find_track("Bohemian Rhapsody")
        stan = _find_track("Stan")
        coordinator.enqueue(bohemian)
        coordinator.enqueue(stan)

        future = presenter.play(bohemian)
        _await_load(coordinator, future, config)

        _await_load(coordinator, coordinator.play_next(), config)

        snapshot = coordinator.snapshot()
        get_console().print(
            f"\nNow playing [bold]{snapshot.current_track}[/bold] "
            f"from {snapshot.source.display_name} "
            f"({presenter.formatted_current_time} / {presenter.formatted_duration})"
        )
        return 0
    finally:
        presenter.close()
        coordinator.close()
        scheduler.shutdown()


def run_albums(source: Optional[str]) -> int:
    console = get_console()
    selected = TrackSource(source) if source else None
    for album in albums_by_source(sample_albums(), selected):
        console.print(
            f"[bold]{album.title}[/bold] - {album.artist} "
            f"({album.formatted_year}, {album.source.display_name}) "
            f"{album.track_count} tracks, {album.formatted_duration}"
        )
        for i, track in enumerate(album.tracks, 1):
            console.print(f"  {i}. {track.title} [dim]{track.formatted_duration}[/dim]")
    return 0


def run_queue() -> int:
    console = get_console()
    for i, track in enumerate(sample_queue_tracks(), 1):
        console.print(
            f"{i:>2}. {track} [dim]{track.formatted_duration} · {track.source.display_name}[/dim]"
        )
    return 0


def run_search(config: Config, query: str) -> int:
    service = TrackLookupService(config.lookup)
    search = SearchPresenter(service.search_tracks, service.search_by_artist_and_title)
    results = search.perform_search(query)

    console = get_console()
    if search.error_message:
        console.print(f"[red]Search failed:[/red] {search.error_message}")
        return 1
    if not results:
        console.print("No tracks found")
        return 0
    for track in results:
        console.print(f"{track} [dim]{track.formatted_duration}[/dim]")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the music-session command."""
    parser = argparse.ArgumentParser(
        description="Music Session - playback session coordinator demo"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    demo_parser = subparsers.add_parser("demo", help="Run the local→remote playback scenario")
    demo_parser.add_argument(
        "--instant", action="store_true", help="Use a virtual clock (no waiting)"
    )

    albums_parser = subparsers.add_parser("albums", help="List sample albums")
    albums_parser.add_argument(
        "--source", choices=[s.value for s in TrackSource], help="Only albums from this source"
    )

    subparsers.add_parser("queue", help="List the sample starter queue")

    search_parser = subparsers.add_parser("search", help="Search TheAudioDB for tracks")
    search_parser.add_argument("query", help='Free text, or "Artist - Title"')

    args = parser.parse_args(argv)

    config = load_config()
    setup_from_config(config.logging)
    logger.debug(f"Running command: {args.command}")

    if args.command == "demo":
        return run_demo(config, instant=args.instant)
    if args.command == "albums":
        return run_albums(args.source)
    if args.command == "queue":
        return run_queue()
    if args.command == "search":
        return run_search(config, args.query)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
