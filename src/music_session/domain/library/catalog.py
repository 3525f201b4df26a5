"""
Bundled sample catalog.

Provides the static albums and starter queue the app ships with, plus the
album filtering helpers used by the library screen.
"""

from typing import Iterable, Optional

from .models import Album, Track, TrackSource

LOCAL = TrackSource.LOCAL
REMOTE = TrackSource.REMOTE


def _track(
    title: str,
    artist: str,
    album: str,
    duration: float,
    source: TrackSource,
    slug: str,
) -> Track:
    """Build a sample track with a stable id derived from its locator."""
    if source is LOCAL:
        url = f"mock://local/{slug}"
    else:
        url = f"spotify://track/{slug}"
    return Track(
        id=f"{source.value}:{slug}",
        title=title,
        artist=artist,
        album=album,
        duration=duration,
        source=source,
        url=url,
    )


def _album(title: str, artist: str, year: int, source: TrackSource, songs) -> Album:
    tracks = tuple(
        _track(song_title, artist, title, duration, source, slug)
        for song_title, duration, slug in songs
    )
    return Album(
        id=f"{source.value}:album:{tracks[0].url.rsplit('/', 1)[-1]}",
        title=title,
        artist=artist,
        year=year,
        source=source,
        tracks=tracks,
    )


def sample_albums() -> list[Album]:
    """Return the albums shown in the library before any search."""
    return [
        _album(
            "A Night at the Opera",
            "Queen",
            1975,
            LOCAL,
            [
                ("Bohemian Rhapsody", 354, "bohemian"),
                ("You're My Best Friend", 180, "best_friend"),
                ("Love of My Life", 213, "love_of_my_life"),
                ("39", 211, "39"),
            ],
        ),
        _album(
            "The Dark Side of the Moon",
            "Pink Floyd",
            1973,
            REMOTE,
            [
                ("Time", 421, "time"),
                ("Money", 382, "money"),
                ("Us and Them", 468, "us_and_them"),
                ("Brain Damage", 228, "brain_damage"),
            ],
        ),
        _album(
            "The Marshall Mathers LP",
            "Eminem",
            2000,
            REMOTE,
            [
                ("The Real Slim Shady", 284, "real_slim_shady"),
                ("Stan", 404, "stan"),
                ("The Way I Am", 274, "the_way_i_am"),
                ("Kill You", 264, "kill_you"),
            ],
        ),
        _album(
            "Abbey Road",
            "The Beatles",
            1969,
            LOCAL,
            [
                ("Come Together", 259, "come_together"),
                ("Something", 182, "something"),
                ("Here Comes the Sun", 185, "here_comes_sun"),
                ("Golden Slumbers", 91, "golden_slumbers"),
            ],
        ),
    ]


def sample_queue_tracks() -> list[Track]:
    """Return the starter queue used when the session queue is empty."""
    return [
        _track("Lose Yourself", "Eminem", "8 Mile", 326, REMOTE, "lose_yourself"),
        _track("Shape of You", "Ed Sheeran", "÷", 233, REMOTE, "shape_of_you"),
        _track("Blinding Lights", "The Weeknd", "After Hours", 200, REMOTE, "blinding_lights"),
        _track("Dance Monkey", "Tones and I", "The Kids Are Coming", 209, REMOTE, "dance_monkey"),
        _track(
            "Bad Guy",
            "Billie Eilish",
            "When We All Fall Asleep, Where Do We Go?",
            194,
            REMOTE,
            "bad_guy",
        ),
        _track("Old Town Road", "Lil Nas X", "7", 157, REMOTE, "old_town_road"),
        _track(
            "Someone You Loved",
            "Lewis Capaldi",
            "Divinely Uninspired to a Hellish Extent",
            182,
            REMOTE,
            "someone_you_loved",
        ),
        _track(
            "Sunflower",
            "Post Malone & Swae Lee",
            "Spider-Man: Into the Spider-Verse",
            158,
            REMOTE,
            "sunflower",
        ),
        _track("Happier", "Marshmello & Bastille", "Happier", 214, REMOTE, "happier"),
        _track("Without Me", "Eminem", "The Eminem Show", 290, LOCAL, "without_me"),
        _track("The Real Slim Shady", "Eminem", "The Marshall Mathers LP", 284, LOCAL, "real_slim_shady"),
        _track("Mockingbird", "Eminem", "Encore", 251, LOCAL, "mockingbird"),
        _track("Not Afraid", "Eminem", "Recovery", 248, LOCAL, "not_afraid"),
        _track("Rap God", "Eminem", "The Marshall Mathers LP 2", 363, LOCAL, "rap_god"),
        _track("Godzilla", "Eminem ft. Juice WRLD", "Music to Be Murdered By", 210, LOCAL, "godzilla"),
    ]


def albums_by_source(albums: Iterable[Album], source: Optional[TrackSource]) -> list[Album]:
    """Filter albums by source; None returns every album."""
    if source is None:
        return list(albums)
    return [album for album in albums if album.source == source]


def search_albums(albums: Iterable[Album], search_text: str) -> list[Album]:
    """Case-insensitive substring match on album title or artist.

    Empty search text returns every album.
    """
    if not search_text:
        return list(albums)
    needle = search_text.casefold()
    return [
        album
        for album in albums
        if needle in album.title.casefold() or needle in album.artist.casefold()
    ]
