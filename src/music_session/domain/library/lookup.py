"""
Track lookup against TheAudioDB.

The playback core never calls this module; only the search screen does.
Every failure surfaces as a TrackLookupError carrying a human-readable
description, and never touches playback state.
"""

import uuid
from typing import Any, Dict, List, Optional

import requests
from loguru import logger

from music_session.core.config import LookupConfig

from .exceptions import InvalidQueryError, LookupDecodeError, LookupRequestError
from .models import Track, TrackSource

# Response keys that may hold track arrays, depending on endpoint
_TRACK_KEYS = ("track", "tracks", "loved")


def _normalize_audiodb_track(item: Dict[str, Any], source: TrackSource) -> Track:
    """Convert a TheAudioDB track record to a Track.

    TheAudioDB reports ``intDuration`` in milliseconds, as a string.
    """
    audiodb_id = item.get("idTrack") or str(uuid.uuid4())
    try:
        duration = int(item.get("intDuration") or 0) / 1000.0
    except (TypeError, ValueError):
        duration = 0.0

    if source is TrackSource.LOCAL:
        url = f"mock://local/{audiodb_id}"
    else:
        url = f"spotify://track/{audiodb_id}"

    return Track(
        id=f"{source.value}:{audiodb_id}",
        title=item.get("strTrack") or "Unknown Track",
        artist=item.get("strArtist") or "Unknown Artist",
        album=item.get("strAlbum"),
        duration=max(duration, 0.0),
        artwork_url=item.get("strTrackThumb"),
        source=source,
        url=url,
    )


def decode_tracks(payload: Any, source: TrackSource) -> List[Track]:
    """Decode a TheAudioDB JSON payload into tracks.

    A payload whose track array is null means "no results" and yields [].

    Raises:
        LookupDecodeError: If the payload is not shaped like a track response
    """
    if not isinstance(payload, dict):
        raise LookupDecodeError()

    items: Optional[list] = None
    for key in _TRACK_KEYS:
        if key in payload:
            items = payload[key]
            break

    if items is None:
        return []
    if not isinstance(items, list):
        raise LookupDecodeError()

    tracks = []
    for item in items:
        if not isinstance(item, dict):
            raise LookupDecodeError()
        tracks.append(_normalize_audiodb_track(item, source))
    return tracks


class TrackLookupService:
    """Thin client for TheAudioDB track endpoints."""

    def __init__(self, config: Optional[LookupConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or LookupConfig()
        self.session = session or requests.Session()

    def _get(self, endpoint: str, params: Dict[str, str], source: TrackSource) -> List[Track]:
        if not self.config.enabled:
            raise LookupRequestError("Track lookup is disabled")
        url = f"{self.config.api_url.rstrip('/')}/{endpoint}"
        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"Track lookup request failed: {url} ({e})")
            raise LookupRequestError(f"Track lookup failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning(f"Track lookup returned invalid JSON: {url}")
            raise LookupDecodeError() from e

        tracks = decode_tracks(payload, source)
        logger.debug(f"Track lookup {endpoint} {params} -> {len(tracks)} tracks")
        return tracks

    def search_tracks(self, query: str) -> List[Track]:
        """Search by free-text query. Results are local tracks.

        Raises:
            InvalidQueryError: If the query is blank
            LookupRequestError: On network or HTTP failure
            LookupDecodeError: On malformed response
        """
        query = query.strip()
        if not query:
            raise InvalidQueryError("Search query is empty")
        return self._get("search.php", {"s": query}, TrackSource.LOCAL)

    def search_by_artist_and_title(self, artist: str, title: str) -> List[Track]:
        """Look up a specific track by artist and title. Results are local tracks."""
        artist, title = artist.strip(), title.strip()
        if not artist or not title:
            raise InvalidQueryError("Both artist and title are required")
        return self._get("searchtrack.php", {"s": artist, "t": title}, TrackSource.LOCAL)

    def popular_tracks(self) -> List[Track]:
        """Fetch the most-loved tracks. Results are remote tracks."""
        return self._get("mostloved.php", {"format": "track"}, TrackSource.REMOTE)
