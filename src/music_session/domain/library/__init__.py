"""Library domain - track/album models, sample catalog, and track lookup.

This domain handles:
- Track and Album value types
- The bundled sample catalog and album filtering
- Track lookup against TheAudioDB
"""

# Models
from .models import Album, Track, TrackSource, format_time

# Catalog
from .catalog import albums_by_source, sample_albums, sample_queue_tracks, search_albums

# Lookup
from .exceptions import (
    InvalidQueryError,
    LookupDecodeError,
    LookupRequestError,
    TrackLookupError,
)
from .lookup import TrackLookupService, decode_tracks

__all__ = [
    # Models
    "Album",
    "Track",
    "TrackSource",
    "format_time",
    # Catalog
    "albums_by_source",
    "sample_albums",
    "sample_queue_tracks",
    "search_albums",
    # Lookup
    "InvalidQueryError",
    "LookupDecodeError",
    "LookupRequestError",
    "TrackLookupError",
    "TrackLookupService",
    "decode_tracks",
]
