"""Tests for TheAudioDB track lookup."""

from unittest.mock import MagicMock

import pytest
import requests

from music_session.core.config import LookupConfig
from music_session.domain.library.exceptions import (
    InvalidQueryError,
    LookupDecodeError,
    LookupRequestError,
    TrackLookupError,
)
from music_session.domain.library.lookup import TrackLookupService, decode_tracks
from music_session.domain.library.models import TrackSource

BOHEMIAN = {
    "idTrack": "32730",
    "strTrack": "Bohemian Rhapsody",
    "strArtist": "Queen",
    "strAlbum": "A Night at the Opera",
    "intDuration": "354000",
    "strTrackThumb": "https://example.com/thumb.jpg",
}


def make_service(payload=None, error=None, config=None):
    """Build a service whose session returns ``payload`` or raises ``error``."""
    session = MagicMock(spec=requests.Session)
    if error is not None:
        session.get.side_effect = error
    else:
        response = MagicMock()
        response.json.return_value = payload
        session.get.return_value = response
    return TrackLookupService(config or LookupConfig(), session=session), session


class TestDecodeTracks:
    """Tests for payload decoding."""

    def test_decodes_track(self) -> None:
        [track] = decode_tracks({"track": [BOHEMIAN]}, TrackSource.LOCAL)
        assert track.id == "local:32730"
        assert track.title == "Bohemian Rhapsody"
        assert track.artist == "Queen"
        assert track.album == "A Night at the Opera"
        assert track.duration == 354.0
        assert track.url == "mock://local/32730"
        assert track.artwork_url == "https://example.com/thumb.jpg"

    def test_remote_source_locator(self) -> None:
        [track] = decode_tracks({"loved": [BOHEMIAN]}, TrackSource.REMOTE)
        assert track.source is TrackSource.REMOTE
        assert track.url == "spotify://track/32730"

    def test_null_array_is_empty(self) -> None:
        assert decode_tracks({"track": None}, TrackSource.LOCAL) == []

    def test_missing_array_is_empty(self) -> None:
        assert decode_tracks({}, TrackSource.LOCAL) == []

    def test_missing_fields_get_defaults(self) -> None:
        [track] = decode_tracks({"tracks": [{"idTrack": "1"}]}, TrackSource.LOCAL)
        assert track.title == "Unknown Track"
        assert track.artist == "Unknown Artist"
        assert track.duration == 0.0

    def test_bad_duration_is_zero(self) -> None:
        [track] = decode_tracks({"track": [{"idTrack": "1", "intDuration": "n/a"}]}, TrackSource.LOCAL)
        assert track.duration == 0.0

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "not json object",
            {"track": "oops"},
            {"track": ["oops"]},
        ],
    )
    def test_malformed_payload(self, payload) -> None:
        with pytest.raises(LookupDecodeError) as exc_info:
            decode_tracks(payload, TrackSource.LOCAL)
        assert exc_info.value.description == "Failed to decode response"


class TestTrackLookupService:
    """Tests for the HTTP client (session mocked)."""

    def test_search_tracks(self) -> None:
        service, session = make_service({"track": [BOHEMIAN]})
        tracks = service.search_tracks("  bohemian  ")

        assert [track.title for track in tracks] == ["Bohemian Rhapsody"]
        url = session.get.call_args.args[0]
        assert url == "https://www.theaudiodb.com/api/v1/json/2/search.php"
        assert session.get.call_args.kwargs["params"] == {"s": "bohemian"}
        assert session.get.call_args.kwargs["timeout"] == 10.0

    def test_search_by_artist_and_title(self) -> None:
        service, session = make_service({"track": [BOHEMIAN]})
        service.search_by_artist_and_title("Queen", "Bohemian Rhapsody")

        assert session.get.call_args.args[0].endswith("/searchtrack.php")
        assert session.get.call_args.kwargs["params"] == {"s": "Queen", "t": "Bohemian Rhapsody"}

    def test_popular_tracks_are_remote(self) -> None:
        service, session = make_service({"loved": [BOHEMIAN]})
        [track] = service.popular_tracks()

        assert track.source is TrackSource.REMOTE
        assert session.get.call_args.kwargs["params"] == {"format": "track"}

    def test_empty_query_rejected_without_request(self) -> None:
        service, session = make_service({"track": []})
        with pytest.raises(InvalidQueryError) as exc_info:
            service.search_tracks("   ")
        assert exc_info.value.description == "Search query is empty"
        session.get.assert_not_called()

    def test_artist_and_title_both_required(self) -> None:
        service, _ = make_service({"track": []})
        with pytest.raises(InvalidQueryError):
            service.search_by_artist_and_title("Queen", "")

    def test_network_error_wrapped(self) -> None:
        service, _ = make_service(error=requests.ConnectionError("unreachable"))
        with pytest.raises(LookupRequestError) as exc_info:
            service.search_tracks("queen")
        assert "unreachable" in exc_info.value.description

    def test_http_error_wrapped(self) -> None:
        service, session = make_service({"track": []})
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        with pytest.raises(LookupRequestError):
            service.search_tracks("queen")

    def test_invalid_json(self) -> None:
        service, session = make_service()
        session.get.return_value.json.side_effect = ValueError("Expecting value")
        with pytest.raises(LookupDecodeError):
            service.search_tracks("queen")

    def test_disabled_lookup(self) -> None:
        service, session = make_service({"track": []}, config=LookupConfig(enabled=False))
        with pytest.raises(LookupRequestError):
            service.search_tracks("queen")
        session.get.assert_not_called()

    def test_all_failures_share_base_class(self) -> None:
        for error in (InvalidQueryError, LookupRequestError, LookupDecodeError):
            assert issubclass(error, TrackLookupError)

    def test_custom_api_url(self) -> None:
        config = LookupConfig(api_url="http://localhost:9000/api/")
        service, session = make_service({"track": []}, config=config)
        service.search_tracks("queen")
        assert session.get.call_args.args[0] == "http://localhost:9000/api/search.php"
