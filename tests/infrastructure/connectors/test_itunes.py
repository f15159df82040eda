"""Tests for the iTunes library reader."""

from datetime import UTC, datetime

import pytest

from tests.fixtures.libraries import DATE_ADDED, LAST_PLAYED, itunes_plist
from tunebridge.domain.entities import PlaylistKind
from tunebridge.domain.exceptions import InvalidRecordError, LibraryFormatError
from tunebridge.infrastructure.connectors.itunes import (
    load_itunes_library,
    parse_itunes_library,
    playlist_kind,
)


class TestParseItunesLibrary:
    """Test conversion of a decoded property list."""

    def test_tracks_in_file_order_without_movies(self):
        library = parse_itunes_library(itunes_plist())

        assert [t.id for t in library.tracks] == ["101", "102", "103", "104"]

    def test_movies_kept_on_request(self):
        library = parse_itunes_library(itunes_plist(), include_movies=True)
        assert "200" in [t.id for t in library.tracks]

    def test_track_fields(self):
        track = parse_itunes_library(itunes_plist()).tracks[0]

        assert track.title == "Hello"
        assert track.artist == "Adele"
        assert track.album == "25"
        assert track.track_number == 1
        assert track.disc_number == 1
        assert track.play_count == 42
        assert track.skip_count == 2
        assert track.date_added == DATE_ADDED
        assert track.last_played == LAST_PLAYED
        assert track.date_added.tzinfo is UTC

    def test_playlist_kinds(self):
        library = parse_itunes_library(itunes_plist())

        assert [(p.name, p.kind) for p in library.playlists] == [
            ("Library", PlaylistKind.LIBRARY),
            ("Favorites", PlaylistKind.STATIC),
            ("Top 25", PlaylistKind.SMART),
            ("Empty", PlaylistKind.STATIC),
        ]

    def test_playlist_items_kept_when_movies_stripped(self):
        """Items naming a stripped movie or an unknown track stay in the playlist."""
        plist = itunes_plist()
        plist["Playlists"][1]["Playlist Items"].append({"Track ID": 999})

        library = parse_itunes_library(plist)
        favorites = library.playlists[1]

        assert favorites.track_ids == ["101", "103", "102", "200", "999"]
        assert favorites.id == "ABCDEF0123456789"
        assert library.movie_ids == {"200"}

    def test_no_movie_ids_when_movies_included(self):
        library = parse_itunes_library(itunes_plist(), include_movies=True)
        assert library.movie_ids == set()

    def test_playlist_without_items_is_empty(self):
        empty = parse_itunes_library(itunes_plist()).playlists[3]
        assert empty.track_ids == []

    def test_missing_tracks_dictionary(self):
        with pytest.raises(LibraryFormatError):
            parse_itunes_library({"Playlists": []})

    def test_track_without_id(self):
        plist = itunes_plist()
        del plist["Tracks"]["101"]["Track ID"]

        with pytest.raises(InvalidRecordError, match="101"):
            parse_itunes_library(plist)

    def test_playlist_item_without_id(self):
        plist = itunes_plist()
        plist["Playlists"][1]["Playlist Items"].append({})

        with pytest.raises(InvalidRecordError, match="Favorites"):
            parse_itunes_library(plist)

    def test_unparseable_number(self):
        plist = itunes_plist()
        plist["Tracks"]["101"]["Play Count"] = "lots"

        with pytest.raises(InvalidRecordError):
            parse_itunes_library(plist)

    @pytest.mark.parametrize(
        ("data", "kind"),
        [
            ({"Folder": True}, PlaylistKind.FOLDER),
            ({"Distinguished Kind": 4}, PlaylistKind.LIBRARY),
            ({"Smart Info": b"", "Folder": True}, PlaylistKind.SMART),
            ({"Folder": False}, PlaylistKind.STATIC),
        ],
    )
    def test_playlist_kind(self, data, kind):
        assert playlist_kind(data) is kind


class TestLoadItunesLibrary:
    """Test reading export files from disk."""

    def test_load(self, itunes_library_file):
        library = load_itunes_library(itunes_library_file)

        assert len(library.tracks) == 4
        assert len(library.playlists) == 4
        assert library.tracks[0].date_added == datetime(2015, 3, 1, 12, 0, tzinfo=UTC)

    def test_missing_file(self, tmp_path):
        with pytest.raises(LibraryFormatError, match="not found"):
            load_itunes_library(tmp_path / "nope.xml")

    def test_not_a_plist(self, tmp_path):
        path = tmp_path / "library.xml"
        path.write_text("this is not a property list")

        with pytest.raises(LibraryFormatError):
            load_itunes_library(path)

    def test_malformed_xml_plist(self, tmp_path):
        path = tmp_path / "library.xml"
        path.write_text('<?xml version="1.0"?><plist version="1.0"><dict><key>Tracks</key>')

        with pytest.raises(LibraryFormatError):
            load_itunes_library(path)
