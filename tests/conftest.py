"""Shared fixtures: record factories and on-disk library files."""

from pathlib import Path
import plistlib

from loguru import logger
import pytest

from tests.fixtures.libraries import PLAYLISTS_XML, RHYTHMDB_XML, itunes_plist
from tunebridge.domain.entities import PlaylistKind, PlaylistRecord, TrackRecord


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep loguru from writing to streams closed by other tests."""
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def make_track():
    """Factory for TrackRecord with sensible defaults."""

    def _make(track_id: str, title: str, artist: str | None = "Artist", **kwargs) -> TrackRecord:
        kwargs.setdefault("album", "Album")
        return TrackRecord(id=track_id, title=title, artist=artist, **kwargs)

    return _make


@pytest.fixture
def make_playlist():
    """Factory for PlaylistRecord."""

    def _make(name: str, track_ids: list[str], kind: PlaylistKind = PlaylistKind.STATIC):
        return PlaylistRecord(name=name, track_ids=list(track_ids), kind=kind)

    return _make


@pytest.fixture
def itunes_library_file(tmp_path: Path) -> Path:
    """iTunes Library.xml written with plistlib."""
    path = tmp_path / "iTunes Library.xml"
    with path.open("wb") as f:
        plistlib.dump(itunes_plist(), f)
    return path


@pytest.fixture
def rhythmbox_dir(tmp_path: Path) -> Path:
    """Rhythmbox data directory with rhythmdb.xml and playlists.xml."""
    directory = tmp_path / "rhythmbox"
    directory.mkdir()
    (directory / "rhythmdb.xml").write_text(RHYTHMDB_XML, encoding="utf-8")
    (directory / "playlists.xml").write_text(PLAYLISTS_XML, encoding="utf-8")
    return directory
