"""Rhythmbox library files: ``rhythmdb.xml`` and ``playlists.xml``.

Both files are edited in place through ElementTree. Existing elements keep
their text and whitespace; new elements copy the indentation of their
siblings so the written files still look like Rhythmbox wrote them.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any
import xml.etree.ElementTree as ET

from tunebridge.config import get_logger, settings
from tunebridge.domain.entities import (
    DiagnosticCategory,
    DiagnosticEntry,
    PlaylistRecord,
    TrackRecord,
    from_unix_seconds,
    to_unix_seconds,
)
from tunebridge.domain.exceptions import InvalidRecordError, LibraryFormatError
from tunebridge.domain.workflows import is_defined

logger = get_logger(__name__)

DATABASE_TAG = "rhythmdb"
DATABASE_VERSION = "2.0"
PLAYLISTS_TAG = "rhythmdb-playlists"

# TrackRecord attribute -> rhythmdb entry child, for migrated fields
FIELD_TAGS: dict[str, str] = {
    "date_added": "first-seen",
    "last_played": "last-played",
    "play_count": "play-count",
}


def _parse_file(path: Path) -> ET.ElementTree:
    try:
        return ET.parse(path)
    except FileNotFoundError as e:
        raise LibraryFormatError(f"Rhythmbox file not found: {path}") from e
    except ET.ParseError as e:
        raise LibraryFormatError(f"{path} is not valid XML: {e}") from e


def _serialize(value: Any) -> str:
    if isinstance(value, datetime):
        return str(to_unix_seconds(value))
    return str(value)


def update_or_append_child(entry: ET.Element, tag: str, text: str) -> str | None:
    """Set the text of ``entry``'s ``tag`` child, creating it if needed.

    A new child goes last and takes over the previous last child's tail,
    while that child gets the entry's inner indentation.

    Returns:
        The previous text, or None when the child was created
    """
    element = entry.find(tag)
    if element is not None:
        previous = element.text or ""
        element.text = text
        return previous

    element = ET.Element(tag)
    element.text = text
    children = list(entry)
    if children:
        last = children[-1]
        element.tail = last.tail
        last.tail = entry.text
    entry.append(element)
    return None


class RhythmboxDatabase:
    """A loaded ``rhythmdb.xml`` and its song entries by location."""

    def __init__(
        self,
        path: Path,
        tree: ET.ElementTree,
        unknown_artist_aliases: Iterable[str] = (),
    ) -> None:
        self.path = path
        self.tree = tree
        self.root = tree.getroot()
        self.unknown_artist_aliases = frozenset(unknown_artist_aliases)
        self._entries: dict[str, ET.Element] = {}

    @classmethod
    def load(
        cls, path: Path, unknown_artist_aliases: Iterable[str] | None = None
    ) -> "RhythmboxDatabase":
        """Parse and validate a Rhythmbox database file.

        Raises:
            LibraryFormatError: Wrong root element, version or child element
        """
        logger.info(f"Reading Rhythmbox database: {path}")
        tree = _parse_file(path)
        root = tree.getroot()

        if root.tag != DATABASE_TAG:
            raise LibraryFormatError(f"unknown database format: root element <{root.tag}>")
        if root.get("version") != DATABASE_VERSION:
            raise LibraryFormatError(f"unknown database version: {root.get('version')}")
        for child in root:
            if child.tag != "entry":
                raise LibraryFormatError(f"unknown element <{child.tag}> in database")

        if unknown_artist_aliases is None:
            unknown_artist_aliases = settings.migration.unknown_artist_aliases
        return cls(Path(path), tree, unknown_artist_aliases)

    def song_entries(self) -> list[ET.Element]:
        return [entry for entry in self.root if entry.get("type") == "song"]

    def _read_entry(self, entry: ET.Element) -> TrackRecord:
        def text(tag: str) -> str | None:
            child = entry.find(tag)
            return None if child is None else (child.text or "")

        location = text("location")
        if not location:
            raise InvalidRecordError(f'Rhythmbox song "{text("title")}" has no location')

        artist = text("artist")
        if artist in self.unknown_artist_aliases:
            artist = None

        try:
            first_seen = text("first-seen")
            last_played = text("last-played")
            return TrackRecord(
                id=location,
                title=text("title"),
                artist=artist,
                album=text("album"),
                track_number=text("track-number"),
                disc_number=text("disc-number"),
                location=location,
                genre=text("genre"),
                date_added=from_unix_seconds(first_seen) if first_seen else None,
                last_played=from_unix_seconds(last_played) if last_played else None,
                play_count=text("play-count"),
            )
        except ValueError as e:
            raise InvalidRecordError(f"Rhythmbox song {location} has an invalid field: {e}") from e

    def tracks(self) -> list[TrackRecord]:
        """Song entries as records, in file order. Non-song entries are ignored."""
        records = []
        for entry in self.song_entries():
            record = self._read_entry(entry)
            self._entries.setdefault(record.id, entry)
            records.append(record)
        logger.info(f"Found {len(records)} songs in Rhythmbox database")
        return records

    def write_tracks(self, tracks: Sequence[TrackRecord]) -> int:
        """Write migrated field values back into their entries.

        Only defined values that differ from the file are written; nothing
        is ever removed.

        Returns:
            Number of entries that changed
        """
        if not self._entries:
            self.tracks()

        changed_entries = 0
        for track in tracks:
            entry = self._entries.get(track.id)
            if entry is None:
                raise InvalidRecordError(f"no Rhythmbox song with location {track.id}")

            changed = False
            for attr, tag in FIELD_TAGS.items():
                value = getattr(track, attr)
                if not is_defined(value):
                    continue
                text = _serialize(value)
                current = entry.find(tag)
                if current is not None and current.text == text:
                    continue
                previous = update_or_append_child(entry, tag, text)
                if previous is not None:
                    logger.debug(f"Overriding {tag} of {track.describe()}: {previous} -> {text}")
                changed = True

            if changed:
                changed_entries += 1

        logger.info(f"Updated {changed_entries} entries in Rhythmbox database")
        return changed_entries

    def save(self, path: Path | None = None) -> None:
        target = Path(path) if path is not None else self.path
        logger.info(f"Saving Rhythmbox database: {target}")
        self.tree.write(target, encoding="utf-8", xml_declaration=True)


class RhythmboxPlaylists:
    """A loaded ``playlists.xml``. New playlists are only ever appended."""

    def __init__(self, path: Path, tree: ET.ElementTree) -> None:
        self.path = path
        self.tree = tree
        self.root = tree.getroot()

    @classmethod
    def load(cls, path: Path) -> "RhythmboxPlaylists":
        logger.info(f"Reading Rhythmbox playlists: {path}")
        tree = _parse_file(path)
        root = tree.getroot()
        if root.tag != PLAYLISTS_TAG:
            raise LibraryFormatError(f"unknown playlists format: root element <{root.tag}>")
        return cls(Path(path), tree)

    @property
    def names(self) -> list[str]:
        return [element.get("name", "") for element in self.root.findall("playlist")]

    def name_collisions(self, playlists: Sequence[PlaylistRecord]) -> list[DiagnosticEntry]:
        """Report playlists that would share a name once appended.

        A name already in the file, or one used by an earlier playlist in
        ``playlists``, yields one info entry. Rhythmbox accepts duplicate
        names, so ``append`` still writes them.
        """
        existing = set(self.names)
        diagnostics: list[DiagnosticEntry] = []
        for playlist in playlists:
            if playlist.name in existing:
                diagnostics.append(
                    DiagnosticEntry.info(
                        DiagnosticCategory.PLAYLIST_NAME_COLLISION,
                        f'playlist "{playlist.name}" shares its name with another '
                        "Rhythmbox playlist",
                        subject=playlist.name,
                    )
                )
            existing.add(playlist.name)
        return diagnostics

    def append(self, playlists: Sequence[PlaylistRecord]) -> int:
        """Append static playlists whose entries are destination locations.

        Returns:
            Number of playlists appended
        """
        if not playlists:
            return 0

        children = list(self.root)
        if children:
            children[-1].tail = "\n  "
        else:
            self.root.text = "\n  "

        element = None
        for playlist in playlists:
            element = ET.SubElement(self.root, "playlist", name=playlist.name, type="static")
            element.text = "\n    " if playlist.track_ids else ""
            location = None
            for track_id in playlist.track_ids:
                location = ET.SubElement(element, "location")
                location.text = track_id
                location.tail = "\n    "
            if location is not None:
                location.tail = "\n  "
            element.tail = "\n  "
            logger.debug(f"Appended playlist '{playlist.name}' with {playlist.track_count} tracks")

        element.tail = "\n"
        logger.info(f"Appended {len(playlists)} playlists")
        return len(playlists)

    def save(self, path: Path | None = None) -> None:
        target = Path(path) if path is not None else self.path
        logger.info(f"Saving Rhythmbox playlists: {target}")
        self.tree.write(target, encoding="utf-8", xml_declaration=True)
