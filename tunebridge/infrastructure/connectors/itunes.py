"""iTunes library export reader.

Reads the ``iTunes Library.xml`` property list that iTunes (and Music.app's
"Export Library") writes, and turns it into format-independent records.
Only reading is supported; the source library is never modified.
"""

from collections.abc import Mapping
from pathlib import Path
import plistlib
from typing import Any
from xml.parsers.expat import ExpatError

from attrs import define, field

from tunebridge.config import get_logger
from tunebridge.domain.entities import PlaylistKind, PlaylistRecord, TrackRecord
from tunebridge.domain.exceptions import InvalidRecordError, LibraryFormatError

logger = get_logger(__name__)

# plist key -> TrackRecord attribute
TRACK_FIELD_MAP: dict[str, str] = {
    "Name": "title",
    "Artist": "artist",
    "Album": "album",
    "Genre": "genre",
    "Year": "year",
    "Track Number": "track_number",
    "Disc Number": "disc_number",
    "Location": "location",
    "Date Added": "date_added",
    "Play Date UTC": "last_played",
    "Play Count": "play_count",
    "Skip Count": "skip_count",
    "Skip Date": "last_skipped",
    "Rating": "rating",
}


@define(slots=True)
class ItunesLibrary:
    """Tracks and playlists from one export, in file order."""

    tracks: list[TrackRecord] = field(factory=list)
    playlists: list[PlaylistRecord] = field(factory=list)
    # Track ids of stripped video tracks; playlists may still reference them
    movie_ids: set[str] = field(factory=set)


def convert_itunes_track(track_key: str, data: Mapping[str, Any]) -> TrackRecord:
    """Convert one entry of the ``Tracks`` dictionary.

    Raises:
        InvalidRecordError: Missing ``Track ID`` or an unparseable number
    """
    if "Track ID" not in data:
        raise InvalidRecordError(f"iTunes track under key {track_key} has no Track ID")

    values = {attr: data[key] for key, attr in TRACK_FIELD_MAP.items() if key in data}
    try:
        return TrackRecord(id=str(data["Track ID"]), **values)
    except (TypeError, ValueError) as e:
        raise InvalidRecordError(
            f"iTunes track {data['Track ID']} has an invalid field: {e}"
        ) from e


def playlist_kind(data: Mapping[str, Any]) -> PlaylistKind:
    """Classify an iTunes playlist dictionary."""
    if "Smart Info" in data or "Smart Criteria" in data:
        return PlaylistKind.SMART
    if data.get("Folder"):
        return PlaylistKind.FOLDER
    if data.get("Master") or "Distinguished Kind" in data:
        return PlaylistKind.LIBRARY
    return PlaylistKind.STATIC


def convert_itunes_playlist(data: Mapping[str, Any]) -> PlaylistRecord:
    """Convert one entry of the ``Playlists`` array.

    Every item is kept, including items pointing at stripped or unknown
    tracks. The rebuilder reports those as dropped entries.
    """
    name = data.get("Name", "")
    track_ids: list[str] = []

    for item in data.get("Playlist Items", []):
        if "Track ID" not in item:
            raise InvalidRecordError(f'iTunes playlist "{name}" has an item without Track ID')
        track_ids.append(str(item["Track ID"]))

    playlist_id = data.get("Playlist Persistent ID", data.get("Playlist ID"))
    return PlaylistRecord(
        name=str(name),
        track_ids=track_ids,
        kind=playlist_kind(data),
        id=None if playlist_id is None else str(playlist_id),
    )


def parse_itunes_library(
    plist_dict: Mapping[str, Any], include_movies: bool = False
) -> ItunesLibrary:
    """Build records from an already-decoded property list.

    Args:
        plist_dict: Top-level dictionary of the export
        include_movies: Keep video tracks instead of stripping them

    Returns:
        ItunesLibrary with tracks in file order and every playlist
    """
    if not isinstance(plist_dict, Mapping) or "Tracks" not in plist_dict:
        raise LibraryFormatError("iTunes library has no Tracks dictionary")

    library = ItunesLibrary()

    for track_key, data in plist_dict["Tracks"].items():
        track = convert_itunes_track(track_key, data)
        if data.get("Movie") and not include_movies:
            library.movie_ids.add(track.id)
            continue
        library.tracks.append(track)

    if library.movie_ids:
        logger.info(f"Stripped {len(library.movie_ids)} movies from the iTunes library")

    for data in plist_dict.get("Playlists", []):
        playlist = convert_itunes_playlist(data)
        library.playlists.append(playlist)
        logger.debug(
            f"Read iTunes playlist '{playlist.name}' ({playlist.kind}, {playlist.track_count} tracks)"
        )

    return library


def load_itunes_library(path: Path, include_movies: bool = False) -> ItunesLibrary:
    """Read and parse an iTunes library export file.

    Raises:
        LibraryFormatError: The file is missing or not a property list
    """
    logger.info(f"Reading iTunes library: {path}")
    try:
        with Path(path).open("rb") as f:
            plist_dict = plistlib.load(f)
    except FileNotFoundError as e:
        raise LibraryFormatError(f"iTunes library not found: {path}") from e
    except (plistlib.InvalidFileException, ExpatError, ValueError) as e:
        raise LibraryFormatError(f"{path} is not a valid iTunes library: {e}") from e

    library = parse_itunes_library(plist_dict, include_movies=include_movies)
    logger.info(
        f"Found {len(library.tracks)} tracks and {len(library.playlists)} playlists in iTunes library"
    )
    return library
