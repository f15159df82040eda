"""Playlist-related domain entities."""

from enum import StrEnum

from attrs import define, field, validators


class PlaylistKind(StrEnum):
    """Recognized playlist flavours.

    Only STATIC playlists have a destination counterpart. The others are
    recognized so they can be skipped with a specific diagnostic instead of
    failing to parse.
    """

    STATIC = "static"
    SMART = "smart"  # rule-based, rules are not decoded
    FOLDER = "folder"
    LIBRARY = "library"  # master library and built-in system lists


@define(slots=True)
class PlaylistRecord:
    """Named, ordered sequence of track identifiers.

    On the source side ``track_ids`` are source identifiers; playlists built
    by the rebuilder hold destination identifiers in the same order.
    """

    name: str = field(validator=validators.instance_of(str))
    track_ids: list[str] = field(factory=list)
    kind: PlaylistKind = field(default=PlaylistKind.STATIC, converter=PlaylistKind)
    id: str | None = field(default=None)

    @property
    def is_static(self) -> bool:
        return self.kind is PlaylistKind.STATIC

    @property
    def track_count(self) -> int:
        return len(self.track_ids)
