"""tunebridge - migrate play statistics and playlists from iTunes to Rhythmbox."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tunebridge")
except PackageNotFoundError:
    __version__ = "0.0.0"
