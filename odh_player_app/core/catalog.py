"""
TrackCatalog: the immutable, ordered list of tracks the player navigates.
"""
import logging
import re
import typing as t
from typing import Iterable, Iterator

from .errors import EmptyCatalogError, TrackNotFound
from .models import Track

logger = logging.getLogger(__name__)

_EXTENSION_RE = re.compile(r"\.[^/.]+$")
_VERSION_RE = re.compile(r"\s*V\d+$")
_TRAILING_NUMBER_RE = re.compile(r"\s*\d+$")


def title_from_filename(filename: str) -> str:
    """Derive a display title from an audio file name.

    Drops the extension, a trailing version tag ("V2", "V3"...) and any
    trailing number, e.g. ``"OblivionV2.mp3"`` -> ``"Oblivion"``.

    Args:
        filename: File name, optionally with a directory part

    Returns:
        The cleaned-up title
    """
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    name = _EXTENSION_RE.sub("", name)
    name = _VERSION_RE.sub("", name)
    return _TRAILING_NUMBER_RE.sub("", name)


class TrackCatalog:
    """Read-only ordered collection of tracks.

    Tracks are addressed by position (for navigation) and by id (for
    lookup). Navigation wraps around in both directions.
    """

    def __init__(self, tracks: Iterable[Track]):
        """Initialize the catalog.

        Args:
            tracks: Tracks in display order

        Raises:
            EmptyCatalogError: If no tracks are given
            ValueError: If two tracks share an id
        """
        self._tracks: t.Tuple[Track, ...] = tuple(tracks)
        if not self._tracks:
            raise EmptyCatalogError("A catalog needs at least one track")

        self._positions: t.Dict[int, int] = {}
        for pos, track in enumerate(self._tracks):
            if track.id in self._positions:
                raise ValueError(f"Duplicate track id {track.id}")
            self._positions[track.id] = pos

        logger.debug("Catalog built with %d tracks", len(self._tracks))

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    def __getitem__(self, position: int) -> Track:
        return self._tracks[position]

    def __contains__(self, track: object) -> bool:
        return isinstance(track, Track) and track.id in self._positions

    @property
    def first(self) -> Track:
        return self._tracks[0]

    def index_of(self, track_id: int) -> int:
        """Return the position of a track.

        Raises:
            TrackNotFound: If the id is not in the catalog
        """
        try:
            return self._positions[track_id]
        except KeyError:
            raise TrackNotFound(track_id) from None

    def get(self, track_id: int) -> Track:
        """Return the track with the given id.

        Raises:
            TrackNotFound: If the id is not in the catalog
        """
        return self._tracks[self.index_of(track_id)]

    def next(self, position: int) -> int:
        """Position after ``position``, wrapping to the first track."""
        return (position + 1) % len(self._tracks)

    def previous(self, position: int) -> int:
        """Position before ``position``, wrapping to the last track."""
        return len(self._tracks) - 1 if position == 0 else position - 1
