"""Tile catalog: the 16 fixed kolam tiles and their mirror tables."""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from ..models.tile import Tile

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "tiles.json"

TILE_COUNT = 16
EMPTY_TILE_ID = 1


class CatalogIntegrityError(ValueError):
    """The tile catalog or its mirror tables are malformed.

    This signals a data authoring bug and is not meant to be recovered from.
    """


@dataclass(frozen=True)
class TileCatalog:
    """Read-only tile library.

    Mirror tables are indexed by ``tile_id - 1`` and hold the id of the
    mirror-image tile. They are hand-authored domain data, shipped alongside
    the tile geometry.
    """

    tiles: tuple[Tile, ...]
    horizontal_mirror: tuple[int, ...]
    vertical_mirror: tuple[int, ...]

    def __post_init__(self):
        self._validate()

    def __getitem__(self, tile_id: int) -> Tile:
        if tile_id not in self.ids:
            raise KeyError(f"Unknown tile id: {tile_id}")
        return self.tiles[tile_id - 1]

    def __iter__(self):
        return iter(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    @property
    def ids(self) -> range:
        return range(1, len(self.tiles) + 1)

    @property
    def empty_tile(self) -> Tile:
        return self.tiles[EMPTY_TILE_ID - 1]

    def _validate(self) -> None:
        if len(self.tiles) != TILE_COUNT:
            raise CatalogIntegrityError(f"Expected {TILE_COUNT} tiles, found {len(self.tiles)}")

        for index, tile in enumerate(self.tiles):
            if tile.id != index + 1:
                raise CatalogIntegrityError(
                    f"Tile ids must be 1..{TILE_COUNT} in order; position {index} holds id {tile.id}"
                )

        empty = [tile.id for tile in self.tiles if tile.is_empty]
        if empty != [EMPTY_TILE_ID]:
            raise CatalogIntegrityError(
                f"Tile {EMPTY_TILE_ID} must be the only empty tile, found empty tiles {empty}"
            )

        for tile in self.tiles:
            if tile.id != EMPTY_TILE_ID and len(tile.points) < 2:
                raise CatalogIntegrityError(f"Tile {tile.id} needs at least two curve points")

        for name, table in (
            ("horizontal_mirror", self.horizontal_mirror),
            ("vertical_mirror", self.vertical_mirror),
        ):
            if len(table) != TILE_COUNT:
                raise CatalogIntegrityError(f"{name} must have {TILE_COUNT} entries, found {len(table)}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TileCatalog":
        """Build a catalog from parsed catalog data."""
        try:
            raw_tiles = sorted(data["tiles"], key=lambda t: t["id"])
            tiles = tuple(Tile(**t) for t in raw_tiles)
            horizontal = tuple(int(i) for i in data["horizontal_mirror"])
            vertical = tuple(int(i) for i in data["vertical_mirror"])
        except (KeyError, TypeError, ValidationError) as e:
            raise CatalogIntegrityError(f"Malformed tile catalog: {e}") from e

        return cls(tiles=tiles, horizontal_mirror=horizontal, vertical_mirror=vertical)

    @classmethod
    def from_json(cls, path: Path) -> "TileCatalog":
        """Load a catalog from a JSON data file."""
        with open(path) as f:
            data = json.load(f)
        catalog = cls.from_dict(data)
        logger.debug("Loaded %d tiles from %s", len(catalog), path)
        return catalog


@lru_cache(maxsize=None)
def load_catalog(path: Optional[Path] = None) -> TileCatalog:
    """Load (once) and return the tile catalog."""
    return TileCatalog.from_json(path or DEFAULT_CATALOG_PATH)
