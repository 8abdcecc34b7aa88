"""Compatibility rules derived from the tile catalog.

Two kinds of adjacency information are derived here:

- The pairwise compatibility table: B may follow A (to the right or below)
  when A does not connect outward, or when B connects outward too, or when B
  is the empty tile. A tile is never listed as compatible with itself.
  The rule is asymmetric; a non-connecting tile may be followed by any
  other tile.
- Per-edge mate sets used by the synthesizer: the tiles that may sit below a
  tile are the non-empty tiles whose top edge matches that tile's bottom
  edge, and likewise for right/left. These keep curves continuous across
  cell boundaries.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import numpy as np

from .catalog_service import EMPTY_TILE_ID, CatalogIntegrityError, TileCatalog, load_catalog

logger = logging.getLogger(__name__)


def find_self_inverse(table: tuple[int, ...]) -> frozenset[int]:
    """Return the tile ids that a mirror table maps onto themselves."""
    return frozenset(index + 1 for index, image in enumerate(table) if image == index + 1)


def _check_involution(name: str, table: tuple[int, ...]) -> None:
    n = len(table)
    ids = set(range(1, n + 1))
    if set(table) != ids:
        raise CatalogIntegrityError(f"{name} is not a permutation of 1..{n}: {table}")
    for tile_id in ids:
        if table[table[tile_id - 1] - 1] != tile_id:
            raise CatalogIntegrityError(f"{name} is not an involution at tile {tile_id}")


def _check_mirror_edges(catalog: TileCatalog) -> None:
    """Mirror images must have the reflected edge connectivity."""
    for tile in catalog:
        h = catalog[catalog.horizontal_mirror[tile.id - 1]]
        if (
            h.touches_left_edge != tile.touches_right_edge
            or h.touches_right_edge != tile.touches_left_edge
            or h.touches_top_edge != tile.touches_top_edge
            or h.touches_bottom_edge != tile.touches_bottom_edge
        ):
            raise CatalogIntegrityError(
                f"horizontal_mirror maps tile {tile.id} ({tile.edge_signature}) "
                f"to tile {h.id} ({h.edge_signature})"
            )

        v = catalog[catalog.vertical_mirror[tile.id - 1]]
        if (
            v.touches_top_edge != tile.touches_bottom_edge
            or v.touches_bottom_edge != tile.touches_top_edge
            or v.touches_left_edge != tile.touches_left_edge
            or v.touches_right_edge != tile.touches_right_edge
        ):
            raise CatalogIntegrityError(
                f"vertical_mirror maps tile {tile.id} ({tile.edge_signature}) "
                f"to tile {v.id} ({v.edge_signature})"
            )


def _check_commuting(horizontal: tuple[int, ...], vertical: tuple[int, ...]) -> None:
    # The double-mirror quadrant must not depend on which reflection runs first.
    for tile_id in range(1, len(horizontal) + 1):
        hv = horizontal[vertical[tile_id - 1] - 1]
        vh = vertical[horizontal[tile_id - 1] - 1]
        if hv != vh:
            raise CatalogIntegrityError(
                f"Mirror tables do not commute at tile {tile_id}: {hv} != {vh}"
            )


def _mirror_lookup(table: tuple[int, ...]) -> np.ndarray:
    """Lookup array usable as ``lookup[matrix]``; index 0 is unused."""
    lookup = np.array((0,) + table, dtype=np.int64)
    lookup.setflags(write=False)
    return lookup


@dataclass(frozen=True)
class CompatibilityRules:
    """Immutable adjacency and symmetry tables for the tile catalog."""

    catalog: TileCatalog
    compatible: tuple[frozenset[int], ...]
    below_mates_by_edge: dict[bool, frozenset[int]]
    right_mates_by_edge: dict[bool, frozenset[int]]
    horizontal_self_inverse: frozenset[int]
    vertical_self_inverse: frozenset[int]

    @classmethod
    def build(cls, catalog: Optional[TileCatalog] = None) -> "CompatibilityRules":
        """Derive all tables from the catalog, validating the mirror tables.

        Raises:
            CatalogIntegrityError: If a mirror table is not an involution on
                the tile ids, or disagrees with the tiles' edge flags.
        """
        catalog = catalog or load_catalog()

        _check_involution("horizontal_mirror", catalog.horizontal_mirror)
        _check_involution("vertical_mirror", catalog.vertical_mirror)
        _check_mirror_edges(catalog)
        _check_commuting(catalog.horizontal_mirror, catalog.vertical_mirror)

        compatible = []
        for a in catalog:
            allowed = frozenset(
                b.id
                for b in catalog
                if b.id != a.id
                and (not a.connects_outward or b.connects_outward or b.id == EMPTY_TILE_ID)
            )
            compatible.append(allowed)

        below = {
            edge: frozenset(
                t.id for t in catalog if t.id != EMPTY_TILE_ID and t.touches_top_edge == edge
            )
            for edge in (False, True)
        }
        right = {
            edge: frozenset(
                t.id for t in catalog if t.id != EMPTY_TILE_ID and t.touches_left_edge == edge
            )
            for edge in (False, True)
        }

        rules = cls(
            catalog=catalog,
            compatible=tuple(compatible),
            below_mates_by_edge=below,
            right_mates_by_edge=right,
            horizontal_self_inverse=find_self_inverse(catalog.horizontal_mirror),
            vertical_self_inverse=find_self_inverse(catalog.vertical_mirror),
        )
        logger.debug(
            "Built compatibility rules: h-self=%s v-self=%s",
            sorted(rules.horizontal_self_inverse),
            sorted(rules.vertical_self_inverse),
        )
        return rules

    # ------------------------------------------------------------------
    # Adjacency
    # ------------------------------------------------------------------

    def allows(self, a: int, b: int) -> bool:
        """Whether tile ``b`` may sit right of or below tile ``a``."""
        return b in self.compatible[a - 1]

    def compatible_with(self, a: int) -> frozenset[int]:
        return self.compatible[a - 1]

    def below_mates(self, above: int) -> frozenset[int]:
        """Candidate tiles for the cell below ``above``."""
        return self.below_mates_by_edge[self.catalog[above].touches_bottom_edge]

    def right_mates(self, left: int) -> frozenset[int]:
        """Candidate tiles for the cell right of ``left``."""
        return self.right_mates_by_edge[self.catalog[left].touches_right_edge]

    # ------------------------------------------------------------------
    # Symmetry
    # ------------------------------------------------------------------

    @property
    def horizontal_mirror(self) -> tuple[int, ...]:
        return self.catalog.horizontal_mirror

    @property
    def vertical_mirror(self) -> tuple[int, ...]:
        return self.catalog.vertical_mirror

    def mirror_horizontal(self, tile_id: int) -> int:
        """Tile id of the left-right mirror image."""
        return self.catalog.horizontal_mirror[tile_id - 1]

    def mirror_vertical(self, tile_id: int) -> int:
        """Tile id of the top-bottom mirror image."""
        return self.catalog.vertical_mirror[tile_id - 1]

    def horizontal_lookup(self) -> np.ndarray:
        return _mirror_lookup(self.catalog.horizontal_mirror)

    def vertical_lookup(self) -> np.ndarray:
        return _mirror_lookup(self.catalog.vertical_mirror)


@lru_cache(maxsize=None)
def get_rules() -> CompatibilityRules:
    """Build (once) the rules for the packaged catalog."""
    return CompatibilityRules.build(load_catalog())
