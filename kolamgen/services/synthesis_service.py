"""Grid synthesis: build a doubly mirror-symmetric tile-assignment matrix."""

import logging
import numbers
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .catalog_service import EMPTY_TILE_ID
from .compatibility_service import CompatibilityRules, get_rules

logger = logging.getLogger(__name__)

MIN_SIZE = 2


class InvalidSizeError(ValueError):
    """Requested grid size is not an integer >= 2."""


@dataclass
class SynthesisReport:
    """Diagnostics collected while synthesizing one grid."""

    size: int
    half_period: int
    seed: Optional[int] = None
    fallback_cells: list[tuple[int, int]] = field(default_factory=list)
    """Working-quadrant (row, col) cells where no candidate fit and tile 1 was used."""

    @property
    def fallbacks(self) -> int:
        return len(self.fallback_cells)

    @property
    def matrix_size(self) -> int:
        return 2 * self.half_period + (self.size % 2)


def validate_size(size) -> int:
    """Return ``size`` as an int, or raise InvalidSizeError."""
    if isinstance(size, bool) or not isinstance(size, numbers.Integral):
        raise InvalidSizeError(f"Grid size must be an integer, got {size!r}")
    if size < MIN_SIZE:
        raise InvalidSizeError(f"Grid size must be at least {MIN_SIZE}, got {size}")
    return int(size)


def half_period(size: int) -> int:
    """Half-period of the grid: the side of the synthesized quadrant."""
    if size % 2:
        return (size - 1) // 2
    return size // 2


class GridSynthesizer:
    """Randomized constructive fill of one quadrant, reflected into a full grid.

    The fill never backtracks: when a cell has no compatible candidate it
    receives the empty tile and synthesis continues.
    """

    def __init__(self, rules: Optional[CompatibilityRules] = None):
        self.rules = rules or get_rules()

    def synthesize(
        self,
        size: int,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> np.ndarray:
        """Generate a ``size x size`` tile-assignment matrix.

        Args:
            size: Grid size (>= 2).
            seed: Seed for a fresh random generator (ignored if ``rng`` given).
            rng: Random generator to draw from.

        Returns:
            Integer array of tile ids.

        Raises:
            InvalidSizeError: If ``size`` is not an integer >= 2.
        """
        matrix, _ = self.synthesize_with_report(size, seed=seed, rng=rng)
        return matrix

    def synthesize_with_report(
        self,
        size: int,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> tuple[np.ndarray, SynthesisReport]:
        """Like :meth:`synthesize`, also returning a :class:`SynthesisReport`."""
        size = validate_size(size)
        if rng is None:
            rng = np.random.default_rng(seed)

        h = half_period(size)
        report = SynthesisReport(size=size, half_period=h, seed=seed)

        work = self._fill_quadrant(h, rng, report)
        if size % 2:
            matrix = self._assemble_odd(work, h)
        else:
            matrix = self._assemble_even(work, h)

        if report.fallbacks:
            logger.debug(
                "Size %d grid used the empty-tile fallback %d time(s) at %s",
                size, report.fallbacks, report.fallback_cells,
            )
        return matrix, report

    # ------------------------------------------------------------------
    # Quadrant fill
    # ------------------------------------------------------------------

    def _fill_quadrant(
        self,
        h: int,
        rng: np.random.Generator,
        report: SynthesisReport,
    ) -> np.ndarray:
        """Fill the (h+2) x (h+2) working quadrant.

        Row 0 and column 0 stay as the empty tile so the outer border is
        closed. Row h+1 and column h+1 lie on the mirror axes.
        """
        rules = self.rules
        work = np.full((h + 2, h + 2), EMPTY_TILE_ID, dtype=np.int64)

        for i in range(1, h + 1):
            for j in range(1, h + 1):
                work[i, j] = self._pick(work, i, j, rng, report)

        # Seam row sits on the top-bottom mirror axis.
        for j in range(1, h + 1):
            work[h + 1, j] = self._pick(work, h + 1, j, rng, report, rules.vertical_self_inverse)

        # Seam column sits on the left-right mirror axis.
        for i in range(1, h + 1):
            work[i, h + 1] = self._pick(work, i, h + 1, rng, report, rules.horizontal_self_inverse)

        work[h + 1, h + 1] = self._pick(
            work, h + 1, h + 1, rng, report,
            rules.horizontal_self_inverse, rules.vertical_self_inverse,
        )
        return work

    def _pick(
        self,
        work: np.ndarray,
        i: int,
        j: int,
        rng: np.random.Generator,
        report: SynthesisReport,
        *restrict: frozenset[int],
    ) -> int:
        candidates = self.rules.below_mates(int(work[i - 1, j])) & self.rules.right_mates(int(work[i, j - 1]))
        for allowed in restrict:
            candidates = candidates & allowed

        if not candidates:
            report.fallback_cells.append((i, j))
            return EMPTY_TILE_ID
        return int(rng.choice(sorted(candidates)))

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def _quadrants(self, q1: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Mirror images of the top-left quadrant.

        Returns (top-right, bottom-left, bottom-right).
        """
        hl = self.rules.horizontal_lookup()
        vl = self.rules.vertical_lookup()
        top_right = hl[q1[:, ::-1]]
        bottom_left = vl[q1[::-1, :]]
        bottom_right = vl[top_right[::-1, :]]
        return top_right, bottom_left, bottom_right

    def _assemble_even(self, work: np.ndarray, h: int) -> np.ndarray:
        """Four quadrants tiled edge to edge; the seam cells are not used."""
        q1 = work[1:h + 1, 1:h + 1]
        top_right, bottom_left, bottom_right = self._quadrants(q1)
        return np.block([
            [q1, top_right],
            [bottom_left, bottom_right],
        ])

    def _assemble_odd(self, work: np.ndarray, h: int) -> np.ndarray:
        """Four quadrants stitched around a shared center row and column."""
        hl = self.rules.horizontal_lookup()
        vl = self.rules.vertical_lookup()

        q1 = work[1:h + 1, 1:h + 1]
        top_right, bottom_left, bottom_right = self._quadrants(q1)

        seam_column = work[1:h + 1, h + 1]
        seam_row = work[h + 1, 1:h + 1]
        corner = work[h + 1, h + 1]

        top = np.hstack([q1, seam_column[:, np.newaxis], top_right])
        middle = np.concatenate([seam_row, [corner], hl[seam_row[::-1]]])
        bottom = np.hstack([bottom_left, vl[seam_column[::-1]][:, np.newaxis], bottom_right])
        return np.vstack([top, middle[np.newaxis, :], bottom])
