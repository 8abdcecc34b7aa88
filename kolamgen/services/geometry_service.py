"""Compile a tile-assignment matrix into absolute dot and curve geometry."""

from typing import Optional, Sequence, Union

import numpy as np

from ..models.pattern import Curve, Dimensions, Dot, PathPoint, Point, RenderedPattern
from ..models.tile import CurvePoint
from .catalog_service import TileCatalog, load_catalog

MatrixLike = Union[np.ndarray, Sequence[Sequence[int]]]

# Coordinates are rounded so exported numbers stay short and stable.
COORD_DIGITS = 6


def _coord(cell: int, offset: float, spacing: float) -> float:
    return round((cell + 1 + offset) * spacing, COORD_DIGITS)


class GeometryCompiler:
    """Maps tile ids on a grid to pixel-space dots and curves.

    Cell (row i, col j) has its dot at ``((j + 1) * s, (i + 1) * s)``; tile
    curve offsets are relative to that dot, in units of the cell spacing.
    """

    def __init__(self, catalog: Optional[TileCatalog] = None):
        self.catalog = catalog or load_catalog()

    def compile(self, matrix: MatrixLike, cell_spacing: float) -> RenderedPattern:
        """Compile a matrix into a :class:`RenderedPattern`.

        Args:
            matrix: 2D array of tile ids (0 marks an unoccupied cell).
            cell_spacing: Pixels between neighbouring dots.

        Returns:
            Immutable rendered pattern.

        Raises:
            ValueError: If the spacing is not positive, the matrix is not 2D
                and non-empty, or it contains an unknown tile id.
        """
        if cell_spacing <= 0:
            raise ValueError(f"cell_spacing must be positive, got {cell_spacing}")

        grid = np.asarray(matrix, dtype=np.int64)
        if grid.ndim != 2 or grid.size == 0:
            raise ValueError(f"matrix must be a non-empty 2D grid, got shape {grid.shape}")

        rows, cols = grid.shape
        spacing = float(cell_spacing)
        dots: list[Dot] = []
        curves: list[Curve] = []

        for i in range(rows):
            for j in range(cols):
                tile_id = int(grid[i, j])
                if tile_id <= 0:
                    continue
                if tile_id not in self.catalog.ids:
                    raise ValueError(f"Unknown tile id {tile_id} at ({i}, {j})")

                dots.append(Dot(
                    id=f"dot-{i}-{j}",
                    center=Point(x=_coord(j, 0.0, spacing), y=_coord(i, 0.0, spacing)),
                ))

                tile = self.catalog[tile_id]
                if tile.points:
                    points = tuple(self._translate(p, i, j, spacing) for p in tile.points)
                    curves.append(Curve(
                        id=f"curve-{i}-{j}",
                        row=i,
                        col=j,
                        tile_id=tile_id,
                        start=points[0],
                        end=points[-1],
                        points=points,
                    ))

        return RenderedPattern(
            id=f"kolam-{rows}x{cols}",
            name=f"Kolam {rows}x{cols}",
            rows=rows,
            cols=cols,
            cell_spacing=spacing,
            matrix=tuple(tuple(int(v) for v in row) for row in grid),
            dots=tuple(dots),
            curves=tuple(curves),
            dimensions=Dimensions(width=(cols + 1) * spacing, height=(rows + 1) * spacing),
        )

    @staticmethod
    def _translate(point: CurvePoint, i: int, j: int, spacing: float) -> PathPoint:
        """Move a cell-local curve point into pixel space."""
        return PathPoint(
            x=_coord(j, point.x, spacing),
            y=_coord(i, point.y, spacing),
            control_x=_coord(j, point.control_x, spacing) if point.control_x is not None else None,
            control_y=_coord(i, point.control_y, spacing) if point.control_y is not None else None,
        )
