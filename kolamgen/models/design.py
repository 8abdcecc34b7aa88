"""Saved kolam designs (reproducible generation records)."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .pattern import RenderedPattern
from .render import RenderSettings

TILE_ID_RANGE = range(1, 17)


class KolamDesign(BaseModel):
    """A generated tile matrix together with the settings that produced it.

    Designs are stored as YAML so a pattern can be re-rendered later with
    identical geometry, without re-running the synthesizer.
    """

    name: str = Field(..., min_length=1, description="Design name")
    size: int = Field(..., ge=2, description="Requested grid size")
    seed: Optional[int] = Field(default=None, description="Seed used for synthesis")
    cell_spacing: float = Field(default=60.0, gt=0, description="Pixels between dots")
    matrix: list[list[int]] = Field(..., description="Tile ids, row-major")
    render: RenderSettings = Field(default_factory=RenderSettings)

    @field_validator("matrix")
    @classmethod
    def _check_matrix(cls, matrix: list[list[int]]) -> list[list[int]]:
        if not matrix:
            raise ValueError("matrix must not be empty")
        n = len(matrix)
        for row in matrix:
            if len(row) != n:
                raise ValueError(f"matrix must be square, got a row of length {len(row)} in a {n}-row matrix")
            for tile_id in row:
                if tile_id not in TILE_ID_RANGE:
                    raise ValueError(f"unknown tile id {tile_id}")
        return matrix

    @model_validator(mode="after")
    def _check_size(self) -> "KolamDesign":
        if len(self.matrix) != self.size:
            raise ValueError(f"matrix is {len(self.matrix)}x{len(self.matrix)} but size is {self.size}")
        return self

    @classmethod
    def from_pattern(
        cls,
        pattern: RenderedPattern,
        name: Optional[str] = None,
        seed: Optional[int] = None,
        render: Optional[RenderSettings] = None,
    ) -> "KolamDesign":
        """Capture a rendered pattern as a design record."""
        return cls(
            name=name or pattern.name,
            size=pattern.size,
            seed=seed,
            cell_spacing=pattern.cell_spacing,
            matrix=[list(row) for row in pattern.matrix],
            render=render or RenderSettings(),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "KolamDesign":
        """Load a design from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save the design to a YAML file."""
        data = self.model_dump(mode="json")
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=None, sort_keys=False)

    def to_pattern(self) -> RenderedPattern:
        """Recompile the stored matrix into geometry."""
        from ..services.geometry_service import GeometryCompiler

        return GeometryCompiler().compile(self.matrix, self.cell_spacing)
