"""Kolam generation: synthesize a grid and compile it into geometry."""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..models.pattern import RenderedPattern
from .geometry_service import GeometryCompiler
from .synthesis_service import GridSynthesizer, SynthesisReport

logger = logging.getLogger(__name__)

DEFAULT_CELL_SPACING = 60.0


@dataclass
class GenerationResult:
    """A generated pattern plus how it was produced."""

    pattern: RenderedPattern
    report: SynthesisReport
    generation_time: float = 0.0


class GenerationService:
    """Composes the grid synthesizer and the geometry compiler."""

    def __init__(
        self,
        synthesizer: Optional[GridSynthesizer] = None,
        compiler: Optional[GeometryCompiler] = None,
    ):
        self.synthesizer = synthesizer or GridSynthesizer()
        self.compiler = compiler or GeometryCompiler()

    def generate(
        self,
        size: int,
        seed: Optional[int] = None,
        cell_spacing: float = DEFAULT_CELL_SPACING,
        rng: Optional[np.random.Generator] = None,
    ) -> GenerationResult:
        """Generate a kolam of the requested size.

        Raises:
            InvalidSizeError: If ``size`` is not an integer >= 2.
        """
        start = time.perf_counter()
        matrix, report = self.synthesizer.synthesize_with_report(size, seed=seed, rng=rng)
        pattern = self.compiler.compile(matrix, cell_spacing)
        elapsed = time.perf_counter() - start

        logger.info(
            "Generated %s (seed=%s): %d dots, %d curves in %.3fs",
            pattern.id, seed, len(pattern.dots), len(pattern.curves), elapsed,
        )
        return GenerationResult(pattern=pattern, report=report, generation_time=elapsed)


def generate(
    size: int,
    seed: Optional[int] = None,
    cell_spacing: float = DEFAULT_CELL_SPACING,
) -> RenderedPattern:
    """Generate a kolam pattern of the requested grid size."""
    return GenerationService().generate(size, seed=seed, cell_spacing=cell_spacing).pattern
