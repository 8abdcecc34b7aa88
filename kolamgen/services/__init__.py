"""Kolam generation services."""

from .catalog_service import CatalogIntegrityError, TileCatalog, load_catalog
from .compatibility_service import CompatibilityRules, get_rules
from .synthesis_service import GridSynthesizer, InvalidSizeError, SynthesisReport
from .geometry_service import GeometryCompiler
from .generation_service import GenerationResult, GenerationService, generate
from .animation_service import AnimationService, KolamAnimation
from .export_service import ExportService

__all__ = [
    "CatalogIntegrityError",
    "TileCatalog",
    "load_catalog",
    "CompatibilityRules",
    "get_rules",
    "GridSynthesizer",
    "InvalidSizeError",
    "SynthesisReport",
    "GeometryCompiler",
    "GenerationResult",
    "GenerationService",
    "generate",
    "AnimationService",
    "KolamAnimation",
    "ExportService",
]
