"""Shared test fixtures."""

import json

import numpy as np
import pytest

from kolamgen.services.catalog_service import DEFAULT_CATALOG_PATH, load_catalog
from kolamgen.services.compatibility_service import get_rules
from kolamgen.services.geometry_service import GeometryCompiler
from kolamgen.services.synthesis_service import GridSynthesizer


@pytest.fixture
def catalog():
    """The packaged 16-tile catalog."""
    return load_catalog()


@pytest.fixture
def rules():
    """Compatibility rules for the packaged catalog."""
    return get_rules()


@pytest.fixture
def catalog_data():
    """Raw catalog data, safe to modify per test."""
    with open(DEFAULT_CATALOG_PATH) as f:
        return json.load(f)


@pytest.fixture
def synthesizer(rules):
    return GridSynthesizer(rules)


@pytest.fixture
def compiler(catalog):
    return GeometryCompiler(catalog)


@pytest.fixture
def mirror_lookups(rules):
    """(horizontal, vertical) lookup arrays usable as ``lookup[matrix]``."""
    return rules.horizontal_lookup(), rules.vertical_lookup()


@pytest.fixture
def small_matrix():
    """A hand-built 3x3 symmetric grid: a ring of loops around a center cross."""
    return np.array([
        [6, 12, 9],
        [13, 16, 15],
        [7, 14, 8],
    ])


@pytest.fixture
def sample_pattern(compiler, small_matrix):
    """Compiled geometry for ``small_matrix`` at 60px spacing."""
    return compiler.compile(small_matrix, 60)
