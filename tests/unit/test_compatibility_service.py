"""Tests for kolamgen.services.compatibility_service."""

import pytest

from kolamgen.services.catalog_service import CatalogIntegrityError, TileCatalog
from kolamgen.services.compatibility_service import CompatibilityRules, find_self_inverse

TILE_IDS = range(1, 17)


# ---------------------------------------------------------------------------
# Mirror tables
# ---------------------------------------------------------------------------

class TestMirrorTables:
    @pytest.mark.parametrize("tile_id", TILE_IDS)
    def test_horizontal_is_involution(self, rules, tile_id):
        assert rules.mirror_horizontal(rules.mirror_horizontal(tile_id)) == tile_id

    @pytest.mark.parametrize("tile_id", TILE_IDS)
    def test_vertical_is_involution(self, rules, tile_id):
        assert rules.mirror_vertical(rules.mirror_vertical(tile_id)) == tile_id

    def test_tables_are_bijections(self, rules):
        assert sorted(rules.horizontal_mirror) == list(TILE_IDS)
        assert sorted(rules.vertical_mirror) == list(TILE_IDS)

    @pytest.mark.parametrize("tile_id", TILE_IDS)
    def test_self_inverse_sets_are_fixed_points(self, rules, tile_id):
        assert (tile_id in rules.horizontal_self_inverse) == (rules.mirror_horizontal(tile_id) == tile_id)
        assert (tile_id in rules.vertical_self_inverse) == (rules.mirror_vertical(tile_id) == tile_id)

    def test_known_self_inverse_sets(self, rules):
        assert rules.horizontal_self_inverse == {1, 2, 4, 10, 11, 12, 14, 16}
        assert rules.vertical_self_inverse == {1, 3, 5, 10, 11, 13, 15, 16}

    def test_find_self_inverse(self):
        assert find_self_inverse((2, 1, 3)) == {3}

    def test_mirrors_swap_edges(self, rules):
        tile = rules.catalog[6]  # right + bottom
        h = rules.catalog[rules.mirror_horizontal(6)]
        v = rules.catalog[rules.mirror_vertical(6)]
        assert h.touches_left_edge and h.touches_bottom_edge and not h.touches_right_edge
        assert v.touches_right_edge and v.touches_top_edge and not v.touches_bottom_edge
        assert tile.touches_right_edge and tile.touches_bottom_edge

    def test_lookup_arrays_are_read_only(self, rules):
        lookup = rules.horizontal_lookup()
        assert lookup[3] == 5
        with pytest.raises(ValueError):
            lookup[3] = 7


# ---------------------------------------------------------------------------
# Pairwise compatibility table
# ---------------------------------------------------------------------------

class TestCompatibilityTable:
    def test_non_connecting_tile_allows_any_other_tile(self, rules):
        # Tile 4 only reaches up, so it does not connect outward.
        assert rules.compatible_with(4) == set(TILE_IDS) - {4}
        assert rules.compatible_with(1) == set(TILE_IDS) - {1}

    def test_connecting_tile_requires_connecting_follower(self, rules):
        allowed = rules.compatible_with(6)
        assert 1 in allowed
        assert 3 in allowed
        assert 4 not in allowed
        assert 5 not in allowed
        assert 8 not in allowed

    def test_rule_is_asymmetric(self, rules):
        assert rules.allows(4, 6)
        assert not rules.allows(6, 4)

    @pytest.mark.parametrize("tile_id", TILE_IDS)
    def test_tile_never_compatible_with_itself(self, rules, tile_id):
        assert not rules.allows(tile_id, tile_id)
        assert tile_id not in rules.compatible_with(tile_id)

    @pytest.mark.parametrize("a", range(2, 17))
    def test_empty_tile_allowed_after_other_tiles(self, rules, a):
        assert rules.allows(a, 1)

    def test_compatible_counts(self, rules):
        # 12 tiles connect outward; tile 6 accepts the other 11 plus tile 1.
        assert len(rules.compatible_with(6)) == 12
        assert len(rules.compatible_with(4)) == 15

    def test_matches_connectivity_rule(self, rules, catalog):
        for a in catalog:
            for b in catalog:
                expected = a.id != b.id and (
                    (not a.connects_outward) or b.connects_outward or b.id == 1
                )
                assert rules.allows(a.id, b.id) == expected


# ---------------------------------------------------------------------------
# Per-edge mate sets
# ---------------------------------------------------------------------------

class TestMateSets:
    def test_below_non_connecting(self, rules):
        # Above tile 3 does not reach down: followers must not reach up.
        assert rules.below_mates(3) == {2, 3, 5, 6, 9, 10, 12}

    def test_below_connecting(self, rules):
        assert rules.below_mates(2) == {4, 7, 8, 11, 13, 14, 15, 16}

    def test_right_non_connecting(self, rules):
        assert rules.right_mates(2) == {2, 3, 4, 6, 7, 11, 13}

    def test_right_connecting(self, rules):
        assert rules.right_mates(3) == {5, 8, 9, 10, 12, 14, 15, 16}

    def test_empty_tile_never_a_candidate(self, rules):
        for tile_id in TILE_IDS:
            assert 1 not in rules.below_mates(tile_id)
            assert 1 not in rules.right_mates(tile_id)


# ---------------------------------------------------------------------------
# build() validation
# ---------------------------------------------------------------------------

class TestBuildValidation:
    def test_non_involution_rejected(self, catalog_data):
        # 3 -> 5 but 5 -> 4: a permutation that is not an involution
        catalog_data["horizontal_mirror"][2] = 5
        catalog_data["horizontal_mirror"][4] = 4
        catalog_data["horizontal_mirror"][3] = 3
        catalog = TileCatalog.from_dict(catalog_data)
        with pytest.raises(CatalogIntegrityError, match="horizontal_mirror"):
            CompatibilityRules.build(catalog)

    def test_non_permutation_rejected(self, catalog_data):
        catalog_data["vertical_mirror"][1] = 1
        catalog = TileCatalog.from_dict(catalog_data)
        with pytest.raises(CatalogIntegrityError, match="permutation"):
            CompatibilityRules.build(catalog)

    def test_mirror_disagreeing_with_edges_rejected(self, catalog_data):
        # Pair 6<->7 and 8<->9 in the horizontal table: still an involution,
        # but those are top-bottom mirrors, not left-right ones.
        catalog_data["horizontal_mirror"][5:9] = [7, 6, 9, 8]
        catalog = TileCatalog.from_dict(catalog_data)
        with pytest.raises(CatalogIntegrityError):
            CompatibilityRules.build(catalog)

    def test_packaged_catalog_builds(self, catalog):
        rules = CompatibilityRules.build(catalog)
        assert len(rules.compatible) == 16
