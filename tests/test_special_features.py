"""Tests for magical lake placement and deep water classification."""

import numpy as np
import pytest

from py_tileworld.core.alea_prng import AleaPRNG
from py_tileworld.core.biomes import BEACH, DEEP_WATER, FOREST, MAGICAL_LAKE, PLAINS, WATER, BiomeKind
from py_tileworld.core.grid import WorkingGrid
from py_tileworld.core.special_features import SpecialFeaturePlacer
from py_tileworld.core.water_depth import WaterDepthClassifier


def uniform_grid(width, height, biome):
    grid = WorkingGrid(width, height)
    grid.fill(np.ones((height, width), dtype=bool), biome)
    return grid


def assert_in_clearing(grid, x, y):
    for nx, ny in grid.neighbors(x, y):
        assert grid.kind(nx, ny) == BiomeKind.FOREST


class TestSpecialFeaturePlacer:
    """Test natural and forced magical lakes."""

    def test_find_clearings_excludes_border(self):
        """Test only interior cells can be clearings."""
        grid = uniform_grid(3, 3, FOREST)
        assert SpecialFeaturePlacer(AleaPRNG("x")).find_clearings(grid) == [(1, 1)]

    def test_find_clearings_plains_center(self):
        """Test any non-protected cell ringed by forest qualifies."""
        grid = uniform_grid(5, 5, FOREST)
        grid.set(2, 2, PLAINS)
        grid.set(0, 0, WATER)
        clearings = SpecialFeaturePlacer(AleaPRNG("x")).find_clearings(grid)
        assert (2, 2) in clearings
        assert (1, 1) not in clearings

    @pytest.mark.parametrize("seed", ["woods-1", "woods-2", "woods-3"])
    def test_natural_placement(self, seed):
        """Test lakes land in clearings and never touch each other."""
        grid = uniform_grid(20, 20, FOREST)

        placed = SpecialFeaturePlacer(AleaPRNG(seed)).place(grid)

        assert len(placed) >= 1
        for x, y in placed:
            assert grid.get(x, y) is MAGICAL_LAKE
            assert_in_clearing(grid, x, y)

    def test_extra_chance_always(self):
        """Test extra lakes stay apart even when every clearing is taken."""
        grid = uniform_grid(12, 12, FOREST)

        placed = SpecialFeaturePlacer(AleaPRNG("many"), extra_chance=1.0).place(grid)

        assert len(placed) > 1
        for x, y in placed:
            assert_in_clearing(grid, x, y)

    def test_small_world_not_forced(self):
        """Test small worlds without a clearing get no magical lake."""
        grid = uniform_grid(10, 10, PLAINS)
        assert SpecialFeaturePlacer(AleaPRNG("small")).place(grid) == []
        assert MAGICAL_LAKE not in grid.palette

    def test_small_world_natural(self):
        """Test small worlds still use natural clearings."""
        grid = uniform_grid(5, 5, FOREST)
        placed = SpecialFeaturePlacer(AleaPRNG("small-woods")).place(grid)
        assert len(placed) >= 1
        for x, y in placed:
            assert_in_clearing(grid, x, y)

    def test_smallest_forced_world(self):
        """Test an 11x11 world without forest still gets its lake."""
        grid = uniform_grid(11, 11, PLAINS)
        placed = SpecialFeaturePlacer(AleaPRNG("eleven")).place(grid)
        assert len(placed) == 1
        assert_in_clearing(grid, *placed[0])

    def test_forced_placement(self):
        """Test a lake is forced into treeless land and ringed with forest."""
        grid = uniform_grid(20, 20, PLAINS)

        placed = SpecialFeaturePlacer(AleaPRNG("forced")).place(grid)

        assert len(placed) == 1
        x, y = placed[0]
        assert 3 <= x < 17 and 3 <= y < 17
        assert grid.get(x, y) is MAGICAL_LAKE
        assert_in_clearing(grid, x, y)

    @pytest.mark.parametrize("seed", ["shore-1", "shore-2", "shore-3"])
    def test_forced_placement_avoids_water(self, seed):
        """Test forced lakes keep away from water and leave it untouched."""
        grid = uniform_grid(20, 20, PLAINS)
        mask = np.zeros((20, 20), dtype=bool)
        mask[:, 8:12] = True
        grid.fill(mask, WATER)

        placed = SpecialFeaturePlacer(AleaPRNG(seed)).place(grid)

        assert len(placed) == 1
        assert_in_clearing(grid, *placed[0])
        assert np.count_nonzero(grid.kind_mask(BiomeKind.WATER)) == 80

    @pytest.mark.parametrize("seed", ["stripes-1", "stripes-2", "stripes-3", "stripes-4"])
    def test_forced_placement_without_shelter(self, seed):
        """Test beach around the only dry cells is turned into forest."""
        grid = uniform_grid(20, 20, PLAINS)
        # Columns repeat water, beach, plains, beach
        for x in range(20):
            column = np.zeros((20, 20), dtype=bool)
            column[:, x] = True
            if x % 4 == 0:
                grid.fill(column, WATER)
            elif x % 2 == 1:
                grid.fill(column, BEACH)

        placed = SpecialFeaturePlacer(AleaPRNG(seed)).place(grid)

        assert len(placed) == 1
        x, y = placed[0]
        assert x in (6, 10, 14) and 3 <= y < 17
        assert_in_clearing(grid, x, y)
        assert np.count_nonzero(grid.kind_mask(BiomeKind.WATER)) == 100
        assert np.count_nonzero(grid.kind_mask(BiomeKind.BEACH)) == 200 - 6

    def test_forced_placement_widens_margin(self):
        """Test a lake is still forced when only cells near the edge are dry."""
        grid = uniform_grid(20, 20, WATER)
        block = np.zeros((20, 20), dtype=bool)
        block[0:4, 0:4] = True
        grid.fill(block, PLAINS)

        placed = SpecialFeaturePlacer(AleaPRNG("corner")).place(grid)

        # (2, 2) is the only dry cell at least two cells from the edge
        assert placed == [(2, 2)]
        assert_in_clearing(grid, *placed[0])

    def test_no_room(self):
        """Test an all-water world gets nothing."""
        grid = uniform_grid(20, 20, WATER)
        assert SpecialFeaturePlacer(AleaPRNG("flooded")).place(grid) == []


class TestWaterDepthClassifier:
    """Test deep water promotion."""

    def test_open_water(self):
        """Test off-grid neighbors count as water."""
        grid = uniform_grid(5, 5, WATER)
        assert WaterDepthClassifier().classify(grid) == 25
        assert set(grid.palette[i] for i in np.unique(grid.cells)) == {DEEP_WATER}

    def test_land_keeps_shallows(self):
        """Test water next to land stays shallow."""
        grid = uniform_grid(5, 5, WATER)
        grid.set(2, 2, PLAINS)

        promoted = WaterDepthClassifier().classify(grid)

        assert promoted == 16
        for x, y in grid.neighbors(2, 2):
            assert grid.kind(x, y) == BiomeKind.WATER
        assert grid.kind(0, 0) == BiomeKind.DEEP_WATER

    def test_single_pass(self):
        """Test one pass only, judged against the grid before it."""
        grid = uniform_grid(7, 1, WATER)
        grid.set(0, 0, PLAINS)

        promoted = WaterDepthClassifier().classify(grid)

        # (1, 0) touches land; everything past it is enclosed by water
        assert promoted == 5
        assert grid.kind(1, 0) == BiomeKind.WATER
        assert grid.kind(2, 0) == BiomeKind.DEEP_WATER

    def test_magical_lake_is_not_water(self):
        """Test magical lakes neither deepen nor count as water."""
        grid = uniform_grid(5, 5, WATER)
        grid.set(2, 2, MAGICAL_LAKE)
        WaterDepthClassifier().classify(grid)
        assert grid.get(2, 2) is MAGICAL_LAKE
        assert grid.kind(1, 1) == BiomeKind.WATER
