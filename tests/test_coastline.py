"""Tests for the noise field and coastline carving."""

import numpy as np
import pytest

from py_tileworld.core.alea_prng import AleaPRNG
from py_tileworld.core.biomes import BiomeKind
from py_tileworld.core.coastline import CoastlineCarver
from py_tileworld.core.grid import WorkingGrid
from py_tileworld.core.noise import JITTER, NoiseField


class TestNoiseField:
    """Test noise generation and bay carving."""

    def test_shape(self):
        """Test values are indexed [y, x]."""
        noise = NoiseField.generate(12, 7, AleaPRNG("shape"))
        assert noise.values.shape == (7, 12)
        assert noise.width == 12
        assert noise.height == 7

    def test_bounded(self):
        """Test sinusoids plus jitter stay within their amplitude."""
        noise = NoiseField.generate(40, 40, AleaPRNG("bounds"))
        assert np.abs(noise.values).max() <= 7 + JITTER

    def test_deterministic(self):
        """Test equal seeds give equal fields."""
        a = NoiseField.generate(20, 15, AleaPRNG("noise"))
        b = NoiseField.generate(20, 15, AleaPRNG("noise"))
        np.testing.assert_array_equal(a.values, b.values)

    def test_carve_bay_only_lowers(self):
        """Test bays never raise the field."""
        prng = AleaPRNG("bay")
        noise = NoiseField.generate(30, 30, prng)
        before = noise.values.copy()

        length = noise.carve_bay((15.0, 15.0), 12.5, prng)

        assert 4 <= length <= 11
        assert np.all(noise.values <= before)
        assert np.any(noise.values < before)

    def test_carve_bay_zero_radius(self):
        """Test a degenerate mainland does not fail."""
        prng = AleaPRNG("tiny")
        noise = NoiseField.generate(5, 5, prng)
        assert noise.carve_bay((2.5, 2.5), 0, prng) >= 4


class TestCoastlineCarver:
    """Test ocean classification and island placement."""

    def test_default_mainland_size(self):
        """Test the mainland defaults to min dimension minus five."""
        carver = CoastlineCarver(30, 20, AleaPRNG("size"))
        assert carver.land_size == 15
        assert carver.half_land == 7.5
        assert carver.center == (15.0, 10.0)

    def test_water_mask_spares_core(self):
        """Test the mainland core never becomes water."""
        carver = CoastlineCarver(20, 20, AleaPRNG("core"), mainland_size=10)
        sunk = NoiseField(np.full((20, 20), -100.0))

        mask = carver.water_mask(sunk)

        assert not mask[10, 10]
        assert mask[0, 0]
        # The core is the 5x5 block around the centre
        assert mask.sum() == 20 * 20 - 25
        assert not mask[12, 12]
        assert mask[13, 10]

    def test_water_mask_raised_field(self):
        """Test a high field keeps everything land."""
        carver = CoastlineCarver(20, 20, AleaPRNG("high"), mainland_size=10)
        assert not carver.water_mask(NoiseField(np.full((20, 20), 100.0))).any()

    def test_carve_small_world(self):
        """Test corners are ocean and the centre stays land."""
        grid = WorkingGrid(20, 20)
        result = CoastlineCarver(20, 20, AleaPRNG("coast"), mainland_size=10).carve(grid)

        assert 2 <= result.bays <= 4
        assert result.water_cells > 0
        assert result.islands == []
        assert grid.kind(0, 0) == BiomeKind.WATER
        assert grid.kind(19, 19) == BiomeKind.WATER
        assert grid.is_empty(10, 10)
        assert grid.count_empty() + result.water_cells == 400

    @pytest.mark.parametrize("seed", ["archipelago", "islands-2"])
    def test_islands_in_large_ocean(self, seed):
        """Test large ocean bodies receive islands cleared back to empty."""
        grid = WorkingGrid(60, 60)
        result = CoastlineCarver(60, 60, AleaPRNG(seed), mainland_size=20).carve(grid)

        assert len(result.islands) >= 2
        for island in result.islands:
            assert all(grid.is_empty(x, y) for x, y in island)
