"""Tests for settings, presets and the command line entry point."""

import pytest
from pydantic import ValidationError

from py_tileworld.cli import WorldRequest, build_world, main, render_ascii
from py_tileworld.config import PRESETS, Settings, get_preset, list_presets
from py_tileworld.core.world import World
from py_tileworld.core.biomes import MOUNTAINS, PLAINS


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        """Test default values."""
        settings = Settings()
        assert settings.default_preset == "default"
        assert settings.max_world_width == 512

    def test_environment_override(self, monkeypatch):
        """Test settings read environment variables."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("MAX_WORLD_WIDTH", "64")
        settings = Settings()
        assert settings.log_level == "DEBUG"
        assert settings.max_world_width == 64


class TestPresets:
    """Test named world presets."""

    def test_list_presets(self):
        """Test presets are listed by name."""
        names = list_presets()
        assert names == sorted(names)
        assert "default" in names and "meadow" in names

    def test_unknown_preset(self):
        """Test unknown names raise ValueError."""
        with pytest.raises(ValueError):
            get_preset("volcano")

    @pytest.mark.parametrize("name", sorted(PRESETS))
    def test_presets_validate(self, name):
        """Test every preset produces a valid config."""
        get_preset(name).to_config().validate()

    def test_overrides(self):
        """Test overrides replace fields and None is ignored."""
        config = get_preset("default").to_config(width=12, height=None, seed="s")
        assert config.width == 12
        assert config.height == 30
        assert config.seed == "s"
        assert config.has_ocean is True


class TestWorldRequest:
    """Test CLI input validation."""

    def test_defaults(self):
        """Test an empty request uses the default preset."""
        request = WorldRequest()
        assert request.preset == "default"
        assert request.width is None

    @pytest.mark.parametrize(
        "values",
        [
            {"preset": "volcano"},
            {"width": 0},
            {"height": 100000},
            {"lake_count": -2},
            {"mainland_size": 0},
        ],
    )
    def test_invalid(self, values):
        """Test invalid requests are rejected."""
        with pytest.raises(ValidationError):
            WorldRequest(**values)

    def test_build_world(self):
        """Test a request becomes a world."""
        world = build_world(WorldRequest(preset="meadow", width=8, height=6, seed="cli"))
        assert (world.width, world.height) == (8, 6)


class TestRenderAscii:
    """Test map rendering."""

    def test_glyphs(self):
        """Test one glyph per tile and the spawn marker."""
        world = World(4, 3, [(PLAINS, 1)], seed="glyphs")
        text = render_ascii(world, spawn=(1, 1))
        assert text.split("\n") == ['""""', '"@""', '""""']

    def test_other_biomes_use_initial(self):
        """Test biomes without a glyph use their lowercase initial."""
        world = World(3, 2, [(MOUNTAINS, 1)], seed="peaks")
        assert render_ascii(world) == "mmm\nmmm"


class TestMain:
    """Test the command line entry point."""

    def test_prints_world(self, capsys):
        """Test a preset world is printed with its summary."""
        assert main(["--preset", "meadow", "--seed", "cli", "--log-level", "WARNING"]) == 0

        out = capsys.readouterr().out
        assert "World 10x10 (preset=meadow, seed=cli)" in out
        assert "Plains" in out
        assert "Landmasses: 1, water bodies: 0" in out
        assert out.count("@") == 1

    def test_no_map(self, capsys):
        """Test the map can be suppressed."""
        assert main(["--preset", "meadow", "--seed", "cli", "--no-map", "--log-level", "WARNING"]) == 0
        assert "@" not in capsys.readouterr().out

    @pytest.mark.parametrize(
        "argv",
        [
            ["--preset", "volcano"],
            ["--width", "0"],
            ["--lakes", "-1"],
            ["--width", "100000"],
        ],
    )
    def test_invalid_options(self, capsys, argv):
        """Test invalid options exit with status 2."""
        assert main(argv + ["--log-level", "WARNING"]) == 2
        assert "error:" in capsys.readouterr().err
