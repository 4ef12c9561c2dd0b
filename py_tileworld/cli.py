"""Command line entry point: generate a world and print it."""

import argparse
import sys
from typing import List, Optional

import structlog
from pydantic import BaseModel, Field, model_validator

from .config import get_preset, list_presets, settings
from .core.biomes import BiomeKind
from .core.world import World
from .utils.logging_config import configure_logging

logger = structlog.get_logger()

# Map glyphs per biome kind; OTHER uses the first letter of the biome name
GLYPHS = {
    BiomeKind.WATER: "~",
    BiomeKind.DEEP_WATER: "=",
    BiomeKind.BEACH: ".",
    BiomeKind.FOREST: "T",
    BiomeKind.MAGICAL_LAKE: "*",
    BiomeKind.PLAINS: '"',
}
SPAWN_GLYPH = "@"


class WorldRequest(BaseModel):
    """Validated world options from the command line."""

    preset: str = Field(default=settings.default_preset, description="Preset name")
    width: Optional[int] = Field(None, ge=1, description="World width override")
    height: Optional[int] = Field(None, ge=1, description="World height override")
    has_ocean: Optional[bool] = Field(None, description="Ocean override")
    lake_count: Optional[int] = Field(None, ge=0, description="Lake count override")
    mainland_size: Optional[float] = Field(None, gt=0, description="Mainland size override")
    seed: Optional[str] = Field(None, description="Random seed for reproducible generation")

    @model_validator(mode="after")
    def check_limits(self) -> "WorldRequest":
        if self.preset not in list_presets():
            raise ValueError(f"Unknown preset '{self.preset}'. Available: {', '.join(list_presets())}")
        if self.width is not None and self.width > settings.max_world_width:
            raise ValueError(f"width must be <= {settings.max_world_width}")
        if self.height is not None and self.height > settings.max_world_height:
            raise ValueError(f"height must be <= {settings.max_world_height}")
        if self.lake_count is not None and self.lake_count > settings.max_lake_count:
            raise ValueError(f"lake_count must be <= {settings.max_lake_count}")
        return self


def render_ascii(world: World, spawn=None) -> str:
    """One character per tile, one line per row."""
    lines = []
    for row in world.tiles:
        chars = []
        for tile in row:
            if spawn is not None and (tile.x, tile.y) == tuple(spawn):
                chars.append(SPAWN_GLYPH)
            else:
                chars.append(GLYPHS.get(tile.biome.kind, tile.biome.name[:1].lower()))
        lines.append("".join(chars))
    return "\n".join(lines)


def build_world(request: WorldRequest) -> World:
    config = get_preset(request.preset).to_config(
        width=request.width,
        height=request.height,
        has_ocean=request.has_ocean,
        lake_count=request.lake_count,
        mainland_size=request.mainland_size,
        seed=request.seed,
    )
    return World.from_config(config)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a tile world and print it")
    parser.add_argument("--preset", default=settings.default_preset, help=f"One of: {', '.join(list_presets())}")
    parser.add_argument("--width", type=int, help="World width in tiles")
    parser.add_argument("--height", type=int, help="World height in tiles")
    parser.add_argument("--ocean", dest="has_ocean", action="store_true", default=None, help="Surround the mainland with ocean")
    parser.add_argument("--no-ocean", dest="has_ocean", action="store_false", help="Landlocked world")
    parser.add_argument("--lakes", dest="lake_count", type=int, help="Number of small lakes")
    parser.add_argument("--mainland-size", type=float, help="Mainland diameter in tiles")
    parser.add_argument("--seed", help="Random seed")
    parser.add_argument("--no-map", action="store_true", help="Only print the summary")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, settings.log_format)

    try:
        request = WorldRequest(
            preset=args.preset,
            width=args.width,
            height=args.height,
            has_ocean=args.has_ocean,
            lake_count=args.lake_count,
            mainland_size=args.mainland_size,
            seed=args.seed,
        )
        logger.info("World requested", **request.model_dump())
        world = build_world(request)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    spawn = world.find_spawn_point()

    if not args.no_map:
        print(render_ascii(world, spawn))
        print()

    print(f"World {world.width}x{world.height} (preset={request.preset}, seed={request.seed})")
    for name, count in sorted(world.biome_counts().items(), key=lambda item: -item[1]):
        print(f"  {name:<14} {count}")
    print(f"Landmasses: {len(world.landmasses)}, water bodies: {len(world.water_bodies)}")
    print(f"Spawn: {spawn[0]},{spawn[1]} ({world.get_tile(*spawn).biome.name})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
