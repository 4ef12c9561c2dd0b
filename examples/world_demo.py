#!/usr/bin/env python3
"""
Simple demo script showing world generation with every preset.
"""

from py_tileworld.cli import render_ascii
from py_tileworld.config import get_preset, list_presets
from py_tileworld.core import World


def main():
    """Generate one world per preset and print its statistics."""
    print("Py-TileWorld Generation Demo")
    print("=" * 40)

    for name in list_presets():
        preset = get_preset(name)
        print(f"\n{name.upper()} Preset: {preset.description}")
        print("-" * 30)

        world = World.from_config(preset.to_config(seed=f"{name}_demo"))
        counts = world.biome_counts()
        total = world.width * world.height

        print(f"  Size: {world.width}x{world.height}")
        print(f"  Landmasses: {len(world.landmasses)} (mainland {len(world.mainland)} tiles)")
        oceans = sum(1 for body in world.water_bodies if body.type == "ocean")
        print(f"  Water bodies: {len(world.water_bodies)} ({oceans} ocean)")

        print("  Biome distribution:")
        largest = max(counts.values())
        for biome, count in sorted(counts.items(), key=lambda item: -item[1]):
            bar = "#" * int(count / largest * 20)
            print(f"    {biome:<14} {bar} ({count}, {count / total * 100:.1f}%)")

        spawn = world.find_spawn_point()
        print(f"  Spawn point: {spawn}")

    print("\n\nMeadow map:")
    print("-" * 30)
    world = World.from_config(get_preset("meadow").to_config(seed="meadow_demo"))
    print(render_ascii(world, world.find_spawn_point()))


if __name__ == "__main__":
    main()
