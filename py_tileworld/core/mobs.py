"""Native creatures that biomes can spawn."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Stats:
    """Base combat statistics of a creature."""

    strength: int
    speed: int
    smarts: int
    hitpoints: int


@dataclass(frozen=True)
class Mob:
    """A creature template. Combat layers copy ``stats`` before mutating."""

    name: str
    stats: Stats


@dataclass(frozen=True)
class SpawnEntry:
    """A weighted entry in a biome's native spawn table."""

    mob: Mob
    weight: float


GOPHER = Mob(name="Gopher", stats=Stats(strength=2, speed=5, smarts=1, hitpoints=3))
BIRD = Mob(name="Bird", stats=Stats(strength=1, speed=5, smarts=3, hitpoints=2))
