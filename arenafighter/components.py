"""Component data types, sprite identifiers and world constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, ClassVar

TILE_SIZE = 32
LEVEL_W = 32
LEVEL_H = 32

LEVEL1_MAP_PATH = "bin/maps/level1.csv"


class SpriteID(IntEnum):
    """Identifiers of the tiles available in the sprite sheet."""

    DEFAULT = 0
    LIGHT_ROCK = 1
    CRACKED_EARTH_1 = 2
    CRACKED_EARTH_2 = 3
    CRACKED_EARTH_WEEDS_1 = 4
    CRACKED_EARTH_WEEDS_2 = 5
    LIGHT_GRASS = 6
    DARK_GRASS = 7
    WATER_LIGHT_1 = 8
    ROCK_WALL_1 = 9
    ROCK_PEAK_1 = 10


class ComponentType(IntEnum):
    """Kinds of component that the component storage knows about."""

    VOID = 0
    POSITION = 1
    SPRITE = 2


class Component:
    """Base of every component stored by the entity system."""

    kind: ClassVar[ComponentType] = ComponentType.VOID

    def component_type(self) -> ComponentType:
        """Return the kind of this component."""
        return self.kind


@dataclass(frozen=True)
class Position(Component):
    """A location in tile coordinates."""

    kind: ClassVar[ComponentType] = ComponentType.POSITION

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Sprite(Component):
    """The images drawn for an entity, tagged with their sprite id."""

    kind: ClassVar[ComponentType] = ComponentType.SPRITE

    sprite_id: SpriteID = SpriteID.DEFAULT
    images: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "images", tuple(self.images))
        object.__setattr__(self, "sprite_id", SpriteID(self.sprite_id))


@dataclass
class Velocity:
    """Movement per tick along both axes."""

    dx: float = 0.0
    dy: float = 0.0


@dataclass
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"colour channel {name}={value} is outside 0..255")


@dataclass
class Health:
    """Hit points of a creature."""

    health: int = 0


@dataclass
class BaseSpeed:
    """Unmodified movement speed of a creature."""

    speed: int = 0


@dataclass
class Creature:
    """A moving, living thing in the arena."""

    pos: Position = field(default_factory=Position)
    vel: Velocity = field(default_factory=Velocity)
    health: Health = field(default_factory=Health)
    base_speed: BaseSpeed = field(default_factory=BaseSpeed)
    sprites: list[Sprite] = field(default_factory=list)