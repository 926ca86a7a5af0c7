import pytest

from arenafighter.components import (
    BaseSpeed,
    Color,
    Component,
    ComponentType,
    Creature,
    Health,
    Position,
    Sprite,
    SpriteID,
    Velocity,
)


def test_position_reports_position_type():
    assert Position(1.0, 2.0, 0.0).component_type() is ComponentType.POSITION


def test_sprite_reports_sprite_type():
    assert Sprite(SpriteID.LIGHT_GRASS).component_type() is ComponentType.SPRITE


def test_base_component_is_void():
    assert Component().component_type() is ComponentType.VOID


def test_component_types_sort_position_before_sprite():
    kinds = sorted([Sprite().component_type(), Position().component_type()])
    assert kinds == [ComponentType.POSITION, ComponentType.SPRITE]


def test_sprite_images_become_tuple():
    sprite = Sprite(SpriteID.ROCK_WALL_1, ["a", "b"])
    assert sprite.images == ("a", "b")


def test_sprite_id_coerced_from_int():
    sprite = Sprite(int(SpriteID.DARK_GRASS))
    assert sprite.sprite_id is SpriteID.DARK_GRASS


def test_sprite_invalid_id_rejected():
    with pytest.raises(ValueError):
        Sprite(len(SpriteID) + 5)


def test_every_sprite_id_value_round_trips_through_sprite():
    values = list(range(len(SpriteID)))
    ids = [Sprite(value).sprite_id for value in values]
    assert [int(sprite_id) for sprite_id in ids] == values
    assert ids[0] is SpriteID.DEFAULT
    assert Sprite().sprite_id is SpriteID.DEFAULT


def test_position_equality_and_immutability():
    p = Position(3.0, 4.0, 0.0)
    assert p == Position(3.0, 4.0, 0.0)
    with pytest.raises(AttributeError):
        p.x = 9.0


def test_color_channel_range_checked():
    with pytest.raises(ValueError):
        Color(256, 0, 0, 0)
    with pytest.raises(ValueError):
        Color(0, -1, 0, 0)
    assert Color(255, 255, 255, 255).a == 255


def test_creature_defaults_are_independent():
    first = Creature()
    second = Creature()
    first.sprites.append(Sprite())
    assert second.sprites == []
    assert first.pos == Position()
    assert first.vel == Velocity()
    assert first.health == Health()
    assert first.base_speed == BaseSpeed()