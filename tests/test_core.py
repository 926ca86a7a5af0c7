import pytest

from arenafighter.components import Component, ComponentType, Position, Sprite, SpriteID
from arenafighter.core import (
    MAX_ENTITIES,
    ArchetypeManager,
    ComponentField,
    ComponentManager,
    ComponentNotFoundError,
    ComponentSlice,
    ECSError,
    EntityManager,
    EntityOutOfRangeError,
    TooManyEntitiesError,
)


def test_slice_add_and_get():
    cs = ComponentSlice()
    cs.add(7, "seven")
    cs.add(8, "eight")
    assert cs.get(7) == "seven"
    assert cs.get(8) == "eight"
    assert len(cs) == 2


def test_slice_add_existing_replaces():
    cs = ComponentSlice()
    cs.add(7, "old")
    cs.add(7, "new")
    assert cs.get(7) == "new"
    assert len(cs) == 1


def test_slice_get_missing_raises():
    with pytest.raises(ComponentNotFoundError):
        ComponentSlice().get(3)


def test_slice_remove_keeps_others_reachable():
    cs = ComponentSlice()
    for entity in (1, 2, 3, 4):
        cs.add(entity, entity * 10)
    cs.remove(2)
    assert len(cs) == 3
    assert 2 not in cs
    assert {e: cs.get(e) for e in (1, 3, 4)} == {1: 10, 3: 30, 4: 40}
    with pytest.raises(ComponentNotFoundError):
        cs.get(2)


def test_slice_remove_last_and_missing():
    cs = ComponentSlice()
    cs.add(1, "a")
    cs.add(2, "b")
    cs.remove(2)
    cs.remove(99)
    assert len(cs) == 1
    assert cs.get(1) == "a"


def test_field_dispatches_by_kind():
    field = ComponentField()
    pos = Position(1.0, 2.0, 0.0)
    spr = Sprite(SpriteID.LIGHT_ROCK)
    field.add_component(5, pos)
    field.add_component(5, spr)
    assert field.get_component(5, 0, ComponentType.POSITION) == pos
    assert field.get_component(5, 0, ComponentType.SPRITE) == spr
    assert len(field.positions) == 1
    assert len(field.sprites) == 1


def test_field_void_kind_raises_and_is_not_stored():
    field = ComponentField()
    field.add_component(5, Component())
    with pytest.raises(ComponentNotFoundError):
        field.get_component(5, 0, ComponentType.VOID)
    assert len(field.positions) + len(field.sprites) == 0


def test_field_remove_component():
    field = ComponentField()
    pos = Position(1.0, 1.0, 0.0)
    field.add_component(5, pos)
    field.remove_component(5, pos)
    with pytest.raises(ComponentNotFoundError):
        field.get_component(5, 0, ComponentType.POSITION)


def test_manager_register_assigns_unique_increasing_ids():
    cm = ComponentManager()
    ids = cm.register_components(1, [Position(), Sprite()])
    more = cm.register_components(2, [Position()])
    all_ids = ids + more
    assert all_ids == sorted(set(all_ids))
    assert cm.component_id_type[ids[0]] is ComponentType.POSITION
    assert cm.component_id_type[ids[1]] is ComponentType.SPRITE
    assert cm.components_by_type[ComponentType.POSITION] == [ids[0], more[0]]


def test_manager_get_component_by_id():
    cm = ComponentManager()
    pos = Position(2.0, 3.0, 0.0)
    spr = Sprite(SpriteID.WATER_LIGHT_1)
    ids = cm.register_components(4, [pos, spr])
    assert cm.get_component_by_id(4, ids, ComponentType.POSITION) == pos
    assert cm.get_component_by_id(4, ids, ComponentType.SPRITE) == spr


def test_manager_get_component_by_id_missing_type():
    cm = ComponentManager()
    ids = cm.register_components(4, [Position()])
    assert cm.get_component_by_id(4, ids, ComponentType.SPRITE) is None


def test_entity_ids_increase():
    em = EntityManager()
    first = em.create_entity()
    second = em.create_entity()
    assert second == first + 1


def test_too_many_entities():
    em = EntityManager()
    ids = [em.create_entity() for _ in range(MAX_ENTITIES)]
    assert ids[-1] == MAX_ENTITIES
    with pytest.raises(TooManyEntitiesError):
        em.create_entity()


def test_destroy_entity_removes_components():
    em = EntityManager()
    cm = ComponentManager()
    e = em.create_entity()
    ids = cm.register_components(e, [Position(1.0, 1.0, 0.0), Sprite()])
    em.register_components(e, ids)
    assert em.get_entity(ids[0]) == e
    em.destroy_entity(e, cm)
    assert e not in em.entity_index
    assert em.get_entity(ids[0]) == 0
    with pytest.raises(ComponentNotFoundError):
        cm.field.get_component(e, ids[0], ComponentType.POSITION)


def test_destroy_entity_out_of_range():
    em = EntityManager()
    with pytest.raises(EntityOutOfRangeError):
        em.destroy_entity(MAX_ENTITIES, ComponentManager())


def test_destroy_entity_with_unknown_component_raises():
    em = EntityManager()
    cm = ComponentManager()
    e = em.create_entity()
    em.register_components(e, [12345])
    with pytest.raises(ComponentNotFoundError):
        em.destroy_entity(e, cm)


def test_errors_share_base():
    with pytest.raises(ECSError):
        EntityManager().destroy_entity(MAX_ENTITIES + 1, ComponentManager())


def test_archetype_reused_for_same_signature():
    am = ArchetypeManager()
    cm = ComponentManager()
    first = am.get_set_archetype([Position(), Sprite()], cm)
    second = am.get_set_archetype([Sprite(), Position(1.0, 1.0, 0.0)], cm)
    assert first == second
    assert len(am.archetype_definitions) == 1
    assert am.archetype_definitions[first] == [ComponentType.POSITION, ComponentType.SPRITE]


def test_archetype_created_for_new_signature():
    am = ArchetypeManager()
    cm = ComponentManager()
    both = am.get_set_archetype([Position(), Sprite()], cm)
    only_pos = am.get_set_archetype([Position()], cm)
    assert both != only_pos
    assert am.get_set_archetype([Position()], cm) == only_pos
    assert am.archetype_definitions[only_pos] == [ComponentType.POSITION]