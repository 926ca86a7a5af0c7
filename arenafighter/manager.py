"""The coordinator that ties entities, components and archetypes together."""

from __future__ import annotations

import math
from typing import Any, Iterable

import pygame

from .components import (
    LEVEL1_MAP_PATH,
    Component,
    ComponentType,
    Position,
    Sprite,
    SpriteID,
)
from .core import (
    ArchetypeID,
    ArchetypeManager,
    ComponentManager,
    EntityID,
    EntityManager,
    TooManyEntitiesError,
)
from .systems import Level, SpriteSheet, SystemsManager, PathLike, load_map

_RENDER_SIGNATURE = sorted([ComponentType.POSITION, ComponentType.SPRITE])


class Coordinator:
    """Owns the managers and builds, tracks and draws entities."""

    def __init__(self, sprite_sheet: SpriteSheet | None = None) -> None:
        self.entity_manager = EntityManager()
        self.component_manager = ComponentManager()
        self.archetype_manager = ArchetypeManager()
        self.systems_manager = SystemsManager()
        self.render_list: list[EntityID] = []
        self.sprite_sheet = sprite_sheet if sprite_sheet is not None else SpriteSheet()

    def add_entity(self, components: Iterable[Component]) -> EntityID:
        """Create an entity carrying the given components and file it under its archetype."""
        components = list(components)
        entity = self.entity_manager.create_entity()
        component_ids = self.component_manager.register_components(entity, components)
        self.entity_manager.register_components(entity, component_ids)

        archetype = self.archetype_manager.get_set_archetype(
            components, self.component_manager
        )
        for component_id in component_ids:
            self.component_manager.component_index.setdefault(component_id, []).append(
                archetype
            )
        self.archetype_manager.archetype_index.setdefault(archetype, []).append(entity)
        return entity

    def create_tile(self, x: float, y: float, z: float, tile_type: SpriteID) -> EntityID:
        """Create a drawable tile entity; return 0 if no entity id is left."""
        components = [
            Position(x=x, y=y, z=z),
            Sprite(sprite_id=tile_type, images=self.sprite_sheet.images(tile_type)),
        ]
        try:
            return self.add_entity(components)
        except TooManyEntitiesError:
            return 0

    def find_render_archetype(self) -> ArchetypeID:
        """Return the archetype of entities with a position and a sprite, or 0."""
        for archetype_id, signature in self.archetype_manager.archetype_definitions.items():
            if list(signature) == _RENDER_SIGNATURE:
                return archetype_id
        return 0

    def update_render_list(self) -> None:
        """Refresh the list of entities to draw."""
        archetype = self.find_render_archetype()
        self.render_list = list(self.archetype_manager.archetype_index.get(archetype, []))

    def new_level1(self, path: PathLike = LEVEL1_MAP_PATH) -> Level:
        """Load the first level's map and create a tile for every cell."""
        level = load_map(path)
        for x, row in enumerate(level.map):
            for y, tile in enumerate(row):
                self.create_tile(float(x), float(y), 0.0, tile)
        return level

    def render_level(self, screen: pygame.Surface, game: Any) -> int:
        """Draw the visible tiles onto the screen and return how many were drawn."""
        self.update_render_list()

        level = game.current_level
        cam_scale = game.cam_scale
        padding = level.tile_size * cam_scale
        cx, cy = float(game.width // 2), float(game.height // 2)

        # Zoomed-in tiles are drawn unscaled first and magnified as a whole,
        # which keeps their edges from bleeding.
        scale_later = cam_scale > 1
        target = screen
        draw_scale = cam_scale
        if scale_later:
            offscreen = getattr(game, "offscreen", None)
            if offscreen is not None and offscreen.get_size() != screen.get_size():
                offscreen = None
            if offscreen is None:
                offscreen = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
            game.offscreen = offscreen
            target = offscreen
            target.fill((0, 0, 0, 0))
            draw_scale = 1.0

        draw_calls = 0
        for entity in self.render_list:
            component_ids = self.entity_manager.entity_index.get(entity, [])
            position = self.component_manager.get_component_by_id(
                entity, component_ids, ComponentType.POSITION
            )
            sprite = self.component_manager.get_component_by_id(
                entity, component_ids, ComponentType.SPRITE
            )
            if not isinstance(position, Position):
                continue

            xi, yi = game.cartesian_to_iso(float(position.x), float(position.y))
            draw_x = (xi - game.cam_x) * cam_scale + cx
            draw_y = (yi + game.cam_y) * cam_scale + cy
            if (
                draw_x + padding < 0
                or draw_y + padding < 0
                or draw_x > game.width
                or draw_y > game.height
            ):
                continue
            if not isinstance(sprite, Sprite) or not sprite.images:
                continue

            image = sprite.images[0]
            if draw_scale != 1:
                width, height = image.get_size()
                image = pygame.transform.scale(
                    image,
                    (max(1, round(width * draw_scale)), max(1, round(height * draw_scale))),
                )
            dest_x = (xi - game.cam_x) * draw_scale + cx
            dest_y = (yi + game.cam_y) * draw_scale + cy
            target.blit(image, (math.floor(dest_x), math.floor(dest_y)))
            draw_calls += 1

        if scale_later:
            self._magnify(screen, target, cam_scale, cx, cy)
        return draw_calls

    @staticmethod
    def _magnify(
        screen: pygame.Surface, source: pygame.Surface, scale: float, cx: float, cy: float
    ) -> None:
        width, height = screen.get_size()
        crop = pygame.Rect(
            math.floor(cx - cx / scale),
            math.floor(cy - cy / scale),
            math.ceil(width / scale) + 1,
            math.ceil(height / scale) + 1,
        ).clip(source.get_rect())
        if crop.width == 0 or crop.height == 0:
            return
        zoomed = pygame.transform.scale(
            source.subsurface(crop),
            (max(1, round(crop.width * scale)), max(1, round(crop.height * scale))),
        )
        screen.blit(
            zoomed,
            (math.floor((crop.x - cx) * scale + cx), math.floor((crop.y - cy) * scale + cy)),
        )