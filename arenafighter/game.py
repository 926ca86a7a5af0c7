"""The game loop state: camera, input handling and the program entry point."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from typing import Iterable, Sequence

import pygame

from .components import LEVEL1_MAP_PATH, TILE_SIZE
from .manager import Coordinator
from .systems import Level, PathLike, load_sprite_sheet

log = logging.getLogger(__name__)

MIN_ZOOM = 0.01
MAX_ZOOM = 100.0
ZOOM_STEP = 0.25
ZOOM_SMOOTHING = 10.0
PAN_SPEED = 7.0
TICKS_PER_SECOND = 60
WINDOW_TITLE = "Arena Fighter"
WINDOW_SIZE = (640, 480)
DEFAULT_SPRITE_SHEET = "sprites/spritesheet.png"


@dataclass(frozen=True)
class InputState:
    """A snapshot of the player's input for one tick."""

    zoom_in: bool = False
    zoom_out: bool = False
    wheel_y: float = 0.0
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    right_mouse: bool = False
    cursor: tuple[int, int] = (0, 0)
    regenerate: bool = False

    @classmethod
    def from_pygame(cls, events: Iterable[pygame.event.Event] = ()) -> "InputState":
        """Read the current keyboard and mouse state plus this tick's events."""
        keys = pygame.key.get_pressed()
        wheel_y = 0.0
        regenerate = False
        for event in events:
            if event.type == pygame.MOUSEWHEEL:
                wheel_y += event.y
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                regenerate = True
        return cls(
            zoom_in=bool(keys[pygame.K_e] or keys[pygame.K_PAGEUP]),
            zoom_out=bool(keys[pygame.K_c] or keys[pygame.K_PAGEDOWN]),
            wheel_y=wheel_y,
            left=bool(keys[pygame.K_LEFT] or keys[pygame.K_a]),
            right=bool(keys[pygame.K_RIGHT] or keys[pygame.K_d]),
            up=bool(keys[pygame.K_UP] or keys[pygame.K_w]),
            down=bool(keys[pygame.K_DOWN] or keys[pygame.K_s]),
            right_mouse=bool(pygame.mouse.get_pressed()[2]),
            cursor=pygame.mouse.get_pos(),
            regenerate=regenerate,
        )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class Game:
    """Camera and level state of a running game."""

    def __init__(
        self, coordinator: Coordinator, level: Level, map_path: PathLike = LEVEL1_MAP_PATH
    ) -> None:
        self.coordinator = coordinator
        self.current_level = level
        self.map_path = map_path
        self.width = 0
        self.height = 0
        self.cam_x = 0.0
        self.cam_y = 0.0
        self.cam_scale = 1.0
        self.cam_scale_to = 1.0
        self.mouse_pan: tuple[int, int] | None = None
        self.offscreen: pygame.Surface | None = None
        self.fps = 0.0
        self.tps = 0.0
        self.draw_calls = 0
        self._font: pygame.font.Font | None = None

    def update(self, inputs: InputState) -> None:
        """Apply one tick of input to the camera and level."""
        if inputs.zoom_out:
            scroll_y = -ZOOM_STEP
        elif inputs.zoom_in:
            scroll_y = ZOOM_STEP
        else:
            scroll_y = _clamp(inputs.wheel_y, -1.0, 1.0)
        self.cam_scale_to += scroll_y * (self.cam_scale_to / 7)
        self.cam_scale_to = _clamp(self.cam_scale_to, MIN_ZOOM, MAX_ZOOM)

        if self.cam_scale_to > self.cam_scale:
            self.cam_scale += (self.cam_scale_to - self.cam_scale) / ZOOM_SMOOTHING
        elif self.cam_scale_to < self.cam_scale:
            self.cam_scale -= (self.cam_scale - self.cam_scale_to) / ZOOM_SMOOTHING

        pan = PAN_SPEED / self.cam_scale
        if inputs.left:
            self.cam_x -= pan
        if inputs.right:
            self.cam_x += pan
        if inputs.down:
            self.cam_y -= pan
        if inputs.up:
            self.cam_y += pan

        if inputs.right_mouse:
            if self.mouse_pan is None:
                self.mouse_pan = inputs.cursor
            else:
                x, y = inputs.cursor
                dx = (self.mouse_pan[0] - x) * (pan / 100)
                dy = (self.mouse_pan[1] - y) * (pan / 100)
                self.cam_x -= dx
                self.cam_y += dy
        else:
            self.mouse_pan = None

        level = self.current_level
        world_width = float(level.width * level.tile_size // 2)
        world_height = float(level.height * level.tile_size // 2)
        self.cam_x = _clamp(self.cam_x, -world_width, world_width)
        self.cam_y = _clamp(self.cam_y, -world_height, 0.0)

        if inputs.regenerate:
            self.current_level = _load_level(self.coordinator, self.map_path)

    def draw(self, screen: pygame.Surface) -> int:
        """Draw the level and the info overlay; return the number of tiles drawn."""
        screen.fill((0, 0, 0))
        start = time.perf_counter()
        self.draw_calls = self.coordinator.render_level(screen, self)
        log.debug(
            "render level: %.3f ms, draw calls: %d",
            (time.perf_counter() - start) * 1000,
            self.draw_calls,
        )
        self._draw_info(screen)
        return self.draw_calls

    def _draw_info(self, screen: pygame.Surface) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        if self._font is None:
            self._font = pygame.font.Font(None, 18)
        lines = [
            "KEYS WASD EC R",
            f"FPS  {self.fps:0.0f}",
            f"TPS  {self.tps:0.0f}",
            f"SCA  {self.cam_scale:0.2f}",
            f"POS  {self.cam_x:0.0f},{self.cam_y:0.0f}",
        ]
        y = 0
        for line in lines:
            text = self._font.render(line, True, (255, 255, 255))
            screen.blit(text, (0, y))
            y += self._font.get_linesize()

    def layout(self, outside_width: int, outside_height: int) -> tuple[int, int]:
        """Adopt the window size and return it as the screen size."""
        self.width, self.height = outside_width, outside_height
        return self.width, self.height

    def cartesian_to_iso(self, x: float, y: float) -> tuple[float, float]:
        """Transform tile coordinates into isometric screen coordinates."""
        tile_size = self.current_level.tile_size
        ix = (x - y) * float(tile_size // 2)
        iy = (x + y) * float(tile_size // 4)
        return ix, iy


def _load_level(coordinator: Coordinator, map_path: PathLike) -> Level:
    try:
        return coordinator.new_level1(map_path)
    except (OSError, ValueError) as err:
        raise RuntimeError(f"failed to create new level: {err}") from err


def new_game(coordinator: Coordinator, map_path: PathLike = LEVEL1_MAP_PATH) -> Game:
    """Build the first level and return a game showing it."""
    level = _load_level(coordinator, map_path)
    return Game(coordinator, level, map_path)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="arenafighter", description=WINDOW_TITLE)
    parser.add_argument("--map", default=LEVEL1_MAP_PATH, help="CSV tile map of the level")
    parser.add_argument(
        "--sprites", default=DEFAULT_SPRITE_SHEET, help="sprite sheet image"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and run until it is closed."""
    args = _parse_args(argv)
    try:
        sheet = load_sprite_sheet(args.sprites, TILE_SIZE)
        game = new_game(Coordinator(sheet), args.map)
    except (OSError, ValueError, RuntimeError, pygame.error) as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    pygame.init()
    try:
        pygame.display.set_caption(WINDOW_TITLE)
        screen = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
        game.layout(*screen.get_size())
        clock = pygame.time.Clock()
        while True:
            events = pygame.event.get()
            for event in events:
                if event.type == pygame.QUIT:
                    return 0
                if event.type == pygame.VIDEORESIZE:
                    game.layout(event.w, event.h)
            try:
                game.update(InputState.from_pygame(events))
            except RuntimeError as err:
                print(f"error: {err}", file=sys.stderr)
                return 1
            screen = pygame.display.get_surface()
            game.layout(*screen.get_size())
            game.draw(screen)
            pygame.display.flip()
            clock.tick(TICKS_PER_SECOND)
            game.fps = game.tps = clock.get_fps()
    finally:
        pygame.quit()