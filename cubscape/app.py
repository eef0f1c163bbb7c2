"""The interactive game: window, input handling and frame drawing."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from cubscape.config import Scene, load_scene  # noqa: E402
from cubscape.image import Image  # noqa: E402
from cubscape.minimap import draw_minimap, new_minimap  # noqa: E402
from cubscape.raycast import Player, render_frame  # noqa: E402
from cubscape.xpm import XpmError, load_xpm  # noqa: E402

WINDOW_WIDTH = 640
WINDOW_HEIGHT = 480
TITLE = "cubscape"
ROTATE_SPEED = 0.04
MOUSE_ROTATE_SPEED = 0.005
MOUSE_EDGE = 100
MINIMAP_OFFSET = (10, 10)
_FACE_NAMES = ("north", "south", "east", "west")
_RGB_MASKS = (0xFF0000, 0x00FF00, 0x0000FF, 0)


class Game:
    """The state of a running scene: map, player, textures and frame images."""

    def __init__(self, scene: Scene, textures: Sequence[Image]) -> None:
        if len(textures) != 4:
            raise ValueError("four wall textures are needed: north, south, east, west")
        self.scene = scene
        self.grid = list(scene.grid)
        self.player = Player.from_start(scene.start)
        self.textures = list(textures)
        self.frame = Image(WINDOW_WIDTH, WINDOW_HEIGHT)
        self.minimap = new_minimap(self.grid)
        self.dirty = True

    def handle_key(self, key: int) -> bool:
        """React to a key press. Returns False when the game should end."""
        if key == pygame.K_ESCAPE:
            return False
        if key in (pygame.K_w, pygame.K_UP):
            self.player.move(self.grid, forward=True)
        elif key in (pygame.K_s, pygame.K_DOWN):
            self.player.move(self.grid, forward=False)
        elif key == pygame.K_d:
            self.player.strafe(self.grid, left=False)
        elif key == pygame.K_a:
            self.player.strafe(self.grid, left=True)
        elif key == pygame.K_RIGHT:
            self.player.rotate(ROTATE_SPEED)
        elif key == pygame.K_LEFT:
            self.player.rotate(-ROTATE_SPEED)
        self.dirty = True
        return True

    def handle_mouse(self, x: int, y: int) -> bool:
        """Turn the view while the pointer rests near the left or right edge.

        Returns whether the view turned.
        """
        near_edge = x < MOUSE_EDGE or x > WINDOW_WIDTH - MOUSE_EDGE
        inside = 1 < x < WINDOW_WIDTH - 1 and 1 < y < WINDOW_HEIGHT - 1
        if not (near_edge and inside):
            return False
        if x < MOUSE_EDGE:
            self.player.rotate(-MOUSE_ROTATE_SPEED)
        else:
            self.player.rotate(MOUSE_ROTATE_SPEED)
        self.dirty = True
        return True

    def redraw(self) -> None:
        """Render the first-person view and the minimap into their images."""
        config = self.scene.config
        render_frame(
            self.frame,
            self.grid,
            self.player,
            self.textures,
            config.floor,
            config.ceiling,
        )
        draw_minimap(self.minimap, self.grid, config.floor, config.ceiling)
        self.dirty = False


def _to_surface(image: Image) -> pygame.Surface:
    surface = pygame.Surface((image.width, image.height), 0, 32, _RGB_MASKS)
    surface.get_buffer().write(image.to_bytes(), 0)
    return surface


def _error(message: str) -> int:
    print(f"Error\n{message}", file=sys.stderr)
    return 1


def _load_textures(scene: Scene) -> list[Image]:
    textures = []
    for face, path in zip(_FACE_NAMES, scene.config.texture_paths):
        try:
            textures.append(load_xpm(path))
        except XpmError as exc:
            raise XpmError(f"cannot open {face} texture xpm") from exc
    return textures


def _run(game: Game) -> None:
    pygame.init()
    try:
        screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(TITLE)
        pygame.key.set_repeat(1, 16)
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = game.handle_key(event.key) and running
            if pygame.mouse.get_focused():
                game.handle_mouse(*pygame.mouse.get_pos())
            if game.dirty:
                game.redraw()
                screen.blit(_to_surface(game.frame), (0, 0))
                screen.blit(_to_surface(game.minimap), MINIMAP_OFFSET)
                pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        return _error("Wrong argument number")
    try:
        scene = load_scene(args[0])
    except ValueError as exc:
        return _error(str(exc))
    try:
        textures = _load_textures(scene)
    except XpmError as exc:
        return _error(str(exc))
    _run(Game(scene, textures))
    return 0


if __name__ == "__main__":
    sys.exit(main())