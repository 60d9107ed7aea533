"""
tinsel Tree Viewer
Interactive pygame preview of the morphing scene: a flat perspective projection
of the point layers, ornament groups, marker and hidden character.
"""

import logging
import math
import sys

import numpy as np
import pygame

from tinsel import Mode
from tinsel_scene import Scene
from tinsel_shapes import vec

# --- Configuration ---
WIDTH, HEIGHT = 1024, 768
FPS = 60
TITLE = "tinsel Tree Viewer"
FOCAL = 700.0
NEAR = 0.1
ORBIT_STEP = 0.03
SEED = 2024

# Colors
BG_COLOR = (5, 10, 20)
HUD_COLOR = (200, 200, 220)
FOLIAGE_COLOR = np.array([34, 139, 34])
SPIRAL_COLOR = (255, 236, 170)
MARKER_COLOR = (255, 215, 0)
CHARACTER_COLOR = (160, 82, 45)


def hex_color(value: str) -> tuple[int, int, int]:
    value = value.lstrip("#")
    return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))


def rotate_points_y(points: np.ndarray, angle: float) -> np.ndarray:
    if angle == 0.0:
        return points
    c, s = math.cos(angle), math.sin(angle)
    out = points.copy()
    out[:, 0] = points[:, 0] * c + points[:, 2] * s
    out[:, 2] = -points[:, 0] * s + points[:, 2] * c
    return out


def make_projector(camera, focus):
    """Return a function mapping (N, 3) world points to screen xy, depth and a visibility mask."""
    forward = vec.normalize(vec.sub(focus, camera))
    right = vec.normalize((-forward[2], 0.0, forward[0]))
    up = (
        right[1] * forward[2] - right[2] * forward[1],
        right[2] * forward[0] - right[0] * forward[2],
        right[0] * forward[1] - right[1] * forward[0],
    )
    basis = np.array([right, up, forward])
    eye = np.array(camera)

    def project(points: np.ndarray):
        local = (points - eye) @ basis.T
        depth = local[:, 2]
        visible = depth > NEAR
        safe = np.where(visible, depth, 1.0)
        sx = WIDTH / 2 + local[:, 0] / safe * FOCAL
        sy = HEIGHT / 2 - local[:, 1] / safe * FOCAL
        return np.stack([sx, sy], axis=1), depth, visible

    return project


def draw_frame(screen, frame):
    origin = np.array(frame.origin)
    project = make_projector(frame.camera, frame.focus)

    foliage = frame.layers.get("foliage")
    if foliage is not None:
        xy, _, visible = project(foliage.positions + origin)
        shade = np.clip(foliage.alphas, 0.0, 1.0)[:, None] * FOLIAGE_COLOR
        for (x, y), color, ok in zip(xy.astype(int), shade.astype(int), visible):
            if ok:
                screen.set_at((int(x), int(y)), tuple(int(c) for c in color))

    spiral = frame.layers.get("spiral")
    if spiral is not None:
        points = rotate_points_y(spiral.positions, spiral.rotation_y) + origin
        xy, depth, visible = project(points)
        for (x, y), d, ok in zip(xy, depth, visible):
            if ok:
                pygame.draw.circle(screen, SPIRAL_COLOR, (int(x), int(y)), max(1, int(40 / d)))

    for group in frame.groups.values():
        color = hex_color(group.color)
        xy, depth, visible = project(group.positions + origin)
        for (x, y), d, s, ok in zip(xy, depth, group.scales, visible):
            if not ok:
                continue
            size = max(1, int(s * FOCAL / d))
            if group.kind == "box":
                pygame.draw.rect(screen, color, pygame.Rect(int(x - size), int(y - size), size * 2, size * 2))
            else:
                pygame.draw.circle(screen, color, (int(x), int(y)), size)

    for transform, color in ((frame.marker, MARKER_COLOR), (frame.character, CHARACTER_COLOR)):
        if transform is None:
            continue
        xy, depth, visible = project(np.array([transform.position]) + origin)
        if visible[0]:
            size = max(2, int(transform.scale * FOCAL / depth[0]))
            pygame.draw.circle(screen, color, (int(xy[0, 0]), int(xy[0, 1])), size)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)

    scene = Scene(seed=SEED)

    paused = False
    running = True
    elapsed = 0.0

    while running:
        dt = pg_clock.tick(FPS) / 1000.0

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    scene.toggle()
                elif event.key == pygame.K_h:
                    scene.toggle_highlight()
                elif event.key == pygame.K_p:
                    paused = not paused

        # user orbit: only the direction changes, the distance is the scene's
        keys = pygame.key.get_pressed()
        turn = (keys[pygame.K_LEFT] - keys[pygame.K_RIGHT]) * ORBIT_STEP
        if turn:
            rig = scene.camera
            rig.position = vec.add(rig.focus, vec.rotate_y(rig.offset, turn))

        # --- Update ---
        if not paused:
            elapsed += dt
            frame = scene.update(elapsed, dt)
        else:
            frame = scene.last_frame

        # --- Draw ---
        screen.fill(BG_COLOR)
        if frame is not None:
            draw_frame(screen, frame)

        # --- HUD ---
        fps_val = pg_clock.get_fps()
        pause_str = "  [PAUSED]" if paused else ""
        mode_str = "FORMATION" if scene.mode is Mode.FORMATION else "SCATTERED"
        progress = frame.progress.get("foliage", 0.0) if frame is not None else 0.0
        hud_lines = [
            f"Mode: {mode_str}   Progress: {progress:.2f}   Camera: {scene.camera.distance:.1f}   FPS: {fps_val:.0f}{pause_str}",
            "Space=Toggle  H=Highlight  Left/Right=Orbit  P=Pause  Esc=Quit",
        ]
        for i, line in enumerate(hud_lines):
            surf = font.render(line, True, HUD_COLOR)
            screen.blit(surf, (10, 8 + i * 20))

        pygame.display.flip()

    scene.dispose()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
