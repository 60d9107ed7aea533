"""Headless morph -- assemble, scatter, and watch the burst wear off.

Demonstrates:
- Building a small Scene with a fixed seed
- Driving it with host-supplied elapsed time and frame delta
- Switching the global mode and reading per-subsystem progress
- The burst multiplier and the camera's fly-in after scattering

Run: python packages/tinsel-scene/examples/morph.py
"""

from tinsel import Mode
from tinsel_scene import FoliageConfig, Scene, SceneConfig

DT = 1 / 60


def report(scene: Scene, label: str) -> None:
    frame = scene.last_frame
    print(
        f"  [{frame.elapsed:6.2f}s] {label:<10} foliage={frame.progress['foliage']:.3f}"
        f"  burst x{scene.burst('red_boxes').multiplier:.0f}"
        f"  camera={scene.camera.distance:5.1f}"
    )


def main() -> None:
    scene = Scene(SceneConfig(foliage=FoliageConfig(count=500)), seed=7)
    frame_index = 0

    def advance(seconds: float, label: str) -> None:
        nonlocal frame_index
        for _ in range(int(seconds / DT)):
            frame_index += 1
            scene.update(frame_index * DT, DT)
        report(scene, label)

    print("Assembling from the scattered cloud\n")
    for _ in range(4):
        advance(2.0, "formation")

    print("\nScattering\n")
    scene.set_mode(Mode.SCATTERED)
    for _ in range(8):
        advance(0.5, "scattered")

    scene.dispose()
    print("\nScene disposed")


if __name__ == "__main__":
    main()
