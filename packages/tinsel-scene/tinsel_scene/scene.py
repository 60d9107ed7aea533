"""Scene - owns the global mode and drives every subsystem once per frame."""
from __future__ import annotations

import logging

from tinsel import Engine, EntityId, World
from tinsel.types import DisposedError, Mode, ParameterError
from tinsel_burst import BurstScheduler, make_burst_system
from tinsel_camera import (
    AutoOrbit,
    CameraRangeController,
    CameraRig,
    make_camera_system,
    make_orbit_system,
)
from tinsel_transition import Transition, make_transition_system

from tinsel_scene.components import Character, Subsystem
from tinsel_scene.config import CameraConfig, SceneConfig
from tinsel_scene.output import FrameBuffer, FrameOutput
from tinsel_scene.populate import (
    build_character,
    build_foliage,
    build_marker,
    build_ornaments,
    build_spiral,
)
from tinsel_scene.systems import (
    make_camera_output_system,
    make_character_system,
    make_layer_system,
    make_marker_system,
    make_ornament_system,
)

logger = logging.getLogger(__name__)

CAMERA = "camera"


def _dispose_scheduler(world: World, eid: EntityId, scheduler: BurstScheduler) -> None:
    scheduler.dispose()


class Scene:
    """A morphing scene driven by the host's render loop.

    The host owns time: call :meth:`update` once per rendered frame with its
    elapsed time and delta. The scene owns the global mode; every subsystem
    reads the same mode within a frame.

    Systems run in a fixed order: transitions, bursts, camera orbit and
    distance, then the render writers (layers, ornaments, marker, character).
    """

    def __init__(
        self,
        config: SceneConfig | None = None,
        seed: int | None = None,
        mode: Mode | None = None,
    ) -> None:
        self._config = config if config is not None else SceneConfig()
        self._engine = Engine(seed=seed, max_dt=self._config.max_dt)
        self._mode = mode if mode is not None else self._config.initial_mode
        self._buffer = FrameBuffer()
        self._subsystems: dict[str, EntityId] = {}
        self._last: FrameOutput | None = None

        world = self._engine.world
        world.on_detach(BurstScheduler, _dispose_scheduler)

        self._spawn_camera(self._config.camera)
        self._populate(self._config)

        origin = self._config.origin
        for system in (
            make_transition_system(self._on_settle),
            make_burst_system(),
            make_orbit_system(),
            make_camera_system(),
            make_camera_output_system(self._buffer),
            make_layer_system(self._buffer),
            make_ornament_system(self._buffer),
            make_marker_system(self._buffer),
            make_character_system(self._buffer, origin, self._config.max_dt),
        ):
            self._engine.add_system(system)

        logger.info(
            "scene ready: seed=%d mode=%s subsystems=%s",
            self._engine.seed,
            self._mode.value,
            ", ".join(self._subsystems),
        )

    # --- Queries ---

    @property
    def config(self) -> SceneConfig:
        return self._config

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def seed(self) -> int:
        return self._engine.seed

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def disposed(self) -> bool:
        return self._engine.disposed

    @property
    def camera(self) -> CameraRig:
        return self._engine.world.get(self._subsystems[CAMERA], CameraRig)

    @property
    def subsystems(self) -> tuple[str, ...]:
        return tuple(self._subsystems)

    @property
    def last_frame(self) -> FrameOutput | None:
        return self._last

    @property
    def highlighted(self) -> bool:
        return self._character().active

    def entity(self, name: str) -> EntityId:
        return self._subsystems[name]

    def progress(self, name: str) -> float:
        return self._engine.world.get(self._subsystems[name], Transition).progress

    def burst(self, name: str) -> BurstScheduler:
        return self._engine.world.get(self._subsystems[name], BurstScheduler)

    # --- Commands ---

    def set_mode(self, mode: Mode) -> None:
        if mode is not self._mode:
            logger.info("mode %s -> %s", self._mode.value, mode.value)
            self._mode = mode

    def toggle(self) -> Mode:
        self.set_mode(self._mode.toggled())
        return self._mode

    def toggle_highlight(self) -> bool:
        """Flip whether the hidden character is pulled in front of the camera."""
        character = self._character()
        character.active = not character.active
        logger.debug("character highlight %s", "on" if character.active else "off")
        return character.active

    def update(self, elapsed: float, dt: float, mode: Mode | None = None) -> FrameOutput:
        """Advance every subsystem by one host frame and return its render data.

        A ``mode`` passed here becomes the scene's mode before the frame runs.
        """
        if self._engine.disposed:
            raise DisposedError("Cannot update a disposed scene")
        if mode is not None:
            self.set_mode(mode)
        self._buffer.reset()
        ctx = self._engine.step(dt, self._mode, elapsed)
        world = self._engine.world
        progress = {
            tag.name: transition.progress
            for _, (tag, transition) in world.query(Subsystem, Transition)
        }
        self._last = self._buffer.freeze(ctx, self._config.origin, progress)
        return self._last

    def remove(self, name: str) -> None:
        """Despawn one subsystem. Its burst scheduler is disposed with it."""
        if name == CAMERA:
            raise ParameterError("the camera cannot be removed")
        eid = self._subsystems.pop(name)
        self._engine.world.despawn(eid)
        logger.debug("removed subsystem %s", name)

    def reconfigure(self, config: SceneConfig) -> bool:
        """Rebuild the population for ``config``. Returns False if nothing changed.

        The camera keeps its current position; only its behaviour is
        replaced. Progress restarts from 0 for every rebuilt subsystem.
        """
        if self._engine.disposed:
            raise DisposedError("Cannot reconfigure a disposed scene")
        if config == self._config:
            return False
        if config.max_dt != self._config.max_dt or config.origin != self._config.origin:
            raise ParameterError("max_dt and origin are fixed for the life of a scene")

        world = self._engine.world
        for name in [n for n in self._subsystems if n != CAMERA]:
            world.despawn(self._subsystems.pop(name))
        if config.camera != self._config.camera:
            self._attach_camera_behaviour(self._subsystems[CAMERA], config.camera)
        self._config = config
        self._populate(config)
        logger.info("scene reconfigured: subsystems=%s", ", ".join(self._subsystems))
        return True

    def dispose(self) -> None:
        """Release every subsystem. Later updates raise :class:`DisposedError`."""
        if self._engine.disposed:
            return
        self._engine.dispose()
        self._subsystems.clear()
        logger.info("scene disposed")

    # --- Internals ---

    def _character(self) -> Character:
        if "character" not in self._subsystems:
            raise KeyError("scene has no character")
        return self._engine.world.get(self._subsystems["character"], Character)

    def _on_settle(self, world, ctx, eid, transition: Transition) -> None:
        tag = world.get(eid, Subsystem)
        logger.debug("%s settled at %.0f on frame %d", tag.name, transition.progress, ctx.frame_number)

    def _spawn(self, name: str, *components) -> EntityId:
        world = self._engine.world
        eid = world.spawn()
        world.attach(eid, Subsystem(name))
        for component in components:
            world.attach(eid, component)
        self._subsystems[name] = eid
        logger.debug("spawned %s as entity %d", name, eid)
        return eid

    def _spawn_camera(self, config: CameraConfig) -> None:
        eid = self._spawn(CAMERA, CameraRig(position=config.position, focus=config.focus))
        self._attach_camera_behaviour(eid, config)

    def _attach_camera_behaviour(self, eid: EntityId, config: CameraConfig) -> None:
        world = self._engine.world
        world.attach(
            eid,
            CameraRangeController(
                formation_distance=config.formation_distance,
                scattered_distance=config.scattered_distance,
                speed=config.speed,
                threshold=config.threshold,
                min_distance=config.min_distance,
                max_dt=self._config.max_dt,
            ),
        )
        world.attach(eid, AutoOrbit(speed=config.orbit_speed, burst_speed=config.orbit_burst_speed))
        world.attach(eid, BurstScheduler(duration=config.burst_duration))

    def _populate(self, config: SceneConfig) -> None:
        rng = self._engine.random
        if config.foliage is not None:
            foliage = config.foliage
            self._spawn(
                "foliage",
                build_foliage(foliage, rng),
                Transition(
                    rate_on=foliage.rate_on, rate_off=foliage.rate_off, max_dt=config.max_dt
                ),
            )
        if config.spiral is not None:
            spiral = config.spiral
            self._spawn(
                "spiral",
                build_spiral(spiral, rng),
                Transition(
                    rate_on=spiral.rate_on, rate_off=spiral.rate_off, max_dt=config.max_dt
                ),
            )
        for ornament in config.ornaments:
            self._spawn(
                ornament.name,
                build_ornaments(ornament, rng),
                Transition(
                    rate_on=ornament.rate_on, rate_off=ornament.rate_off, max_dt=config.max_dt
                ),
                BurstScheduler(duration=ornament.burst_duration, boost=ornament.burst_boost),
            )
        if config.marker is not None:
            marker = config.marker
            self._spawn(
                "marker",
                build_marker(marker, rng),
                Transition(
                    rate_on=marker.rate_on, rate_off=marker.rate_off, max_dt=config.max_dt
                ),
                BurstScheduler(duration=marker.burst_duration, boost=marker.burst_boost),
            )
        if config.character is not None:
            character = config.character
            self._spawn(
                "character",
                build_character(character, rng),
                Transition(
                    rate_on=character.rate_on, rate_off=character.rate_off, max_dt=config.max_dt
                ),
            )
