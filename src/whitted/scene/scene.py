"""Scene aggregate: primitives, lights, camera and image settings.

The Scene is the single source of truth for a render. It is passed
explicitly into every intersection and shading routine; no primitive or
light holds a reference back to it.

A scene is edited between renders and read during them. The editing
methods and ``Scene.rendering()`` take the same lock without blocking: while
a render holds the scene, a second render and every edit raise
``RenderInProgressError``, and a render requested in the middle of an edit
is rejected the same way. Edits never interleave with the scan over
``primitives``.

Example:
    >>> from whitted.core.vector import Vector3
    >>> from whitted.materials import Material
    >>> from whitted.scene.scene import Scene
    >>> scene = Scene()
    >>> white = Material(diffuse=1.0, color=Vector3(255, 255, 255))
    >>> floor = scene.add_plane(Vector3(0, -1, 0), Vector3(0, 1, 0), white, id="floor")
    >>> light = scene.add_light(Vector3(0, 5, 0), intensity=1.0, id="top light")
    >>> scene.object_ids()
    ['top light', 'floor']
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from whitted.core.vector import Vector3
from whitted.geometry import PRIMITIVE_TYPES, Plane, Primitive, Sphere
from whitted.materials.material import Material
from whitted.scene.light import Light

logger = logging.getLogger(__name__)

# Self-intersection tolerance used when a scene does not specify one
DEFAULT_EPSILON = 1e-3


class RenderInProgressError(RuntimeError):
    """Raised when a scene is rendered or edited while a render holds it."""


# =============================================================================
# Configuration
# =============================================================================


@dataclass
class Camera:
    """Viewpoint and per-render settings.

    Attributes:
        position: Eye position in world space.
        look_direction: Point the camera looks toward. The forward axis is
            ``normalize(look_direction - position)``.
        up: Approximate up vector used to build the camera basis.
        field_of_view: Horizontal field of view in degrees.
        antialias_samples: Jittered samples per pixel (>= 1).
        max_depth: Recursion depth for tracing (>= 1).
        background: Color returned by rays that hit nothing.
    """

    position: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 0.0))
    look_direction: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 1.0))
    up: Vector3 = field(default_factory=lambda: Vector3(0.0, 1.0, 0.0))
    field_of_view: float = 40.0
    antialias_samples: int = 1
    max_depth: int = 3
    background: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 0.0))

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": list(self.position.to_tuple()),
            "look_direction": list(self.look_direction.to_tuple()),
            "up": list(self.up.to_tuple()),
            "field_of_view": self.field_of_view,
            "antialias_samples": self.antialias_samples,
            "max_depth": self.max_depth,
            "background": list(self.background.to_tuple()),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Camera:
        defaults = cls()
        return cls(
            position=_vector_or(data, "position", defaults.position),
            look_direction=_vector_or(data, "look_direction", defaults.look_direction),
            up=_vector_or(data, "up", defaults.up),
            field_of_view=float(data.get("field_of_view", defaults.field_of_view)),
            antialias_samples=int(data.get("antialias_samples", defaults.antialias_samples)),
            max_depth=int(data.get("max_depth", defaults.max_depth)),
            background=_vector_or(data, "background", defaults.background),
        )


@dataclass
class ImageConfig:
    """Output image settings.

    Attributes:
        width: Base width in pixels.
        height: Base height in pixels.
        scale: Multiplier applied to width and height.
        epsilon: Scene-wide self-intersection tolerance.
    """

    width: int = 320
    height: int = 450
    scale: float = 1.0
    epsilon: float = DEFAULT_EPSILON

    @property
    def pixel_width(self) -> int:
        """Rendered width after scaling."""
        return int(self.width * self.scale)

    @property
    def pixel_height(self) -> int:
        """Rendered height after scaling."""
        return int(self.height * self.scale)

    @property
    def aspect_ratio(self) -> float:
        return self.pixel_width / self.pixel_height

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImageConfig:
        defaults = cls()
        return cls(
            width=int(data.get("width", defaults.width)),
            height=int(data.get("height", defaults.height)),
            scale=float(data.get("scale", defaults.scale)),
            epsilon=float(data.get("epsilon", defaults.epsilon)),
        )


def _vector_or(data: dict[str, Any], key: str, default: Vector3) -> Vector3:
    value = data.get(key)
    return default if value is None else Vector3.from_iterable(value)


# =============================================================================
# Scene
# =============================================================================


class Scene:
    """Collection of primitives and lights with one camera and image config.

    Attributes:
        primitives: Renderable surfaces in insertion order. Read-only during
            a render; use the editing methods to change it.
        lights: Point lights in insertion order.
    """

    def __init__(
        self,
        primitives: list[Primitive] | None = None,
        lights: list[Light] | None = None,
        camera: Camera | None = None,
        image: ImageConfig | None = None,
    ) -> None:
        self.primitives: list[Primitive] = list(primitives) if primitives else []
        self.lights: list[Light] = list(lights) if lights else []
        self._camera = camera if camera is not None else Camera()
        self._image = image if image is not None else ImageConfig()
        self._render_lock = threading.Lock()
        self._rendering = False

    # =========================================================================
    # Render guard
    # =========================================================================

    @property
    def is_rendering(self) -> bool:
        return self._rendering

    @contextmanager
    def rendering(self) -> Iterator[Scene]:
        """Hold the scene for the duration of a render.

        Raises:
            RenderInProgressError: If another render or an edit holds the scene.
        """
        if not self._render_lock.acquire(blocking=False):
            logger.warning("Rejected render request: the scene is being rendered or edited")
            raise RenderInProgressError("The scene is being rendered or edited")
        self._rendering = True
        try:
            yield self
        finally:
            self._rendering = False
            self._render_lock.release()

    @contextmanager
    def _editing(self) -> Iterator[None]:
        """Hold the scene for one edit so a render cannot start mid-edit.

        Raises:
            RenderInProgressError: If a render holds the scene.
        """
        if not self._render_lock.acquire(blocking=False):
            raise RenderInProgressError("Cannot edit the scene while a render is in progress")
        try:
            yield
        finally:
            self._render_lock.release()

    # =========================================================================
    # Settings
    # =========================================================================

    @property
    def camera(self) -> Camera:
        return self._camera

    @camera.setter
    def camera(self, camera: Camera) -> None:
        with self._editing():
            self._camera = camera

    @property
    def image(self) -> ImageConfig:
        return self._image

    @image.setter
    def image(self, image: ImageConfig) -> None:
        with self._editing():
            self._image = image

    @property
    def epsilon(self) -> float:
        """Self-intersection tolerance shared by every intersection query."""
        return self._image.epsilon

    # =========================================================================
    # Editing
    # =========================================================================

    def add_primitive(self, primitive: Primitive) -> Primitive:
        """Append a primitive; it is tested after all existing ones.

        Raises:
            RenderInProgressError: If a render holds the scene.
        """
        with self._editing():
            self.primitives.append(primitive)
        logger.debug("Added %s %r", primitive.kind, primitive.id)
        return primitive

    def add_sphere(
        self,
        center: Vector3,
        radius: float,
        material: Material | None = None,
        id: str | None = None,
    ) -> Sphere:
        """Create and add a sphere."""
        sphere = Sphere(center, radius, material if material is not None else Material(), id)
        self.add_primitive(sphere)
        return sphere

    def add_plane(
        self,
        point: Vector3,
        normal: Vector3,
        material: Material | None = None,
        id: str | None = None,
    ) -> Plane:
        """Create and add a plane."""
        plane = Plane(point, normal, material if material is not None else Material(), id)
        self.add_primitive(plane)
        return plane

    def add_light(
        self,
        position: Vector3,
        intensity: float = 1.0,
        id: str | None = None,
    ) -> Light:
        """Create and add a point light.

        Raises:
            RenderInProgressError: If a render holds the scene.
        """
        light = Light(position, intensity, id)
        with self._editing():
            self.lights.append(light)
        logger.debug("Added light %r", id)
        return light

    def get(self, entity_id: str) -> Light | Primitive:
        """Look up a light or primitive by id (lights are searched first).

        Raises:
            ValueError: If no entity has that id.
        """
        for entity in self._entities():
            if entity.id == entity_id:
                return entity
        raise ValueError(f"No light or primitive with id {entity_id!r}")

    def remove(self, entity_id: str) -> Light | Primitive:
        """Remove the first light or primitive with the given id.

        Returns:
            The removed entity.

        Raises:
            RenderInProgressError: If a render holds the scene.
            ValueError: If no entity has that id.
        """
        with self._editing():
            entity = self.get(entity_id)
            if isinstance(entity, Light):
                self.lights.remove(entity)
            else:
                self.primitives.remove(entity)
        logger.debug("Removed %r", entity_id)
        return entity

    def clear(self) -> None:
        """Remove every primitive and light; camera and image are kept."""
        with self._editing():
            self.primitives.clear()
            self.lights.clear()

    def object_ids(self) -> list[str | None]:
        """Ids of all lights followed by all primitives."""
        return [entity.id for entity in self._entities()]

    def _entities(self) -> list[Light | Primitive]:
        return [*self.lights, *self.primitives]

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_primitive_count(self) -> int:
        return len(self.primitives)

    def get_light_count(self) -> int:
        return len(self.lights)

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        return {
            "camera": self._camera.to_dict(),
            "image": asdict(self._image),
            "lights": [light.to_dict() for light in self.lights],
            "primitives": [primitive.to_dict() for primitive in self.primitives],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scene:
        """Build a scene from a dictionary.

        Args:
            data: Dictionary with optional 'camera', 'image', 'lights' and
                'primitives' keys. Each primitive needs a 'type' of
                'sphere' or 'plane'.

        Raises:
            ValueError: If a primitive has an unknown type.
        """
        scene = cls(
            camera=Camera.from_dict(data.get("camera", {})),
            image=ImageConfig.from_dict(data.get("image", {})),
        )
        for light_config in data.get("lights", []):
            scene.lights.append(Light.from_dict(light_config))
        for primitive_config in data.get("primitives", []):
            scene.primitives.append(_primitive_from_dict(primitive_config))
        return scene


def _primitive_from_dict(data: dict[str, Any]) -> Primitive:
    kind = str(data.get("type", "")).lower()
    if kind not in PRIMITIVE_TYPES:
        raise ValueError(f"Unknown primitive type: {kind!r}")

    material = Material.from_dict(data.get("material", {}))
    if kind == Sphere.kind:
        return Sphere(
            center=Vector3.from_iterable(data.get("center", (0.0, 0.0, 0.0))),
            radius=float(data.get("radius", 0.0)),
            material=material,
            id=data.get("id"),
        )
    return Plane(
        point=Vector3.from_iterable(data.get("point", (0.0, 0.0, 0.0))),
        normal_vector=Vector3.from_iterable(data.get("normal", (0.0, 0.0, 0.0))),
        material=material,
        id=data.get("id"),
    )


def save_scene(scene: Scene, path: str | Path) -> None:
    """Write a scene to a JSON file."""
    Path(path).write_text(json.dumps(scene.to_dict(), indent=2))


def load_scene(path: str | Path) -> Scene:
    """Read a scene from a JSON file written by ``save_scene``."""
    return Scene.from_dict(json.loads(Path(path).read_text()))
