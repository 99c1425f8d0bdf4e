"""Frame renderer: pixel loop, antialiasing, progress and parallel rows.

The Renderer wraps the recursive integrator with everything a full frame
needs:

- one jittered primary ray per antialiasing sample, averaged per pixel
- row-major output into a NumPy buffer of shape (height, width, 3)
- scanline progress as an integer percentage, reported only on change
- optional scanline parallelism on a thread pool
- a render guard on the scene so renders never interleave with edits
- cooperative cancellation checked between scanlines

Every scanline draws its random numbers from its own generator spawned from
one SeedSequence. A seeded render is therefore identical whatever the
number of workers and whatever order rows finish in.

Example:
    >>> from whitted.core.renderer import Renderer
    >>> from whitted.scene.default import create_default_scene
    >>>
    >>> scene = create_default_scene()
    >>> renderer = Renderer(scene, seed=7)
    >>> image = renderer.render(callback=lambda pct: print(f"{pct}%"))
    >>> image.shape
    (450, 320, 3)
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Generator, Iterable
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import numpy.typing as npt

from whitted.camera.pinhole import CameraFrame, setup_camera
from whitted.core.integrator import clamp_depth, trace_ray
from whitted.core.vector import Vector3
from whitted.scene.scene import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives the completed percentage (0-100)
ProgressCallback = Callable[[int], None]


class RenderCancelledError(RuntimeError):
    """Raised when a render is stopped through ``Renderer.cancel()``."""


# =============================================================================
# Pixel Sampling
# =============================================================================


def render_pixel(
    scene: Scene,
    frame: CameraFrame,
    x: int,
    y: int,
    sample_count: int,
    depth: int,
    rng: np.random.Generator,
) -> Vector3:
    """Render one pixel as the mean of its jittered samples.

    Args:
        scene: The scene to trace.
        frame: Camera frame for the current image size.
        x: Pixel column.
        y: Pixel row.
        sample_count: Number of antialiasing samples.
        depth: Recursion depth passed to ``trace_ray``.
        rng: Random source for jitter and diffuse bounces.

    Returns:
        The averaged RGB color.
    """
    total = Vector3()
    for inc_x, inc_y in frame.sample_offsets(x, y, sample_count, rng):
        total = total + trace_ray(scene, frame.make_ray(inc_x, inc_y), depth, rng)
    return total / sample_count


def render_row(
    scene: Scene,
    frame: CameraFrame,
    y: int,
    sample_count: int,
    depth: int,
    rng: np.random.Generator,
) -> npt.NDArray[np.float64]:
    """Render one scanline and return it as a (width, 3) array."""
    row = np.empty((frame.width, 3), dtype=np.float64)
    for x in range(frame.width):
        row[x] = render_pixel(scene, frame, x, y, sample_count, depth, rng).to_tuple()
    return row


def progress_percent(row: int, height: int) -> int:
    """Percentage reported once scanline ``row`` is complete."""
    if height <= 1:
        return 100
    return (100 * row) // (height - 1)


# =============================================================================
# Renderer
# =============================================================================


class Renderer:
    """Renders full frames of a scene.

    Attributes:
        scene: The scene to render. Held read-only while a render runs.
        workers: Number of threads rendering scanlines (1 renders inline).
        seed: Seed for the per-scanline generators; None draws fresh entropy
            for every render.
    """

    def __init__(self, scene: Scene, *, workers: int = 1, seed: int | None = None) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.scene = scene
        self.workers = workers
        self.seed = seed
        self._cancel_event = threading.Event()
        self._image: npt.NDArray[np.float64] | None = None

    @property
    def width(self) -> int:
        return self.scene.image.pixel_width

    @property
    def height(self) -> int:
        return self.scene.image.pixel_height

    def cancel(self) -> None:
        """Ask the running render to stop before its next scanline."""
        self._cancel_event.set()

    def get_image(self) -> npt.NDArray[np.float64] | None:
        """The last completed (or partially rendered, if cancelled) buffer."""
        return self._image

    def render(
        self,
        max_depth: int | None = None,
        callback: ProgressCallback | None = None,
    ) -> npt.NDArray[np.float64]:
        """Render the whole frame, blocking until every pixel is done.

        Args:
            max_depth: Recursion depth; defaults to the camera's max_depth.
            callback: Optional function called with the completed percentage
                each time it changes.

        Returns:
            Array of shape (height, width, 3), float64, unclamped RGB.

        Raises:
            ValueError: If image size, sample count or depth is invalid.
            RenderInProgressError: If the scene is already being rendered.
            RenderCancelledError: If ``cancel()`` was called mid-render.
        """
        for percent in self.render_progressive(max_depth):
            if callback is not None:
                callback(percent)
        if self._image is None:
            raise RuntimeError("Render finished without an image buffer")
        return self._image

    def render_progressive(self, max_depth: int | None = None) -> Generator[int, None, None]:
        """Render the frame, yielding the completed percentage on each change.

        The scene is held for as long as the generator runs; closing the
        generator early releases it.

        Args:
            max_depth: Recursion depth; defaults to the camera's max_depth.

        Yields:
            Completed percentage (0-100), each value once, in increasing order.

        Example:
            >>> for percent in renderer.render_progressive():
            ...     print(f"Progress: {percent}%")
        """
        camera = self.scene.camera
        depth = camera.max_depth if max_depth is None else max_depth
        samples = camera.antialias_samples
        width, height = self.width, self.height
        _validate_settings(width, height, samples, depth)
        depth = clamp_depth(depth)

        with self.scene.rendering():
            self._cancel_event.clear()
            frame = setup_camera(camera, width, height)
            seeds = np.random.SeedSequence(self.seed).spawn(height)
            image = np.zeros((height, width, 3), dtype=np.float64)
            self._image = image

            logger.info(
                "Rendering %dx%d, %d sample(s) per pixel, depth %d, %d worker(s)",
                width,
                height,
                samples,
                depth,
                self.workers,
            )
            start = time.perf_counter()

            last_percent: int | None = None
            for completed in self._completed_rows(image, frame, seeds, samples, depth):
                percent = progress_percent(completed - 1, height)
                if percent != last_percent:
                    last_percent = percent
                    logger.info("Progress: %d%%", percent)
                    yield percent

            logger.info("Render Time: %.3f s", time.perf_counter() - start)

    def _completed_rows(
        self,
        image: npt.NDArray[np.float64],
        frame: CameraFrame,
        seeds: list[np.random.SeedSequence],
        samples: int,
        depth: int,
    ) -> Iterable[int]:
        """Render every scanline into ``image``, yielding the count of finished rows."""
        if self.workers == 1:
            for y in range(frame.height):
                self._check_cancelled()
                rng = np.random.default_rng(seeds[y])
                image[y] = render_row(self.scene, frame, y, samples, depth, rng)
                yield y + 1
            return

        def work(y: int) -> None:
            if self._cancel_event.is_set():
                return
            rng = np.random.default_rng(seeds[y])
            # Rows are disjoint slices of the buffer
            image[y] = render_row(self.scene, frame, y, samples, depth, rng)

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(work, y) for y in range(frame.height)]
            try:
                # Report rows in submission order so progress stays monotonic
                for y, future in enumerate(futures):
                    self._check_cancelled()
                    future.result()
                    yield y + 1
            finally:
                for future in futures:
                    future.cancel()

    def _check_cancelled(self) -> None:
        if self._cancel_event.is_set():
            logger.warning("Render cancelled")
            raise RenderCancelledError("Render cancelled")

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"workers={self.workers}, seed={self.seed})"
        )


def _validate_settings(width: int, height: int, samples: int, depth: int) -> None:
    if width < 1 or height < 1:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if samples < 1:
        raise ValueError(f"antialias_samples must be at least 1, got {samples}")
    if depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {depth}")


def render(
    scene: Scene,
    max_depth: int | None = None,
    *,
    workers: int = 1,
    seed: int | None = None,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.float64]:
    """Render a scene to a (height, width, 3) RGB array.

    Convenience wrapper around ``Renderer(scene, ...).render(...)``.
    """
    return Renderer(scene, workers=workers, seed=seed).render(max_depth, callback)
