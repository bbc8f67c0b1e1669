"""Background animation: random line segments bent by a slow wave and pushed away from the pointer.

The engine is pure geometry plus a drawing surface. Each frame advances the
shared time accumulator, clears the surface and strokes every line as a
polyline whose points are displaced by

  * a sine wave of position and time (vertical), and
  * a repulsion vector pointing away from the pointer, whose magnitude falls
    linearly from MOUSE_STRENGTH at the pointer to zero at MOUSE_RADIUS.

BackgroundAnimation owns the frame loop and schedules itself on a Scheduler
until stop() is called.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from .product_config import (
    LINE_OPACITY,
    LINE_RGB,
    LINE_WIDTH,
    MAX_LENGTH,
    MIN_LENGTH,
    MOUSE_RADIUS,
    MOUSE_SENTINEL,
    MOUSE_STRENGTH,
    NUM_LINES,
    PORTFOLIO_ANIMATION_SEED,
    PORTFOLIO_FRAME_INTERVAL_MS,
    SEGMENTS_PER_LINE,
    SPAWN_MARGIN,
    WAVE_AMPLITUDE,
    WAVE_AMPLITUDE_Y,
    WAVE_FREQ,
    WAVE_FREQ_Y,
    WAVE_SPEED,
    WAVE_TIME_FACTOR_Y,
)
from .scheduler import Handle, Scheduler


Point = Tuple[float, float]
RGBA = Tuple[int, int, int, int]

LINE_COLOR: RGBA = (LINE_RGB[0], LINE_RGB[1], LINE_RGB[2], round(LINE_OPACITY * 255))


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Offset:
    x: float
    y: float

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)


def wave_offset(x: float, y: float, time: float) -> float:
    """Vertical displacement of the slow wave at (x, y)."""
    return (
        math.sin(x * WAVE_FREQ + time) * WAVE_AMPLITUDE
        + math.sin(y * WAVE_FREQ_Y + time * WAVE_TIME_FACTOR_Y) * WAVE_AMPLITUDE_Y
    )


def pointer_repulsion(x: float, y: float, pointer: Point) -> Offset:
    """Push away from the pointer; zero at or beyond MOUSE_RADIUS."""
    dx = x - pointer[0]
    dy = y - pointer[1]
    dist = math.hypot(dx, dy)
    if dist >= MOUSE_RADIUS:
        return Offset(0.0, 0.0)
    influence = (1 - dist / MOUSE_RADIUS) * MOUSE_STRENGTH
    angle = math.atan2(dy, dx)
    return Offset(math.cos(angle) * influence, math.sin(angle) * influence)


def point_offset(x: float, y: float, time: float, pointer: Point) -> Offset:
    push = pointer_repulsion(x, y, pointer)
    return Offset(push.x, wave_offset(x, y, time) + push.y)


def generate_lines(width: float, height: float, rng: random.Random, count: int = NUM_LINES) -> List[Line]:
    """Random segments; starts may lie up to SPAWN_MARGIN outside the canvas."""
    lines = []
    for _ in range(count):
        x1 = rng.uniform(-SPAWN_MARGIN, width + SPAWN_MARGIN)
        y1 = rng.uniform(-SPAWN_MARGIN, height + SPAWN_MARGIN)
        angle = rng.random() * math.pi * 2
        length = rng.uniform(MIN_LENGTH, MAX_LENGTH)
        lines.append(Line(x1, y1, x1 + math.cos(angle) * length, y1 + math.sin(angle) * length))
    return lines


def line_points(line: Line, time: float, pointer: Point, segments: int = SEGMENTS_PER_LINE) -> List[Point]:
    points = []
    for s in range(segments + 1):
        t = s / segments
        x = line.x1 + (line.x2 - line.x1) * t
        y = line.y1 + (line.y2 - line.y1) * t
        o = point_offset(x, y, time, pointer)
        points.append((x + o.x, y + o.y))
    return points


class Surface:
    """Where frames are drawn."""

    def resize(self, width: int, height: int) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def stroke_polyline(self, points: Sequence[Point], color: RGBA, width: int) -> None:
        raise NotImplementedError


class PillowSurface(Surface):
    def __init__(self, width: int, height: int, background: RGBA = (0, 0, 0, 0)):
        self.background = background
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        self.image = Image.new("RGBA", (max(int(width), 1), max(int(height), 1)), self.background)
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    def clear(self) -> None:
        # paste, not draw: the blending draw would keep old pixels under a transparent fill
        self.image.paste(self.background, (0, 0) + self.image.size)

    def stroke_polyline(self, points: Sequence[Point], color: RGBA, width: int) -> None:
        if len(points) < 2:
            return
        self._draw.line(list(points), fill=color, width=width)

    def save(self, path) -> None:
        self.image.save(path)


def _default_rng() -> random.Random:
    if PORTFOLIO_ANIMATION_SEED:
        return random.Random(PORTFOLIO_ANIMATION_SEED)
    return random.Random()


class BackgroundAnimation:
    def __init__(
        self,
        surface: Surface,
        scheduler: Scheduler,
        width: int,
        height: int,
        *,
        rng: Optional[random.Random] = None,
        frame_ms: int = PORTFOLIO_FRAME_INTERVAL_MS,
        on_frame: Optional[Callable[[int], None]] = None,
    ):
        self.surface = surface
        self.scheduler = scheduler
        self.rng = rng or _default_rng()
        self.frame_ms = frame_ms
        self.on_frame = on_frame
        self.time = 0.0
        self.frames = 0
        self.pointer: Point = (MOUSE_SENTINEL, MOUSE_SENTINEL)
        self.width = width
        self.height = height
        self.lines: List[Line] = generate_lines(width, height, self.rng)
        self._handle: Optional[Handle] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        logging.info("Background animation started (%sx%s, %s lines)", self.width, self.height, len(self.lines))
        self._loop()

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logging.info("Background animation stopped after %s frames", self.frames)

    def resize(self, width: int, height: int) -> None:
        """New viewport: the whole line set is regenerated, nothing is carried over."""
        self.width = width
        self.height = height
        self.surface.resize(width, height)
        self.lines = generate_lines(width, height, self.rng)

    def pointer_move(self, x: float, y: float) -> None:
        self.pointer = (x, y)

    def pointer_leave(self) -> None:
        self.pointer = (MOUSE_SENTINEL, MOUSE_SENTINEL)

    def draw_frame(self) -> None:
        self.time += WAVE_SPEED
        self.surface.clear()
        for line in self.lines:
            self.surface.stroke_polyline(line_points(line, self.time, self.pointer), LINE_COLOR, LINE_WIDTH)
        self.frames += 1
        if self.on_frame is not None:
            self.on_frame(self.frames)

    def _loop(self) -> None:
        self._handle = None
        self.draw_frame()
        # on_frame may have stopped the loop
        if self._running:
            self._handle = self.scheduler.call_later(self.frame_ms, self._loop)
