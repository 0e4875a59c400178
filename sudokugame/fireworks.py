"""Particle fireworks shown when a puzzle is solved."""

from __future__ import annotations

import math
import random
import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from .colors import RGBA

GRAVITY = 0.3
PARTICLE_SIZE = 8
FRAME_INTERVAL = 1 / 60
ANIMATION_SECONDS = 1.0


@dataclass(frozen=True)
class FireworkConfig:
    """One burst: how many particles, their base speed and an optional fixed colour."""

    particle_count: int = 50
    speed_base: float = 6.0
    color: Optional[RGBA] = None


@dataclass
class Particle:
    """A moving spark."""

    x: float
    y: float
    vx: float
    vy: float
    color: RGBA

    def advance(self, gravity: float = GRAVITY) -> None:
        """Apply gravity to the velocity, then move by the velocity."""
        self.vy += gravity
        self.x += self.vx
        self.y += self.vy


def random_color(rng: Optional[random.Random] = None) -> RGBA:
    """A bright colour: red-to-yellow, green-to-yellow or yellow-to-white."""
    rng = rng or random.Random()
    choices = (
        RGBA(255, 50 + rng.randrange(200), 0, 255),
        RGBA(50 + rng.randrange(200), 255, 0, 255),
        RGBA(255, 255, 50 + rng.randrange(200), 255),
    )
    return choices[rng.randrange(3)]


def create_particles(
    x: float, y: float, config: FireworkConfig, rng: Optional[random.Random] = None
) -> List[Particle]:
    """Particles starting at (x, y) flying outwards in random directions."""
    rng = rng or random.Random()
    particles = []
    for _ in range(config.particle_count):
        angle = rng.random() * 2 * math.pi
        speed = config.speed_base + rng.random() * 2
        color = config.color if config.color is not None else random_color(rng)
        particles.append(
            Particle(x, y, math.cos(angle) * speed, -math.sin(angle) * speed, color)
        )
    return particles


def fade_alpha(elapsed: float) -> int:
    """Opacity after ``elapsed`` seconds of a one-second fade."""
    return max(0, min(255, int(255 * (1 - elapsed))))


class FireworkLauncher:
    """Runs one burst at a time in a background thread."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        duration: float = ANIMATION_SECONDS,
        frame_interval: float = FRAME_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        on_frame: Optional[Callable[[List[Particle]], None]] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._duration = duration
        self._frame_interval = frame_interval
        self._clock = clock
        self._sleep = sleep
        self._on_frame = on_frame
        self._lock = threading.Lock()
        self._animating = False
        self._particles: List[Particle] = []
        self.origin: Optional[tuple] = None

    @property
    def animating(self) -> bool:
        with self._lock:
            return self._animating

    @property
    def particles(self) -> List[Particle]:
        with self._lock:
            return list(self._particles)

    def launch(self, x: float, y: float, config: FireworkConfig) -> Optional[threading.Thread]:
        """Start a burst at (x, y); None if a burst is already running."""
        with self._lock:
            if self._animating:
                return None
            self._animating = True
            self.origin = (x, y)
        thread = threading.Thread(target=self._animate, args=(x, y, config), daemon=True)
        thread.start()
        return thread

    def _clear(self) -> None:
        with self._lock:
            self._particles = []

    def _animate(self, x: float, y: float, config: FireworkConfig) -> None:
        try:
            self._clear()
            particles = create_particles(x, y, config, self._rng)
            with self._lock:
                self._particles = particles
            start = self._clock()
            while True:
                self._sleep(self._frame_interval)
                elapsed = self._clock() - start
                if elapsed > self._duration:
                    break
                alpha = fade_alpha(elapsed)
                with self._lock:
                    for particle in self._particles:
                        particle.advance(GRAVITY)
                        particle.color = particle.color.with_alpha(alpha)
                    frame = list(self._particles)
                if self._on_frame is not None:
                    self._on_frame(frame)
            self._clear()
        finally:
            with self._lock:
                self._animating = False


class FireworkGroup:
    """Several launchers fired one after another around a point."""

    def __init__(
        self,
        count: int = 3,
        interval_ms: float = 300,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
        launcher_factory: Callable[[], FireworkLauncher] = FireworkLauncher,
    ) -> None:
        if count < 0:
            raise ValueError("count must not be negative")
        self._interval = interval_ms / 1000
        self._rng = rng or random.Random()
        self._sleep = sleep
        self.launchers = [launcher_factory() for _ in range(count)]

    def start(self, x: float, y: float) -> threading.Thread:
        """Fire every launcher within 50 units of (x, y), spaced by the interval."""

        def fire() -> None:
            config = FireworkConfig(particle_count=50, speed_base=6.0)
            for index, launcher in enumerate(self.launchers):
                if index > 0:
                    self._sleep(self._interval)
                launcher.launch(
                    x + (self._rng.random() * 100 - 50),
                    y + (self._rng.random() * 100 - 50),
                    config,
                )

        thread = threading.Thread(target=fire, daemon=True)
        thread.start()
        return thread