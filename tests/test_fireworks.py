import math
import random
import threading
import time

import pytest

from sudokugame.colors import RGBA
from sudokugame.fireworks import (
    FireworkConfig,
    FireworkGroup,
    FireworkLauncher,
    Particle,
    create_particles,
    fade_alpha,
    random_color,
)


class FakeTime:
    def __init__(self) -> None:
        self.now = 0.0

    def clock(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


def wait_until_idle(launcher, timeout=5.0):
    deadline = time.monotonic() + timeout
    while launcher.animating and time.monotonic() < deadline:
        time.sleep(0.001)
    return not launcher.animating


def make_launcher(frames=None, **kwargs):
    fake = FakeTime()
    return FireworkLauncher(
        rng=random.Random(3),
        clock=fake.clock,
        sleep=fake.sleep,
        on_frame=frames.append if frames is not None else None,
        **kwargs,
    )


def test_random_color_is_one_of_three_families():
    rng = random.Random(1)
    for _ in range(200):
        color = random_color(rng)
        assert color.a == 255
        channels = (color.r, color.g, color.b)
        assert channels.count(255) >= 1 or channels[2] == 0
        if color.b == 0 and color.r == 255:
            assert 50 <= color.g <= 249
        elif color.b == 0 and color.g == 255:
            assert 50 <= color.r <= 249
        else:
            assert (color.r, color.g) == (255, 255)
            assert 50 <= color.b <= 249


def test_create_particles_count_origin_and_speed():
    config = FireworkConfig(particle_count=50, speed_base=6.0)
    particles = create_particles(10.0, 20.0, config, random.Random(7))
    assert len(particles) == 50
    for particle in particles:
        assert (particle.x, particle.y) == (10.0, 20.0)
        speed = math.hypot(particle.vx, particle.vy)
        assert 6.0 <= speed <= 8.0 + 1e-9


def test_create_particles_uses_fixed_color():
    red = RGBA(255, 0, 0)
    config = FireworkConfig(particle_count=5, speed_base=1.0, color=red)
    particles = create_particles(0, 0, config, random.Random(2))
    assert [p.color for p in particles] == [red] * 5


def test_create_particles_is_reproducible():
    config = FireworkConfig()
    first = create_particles(1, 2, config, random.Random(11))
    second = create_particles(1, 2, config, random.Random(11))
    assert first == second


def test_particle_advance_applies_gravity_then_moves():
    particle = Particle(0.0, 0.0, 2.0, -1.0, RGBA(1, 2, 3))
    particle.advance(0.5)
    assert particle.vy == pytest.approx(-0.5)
    assert particle.x == pytest.approx(2.0)
    assert particle.y == pytest.approx(-0.5)


def test_fade_alpha_endpoints():
    assert fade_alpha(0) == 255
    assert fade_alpha(1) == 0


def test_fade_alpha_clamps_and_decreases():
    assert fade_alpha(2.5) == 0
    assert fade_alpha(-1) == 255
    values = [fade_alpha(t / 10) for t in range(11)]
    assert values == sorted(values, reverse=True)


def test_launch_runs_animation_and_cleans_up():
    frames = []
    launcher = make_launcher(frames)
    thread = launcher.launch(100.0, 50.0, FireworkConfig(particle_count=4))
    thread.join(5)
    assert not thread.is_alive()
    assert launcher.origin == (100.0, 50.0)
    assert launcher.animating is False
    assert launcher.particles == []
    assert frames
    assert all(len(frame) == 4 for frame in frames)
    alphas = [frame[0].color.a for frame in frames]
    assert alphas == sorted(alphas, reverse=True)
    assert alphas[0] < 255


def test_launch_refused_while_animating():
    release = threading.Event()
    fake = FakeTime()

    def blocking_sleep(seconds):
        release.wait(5)
        fake.sleep(seconds)

    launcher = FireworkLauncher(rng=random.Random(0), clock=fake.clock, sleep=blocking_sleep)
    first = launcher.launch(0, 0, FireworkConfig(particle_count=3))
    assert launcher.animating is True
    assert launcher.launch(5, 5, FireworkConfig()) is None
    assert launcher.origin == (0, 0)
    release.set()
    first.join(5)
    assert launcher.animating is False


def test_group_fires_every_launcher_near_point():
    waits = []
    group = FireworkGroup(
        count=3,
        interval_ms=300,
        rng=random.Random(5),
        sleep=waits.append,
        launcher_factory=make_launcher,
    )
    thread = group.start(200.0, 100.0)
    thread.join(5)
    assert len(group.launchers) == 3
    assert waits == [pytest.approx(0.3)] * 2
    for launcher in group.launchers:
        assert wait_until_idle(launcher)
        x, y = launcher.origin
        assert 150.0 <= x < 250.0
        assert 50.0 <= y < 150.0


def test_group_rejects_negative_count():
    with pytest.raises(ValueError):
        FireworkGroup(count=-1)