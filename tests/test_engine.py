"""Tests for the pattern engine.

Validates:
    - End-to-end dot sets for uniform images (count, radii, centers)
    - Emission cutoff suppression
    - Degenerate plates publish an empty DotSet immediately
    - Row-major ordering of dots
    - Time-sliced execution with progress reporting
    - Cancellation: a superseded run never publishes and leaves no trace

Slicing is forced with a fake clock that advances one second per call,
so every slice processes exactly one row.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

import numpy as np
import pytest
from PIL import Image

from image_processing.engine import (
    CooperativeScheduler,
    PatternEngine,
    PatternRun,
    generate_dot_set,
)
from image_processing.grid import plan_grid
from models import DotSet, GenerationToken, PlateConfig, RunState


class TickingClock:
    """Fake monotonic clock: each call advances by one second."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        self.now += 1.0
        return self.now


class ManualScheduler:
    """Records callbacks so tests can run them in any order."""

    def __init__(self):
        self.callbacks: list[Callable[[], None]] = []

    def call_soon(self, callback: Callable[[], None]) -> None:
        self.callbacks.append(callback)

    def pop(self) -> Callable[[], None]:
        return self.callbacks.pop(0)


@pytest.fixture()
def published() -> list[DotSet]:
    return []


@pytest.fixture()
def scheduler() -> CooperativeScheduler:
    return CooperativeScheduler()


@pytest.fixture()
def sliced_engine(scheduler: CooperativeScheduler, published: list[DotSet]) -> PatternEngine:
    """Engine that yields after every row."""
    return PatternEngine(scheduler=scheduler, on_publish=published.append, clock=TickingClock())


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------


class TestUniformImages:
    def test_mid_gray_luminance(self, small_plate: PlateConfig) -> None:
        grid = plan_grid(small_plate)
        run = PatternRun(GenerationToken(1), small_plate, grid, np.full((10, 10), 0.5))
        assert run.process_chunk(budget_s=60.0)
        dot_set = run.result()

        assert len(dot_set) == 100
        assert all(dot.r == pytest.approx(1.75) for dot in dot_set)
        assert (dot_set[0].x, dot_set[0].y) == (5.0, 5.0)
        assert (dot_set[1].x, dot_set[1].y) == (15.0, 5.0)
        assert (dot_set[10].x, dot_set[10].y) == (5.0, 15.0)
        assert (dot_set[-1].x, dot_set[-1].y) == (95.0, 95.0)

    def test_gray_image(self, small_plate: PlateConfig, solid_image) -> None:
        dot_set = generate_dot_set(solid_image(128), small_plate)
        expected = 0.5 + (1 - 128 / 255) * 2.5
        assert len(dot_set) == 100
        assert all(dot.r == pytest.approx(expected, abs=1e-9) for dot in dot_set)

    def test_white_image(self, small_plate: PlateConfig, solid_image) -> None:
        dot_set = generate_dot_set(solid_image(255), small_plate)
        assert len(dot_set) == 100
        assert all(dot.r == pytest.approx(0.5) for dot in dot_set)

    def test_black_image(self, small_plate: PlateConfig, solid_image) -> None:
        dot_set = generate_dot_set(solid_image(0), small_plate)
        assert len(dot_set) == 100
        assert all(dot.r == pytest.approx(3.0) for dot in dot_set)

    def test_centers_cover_grid(self, small_plate: PlateConfig, solid_image) -> None:
        dot_set = generate_dot_set(solid_image(0), small_plate)
        centers = {(dot.x, dot.y) for dot in dot_set}
        expected = {(5.0 + 10 * i, 5.0 + 10 * j) for i in range(10) for j in range(10)}
        assert centers == expected

    def test_margin_offsets_centers(self, solid_image) -> None:
        config = PlateConfig(width=120, height=120, spacing=10, margin=10)
        dot_set = generate_dot_set(solid_image(0), config)
        assert len(dot_set) == 100
        assert (dot_set[0].x, dot_set[0].y) == (15.0, 15.0)
        assert (dot_set[-1].x, dot_set[-1].y) == (105.0, 105.0)


class TestEmissionCutoff:
    def test_tiny_holes_suppressed(self, small_plate: PlateConfig, solid_image) -> None:
        config = replace(small_plate, min_hole_size=0.0, max_hole_size=0.15)
        dot_set = generate_dot_set(solid_image(240), config)
        assert len(dot_set) < plan_grid(config).cell_count

    def test_partial_suppression(self, small_plate: PlateConfig) -> None:
        # Left half white (r = 0), right half black (r = 0.3)
        image = Image.new("RGB", (100, 100), (255, 255, 255))
        image.paste((0, 0, 0), (50, 0, 100, 100))
        config = replace(small_plate, min_hole_size=0.0, max_hole_size=0.6)
        dot_set = generate_dot_set(image, config)
        assert len(dot_set) == 50
        assert all(dot.x > 50 for dot in dot_set)

    def test_every_dot_above_cutoff(self, small_plate: PlateConfig, noise_image) -> None:
        config = replace(small_plate, min_hole_size=0.0, max_hole_size=0.4)
        dot_set = generate_dot_set(noise_image, config)
        assert all(dot.r > 0.1 for dot in dot_set)

    def test_custom_cutoff(self, small_plate: PlateConfig, solid_image) -> None:
        config = replace(small_plate, min_hole_size=0.0, max_hole_size=0.15)
        dot_set = generate_dot_set(solid_image(0), config, emission_cutoff=0.05)
        assert len(dot_set) == 100


class TestDegeneratePlate:
    @pytest.mark.parametrize("value", [0, 128, 255])
    def test_margin_larger_than_plate(self, scheduler, published, value, solid_image) -> None:
        engine = PatternEngine(scheduler=scheduler, on_publish=published.append)
        config = PlateConfig(width=500, height=500, margin=300)
        token = engine.generate(solid_image(value), config)

        # Published synchronously, nothing left to schedule
        assert scheduler.pending == 0
        assert engine.dot_set.is_empty
        assert engine.dot_set.token == token
        assert engine.state == RunState.COMPLETED
        assert engine.progress == 1.0
        assert len(published) == 1

    def test_non_positive_spacing_is_a_precondition(self, solid_image) -> None:
        with pytest.raises(ValueError):
            generate_dot_set(solid_image(0), PlateConfig(spacing=0))


class TestOrdering:
    def test_row_major(self, noise_image: Image.Image) -> None:
        config = PlateConfig(width=230, height=170, spacing=7, margin=4)
        dot_set = generate_dot_set(noise_image, config)
        assert len(dot_set) > 0
        keys = [(dot.y, dot.x) for dot in dot_set]
        assert keys == sorted(keys)

    def test_dot_set_is_immutable(self, small_plate: PlateConfig, solid_image) -> None:
        dot_set = generate_dot_set(solid_image(0), small_plate)
        assert isinstance(dot_set.dots, tuple)
        with pytest.raises(AttributeError):
            dot_set[0].r = 1.0  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Slicing and progress
# ---------------------------------------------------------------------------


class TestSlicing:
    def test_one_row_per_slice(
        self, sliced_engine: PatternEngine, scheduler, small_plate, solid_image
    ) -> None:
        sliced_engine.generate(solid_image(0), small_plate)
        slices = 0
        while scheduler.run_once():
            slices += 1
        assert slices == 10
        assert len(sliced_engine.dot_set) == 100

    def test_large_budget_finishes_in_one_slice(
        self, scheduler, small_plate, solid_image
    ) -> None:
        engine = PatternEngine(scheduler=scheduler, chunk_budget_ms=60_000)
        engine.generate(solid_image(0), small_plate)
        assert scheduler.run_once()
        assert not scheduler.run_once()
        assert engine.state == RunState.COMPLETED

    def test_progress_reported_between_slices(self, scheduler, small_plate, solid_image) -> None:
        progress: list[float] = []
        engine = PatternEngine(
            scheduler=scheduler, on_progress=progress.append, clock=TickingClock()
        )
        engine.generate(solid_image(0), small_plate)
        scheduler.run_until_idle()

        assert progress[0] == 0.0
        assert progress[-1] == 1.0
        assert progress == sorted(progress)
        assert progress[1:-1] == pytest.approx([i / 10 for i in range(1, 10)])

    def test_state_transitions(
        self, sliced_engine: PatternEngine, scheduler, small_plate, solid_image
    ) -> None:
        assert sliced_engine.state == RunState.IDLE
        sliced_engine.generate(solid_image(0), small_plate)
        assert sliced_engine.state == RunState.RUNNING
        scheduler.run_once()
        assert sliced_engine.state == RunState.RUNNING
        scheduler.run_until_idle()
        assert sliced_engine.state == RunState.COMPLETED

    def test_nothing_published_until_done(
        self, sliced_engine: PatternEngine, scheduler, published, small_plate, solid_image
    ) -> None:
        sliced_engine.generate(solid_image(0), small_plate)
        for _ in range(9):
            scheduler.run_once()
        assert published == []
        assert sliced_engine.dot_set.is_empty
        scheduler.run_once()
        assert len(published) == 1


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class TestCancellation:
    def test_tokens_increase(self, sliced_engine: PatternEngine, small_plate, solid_image) -> None:
        first = sliced_engine.generate(solid_image(0), small_plate)
        second = sliced_engine.generate(solid_image(0), small_plate)
        assert second > first
        assert sliced_engine.current_token == second
        assert not sliced_engine.is_current(first)

    def test_superseded_run_matches_fresh_run(
        self, sliced_engine: PatternEngine, scheduler, published, small_plate, solid_image
    ) -> None:
        config_b = replace(small_plate, spacing=20.0, inverted=True)
        image_b = solid_image(60)

        sliced_engine.generate(solid_image(0), small_plate)
        scheduler.run_once()
        scheduler.run_once()
        token_b = sliced_engine.generate(image_b, config_b)
        scheduler.run_until_idle()

        fresh = generate_dot_set(image_b, config_b)
        assert len(published) == 1
        assert sliced_engine.dot_set.token == token_b
        assert sliced_engine.dot_set.dots == fresh.dots
        assert sliced_engine.dot_set.grid == fresh.grid

    def test_stale_slice_after_newer_publish(self, published, small_plate, solid_image) -> None:
        manual = ManualScheduler()
        engine = PatternEngine(scheduler=manual, on_publish=published.append, clock=TickingClock())

        engine.generate(solid_image(0), small_plate)
        stale = manual.pop()
        token_b = engine.generate(solid_image(255), small_plate)
        while manual.callbacks:
            manual.pop()()
        result_b = engine.dot_set

        # Run A resumes only after B published: it must not overwrite
        stale()
        assert manual.callbacks == []
        assert engine.dot_set is result_b
        assert engine.dot_set.token == token_b
        assert [d.token for d in published] == [token_b]

    def test_supersede_with_degenerate_plate(
        self, sliced_engine: PatternEngine, scheduler, published, small_plate, solid_image
    ) -> None:
        sliced_engine.generate(solid_image(0), small_plate)
        scheduler.run_once()
        sliced_engine.generate(solid_image(0), replace(small_plate, margin=60))
        scheduler.run_until_idle()

        assert len(published) == 1
        assert sliced_engine.dot_set.is_empty

    def test_cancelled_run_drops_partial_work(self, small_plate: PlateConfig) -> None:
        grid = plan_grid(small_plate)
        run = PatternRun(GenerationToken(1), small_plate, grid, np.zeros((10, 10)))
        run.process_row()
        run.cancel()
        assert run.state == RunState.CANCELLED
        assert len(run.result().dots) == 0

    def test_cancelled_run_stays_cancelled(self, small_plate: PlateConfig) -> None:
        grid = plan_grid(small_plate)
        run = PatternRun(GenerationToken(1), small_plate, grid, np.zeros((10, 10)))
        run.cancel()
        run.result()
        assert run.state == RunState.CANCELLED

    def test_result_completes_running_run(self, small_plate: PlateConfig) -> None:
        grid = plan_grid(small_plate)
        run = PatternRun(GenerationToken(1), small_plate, grid, np.zeros((10, 10)))
        run.process_chunk(budget_s=60.0)
        run.result()
        assert run.state == RunState.COMPLETED
