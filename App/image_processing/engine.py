"""Pattern engine: turns an image and plate config into an ordered DotSet.

AIDEV-NOTE: Generation is cooperative and single-threaded. A run processes
whole rows until its wall-clock budget is spent, then hands control back to
the host through ``scheduler.call_soon``. Every new ``generate`` call takes a
fresh GenerationToken; a run whose token is no longer current drops its
partial work the next time it resumes and never publishes.
"""

import logging
import time
from collections import deque
from itertools import count
from typing import Callable, Optional, Protocol

import numpy as np

from models import (
    CHUNK_BUDGET_MS,
    EMISSION_CUTOFF_MM,
    Dot,
    DotSet,
    GenerationToken,
    Grid,
    PlateConfig,
    RunState,
)

from .grid import plan_grid
from .radius import map_radius
from .sampling import sample_luminance

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Host hook used to resume a run after it yields."""

    def call_soon(self, callback: Callable[[], None]) -> None: ...


class CooperativeScheduler:
    """FIFO of ready callbacks, drained explicitly by the owner.

    Used for headless generation and in tests, where the caller decides
    when the next slice runs.
    """

    def __init__(self):
        self._ready: "deque[Callable[[], None]]" = deque()

    def call_soon(self, callback: Callable[[], None]) -> None:
        self._ready.append(callback)

    @property
    def pending(self) -> int:
        return len(self._ready)

    def run_once(self) -> bool:
        """Run the oldest ready callback. Returns False if none was queued."""
        if not self._ready:
            return False
        callback = self._ready.popleft()
        callback()
        return True

    def run_until_idle(self) -> None:
        while self.run_once():
            pass


class PatternRun:
    """State of one generation run: row cursor and accumulated dots."""

    def __init__(
        self,
        token: GenerationToken,
        config: PlateConfig,
        grid: Grid,
        luminance: np.ndarray,
        emission_cutoff: float = EMISSION_CUTOFF_MM,
    ):
        self.token = token
        self.config = config
        self.grid = grid
        self.emission_cutoff = emission_cutoff
        self.state = RunState.RUNNING
        self.next_row = 0

        self._luminance = luminance
        self._dots: "list[Dot]" = []

    @property
    def finished(self) -> bool:
        return self.next_row >= self.grid.rows

    @property
    def progress(self) -> float:
        """Fraction of rows completed."""
        if self.grid.rows == 0:
            return 1.0
        return self.next_row / self.grid.rows

    def process_row(self) -> None:
        """Emit the dots of the next unprocessed row."""
        config = self.config
        row = self.next_row
        spacing = config.spacing
        half = spacing / 2
        cy = config.margin + row * spacing + half

        radii = map_radius(self._luminance[row], config)
        cutoff = self.emission_cutoff
        append = self._dots.append
        for col, radius in enumerate(radii.tolist()):
            if radius > cutoff:
                append(Dot(x=config.margin + col * spacing + half, y=cy, r=radius))

        self.next_row += 1

    def process_chunk(
        self, budget_s: float, clock: Callable[[], float] = time.perf_counter
    ) -> bool:
        """Process rows until the budget is spent or the grid is done.

        At least one row is processed per call.

        Args:
            budget_s: Wall-clock budget in seconds
            clock: Monotonic time source

        Returns:
            True if every row has been processed
        """
        start = clock()
        while not self.finished:
            self.process_row()
            if clock() - start >= budget_s:
                break
        return self.finished

    def cancel(self) -> None:
        """Drop partial work."""
        self._dots = []
        self.state = RunState.CANCELLED

    def result(self) -> DotSet:
        """Snapshot the accumulated dots. A cancelled run stays cancelled."""
        if self.state == RunState.RUNNING:
            self.state = RunState.COMPLETED
        return DotSet(dots=tuple(self._dots), token=self.token, grid=self.grid)


class PatternEngine:
    """Drives generation runs and owns the current token and DotSet.

    Args:
        scheduler: Host hook for resuming runs; a CooperativeScheduler is
            created if omitted
        on_publish: Called with each newly published DotSet
        on_progress: Called with the completed fraction after each slice
        chunk_budget_ms: Wall-clock budget per slice
        emission_cutoff: Holes with radius at or below this are dropped
        clock: Monotonic time source in seconds
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        on_publish: Optional[Callable[[DotSet], None]] = None,
        on_progress: Optional[Callable[[float], None]] = None,
        chunk_budget_ms: float = CHUNK_BUDGET_MS,
        emission_cutoff: float = EMISSION_CUTOFF_MM,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.scheduler = scheduler if scheduler is not None else CooperativeScheduler()
        self.on_publish = on_publish
        self.on_progress = on_progress
        self.chunk_budget_ms = chunk_budget_ms
        self.emission_cutoff = emission_cutoff
        self.clock = clock

        self._token_counter = count(1)
        self._current_token = GenerationToken(0)
        self._dot_set = DotSet()
        self._progress = 0.0
        self._state = RunState.IDLE

    @property
    def current_token(self) -> GenerationToken:
        return self._current_token

    @property
    def dot_set(self) -> DotSet:
        """Most recently published DotSet."""
        return self._dot_set

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def state(self) -> RunState:
        return self._state

    def is_current(self, token: GenerationToken) -> bool:
        return token == self._current_token

    def generate(self, pixels, config: PlateConfig) -> GenerationToken:
        """Start a generation run, superseding any run in progress.

        Luminance sampling happens here, synchronously; row processing is
        scheduled in slices.

        Args:
            pixels: Decoded source image
            config: Plate configuration for this run

        Returns:
            Token identifying the new run
        """
        token = GenerationToken(next(self._token_counter))
        if self._state == RunState.RUNNING:
            logger.debug(
                "Run %d superseded by run %d", self._current_token.value, token.value
            )
        self._current_token = token
        self._state = RunState.RUNNING
        self._set_progress(0.0)

        grid = plan_grid(config)
        if grid.is_empty:
            logger.info("Run %d: plate has no usable area, no holes", token.value)
            self._publish(DotSet(token=token, grid=grid))
            return token

        logger.info(
            "Run %d: %dx%d grid at %.2f mm pitch",
            token.value,
            grid.cols,
            grid.rows,
            grid.pitch,
        )
        luminance = sample_luminance(pixels, grid.cols, grid.rows)
        run = PatternRun(token, config, grid, luminance, self.emission_cutoff)
        self.scheduler.call_soon(lambda: self._resume(run))
        return token

    def _resume(self, run: PatternRun) -> None:
        """Run one slice of ``run`` if it is still current."""
        if not self.is_current(run.token):
            run.cancel()
            logger.debug("Run %d cancelled at row %d", run.token.value, run.next_row)
            return

        done = run.process_chunk(self.chunk_budget_ms / 1000.0, self.clock)

        if not self.is_current(run.token):
            run.cancel()
            return

        if done:
            self._publish(run.result())
        else:
            self._set_progress(run.progress)
            self.scheduler.call_soon(lambda: self._resume(run))

    def _publish(self, dot_set: DotSet) -> None:
        self._dot_set = dot_set
        self._state = RunState.COMPLETED
        self._set_progress(1.0)
        logger.info("Run %d: published %d holes", dot_set.token.value, len(dot_set))
        if self.on_publish is not None:
            self.on_publish(dot_set)

    def _set_progress(self, value: float) -> None:
        self._progress = value
        if self.on_progress is not None:
            self.on_progress(value)


def generate_dot_set(
    pixels,
    config: PlateConfig,
    emission_cutoff: float = EMISSION_CUTOFF_MM,
) -> DotSet:
    """Run a fresh engine to completion and return its DotSet."""
    scheduler = CooperativeScheduler()
    engine = PatternEngine(scheduler=scheduler, emission_cutoff=emission_cutoff)
    engine.generate(pixels, config)
    scheduler.run_until_idle()
    return engine.dot_set
