"""Scheduler - runs the steps on a fixed cadence and records one sample per chart."""
import asyncio
import logging
import time
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Sequence

from lorikeet_dash.domain.entities.chart import Chart
from lorikeet_dash.domain.entities.step import Outcome, Step
from lorikeet_dash.domain.services.chart_store import ChartStore

logger = logging.getLogger(__name__)

StepRunner = Callable[[List[Step]], Awaitable[None]]


def local_utc_offset() -> float:
    """Seconds to add to a Unix timestamp to get local wall-clock time."""
    offset = datetime.now().astimezone().utcoffset()
    return offset.total_seconds() if offset is not None else 0.0


def sample_value(outcome: Outcome) -> float:
    """Numeric output of a step, or its duration (millisecond precision) when there is none."""
    if outcome.output is not None:
        try:
            return float(outcome.output.strip())
        except ValueError:
            pass
    return int(outcome.duration_s * 1000) / 1000.0


class Scheduler:
    """
    Collects samples every ``interval_s`` seconds.

    The time spent running the steps is subtracted from the next delay; a
    cycle that overruns the interval is followed immediately by the next one.
    """

    def __init__(
        self,
        store: ChartStore,
        steps: Sequence[Step],
        runner: StepRunner,
        interval_s: float = 10.0,
        clock: Callable[[], float] = time.time,
        timer: Callable[[], float] = time.monotonic,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        utc_offset_s: Optional[float] = None,
    ):
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self.store = store
        self.steps = list(steps)
        self.interval_s = interval_s
        self.utc_offset_s = local_utc_offset() if utc_offset_s is None else utc_offset_s
        self.cycles = 0
        self._runner = runner
        self._clock = clock
        self._timer = timer
        self._sleep = sleep or self._wait_for_stop
        self._stop_event = asyncio.Event()

    def timestamp(self) -> float:
        """Current local time as whole epoch seconds, the x value of new samples."""
        return float(int(self._clock()) + self.utc_offset_s)

    def delay_for(self, elapsed_s: float) -> float:
        return max(self.interval_s - elapsed_s, 0.0)

    async def run_cycle(self) -> float:
        """Run every step once, record the samples and return the elapsed seconds."""
        started = self._timer()
        x = self.timestamp()

        try:
            await self._runner(self.steps)
        except Exception as e:
            logger.error(f"❌ Error running steps: {e}")
        else:
            steps = {step.name: step for step in self.steps}

            def record(chart: Chart) -> None:
                step = steps.get(chart.name)
                if step is not None and step.outcome is not None:
                    chart.add_point(x, sample_value(step.outcome))

            await self.store.for_each_mut(record)

        self.cycles += 1
        return self._timer() - started

    async def run(self) -> None:
        """Loop until ``stop`` is called."""
        logger.info(f"🔄 Scheduler started: {len(self.steps)} steps every {self.interval_s:.3f}s")
        while not self._stop_event.is_set():
            elapsed = await self.run_cycle()
            delay = self.delay_for(elapsed)
            logger.debug(f"🔄 Cycle {self.cycles} took {elapsed:.3f}s, next in {delay:.3f}s")
            if delay > 0 and not self._stop_event.is_set():
                await self._sleep(delay)
        logger.info("✅ Scheduler stopped")

    def stop(self) -> None:
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    async def _wait_for_stop(self, delay: float) -> None:
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass
