"""Chart Store - the registry of charts shared by the scheduler and the HTTP handlers."""
import logging
from typing import Callable, Dict, Iterable, List, Optional

from lorikeet_dash.domain.entities.chart import Chart
from lorikeet_dash.domain.entities.step import RunType, Step
from lorikeet_dash.domain.entities.units import ChartUnits
from lorikeet_dash.utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

COLOURS = [
    "#99c1f1",
    "#8ff0a4",
    "#f9f06b",
    "#ffbe6f",
    "#f66151",
    "#dc8add",
    "#cdab8f",
]


def units_for_step(step: Step) -> ChartUnits:
    """Pick the initial display units from the kind of probe."""
    if step.run == RunType.HTTP:
        return ChartUnits.SECONDS
    if step.run == RunType.SYSTEM:
        if step.system is not None and step.system.is_load_average:
            return ChartUnits.VALUE
        return ChartUnits.KILOBYTES
    return ChartUnits.VALUE


class ChartStore:
    """
    Name to chart mapping, created at startup and never shrinking.

    Readers take a snapshot under the read lock; the scheduler appends points
    under the write lock.
    """

    def __init__(self, max_points: Optional[int] = None):
        self.max_points = max_points
        self._charts: Dict[str, Chart] = {}
        self._lock = ReadWriteLock()

    @classmethod
    def from_steps(cls, steps: Iterable[Step], smooth: bool = False, max_points: Optional[int] = None) -> "ChartStore":
        store = cls(max_points=max_points)
        for i, step in enumerate(steps):
            store.create(
                name=step.name,
                units=units_for_step(step),
                smooth=smooth,
                colour=COLOURS[i % len(COLOURS)],
            )
        logger.info(f"📊 Created {len(store)} charts")
        return store

    def create(self, name: str, units: ChartUnits = ChartUnits.VALUE, smooth: bool = False, colour: Optional[str] = None) -> Chart:
        """Register a chart. Only called while the application is starting."""
        if name in self._charts:
            raise ValueError(f"Chart '{name}' already exists")
        if colour is None:
            colour = COLOURS[len(self._charts) % len(COLOURS)]
        chart = Chart(name=name, units=units, smooth=smooth, colour=colour, max_points=self.max_points)
        self._charts[name] = chart
        return chart

    async def get(self, name: str) -> Optional[Chart]:
        """Snapshot of the named chart, or None if there is no such chart."""
        async with self._lock.read():
            chart = self._charts.get(name)
            return chart.snapshot() if chart is not None else None

    async def list_names(self) -> List[str]:
        async with self._lock.read():
            return list(self._charts)

    async def for_each_mut(self, mutate: Callable[[Chart], None]) -> None:
        """Apply ``mutate`` to every chart while holding the write lock."""
        async with self._lock.write():
            for chart in self._charts.values():
                mutate(chart)

    def __len__(self) -> int:
        return len(self._charts)

    def __contains__(self, name: str) -> bool:
        return name in self._charts
