"""Tests for the chart store and its readers-writer lock."""

import asyncio

import pytest

from lorikeet_dash.domain.entities.step import RunType, Step, SystemVariant
from lorikeet_dash.domain.entities.units import ChartUnits
from lorikeet_dash.domain.services.chart_store import COLOURS, ChartStore, units_for_step
from lorikeet_dash.utils.rwlock import ReadWriteLock


def make_steps() -> list:
    return [
        Step(name="homepage", run=RunType.HTTP, http={"url": "http://example.com"}),
        Step(name="load", run=RunType.SYSTEM, system=SystemVariant.LOAD_AVG_5M),
        Step(name="memory", run=RunType.SYSTEM, system=SystemVariant.MEM_AVAILABLE),
        Step(name="queue", run=RunType.BASH, bash="echo 3"),
        Step(name="constant", run=RunType.VALUE, value="42"),
    ]


def test_units_follow_the_step_kind() -> None:
    units = [units_for_step(step) for step in make_steps()]

    assert units == [
        ChartUnits.SECONDS,
        ChartUnits.VALUE,
        ChartUnits.KILOBYTES,
        ChartUnits.VALUE,
        ChartUnits.VALUE,
    ]


@pytest.mark.asyncio
async def test_from_steps_keeps_step_order() -> None:
    store = ChartStore.from_steps(make_steps())

    assert await store.list_names() == ["homepage", "load", "memory", "queue", "constant"]
    assert len(store) == 5
    assert "load" in store


@pytest.mark.asyncio
async def test_colours_are_assigned_round_robin() -> None:
    steps = [Step(name=f"s{i}", run=RunType.VALUE, value=str(i)) for i in range(len(COLOURS) + 1)]
    store = ChartStore.from_steps(steps, smooth=True)

    first = await store.get("s0")
    wrapped = await store.get(f"s{len(COLOURS)}")

    assert first.colour == COLOURS[0]
    assert wrapped.colour == COLOURS[0]
    assert (await store.get("s1")).colour == COLOURS[1]
    assert first.smooth is True


def test_duplicate_names_are_rejected() -> None:
    store = ChartStore()
    store.create("cpu")

    with pytest.raises(ValueError):
        store.create("cpu")


@pytest.mark.asyncio
async def test_get_unknown_chart_returns_none(store) -> None:
    assert await store.get("nope") is None


@pytest.mark.asyncio
async def test_for_each_mut_appends_to_every_chart(store) -> None:
    await store.for_each_mut(lambda chart: chart.add_point(99, 1))

    cpu = await store.get("cpu")
    mem = await store.get("mem")
    assert len(cpu.points) == 4
    assert len(mem.points) == 1
    assert cpu.points[-1].x == 99


@pytest.mark.asyncio
async def test_max_points_applies_to_created_charts() -> None:
    store = ChartStore(max_points=2)
    store.create("cpu")

    for x in range(5):
        await store.for_each_mut(lambda chart, x=x: chart.add_point(x, x))

    cpu = await store.get("cpu")
    assert [point.x for point in cpu.points] == [3, 4]


@pytest.mark.asyncio
async def test_concurrent_readers_and_writer_do_not_deadlock(store) -> None:
    async def read():
        chart = await store.get("cpu")
        return len(chart.points)

    async def write():
        await store.for_each_mut(lambda chart: chart.add_point(3, 30))

    results = await asyncio.wait_for(
        asyncio.gather(*[read() for _ in range(25)], write(), *[read() for _ in range(25)]),
        timeout=2,
    )

    lengths = [n for n in results if n is not None]
    assert set(lengths) <= {3, 4}
    assert len((await store.get("cpu")).points) == 4


@pytest.mark.asyncio
async def test_waiting_writer_goes_before_new_readers() -> None:
    lock = ReadWriteLock()
    order = []

    async def reader(tag, hold):
        async with lock.read():
            order.append(f"{tag}-in")
            await asyncio.sleep(hold)
            order.append(f"{tag}-out")

    async def writer():
        async with lock.write():
            order.append("write")

    first = asyncio.create_task(reader("r1", 0.05))
    await asyncio.sleep(0)
    pending_write = asyncio.create_task(writer())
    await asyncio.sleep(0)
    second = asyncio.create_task(reader("r2", 0))

    await asyncio.wait_for(asyncio.gather(first, pending_write, second), timeout=2)

    assert order == ["r1-in", "r1-out", "write", "r2-in", "r2-out"]
    assert lock.readers == 0
    assert not lock.locked_for_write


@pytest.mark.asyncio
async def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    inside = []

    async def reader():
        async with lock.read():
            inside.append(lock.readers)
            await asyncio.sleep(0.01)

    await asyncio.gather(reader(), reader(), reader())

    assert max(inside) == 3
