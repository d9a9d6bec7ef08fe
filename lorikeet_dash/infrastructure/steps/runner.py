"""Runs steps concurrently and stores an Outcome on each of them."""
import asyncio
import logging
import time
from typing import List, Optional

import httpx
import psutil

from lorikeet_dash.domain.entities.step import Outcome, RunType, Step, SystemVariant
from lorikeet_dash.domain.errors import StepExecutionError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0


class StepFailed(Exception):
    """A single step failed; recorded on its outcome rather than raised."""


async def run_steps(
    steps: List[Step],
    timeout_s: float = DEFAULT_TIMEOUT_S,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """
    Run every step once, concurrently, replacing each step's outcome.

    Failures of individual steps end up in ``Outcome.error``.

    Raises:
        StepExecutionError: if the run as a whole could not be carried out
    """
    try:
        async with httpx.AsyncClient(timeout=timeout_s, transport=transport, follow_redirects=True) as client:
            outcomes = await asyncio.gather(
                *(run_step(step, client, timeout_s) for step in steps),
                return_exceptions=True,
            )
        # every step has settled by now, so nothing outlives the client
        for outcome in outcomes:
            if isinstance(outcome, Exception):
                raise outcome
    except Exception as e:
        raise StepExecutionError(str(e) or type(e).__name__) from e

    for step, outcome in zip(steps, outcomes):
        step.outcome = outcome


async def run_step(step: Step, client: httpx.AsyncClient, timeout_s: float = DEFAULT_TIMEOUT_S) -> Outcome:
    started = time.monotonic()
    output = None
    error = None

    try:
        output = await asyncio.wait_for(_execute(step, client), timeout=timeout_s)
    except asyncio.TimeoutError:
        error = f"timed out after {timeout_s}s"
    except StepFailed as e:
        error = str(e)
    except Exception as e:
        error = f"{type(e).__name__}: {e}"

    duration = time.monotonic() - started
    if error:
        logger.warning(f"⚠️ Step '{step.name}' failed: {error}")
    return Outcome(output=output, duration_s=duration, error=error)


async def _execute(step: Step, client: httpx.AsyncClient) -> Optional[str]:
    if step.run == RunType.HTTP:
        return await _run_http(step, client)
    if step.run == RunType.SYSTEM:
        value = await asyncio.to_thread(read_system, step.system)
        return str(value)
    if step.run == RunType.BASH:
        return await _run_bash(step.bash)
    return step.value


async def _run_http(step: Step, client: httpx.AsyncClient) -> str:
    request = step.http
    try:
        response = await client.request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.body,
        )
    except httpx.HTTPError as e:
        raise StepFailed(f"request to {request.url} failed: {e}") from e

    if response.status_code >= 400:
        raise StepFailed(f"{request.url} returned HTTP {response.status_code}")
    return response.text


async def _run_bash(command: str) -> str:
    process = await asyncio.create_subprocess_shell(
        command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await process.communicate()
    except asyncio.CancelledError:
        process.kill()
        await process.wait()
        raise

    if process.returncode != 0:
        message = stderr.decode(errors="replace").strip()
        raise StepFailed(f"exited with status {process.returncode}: {message}")
    return stdout.decode(errors="replace").strip()


def read_system(variant: SystemVariant) -> float:
    """Current value of a system statistic; sizes are in KiB."""
    if variant.is_load_average:
        one, five, fifteen = psutil.getloadavg()
        return {
            SystemVariant.LOAD_AVG_1M: one,
            SystemVariant.LOAD_AVG_5M: five,
            SystemVariant.LOAD_AVG_15M: fifteen,
        }[variant]

    if variant in (SystemVariant.MEM_TOTAL, SystemVariant.MEM_FREE, SystemVariant.MEM_AVAILABLE):
        mem = psutil.virtual_memory()
        size = {
            SystemVariant.MEM_TOTAL: mem.total,
            SystemVariant.MEM_FREE: mem.free,
            SystemVariant.MEM_AVAILABLE: mem.available,
        }[variant]
    elif variant in (SystemVariant.SWAP_TOTAL, SystemVariant.SWAP_FREE):
        swap = psutil.swap_memory()
        size = swap.total if variant == SystemVariant.SWAP_TOTAL else swap.free
    else:
        disk = psutil.disk_usage("/")
        size = disk.total if variant == SystemVariant.DISK_TOTAL else disk.free

    return size / 1024.0
