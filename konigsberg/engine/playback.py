"""
AI-solve playback.

A Playback owns the solved bridge sequence, its step index and a private
copy of the graph. Each step() applies exactly one bridge and hands it to the
on_step callback. Hosts either call step() from their own timer or await
run(), which sleeps between steps on the running asyncio loop. cancel() stops
both and drops the private graph.
"""
import asyncio
import logging
from typing import Callable, Optional

from konigsberg.engine.graph import Graph
from konigsberg.engine.solver import Solution

logger = logging.getLogger(__name__)


class Playback:

    def __init__(
            self,
            graph: Graph,
            solution: Solution,
            on_step: Callable[[str], None],
            on_finish: Optional[Callable[[], None]] = None,
    ):
        self.graph = graph
        self.solution = solution
        self.index = 0
        self.cancelled = False
        self._on_step = on_step
        self._on_finish = on_finish
        self._task: Optional[asyncio.Task] = None

    @property
    def total(self) -> int:
        return len(self.solution.edges)

    @property
    def done(self) -> bool:
        return self.index >= self.total

    @property
    def active(self) -> bool:
        return not self.cancelled and not self.done

    def step(self) -> bool:
        """ Apply the next bridge. Returns False once nothing is left to apply."""
        if not self.active:
            return False
        edge_id = self.solution.edges[self.index]
        self.graph.mark_edge_used(edge_id)
        self.index += 1
        logger.debug("Playback step %d/%d: %s", self.index, self.total, edge_id)
        self._on_step(edge_id)
        if self.done:
            logger.info("Playback finished after %d bridges", self.total)
            self.graph = None
            if self._on_finish is not None:
                self._on_finish()
        return True

    def run_to_completion(self) -> None:
        while self.step():
            pass

    async def run(self, interval: float) -> None:
        """ Play one step per tick, first step immediately"""
        try:
            while self.step():
                if self.done:
                    break
                await asyncio.sleep(interval)
        except asyncio.CancelledError:
            self.cancelled = True
            self.graph = None
            raise

    def schedule(self, interval: float) -> asyncio.Task:
        """ Start run() on the running loop and keep the task handle for cancel()"""
        self._task = asyncio.get_running_loop().create_task(self.run(interval))
        return self._task

    def cancel(self) -> None:
        if not self.active:
            return
        self.cancelled = True
        self.graph = None
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        logger.info("Playback cancelled at step %d/%d", self.index, self.total)
