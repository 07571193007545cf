from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional

from routesim.constants import TICK_INTERVAL_S
from routesim.RouteBase import GeoPoint, Route

logger = logging.getLogger(__name__)

TickListener = Callable[["PlaybackClock"], None]


class Phase(Enum):
    IDLE = auto()
    ADVANCING = auto()
    AT_END = auto()


@dataclass
class PlaybackClock:
    """
    Moves a cursor one vertex per interval along the loaded route.

    The cursor never wraps and never goes back; it only returns to 0 when a
    new route is loaded. Each load bumps `generation`, and a timer only
    advances the cursor for the generation it was armed with.
    """
    interval_s: float = TICK_INTERVAL_S
    autoplay: bool = True
    route: Route = ()
    idx: int = 0
    generation: int = 0
    _task: Optional[asyncio.Task] = field(default=None, repr=False, compare=False)
    _listeners: List[TickListener] = field(default_factory=list, repr=False, compare=False)

    @property
    def phase(self) -> Phase:
        if len(self.route) < 2:
            return Phase.IDLE
        if self.idx < len(self.route) - 1:
            return Phase.ADVANCING
        return Phase.AT_END

    @property
    def armed(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, listener: TickListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def load(self, route: Route) -> int:
        """Replace the route, reset the cursor and re-arm. Returns the new generation."""
        self.stop()
        self.route = tuple(route)
        self.idx = 0
        self.generation += 1
        logger.debug("clock gen %d loaded %d points", self.generation, len(self.route))

        if self.route and self.autoplay:
            self._arm()
        return self.generation

    def tick(self, generation: Optional[int] = None) -> bool:
        """
        Advance by one vertex. A tick tagged with an old generation is dropped.
        Returns True when the cursor moved.
        """
        if generation is not None and generation != self.generation:
            logger.debug("dropping stale tick gen %d (current %d)", generation, self.generation)
            return False
        if not self.route:
            return False

        nxt = min(self.idx + 1, len(self.route) - 1)
        if nxt == self.idx:
            return False

        self.idx = nxt
        logger.debug("tick gen %d -> idx %d/%d", self.generation, self.idx, len(self.route) - 1)
        for listener in list(self._listeners):
            listener(self)
        return True

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def get_pos(self) -> GeoPoint:
        if not self.route:
            raise RuntimeError("No route loaded. Call load() first.")
        return self.route[self.idx]

    def start(self) -> None:
        """Arm the timer for the loaded route if it is not running yet."""
        if self.route and not self.armed:
            self._arm()

    def _arm(self) -> None:
        # only one timer task at a time
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("no running event loop, clock gen %d stays disarmed until start()", self.generation)
            return
        self._task = loop.create_task(self._run(self.generation))

    async def _run(self, generation: int) -> None:
        while generation == self.generation:
            await asyncio.sleep(self.interval_s)
            self.tick(generation)
