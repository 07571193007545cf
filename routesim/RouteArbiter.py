from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional

from routesim.graphhopper_client import GraphHopperClient, RoutingFetchError
from routesim.nominatim_client import NominatimClient
from routesim.PlaybackClock import PlaybackClock
from routesim.route_ops import EmptyRouteError, sub_route_between
from routesim.RouteBase import GeoPoint, REFERENCE_ROUTE, Route, route_latlon

logger = logging.getLogger(__name__)

Event = Dict[str, Any]
Listener = Callable[[Event], None]


class ArbiterState(Enum):
    IDLE = auto()        # no active route yet
    REFERENCE = auto()   # slice of the reference corridor
    LOADING = auto()     # live route request in flight
    EXTERNAL = auto()    # live route from the routing service


@dataclass
class Selection:
    start: Optional[GeoPoint] = None
    end: Optional[GeoPoint] = None
    start_query: str = ""
    end_query: str = ""

    @property
    def complete(self) -> bool:
        return self.start is not None and self.end is not None


class RouteArbiter:
    """
    Owns the active route and decides where it comes from.

    Default: the piece of the reference corridor between the vertices nearest
    to the selected start and end, recomputed on every selection change.
    On request: a live route from the routing client, which replaces the
    active route outright. Every replacement restarts playback from index 0.

    Subscribers get plain dict events:
        {"type": "route", "source": ..., "route": [(lat, lng), ...]}
        {"type": "position", "idx": ..., "lat": ..., "lng": ..., "phase": ...}
        {"type": "status", "status": ...}
        {"type": "error", "message": ...}
    """
    def __init__(self,
                 router: Optional[GraphHopperClient] = None,
                 geocoder: Optional[NominatimClient] = None,
                 reference: Route = REFERENCE_ROUTE,
                 clock: Optional[PlaybackClock] = None):
        if not reference:
            raise EmptyRouteError("reference route must have at least one point")

        self.router = router
        self.geocoder = geocoder
        self.reference = reference
        self.clock = clock if clock is not None else PlaybackClock()
        self.clock.subscribe(self._on_tick)

        self.state = ArbiterState.IDLE
        self.selection = Selection()
        self._route: Route = ()
        self._listeners: List[Listener] = []
        # bumped on each selection change, lets late fetches notice they are stale
        self._selection_version = 0
        # bumped on each live request
        self._fetch_seq = 0

    # -------------------------
    # read side
    # -------------------------
    @property
    def active_route(self) -> Route:
        return self._route

    @property
    def cursor(self) -> int:
        return self.clock.idx

    @property
    def loading(self) -> bool:
        return self.state is ArbiterState.LOADING

    @property
    def can_fetch_live(self) -> bool:
        return self.selection.complete and not self.loading and self.router is not None

    def vehicle_position(self) -> GeoPoint:
        if self._route:
            return self.clock.get_pos()
        return self.reference[0]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # -------------------------
    # selection (default path)
    # -------------------------
    def set_start(self, point: Optional[GeoPoint], query: str = "") -> None:
        self.selection.start = point
        self.selection.start_query = query
        self._selection_changed()

    def set_end(self, point: Optional[GeoPoint], query: str = "") -> None:
        self.selection.end = point
        self.selection.end_query = query
        self._selection_changed()

    async def select_start_query(self, query: str) -> Optional[GeoPoint]:
        point = await self._geocode(query)
        if point is not None:
            self.set_start(point, query)
        return point

    async def select_end_query(self, query: str) -> Optional[GeoPoint]:
        point = await self._geocode(query)
        if point is not None:
            self.set_end(point, query)
        return point

    def _selection_changed(self) -> None:
        self._selection_version += 1
        if not self.selection.complete:
            return

        route = sub_route_between(self.reference, self.selection.start, self.selection.end)
        self._replace(route, ArbiterState.REFERENCE)

    async def _geocode(self, query: str) -> Optional[GeoPoint]:
        if self.geocoder is None:
            raise ValueError("no geocoding client configured")
        return await self.geocoder.geocode(query)

    # -------------------------
    # live route (external path)
    # -------------------------
    async def fetch_live_route(self) -> bool:
        """
        Replace the active route with a live route for the current selection.

        Returns True when the route was replaced. A failed request leaves the
        route and cursor alone and emits a single error event.
        """
        if self.router is None:
            raise ValueError("no routing client configured")
        if not self.selection.complete:
            raise ValueError("start and end must both be selected")
        if self.loading:
            logger.warning("live route already loading, ignoring request")
            return False

        start, end = self.selection.start, self.selection.end
        version = self._selection_version
        prior = self.state
        self._fetch_seq += 1
        seq = self._fetch_seq
        self._set_state(ArbiterState.LOADING)

        try:
            route = await self.router.fetch_route(start, end)
        except asyncio.CancelledError:
            self._leave_loading(prior, seq)
            raise
        except RoutingFetchError as e:
            logger.warning("live route failed: %s", e)
            return self._fetch_failed(prior, seq, version, e)
        except Exception as e:
            # anything else from the client is still a failed request, not a stuck LOADING
            logger.exception("live route request raised %s", type(e).__name__)
            return self._fetch_failed(prior, seq, version, e)

        if version != self._selection_version:
            logger.info("selection changed while loading, dropping live route")
            self._leave_loading(prior, seq)
            return False

        self._replace(route, ArbiterState.EXTERNAL)
        return True

    def _leave_loading(self, prior: ArbiterState, seq: int) -> None:
        # only the newest request may end LOADING
        if self.loading and seq == self._fetch_seq:
            self._set_state(prior)

    def _fetch_failed(self, prior: ArbiterState, seq: int, version: int, error: Exception) -> bool:
        self._leave_loading(prior, seq)
        if version != self._selection_version:
            logger.info("failed live route was for an old selection, no notification")
            return False
        self._emit({"type": "error", "message": f"Failed to fetch route: {error}"})
        return False

    # -------------------------
    # internals
    # -------------------------
    def _replace(self, route: Route, state: ArbiterState) -> None:
        generation = self.clock.load(route)
        self._route = route
        self.state = state
        logger.info("active route <- %s (%d points, gen %d)", state.name.lower(), len(route), generation)

        self._emit({"type": "route", "source": state.name.lower(), "route": route_latlon(route)})
        self._emit_status()
        self._emit_position()

    def _set_state(self, state: ArbiterState) -> None:
        self.state = state
        self._emit_status()

    def _on_tick(self, clock: PlaybackClock) -> None:
        self._emit_position()

    def _emit_status(self) -> None:
        self._emit({"type": "status", "status": self.state.name.lower()})

    def _emit_position(self) -> None:
        pos = self.vehicle_position()
        self._emit({
            "type": "position",
            "idx": self.clock.idx,
            "lat": pos.lat,
            "lng": pos.lng,
            "phase": self.clock.phase.name.lower(),
        })

    def _emit(self, event: Event) -> None:
        for listener in list(self._listeners):
            listener(event)

    def stop(self) -> None:
        self.clock.stop()
