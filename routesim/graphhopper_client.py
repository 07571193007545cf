#GraphHopper adapter.
#Sole responsibility: ask GraphHopper for a road route between two points and
#hand back a Route in (lat, lng) order. GraphHopper answers with [lng, lat]
#pairs; the swap happens here and nowhere else.

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

import aiohttp
import polyline

from routesim import constants
from routesim.RouteBase import GeoPoint, Route, make_route

logger = logging.getLogger(__name__)


class RoutingFetchError(Exception):
    """The routing request failed, timed out or returned an unusable payload."""
    pass


class GraphHopperClient:
    """
    Async client for the GraphHopper /api/1/route endpoint.

    One request per call, no retries. Any transport error, non-2xx status,
    timeout or malformed body ends up as RoutingFetchError.
    """
    def __init__(self,
                 api_key: Optional[str],
                 base_url: str = constants.GRAPHHOPPER_URL,
                 vehicle: str = constants.GRAPHHOPPER_VEHICLE,
                 locale: str = constants.GRAPHHOPPER_LOCALE,
                 timeout: float = constants.ROUTING_TIMEOUT_S,
                 points_encoded: bool = False,
                 session: Optional[aiohttp.ClientSession] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.vehicle = vehicle
        self.locale = locale
        self.timeout = timeout
        self.points_encoded = points_encoded
        self.session = session

    # -------------------------
    # request shape
    # -------------------------
    def build_params(self, start: GeoPoint, end: GeoPoint) -> List[Tuple[str, str]]:
        # point is repeated, so a list of pairs instead of a dict
        return [
            ("point", f"{start.lat},{start.lng}"),
            ("point", f"{end.lat},{end.lng}"),
            ("vehicle", self.vehicle),
            ("locale", self.locale),
            ("key", self.api_key or ""),
            ("points_encoded", "true" if self.points_encoded else "false"),
            ("type", "json"),
        ]

    @property
    def url(self) -> str:
        return f"{self.base_url}/api/1/route"

    # -------------------------
    # response shape
    # -------------------------
    def parse_route(self, data: Dict[str, Any]) -> Route:
        try:
            points = data["paths"][0]["points"]
            if self.points_encoded:
                # encoded polylines are already (lat, lng)
                latlon = polyline.decode(points)
            else:
                latlon = [(lat, lng) for lng, lat, *_ in points["coordinates"]]
            route = make_route(latlon)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise RoutingFetchError(f"malformed GraphHopper response: {e!r}") from e

        if not route:
            raise RoutingFetchError("GraphHopper returned an empty path")
        return route

    # -------------------------
    # public
    # -------------------------
    async def fetch_route(self, start: GeoPoint, end: GeoPoint) -> Route:
        if not self.api_key:
            raise RoutingFetchError("GraphHopper API key not set. Please set GRAPHHOPPER_API_KEY.")

        logger.info("requesting route %s -> %s", start.as_latlon(), end.as_latlon())
        try:
            if self.session is not None:
                data = await self._get(self.session, start, end)
            else:
                async with aiohttp.ClientSession() as session:
                    data = await self._get(session, start, end)
        except asyncio.TimeoutError as e:
            raise RoutingFetchError(f"GraphHopper did not answer within {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise RoutingFetchError(f"GraphHopper request failed: {e}") from e

        route = self.parse_route(data)
        logger.info("GraphHopper route with %d points", len(route))
        return route

    async def _get(self, session: aiohttp.ClientSession, start: GeoPoint, end: GeoPoint) -> Dict[str, Any]:
        async with session.get(
            self.url,
            params=self.build_params(start, end),
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        ) as resp:
            if not 200 <= resp.status < 300:
                body = await resp.text(errors="replace")
                raise RoutingFetchError(f"GraphHopper returned HTTP {resp.status}: {body[:200]}")
            try:
                return await resp.json(content_type=None)
            except ValueError as e:
                raise RoutingFetchError(f"GraphHopper returned invalid JSON: {e}") from e
