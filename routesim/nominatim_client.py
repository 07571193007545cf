#Nominatim adapter.
#Free-text place search for the start/end boxes. Failures never escape this
#module: they are logged and turned into an empty result.

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import aiohttp

from routesim import constants
from routesim.RouteBase import GeoPoint

logger = logging.getLogger(__name__)


class GeocodeFetchError(Exception):
    """Nominatim request failed or returned something unusable."""
    pass


@dataclass(frozen=True)
class Suggestion:
    display_name: str
    lat: float
    lng: float

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)


class NominatimClient:
    def __init__(self,
                 base_url: str = constants.NOMINATIM_URL,
                 country: str = constants.GEOCODE_COUNTRY,
                 limit: int = constants.SUGGESTION_LIMIT,
                 timeout: float = constants.GEOCODE_TIMEOUT_S,
                 user_agent: str = constants.USER_AGENT,
                 session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url.rstrip("/")
        self.country = country
        self.limit = limit
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session

    async def search(self, query: str) -> List[Suggestion]:
        """Up to `limit` candidates, biased towards `country`. [] on empty query or failure."""
        if not query:
            return []
        params = {
            "format": "json",
            "addressdetails": "1",
            "limit": str(self.limit),
            "q": f"{query}, {self.country}" if self.country else query,
        }
        try:
            rows = await self._search(params)
            return [self._to_suggestion(r) for r in rows[:self.limit]]
        except GeocodeFetchError as e:
            logger.warning("suggestion search for %r failed: %s", query, e)
            return []

    async def geocode(self, query: str) -> Optional[GeoPoint]:
        """First hit for `query`, or None."""
        if not query:
            return None
        try:
            rows = await self._search({"format": "json", "q": query})
            if not rows:
                return None
            return self._to_suggestion(rows[0]).point
        except GeocodeFetchError as e:
            logger.warning("geocode for %r failed: %s", query, e)
            return None

    # -------------------------
    # internals
    # -------------------------
    @staticmethod
    def _to_suggestion(row: Any) -> Suggestion:
        try:
            return Suggestion(
                display_name=str(row.get("display_name", "")),
                lat=float(row["lat"]),
                lng=float(row["lon"]),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise GeocodeFetchError(f"malformed Nominatim row: {e!r}") from e

    async def _search(self, params: dict) -> list:
        try:
            if self.session is not None:
                data = await self._get(self.session, params)
            else:
                async with aiohttp.ClientSession() as session:
                    data = await self._get(session, params)
        except asyncio.TimeoutError as e:
            raise GeocodeFetchError(f"no answer within {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise GeocodeFetchError(str(e)) from e

        if not isinstance(data, list):
            raise GeocodeFetchError(f"expected a JSON list, got {type(data).__name__}")
        return data

    async def _get(self, session: aiohttp.ClientSession, params: dict) -> Any:
        async with session.get(
            f"{self.base_url}/search",
            params=params,
            headers={"User-Agent": self.user_agent},
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        ) as resp:
            if not 200 <= resp.status < 300:
                raise GeocodeFetchError(f"HTTP {resp.status}")
            try:
                return await resp.json(content_type=None)
            except ValueError as e:
                raise GeocodeFetchError(f"invalid JSON: {e}") from e


class SuggestionFeed:
    """
    Keeps only the answer to the latest query of one search box.

    Keystrokes fire overlapping searches; a slow early search must not
    overwrite the results of a later one.
    """
    def __init__(self, client: NominatimClient):
        self.client = client
        self.suggestions: List[Suggestion] = []
        self._seq = 0

    async def update(self, query: str) -> Optional[List[Suggestion]]:
        self._seq += 1
        seq = self._seq
        results = await self.client.search(query)
        if seq != self._seq:
            logger.debug("dropping suggestions for %r, newer query pending", query)
            return None
        self.suggestions = results
        return results
