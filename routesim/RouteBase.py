from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from routesim.constants import LatLon, REFERENCE_LATLON


@dataclass(frozen=True)
class GeoPoint:
    """
    A raw (lat, lng) pair in degrees. No projection, no unit conversion.
    """
    lat: float
    lng: float

    @classmethod
    def from_latlon(cls, latlon: LatLon) -> "GeoPoint":
        lat, lng = latlon
        return cls(lat=float(lat), lng=float(lng))

    def as_latlon(self) -> LatLon:
        return (self.lat, self.lng)


# ordered by direction of travel, may be empty
Route = Tuple[GeoPoint, ...]


def make_route(points: Iterable[LatLon]) -> Route:
    return tuple(GeoPoint.from_latlon(p) for p in points)


def route_latlon(route: Route) -> list[LatLon]:
    return [p.as_latlon() for p in route]


# built once at import, never mutated
REFERENCE_ROUTE: Route = make_route(REFERENCE_LATLON)
