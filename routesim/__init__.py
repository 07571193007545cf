#Route playback: locate, slice, play back, swap in live routes.
#Re-exports the public pieces so callers don't need the module names.

from .RouteBase import GeoPoint, Route, REFERENCE_ROUTE, make_route
from .route_ops import EmptyRouteError, closest_point_index, slice_route, sub_route_between
from .PlaybackClock import Phase, PlaybackClock
from .RouteArbiter import ArbiterState, RouteArbiter, Selection
from .graphhopper_client import GraphHopperClient, RoutingFetchError
from .nominatim_client import GeocodeFetchError, NominatimClient, Suggestion, SuggestionFeed

__all__ = [
    "GeoPoint",
    "Route",
    "REFERENCE_ROUTE",
    "make_route",
    "EmptyRouteError",
    "closest_point_index",
    "slice_route",
    "sub_route_between",
    "Phase",
    "PlaybackClock",
    "ArbiterState",
    "RouteArbiter",
    "Selection",
    "GraphHopperClient",
    "RoutingFetchError",
    "GeocodeFetchError",
    "NominatimClient",
    "Suggestion",
    "SuggestionFeed",
]
