import math

from routesim.RouteBase import GeoPoint, Route


class EmptyRouteError(ValueError):
    """Raised when a vertex lookup is attempted on a route with no points."""
    pass


# -------------------------
# nearest vertex
# -------------------------
def planar_dist(a: GeoPoint, b: GeoPoint) -> float:
    # euclidean in raw degrees, not geodesic
    return math.hypot(a.lat - b.lat, a.lng - b.lng)


def closest_point_index(points: Route, target: GeoPoint) -> int:
    """
    Index of the vertex of `points` closest to `target`.

    Linear scan, O(n) per lookup. Fine for a reference corridor of a few
    dozen vertices; callers should not run it per tick.
    On equal distances the lowest index wins.
    """
    if not points:
        raise EmptyRouteError("cannot locate a vertex on an empty route")

    best_i = 0
    best_d = float("inf")
    for i, p in enumerate(points):
        d = planar_dist(p, target)
        if d < best_d:
            best_d = d
            best_i = i
    return best_i


# -------------------------
# slicing
# -------------------------
def slice_route(ref: Route, start_idx: int, end_idx: int) -> Route:
    """
    Contiguous piece of `ref` from start_idx to end_idx, both inclusive.

    The result always begins at ref[start_idx] and ends at ref[end_idx];
    when start_idx > end_idx the piece is walked backwards.
    """
    n = len(ref)
    for idx in (start_idx, end_idx):
        if not 0 <= idx < n:
            raise IndexError(f"index {idx} out of range for route of length {n}")

    if start_idx <= end_idx:
        return ref[start_idx:end_idx + 1]
    return tuple(reversed(ref[end_idx:start_idx + 1]))


def sub_route_between(ref: Route, start: GeoPoint, end: GeoPoint) -> Route:
    start_idx = closest_point_index(ref, start)
    end_idx = closest_point_index(ref, end)
    return slice_route(ref, start_idx, end_idx)
