import math
import random

import pytest

from routesim.route_ops import (
    EmptyRouteError,
    closest_point_index,
    planar_dist,
    slice_route,
    sub_route_between,
)
from routesim.RouteBase import GeoPoint, REFERENCE_ROUTE, make_route


def test_planar_dist_is_euclidean_in_degrees():
    assert planar_dist(GeoPoint(0, 0), GeoPoint(3, 4)) == pytest.approx(5.0)


def test_closest_index_on_line(line_route):
    assert closest_point_index(line_route, GeoPoint(1.2, 0.3)) == 1
    assert closest_point_index(line_route, GeoPoint(-5, 0)) == 0
    assert closest_point_index(line_route, GeoPoint(10, 10)) == 3


def test_closest_index_tie_goes_to_first():
    route = make_route([(1, 0), (-1, 0), (1, 0)])
    assert closest_point_index(route, GeoPoint(0, 0)) == 0
    assert closest_point_index(route, GeoPoint(1, 0)) == 0


def test_closest_index_empty_route_raises():
    with pytest.raises(EmptyRouteError):
        closest_point_index((), GeoPoint(0, 0))


def test_closest_index_is_a_minimum_random():
    rng = random.Random(7)
    for _ in range(50):
        route = make_route([(rng.uniform(-1, 1), rng.uniform(-1, 1)) for _ in range(rng.randint(1, 30))])
        p = GeoPoint(rng.uniform(-1, 1), rng.uniform(-1, 1))
        i = closest_point_index(route, p)
        best = planar_dist(route[i], p)
        for j, q in enumerate(route):
            assert planar_dist(q, p) >= best
            if j < i:
                assert planar_dist(q, p) > best


def test_slice_forward(line_route):
    assert slice_route(line_route, 1, 3) == make_route([(1, 0), (2, 0), (3, 0)])


def test_slice_backward(line_route):
    assert slice_route(line_route, 3, 1) == make_route([(3, 0), (2, 0), (1, 0)])


def test_slice_single_point(line_route):
    assert slice_route(line_route, 2, 2) == (GeoPoint(2, 0),)


def test_slice_out_of_range(line_route):
    with pytest.raises(IndexError):
        slice_route(line_route, 0, 4)
    with pytest.raises(IndexError):
        slice_route(line_route, -1, 2)


def test_slice_length_and_endpoints_on_reference():
    n = len(REFERENCE_ROUTE)
    for s in range(0, n, 7):
        for e in range(0, n, 5):
            out = slice_route(REFERENCE_ROUTE, s, e)
            assert len(out) == abs(s - e) + 1
            assert out[0] == REFERENCE_ROUTE[s]
            assert out[-1] == REFERENCE_ROUTE[e]


def test_sub_route_between_both_directions(line_route, near):
    assert sub_route_between(line_route, near[1], near[3]) == make_route([(1, 0), (2, 0), (3, 0)])
    assert sub_route_between(line_route, near[3], near[1]) == make_route([(3, 0), (2, 0), (1, 0)])


def test_reference_route_shape():
    assert len(REFERENCE_ROUTE) == 65
    # closed loop
    assert REFERENCE_ROUTE[0] == REFERENCE_ROUTE[-1]
    assert all(math.isfinite(p.lat) and math.isfinite(p.lng) for p in REFERENCE_ROUTE)
