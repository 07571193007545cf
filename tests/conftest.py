"""
Shared fixtures for routesim tests.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from routesim.PlaybackClock import PlaybackClock
from routesim.RouteBase import GeoPoint, make_route


class FakeRouter:
    """Stands in for GraphHopperClient; returns or raises whatever it was given."""

    def __init__(self, result=None, error=None, gate=None):
        self.result = result
        self.error = error
        self.gate = gate
        self.calls = []

    async def fetch_route(self, start, end):
        self.calls.append((start, end))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


class FakeGeocoder:
    def __init__(self, places):
        self.places = places
        self.queries = []

    async def geocode(self, query):
        self.queries.append(query)
        return self.places.get(query)


@pytest.fixture
def line_route():
    return make_route([(0, 0), (1, 0), (2, 0), (3, 0)])


@pytest.fixture
def manual_clock():
    return PlaybackClock(autoplay=False)


@pytest.fixture
def near():
    # points just off the line route's vertices
    return {i: GeoPoint(i + 0.1, 0.05) for i in range(4)}
