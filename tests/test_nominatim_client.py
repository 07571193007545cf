import asyncio

from aiohttp import test_utils, web

from routesim.nominatim_client import NominatimClient, Suggestion, SuggestionFeed
from routesim.RouteBase import GeoPoint

ROWS = [
    {"display_name": "Rajwada, Indore, Madhya Pradesh, India", "lat": "22.7186", "lon": "75.8554"},
    {"display_name": "Rajwada Chowk, Indore", "lat": "22.7181", "lon": "75.8550"},
]


async def with_server(handler, fn, **client_kwargs):
    app = web.Application()
    app["requests"] = []

    async def search(request: web.Request):
        app["requests"].append(request)
        return await handler(request)

    app.router.add_get("/search", search)
    async with test_utils.TestServer(app) as server:
        client = NominatimClient(base_url=f"http://{server.host}:{server.port}", **client_kwargs)
        result = await fn(client)
    return result, app["requests"]


def rows_handler(rows):
    async def handler(request):
        return web.json_response(rows)
    return handler


def test_search_adds_country_and_limit():
    result, seen = asyncio.run(with_server(rows_handler(ROWS), lambda c: c.search("Rajwada")))

    assert result == [
        Suggestion("Rajwada, Indore, Madhya Pradesh, India", 22.7186, 75.8554),
        Suggestion("Rajwada Chowk, Indore", 22.7181, 75.8550),
    ]
    query = seen[0].query
    assert query["q"] == "Rajwada, India"
    assert query["limit"] == "5"
    assert query["format"] == "json"
    assert query["addressdetails"] == "1"
    assert seen[0].headers["User-Agent"].startswith("routesim")


def test_search_truncates_to_limit():
    many = ROWS * 4
    result, _ = asyncio.run(with_server(rows_handler(many), lambda c: c.search("Rajwada"), limit=3))
    assert len(result) == 3


def test_geocode_returns_first_hit():
    result, seen = asyncio.run(with_server(rows_handler(ROWS), lambda c: c.geocode("Rajwada")))
    assert result == GeoPoint(22.7186, 75.8554)
    assert seen[0].query["q"] == "Rajwada"


def test_geocode_no_hits():
    result, _ = asyncio.run(with_server(rows_handler([]), lambda c: c.geocode("Atlantis")))
    assert result is None


def test_empty_query_makes_no_request():
    async def both(client):
        return await client.search(""), await client.geocode("")

    (suggestions, point), seen = asyncio.run(with_server(rows_handler(ROWS), both))
    assert suggestions == []
    assert point is None
    assert seen == []


def test_http_error_falls_back_to_empty():
    async def handler(request):
        return web.Response(status=503, text="busy")

    async def both(client):
        return await client.search("Rajwada"), await client.geocode("Rajwada")

    (suggestions, point), _ = asyncio.run(with_server(handler, both))
    assert suggestions == []
    assert point is None


def test_malformed_rows_fall_back_to_empty():
    result, _ = asyncio.run(with_server(rows_handler([{"display_name": "x"}]), lambda c: c.search("x")))
    assert result == []
    result, _ = asyncio.run(with_server(rows_handler({"error": "nope"}), lambda c: c.geocode("x")))
    assert result is None


class SlowFirstClient:
    """First search answers last."""

    def __init__(self):
        self.first = True

    async def search(self, query):
        if self.first:
            self.first = False
            await asyncio.sleep(0.05)
        return [Suggestion(query, 0.0, 0.0)]


async def _feed_drops_stale():
    feed = SuggestionFeed(SlowFirstClient())
    early = asyncio.ensure_future(feed.update("Raj"))
    await asyncio.sleep(0)
    late = await feed.update("Rajwada")
    return await early, late, feed.suggestions


def test_suggestion_feed_drops_out_of_order_results():
    early, late, current = asyncio.run(_feed_drops_stale())
    assert early is None
    assert late == [Suggestion("Rajwada", 0.0, 0.0)]
    assert current == late
