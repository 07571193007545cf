import logging
import webbrowser
from typing import List, Optional, Tuple

import folium

from routesim.constants import FOLLOW_ZOOM, MAP_CENTER, MAP_ZOOM, TILE_LAYERS
from routesim.RouteArbiter import RouteArbiter
from routesim.RouteBase import route_latlon

logger = logging.getLogger(__name__)


def coordinate_rows(arbiter: RouteArbiter) -> List[Tuple[int, float, float, bool]]:
    """(number, lat, lng, is_current) for every vertex of the active route, numbered from 1."""
    return [
        (i + 1, p.lat, p.lng, i == arbiter.cursor)
        for i, p in enumerate(arbiter.active_route)
    ]


def coordinates_html(arbiter: RouteArbiter) -> str:
    items = []
    for n, lat, lng, current in coordinate_rows(arbiter):
        text = f"{n}. {lat:.6f}, {lng:.6f}"
        items.append(f"<li><b>{text}</b></li>" if current else f"<li>{text}</li>")
    return "<h4>Route Coordinates</h4><ol style='list-style:none;padding:0'>" + "".join(items) + "</ol>"


def _add_vertices(m: folium.Map, arbiter: RouteArbiter) -> folium.FeatureGroup:
    group = folium.FeatureGroup(name="Route coordinates")
    for n, lat, lng, current in coordinate_rows(arbiter):
        folium.CircleMarker(
            (lat, lng),
            radius=6 if current else 3,
            color="#2563eb",
            fill=True,
            fill_color="#2563eb" if current else "#ffffff",
            fill_opacity=1.0,
            tooltip=f"{n}. {lat:.6f}, {lng:.6f}",
        ).add_to(group)
    group.add_to(m)
    return group


def build_map(arbiter: RouteArbiter, tiles: str = "Standard") -> folium.Map:
    """
    Map of the current playback state: active route, selected endpoints and
    the vehicle. Centred on the vehicle while a route is active.
    """
    layer = TILE_LAYERS[tiles]
    route = arbiter.active_route

    if route:
        vehicle = arbiter.vehicle_position()
        m = folium.Map(location=vehicle.as_latlon(), zoom_start=FOLLOW_ZOOM,
                       tiles=layer["url"], attr=layer["attribution"])
    else:
        vehicle = None
        m = folium.Map(location=MAP_CENTER, zoom_start=MAP_ZOOM,
                       tiles=layer["url"], attr=layer["attribution"])

    sel = arbiter.selection
    if sel.start is not None:
        folium.Marker(sel.start.as_latlon(), tooltip=sel.start_query or "Start",
                      icon=folium.Icon(color="green")).add_to(m)
    if sel.end is not None:
        folium.Marker(sel.end.as_latlon(), tooltip=sel.end_query or "End",
                      icon=folium.Icon(color="red")).add_to(m)

    if route:
        folium.PolyLine(
            route_latlon(route), color="blue", weight=4,
            popup=folium.Popup(coordinates_html(arbiter), max_width=320),
        ).add_to(m)
        _add_vertices(m, arbiter)
        folium.Marker(
            vehicle.as_latlon(),
            popup=f"Vehicle {arbiter.cursor + 1}/{len(route)}",
            tooltip="Vehicle",
            icon=folium.Icon(color="blue", icon="bicycle", prefix="fa"),
        ).add_to(m)

    return m


def render_map(arbiter: RouteArbiter,
               path: str = "map.html",
               tiles: str = "Standard",
               open_browser: bool = False) -> str:
    m = build_map(arbiter, tiles=tiles)
    m.save(path)
    logger.info("map written to %s", path)
    if open_browser:
        webbrowser.open(path)
    return path


def describe_position(arbiter: RouteArbiter) -> Optional[str]:
    if not arbiter.active_route:
        return None
    pos = arbiter.vehicle_position()
    return f"{arbiter.cursor + 1}/{len(arbiter.active_route)} ({pos.lat:.6f}, {pos.lng:.6f})"
