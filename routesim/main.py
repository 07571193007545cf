import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import aiohttp

from routesim import logging_config
from routesim.constants import TILE_LAYERS
from routesim.config import Settings
from routesim.graphhopper_client import GraphHopperClient
from routesim.map_view import describe_position, render_map
from routesim.nominatim_client import NominatimClient
from routesim.PlaybackClock import Phase, PlaybackClock
from routesim.RouteArbiter import RouteArbiter

logger = logging.getLogger(__name__)


def positive_float(value: str) -> float:
    try:
        f = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if f <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return f


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play a vehicle back along a route between two places.")
    parser.add_argument("start", help="Start place, free text (e.g. 'Rajwada, Indore')")
    parser.add_argument("end", help="End place, free text")
    parser.add_argument("--live", action="store_true", help="Fetch a live route from GraphHopper")
    parser.add_argument("--ticks", type=int, default=None, help="Stop after this many ticks (default: run to the end)")
    parser.add_argument("--interval", type=positive_float, default=None, help="Seconds per tick (overrides TICK_INTERVAL_S)")
    parser.add_argument("--out", default="map.html", help="Where to write the map")
    parser.add_argument("--tiles", default=None, choices=sorted(TILE_LAYERS), help="Tile layer (overrides MAP_TILES)")
    parser.add_argument("--open", action="store_true", help="Open the map in a browser when done")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: Settings) -> int:
    interval = args.interval if args.interval is not None else settings.tick_interval_s
    tiles = args.tiles or settings.map_tiles

    async with aiohttp.ClientSession() as session:
        router = GraphHopperClient(
            api_key=settings.graphhopper_api_key,
            base_url=settings.graphhopper_url,
            timeout=settings.routing_timeout_s,
            session=session,
        )
        geocoder = NominatimClient(
            base_url=settings.nominatim_url,
            country=settings.geocode_country,
            session=session,
        )
        arbiter = RouteArbiter(router=router, geocoder=geocoder, clock=PlaybackClock(interval_s=interval))

        done = asyncio.Event()
        ticks = 0

        def on_event(event):
            if event["type"] == "error":
                logging_config.console.print(event["message"], style="bold red", markup=False)
            elif event["type"] == "position":
                logger.info("vehicle at %s", describe_position(arbiter))

        def on_tick(clock):
            nonlocal ticks
            ticks += 1
            if clock.phase is not Phase.ADVANCING or (args.ticks is not None and ticks >= args.ticks):
                done.set()

        arbiter.subscribe(on_event)
        arbiter.clock.subscribe(on_tick)

        if await arbiter.select_start_query(args.start) is None:
            logger.error("could not find %r", args.start)
            return 1
        if await arbiter.select_end_query(args.end) is None:
            logger.error("could not find %r", args.end)
            return 1

        if args.live and not await arbiter.fetch_live_route():
            logger.warning("staying on the reference route")

        # a live route restarts playback, so count from here
        ticks = 0
        done.clear()
        if arbiter.clock.phase is Phase.ADVANCING and args.ticks != 0:
            await done.wait()
        arbiter.stop()

        render_map(arbiter, path=args.out, tiles=tiles, open_browser=args.open)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = Settings.from_env()
    logging_config.configure(settings.log_level, verbose=args.verbose)
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
