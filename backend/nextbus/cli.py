"""
Print minutes until the next bus on a Metro Transit route.

  nextbus "METRO Blue Line" "Target Field" south
  nextbus 5 "7th St" north

STOP is matched as a case-sensitive substring of the stop description,
DIRECTION as a substring of the lower-cased direction name.

Every failure is printed as one line prefixed with the stage that failed, so an
unknown route reads "Error retrieving routes: Route 'X' not found" rather than
a bare "Error: Route not found".
"""
import argparse
import logging
import sys

from nextbus.nextrip.client import NexTripClient
from nextbus.resolver.service import calculate_time_till_next_bus
from nextbus.settings import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nextbus",
        description="Minutes until the next departure for a route, stop and direction.",
    )
    parser.add_argument("route", metavar="BusRoute", help="Exact route label, e.g. '5' or 'METRO Blue Line'")
    parser.add_argument("stop", metavar="BusStop", help="Part of the stop name, e.g. 'Target Field'")
    parser.add_argument("direction", metavar="Direction", help="Part of the direction, lower case, e.g. 'north'")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    # stdout carries only the result line; telemetry stays quiet unless debugging
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )
    client = NexTripClient(
        base_url=settings.nextrip_base_url,
        timeout_seconds=settings.nextrip_timeout_seconds,
    )
    print(calculate_time_till_next_bus(client, args.route, args.stop, args.direction))
    return 0


if __name__ == "__main__":
    sys.exit(main())
