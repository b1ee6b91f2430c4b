"""CLI entry point: print the solar clock aboard a flight and save the flat map.

    uv run solarclock --departure "37.4602,126.4407" --arrival "51.4700,-0.4543"
        --when "2022-06-25 11:50" --utc-offset +9 --flying-time 15:00
"""

import argparse
import sys
import time

from dotenv import load_dotenv

load_dotenv()

from solarclock.compute import run  # noqa: E402
from solarclock.config import configure_logging, settings  # noqa: E402
from solarclock.errors import SolarClockError  # noqa: E402
from solarclock.models import TripQuery  # noqa: E402
from solarclock.report import clock_lines, trip_summary  # noqa: E402

# Asiana OZ 521, Seoul/Incheon -> London Heathrow
DEFAULT_QUERY = TripQuery(
    departure="37.4602,126.4407",
    arrival="51.4700,-0.4543",
    when="2022-06-25 11:50:00",
    utc_offset="+9",
    flying_time="15:00:00",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solarclock",
        description="Apparent local solar time aboard a great-circle flight.",
    )
    parser.add_argument("--departure", default=DEFAULT_QUERY.departure,
                        help='"lat,lon" or airport name')
    parser.add_argument("--arrival", default=DEFAULT_QUERY.arrival,
                        help='"lat,lon" or airport name')
    parser.add_argument("--when", default=DEFAULT_QUERY.when,
                        help='departure local time, "YYYY-MM-DD HH:MM[:SS]"')
    parser.add_argument("--utc-offset", default=DEFAULT_QUERY.utc_offset,
                        help="departure UTC offset in hours (e.g. +9, -3:30)")
    parser.add_argument("--flying-time", default=DEFAULT_QUERY.flying_time,
                        help='"HH:MM[:SS]" or minutes')
    parser.add_argument("--lang", default=settings.lang, choices=("en", "ko"))
    parser.add_argument("--delay", type=float, default=0.0,
                        help="seconds to pause between printed lines")
    parser.add_argument("--plot", action="store_true",
                        help="save the flat-map PNG under the results directory")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    query = TripQuery(
        departure=args.departure,
        arrival=args.arrival,
        when=args.when,
        utc_offset=args.utc_offset,
        flying_time=args.flying_time,
    )
    try:
        result = run(query)
    except SolarClockError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(trip_summary(result, args.lang))
    for line in clock_lines(result, args.lang):
        print(line)
        if args.delay > 0:
            time.sleep(args.delay)

    if args.plot:
        from solarclock.renderers.static import save_static_map

        path = save_static_map(result, lang=args.lang)
        print(f"Saved: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
