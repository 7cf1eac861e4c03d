"""CLI entry for robostats.

Usage:
    python -m robostats --serve                          # start API server
    python -m robostats --team VRC 8768A                 # season stats
    python -m robostats --rankings RE-VRC-23-1234        # top 5 rankings
    python -m robostats --skills RE-VRC-23-1234 --text   # skills as one line
    python -m robostats --rankings RE-VRC-23-1234 --limit 10
"""

import argparse
import json
import logging
import sys

from ._config import ConfigError, load_settings
from .client import RobotEventsClient
from .event_stats import (
    DEFAULT_LIMIT,
    get_rankings,
    get_rankings_text,
    get_skills,
    get_skills_text,
)
from .team_stats import get_team_stats


def _pp(data):
    print(json.dumps(data, indent=2))


def main():
    parser = argparse.ArgumentParser(description="RobotEvents stats")
    parser.add_argument("--team", nargs=2, metavar=("PROGRAM", "NUMBER"), help="Team stats")
    parser.add_argument("--rankings", type=str, metavar="SKU", help="Event rankings")
    parser.add_argument("--skills", type=str, metavar="SKU", help="Event skills")
    parser.add_argument("--text", action="store_true", help="One-line text output")
    parser.add_argument("--limit", type=int, default=DEFAULT_LIMIT, help="Top N teams")
    parser.add_argument("--serve", action="store_true", help="Start API server")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        settings = load_settings()
    except ConfigError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    if args.serve:
        from .server import serve
        serve(settings)
        return

    client = RobotEventsClient(settings.re_api_key, base_url=settings.base_url)

    if args.team:
        program, number = args.team
        _pp(get_team_stats(client, program.upper(), number))
    elif args.rankings:
        fn = get_rankings_text if args.text else get_rankings
        _pp(fn(client, args.rankings, args.limit))
    elif args.skills:
        fn = get_skills_text if args.text else get_skills
        _pp(fn(client, args.skills, args.limit))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
