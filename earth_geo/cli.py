"""Command-line entry point.

Runs a single lookup against a console session and prints the result:

    python -m earth_geo Berlin
    python -m earth_geo 48.8566, 2.3522
    python -m earth_geo --ip 8.8.8.8
    python -m earth_geo --offline Tokyo
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .adapters.console import ConsoleSession
from .config import AppConfig, get_config
from .container import Container
from .domain.models import LookupStatus
from .observability import configure_logging
from .ports.http import HttpClientPort
from .services import GeoCommand, LookupOrchestrator


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="earth-geo",
        description="Resolve an IP address or place name to a world position",
    )
    parser.add_argument(
        "query",
        nargs="*",
        help="'<lat>,<lon>', '<lat> <lon>' or a place name",
    )
    parser.add_argument("--ip", help="Geolocate this address instead of a query")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Disable HTTP and use the built-in place table",
    )
    parser.add_argument(
        "--protocol",
        type=int,
        default=None,
        help="Client protocol version to report to the capability gate",
    )
    return parser


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    if not args.offline:
        return config
    lookup = config.lookup.model_copy(update={"http_enabled": False})
    return config.model_copy(update={"lookup": lookup})


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if not args.ip and not args.query:
        parser.error("give a query or --ip ADDRESS")

    configure_logging()
    config = _apply_overrides(get_config(), args)
    container = Container.create_default(config)
    session = ConsoleSession(address=args.ip, client_protocol=args.protocol)
    wait_seconds = config.lookup.timeout_seconds + 2

    try:
        if args.ip:
            orchestrator: LookupOrchestrator = container.resolve(LookupOrchestrator)
            outcome = orchestrator.lookup_address(session).result(timeout=wait_seconds)
            if outcome.status is LookupStatus.SKIPPED:
                print(f"Nothing to look up for {args.ip}")
                return 0
            if not outcome.delivered and outcome.message:
                print(outcome.message)
            return 0 if outcome.is_success else 1

        command: GeoCommand = container.resolve(GeoCommand)
        result = command.execute(session, " ".join(args.query))
        if result.pending is not None:
            result = GeoCommand.to_result(result.pending.result(timeout=wait_seconds))
        if result.message:
            print(result.message)
        return 0 if result.success else 1
    finally:
        if container.is_registered(HttpClientPort):
            container.resolve(HttpClientPort).close()


if __name__ == "__main__":
    sys.exit(main())
