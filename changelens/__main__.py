"""
Resolve a change route against a web-monitoring-db server.

Run:
    python -m changelens /page/<pageId>/<fromId>..<toId>

Prints the location the viewer ends up on and what it would display.
Settings come from CHANGELENS_* environment variables (see ViewerConfig).
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from changelens.backend.web_monitoring_db import WebMonitoringDb
from changelens.config import ViewerConfig, setup_logging
from changelens.core.controller import NavigationController
from changelens.core.types import ViewState
from changelens.navigation.history import NavigationHistory
from changelens.navigation.routes import parse_route

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="changelens", description=__doc__.strip().splitlines()[0])
    parser.add_argument("route", help="location such as /page/<pageId>/<from>..<to>")
    parser.add_argument("--db-url", help="web-monitoring-db base URL")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="one of %(choices)s",
    )
    return parser


async def run(route_path: str, config: ViewerConfig) -> int:
    route = parse_route(route_path)
    if route is None:
        print(f"Not a page route: {route_path!r}", file=sys.stderr)
        return 2

    history = NavigationHistory(initial=route.path)
    async with WebMonitoringDb(
        config.db_url,
        api_token=config.api_token,
        timeout=config.request_timeout,
    ) as backend:
        controller = NavigationController(backend, history, cancel_key=config.cancel_key)
        async with controller:
            await controller.set_route(route.page_id, route.change_token)

    print(f"location: {history.location}")
    print(f"state:    {controller.state.value}")
    view = controller.view
    if controller.state is ViewState.DISPLAYING and view is not None:
        page = view.page
        print(f"page:     {page.title} <{page.url}>")
        if view.from_version is not None:
            print(f"from:     {view.from_version.uuid} ({view.from_version.capture_time.isoformat()})")
        else:
            print("from:     (initial capture)")
        print(f"to:       {view.to_version.uuid} ({view.to_version.capture_time.isoformat()})")
        return 0

    if controller.message:
        print(controller.message)
    return 1


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config = ViewerConfig.from_env()
    if args.db_url:
        config.db_url = args.db_url
    if args.log_level:
        config.log_level = args.log_level
    setup_logging(config.log_level)
    return asyncio.run(run(args.route, config))


if __name__ == "__main__":
    sys.exit(main())
