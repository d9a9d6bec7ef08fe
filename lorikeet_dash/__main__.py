"""lorikeet-dash entry point: python -m lorikeet_dash [test_plan]"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from lorikeet_dash import VERSION
from lorikeet_dash.config import Settings
from lorikeet_dash.domain.errors import StepLoadError
from lorikeet_dash.infrastructure.steps import get_steps
from lorikeet_dash.main import create_app

logger = logging.getLogger("lorikeet_dash")

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s > %(message)s"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="lorikeet-dash", description="a web dashboard for lorikeet")
    parser.add_argument("test_plan", nargs="?", help="Test Plan (default: test.yml)")
    parser.add_argument("-c", "--config", help="Configuration File")
    parser.add_argument("-l", "--listen", help="Listen Address (default: 0.0.0.0:3333)")
    parser.add_argument("-r", "--refresh_ms", type=int, help="Refresh Interval (default: 10000)")
    parser.add_argument("--max-points", type=int, help="Keep only the newest N points per chart")
    parser.add_argument("--smooth", action="store_true", default=None, help="Draw smoothed lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    overrides = {
        "TEST_PLAN": args.test_plan,
        "CONFIG": args.config,
        "LISTEN": args.listen,
        "REFRESH_MS": args.refresh_ms,
        "MAX_POINTS": args.max_points,
        "SMOOTH": args.smooth,
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = build_settings(args)
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)

    try:
        steps = get_steps(settings.TEST_PLAN, settings.CONFIG)
    except StepLoadError as e:
        logger.error(f"❌ {e}")
        return 1

    app = create_app(settings, steps)
    host, port = settings.listen_address

    logger.info(f"🌐 Listening on `{settings.LISTEN}`")
    uvicorn.run(app, host=host, port=port, log_level=settings.LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
