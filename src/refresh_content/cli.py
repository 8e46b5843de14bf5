"""CLI and scheduled-trigger entry points for refreshing site content."""

from __future__ import annotations

import logging
import sys
from typing import Any

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from refresh_content.config import RefreshConfig, load_config
from refresh_content.fetch_content.twitter import TwitterApiError
from refresh_content.helpers import parse_dry_run, parse_refresh_args
from refresh_content.refresh_content import refresh_content

setup_logging()
logger = logging.getLogger(__name__)


def run_and_report(dry_run: bool, config: RefreshConfig | None = None, config_name: str | None = None) -> int:
    """Run one refresh, logging any failure instead of raising.

    Returns:
        Process exit status: 0 on success, 1 on failure
    """
    try:
        if config is None and config_name is not None:
            config = load_config(config_name)
        refresh_content(dry_run=dry_run, config=config)
        return 0

    except TwitterApiError as e:
        logger.error("****** ERROR ******")
        logger.error("Twitter API error %s", e.errors)
        return 1

    except Exception:
        logger.error("****** ERROR ******")
        logger.exception("Content refresh failed")
        return 1


def handler(event: Any, context: Any = None) -> None:
    """Scheduled-trigger entry point. Only event["attributes"]["dryRun"] is read."""
    load_dotenv()
    run_and_report(dry_run=parse_dry_run(event))


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = parse_refresh_args(argv)
    sys.exit(run_and_report(dry_run=args.dry_run, config_name=args.config))


if __name__ == "__main__":
    main()
